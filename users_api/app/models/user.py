"""
User entity and the page window returned by listings.
"""

import math
from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar
from uuid import UUID


T = TypeVar("T")


@dataclass
class UserEntity:
    """Canonical stored user record.

    ``id`` is ``None`` until the repository assigns one on insert and
    never changes afterwards.
    """

    id: Optional[UUID] = None
    login: str = ""
    first_name: str = ""
    last_name: str = ""
    games_played: int = 0
    current_game_id: Optional[UUID] = None


@dataclass
class Page(Generic[T]):
    """A window over the repository's canonical enumeration order."""

    items: List[T] = field(default_factory=list)
    current_page: int = 1
    page_size: int = 1
    total_count: int = 0

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages
