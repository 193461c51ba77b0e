"""
In‑memory user storage.

``InMemoryUserRepository`` owns the canonical collection of
``UserEntity`` objects.  Entities are kept in a dict keyed by id, whose
insertion order is the canonical enumeration order used for paging.
Updating an entity in place keeps its position; an upsert that inserts
appends at the end.

The repository stores and returns copies, so callers never hold an
alias to a stored entity.  All access goes through one lock, which
makes every mutation atomic relative to reads and other mutations.
Nothing is persisted; the collection lives as long as the instance.
"""

import logging
import threading
import uuid
from dataclasses import replace
from typing import Dict, Optional, Tuple
from uuid import UUID

from ..models.user import Page, UserEntity
from .errors import NotFoundError


logger = logging.getLogger(__name__)


class InMemoryUserRepository:
    """Thread‑safe in‑memory collection of users."""

    def __init__(self) -> None:
        self._users: Dict[UUID, UserEntity] = {}
        self._lock = threading.Lock()

    def find_by_id(self, user_id: UUID) -> Optional[UserEntity]:
        with self._lock:
            user = self._users.get(user_id)
            return replace(user) if user is not None else None

    def insert(self, user: UserEntity) -> UserEntity:
        """Store a new user and return the stored copy.

        A fresh identifier is generated when ``user.id`` is ``None``.
        A supplied identifier is kept, but must not already be in use.
        """
        with self._lock:
            user_id = user.id
            if user_id is None:
                user_id = uuid.uuid4()
                while user_id in self._users:
                    user_id = uuid.uuid4()
            elif user_id in self._users:
                raise ValueError(f"User {user_id} already exists")
            stored = replace(user, id=user_id)
            self._users[user_id] = stored
            logger.info("Inserted user %s (%s)", user_id, stored.login)
            return replace(stored)

    def update(self, user: UserEntity) -> None:
        """Replace the stored user with the same id.

        Raises ``NotFoundError`` if no such user exists.
        """
        with self._lock:
            if user.id not in self._users:
                raise NotFoundError(f"User {user.id} not found")
            self._users[user.id] = replace(user)
            logger.info("Updated user %s", user.id)

    def update_or_insert(self, user: UserEntity) -> Tuple[UserEntity, bool]:
        """Overwrite the user with ``user.id`` or insert it under that id.

        Returns the stored copy and whether an insert took place.
        """
        if user.id is None:
            raise ValueError("update_or_insert requires an identifier")
        with self._lock:
            was_inserted = user.id not in self._users
            stored = replace(user)
            self._users[user.id] = stored
            logger.info("%s user %s", "Inserted" if was_inserted else "Replaced", user.id)
            return replace(stored), was_inserted

    def delete(self, user_id: UUID) -> None:
        with self._lock:
            if self._users.pop(user_id, None) is not None:
                logger.info("Deleted user %s", user_id)

    def count(self) -> int:
        with self._lock:
            return len(self._users)

    def get_page(self, page_number: int, page_size: int) -> Page[UserEntity]:
        """Return the window ``[(page_number-1)*page_size, page_number*page_size)``.

        Windows past the end are empty; the totals always describe the
        whole collection.
        """
        if page_number < 1 or page_size < 1:
            raise ValueError("page_number and page_size must be positive")
        start = (page_number - 1) * page_size
        with self._lock:
            users = list(self._users.values())
            items = [replace(user) for user in users[start:start + page_size]]
            total_count = len(users)
        return Page(
            items=items,
            current_page=page_number,
            page_size=page_size,
            total_count=total_count,
        )
