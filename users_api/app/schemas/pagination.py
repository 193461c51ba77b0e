"""
Pydantic model for the ``X-Pagination`` response header.
"""

from typing import Optional

from .user import CamelModel


class PaginationMetadata(CamelModel):
    previous_page_link: Optional[str] = None
    next_page_link: Optional[str] = None
    total_count: int
    page_size: int
    current_page: int
    total_pages: int
