"""
Pagination metadata for list responses.

The metadata travels in the ``X-Pagination`` header as a JSON object so
that the response body stays a plain array of users.  Links are built
by a caller‑supplied ``link_for(page_number)`` function, which keeps
this module independent of the routing layer.
"""

import json
from typing import Any, Callable

from ..models.user import Page
from ..schemas.pagination import PaginationMetadata


PAGINATION_HEADER = "X-Pagination"


def build_pagination_metadata(page: Page[Any], link_for: Callable[[int], str]) -> PaginationMetadata:
    return PaginationMetadata(
        previous_page_link=link_for(page.current_page - 1) if page.has_previous else None,
        next_page_link=link_for(page.current_page + 1) if page.has_next else None,
        total_count=page.total_count,
        page_size=page.page_size,
        current_page=page.current_page,
        total_pages=page.total_pages,
    )


def pagination_header(metadata: PaginationMetadata) -> str:
    """Serialise ``metadata`` for the ``X-Pagination`` header."""
    return json.dumps(metadata.model_dump(by_alias=True))
