"""
Top‑level API router.

Aggregates the domain routers.  The application mounts it under
``settings.api_prefix`` (``/api`` by default).
"""

from fastapi import APIRouter

from .endpoints import users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
