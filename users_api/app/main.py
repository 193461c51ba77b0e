"""
Main entrypoint for the Users API.

This module assembles the FastAPI application: it sets up logging,
creates the repository and the service that owns it, registers the
error handlers and includes the API router.  ``create_app`` builds a
fresh application (tests call it once per test), and ``app`` is
instantiated at import time so an ASGI server can find it::

    uvicorn users_api.app.main:app --reload
"""

import logging
from typing import Optional

from fastapi import FastAPI

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .core.repository import InMemoryUserRepository
from .services.user_service import UserService


def create_app(
    settings: Optional[Settings] = None,
    repository: Optional[InMemoryUserRepository] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use instead of the module‑level defaults.
    repository : Optional[InMemoryUserRepository]
        Repository to serve.  A new, empty one is created when omitted;
        it lives as long as the returned application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that the setup below
    # can log.
    setup_logging(settings)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.state.settings = settings
    app.state.user_repository = repository if repository is not None else InMemoryUserRepository()
    app.state.user_service = UserService(app.state.user_repository, max_page_size=settings.max_page_size)

    register_exception_handlers(app)
    app.include_router(api_router, prefix=settings.api_prefix)

    logging.getLogger(__name__).info(
        "%s %s ready, routes under %s", settings.project_name, settings.api_version, settings.api_prefix
    )
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
