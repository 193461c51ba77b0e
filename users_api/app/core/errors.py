"""
Error taxonomy for the Users API.

Services raise these exceptions; the handlers registered by
``register_exception_handlers`` turn them into HTTP responses.  Every
error is local to a single request: nothing is retried and nothing is
fatal to the process.

* ``BadRequestError`` (400) – the body or a route parameter is absent
  or malformed.
* ``ValidationError`` (422) – one or more field errors; the response
  body is a map of field name to a list of messages.
* ``NotFoundError`` (404) – no user with the requested identifier.
* ``NotAcceptableError`` (406) – the ``Accept`` header admits no
  supported representation.
"""

import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response


logger = logging.getLogger(__name__)


class UsersApiError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail)
        self.detail = detail


class BadRequestError(UsersApiError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(UsersApiError):
    status_code = status.HTTP_404_NOT_FOUND


class NotAcceptableError(UsersApiError):
    status_code = status.HTTP_406_NOT_ACCEPTABLE


class ValidationError(UsersApiError):
    """One or more named fields failed validation.

    ``errors`` maps a field name to the list of messages collected for
    it.  Messages for the same field accumulate in the order they were
    added.
    """

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY

    def __init__(self, errors: Optional[Dict[str, List[str]]] = None) -> None:
        self.errors: Dict[str, List[str]] = {}
        for field, messages in (errors or {}).items():
            for message in messages:
                self.add(field, message)
        super().__init__("Validation failed")

    def add(self, field: str, message: str) -> None:
        self.errors.setdefault(field, []).append(message)


async def users_api_error_handler(request: Request, exc: UsersApiError) -> Response:
    """Render a ``UsersApiError`` using the negotiated representation."""
    from .formatters import render

    if isinstance(exc, NotAcceptableError):
        logger.info("Not acceptable: %s", exc.detail)
        return Response(status_code=exc.status_code)
    if isinstance(exc, ValidationError):
        logger.info("Validation failed for %s %s: %s", request.method, request.url.path, exc.errors)
        content, root_name = exc.errors, "SerializableError"
    else:
        logger.info("%s for %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.detail)
        content, root_name = {"detail": exc.detail}, "ProblemDetails"
    try:
        return render(request, content, root_name=root_name, status_code=exc.status_code)
    except NotAcceptableError:
        return Response(status_code=exc.status_code)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> Response:
    """Treat malformed JSON, route and query values as a bad request."""
    messages = "; ".join(
        f"{'.'.join(str(loc) for loc in error.get('loc', ()))}: {error.get('msg')}"
        for error in exc.errors()
    )
    return await users_api_error_handler(request, BadRequestError(messages))


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error handlers of this module to ``app``."""
    app.add_exception_handler(UsersApiError, users_api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
