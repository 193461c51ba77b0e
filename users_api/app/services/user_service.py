"""
Business logic for users.

``UserService`` implements the six resource operations on top of an
``InMemoryUserRepository`` passed to its constructor.  Methods return
plain results (DTOs, identifiers, pages) and raise the errors from
``core.errors``; turning those into status codes, headers and bodies is
left to the routes.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..core.config import settings
from ..core.errors import BadRequestError, NotFoundError, ValidationError
from ..core.repository import InMemoryUserRepository
from ..models.user import Page, UserEntity
from ..schemas.user import UserDto, UserToCreateDto, UserToUpdateDto
from .mapping import apply_update_input, from_create_input, to_output
from .patching import apply_patch, projection_defaults


logger = logging.getLogger(__name__)

LOGIN_FIELD = "login"
LOGIN_REQUIRED_MESSAGE = "required"
LOGIN_FORMAT_MESSAGE = "must contain only letters and digits"


def _collect(errors: ValidationError, exc: PydanticValidationError) -> None:
    """Add pydantic errors to ``errors`` keyed by the top‑level field."""
    for error in exc.errors():
        loc = error.get("loc") or ()
        field = str(loc[0]) if loc else "body"
        errors.add(field, error["msg"])


def _validate_model(model: type, data: Dict[str, Any], errors: ValidationError) -> Optional[BaseModel]:
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        _collect(errors, exc)
        return None


class UserService:
    """Сервис для работы с пользователями.

    Хранилище передаётся явно, поэтому каждое приложение (и каждый
    тест) работает со своим экземпляром репозитория.
    """

    def __init__(
        self,
        repository: InMemoryUserRepository,
        max_page_size: int = settings.max_page_size,
    ) -> None:
        self.repository = repository
        self.max_page_size = max_page_size

    async def get_user(self, user_id: UUID) -> UserDto:
        """Return the user with ``user_id`` or raise ``NotFoundError``."""
        user = self.repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return to_output(user)

    async def list_users(self, page_number: int, page_size: int) -> Page[UserDto]:
        """Return one page of users in creation order.

        ``page_number`` is raised to at least 1 and ``page_size`` is
        clamped into ``[1, max_page_size]``; neither is ever rejected.
        """
        page_number = max(page_number, 1)
        page_size = min(max(page_size, 1), self.max_page_size)
        page = self.repository.get_page(page_number, page_size)
        return Page(
            items=[to_output(user) for user in page.items],
            current_page=page.current_page,
            page_size=page.page_size,
            total_count=page.total_count,
        )

    async def create_user(self, body: Optional[Dict[str, Any]]) -> UUID:
        """Validate ``body`` as a new user, store it and return its id.

        The login must be present and made of letters and digits only.
        """
        if body is None:
            raise BadRequestError("Request body is required")
        errors = ValidationError()
        data = _validate_model(UserToCreateDto, body, errors)
        if data is not None:
            if not data.login:
                errors.add(LOGIN_FIELD, LOGIN_REQUIRED_MESSAGE)
            elif not all(char.isalnum() for char in data.login):
                errors.add(LOGIN_FIELD, LOGIN_FORMAT_MESSAGE)
        if errors.errors:
            raise errors

        user = self.repository.insert(from_create_input(data))
        logger.info("Created user %s with login %s", user.id, user.login)
        return user.id

    async def update_or_insert_user(
        self, user_id: Optional[UUID], body: Optional[Dict[str, Any]]
    ) -> Tuple[UUID, bool]:
        """Replace the user stored under ``user_id`` or create it there.

        Only the update model is validated; the login characters are not
        checked on this path.  Returns the id and whether a new user was
        inserted.
        """
        if user_id is None or body is None:
            raise BadRequestError("User id and request body are required")
        errors = ValidationError()
        data = _validate_model(UserToUpdateDto, body, errors)
        if errors.errors:
            raise errors

        user = UserEntity(id=user_id)
        apply_update_input(data, user)
        stored, was_inserted = self.repository.update_or_insert(user)
        logger.info("%s user %s via replace", "Created" if was_inserted else "Replaced", stored.id)
        return stored.id, was_inserted

    async def patch_user(self, user_id: UUID, document: Optional[List[Any]]) -> None:
        """Apply a JSON Patch document to the editable fields of a user.

        The operations run against a projection seeded from the update
        model's defaults, not from the stored user.  The result must
        validate as ``UserToUpdateDto`` before it is merged and saved; on
        any error the stored user is left unchanged.
        """
        if document is None:
            raise BadRequestError("Patch document is required")
        user = self.repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")

        projection = projection_defaults(UserToUpdateDto)
        errors = apply_patch(document, projection, UserToUpdateDto)
        data = _validate_model(UserToUpdateDto, projection, errors)
        if errors.errors:
            raise errors

        apply_update_input(data, user)
        self.repository.update(user)
        logger.info("Patched user %s", user_id)

    async def delete_user(self, user_id: UUID) -> None:
        if self.repository.find_by_id(user_id) is None:
            raise NotFoundError(f"User {user_id} not found")
        self.repository.delete(user_id)
        logger.info("Deleted user %s", user_id)
