"""
Pydantic models for user data.

``UserDto`` is the read projection returned by the API.
``UserToCreateDto`` is accepted by ``POST /api/users``; its login rules
are applied by the service so the error messages stay under our
control.  ``UserToUpdateDto`` is the body of ``PUT`` and the projection
that ``PATCH`` operations are applied to.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model with camelCase aliases.

    Both the alias and the attribute name are accepted on input.
    """

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class UserDto(CamelModel):
    """Schema for reading a user from the API."""

    id: UUID
    login: str
    full_name: str = Field(..., examples=["Ivan Ivanov"])
    games_played: int = 0
    current_game_id: Optional[UUID] = None


class UserToCreateDto(CamelModel):
    login: Optional[str] = Field(None, examples=["ivan42"])
    first_name: Optional[str] = Field(None, examples=["Ivan"])
    last_name: Optional[str] = Field(None, examples=["Ivanov"])


class UserToUpdateDto(CamelModel):
    """Schema for replacing a user's editable fields.

    The defaults are deliberately not valid on their own: a patch
    projection starts from them, so a patch that never sets ``login``
    fails validation.
    """

    login: str = Field("", min_length=1, validate_default=True, examples=["ivan42"])
    first_name: str = Field("", examples=["Ivan"])
    last_name: str = Field("", examples=["Ivanov"])
