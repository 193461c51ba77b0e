"""
Explicit mapping between ``UserEntity`` and the wire schemas.
"""

from ..models.user import UserEntity
from ..schemas.user import UserDto, UserToCreateDto, UserToUpdateDto


def full_name(user: UserEntity) -> str:
    return f"{user.first_name} {user.last_name}"


def to_output(user: UserEntity) -> UserDto:
    return UserDto(
        id=user.id,
        login=user.login,
        full_name=full_name(user),
        games_played=user.games_played,
        current_game_id=user.current_game_id,
    )


def from_create_input(data: UserToCreateDto) -> UserEntity:
    """Build an unsaved entity; the repository assigns the id."""
    return UserEntity(
        login=data.login or "",
        first_name=data.first_name or "",
        last_name=data.last_name or "",
        games_played=0,
        current_game_id=None,
    )


def apply_update_input(data: UserToUpdateDto, user: UserEntity) -> None:
    """Overwrite the editable fields of ``user`` in place.

    ``games_played`` and ``current_game_id`` are left untouched.
    """
    user.login = data.login
    user.first_name = data.first_name
    user.last_name = data.last_name
