"""
pytest configuration and fixtures.
"""

from typing import Callable, Generator

import pytest
from fastapi.testclient import TestClient

from users_api.app.core.repository import InMemoryUserRepository
from users_api.app.main import create_app
from users_api.app.models.user import UserEntity


@pytest.fixture
def repository() -> InMemoryUserRepository:
    """Empty repository."""
    return InMemoryUserRepository()


@pytest.fixture
def client(repository: InMemoryUserRepository) -> Generator[TestClient, None, None]:
    """Test client for an application serving ``repository``."""
    with TestClient(create_app(repository=repository)) as test_client:
        yield test_client


@pytest.fixture
def make_user(repository: InMemoryUserRepository) -> Callable[..., UserEntity]:
    """Insert a user straight into the repository."""

    def _make_user(login: str = "ivan", first_name: str = "Ivan", last_name: str = "Ivanov") -> UserEntity:
        return repository.insert(UserEntity(login=login, first_name=first_name, last_name=last_name))

    return _make_user
