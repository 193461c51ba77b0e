"""
Unit tests for the in-memory user repository.
"""

import threading
import uuid

import pytest

from users_api.app.core.errors import NotFoundError
from users_api.app.core.repository import InMemoryUserRepository
from users_api.app.models.user import UserEntity


def make_entity(login: str = "ivan", **kwargs) -> UserEntity:
    return UserEntity(login=login, first_name="Ivan", last_name="Ivanov", **kwargs)


class TestInsert:
    """Tests for insert and find_by_id."""

    def test_insert_assigns_id(self, repository: InMemoryUserRepository):
        """Test that a new identifier is generated."""
        stored = repository.insert(make_entity())

        assert stored.id is not None
        assert repository.find_by_id(stored.id) == stored

    def test_insert_keeps_supplied_id(self, repository: InMemoryUserRepository):
        """Test that a supplied, unused identifier is kept."""
        user_id = uuid.uuid4()
        stored = repository.insert(make_entity(id=user_id))

        assert stored.id == user_id

    def test_insert_duplicate_id(self, repository: InMemoryUserRepository):
        """Test that an identifier in use is rejected."""
        stored = repository.insert(make_entity())

        with pytest.raises(ValueError):
            repository.insert(make_entity(id=stored.id))

    def test_insert_stores_copy(self, repository: InMemoryUserRepository):
        """Test that neither the argument nor the result alias storage."""
        entity = make_entity()
        stored = repository.insert(entity)
        entity.login = "changed"
        stored.login = "changed"

        assert repository.find_by_id(stored.id).login == "ivan"
        assert entity.id is None

    def test_find_missing(self, repository: InMemoryUserRepository):
        """Test lookup of an unknown identifier."""
        assert repository.find_by_id(uuid.uuid4()) is None

    def test_concurrent_inserts_get_distinct_ids(self, repository: InMemoryUserRepository):
        """Test that concurrent inserts never share an identifier."""
        ids = []

        def worker():
            for _ in range(50):
                ids.append(repository.insert(make_entity()).id)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(set(ids)) == 200
        assert repository.count() == 200


class TestUpdate:
    """Tests for update, update_or_insert and delete."""

    def test_update_replaces_in_place(self, repository: InMemoryUserRepository):
        """Test that update keeps the enumeration position."""
        first = repository.insert(make_entity("first"))
        repository.insert(make_entity("second"))

        first.login = "renamed"
        repository.update(first)

        page = repository.get_page(1, 10)
        assert [user.login for user in page.items] == ["renamed", "second"]

    def test_update_missing(self, repository: InMemoryUserRepository):
        """Test that updating an unknown user fails."""
        with pytest.raises(NotFoundError):
            repository.update(make_entity(id=uuid.uuid4()))

    def test_update_or_insert_inserts_with_supplied_id(self, repository: InMemoryUserRepository):
        """Test the insert branch of update_or_insert."""
        repository.insert(make_entity("first"))
        user_id = uuid.uuid4()

        stored, was_inserted = repository.update_or_insert(make_entity("upserted", id=user_id))

        assert was_inserted is True
        assert stored.id == user_id
        assert [user.login for user in repository.get_page(1, 10).items] == ["first", "upserted"]

    def test_update_or_insert_overwrites(self, repository: InMemoryUserRepository):
        """Test the overwrite branch of update_or_insert."""
        existing = repository.insert(make_entity(games_played=3))

        stored, was_inserted = repository.update_or_insert(UserEntity(id=existing.id, login="new"))

        assert was_inserted is False
        assert repository.find_by_id(existing.id).login == "new"
        assert repository.count() == 1

    def test_update_or_insert_requires_id(self, repository: InMemoryUserRepository):
        """Test that an entity without id is rejected."""
        with pytest.raises(ValueError):
            repository.update_or_insert(make_entity())

    def test_delete(self, repository: InMemoryUserRepository):
        """Test delete, including the no-op on an unknown id."""
        stored = repository.insert(make_entity())

        repository.delete(stored.id)
        repository.delete(stored.id)

        assert repository.find_by_id(stored.id) is None
        assert repository.count() == 0


class TestGetPage:
    """Tests for paginated enumeration."""

    @pytest.fixture
    def filled(self, repository: InMemoryUserRepository) -> InMemoryUserRepository:
        for index in range(25):
            repository.insert(make_entity(f"user{index}"))
        return repository

    def test_first_page(self, filled: InMemoryUserRepository):
        """Test the first window and totals."""
        page = filled.get_page(1, 10)

        assert [user.login for user in page.items] == [f"user{i}" for i in range(10)]
        assert page.total_count == 25
        assert page.total_pages == 3
        assert not page.has_previous
        assert page.has_next

    def test_last_partial_page(self, filled: InMemoryUserRepository):
        """Test the trailing, partial window."""
        page = filled.get_page(3, 10)

        assert [user.login for user in page.items] == [f"user{i}" for i in range(20, 25)]
        assert page.has_previous
        assert not page.has_next

    def test_out_of_range_page(self, filled: InMemoryUserRepository):
        """Test that a window past the end is empty but keeps totals."""
        page = filled.get_page(7, 10)

        assert page.items == []
        assert page.total_count == 25
        assert page.total_pages == 3

    def test_empty_repository(self, repository: InMemoryUserRepository):
        """Test paging an empty collection."""
        page = repository.get_page(1, 10)

        assert page.items == []
        assert page.total_pages == 0
        assert not page.has_next

    def test_rejects_non_positive_arguments(self, repository: InMemoryUserRepository):
        """Test that callers must clamp before paging."""
        with pytest.raises(ValueError):
            repository.get_page(0, 10)
