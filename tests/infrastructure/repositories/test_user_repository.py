"""Tests for UserRepository - hash-on-write passwords and the default projection."""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from podcaster.domain.entities import User, UserRole
from podcaster.domain.exceptions import EntityNotFoundError
from podcaster.infrastructure.persistence.database.db_models import DBUser
from podcaster.infrastructure.persistence.repositories import UserRepository
from podcaster.infrastructure.services import BcryptPasswordHasher


class CountingHasher(BcryptPasswordHasher):
    def __init__(self) -> None:
        super().__init__(rounds=4)
        self.hash_calls = 0

    async def hash(self, password: str) -> str:
        self.hash_calls += 1
        return await super().hash(password)


@pytest.fixture
def hasher():
    return CountingHasher()


@pytest.fixture
def user_repo(db_session, hasher):
    return UserRepository(db_session, hasher)


async def _stored_hash(session, user_id: int) -> str:
    result = await session.execute(select(DBUser.password).where(DBUser.id == user_id))
    return result.scalar_one()


class TestUserRepository:
    def test_create_builds_unsaved_user(self, user_repo):
        user = user_repo.create(email="a@example.com", password="secret", role="Host")

        assert user.id is None
        assert user.role is UserRole.HOST
        assert user.needs_password_hash

    async def test_save_hashes_new_password(self, user_repo, db_session, hasher):
        saved = await user_repo.save(
            user_repo.create(email="a@example.com", password="secret", role="Host")
        )

        assert saved.id is not None
        assert hasher.hash_calls == 1
        stored = await _stored_hash(db_session, saved.id)
        assert stored != "secret"
        assert await hasher.verify("secret", stored)

    async def test_default_projection_excludes_password(self, user_repo):
        saved = await user_repo.save(
            user_repo.create(email="a@example.com", password="secret", role="Listener")
        )

        found = await user_repo.find_one({"id": saved.id})

        assert found == User(id=saved.id, email="a@example.com", role=UserRole.LISTENER)
        assert found.password is None

    async def test_include_fields_loads_password_hash(self, user_repo, hasher):
        await user_repo.save(
            user_repo.create(email="a@example.com", password="secret", role="Listener")
        )

        found = await user_repo.find_one({"email": "a@example.com"}, include_fields=["password"])

        assert found is not None
        assert await found.check_password("secret", hasher)
        assert not await found.check_password("wrong", hasher)

    async def test_find_one_missing_returns_none(self, user_repo):
        assert await user_repo.find_one({"email": "nobody@example.com"}) is None

    async def test_find_one_or_fail_missing_raises(self, user_repo):
        with pytest.raises(EntityNotFoundError) as exc_info:
            await user_repo.find_one_or_fail({"id": 123})

        assert exc_info.value.entity_name == "User"
        assert exc_info.value.criteria == {"id": 123}

    async def test_email_edit_keeps_stored_hash(self, user_repo, db_session, hasher):
        saved = await user_repo.save(
            user_repo.create(email="old@example.com", password="secret", role="Host")
        )
        before = await _stored_hash(db_session, saved.id)

        loaded = await user_repo.find_one({"id": saved.id})
        await user_repo.save(loaded.with_profile_changes(email="new@example.com"))

        assert await _stored_hash(db_session, saved.id) == before
        assert hasher.hash_calls == 1
        assert (await user_repo.find_one({"id": saved.id})).email == "new@example.com"

    async def test_password_edit_hashes_exactly_once(self, user_repo, db_session, hasher):
        saved = await user_repo.save(
            user_repo.create(email="a@example.com", password="secret", role="Host")
        )

        loaded = await user_repo.find_one({"id": saved.id})
        await user_repo.save(loaded.with_profile_changes(password="changed"))

        assert hasher.hash_calls == 2
        stored = await _stored_hash(db_session, saved.id)
        assert await hasher.verify("changed", stored)
        assert not await hasher.verify("secret", stored)

    async def test_saving_loaded_hash_does_not_rehash(self, user_repo, db_session, hasher):
        saved = await user_repo.save(
            user_repo.create(email="a@example.com", password="secret", role="Host")
        )
        before = await _stored_hash(db_session, saved.id)

        loaded = await user_repo.find_one({"id": saved.id}, include_fields=["password"])
        await user_repo.save(loaded)

        assert hasher.hash_calls == 1
        assert await _stored_hash(db_session, saved.id) == before

    async def test_duplicate_email_violates_unique_constraint(self, user_repo):
        await user_repo.save(
            user_repo.create(email="dup@example.com", password="secret", role="Host")
        )

        with pytest.raises(IntegrityError):
            await user_repo.save(
                user_repo.create(email="dup@example.com", password="other", role="Listener")
            )

    async def test_unknown_criteria_field_is_rejected(self, user_repo):
        with pytest.raises(ValueError, match="no field named"):
            await user_repo.find({"nickname": "x"})
