"""Tests for the User entity and its profile/password behaviour."""

import pytest

from podcaster.domain.entities import UNSET, User, UserRole


class TestUserConstruction:
    def test_register_marks_password_for_hashing(self):
        user = User.register(email="a@example.com", password="secret", role="Listener")

        assert user.id is None
        assert user.role is UserRole.LISTENER
        assert user.password == "secret"
        assert user.needs_password_hash

    def test_loaded_user_does_not_need_hashing(self, stored_user):
        assert not stored_user.needs_password_hash

    def test_user_without_loaded_password_does_not_need_hashing(self):
        user = User(id=3, email="c@example.com", role=UserRole.LISTENER)

        assert user.password is None
        assert not user.needs_password_hash

    def test_role_is_converted_from_string(self):
        user = User(email="h@example.com", role="Host")

        assert user.role is UserRole.HOST
        assert user.is_host

    def test_unknown_role_is_rejected(self):
        with pytest.raises(ValueError):
            User(email="x@example.com", role="Admin")

    def test_password_is_hidden_from_repr(self, stored_user):
        assert "storedhash" not in repr(stored_user)


class TestProfileChanges:
    def test_no_changes_keeps_user_equal(self, stored_user):
        assert stored_user.with_profile_changes() == stored_user

    def test_email_only_keeps_stored_hash(self, stored_user):
        updated = stored_user.with_profile_changes(email="new@example.com")

        assert updated.email == "new@example.com"
        assert updated.password == stored_user.password
        assert not updated.needs_password_hash

    def test_new_password_is_flagged_for_single_hash(self, stored_user):
        updated = stored_user.with_profile_changes(password="new-secret")

        assert updated.password == "new-secret"
        assert updated.needs_password_hash
        assert updated.email == stored_user.email

    def test_unset_arguments_are_ignored(self, stored_user):
        updated = stored_user.with_profile_changes(email=UNSET, password=UNSET)

        assert updated == stored_user

    def test_with_hashed_password_clears_flag(self):
        user = User.register(email="a@example.com", password="secret", role=UserRole.HOST)

        hashed = user.with_hashed_password("hashed:secret")

        assert hashed.password == "hashed:secret"
        assert not hashed.needs_password_hash


class TestCheckPassword:
    async def test_matching_password(self, fake_hasher):
        user = User(id=1, email="a@example.com", role="Host", password="hashed:secret")

        assert await user.check_password("secret", fake_hasher) is True

    async def test_wrong_password(self, fake_hasher):
        user = User(id=1, email="a@example.com", role="Host", password="hashed:secret")

        assert await user.check_password("nope", fake_hasher) is False

    async def test_password_not_loaded_raises(self, fake_hasher):
        user = User(id=1, email="a@example.com", role="Host")

        with pytest.raises(ValueError, match="include_fields"):
            await user.check_password("secret", fake_hasher)
