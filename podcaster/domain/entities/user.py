"""User account domain entities."""

from enum import StrEnum
from typing import TYPE_CHECKING

import attrs
from attrs import define, field, validators

from .shared import UNSET, UnsetType, is_set

if TYPE_CHECKING:
    from podcaster.domain.repositories.interfaces import PasswordHasherProtocol


class UserRole(StrEnum):
    """Roles a platform account can hold."""

    LISTENER = "Listener"
    HOST = "Host"


@define(frozen=True, slots=True)
class User:
    """Platform account.

    ``password`` holds the stored hash once persisted, and is None when the
    repository was not asked to load it. ``password_is_hashed`` is False only
    while a freshly supplied plain password waits to be hashed by the next
    repository write.
    """

    email: str = field(validator=validators.instance_of(str))
    role: UserRole = field(converter=UserRole)
    password: str | None = field(default=None, repr=False)
    id: int | None = field(default=None)
    password_is_hashed: bool = field(default=True, repr=False)

    @classmethod
    def register(cls, email: str, password: str, role: UserRole | str) -> "User":
        """Build a new, not yet persisted account with a plain password."""
        return cls(email=email, password=password, role=role, password_is_hashed=False)

    @property
    def needs_password_hash(self) -> bool:
        return self.password is not None and not self.password_is_hashed

    @property
    def is_host(self) -> bool:
        return self.role is UserRole.HOST

    def with_profile_changes(
        self,
        email: str | UnsetType = UNSET,
        password: str | UnsetType = UNSET,
    ) -> "User":
        """Apply a partial profile update.

        Absent fields keep their value. A new password is stored in plain text
        and flagged so that the next save hashes it exactly once.
        """
        changes: dict[str, object] = {}
        if is_set(email):
            changes["email"] = email
        if is_set(password):
            changes["password"] = password
            changes["password_is_hashed"] = False
        return attrs.evolve(self, **changes)

    def with_hashed_password(self, hashed_password: str) -> "User":
        return attrs.evolve(self, password=hashed_password, password_is_hashed=True)

    async def check_password(
        self, candidate: str, hasher: "PasswordHasherProtocol"
    ) -> bool:
        """Compare a candidate password against the stored hash."""
        if self.password is None:
            raise ValueError(
                "Password was not loaded for this user; "
                "request it with include_fields=['password']"
            )
        return await hasher.verify(candidate, self.password)


@define(frozen=True, slots=True)
class TokenClaims:
    """Claims recovered from a verified session token."""

    subject_id: int
