"""Domain repository interfaces following Clean Architecture principles.

These interfaces define the contracts for data access and for the security
capabilities services depend on, without depending on infrastructure
implementations.
"""

from collections.abc import Awaitable
from typing import TYPE_CHECKING, Any, Protocol, Self

if TYPE_CHECKING:
    from podcaster.domain.entities import Episode, Podcast, TokenClaims, User


class RepositoryProtocol[T](Protocol):
    """Generic persistence contract for one entity type.

    Criteria are dictionaries of field name to expected value, matched
    exactly. Every I/O method may raise an infrastructure error that the
    service layer is expected to catch.
    """

    def find(
        self,
        criteria: dict[str, Any] | None = None,
        load_relationships: list[str] | None = None,
    ) -> Awaitable[list[T]]:
        """Find all entities matching criteria (all entities when None)."""
        ...

    def find_one(
        self,
        criteria: dict[str, Any],
        load_relationships: list[str] | None = None,
        include_fields: list[str] | None = None,
    ) -> Awaitable[T | None]:
        """Find a single entity or None.

        Args:
            criteria: Field/value pairs to match
            load_relationships: Relationships to load with the entity
            include_fields: Fields excluded from the default projection
                that must be loaded for this call (e.g. ["password"])
        """
        ...

    def find_one_or_fail(self, criteria: dict[str, Any]) -> Awaitable[T]:
        """Find a single entity, raising EntityNotFoundError when absent."""
        ...

    def create(self, **fields: Any) -> T:
        """Construct a new, unsaved entity in memory. Performs no I/O."""
        ...

    def save(self, entity: T) -> Awaitable[T]:
        """Insert or update an entity and return it with its id."""
        ...

    def delete(self, target: "T | dict[str, Any]") -> Awaitable[None]:
        """Delete an entity, or every entity matching criteria."""
        ...


class UserRepositoryProtocol(RepositoryProtocol["User"], Protocol):
    """Repository interface for user accounts.

    ``password`` is excluded from the default projection. ``save`` hashes the
    password only when the entity reports ``needs_password_hash``.
    """


class PodcastRepositoryProtocol(RepositoryProtocol["Podcast"], Protocol):
    """Repository interface for podcasts; ``episodes`` is a loadable relationship."""


class EpisodeRepositoryProtocol(RepositoryProtocol["Episode"], Protocol):
    """Repository interface for episodes."""


class PasswordHasherProtocol(Protocol):
    """Password hashing capability injected into repositories and services."""

    def hash(self, password: str) -> Awaitable[str]:
        """Hash a plain password."""
        ...

    def verify(self, password: str, hashed_password: str) -> Awaitable[bool]:
        """Check a plain password against a stored hash."""
        ...


class TokenSignerProtocol(Protocol):
    """Session token issuing and validation capability."""

    def sign(self, subject_id: int) -> str:
        """Issue a signed token for the subject."""
        ...

    def verify(self, token: str) -> "TokenClaims":
        """Validate a token, raising InvalidTokenError when it is not valid."""
        ...


class UnitOfWorkProtocol(Protocol):
    """Transaction boundary that hands out repositories sharing one session."""

    async def __aenter__(self) -> Self:
        """Enter async context manager."""
        ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Commit on success, roll back on exception."""
        ...

    async def commit(self) -> None:
        """Commit the current transaction."""
        ...

    async def rollback(self) -> None:
        """Roll back the current transaction."""
        ...

    def get_user_repository(self) -> UserRepositoryProtocol:
        """Get user repository bound to this unit of work."""
        ...

    def get_podcast_repository(self) -> PodcastRepositoryProtocol:
        """Get podcast repository bound to this unit of work."""
        ...

    def get_episode_repository(self) -> EpisodeRepositoryProtocol:
        """Get episode repository bound to this unit of work."""
        ...
