"""Database Unit of Work implementation for transaction boundary management.

Hands out repositories that share one database session and commits or rolls
back that session as a whole.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from podcaster.config import settings
from podcaster.domain.repositories import (
    EpisodeRepositoryProtocol,
    PasswordHasherProtocol,
    PodcastRepositoryProtocol,
    UserRepositoryProtocol,
)
from podcaster.infrastructure.persistence.database.db_connection import (
    get_session_factory,
)
from podcaster.infrastructure.persistence.repositories import (
    EpisodeRepository,
    PodcastRepository,
    UserRepository,
)
from podcaster.infrastructure.services.password_hasher import BcryptPasswordHasher


class DatabaseUnitOfWork:
    """Database implementation of the Unit of Work pattern.

    Commits on successful exit. Rolls back when the block raises or when a
    flush inside the block left the session's transaction inactive. Explicit
    commit/rollback are available for callers that need finer control.
    """

    def __init__(
        self,
        session: AsyncSession,
        password_hasher: PasswordHasherProtocol | None = None,
    ) -> None:
        """Initialize with database session.

        Args:
            session: SQLAlchemy async session for database operations
            password_hasher: Hasher used by the user repository on write
        """
        self._session = session
        self._password_hasher = password_hasher or BcryptPasswordHasher(
            rounds=settings.security.bcrypt_rounds
        )
        self._committed = False

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        # A failed flush deactivates the transaction even when the service
        # caught the error and returned a failed Result
        if exc_type is not None or not self._session.is_active:
            await self.rollback()
        elif not self._committed:
            await self.commit()

    async def commit(self) -> None:
        """Explicitly commit the current transaction."""
        await self._session.commit()
        self._committed = True

    async def rollback(self) -> None:
        """Explicitly rollback the current transaction."""
        await self._session.rollback()

    def get_user_repository(self) -> UserRepositoryProtocol:
        return UserRepository(self._session, self._password_hasher)

    def get_podcast_repository(self) -> PodcastRepositoryProtocol:
        return PodcastRepository(self._session)

    def get_episode_repository(self) -> EpisodeRepositoryProtocol:
        return EpisodeRepository(self._session)


@asynccontextmanager
async def unit_of_work(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
    password_hasher: PasswordHasherProtocol | None = None,
) -> AsyncGenerator[DatabaseUnitOfWork]:
    """Open a session and wrap it in a DatabaseUnitOfWork."""
    factory = session_factory or get_session_factory()
    async with factory() as session:
        async with DatabaseUnitOfWork(session, password_hasher) as uow:
            yield uow
