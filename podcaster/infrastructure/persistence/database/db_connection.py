"""SQLAlchemy database configuration and connection management.

This module is responsible for:
- Engine creation and configuration
- Session management
- Transaction handling
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from podcaster.config import get_logger, settings

logger = get_logger(__name__)


def _is_memory_sqlite(db_url: str) -> bool:
    return db_url.startswith("sqlite") and (":memory:" in db_url or db_url.endswith("://"))


def create_db_engine(connection_string: str | None = None) -> AsyncEngine:
    """Create an async SQLAlchemy engine.

    SQLite connections get pragmas enabling WAL and foreign keys. In-memory
    SQLite databases share a single connection so every session sees the
    same schema and data.
    """
    db_url = connection_string or settings.database.url
    is_sqlite = db_url.startswith("sqlite")

    engine_kwargs: dict = {"echo": settings.database.echo}
    if is_sqlite:
        engine_kwargs["connect_args"] = {"check_same_thread": False, "timeout": 30.0}
    if _is_memory_sqlite(db_url):
        engine_kwargs["poolclass"] = StaticPool
    elif not is_sqlite:
        engine_kwargs.update(
            pool_pre_ping=True,
            pool_timeout=settings.database.pool_timeout,
            pool_recycle=settings.database.pool_recycle,
        )

    engine = create_async_engine(db_url, **engine_kwargs)

    if is_sqlite:

        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, _):  # type: ignore # pragma: no cover
            """Set SQLite PRAGMAs on connection creation."""
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys = ON")
            if not _is_memory_sqlite(db_url):
                cursor.execute("PRAGMA journal_mode = WAL")
                cursor.execute("PRAGMA synchronous = NORMAL")
                cursor.execute("PRAGMA busy_timeout = 30000")
            cursor.close()

    logger.info("Created database engine", dialect=engine.dialect.name)
    return engine


# Global engine singleton
_engine: AsyncEngine | None = None


def get_engine() -> AsyncEngine:
    """Get or create the global database engine singleton."""
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


def create_session_factory(
    engine: AsyncEngine | None = None,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory for the given engine.

    Args:
        engine: Optional engine (uses global engine if None)
    """
    return async_sessionmaker(
        bind=engine or get_engine(),
        expire_on_commit=False,  # Domain mapping happens after commit
        autoflush=True,
    )


# Global session factory singleton
_session_factory: async_sessionmaker[AsyncSession] | None = None


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get or create the global session factory singleton."""
    global _session_factory
    if _session_factory is None:
        _session_factory = create_session_factory()
    return _session_factory


@asynccontextmanager
async def get_session(rollback: bool = True) -> AsyncGenerator[AsyncSession]:
    """Get an asynchronous database session with transaction management.

    Commits when the block exits normally.

    Args:
        rollback: If True (default), rolls back on exception.
    """
    session = get_session_factory()()
    try:
        yield session
        await session.commit()
    except Exception:
        if rollback:
            await session.rollback()
        raise
    finally:
        await session.close()


async def dispose_engine() -> None:
    """Dispose the global engine and forget the cached singletons."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None
