"""SQLAlchemy database models for the podcast platform.

Defines users, podcasts and episodes using SQLAlchemy 2.0 patterns with
type annotations and relationship definitions.
"""

from datetime import UTC, datetime

from sqlalchemy import DateTime, ForeignKey, MetaData, String, UniqueConstraint
from sqlalchemy.ext.asyncio import AsyncAttrs, AsyncEngine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from podcaster.config import get_logger

logger = get_logger(__name__)

# Naming convention for constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)


class PodcasterDBBase(AsyncAttrs, DeclarativeBase):
    """Base class for all database models with timestamps."""

    metadata = metadata

    id: Mapped[int] = mapped_column(primary_key=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
    )


class DBUser(PodcasterDBBase):
    """Platform account. ``password`` always holds a bcrypt hash."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), nullable=False)
    password: Mapped[str] = mapped_column(String(128), nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False)

    # Storage level backstop for the service's check-then-create on email
    __table_args__ = (UniqueConstraint("email"),)


class DBPodcast(PodcasterDBBase):
    """Podcast owning an ordered collection of episodes."""

    __tablename__ = "podcasts"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(64), nullable=False)
    rating: Mapped[int | None] = mapped_column(default=None)

    episodes: Mapped[list["DBEpisode"]] = relationship(
        back_populates="podcast",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="DBEpisode.id",
    )


class DBEpisode(PodcasterDBBase):
    """Episode row; ``podcast_id`` references the owning podcast."""

    __tablename__ = "episodes"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(64), nullable=False)
    podcast_id: Mapped[int] = mapped_column(
        ForeignKey("podcasts.id", ondelete="CASCADE"),
        index=True,
    )

    podcast: Mapped["DBPodcast"] = relationship(back_populates="episodes")


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Initialize database schema.

    Creates all tables if they don't exist. Safe to run against an existing
    database.
    """
    from podcaster.infrastructure.persistence.database.db_connection import (
        get_engine,
    )

    engine = engine or get_engine()

    try:
        async with engine.begin() as conn:
            await conn.run_sync(PodcasterDBBase.metadata.create_all)
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise

    logger.info("Database schema verified - all tables exist")
