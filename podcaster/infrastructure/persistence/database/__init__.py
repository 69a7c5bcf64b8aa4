"""Database models, engine and session management."""

from .db_connection import (
    create_db_engine,
    create_session_factory,
    dispose_engine,
    get_engine,
    get_session,
    get_session_factory,
)
from .db_models import DBEpisode, DBPodcast, DBUser, PodcasterDBBase, init_db

__all__ = [
    "DBEpisode",
    "DBPodcast",
    "DBUser",
    "PodcasterDBBase",
    "create_db_engine",
    "create_session_factory",
    "dispose_engine",
    "get_engine",
    "get_session",
    "get_session_factory",
    "init_db",
]
