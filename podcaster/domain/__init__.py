"""Podcaster domain layer - pure business logic with no infrastructure dependencies."""

from . import entities, repositories
from .entities import (
    Episode,
    ErrorKind,
    Podcast,
    Result,
    ServiceError,
    User,
    UserRole,
)
from .exceptions import EntityNotFoundError, InvalidTokenError, PodcasterError

__all__ = [
    # Modules
    "entities",
    "repositories",
    # Key domain types
    "Episode",
    "Podcast",
    "User",
    "UserRole",
    "Result",
    "ServiceError",
    "ErrorKind",
    # Exceptions
    "EntityNotFoundError",
    "InvalidTokenError",
    "PodcasterError",
]
