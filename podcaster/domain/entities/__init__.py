"""Core domain entities for accounts, the podcast catalog and results."""

from .podcast import MAX_RATING, MIN_RATING, Episode, Podcast, is_valid_rating
from .result import ErrorKind, Result, ServiceError
from .shared import UNSET, UnsetType, is_set, present_fields, unset_or
from .user import TokenClaims, User, UserRole

__all__ = [
    "MAX_RATING",
    "MIN_RATING",
    "UNSET",
    "UnsetType",
    "Episode",
    "ErrorKind",
    "Podcast",
    "Result",
    "ServiceError",
    "TokenClaims",
    "User",
    "UserRole",
    "is_set",
    "is_valid_rating",
    "present_fields",
    "unset_or",
]
