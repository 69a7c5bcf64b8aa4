"""SQLAlchemy implementations of the domain repository protocols."""

from .base_repo import BaseModelMapper, BaseRepository
from .podcast import EpisodeMapper, EpisodeRepository, PodcastMapper, PodcastRepository
from .user import UserMapper, UserRepository

__all__ = [
    "BaseModelMapper",
    "BaseRepository",
    "EpisodeMapper",
    "EpisodeRepository",
    "PodcastMapper",
    "PodcastRepository",
    "UserMapper",
    "UserRepository",
]
