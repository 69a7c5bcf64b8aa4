"""Application services - account and podcast catalog operations."""

from .podcast_catalog import (
    CreateEpisodeInput,
    CreatePodcastInput,
    EpisodeLookup,
    PodcastCatalogService,
    PodcastPatch,
    UpdateEpisodeInput,
    UpdatePodcastInput,
)
from .user_account import (
    CreateAccountInput,
    EditProfileInput,
    LoginInput,
    UserAccountService,
)

__all__ = [
    "CreateAccountInput",
    "CreateEpisodeInput",
    "CreatePodcastInput",
    "EditProfileInput",
    "EpisodeLookup",
    "LoginInput",
    "PodcastCatalogService",
    "PodcastPatch",
    "UpdateEpisodeInput",
    "UpdatePodcastInput",
    "UserAccountService",
]
