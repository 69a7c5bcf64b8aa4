"""Podcast catalog service: podcast CRUD and nested episode CRUD.

All lookups of a podcast go through ``get_podcast``. Operations that need an
existing podcast hand back that exact Result when the lookup fails, so a
caller sees the same failure whichever operation it invoked.
"""

from typing import Any

from attrs import define, field, validators

from podcaster.config import get_logger
from podcaster.domain.entities import (
    MAX_RATING,
    MIN_RATING,
    UNSET,
    Episode,
    Podcast,
    Result,
    UnsetType,
    is_set,
    is_valid_rating,
    present_fields,
    unset_or,
)
from podcaster.domain.repositories import (
    EpisodeRepositoryProtocol,
    PodcastRepositoryProtocol,
    UnitOfWorkProtocol,
)

logger = get_logger(__name__)

INTERNAL_ERROR = "Internal server error occurred."
INVALID_RATING = f"Rating must be between {MIN_RATING} and {MAX_RATING}."


def podcast_not_found(podcast_id: int) -> str:
    return f"Podcast with id {podcast_id} not found"


def episode_not_found(podcast_id: int, episode_id: int) -> str:
    return f"Episode with id {episode_id} not found in podcast with id {podcast_id}"


def _optional_rating(instance: Any, attribute: Any, value: Any) -> None:
    if value is not None and (not isinstance(value, int) or isinstance(value, bool)):
        raise TypeError(f"'{attribute.name}' must be an int or None, got {value!r}")


# -----------------------------------------------------------------------------
# Operation inputs
# -----------------------------------------------------------------------------


@define(frozen=True, slots=True)
class CreatePodcastInput:
    title: str = field(validator=validators.instance_of(str))
    category: str = field(validator=validators.instance_of(str))


@define(frozen=True, slots=True)
class PodcastPatch:
    """Fields of a podcast update. UNSET fields are ignored; rating=None clears."""

    title: str | UnsetType = field(default=UNSET, validator=unset_or(validators.instance_of(str)))
    category: str | UnsetType = field(
        default=UNSET, validator=unset_or(validators.instance_of(str))
    )
    rating: int | None | UnsetType = field(default=UNSET, validator=unset_or(_optional_rating))


@define(frozen=True, slots=True)
class UpdatePodcastInput:
    id: int
    payload: PodcastPatch = field(factory=PodcastPatch)


@define(frozen=True, slots=True)
class CreateEpisodeInput:
    podcast_id: int
    title: str = field(validator=validators.instance_of(str))
    category: str = field(validator=validators.instance_of(str))


@define(frozen=True, slots=True)
class EpisodeLookup:
    podcast_id: int
    episode_id: int


@define(frozen=True, slots=True)
class UpdateEpisodeInput:
    """Episode update; title/category left at UNSET keep their value."""

    podcast_id: int
    episode_id: int
    title: str | UnsetType = field(default=UNSET, validator=unset_or(validators.instance_of(str)))
    category: str | UnsetType = field(
        default=UNSET, validator=unset_or(validators.instance_of(str))
    )

    def changes(self) -> dict[str, Any]:
        fields = {"title": self.title, "category": self.category}
        return {name: value for name, value in fields.items() if is_set(value)}


# -----------------------------------------------------------------------------
# Service
# -----------------------------------------------------------------------------


class PodcastCatalogService:
    """Application service for podcasts and their episodes."""

    def __init__(
        self,
        podcasts: PodcastRepositoryProtocol,
        episodes: EpisodeRepositoryProtocol,
    ) -> None:
        self.podcasts = podcasts
        self.episodes = episodes

    @classmethod
    def from_unit_of_work(cls, uow: UnitOfWorkProtocol) -> "PodcastCatalogService":
        return cls(
            podcasts=uow.get_podcast_repository(),
            episodes=uow.get_episode_repository(),
        )

    # -------------------------------------------------------------------------
    # Podcasts
    # -------------------------------------------------------------------------

    async def create_podcast(self, podcast_input: CreatePodcastInput) -> Result[int]:
        """Create a podcast and return its new id."""
        try:
            podcast = self.podcasts.create(
                title=podcast_input.title, category=podcast_input.category
            )
            saved = await self.podcasts.save(podcast)
        except Exception as e:
            logger.exception(f"Podcast creation failed: {e}")
            return Result.internal_error(INTERNAL_ERROR)

        logger.info("Podcast created", podcast_id=saved.id)
        return Result.success(saved.id)

    async def get_all_podcasts(self) -> Result[list[Podcast]]:
        try:
            podcasts = await self.podcasts.find()
        except Exception as e:
            logger.exception(f"Listing podcasts failed: {e}")
            return Result.internal_error(INTERNAL_ERROR)

        return Result.success(podcasts)

    async def get_podcast(self, podcast_id: int) -> Result[Podcast]:
        """Fetch a podcast with its episodes.

        This is the single place that produces the podcast not-found result.
        """
        try:
            podcast = await self.podcasts.find_one(
                {"id": podcast_id}, load_relationships=["episodes"]
            )
        except Exception as e:
            logger.exception(f"Podcast lookup failed for id {podcast_id}: {e}")
            return Result.internal_error(INTERNAL_ERROR)

        if podcast is None:
            return Result.fail(podcast_not_found(podcast_id))

        return Result.success(podcast)

    async def update_podcast(self, update: UpdatePodcastInput) -> Result[None]:
        """Apply a partial update to a podcast.

        The rating is validated before anything is merged or saved, so an
        invalid rating leaves the podcast untouched.
        """
        found = await self.get_podcast(update.id)
        if not found.ok:
            return found

        changes = present_fields(update.payload)
        if "rating" in changes and not is_valid_rating(changes["rating"]):
            return Result.fail(INVALID_RATING)

        try:
            await self.podcasts.save(found.value.with_changes(**changes))
        except Exception as e:
            logger.exception(f"Podcast update failed for id {update.id}: {e}")
            return Result.internal_error(INTERNAL_ERROR)

        return Result.success()

    async def delete_podcast(self, podcast_id: int) -> Result[None]:
        found = await self.get_podcast(podcast_id)
        if not found.ok:
            return found

        try:
            await self.podcasts.delete(found.value)
        except Exception as e:
            logger.exception(f"Podcast deletion failed for id {podcast_id}: {e}")
            return Result.internal_error(INTERNAL_ERROR)

        logger.info("Podcast deleted", podcast_id=podcast_id)
        return Result.success()

    # -------------------------------------------------------------------------
    # Episodes
    # -------------------------------------------------------------------------

    async def create_episode(self, episode_input: CreateEpisodeInput) -> Result[int]:
        """Create an episode under an existing podcast and return its id."""
        found = await self.get_podcast(episode_input.podcast_id)
        if not found.ok:
            return found

        try:
            episode = self.episodes.create(
                title=episode_input.title, category=episode_input.category
            )
            saved = await self.episodes.save(episode.with_changes(podcast_id=found.value.id))
        except Exception as e:
            logger.exception(
                f"Episode creation failed for podcast {episode_input.podcast_id}: {e}"
            )
            return Result.internal_error(INTERNAL_ERROR)

        return Result.success(saved.id)

    async def get_episodes(self, podcast_id: int) -> Result[list[Episode]]:
        found = await self.get_podcast(podcast_id)
        if not found.ok:
            return found

        return Result.success(found.value.episodes)

    async def get_episode(self, lookup: EpisodeLookup) -> Result[Episode]:
        found = await self.get_podcast(lookup.podcast_id)
        if not found.ok:
            return found

        episode = found.value.find_episode(lookup.episode_id)
        if episode is None:
            return Result.fail(episode_not_found(lookup.podcast_id, lookup.episode_id))

        return Result.success(episode)

    async def delete_episode(self, lookup: EpisodeLookup) -> Result[None]:
        """Delete an episode row by id once it is known to belong to the podcast."""
        found = await self.get_episode(lookup)
        if not found.ok:
            return found

        try:
            await self.episodes.delete({"id": lookup.episode_id})
        except Exception as e:
            logger.exception(f"Episode deletion failed for id {lookup.episode_id}: {e}")
            return Result.internal_error(INTERNAL_ERROR)

        return Result.success()

    async def update_episode(self, update: UpdateEpisodeInput) -> Result[None]:
        """Merge the given fields into an episode of the podcast.

        The episode must belong to the podcast; otherwise the get_episode
        not-found result is returned and nothing is saved.
        """
        found = await self.get_episode(
            EpisodeLookup(podcast_id=update.podcast_id, episode_id=update.episode_id)
        )
        if not found.ok:
            return found

        try:
            await self.episodes.save(found.value.with_changes(**update.changes()))
        except Exception as e:
            logger.exception(f"Episode update failed for id {update.episode_id}: {e}")
            return Result.internal_error(INTERNAL_ERROR)

        return Result.success()
