"""Repositories for podcasts and their episodes."""

from typing import Any

from attrs import define
from sqlalchemy.ext.asyncio import AsyncSession

from podcaster.domain.entities import Episode, Podcast
from podcaster.infrastructure.persistence.database.db_models import (
    DBEpisode,
    DBPodcast,
)
from podcaster.infrastructure.persistence.repositories.base_repo import (
    NO_FIELDS,
    BaseModelMapper,
    BaseRepository,
    safe_fetch_relationship,
)


@define(frozen=True, slots=True)
class EpisodeMapper(BaseModelMapper[DBEpisode, Episode]):
    """Maps between DBEpisode and Episode domain models."""

    @staticmethod
    async def to_domain(
        db_model: DBEpisode, include_fields: frozenset[str] = NO_FIELDS
    ) -> Episode:
        return Episode(
            id=db_model.id,
            title=db_model.title,
            category=db_model.category,
            podcast_id=db_model.podcast_id,
        )

    @staticmethod
    def new(**fields: Any) -> Episode:
        return Episode(**fields)

    @staticmethod
    def to_db(domain_model: Episode) -> DBEpisode:
        if domain_model.podcast_id is None:
            raise ValueError("An episode must reference a podcast before it is saved")
        return DBEpisode(
            title=domain_model.title,
            category=domain_model.category,
            podcast_id=domain_model.podcast_id,
        )

    @staticmethod
    def apply_to_db(domain_model: Episode, db_model: DBEpisode) -> None:
        db_model.title = domain_model.title
        db_model.category = domain_model.category
        if domain_model.podcast_id is not None:
            db_model.podcast_id = domain_model.podcast_id


@define(frozen=True, slots=True)
class PodcastMapper(BaseModelMapper[DBPodcast, Podcast]):
    """Maps between DBPodcast and Podcast domain models."""

    @staticmethod
    async def to_domain(
        db_model: DBPodcast, include_fields: frozenset[str] = NO_FIELDS
    ) -> Podcast:
        db_episodes = await safe_fetch_relationship(db_model, "episodes")
        return Podcast(
            id=db_model.id,
            title=db_model.title,
            category=db_model.category,
            rating=db_model.rating,
            episodes=await EpisodeMapper.map_collection(db_episodes),
        )

    @staticmethod
    def new(**fields: Any) -> Podcast:
        return Podcast(**fields)

    @staticmethod
    def to_db(domain_model: Podcast) -> DBPodcast:
        return DBPodcast(
            title=domain_model.title,
            category=domain_model.category,
            rating=domain_model.rating,
        )

    @staticmethod
    def apply_to_db(domain_model: Podcast, db_model: DBPodcast) -> None:
        # Episodes are written through the episode repository
        db_model.title = domain_model.title
        db_model.category = domain_model.category
        db_model.rating = domain_model.rating

    @staticmethod
    def get_default_relationships() -> list[str]:
        return ["episodes"]


class PodcastRepository(BaseRepository[DBPodcast, Podcast]):
    """Repository for podcasts; deleting a podcast cascades to its episodes."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(
            session=session,
            model_class=DBPodcast,
            mapper=PodcastMapper(),
            entity_name="Podcast",
        )


class EpisodeRepository(BaseRepository[DBEpisode, Episode]):
    """Repository for episode rows."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(
            session=session,
            model_class=DBEpisode,
            mapper=EpisodeMapper(),
            entity_name="Episode",
        )
