"""Podcast catalog domain entities.

Pure podcast and episode representations with zero external dependencies
beyond attrs.
"""

from typing import Any

import attrs
from attrs import define, field, validators

MIN_RATING = 1
MAX_RATING = 5


def is_valid_rating(rating: int | None) -> bool:
    """Check a rating value; None means "no rating" and is always valid."""
    return rating is None or MIN_RATING <= rating <= MAX_RATING


def _check_rating(instance: Any, attribute: attrs.Attribute, value: int | None) -> None:
    if not is_valid_rating(value):
        raise ValueError(
            f"'{attribute.name}' must be between {MIN_RATING} and {MAX_RATING}, got {value}"
        )


@define(frozen=True, slots=True)
class Episode:
    """Episode belonging to exactly one podcast.

    ``podcast_id`` is a lookup reference; the podcast owns the episode, not
    the other way round.
    """

    title: str = field(validator=validators.instance_of(str))
    category: str = field(validator=validators.instance_of(str))
    id: int | None = None
    podcast_id: int | None = None

    def with_changes(self, **changes: Any) -> "Episode":
        return attrs.evolve(self, **changes)


@define(frozen=True, slots=True)
class Podcast:
    """Podcast with its ordered episode collection."""

    title: str = field(validator=validators.instance_of(str))
    category: str = field(validator=validators.instance_of(str))
    rating: int | None = field(default=None, validator=_check_rating)
    id: int | None = None
    episodes: list[Episode] = field(factory=list)

    def with_changes(self, **changes: Any) -> "Podcast":
        """Create a new podcast with the given fields replaced."""
        return attrs.evolve(self, **changes)

    def find_episode(self, episode_id: int) -> Episode | None:
        """Linear search of the loaded episodes by id."""
        return next(
            (episode for episode in self.episodes if episode.id == episode_id),
            None,
        )
