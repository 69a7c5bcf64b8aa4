"""Domain layer test fixtures - Pure business objects with no dependencies.

These fixtures create domain entities for testing business logic.
Fast creation, no external dependencies, function-scoped for isolation.
"""

import pytest

from podcaster.domain.entities import Episode, Podcast, User, UserRole


@pytest.fixture
def stored_user():
    """Persisted user whose password field holds a (fake) stored hash."""
    return User(
        id=1,
        email="host@example.com",
        role=UserRole.HOST,
        password="$2b$04$storedhash",
    )


@pytest.fixture
def episodes():
    return [
        Episode(id=i, title=f"Episode {i}", category="Tech", podcast_id=1)
        for i in range(1, 4)
    ]


@pytest.fixture
def podcast(episodes):
    """Podcast with three episodes for domain tests."""
    return Podcast(id=1, title="Test Podcast", category="Tech", rating=4, episodes=episodes)


class FakeHasher:
    """Deterministic hasher: a hash is the password prefixed with 'hashed:'."""

    async def hash(self, password: str) -> str:
        return f"hashed:{password}"

    async def verify(self, password: str, hashed_password: str) -> bool:
        return hashed_password == f"hashed:{password}"


@pytest.fixture
def fake_hasher():
    return FakeHasher()
