"""Application layer test fixtures - Services with mocked dependencies.

These fixtures provide mocked repositories and security capabilities for
testing the application services without a database. ``create`` is a plain
method on every repository, so it is a MagicMock building real entities;
the I/O methods are AsyncMocks.
"""

from unittest.mock import AsyncMock, MagicMock, Mock

import attrs
import pytest

from podcaster.application.services import PodcastCatalogService, UserAccountService
from podcaster.domain.entities import Episode, Podcast, User, UserRole
from podcaster.domain.repositories import UnitOfWorkProtocol


def _assign_id(new_id: int):
    """Save side effect echoing the entity back with an id, like a real insert."""

    async def save(entity):
        if entity.id is None:
            return attrs.evolve(entity, id=new_id)
        return entity

    return save


def _mock_repository(factory, new_id: int) -> MagicMock:
    mock = MagicMock()
    mock.find = AsyncMock(return_value=[])
    mock.find_one = AsyncMock(return_value=None)
    mock.find_one_or_fail = AsyncMock()
    mock.save = AsyncMock(side_effect=_assign_id(new_id))
    mock.delete = AsyncMock(return_value=None)
    mock.create = MagicMock(side_effect=factory)
    return mock


@pytest.fixture
def mock_user_repository():
    """Mock user repository for application tests."""
    return _mock_repository(User.register, new_id=1)


@pytest.fixture
def mock_podcast_repository():
    """Mock podcast repository for application tests."""
    return _mock_repository(Podcast, new_id=10)


@pytest.fixture
def mock_episode_repository():
    """Mock episode repository for application tests."""
    return _mock_repository(Episode, new_id=100)


@pytest.fixture
def mock_unit_of_work(
    mock_user_repository, mock_podcast_repository, mock_episode_repository
):
    """Unit of work handing out the mocked repositories."""
    uow = Mock(spec=UnitOfWorkProtocol)
    uow.get_user_repository.return_value = mock_user_repository
    uow.get_podcast_repository.return_value = mock_podcast_repository
    uow.get_episode_repository.return_value = mock_episode_repository
    return uow


@pytest.fixture
def mock_token_signer():
    mock = MagicMock()
    mock.sign.return_value = "signed-token"
    return mock


@pytest.fixture
def mock_password_hasher():
    mock = AsyncMock()
    mock.hash.return_value = "hashed"
    mock.verify.return_value = True
    return mock


@pytest.fixture
def user_service(mock_user_repository, mock_token_signer, mock_password_hasher):
    return UserAccountService(
        users=mock_user_repository,
        token_signer=mock_token_signer,
        password_hasher=mock_password_hasher,
    )


@pytest.fixture
def catalog_service(mock_podcast_repository, mock_episode_repository):
    return PodcastCatalogService(
        podcasts=mock_podcast_repository,
        episodes=mock_episode_repository,
    )


@pytest.fixture
def existing_user():
    """User as the repository returns it when the password was requested."""
    return User(id=1, email="host@example.com", role=UserRole.HOST, password="stored-hash")


@pytest.fixture
def existing_podcast():
    return Podcast(
        id=1,
        title="Existing Podcast",
        category="Tech",
        rating=3,
        episodes=[
            Episode(id=11, title="First", category="Intro", podcast_id=1),
            Episode(id=12, title="Second", category="Deep dive", podcast_id=1),
        ],
    )
