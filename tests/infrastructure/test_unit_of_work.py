"""Tests for DatabaseUnitOfWork transaction boundaries."""

import pytest
from sqlalchemy.exc import IntegrityError

from podcaster.domain.entities import Podcast, User
from podcaster.infrastructure.persistence import DatabaseUnitOfWork, unit_of_work


class TestDatabaseUnitOfWork:
    async def test_commits_on_clean_exit(self, session_factory, password_hasher):
        async with unit_of_work(session_factory, password_hasher) as uow:
            saved = await uow.get_podcast_repository().save(
                Podcast(title="Kept", category="News")
            )

        async with unit_of_work(session_factory, password_hasher) as uow:
            found = await uow.get_podcast_repository().find_one({"id": saved.id})

        assert found is not None
        assert found.title == "Kept"

    async def test_rolls_back_when_block_raises(self, session_factory, password_hasher):
        with pytest.raises(RuntimeError):
            async with unit_of_work(session_factory, password_hasher) as uow:
                await uow.get_podcast_repository().save(Podcast(title="Lost", category="News"))
                raise RuntimeError("abort")

        async with unit_of_work(session_factory, password_hasher) as uow:
            assert await uow.get_podcast_repository().find() == []

    async def test_explicit_rollback(self, session_factory, password_hasher):
        async with session_factory() as session:
            uow = DatabaseUnitOfWork(session, password_hasher)
            await uow.get_podcast_repository().save(Podcast(title="Draft", category="News"))
            await uow.rollback()
            await uow.commit()

        async with unit_of_work(session_factory, password_hasher) as uow:
            assert await uow.get_podcast_repository().find() == []

    async def test_repositories_share_the_session(self, session_factory, password_hasher):
        async with unit_of_work(session_factory, password_hasher) as uow:
            podcast = await uow.get_podcast_repository().save(
                Podcast(title="Shared", category="News")
            )
            episodes = uow.get_episode_repository()
            await episodes.save(
                episodes.create(title="One", category="News").with_changes(podcast_id=podcast.id)
            )

            found = await uow.get_podcast_repository().find_one({"id": podcast.id})

        assert [episode.title for episode in found.episodes] == ["One"]

    async def test_failed_flush_rolls_back_instead_of_committing(
        self, session_factory, password_hasher
    ):
        async with unit_of_work(session_factory, password_hasher) as uow:
            users = uow.get_user_repository()
            await users.save(User.register("dup@example.com", "secret", "Host"))
            with pytest.raises(IntegrityError):
                await users.save(User.register("dup@example.com", "other", "Listener"))

        async with unit_of_work(session_factory, password_hasher) as uow:
            assert await uow.get_user_repository().find() == []
