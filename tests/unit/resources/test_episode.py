"""Unit tests for the episode resource projection."""

from datetime import UTC, datetime

import pytest

from themenschaedel.models import Flag, Vote
from themenschaedel.resources import EpisodeResource, build_episode_resource
from themenschaedel.services.claims import ClaimRepository


@pytest.mark.unit
class TestBuildEpisodeResource:
    """Tests for build_episode_resource."""

    @pytest.mark.asyncio
    async def test_counts_votes_and_flags(self, db_session, make_episode, make_user) -> None:
        episode = await make_episode(guid="ep-counted", title="Counted")
        other = await make_episode()
        users = [await make_user(f"user{i}") for i in range(4)]

        db_session.add_all(
            [
                Vote(episode_id=episode.id, user_id=users[0].id, positive=True),
                Vote(episode_id=episode.id, user_id=users[1].id, positive=True),
                Vote(episode_id=episode.id, user_id=users[2].id, positive=False),
                Vote(episode_id=other.id, user_id=users[3].id, positive=True),
                Flag(episode_id=episode.id, user_id=users[3].id, reason="wrong timestamps"),
            ]
        )
        await db_session.flush()

        resource = await build_episode_resource(db_session, episode)

        assert isinstance(resource, EpisodeResource)
        assert resource.guid == "ep-counted"
        assert resource.title == "Counted"
        assert resource.claimed is False
        assert resource.upvotes == 2
        assert resource.downvotes == 1
        assert resource.flags == 1

    @pytest.mark.asyncio
    async def test_claimed_flag(self, db_session, make_episode, make_user) -> None:
        episode = await make_episode()
        user = await make_user()
        await ClaimRepository(db_session).replace_claim(episode, user, datetime.now(UTC))

        resource = await build_episode_resource(db_session, episode)

        assert resource.claimed is True
        assert resource.upvotes == 0
        assert resource.downvotes == 0
        assert resource.flags == 0

    @pytest.mark.asyncio
    async def test_serializes_without_relationships(self, db_session, make_episode) -> None:
        episode = await make_episode(subtitle="A subtitle")

        data = (await build_episode_resource(db_session, episode)).model_dump()

        assert data["subtitle"] == "A subtitle"
        assert {"claimed", "upvotes", "downvotes", "flags"} <= data.keys()
        assert "topics" not in data
