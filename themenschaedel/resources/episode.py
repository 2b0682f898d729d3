"""Episode projection.

Combines an episode's own attributes with community aggregates. The
aggregates are counted at projection time and never cached.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from themenschaedel.models.claim import Claim
from themenschaedel.models.community import Flag, Vote
from themenschaedel.models.episode import Episode

# Episode columns copied into the projection as-is
EPISODE_FIELDS = (
    "guid",
    "episode_number",
    "title",
    "subtitle",
    "description",
    "image",
    "media_file",
    "duration",
    "type",
    "explicit",
    "date_published",
)


class EpisodeResource(BaseModel):
    """Public representation of an episode."""

    model_config = ConfigDict(frozen=True)

    guid: str
    episode_number: int
    title: str
    subtitle: str | None = None
    description: str | None = None
    image: str | None = None
    media_file: str | None = None
    duration: str | None = None
    type: str | None = None
    explicit: bool = False
    date_published: datetime

    claimed: bool = Field(description="Whether a user currently holds a claim on the episode")
    upvotes: int = Field(ge=0, description="Number of positive votes")
    downvotes: int = Field(ge=0, description="Number of negative votes")
    flags: int = Field(ge=0, description="Number of flags")


async def _count(session: AsyncSession, model: type, *criteria) -> int:
    stmt = select(func.count()).select_from(model).where(*criteria)
    return int(await session.scalar(stmt) or 0)


async def build_episode_resource(session: AsyncSession, episode: Episode) -> EpisodeResource:
    """Project an episode with its claim flag and community counts.

    Args:
        session: Async session used for the count queries
        episode: Episode to project

    Returns:
        EpisodeResource for the episode
    """
    claims = await _count(session, Claim, Claim.episode_id == episode.id)
    upvotes = await _count(session, Vote, Vote.episode_id == episode.id, Vote.positive.is_(True))
    downvotes = await _count(
        session, Vote, Vote.episode_id == episode.id, Vote.positive.is_(False)
    )
    flags = await _count(session, Flag, Flag.episode_id == episode.id)

    return EpisodeResource(
        **{name: getattr(episode, name) for name in EPISODE_FIELDS},
        claimed=claims > 0,
        upvotes=upvotes,
        downvotes=downvotes,
        flags=flags,
    )


__all__ = [
    "EPISODE_FIELDS",
    "EpisodeResource",
    "build_episode_resource",
]
