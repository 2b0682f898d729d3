"""Episode queries.

Episodes are addressed externally by their feed guid.
"""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from themenschaedel.core.exceptions import RecordNotFoundError
from themenschaedel.models.claim import Claim
from themenschaedel.models.episode import Episode
from themenschaedel.models.user import User

# Upper bound for list queries
MAX_QUERY_LIMIT = 100


class EpisodeRepository:
    """Read access to episodes.

    Episodes returned from this repository have their claim (and claimant)
    loaded, so claim predicates can be evaluated without further IO.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_guid(self, guid: str) -> Episode:
        """Get an episode by its guid.

        Args:
            guid: Feed guid

        Returns:
            The episode

        Raises:
            RecordNotFoundError: If no episode has this guid
        """
        result = await self.session.execute(select(Episode).where(Episode.guid == guid))
        episode = result.scalar_one_or_none()
        if episode is None:
            raise RecordNotFoundError(model="Episode", record_id=guid)
        return episode

    async def find_by_guid(self, guid: str) -> Episode | None:
        """Get an episode by its guid, or None."""
        result = await self.session.execute(select(Episode).where(Episode.guid == guid))
        return result.scalar_one_or_none()

    async def list_latest(self, limit: int = 20, offset: int = 0) -> Sequence[Episode]:
        """List episodes, newest first.

        Args:
            limit: Maximum number of episodes (capped at MAX_QUERY_LIMIT)
            offset: Number of episodes to skip

        Returns:
            Episodes ordered by publication date descending
        """
        limit = max(0, min(limit, MAX_QUERY_LIMIT))
        offset = max(0, offset)
        stmt = (
            select(Episode)
            .order_by(Episode.date_published.desc(), Episode.episode_number.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def list_claimed_by(self, user: User) -> Sequence[Episode]:
        """List episodes currently claimed by a user, oldest claim first."""
        stmt = (
            select(Episode)
            .join(Claim, Claim.episode_id == Episode.id)
            .where(Claim.user_id == user.id)
            .order_by(Claim.claimed_at)
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()


__all__ = [
    "EpisodeRepository",
    "MAX_QUERY_LIMIT",
]
