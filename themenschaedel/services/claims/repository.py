"""Storage access for the claim workflow.

All methods operate on the caller's session and flush, but never commit.
The request scope owns the transaction.
"""

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.exc import NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import joinedload, selectinload

from themenschaedel.core.exceptions import RecordNotFoundError
from themenschaedel.models.claim import Claim
from themenschaedel.models.episode import Episode
from themenschaedel.models.user import User


class ClaimRepository:
    """Reads and writes an episode's claim association.

    Attributes:
        session: Async session for the current unit of work
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def lock_episode(self, episode: Episode) -> Episode:
        """Reload an episode with its claim and claimant, row-locked.

        The episode row is locked with ``SELECT ... FOR UPDATE`` on backends
        that support it, so two concurrent claim attempts on the same
        episode serialize. The loaded instance is refreshed in place.

        Args:
            episode: Episode to reload

        Returns:
            The same episode instance with current claim state

        Raises:
            RecordNotFoundError: If the episode no longer exists
        """
        stmt = (
            select(Episode)
            .where(Episode.id == episode.id)
            .options(selectinload(Episode.claim).joinedload(Claim.user))
            .with_for_update(of=Episode)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        try:
            return result.scalar_one()
        except NoResultFound as e:
            raise RecordNotFoundError(model="Episode", record_id=episode.guid) from e

    async def get_claim(self, episode: Episode) -> Claim | None:
        """Fetch the stored claim row for an episode.

        Args:
            episode: Episode to look up

        Returns:
            The claim, or None if the episode is unclaimed
        """
        stmt = (
            select(Claim).where(Claim.episode_id == episode.id).options(joinedload(Claim.user))
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def count_claims(self, episode: Episode) -> int:
        """Count stored claim rows for an episode (0 or 1)."""
        stmt = select(func.count()).select_from(Claim).where(Claim.episode_id == episode.id)
        return int(await self.session.scalar(stmt) or 0)

    async def replace_claim(self, episode: Episode, user: User, claimed_at: datetime) -> Claim:
        """Delete any existing claim, then create a new one for the user.

        Both steps are flushed in order within the current transaction, so
        the unique constraint on ``claims.episode_id`` never sees two rows.

        Args:
            episode: Locked episode (see :meth:`lock_episode`)
            user: New claimant
            claimed_at: Claim timestamp

        Returns:
            The newly created claim
        """
        if episode.claim is not None:
            episode.claim = None
            await self.session.flush()

        claim = Claim(user=user, claimed_at=claimed_at)
        episode.claim = claim
        await self.session.flush()
        return claim

    async def delete_claim(self, episode: Episode) -> Claim | None:
        """Delete the episode's claim, if any.

        Args:
            episode: Locked episode (see :meth:`lock_episode`)

        Returns:
            The deleted claim, or None if there was none
        """
        claim = episode.claim
        if claim is None:
            return None

        episode.claim = None
        await self.session.flush()
        return claim


__all__ = [
    "ClaimRepository",
]
