"""Claim coordinator.

Mediates every change to an episode's claim state: at most one user holds
a claim, guarded transitions consult the authorization oracle, and every
successful transition publishes an event.

Guarded operations (:meth:`ClaimCoordinator.claim`,
:meth:`ClaimCoordinator.drop`) either succeed completely or raise a
ClaimError without touching storage or publishing anything. The force
operations bypass both checks.

Example:
    >>> coordinator = ClaimCoordinator(ClaimRepository(session), gate, dispatcher)
    >>> episode = await coordinator.claim(episode, user)
    >>> coordinator.is_claimed_by(episode, user)
    True
"""

from datetime import UTC, datetime

from themenschaedel.core.exceptions import (
    AlreadyClaimedError,
    NotAuthorizedError,
    NotYourClaimError,
)
from themenschaedel.core.logging import get_logger
from themenschaedel.core.types import Clock
from themenschaedel.models.episode import Episode
from themenschaedel.models.user import User
from themenschaedel.services.authorization.gate import AuthorizationOracle
from themenschaedel.services.claims.repository import ClaimRepository
from themenschaedel.services.events.dispatcher import EventSink
from themenschaedel.services.events.models import EpisodeClaimDropped, EpisodeClaimed

logger = get_logger(__name__)

# Abilities checked against the authorization oracle
CLAIM = "claim"
UNCLAIM = "unclaim"


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class ClaimCoordinator:
    """Owns the claim/drop state transitions of episodes.

    Mutating operations return the episode with its post-transition claim
    already loaded, so the predicates reflect the new state without a
    further round trip.

    Attributes:
        repository: Storage access bound to the current unit of work
        oracle: Authorization oracle for "claim" and "unclaim"
        events: Sink receiving EpisodeClaimed / EpisodeClaimDropped
    """

    def __init__(
        self,
        repository: ClaimRepository,
        oracle: AuthorizationOracle,
        events: EventSink,
        clock: Clock = _utcnow,
    ) -> None:
        """Initialize ClaimCoordinator.

        Args:
            repository: Claim storage for the current session
            oracle: Authorization oracle
            events: Event sink
            clock: Source of claim timestamps
        """
        self.repository = repository
        self.oracle = oracle
        self.events = events
        self.clock = clock

    # ============================================
    # Predicates
    # ============================================

    @staticmethod
    def is_claimed(episode: Episode) -> bool:
        """Check if an episode is claimed by any user.

        Args:
            episode: Episode with its claim loaded

        Returns:
            True if the episode has a claim
        """
        return episode.claim is not None

    def is_claimed_by(self, episode: Episode, user: User) -> bool:
        """Check if an episode is claimed by the given user.

        Args:
            episode: Episode with its claim loaded
            user: User to compare against the claimant

        Returns:
            True if the episode is claimed and the claimant is the user
        """
        return self.is_claimed(episode) and episode.claim.user_id == user.id

    # ============================================
    # Guarded transitions
    # ============================================

    async def claim(self, episode: Episode, user: User) -> Episode:
        """Claim an episode for a user.

        The current claimant may claim again; this re-authorizes and
        re-stamps the claim.

        Args:
            episode: Episode to claim
            user: Acting user

        Returns:
            The claimed episode

        Raises:
            AlreadyClaimedError: If another user holds the claim
            NotAuthorizedError: If the policy denies "claim"
        """
        episode = await self.repository.lock_episode(episode)
        log = logger.bind(episode_guid=episode.guid, user_id=str(user.id))

        if self.is_claimed(episode) and not self.is_claimed_by(episode, user):
            claimant_id = str(episode.claim.user_id)
            log.warning("Claim rejected, episode claimed by another user", claimant_id=claimant_id)
            raise AlreadyClaimedError(
                episode_guid=episode.guid,
                user_id=str(user.id),
                claimant_id=claimant_id,
            )

        if not self.oracle.allows(user, CLAIM, episode):
            log.warning("Claim rejected by policy")
            raise NotAuthorizedError(
                CLAIM,
                message="Episode cannot be claimed",
                episode_guid=episode.guid,
                user_id=str(user.id),
            )

        return await self._claim(episode, user)

    async def drop(self, episode: Episode, user: User) -> Episode:
        """Drop a user's claim on an episode.

        Dropping an unclaimed episode is allowed if the policy permits it
        and publishes an EpisodeClaimDropped without a previous user.

        Args:
            episode: Episode to release
            user: Acting user

        Returns:
            The claim-free episode

        Raises:
            NotYourClaimError: If another user holds the claim
            NotAuthorizedError: If the policy denies "unclaim"
        """
        episode = await self.repository.lock_episode(episode)
        log = logger.bind(episode_guid=episode.guid, user_id=str(user.id))

        if self.is_claimed(episode) and not self.is_claimed_by(episode, user):
            claimant_id = str(episode.claim.user_id)
            log.warning("Drop rejected, episode claimed by another user", claimant_id=claimant_id)
            raise NotYourClaimError(
                episode_guid=episode.guid,
                user_id=str(user.id),
                claimant_id=claimant_id,
            )

        if not self.oracle.allows(user, UNCLAIM, episode):
            log.warning("Drop rejected by policy")
            raise NotAuthorizedError(
                UNCLAIM,
                message="Claim cannot be dropped",
                episode_guid=episode.guid,
                user_id=str(user.id),
            )

        return await self._drop(episode)

    # ============================================
    # Unconditional transitions
    # ============================================

    async def force_claim(self, episode: Episode, user: User) -> Episode:
        """Claim an episode for a user, ignoring policies and existing claims.

        Any existing claim is deleted first, including its timestamp.

        Args:
            episode: Episode to claim
            user: New claimant

        Returns:
            The claimed episode
        """
        episode = await self.repository.lock_episode(episode)
        return await self._claim(episode, user)

    async def force_drop(self, episode: Episode) -> Episode:
        """Remove any claim from an episode, ignoring policies and ownership.

        Args:
            episode: Episode to release

        Returns:
            The claim-free episode
        """
        episode = await self.repository.lock_episode(episode)
        return await self._drop(episode)

    async def _claim(self, episode: Episode, user: User) -> Episode:
        claimed_at = self.clock()
        await self.repository.replace_claim(episode, user, claimed_at)

        logger.info(
            "Episode claimed",
            episode_guid=episode.guid,
            user_id=str(user.id),
            claimed_at=claimed_at.isoformat(),
        )
        await self.events.publish(
            EpisodeClaimed(episode=episode, user=user, occurred_at=claimed_at)
        )
        return episode

    async def _drop(self, episode: Episode) -> Episode:
        previous_user = episode.claim.user if episode.claim is not None else None
        await self.repository.delete_claim(episode)

        logger.info(
            "Episode claim dropped",
            episode_guid=episode.guid,
            previous_user_id=str(previous_user.id) if previous_user else None,
        )
        await self.events.publish(
            EpisodeClaimDropped(
                episode=episode, previous_user=previous_user, occurred_at=self.clock()
            )
        )
        return episode


__all__ = [
    "CLAIM",
    "UNCLAIM",
    "ClaimCoordinator",
]
