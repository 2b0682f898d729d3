"""Claim lifecycle events."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from themenschaedel.models.episode import Episode
    from themenschaedel.models.user import User


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass(frozen=True)
class DomainEvent:
    """Base class for events published by services."""

    name: ClassVar[str] = "domain_event"

    def to_payload(self) -> dict[str, Any]:
        """Serialize the event to a JSON-ready dictionary."""
        raise NotImplementedError


@dataclass(frozen=True)
class EpisodeClaimed(DomainEvent):
    """A user took ownership of an episode.

    Attributes:
        episode: The claimed episode
        user: The new claimant
        occurred_at: When the claim was taken
    """

    name: ClassVar[str] = "episode.claimed"

    episode: "Episode"
    user: "User"
    occurred_at: datetime = field(default_factory=_utcnow)

    def to_payload(self) -> dict[str, Any]:
        return {
            "episode_guid": self.episode.guid,
            "user_id": str(self.user.id),
            "occurred_at": self.occurred_at.isoformat(),
        }


@dataclass(frozen=True)
class EpisodeClaimDropped(DomainEvent):
    """The claim on an episode was removed.

    Attributes:
        episode: The now unclaimed episode
        previous_user: Who held the claim, or None if there was none
        occurred_at: When the claim was dropped
    """

    name: ClassVar[str] = "episode.claim_dropped"

    episode: "Episode"
    previous_user: "User | None" = None
    occurred_at: datetime = field(default_factory=_utcnow)

    def to_payload(self) -> dict[str, Any]:
        return {
            "episode_guid": self.episode.guid,
            "previous_user_id": str(self.previous_user.id) if self.previous_user else None,
            "occurred_at": self.occurred_at.isoformat(),
        }


__all__ = [
    "DomainEvent",
    "EpisodeClaimDropped",
    "EpisodeClaimed",
]
