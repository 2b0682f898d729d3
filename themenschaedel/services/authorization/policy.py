"""Default authorization rules for episodes."""

from typing import TYPE_CHECKING

from themenschaedel.core.config import Config
from themenschaedel.services.authorization.gate import Gate

if TYPE_CHECKING:
    from themenschaedel.models.episode import Episode
    from themenschaedel.models.user import User


class EpisodePolicy:
    """Rules for the claim workflow.

    Who currently holds a claim is checked by the claim coordinator before
    the policy is consulted. The policy only decides whether the user is
    allowed to take part at all.

    Attributes:
        require_verified_email: Whether claiming needs a verified email
    """

    def __init__(self, require_verified_email: bool = True) -> None:
        self.require_verified_email = require_verified_email

    def claim(self, user: "User", episode: "Episode") -> bool:
        """Banned users, and unverified users when required, may not claim."""
        if user.is_banned:
            return False
        if self.require_verified_email and not user.is_verified:
            return False
        return True

    def unclaim(self, user: "User", episode: "Episode") -> bool:
        """Banned users may not drop claims."""
        return not user.is_banned

    def register(self, gate: Gate) -> None:
        """Define this policy's abilities on a gate.

        Args:
            gate: Gate to register on
        """
        gate.define("claim", self.claim)
        gate.define("unclaim", self.unclaim)


def create_gate(config: Config) -> Gate:
    """Build the application gate from configuration.

    Args:
        config: Application configuration

    Returns:
        Gate with the episode policy registered
    """
    gate = Gate(admin_bypass=config.admin_bypass)
    EpisodePolicy(require_verified_email=config.claim_requires_verified_email).register(gate)
    return gate


__all__ = [
    "EpisodePolicy",
    "create_gate",
]
