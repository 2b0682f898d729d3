"""Ability registry answering "may this user do X to this episode".

Example:
    >>> gate = Gate()
    >>> gate.define("claim", lambda user, episode: not user.is_banned)
    >>> gate.allows(user, "claim", episode)
    True
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from themenschaedel.core.logging import get_logger
from themenschaedel.core.types import AbilityCallback

if TYPE_CHECKING:
    from themenschaedel.models.episode import Episode
    from themenschaedel.models.user import User

logger = get_logger(__name__)


@runtime_checkable
class AuthorizationOracle(Protocol):
    """Decides whether a user may perform an ability on an episode."""

    def allows(self, user: "User", ability: str, episode: "Episode") -> bool:
        """Return True if the ability is granted."""
        ...


class Gate:
    """Registry of ability callbacks.

    Undefined abilities are denied. With ``admin_bypass`` enabled, admin
    users are granted every defined ability without consulting callbacks.

    Attributes:
        admin_bypass: Whether admins skip ability callbacks
    """

    def __init__(self, admin_bypass: bool = False) -> None:
        self.admin_bypass = admin_bypass
        self._abilities: dict[str, AbilityCallback] = {}

    def define(self, ability: str, callback: AbilityCallback) -> None:
        """Register the callback deciding an ability.

        Args:
            ability: Ability name (e.g. "claim")
            callback: Callable taking (user, episode) and returning a bool
        """
        self._abilities[ability] = callback

    def has(self, ability: str) -> bool:
        """Check whether an ability is defined."""
        return ability in self._abilities

    def allows(self, user: "User", ability: str, episode: "Episode") -> bool:
        """Check whether the user may perform the ability on the episode.

        Args:
            user: Acting user
            ability: Ability name
            episode: Target episode

        Returns:
            True if granted, False otherwise
        """
        callback = self._abilities.get(ability)
        if callback is None:
            logger.warning("Undefined ability denied", ability=ability)
            return False

        if self.admin_bypass and user.is_admin:
            return True

        return bool(callback(user, episode))

    def denies(self, user: "User", ability: str, episode: "Episode") -> bool:
        """Inverse of :meth:`allows`."""
        return not self.allows(user, ability, episode)


__all__ = [
    "AuthorizationOracle",
    "Gate",
]
