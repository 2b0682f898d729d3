"""Callable signatures shared between the claim services and their tests."""

from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from themenschaedel.models.episode import Episode
    from themenschaedel.models.user import User

# Ability registered on the gate: (user, episode) -> allowed
AbilityCallback = Callable[["User", "Episode"], bool]

# Source of claim timestamps; must return timezone-aware datetimes
Clock = Callable[[], datetime]

__all__ = [
    "AbilityCallback",
    "Clock",
]
