"""Episode lookup."""

from themenschaedel.services.episodes.repository import EpisodeRepository

__all__ = [
    "EpisodeRepository",
]
