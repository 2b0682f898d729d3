"""Read-only projections of models for the presentation layer."""

from themenschaedel.resources.episode import EpisodeResource, build_episode_resource

__all__ = [
    "EpisodeResource",
    "build_episode_resource",
]
