"""Domain events and their delivery.

Exports:
    - EpisodeClaimed / EpisodeClaimDropped: claim lifecycle events
    - EventSink: protocol the claim coordinator publishes to
    - EventDispatcher: in-process fan-out to registered listeners
    - RedisEventPublisher: listener forwarding events to Redis pub/sub
"""

from themenschaedel.services.events.dispatcher import (
    EventDispatcher,
    EventSink,
    create_event_dispatcher,
)
from themenschaedel.services.events.models import DomainEvent, EpisodeClaimDropped, EpisodeClaimed
from themenschaedel.services.events.redis_publisher import RedisEventPublisher

__all__ = [
    "DomainEvent",
    "EpisodeClaimDropped",
    "EpisodeClaimed",
    "EventDispatcher",
    "EventSink",
    "RedisEventPublisher",
    "create_event_dispatcher",
]
