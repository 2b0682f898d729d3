"""Forward domain events to a Redis pub/sub channel.

Other processes (websocket gateways, notification workers) subscribe to
the channel to react to claim changes.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from themenschaedel.core.logging import get_logger
from themenschaedel.services.events.models import DomainEvent

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = get_logger(__name__)


class RedisEventPublisher:
    """Event listener that publishes events as JSON messages.

    Message format::

        {"event": "episode.claimed", "episode_guid": "...", ...}

    Attributes:
        client: Async Redis client (from DI)
        channel: Pub/sub channel name
    """

    def __init__(self, client: Redis[Any], channel: str) -> None:
        """Initialize RedisEventPublisher.

        Args:
            client: Async Redis client
            channel: Channel to publish on
        """
        self.client = client
        self.channel = channel

    @staticmethod
    def serialize(event: DomainEvent) -> str:
        """Serialize an event to its wire message.

        Args:
            event: Event to serialize

        Returns:
            JSON string
        """
        return json.dumps({"event": event.name, **event.to_payload()})

    async def __call__(self, event: DomainEvent) -> None:
        """Publish the event on the channel.

        Args:
            event: Event to publish
        """
        receivers = await self.client.publish(self.channel, self.serialize(event))
        logger.debug(
            "Event published to Redis",
            event_name=event.name,
            channel=self.channel,
            receivers=receivers,
        )


__all__ = [
    "RedisEventPublisher",
]
