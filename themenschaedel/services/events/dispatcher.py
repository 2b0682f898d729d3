"""In-process event dispatcher.

Services publish domain events to an EventSink without knowing who
listens. The EventDispatcher is the default sink: it fans each event out
to the listeners registered for its type. Listeners may be plain callables
or coroutine functions; coroutines are awaited in turn.

Example:
    >>> dispatcher = EventDispatcher()
    >>> dispatcher.listen(EpisodeClaimed, lambda event: print(event.episode.guid))
    >>> await dispatcher.publish(EpisodeClaimed(episode=episode, user=user))
"""

import inspect
from collections import defaultdict
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from themenschaedel.core.config import Config
from themenschaedel.core.logging import get_logger
from themenschaedel.services.events.models import DomainEvent
from themenschaedel.services.events.redis_publisher import RedisEventPublisher

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = get_logger(__name__)

Listener = Callable[[DomainEvent], Awaitable[None] | None]


@runtime_checkable
class EventSink(Protocol):
    """Anything that accepts published domain events."""

    async def publish(self, event: DomainEvent) -> None:
        """Publish an event. Delivery failures are not raised to the caller."""
        ...


class EventDispatcher:
    """Fan out domain events to listeners registered by event type.

    Listeners run one after another in registration order. A listener that
    raises is logged and skipped so the remaining listeners and the
    publishing service are unaffected.
    """

    def __init__(self) -> None:
        self._listeners: dict[type[DomainEvent], list[Listener]] = defaultdict(list)

    def listen(self, event_type: type[DomainEvent], listener: Listener) -> None:
        """Register a listener for an event type.

        Args:
            event_type: Event class to listen for (subclasses are matched too)
            listener: Callable receiving the event
        """
        self._listeners[event_type].append(listener)

    def listeners_for(self, event: DomainEvent) -> list[Listener]:
        """Get the listeners that receive the given event.

        Args:
            event: Event instance

        Returns:
            Listeners registered for the event's type or any of its bases
        """
        matched: list[Listener] = []
        for event_type, listeners in self._listeners.items():
            if isinstance(event, event_type):
                matched.extend(listeners)
        return matched

    async def publish(self, event: DomainEvent) -> None:
        """Deliver an event to every matching listener.

        Args:
            event: Event to deliver
        """
        listeners = self.listeners_for(event)
        logger.info("Publishing event", event_name=event.name, listeners=len(listeners))

        for listener in listeners:
            try:
                result = listener(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(
                    "Event listener failed",
                    event_name=event.name,
                    listener=getattr(listener, "__qualname__", repr(listener)),
                    error=str(e),
                    exc_info=True,
                )


def create_event_dispatcher(
    config: Config, redis_client: "Redis[Any] | None" = None
) -> EventDispatcher:
    """Build the application event dispatcher.

    Args:
        config: Application configuration
        redis_client: Async Redis client, required when Redis publishing is enabled

    Returns:
        Dispatcher with the configured listeners registered
    """
    dispatcher = EventDispatcher()
    if config.publish_events_to_redis and redis_client is not None:
        dispatcher.listen(DomainEvent, RedisEventPublisher(redis_client, config.event_channel))
        logger.info("Forwarding domain events to Redis", channel=config.event_channel)
    return dispatcher


__all__ = [
    "EventDispatcher",
    "EventSink",
    "Listener",
    "create_event_dispatcher",
]
