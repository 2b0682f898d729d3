"""Dependency injection container.

Shared objects (engine, Redis client, gate, event dispatcher) are
Singletons. Anything bound to a database session (repositories, the claim
coordinator) is a Factory and must be built per unit of work.

Usage:
    from themenschaedel.core.container import build_claim_coordinator, get_db_session

    @router.post("/episodes/{guid}/claim")
    async def claim(guid: str, session: AsyncSession = Depends(get_db_session)):
        coordinator = build_claim_coordinator(session)
        ...

    # Tests
    with override_event_sink(recording_sink):
        coordinator = build_claim_coordinator(session)
"""

from collections.abc import AsyncGenerator
from typing import Any

from dependency_injector import containers, providers
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from themenschaedel.core.config import Config, get_config
from themenschaedel.core.database import create_engine_from_config
from themenschaedel.services.authorization.policy import create_gate
from themenschaedel.services.claims.coordinator import ClaimCoordinator
from themenschaedel.services.claims.repository import ClaimRepository
from themenschaedel.services.events.dispatcher import create_event_dispatcher


class InfrastructureContainer(containers.DeclarativeContainer):
    """Database and Redis."""

    global_config = providers.Dependency(instance_of=Config)

    # Async client: events are published from inside request handlers
    redis_client = providers.Singleton(
        Redis.from_url,
        url=global_config.provided.redis_url,
        encoding="utf-8",
        decode_responses=True,
        socket_connect_timeout=5,
    )

    db_engine = providers.Singleton(create_engine_from_config, config=global_config)

    db_session_factory = providers.Singleton(
        async_sessionmaker,
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    db_session = providers.Factory(
        lambda factory: factory(),
        factory=db_session_factory,
    )


class ServiceContainer(containers.DeclarativeContainer):
    """Claim workflow services."""

    global_config = providers.Dependency(instance_of=Config)
    infrastructure = providers.DependenciesContainer()

    gate = providers.Singleton(create_gate, config=global_config)

    event_dispatcher = providers.Singleton(
        create_event_dispatcher,
        config=global_config,
        redis_client=infrastructure.redis_client,
    )

    claim_repository = providers.Factory(ClaimRepository)

    claim_coordinator = providers.Factory(
        ClaimCoordinator,
        oracle=gate,
        events=event_dispatcher,
    )


class ApplicationContainer(containers.DeclarativeContainer):
    """Root container wiring config, infrastructure and services."""

    # get_config() so the container and plain imports share one Config
    config = providers.Singleton(get_config)

    infrastructure = providers.Container(
        InfrastructureContainer,
        global_config=config,
    )

    services = providers.Container(
        ServiceContainer,
        global_config=config,
        infrastructure=infrastructure,
    )


def create_container() -> ApplicationContainer:
    return ApplicationContainer()


container = create_container()


def get_container() -> ApplicationContainer:
    """FastAPI dependency returning the global container."""
    return container


def get_redis() -> "Redis[Any]":
    """Return the shared async Redis client."""
    return container.infrastructure.redis_client()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding the request's unit of work.

    Commits when the request handler returns and rolls back if it raises.
    Claim transitions only flush, so this is where they become visible to
    other sessions.
    """
    session = container.infrastructure.db_session()
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()


def build_claim_coordinator(session: AsyncSession) -> ClaimCoordinator:
    """Create a claim coordinator bound to a session.

    Args:
        session: Session of the current unit of work

    Returns:
        ClaimCoordinator using the shared gate and event dispatcher
    """
    repository = container.services.claim_repository(session=session)
    return container.services.claim_coordinator(repository=repository)


def override_db_session(session: Any):
    """Context manager replacing the session handed out by get_db_session."""
    return container.infrastructure.db_session.override(session)


def override_event_sink(sink: Any):
    """Context manager replacing the event dispatcher of new coordinators."""
    return container.services.event_dispatcher.override(sink)


__all__ = [
    "ApplicationContainer",
    "InfrastructureContainer",
    "ServiceContainer",
    "build_claim_coordinator",
    "container",
    "create_container",
    "get_container",
    "get_db_session",
    "get_redis",
    "override_db_session",
    "override_event_sink",
]
