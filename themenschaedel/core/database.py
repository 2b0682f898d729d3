"""Database layer: declarative base, engine construction and schema helpers.

The engine itself is owned by the DI container
(``container.infrastructure.db_engine``); the helpers here take it as an
argument so tests can run them against a throwaway SQLite engine.
"""

from typing import Any, ClassVar

from sqlalchemy import MetaData, text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from themenschaedel.core.config import Config
from themenschaedel.core.logging import get_logger

logger = get_logger(__name__)

# Constraint names must be deterministic so that the claims.episode_id
# unique constraint has the same name on every backend.
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=NAMING_CONVENTION)


class Base(DeclarativeBase):
    """Declarative base of every Themenschaedel model."""

    metadata: ClassVar[MetaData] = metadata


def create_engine_from_config(config: Config) -> AsyncEngine:
    """Create the async engine for the configured database.

    SQLite engines are created without pool sizing, which only applies
    to the PostgreSQL queue pool.

    Args:
        config: Application configuration

    Returns:
        Async SQLAlchemy engine
    """
    options: dict[str, Any] = {"echo": config.database_echo}
    if not config.is_sqlite:
        options.update(
            pool_size=config.database_pool_size,
            max_overflow=config.database_max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
    return create_async_engine(config.database_url, **options)


async def init_db(engine: AsyncEngine) -> None:
    """Create all tables that do not exist yet.

    Only used for development and tests; schema changes in production are
    managed outside the application.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema created", tables=len(Base.metadata.tables))


async def close_db(engine: AsyncEngine) -> None:
    """Dispose of all pooled connections."""
    await engine.dispose()
    logger.info("Database connections closed")


async def check_db_connection(engine: AsyncEngine) -> bool:
    """Check whether the database answers a trivial query.

    Returns:
        True if the query succeeded, False otherwise
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Database health check failed", error=str(e), exc_info=True)
        return False
    return True


__all__ = [
    "Base",
    "NAMING_CONVENTION",
    "check_db_connection",
    "close_db",
    "create_engine_from_config",
    "init_db",
    "metadata",
]
