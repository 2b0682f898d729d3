"""Structured logging with structlog.

Production renders one JSON object per line; every other environment gets
the colored console renderer with call-site information. Claim transitions
log ``episode_guid`` and ``user_id`` as keys, so they can be filtered on
directly in either format.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from themenschaedel.core.config import Config, get_config


def add_app_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp every event with the application name and environment."""
    config = get_config()
    event_dict["app"] = config.app_name
    event_dict["env"] = config.app_env
    return event_dict


def _build_processors(config: Config) -> list[Processor]:
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
    ]

    if config.is_production:
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
        return processors

    processors += [
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.MODULE,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
        structlog.processors.format_exc_info,
        structlog.dev.ConsoleRenderer(colors=config.debug),
    ]
    return processors


def setup_logging(config: Config | None = None) -> None:
    """Configure structlog and the standard library root logger.

    Safe to call more than once; the last call wins.

    Args:
        config: Configuration to use (defaults to the global config)

    Example:
        >>> setup_logging()
        >>> get_logger(__name__).info("Episode claimed", episode_guid="ep-42")
    """
    config = config or get_config()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, config.log_level),
        force=True,
    )
    # SQL echo is controlled by database_echo; keep the engine logger quiet otherwise
    if not config.database_echo:
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    structlog.configure(
        processors=_build_processors(config),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger, usually called with ``__name__``."""
    return structlog.get_logger(name)


__all__ = [
    "add_app_context",
    "get_logger",
    "setup_logging",
]
