"""Tests for themenschaedel.core.logging module."""

import logging

import pytest
import structlog

from themenschaedel.core.config import Config
from themenschaedel.core.logging import add_app_context, get_logger, setup_logging


@pytest.mark.unit
def test_setup_logging():
    """Test that setup_logging configures structlog."""
    setup_logging()

    logger = structlog.get_logger()
    assert hasattr(logger, "info")
    assert hasattr(logger, "error")


@pytest.mark.unit
def test_production_renders_json():
    """Test that production configuration ends in the JSON renderer."""
    setup_logging(Config(_env_file=None, app_env="production"))
    try:
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
    finally:
        setup_logging()


@pytest.mark.unit
def test_development_renders_console():
    """Test that development configuration uses the console renderer."""
    setup_logging(Config(_env_file=None, app_env="development"))

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)


@pytest.mark.unit
def test_sqlalchemy_logger_quiet_without_echo():
    """Test that the SQLAlchemy engine logger is raised to WARNING."""
    setup_logging(Config(_env_file=None, database_echo=False))

    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


@pytest.mark.unit
def test_logger_with_context():
    """Test logging with bound context variables."""
    setup_logging()

    logger = get_logger("test").bind(episode_guid="ep-1")

    # This should not raise
    logger.info("Episode claimed", user_id="123")
    logger.warning("Claim rejected", reason="policy")


@pytest.mark.unit
def test_add_app_context():
    """Test that app name and environment are added to events."""
    event = add_app_context(None, "info", {"event": "hello"})

    assert event["app"] == "Themenschaedel"
    assert "env" in event
