"""Tests for themenschaedel.core.config module."""

import pytest
from pydantic import ValidationError

from themenschaedel.core.config import Config, get_config


@pytest.mark.unit
def test_config_default_values(monkeypatch):
    """Test that config has correct default values."""
    for var in ("DEBUG", "APP_NAME", "APP_ENV", "LOG_LEVEL", "ADMIN_BYPASS"):
        monkeypatch.delenv(var, raising=False)

    config = Config(_env_file=None)

    assert config.app_name == "Themenschaedel"
    assert config.app_env == "development"
    assert config.debug is False
    assert config.log_level == "INFO"
    assert config.admin_bypass is True
    assert config.claim_requires_verified_email is True
    assert config.publish_events_to_redis is False


@pytest.mark.unit
def test_config_environment_properties():
    """Test is_development / is_production properties."""
    config = Config(_env_file=None, app_env="development")
    assert config.is_development is True
    assert config.is_production is False

    config = Config(_env_file=None, app_env="production")
    assert config.is_development is False
    assert config.is_production is True


@pytest.mark.unit
def test_config_database_url_validation():
    """Test that database URL must use an async driver."""
    config = Config(_env_file=None, database_url="postgresql+asyncpg://u:p@localhost:5432/db")
    assert config.is_sqlite is False

    config = Config(_env_file=None, database_url="sqlite+aiosqlite:///./local.db")
    assert config.is_sqlite is True

    with pytest.raises(ValidationError):
        Config(_env_file=None, database_url="postgresql://u:p@localhost:5432/db")


@pytest.mark.unit
def test_config_reads_environment(monkeypatch):
    """Test that settings are loaded from environment variables."""
    monkeypatch.setenv("EVENT_CHANNEL", "custom:events")
    monkeypatch.setenv("CLAIM_REQUIRES_VERIFIED_EMAIL", "false")

    config = Config(_env_file=None)

    assert config.event_channel == "custom:events"
    assert config.claim_requires_verified_email is False


@pytest.mark.unit
def test_config_pool_size_constraints():
    """Test database pool size constraints."""
    with pytest.raises(ValidationError):
        Config(_env_file=None, database_pool_size=0)

    with pytest.raises(ValidationError):
        Config(_env_file=None, database_pool_size=100)


@pytest.mark.unit
def test_get_config_is_singleton():
    """Test that get_config returns the same instance."""
    assert get_config() is get_config()
