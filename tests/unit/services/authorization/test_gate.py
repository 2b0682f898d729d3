"""Unit tests for the authorization gate and episode policy."""

from datetime import UTC, datetime
from types import SimpleNamespace

import pytest

from themenschaedel.core.config import Config
from themenschaedel.services.authorization import (
    AuthorizationOracle,
    EpisodePolicy,
    Gate,
    create_gate,
)


def make_user(**overrides) -> SimpleNamespace:
    attrs = {
        "is_admin": False,
        "is_banned": False,
        "email_verified_at": datetime.now(UTC),
    }
    attrs.update(overrides)
    user = SimpleNamespace(**attrs)
    user.is_verified = user.email_verified_at is not None
    return user


EPISODE = SimpleNamespace(guid="ep-1")


@pytest.mark.unit
class TestGate:
    """Tests for Gate."""

    def test_gate_is_authorization_oracle(self) -> None:
        assert isinstance(Gate(), AuthorizationOracle)

    def test_undefined_ability_is_denied(self) -> None:
        gate = Gate(admin_bypass=True)

        assert gate.allows(make_user(is_admin=True), "publish", EPISODE) is False
        assert gate.denies(make_user(), "publish", EPISODE) is True

    def test_callback_decides(self) -> None:
        gate = Gate()
        gate.define("claim", lambda user, episode: episode.guid == "ep-1")

        assert gate.has("claim")
        assert gate.allows(make_user(), "claim", EPISODE) is True
        assert gate.allows(make_user(), "claim", SimpleNamespace(guid="ep-2")) is False

    def test_admin_bypass(self) -> None:
        gate = Gate(admin_bypass=True)
        gate.define("claim", lambda user, episode: False)

        assert gate.allows(make_user(is_admin=True), "claim", EPISODE) is True
        assert gate.allows(make_user(), "claim", EPISODE) is False

    def test_admin_bypass_disabled(self) -> None:
        gate = Gate(admin_bypass=False)
        gate.define("claim", lambda user, episode: False)

        assert gate.allows(make_user(is_admin=True), "claim", EPISODE) is False


@pytest.mark.unit
class TestEpisodePolicy:
    """Tests for EpisodePolicy."""

    @pytest.mark.parametrize(
        ("overrides", "expected"),
        [
            ({}, True),
            ({"is_banned": True}, False),
            ({"email_verified_at": None}, False),
        ],
    )
    def test_claim(self, overrides, expected) -> None:
        policy = EpisodePolicy(require_verified_email=True)
        assert policy.claim(make_user(**overrides), EPISODE) is expected

    def test_claim_without_verification_requirement(self) -> None:
        policy = EpisodePolicy(require_verified_email=False)
        assert policy.claim(make_user(email_verified_at=None), EPISODE) is True

    def test_unclaim(self) -> None:
        policy = EpisodePolicy()
        assert policy.unclaim(make_user(), EPISODE) is True
        assert policy.unclaim(make_user(is_banned=True), EPISODE) is False
        # Verification is only required to take a claim
        assert policy.unclaim(make_user(email_verified_at=None), EPISODE) is True


@pytest.mark.unit
class TestCreateGate:
    """Tests for create_gate."""

    def test_registers_claim_abilities(self) -> None:
        gate = create_gate(Config(_env_file=None))

        assert gate.has("claim")
        assert gate.has("unclaim")

    def test_uses_config(self) -> None:
        config = Config(_env_file=None, admin_bypass=False, claim_requires_verified_email=False)
        gate = create_gate(config)

        assert gate.admin_bypass is False
        assert gate.allows(make_user(email_verified_at=None), "claim", EPISODE) is True
        assert gate.allows(make_user(is_admin=True, is_banned=True), "claim", EPISODE) is False
