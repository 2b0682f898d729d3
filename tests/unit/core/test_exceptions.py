"""Tests for themenschaedel.core.exceptions module."""

import pytest

from themenschaedel.core.exceptions import (
    AlreadyClaimedError,
    ClaimError,
    DatabaseError,
    NotAuthorizedError,
    NotYourClaimError,
    RecordNotFoundError,
    ThemenschaedelError,
)


@pytest.mark.unit
def test_base_error():
    """Test base ThemenschaedelError exception."""
    error = ThemenschaedelError("Test error", context={"a": 1})
    assert str(error) == "Test error"
    assert error.with_context(b=2) is error
    assert error.to_dict() == {
        "error_type": "ThemenschaedelError",
        "message": "Test error",
        "context": {"a": 1, "b": 2},
    }


@pytest.mark.unit
def test_record_not_found():
    """Test RecordNotFoundError message and context."""
    error = RecordNotFoundError(model="Episode", record_id="ep-1")

    assert isinstance(error, DatabaseError)
    assert error.model == "Episode"
    assert str(error) == "Episode with id=ep-1 not found"
    assert error.context == {"model": "Episode", "record_id": "ep-1"}


@pytest.mark.unit
@pytest.mark.parametrize(
    ("error", "code"),
    [
        (AlreadyClaimedError(episode_guid="ep-1", user_id="u1", claimant_id="u2"), "ALREADY_CLAIMED"),
        (NotYourClaimError(episode_guid="ep-1", user_id="u1", claimant_id="u2"), "NOT_YOUR_CLAIM"),
        (NotAuthorizedError("claim", episode_guid="ep-1", user_id="u1"), "NOT_AUTHORIZED"),
    ],
)
def test_claim_errors_are_distinguishable(error, code):
    """Each claim error carries its own code and shared claim context."""
    assert isinstance(error, ClaimError)
    assert error.error_code == code
    assert error.context["error_code"] == code
    assert error.context["episode_guid"] == "ep-1"
    assert error.user_id == "u1"


@pytest.mark.unit
def test_foreign_claim_errors_report_claimant():
    """Test that collisions name the current claimant."""
    error = AlreadyClaimedError(episode_guid="ep-1", claimant_id="u2")

    assert str(error) == "Episode is claimed by someone else"
    assert error.claimant_id == "u2"
    assert error.to_dict()["context"]["claimant_id"] == "u2"
    assert not isinstance(error, NotYourClaimError)


@pytest.mark.unit
def test_not_authorized_default_message():
    """Test NotAuthorizedError derives its message from the ability."""
    error = NotAuthorizedError("unclaim")
    assert error.ability == "unclaim"
    assert str(error) == "Not authorized to unclaim this episode"
    assert error.context["ability"] == "unclaim"
