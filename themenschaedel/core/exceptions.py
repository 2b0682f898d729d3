"""Exception hierarchy of the Themenschaedel backend.

Every error raised by the application derives from ThemenschaedelError and
carries a ``context`` dict that is passed straight to structured log calls
and to the JSON error body of the API.

Claim errors additionally carry a stable ``error_code`` so callers can tell
"someone else holds the claim" apart from "the policy said no".
"""

from typing import Any


class ThemenschaedelError(Exception):
    """Root of all application errors.

    Attributes:
        context: Structured details about the failure

    Example:
        >>> error = ThemenschaedelError("Lookup failed", context={"guid": "ep-1"})
        >>> error.with_context(attempt=2).to_dict()["context"]
        {'guid': 'ep-1', 'attempt': 2}
    """

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        self.context = context or {}
        super().__init__(message)

    def with_context(self, **kwargs: Any) -> "ThemenschaedelError":
        """Merge extra details into the context and return self."""
        self.context.update(kwargs)
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialize the error for logs and API responses.

        Returns:
            Dictionary with error type, message and context
        """
        return {
            "error_type": self.__class__.__name__,
            "message": str(self),
            "context": self.context,
        }


# ============================================
# Storage
# ============================================


class DatabaseError(ThemenschaedelError):
    """Base class for storage lookups that cannot be satisfied."""


class RecordNotFoundError(DatabaseError):
    """Raised when a row looked up by id or guid does not exist.

    Attributes:
        model: Name of the queried model
        record_id: The id or guid that was looked up
    """

    def __init__(
        self,
        model: str,
        record_id: str,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        ctx.update({"model": model, "record_id": record_id})
        super().__init__(f"{model} with id={record_id} not found", context=ctx)
        self.model = model
        self.record_id = record_id


# ============================================
# Claims
# ============================================


class ClaimError(ThemenschaedelError):
    """Base exception for rejected claim transitions.

    Claim errors are recoverable by the caller. When one is raised the
    episode's claim state is unchanged and no event was published.

    Attributes:
        episode_guid: GUID of the episode the transition targeted
        user_id: ID of the acting user
        error_code: Stable machine-readable code
    """

    error_code = "CLAIM_ERROR"

    def __init__(
        self,
        message: str,
        episode_guid: str | None = None,
        user_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        """Initialize ClaimError.

        Args:
            message: Error message
            episode_guid: GUID of the episode
            user_id: ID of the acting user
            context: Additional context
        """
        ctx = context or {}
        ctx["error_code"] = self.error_code
        if episode_guid:
            ctx["episode_guid"] = episode_guid
        if user_id:
            ctx["user_id"] = user_id

        self.episode_guid = episode_guid
        self.user_id = user_id

        super().__init__(message, context=ctx)


class _ForeignClaimError(ClaimError):
    """A transition that collided with another user's claim."""

    def __init__(
        self,
        message: str = "Episode is claimed by someone else",
        episode_guid: str | None = None,
        user_id: str | None = None,
        claimant_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        if claimant_id:
            ctx["claimant_id"] = claimant_id
        self.claimant_id = claimant_id
        super().__init__(message, episode_guid=episode_guid, user_id=user_id, context=ctx)


class AlreadyClaimedError(_ForeignClaimError):
    """Raised when claiming an episode that another user holds.

    Attributes:
        claimant_id: ID of the user currently holding the claim
    """

    error_code = "ALREADY_CLAIMED"


class NotYourClaimError(_ForeignClaimError):
    """Raised when dropping a claim that another user holds.

    Attributes:
        claimant_id: ID of the user currently holding the claim
    """

    error_code = "NOT_YOUR_CLAIM"


class NotAuthorizedError(ClaimError):
    """Raised when the authorization policy denies a claim or unclaim.

    Attributes:
        ability: The denied ability ("claim" or "unclaim")
    """

    error_code = "NOT_AUTHORIZED"

    def __init__(
        self,
        ability: str,
        message: str | None = None,
        episode_guid: str | None = None,
        user_id: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        ctx = context or {}
        ctx["ability"] = ability
        self.ability = ability
        super().__init__(
            message or f"Not authorized to {ability} this episode",
            episode_guid=episode_guid,
            user_id=user_id,
            context=ctx,
        )


__all__ = [
    "AlreadyClaimedError",
    "ClaimError",
    "DatabaseError",
    "NotAuthorizedError",
    "NotYourClaimError",
    "RecordNotFoundError",
    "ThemenschaedelError",
]
