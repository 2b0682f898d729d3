"""Claim ORM model.

A claim records that one user has taken exclusive ownership of one
episode for editing. Claims are never updated in place: a change of
claimant deletes the old row and inserts a new one.
"""

import uuid
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from themenschaedel.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from themenschaedel.models.episode import Episode
    from themenschaedel.models.user import User


class Claim(Base, UUIDMixin, TimestampMixin):
    """Exclusive, time-stamped ownership of an episode.

    The unique constraint on ``episode_id`` backs up the rule that an
    episode has at most one claim at any time.

    Attributes:
        episode_id: Foreign key to episodes table (one-to-one)
        user_id: Foreign key to users table
        claimed_at: When the claim was taken
        episode: The claimed episode
        user: The claimant
    """

    __tablename__ = "claims"

    episode_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("episodes.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
        index=True,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    claimed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Relationships
    episode: Mapped["Episode"] = relationship("Episode", back_populates="claim")
    user: Mapped["User"] = relationship("User", lazy="joined")

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Claim(id={self.id}, episode_id={self.episode_id}, "
            f"user_id={self.user_id}, claimed_at={self.claimed_at})>"
        )


__all__ = [
    "Claim",
]
