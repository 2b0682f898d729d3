"""Community feedback ORM models: votes and flags."""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Index, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from themenschaedel.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from themenschaedel.models.episode import Episode
    from themenschaedel.models.user import User


class Vote(Base, UUIDMixin, TimestampMixin):
    """An up or down vote on an episode.

    Each user votes at most once per episode.

    Attributes:
        episode_id: Foreign key to episodes table
        user_id: Foreign key to users table
        positive: True for an upvote, False for a downvote
    """

    __tablename__ = "votes"

    episode_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("episodes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    positive: Mapped[bool] = mapped_column(Boolean, nullable=False)

    episode: Mapped["Episode"] = relationship("Episode", back_populates="votes")
    user: Mapped["User"] = relationship("User")

    __table_args__ = (
        UniqueConstraint("episode_id", "user_id", name="uq_votes_episode_user"),
        Index("idx_vote_episode_positive", "episode_id", "positive"),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Vote(episode_id={self.episode_id}, user_id={self.user_id}, positive={self.positive})>"


class Flag(Base, UUIDMixin, TimestampMixin):
    """A report that something about an episode needs moderator attention.

    Attributes:
        episode_id: Foreign key to episodes table
        user_id: Foreign key to users table
        reason: Free-text reason given by the reporter
    """

    __tablename__ = "flags"

    episode_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("episodes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    reason: Mapped[str | None] = mapped_column(Text)

    episode: Mapped["Episode"] = relationship("Episode", back_populates="flags")
    user: Mapped["User"] = relationship("User")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Flag(episode_id={self.episode_id}, user_id={self.user_id})>"


__all__ = [
    "Flag",
    "Vote",
]
