"""Topic and Subtopic ORM models.

Topics mark the sections of an episode; subtopics are finer-grained
points discussed within a topic.
"""

import uuid
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from themenschaedel.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from themenschaedel.models.episode import Episode


class Topic(Base, UUIDMixin, TimestampMixin):
    """A single topic discussed in an episode.

    Attributes:
        episode_id: Foreign key to episodes table
        name: Name of the topic
        start: Seconds into the episode where the topic starts
        end: Seconds into the episode where the topic ends
        ad: Whether this section is an ad
        community_contribution: Whether the community suggested the topic
            rather than the hosts
        episode: The episode the topic belongs to
        subtopics: Subtopics discussed in this section
    """

    __tablename__ = "topics"

    episode_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("episodes.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    start: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    end: Mapped[int | None] = mapped_column(Integer)
    ad: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    community_contribution: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    episode: Mapped["Episode"] = relationship("Episode", back_populates="topics")
    subtopics: Mapped[list["Subtopic"]] = relationship(
        "Subtopic", back_populates="topic", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("idx_topic_episode_start", "episode_id", "start"),)

    @property
    def length(self) -> int | None:
        """Length of the section in seconds, if the end is known."""
        if self.end is None:
            return None
        return self.end - self.start

    def __repr__(self) -> str:
        """String representation."""
        return f"<Topic(id={self.id}, name={self.name[:50]}, start={self.start})>"


class Subtopic(Base, UUIDMixin, TimestampMixin):
    """A point discussed within a topic."""

    __tablename__ = "subtopics"

    topic_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("topics.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    topic: Mapped["Topic"] = relationship("Topic", back_populates="subtopics")

    def __repr__(self) -> str:
        """String representation."""
        return f"<Subtopic(id={self.id}, name={self.name[:50]})>"


__all__ = [
    "Subtopic",
    "Topic",
]
