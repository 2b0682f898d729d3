"""Episode ORM model.

This module defines the Episode model, the top-level content unit that
can be claimed, voted on, flagged, and annotated with topics.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from themenschaedel.models.base import Base, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from themenschaedel.models.claim import Claim
    from themenschaedel.models.community import Flag, Vote
    from themenschaedel.models.topic import Subtopic, Topic


class Episode(Base, UUIDMixin, TimestampMixin):
    """An episode of the podcast.

    Episodes are looked up externally by their feed ``guid`` rather than
    by primary key.

    Attributes:
        guid: Globally unique identifier from the podcast feed
        episode_number: Running episode number
        title: Episode title
        subtitle: Optional subtitle
        description: Show notes
        image: Cover image URL
        media_file: Audio file URL
        duration: Duration as published in the feed (e.g. "01:23:45")
        type: Feed episode type ("full", "trailer", "bonus")
        explicit: Explicit content marker
        date_published: Publication date
        claim: The active claim, if any (zero or one)
        topics: Topics discussed, ordered by start time
        subtopics: Subtopics attached to this episode's topics
        votes: Community up/down votes
        flags: Community flags
    """

    __tablename__ = "episodes"

    guid: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    episode_number: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    subtitle: Mapped[str | None] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text)
    image: Mapped[str | None] = mapped_column(String(500))
    media_file: Mapped[str | None] = mapped_column(String(500))
    duration: Mapped[str | None] = mapped_column(String(20))
    type: Mapped[str | None] = mapped_column(String(20))
    explicit: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    date_published: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    # Relationships
    claim: Mapped[Optional["Claim"]] = relationship(
        "Claim",
        back_populates="episode",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    topics: Mapped[list["Topic"]] = relationship(
        "Topic",
        back_populates="episode",
        cascade="all, delete-orphan",
        order_by="Topic.start",
    )
    subtopics: Mapped[list["Subtopic"]] = relationship(
        "Subtopic",
        secondary="topics",
        primaryjoin="Episode.id == Topic.episode_id",
        secondaryjoin="Topic.id == Subtopic.topic_id",
        viewonly=True,
    )
    votes: Mapped[list["Vote"]] = relationship(
        "Vote", back_populates="episode", cascade="all, delete-orphan"
    )
    flags: Mapped[list["Flag"]] = relationship(
        "Flag", back_populates="episode", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("idx_episode_number", "episode_number"),)

    def __repr__(self) -> str:
        """String representation."""
        return f"<Episode(guid={self.guid}, number={self.episode_number}, title={self.title[:50]})>"


__all__ = [
    "Episode",
]
