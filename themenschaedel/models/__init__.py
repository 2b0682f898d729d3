"""SQLAlchemy ORM models.

Models are organized by feature:
- Users
- Episodes and their claims
- Topics and subtopics
- Community feedback (votes, flags)
"""

from themenschaedel.models.base import Base, TimestampMixin, UUIDMixin
from themenschaedel.models.claim import Claim
from themenschaedel.models.community import Flag, Vote
from themenschaedel.models.episode import Episode
from themenschaedel.models.topic import Subtopic, Topic
from themenschaedel.models.user import User

__all__ = [
    "Base",
    "UUIDMixin",
    "TimestampMixin",
    "User",
    "Episode",
    "Claim",
    "Topic",
    "Subtopic",
    "Vote",
    "Flag",
]
