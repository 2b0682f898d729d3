"""User ORM model.

Users are external identities. The claim workflow references them but
never changes them.
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from themenschaedel.models.base import Base, TimestampMixin, UUIDMixin


class User(Base, UUIDMixin, TimestampMixin):
    """A registered community member.

    Attributes:
        name: Display name
        email: Unique email address
        email_verified_at: When the email address was verified, if ever
        is_admin: Whether the user moderates the site
        is_banned: Whether the user is locked out of community features
    """

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    email_verified_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_banned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    @property
    def is_verified(self) -> bool:
        """Whether the user has verified their email address."""
        return self.email_verified_at is not None

    def __repr__(self) -> str:
        """String representation."""
        return f"<User(id={self.id}, name={self.name})>"


__all__ = [
    "User",
]
