"""Column mixins shared by the models.

UUIDMixin gives a client-generated UUID primary key, so ids are known before
the first flush. TimestampMixin adds database-maintained created/updated
timestamps.
"""

import uuid
from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from themenschaedel.core.database import Base


class UUIDMixin:
    """UUID primary key column ``id``."""

    @declared_attr
    @classmethod
    def id(cls) -> Mapped[uuid.UUID]:
        return mapped_column(primary_key=True, default=uuid.uuid4)


class TimestampMixin:
    """``created_at`` / ``updated_at`` columns filled by the database.

    ``updated_at`` is refreshed by SQLAlchemy on every ORM update of the row.
    """

    @declared_attr
    @classmethod
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(DateTime(timezone=True), server_default=func.now())

    @declared_attr
    @classmethod
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            server_default=func.now(),
            onupdate=func.now(),
        )


__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDMixin",
]
