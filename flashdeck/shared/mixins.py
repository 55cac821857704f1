"""SQLAlchemy model mixins shared by every table."""

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import Mapped, mapped_column

from .uuid7 import UUID7, uuid7


class UUIDMixin:
    """Mixin providing a store-generated UUID7 primary key.

    Example:
        class Deck(UUIDMixin, Base):
            __tablename__ = "decks"
            title: Mapped[str] = mapped_column(String(255))
    """

    id: Mapped[uuid.UUID] = mapped_column(
        UUID7,
        primary_key=True,
        default=uuid7,
        nullable=False,
    )


class TimestampMixin:
    """Mixin providing created_at and updated_at timestamps.

    created_at is written once on insert. updated_at is refreshed
    by the database on every UPDATE, and callers that need the new
    value before flushing can set it through ``touch()``.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    def touch(self) -> None:
        """Mark the record as modified right now."""
        self.updated_at = datetime.now(UTC)
