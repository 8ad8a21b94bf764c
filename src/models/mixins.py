"""
Reusable mixins for database models.

This module provides mixins for common model patterns:
- TimestampMixin: created_at and updated_at timestamps
- SoftDeleteMixin: soft delete with deleted_at timestamp
"""

from datetime import UTC, datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, mapped_column


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


class TimestampMixin:
    """
    Mixin to add timestamp columns to models.

    Adds:
    - created_at: Timestamp when record was created (auto-set)
    - updated_at: Timestamp when record was last updated (auto-updated)

    Both timestamps use UTC timezone. Repositories also set them explicitly
    so the caller sees the values right after a write.

    Usage:
        class Account(Base, TimestampMixin):
            __tablename__ = "accounts"
            email: Mapped[str]
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        index=True,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )


class SoftDeleteMixin:
    """
    Mixin to add soft delete functionality to models.

    Adds:
    - deleted_at: Timestamp when record was soft-deleted (NULL if not deleted)

    Soft deleted records remain in the database but are filtered out from
    queries by BaseRepository._apply_soft_delete_filter.

    Querying with soft deletes:
        # Get only active records (deleted_at IS NULL)
        active = select(Account).where(Account.deleted_at.is_(None))

        # Get all records including deleted
        everything = select(Account)

    Unique constraints on soft-deletable models are partial indexes
    (WHERE deleted_at IS NULL) so a deleted row's value can be reused.
    """

    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        index=True,
    )

    @property
    def is_deleted(self) -> bool:
        """
        Check if this record has been soft deleted.

        Returns:
            True if deleted (deleted_at is set), False otherwise
        """
        return self.deleted_at is not None
