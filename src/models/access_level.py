"""
AccessLevel and AccountAccessLevel models.

This module defines:
- AccessLevel: named role definition (e.g. "admin", "viewer")
- AccountAccessLevel: many-to-many junction between Account and AccessLevel

Assignments are soft-deletable and revivable. The composite primary key
(account_id, access_level_id) holds at most one row per pair, whatever its
deleted_at value, and is the conflict target of the assignment upsert.
"""

import uuid
from typing import Optional

from sqlalchemy import ForeignKey, Index, Integer, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base
from src.models.mixins import SoftDeleteMixin, TimestampMixin


class AccessLevel(Base, TimestampMixin, SoftDeleteMixin):
    """
    Role definition.

    Attributes:
        id: Auto-incremented integer primary key
        name: Unique name among active access levels (1-50 characters)
        description: Optional free-text description
    """

    __tablename__ = "access_levels"
    __table_args__ = (
        Index(
            "uq_access_levels_name_active",
            "name",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(50), nullable=False)

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        """String representation of AccessLevel."""
        return f"AccessLevel(id={self.id}, name={self.name})"


class AccountAccessLevel(Base, TimestampMixin, SoftDeleteMixin):
    """
    Assignment of an AccessLevel to an Account.

    A row with deleted_at NULL means the account currently holds the role;
    a non-NULL deleted_at means it held it once and the role was removed.
    """

    __tablename__ = "account_access_levels"

    account_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    access_level_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("access_levels.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    def __repr__(self) -> str:
        """String representation of AccountAccessLevel."""
        return (
            f"AccountAccessLevel(account_id={self.account_id}, "
            f"access_level_id={self.access_level_id}, deleted_at={self.deleted_at})"
        )
