"""
Account and Credential models.

This module defines:
- Account: user profile record (name, email, phone)
- Credential: password hash paired 1:1 with an Account

Architecture:
- An Account is always created together with its Credential in one
  transaction (see AccountRepository.create)
- Credentials are owned by their Account (ON DELETE CASCADE) and are never
  serialized into API responses
- Email uniqueness only applies among non-deleted accounts, so a soft-deleted
  account's email can be registered again
"""

import uuid
from typing import Optional

from sqlalchemy import ForeignKey, Index, String, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base
from src.models.mixins import SoftDeleteMixin, TimestampMixin


# =============================================================================
# Account Model
# =============================================================================


class Account(Base, TimestampMixin, SoftDeleteMixin):
    """
    Account model for user profile management.

    Attributes:
        id: UUID primary key (generated at creation, immutable)
        first_name: Given name (1-50 characters)
        last_name: Family name (1-50 characters)
        email: Email address, unique among active accounts
        phone_number: Optional phone number (up to 20 characters)
        created_at: When the account was created
        updated_at: When the account was last updated
        deleted_at: When the account was soft-deleted (NULL if active)
    """

    __tablename__ = "accounts"
    __table_args__ = (
        Index(
            "uq_accounts_email_active",
            "email",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # Profile fields
    first_name: Mapped[str] = mapped_column(String(50), nullable=False)
    last_name: Mapped[str] = mapped_column(String(50), nullable=False)

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
    )

    phone_number: Mapped[Optional[str]] = mapped_column(
        String(20),
        nullable=True,
    )

    def __repr__(self) -> str:
        """String representation of Account."""
        return f"Account(id={self.id}, email={self.email})"


# =============================================================================
# Credential Model
# =============================================================================


class Credential(Base, TimestampMixin, SoftDeleteMixin):
    """
    Password credential for an Account.

    Attributes:
        id: UUID primary key
        account_id: Owning account (unique, cascade on delete)
        password_hash: Argon2id hash (never the plain password)
        created_at / updated_at / deleted_at: lifecycle timestamps
    """

    __tablename__ = "credentials"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    account_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        unique=True,
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    def __repr__(self) -> str:
        """String representation of Credential (hash omitted)."""
        return f"Credential(id={self.id}, account_id={self.account_id})"
