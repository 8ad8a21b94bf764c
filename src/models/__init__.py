"""
Database models for the User Access Service.

This module exports all SQLAlchemy models and the declarative base.
Import models from this module to ensure proper initialization.
"""

from src.models.access_level import AccessLevel, AccountAccessLevel
from src.models.account import Account, Credential
from src.models.base import Base
from src.models.mixins import SoftDeleteMixin, TimestampMixin

__all__ = [
    # Base
    "Base",
    # Mixins
    "TimestampMixin",
    "SoftDeleteMixin",
    # Account models
    "Account",
    "Credential",
    # Access level models
    "AccessLevel",
    "AccountAccessLevel",
]
