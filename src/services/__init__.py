"""
Business logic services for the User Access Service.

This module exports all service classes.
"""

from src.services.access_level_service import AccessLevelService
from src.services.account_service import AccountService

__all__ = [
    "AccountService",
    "AccessLevelService",
]
