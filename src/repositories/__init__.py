"""
Database repositories for the User Access Service.

This module exports all repository classes for database operations.
"""

from src.repositories.access_level_repository import AccessLevelRepository
from src.repositories.account_repository import AccountRepository
from src.repositories.base import BaseRepository, wrap_persistence_errors
from src.repositories.ports import AccessLevelRepositoryPort, AccountRepositoryPort

__all__ = [
    "BaseRepository",
    "wrap_persistence_errors",
    "AccountRepository",
    "AccessLevelRepository",
    "AccountRepositoryPort",
    "AccessLevelRepositoryPort",
]
