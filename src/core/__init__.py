"""
Core module for the User Access Service.

Exports the main configuration, database, security, and logging components.
"""

from src.core.config import settings
from src.core.database import (
    check_database_connection,
    close_database_connection,
    create_database_engine,
    create_session_factory,
    get_db,
)
from src.core.security import hash_password, verify_password

__all__ = [
    # Config
    "settings",
    # Database
    "create_database_engine",
    "create_session_factory",
    "get_db",
    "check_database_connection",
    "close_database_connection",
    # Security
    "hash_password",
    "verify_password",
]
