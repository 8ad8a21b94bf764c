"""
API routes for the User Access Service.

This package contains all API endpoint definitions organized by feature.
"""

from src.api.routes import access_levels, accounts, auth, health

__all__ = ["access_levels", "accounts", "auth", "health"]
