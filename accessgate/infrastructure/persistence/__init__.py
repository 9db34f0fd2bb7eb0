"""Database persistence infrastructure.

This module provides:
- Base model for the policy table
- Database connection and session management
"""

from accessgate.infrastructure.persistence.base import BaseModel
from accessgate.infrastructure.persistence.database import Database

__all__ = [
    "BaseModel",
    "Database",
]
