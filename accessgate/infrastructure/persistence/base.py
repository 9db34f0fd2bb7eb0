"""Declarative base for database models.

Following hexagonal architecture:
- This is an infrastructure concern (database implementation detail)
- Domain value objects never inherit from it; stores map rows to and
  from ``PolicyState``
"""

from sqlalchemy.orm import DeclarativeBase


class BaseModel(DeclarativeBase):
    """Base class for all database models."""

    __abstract__ = True

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<{self.__class__.__name__}(id={getattr(self, 'id', None)})>"
