"""Core errors package.

Usage:
    from accessgate.core.errors import DomainError, AuthenticationError
"""

from accessgate.core.errors.common_errors import (
    AuthenticationError,
    AuthorizationError,
    ValidationError,
)
from accessgate.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
]
