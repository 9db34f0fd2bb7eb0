"""Domain errors package.

Usage:
    from accessgate.domain.errors import AuthenticationMessages, PolicyError
"""

from accessgate.domain.errors.authentication_error import AuthenticationMessages
from accessgate.domain.errors.policy_error import PolicyError

__all__ = [
    "AuthenticationMessages",
    "PolicyError",
]
