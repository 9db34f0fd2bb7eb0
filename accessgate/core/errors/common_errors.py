"""Common error classes used across layers.

Error Types:
- ValidationError: Input validation failures
- AuthenticationError: Credential failures (missing, expired, invalid token)
- AuthorizationError: Policy denied the request

Usage:
    from accessgate.core.errors import AuthenticationError
    from accessgate.core.enums import ErrorCode
    from accessgate.core.result import Failure

    return Failure(error=AuthenticationError(
        code=ErrorCode.TOKEN_EXPIRED,
        message="Token expired",
    ))
"""

from dataclasses import dataclass

from accessgate.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure (missing, expired or invalid credential)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationError(DomainError):
    """Authorization failure (policy denied the request).

    Attributes:
        subject: Evaluated subject string.
        resource: Evaluated resource (request path).
        action: Evaluated action (request method).
    """

    subject: str
    resource: str
    action: str
