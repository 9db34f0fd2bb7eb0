"""Token verification protocol (port) for bearer credentials.

Usage:
    result = token_service.validate_access_token(token)
    match result:
        case Success(value=claims):
            subject = resolve_subject(claims)
        case Failure(error=error):
            # error.code is TOKEN_EXPIRED or TOKEN_INVALID
            ...
"""

from typing import Protocol

from accessgate.core.errors import AuthenticationError
from accessgate.core.result import Result
from accessgate.domain.value_objects import IdentityClaims


class TokenVerificationProtocol(Protocol):
    """Protocol for verifying bearer tokens.

    Verification is a pure function of the token and the configured key
    material: no I/O, no side effects.
    """

    def validate_access_token(
        self, token: str
    ) -> Result[IdentityClaims, AuthenticationError]:
        """Validate signature and time claims, then extract the user id.

        Returns:
            Success with IdentityClaims, or Failure with TOKEN_EXPIRED when
            the expiry is in the past and TOKEN_INVALID for anything else.
        """
        ...
