"""Authentication error messages.

Human-readable messages paired with the TOKEN_* error codes. Expired and
invalid tokens carry different messages although both deny access.

Usage:
    from accessgate.domain.errors import AuthenticationMessages

    return Failure(error=AuthenticationError(
        code=ErrorCode.TOKEN_EXPIRED,
        message=AuthenticationMessages.EXPIRED_TOKEN,
    ))
"""


class AuthenticationMessages:
    """Authentication error message constants."""

    MISSING_TOKEN = "Token is missing"
    EXPIRED_TOKEN = "Token expired"
    INVALID_TOKEN = "Invalid token"
    MISSING_USER_ID = "Invalid token: no user identifier claim"
