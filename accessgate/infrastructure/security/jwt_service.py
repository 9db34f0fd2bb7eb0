"""JWT token service (credential verifier).

Implements TokenVerificationProtocol using PyJWT with an HMAC secret.

Architecture:
    - Implements TokenVerificationProtocol (no inheritance required)
    - Built by the container from Settings and injected via app.state

Security:
    - HMAC-SHA256 (HS256) by default, 256-bit secret minimum
    - Signature, ``exp`` (required) and ``nbf`` (when present) are validated
    - Expired tokens are reported separately from every other failure

Identity:
    The user identifier comes from the ``user_id`` claim (integer or text).
    When it is absent the registered ``sub`` claim is used instead. Tokens
    carrying neither are rejected; no identifier is ever guessed from a
    display name.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError
from uuid_extensions import uuid7

from accessgate.core.enums import ErrorCode
from accessgate.core.errors import AuthenticationError
from accessgate.core.result import Failure, Result, Success
from accessgate.domain.errors import AuthenticationMessages
from accessgate.domain.value_objects import IdentityClaims, check_policy_text


class JWTService:
    """JWT token generation and validation service.

    Usage:
        service = JWTService(secret_key=settings.secret_key)

        token = service.generate_access_token(user_id=1, name="alice")

        match service.validate_access_token(token):
            case Success(value=claims):
                subject = resolve_subject(claims)
            case Failure(error=error):
                ...
    """

    def __init__(
        self,
        secret_key: str,
        expiration_minutes: int = 180,
        algorithm: str = "HS256",
    ) -> None:
        """Initialize JWT service.

        Args:
            secret_key: Secret key for HMAC signing.
                MUST be at least 256 bits (32 bytes).
            expiration_minutes: Default token lifetime in minutes.
            algorithm: JWT signing algorithm.

        Raises:
            ValueError: If secret_key is too short (< 32 bytes).
        """
        if len(secret_key) < 32:
            msg = "JWT secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._expiration_minutes = expiration_minutes
        self._algorithm = algorithm

    def generate_access_token(
        self,
        user_id: int | str,
        *,
        name: str | None = None,
        expires_in: timedelta | None = None,
    ) -> str:
        """Generate a signed access token.

        Args:
            user_id: User identifier, stored in both ``user_id`` and ``sub``.
            name: Optional display name claim.
            expires_in: Lifetime override (negative values yield an already
                expired token, which tests rely on).

        Returns:
            JWT access token string.
        """
        now = datetime.now(UTC)
        lifetime = expires_in or timedelta(minutes=self._expiration_minutes)

        payload: dict[str, Any] = {
            "user_id": user_id,
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "nbf": int(now.timestamp()),
            "exp": int((now + lifetime).timestamp()),
            "jti": str(uuid7()),
        }
        if name is not None:
            payload["name"] = name

        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token

    def validate_access_token(
        self, token: str
    ) -> Result[IdentityClaims, AuthenticationError]:
        """Validate a token and extract its identity claims.

        Args:
            token: Raw bearer token.

        Returns:
            Success with IdentityClaims, or Failure with TOKEN_EXPIRED /
            TOKEN_INVALID.
        """
        try:
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["exp"]},
            )
        except ExpiredSignatureError:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_EXPIRED,
                    message=AuthenticationMessages.EXPIRED_TOKEN,
                )
            )
        except InvalidTokenError:
            # Bad signature, malformed payload, missing exp, immature nbf
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_INVALID,
                    message=AuthenticationMessages.INVALID_TOKEN,
                )
            )

        user_id = _extract_user_id(payload)
        if user_id is None:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_INVALID,
                    message=AuthenticationMessages.MISSING_USER_ID,
                )
            )

        issued_at_raw = payload.get("iat")
        jti_raw = payload.get("jti")
        return Success(
            value=IdentityClaims(
                user_id=user_id,
                expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
                issued_at=(
                    datetime.fromtimestamp(issued_at_raw, tz=UTC)
                    if isinstance(issued_at_raw, (int, float))
                    else None
                ),
                token_id=str(jti_raw) if jti_raw else None,
            )
        )


def _extract_user_id(payload: dict[str, Any]) -> str | None:
    """Return the canonical user id from ``user_id`` or, failing that, ``sub``."""
    for claim in ("user_id", "sub"):
        value = payload.get(claim)
        if isinstance(value, bool) or value is None:
            continue
        if isinstance(value, float):
            # Numeric claims serialised by other stacks may arrive as floats
            if not value.is_integer():
                continue
            value = int(value)
        if isinstance(value, int):
            return str(value)
        if isinstance(value, str):
            try:
                check_policy_text(value, claim)
            except ValueError:
                # Empty, padded or control-character ids
                continue
            return value
    return None
