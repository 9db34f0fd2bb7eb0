"""Integration tests for JWT token service.

Architecture:
- Tests against real PyJWT (no mocking)
- Verifies Result type error handling
- Tests security properties (expiration, tampering, identifier claims)
"""

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from freezegun import freeze_time

from accessgate.core.enums import ErrorCode
from accessgate.core.result import Failure, Success
from accessgate.domain.errors import AuthenticationMessages
from accessgate.infrastructure.security.jwt_service import JWTService

SECRET = "x" * 32


def _sign(payload: dict, secret: str = SECRET) -> str:
    return jwt.encode(payload, secret, algorithm="HS256")


def _future() -> int:
    return int((datetime.now(UTC) + timedelta(minutes=5)).timestamp())


@pytest.mark.integration
class TestJWTServiceIntegration:
    # =========================================================================
    # Construction
    # =========================================================================

    def test_short_secret_rejected(self):
        with pytest.raises(ValueError, match="32 bytes"):
            JWTService(secret_key="short")

    # =========================================================================
    # Token Generation
    # =========================================================================

    def test_generated_token_round_trips(self):
        service = JWTService(secret_key=SECRET)

        token = service.generate_access_token(42, name="alice")
        result = service.validate_access_token(token)

        assert isinstance(result, Success)
        claims = result.value
        assert claims.user_id == "42"
        assert claims.token_id
        assert claims.issued_at is not None
        assert claims.expires_at > datetime.now(UTC)

    def test_generated_claims(self):
        service = JWTService(secret_key=SECRET)

        payload = jwt.decode(
            service.generate_access_token(7, name="bob"),
            SECRET,
            algorithms=["HS256"],
        )

        assert payload["user_id"] == 7
        assert payload["sub"] == "7"
        assert payload["name"] == "bob"
        assert {"iat", "nbf", "exp", "jti"} <= payload.keys()

    def test_expiration_uses_configured_minutes(self):
        service = JWTService(secret_key=SECRET, expiration_minutes=15)

        with freeze_time("2026-01-01 12:00:00"):
            claims = service.validate_access_token(
                service.generate_access_token(1)
            ).value

        assert claims.expires_at == datetime(2026, 1, 1, 12, 15, tzinfo=UTC)

    # =========================================================================
    # Expiry vs invalid
    # =========================================================================

    def test_expired_token(self):
        service = JWTService(secret_key=SECRET, expiration_minutes=15)

        with freeze_time("2026-01-01 12:00:00"):
            token = service.generate_access_token(1)
        with freeze_time("2026-01-01 12:16:00"):
            result = service.validate_access_token(token)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_EXPIRED
        assert result.error.message == AuthenticationMessages.EXPIRED_TOKEN

    def test_tampered_signature(self):
        service = JWTService(secret_key=SECRET)
        token = service.generate_access_token(1)
        header, payload, signature = token.split(".")
        tampered = f"{header}.{payload}.{signature[::-1]}"

        result = service.validate_access_token(tampered)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID
        assert result.error.message == AuthenticationMessages.INVALID_TOKEN

    def test_expired_and_invalid_messages_differ(self):
        assert AuthenticationMessages.EXPIRED_TOKEN != AuthenticationMessages.INVALID_TOKEN

    def test_token_signed_with_other_secret(self):
        token = _sign({"user_id": 1, "exp": _future()}, secret="y" * 32)

        result = JWTService(secret_key=SECRET).validate_access_token(token)

        assert result.error.code == ErrorCode.TOKEN_INVALID

    @pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
    def test_malformed_tokens(self, token):
        result = JWTService(secret_key=SECRET).validate_access_token(token)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID

    def test_token_without_exp_rejected(self):
        result = JWTService(secret_key=SECRET).validate_access_token(
            _sign({"user_id": 1})
        )

        assert result.error.code == ErrorCode.TOKEN_INVALID

    def test_not_yet_valid_token_rejected(self):
        token = _sign({"user_id": 1, "exp": _future(), "nbf": _future()})

        result = JWTService(secret_key=SECRET).validate_access_token(token)

        assert result.error.code == ErrorCode.TOKEN_INVALID

    # =========================================================================
    # User identifier extraction
    # =========================================================================

    def test_user_id_claim_preferred_over_sub(self):
        token = _sign({"user_id": 5, "sub": "other", "exp": _future()})

        assert JWTService(secret_key=SECRET).validate_access_token(token).value.user_id == "5"

    def test_sub_used_when_user_id_absent(self):
        token = _sign({"sub": "alice", "exp": _future()})

        assert (
            JWTService(secret_key=SECRET).validate_access_token(token).value.user_id
            == "alice"
        )

    def test_integral_float_user_id_accepted(self):
        token = _sign({"user_id": 3.0, "exp": _future()})

        assert JWTService(secret_key=SECRET).validate_access_token(token).value.user_id == "3"

    def test_name_alone_is_not_an_identity(self):
        token = _sign({"name": "admin", "exp": _future()})

        result = JWTService(secret_key=SECRET).validate_access_token(token)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID
        assert result.error.message == AuthenticationMessages.MISSING_USER_ID

    @pytest.mark.parametrize("value", [True, 1.5, "", " 7", "7 ", "7\n8"])
    def test_unusable_user_id_rejected(self, value):
        token = _sign({"user_id": value, "exp": _future()})

        result = JWTService(secret_key=SECRET).validate_access_token(token)

        assert isinstance(result, Failure)

    def test_padded_sub_is_not_the_same_user(self):
        token = _sign({"sub": " 7", "exp": _future()})

        result = JWTService(secret_key=SECRET).validate_access_token(token)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_INVALID
