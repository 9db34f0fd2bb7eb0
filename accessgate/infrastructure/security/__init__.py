"""Credential verification (PyJWT)."""

from accessgate.infrastructure.security.jwt_service import JWTService

__all__ = ["JWTService"]
