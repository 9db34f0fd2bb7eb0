"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (VALIDATION_*, INVALID_*)
- Authentication errors (TOKEN_*)
- Authorization errors (PERMISSION_*)
- Policy engine and store errors (POLICY_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    INVALID_PRINCIPAL = "invalid_principal"

    # Authentication errors
    TOKEN_MISSING = "token_missing"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_INVALID = "token_invalid"

    # Authorization errors
    PERMISSION_DENIED = "permission_denied"

    # Policy engine / store errors
    POLICY_ENGINE_NOT_INITIALIZED = "policy_engine_not_initialized"
    POLICY_STORE_READ_FAILED = "policy_store_read_failed"
    POLICY_STORE_WRITE_FAILED = "policy_store_write_failed"
    POLICY_EVALUATION_FAILED = "policy_evaluation_failed"
