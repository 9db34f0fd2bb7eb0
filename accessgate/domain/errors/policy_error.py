"""Policy engine and policy store errors.

Operational failures, not security decisions: a PolicyError means the system
could not decide, and the HTTP layer answers 500 rather than 403.

Codes:
    POLICY_ENGINE_NOT_INITIALIZED  engine used before load() succeeded
    POLICY_STORE_READ_FAILED       backing file/table missing or malformed
    POLICY_STORE_WRITE_FAILED      persisting a mutation failed
"""

from dataclasses import dataclass

from accessgate.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class PolicyError(DomainError):
    """Policy engine/store failure.

    Attributes:
        operation: Engine or store operation that failed (e.g. "save").
    """

    operation: str | None = None
