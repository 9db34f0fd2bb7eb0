"""Policy store protocol (port) for durable role/policy persistence.

Implementations:
    - FilePolicyStore: CSV policy file, atomic temp-file + rename on save
    - SqlPolicyStore: casbin_rule table, single-transaction replace on save

Contract:
    - load() reads the whole state; a missing or malformed backing
      file/table is POLICY_STORE_READ_FAILED, a startup precondition.
    - save() atomically replaces the whole durable state; readers never see
      a partially written state. Failures are POLICY_STORE_WRITE_FAILED.
"""

from typing import Protocol

from accessgate.core.result import Result
from accessgate.domain.errors import PolicyError
from accessgate.domain.value_objects import PolicyState


class PolicyStoreProtocol(Protocol):
    """Protocol for durable policy storage."""

    async def load(self) -> Result[PolicyState, PolicyError]:
        """Read every policy, grouping and declared-role tuple."""
        ...

    async def save(self, state: PolicyState) -> Result[None, PolicyError]:
        """Atomically persist the full state."""
        ...

    async def close(self) -> None:
        """Release connections or handles held by the store."""
        ...
