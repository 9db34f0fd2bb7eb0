"""Authorization infrastructure: Casbin policy engine and policy stores.

Usage:
    from accessgate.infrastructure.authorization import (
        FilePolicyStore,
        PolicyEngine,
    )
"""

from accessgate.infrastructure.authorization.file_policy_store import (
    FilePolicyStore,
    PolicyFileFormatError,
)
from accessgate.infrastructure.authorization.policy_engine import PolicyEngine
from accessgate.infrastructure.authorization.policy_seeder import seed_policy_store
from accessgate.infrastructure.authorization.policy_snapshot import PolicySnapshot
from accessgate.infrastructure.authorization.sql_policy_store import SqlPolicyStore

__all__ = [
    "FilePolicyStore",
    "PolicyEngine",
    "PolicyFileFormatError",
    "PolicySnapshot",
    "SqlPolicyStore",
    "seed_policy_store",
]
