"""Domain value objects.

Usage:
    from accessgate.domain.value_objects import PolicyRule, Role, Subject
"""

from accessgate.domain.value_objects.identity_claims import IdentityClaims
from accessgate.domain.value_objects.policy_state import (
    LEGACY_ROLE_MARKER,
    GroupingRule,
    PolicyRule,
    PolicyState,
)
from accessgate.domain.value_objects.principal import (
    SUBJECT_PREFIX,
    Principal,
    Role,
    Subject,
    check_policy_text,
    parse_principal,
    resolve_subject,
)

__all__ = [
    "LEGACY_ROLE_MARKER",
    "SUBJECT_PREFIX",
    "GroupingRule",
    "IdentityClaims",
    "PolicyRule",
    "PolicyState",
    "Principal",
    "Role",
    "Subject",
    "check_policy_text",
    "parse_principal",
    "resolve_subject",
]
