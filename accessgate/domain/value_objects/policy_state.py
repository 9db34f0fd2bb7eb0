"""Immutable policy state: permission rules, role assignments, declared roles.

PolicyState is the unit the policy store loads and saves and the unit the
policy engine swaps atomically. Every mutator returns a new instance; rule
order is insertion order and rules are de-duplicated.

Tuples:
    PolicyRule   (principal, resource, action)   permission grant
    GroupingRule (subject, role)                 role membership, one level
    declared roles                               roles created explicitly,
                                                 independent of any grant
"""

from dataclasses import dataclass, field

from accessgate.domain.value_objects.principal import (
    Principal,
    Role,
    Subject,
    check_policy_text,
)

# (resource, action) once used to mark a role with no permissions. Still read
# from old policy files, so it can never be a real grant.
LEGACY_ROLE_MARKER = ("/__placeholder__", "NONE")


@dataclass(frozen=True, slots=True)
class PolicyRule:
    """Permission grant ``(principal, resource, action)``."""

    principal: Principal
    resource: str
    action: str

    def __post_init__(self) -> None:
        check_policy_text(self.resource, "Policy rule resource")
        check_policy_text(self.action, "Policy rule action")
        if (self.resource, self.action) == LEGACY_ROLE_MARKER:
            raise ValueError(
                f"Policy rule {self.resource!r} {self.action!r} is reserved"
            )

    def as_row(self) -> tuple[str, str, str]:
        return (self.principal.key, self.resource, self.action)


@dataclass(frozen=True, slots=True)
class GroupingRule:
    """Role membership ``(subject, role)``."""

    subject: Subject
    role: Role

    def as_row(self) -> tuple[str, str]:
        return (self.subject.key, self.role.key)


@dataclass(frozen=True, slots=True)
class PolicyState:
    """Snapshot of every durable authorization tuple.

    Attributes:
        policies: Permission grants in insertion order.
        groupings: Role memberships in insertion order.
        declared_roles: Roles created via create_role, in insertion order.
    """

    policies: tuple[PolicyRule, ...] = field(default_factory=tuple)
    groupings: tuple[GroupingRule, ...] = field(default_factory=tuple)
    declared_roles: tuple[Role, ...] = field(default_factory=tuple)

    @classmethod
    def build(
        cls,
        policies: list[PolicyRule] | tuple[PolicyRule, ...] = (),
        groupings: list[GroupingRule] | tuple[GroupingRule, ...] = (),
        declared_roles: list[Role] | tuple[Role, ...] = (),
    ) -> "PolicyState":
        """Create a state, dropping duplicates while keeping first-seen order."""
        return cls(
            policies=tuple(dict.fromkeys(policies)),
            groupings=tuple(dict.fromkeys(groupings)),
            declared_roles=tuple(dict.fromkeys(declared_roles)),
        )

    @property
    def is_empty(self) -> bool:
        return not (self.policies or self.groupings or self.declared_roles)

    def all_roles(self) -> frozenset[Role]:
        """Roles named by grants, memberships, or declarations."""
        roles: set[Role] = set(self.declared_roles)
        roles.update(
            rule.principal for rule in self.policies if isinstance(rule.principal, Role)
        )
        roles.update(grouping.role for grouping in self.groupings)
        return frozenset(roles)

    def with_policy(self, rule: PolicyRule) -> "PolicyState":
        return PolicyState(
            policies=(*self.policies, rule),
            groupings=self.groupings,
            declared_roles=self.declared_roles,
        )

    def without_policy(self, rule: PolicyRule) -> "PolicyState":
        return PolicyState(
            policies=tuple(p for p in self.policies if p != rule),
            groupings=self.groupings,
            declared_roles=self.declared_roles,
        )

    def with_grouping(self, grouping: GroupingRule) -> "PolicyState":
        return PolicyState(
            policies=self.policies,
            groupings=(*self.groupings, grouping),
            declared_roles=self.declared_roles,
        )

    def without_grouping(self, grouping: GroupingRule) -> "PolicyState":
        return PolicyState(
            policies=self.policies,
            groupings=tuple(g for g in self.groupings if g != grouping),
            declared_roles=self.declared_roles,
        )

    def with_declared_role(self, role: Role) -> "PolicyState":
        return PolicyState(
            policies=self.policies,
            groupings=self.groupings,
            declared_roles=(*self.declared_roles, role),
        )

    def without_role(self, role: Role) -> "PolicyState":
        """Drop every grant, membership, and declaration referencing role."""
        return PolicyState(
            policies=tuple(p for p in self.policies if p.principal != role),
            groupings=tuple(g for g in self.groupings if g.role != role),
            declared_roles=tuple(r for r in self.declared_roles if r != role),
        )
