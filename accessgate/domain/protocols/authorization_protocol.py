"""Authorization protocol (port) for RBAC decisions and policy management.

Following hexagonal architecture:
- Domain defines the PORT (this protocol)
- Infrastructure provides the ADAPTER (PolicyEngine over Casbin)
- Presentation depends on the protocol only

Every operation returns a Result. Failure always carries a PolicyError (the
engine could not decide); a policy "no" is Success(False).

Usage:
    result = engine.enforce(Subject.from_user_id(1), "/api/v1/orders", "GET")
    match result:
        case Success(value=True):
            ...  # allowed
        case Success(value=False):
            ...  # denied (403)
        case Failure(error=error):
            ...  # operational failure (500)
"""

from typing import Protocol

from accessgate.core.result import Result
from accessgate.domain.errors import PolicyError
from accessgate.domain.value_objects import PolicyRule, Principal, Role, Subject


class AuthorizationProtocol(Protocol):
    """Protocol for the policy engine."""

    @property
    def is_ready(self) -> bool:
        """True once the initial load has succeeded."""
        ...

    def enforce(
        self, principal: Principal, resource: str, action: str
    ) -> Result[bool, PolicyError]:
        """Decide whether principal may perform action on resource.

        True iff a rule grants (principal, resource, action) directly, or
        grants (role, resource, action) for a role the principal holds.
        """
        ...

    async def add_policy(
        self, principal: Principal, resource: str, action: str
    ) -> Result[bool, PolicyError]:
        """Grant a permission. Success(False) if it already exists."""
        ...

    async def remove_policy(
        self, principal: Principal, resource: str, action: str
    ) -> Result[bool, PolicyError]:
        """Revoke a permission. Success(False) if it was absent."""
        ...

    async def add_role_for_user(
        self, subject: Subject, role: Role
    ) -> Result[bool, PolicyError]:
        """Assign role. Success(False) if already assigned."""
        ...

    async def remove_role_for_user(
        self, subject: Subject, role: Role
    ) -> Result[bool, PolicyError]:
        """Revoke role. Success(False) if it was not assigned."""
        ...

    def roles_for_user(self, subject: Subject) -> Result[list[Role], PolicyError]:
        """Roles assigned to subject, in assignment order."""
        ...

    def users_for_role(self, role: Role) -> Result[list[Subject], PolicyError]:
        """Subjects holding role."""
        ...

    def permissions_for_role(
        self, role: Role
    ) -> Result[list[PolicyRule], PolicyError]:
        """Grants whose principal is role (never declaration markers)."""
        ...

    def all_roles(self) -> Result[frozenset[Role], PolicyError]:
        """Roles named by grants, memberships, or declarations."""
        ...

    async def create_role(self, role: Role) -> Result[bool, PolicyError]:
        """Declare a role. Success(False) if it already exists."""
        ...

    async def delete_role(self, role: Role) -> Result[None, PolicyError]:
        """Remove every tuple referencing role. Idempotent."""
        ...
