"""Request schemas for the policy administration API.

Bodies are validated before the policy engine is touched; any failure is
answered with 400 INVALID_PARAMS by the validation exception handler.

Reference:
    - accessgate/presentation/routers/api/v1/casbin.py
"""

from typing import Annotated

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from accessgate.domain.value_objects import (
    LEGACY_ROLE_MARKER,
    Principal,
    Role,
    check_policy_text,
    parse_principal,
)

NonEmpty = Annotated[str, Field(min_length=1, max_length=255)]


def _validate_role_name(value: str) -> str:
    Role(name=value)
    return value


RoleName = Annotated[NonEmpty, AfterValidator(_validate_role_name)]


def _validate_policy_field(value: str) -> str:
    check_policy_text(value, "value")
    return value


PolicyField = Annotated[NonEmpty, AfterValidator(_validate_policy_field)]


class CreateRoleRequest(BaseModel):
    """Body of POST /casbin/create-role.

    Attributes:
        role: Name of the role to declare.
        description: Free text echoed back; not persisted.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    role: RoleName = Field(..., description="Role name")
    description: str = Field("", max_length=1024, description="Role description")


class UserRoleRequest(BaseModel):
    """Body of POST /casbin/add-role and DELETE /casbin/delete-role."""

    model_config = ConfigDict(str_strip_whitespace=True)

    user_id: int = Field(..., gt=0, description="User identifier")
    role: RoleName = Field(..., description="Role name")

    @property
    def role_value(self) -> Role:
        return Role(name=self.role)


class PolicyRequest(BaseModel):
    """Body of POST /casbin/add-policy and DELETE /casbin/delete-policy.

    ``role`` is usually a role name; a ``user:<id>`` value grants the
    permission to that user directly. The triple must form a valid
    PolicyRule: no control characters, and not the reserved
    ``/__placeholder__`` ``NONE`` pair.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    role: NonEmpty = Field(..., description="Role name or user:<id>")
    path: PolicyField = Field(..., description="Request path, matched exactly")
    method: PolicyField = Field(..., description="HTTP method, case-sensitive")

    @field_validator("role")
    @classmethod
    def validate_principal(cls, value: str) -> str:
        parse_principal(value)
        return value

    @model_validator(mode="after")
    def reject_reserved_pair(self) -> "PolicyRequest":
        if (self.path, self.method) == LEGACY_ROLE_MARKER:
            raise ValueError(f"{self.path} {self.method} is reserved")
        return self

    @property
    def principal(self) -> Principal:
        return parse_principal(self.role)
