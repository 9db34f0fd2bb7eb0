"""Policy administration endpoints.

All routes sit behind ``authorize_request``: the caller needs a valid bearer
token AND a policy granting (caller, path, method). Mutations are persisted
before they return and are visible to the next decision without a reload.

Soft outcomes (adding something that already exists, removing something
absent) are 200 SUCCESS with the outcome in ``msg``.

Endpoints:
    POST   /casbin/create-role          declare a role
    DELETE /casbin/delete-role-by-name  remove a role everywhere
    GET    /casbin/roles                list roles
    GET    /casbin/role-permissions     grants of a role
    GET    /casbin/role-users           members of a role
    POST   /casbin/add-role             assign a role to a user
    DELETE /casbin/delete-role          revoke a role from a user
    GET    /casbin/user-roles           roles of a user
    POST   /casbin/add-policy           grant (role, path, method)
    DELETE /casbin/delete-policy        revoke (role, path, method)
    GET    /casbin/check-permission     evaluate (user, path, method)
"""

from typing import Annotated, TypeVar

from fastapi import APIRouter, Depends, Query

from accessgate.core.container import get_logger
from accessgate.core.enums import ErrorCode
from accessgate.core.errors import ValidationError
from accessgate.core.result import Failure, Result
from accessgate.domain.errors import PolicyError
from accessgate.domain.value_objects import Role, Subject
from accessgate.presentation.routers.api.middleware.authorization_dependencies import (
    PolicyEngineDep,
    authorize_request,
)
from accessgate.presentation.routers.api.v1.errors import (
    ApiResponse,
    ErrorResponseBuilder,
)
from accessgate.schemas.casbin_schemas import (
    CreateRoleRequest,
    PolicyRequest,
    UserRoleRequest,
)

T = TypeVar("T")

router = APIRouter(
    prefix="/casbin",
    tags=["Casbin"],
    dependencies=[Depends(authorize_request)],
)

RequiredText = Annotated[str, Query(min_length=1, max_length=255)]


def _unwrap(result: Result[T, PolicyError], operation: str) -> T:
    if isinstance(result, Failure):
        raise ErrorResponseBuilder.from_policy_error(
            result.error, get_logger(), operation=operation
        )
    return result.value


def _role_param(name: str) -> Role:
    try:
        return Role(name=name.strip())
    except ValueError as e:
        raise ErrorResponseBuilder.from_domain_error(
            ValidationError(
                code=ErrorCode.INVALID_PRINCIPAL,
                message=str(e),
                field="role",
            )
        ) from e


def _subject_param(user_id: str) -> Subject:
    try:
        return Subject.from_user_id(user_id)
    except ValueError as e:
        raise ErrorResponseBuilder.from_domain_error(
            ValidationError(
                code=ErrorCode.INVALID_PRINCIPAL,
                message=str(e),
                field="user_id",
            )
        ) from e


# ----------------------------------------------------------------------
# Roles
# ----------------------------------------------------------------------


@router.post("/create-role", summary="Create role")
async def create_role(data: CreateRoleRequest, engine: PolicyEngineDep) -> ApiResponse:
    """Declare a role so it can be listed before it holds any permission."""
    role = Role(name=data.role)
    created = _unwrap(await engine.create_role(role), "create_role")
    if not created:
        return ApiResponse.ok({"role": role.name}, msg="Role already exists")
    return ApiResponse.ok(
        {"role": role.name, "description": data.description},
        msg="Role created",
    )


@router.delete("/delete-role-by-name", summary="Delete role")
async def delete_role_by_name(
    role: RequiredText, engine: PolicyEngineDep
) -> ApiResponse:
    """Remove every grant, membership and declaration of the role."""
    role_value = _role_param(role)
    _unwrap(await engine.delete_role(role_value), "delete_role")
    return ApiResponse.ok({"role": role_value.name}, msg="Role deleted")


@router.get("/roles", summary="List roles")
async def list_roles(engine: PolicyEngineDep) -> ApiResponse:
    roles = sorted(role.name for role in _unwrap(engine.all_roles(), "all_roles"))
    return ApiResponse.ok({"roles": roles, "count": len(roles)})


@router.get("/role-permissions", summary="Permissions of a role")
async def role_permissions(role: RequiredText, engine: PolicyEngineDep) -> ApiResponse:
    role_value = _role_param(role)
    rules = _unwrap(engine.permissions_for_role(role_value), "permissions_for_role")
    permissions = [list(rule.as_row()) for rule in rules]
    return ApiResponse.ok(
        {"role": role_value.name, "permissions": permissions, "count": len(permissions)}
    )


@router.get("/role-users", summary="Users holding a role")
async def role_users(role: RequiredText, engine: PolicyEngineDep) -> ApiResponse:
    role_value = _role_param(role)
    subjects = _unwrap(engine.users_for_role(role_value), "users_for_role")
    users = [subject.key for subject in subjects]
    return ApiResponse.ok(
        {"role": role_value.name, "users": users, "count": len(users)}
    )


# ----------------------------------------------------------------------
# User role assignments
# ----------------------------------------------------------------------


@router.post("/add-role", summary="Assign role to user")
async def add_role_for_user(
    data: UserRoleRequest, engine: PolicyEngineDep
) -> ApiResponse:
    subject = Subject.from_user_id(data.user_id)
    added = _unwrap(
        await engine.add_role_for_user(subject, data.role_value), "add_role_for_user"
    )
    return ApiResponse.ok(
        {"user": subject.key, "role": data.role},
        msg="Role assigned" if added else "Role already assigned",
    )


@router.delete("/delete-role", summary="Revoke role from user")
async def delete_role_for_user(
    data: UserRoleRequest, engine: PolicyEngineDep
) -> ApiResponse:
    subject = Subject.from_user_id(data.user_id)
    removed = _unwrap(
        await engine.remove_role_for_user(subject, data.role_value),
        "remove_role_for_user",
    )
    return ApiResponse.ok(
        {"user": subject.key, "role": data.role},
        msg="Role revoked" if removed else "Role not assigned",
    )


@router.get("/user-roles", summary="Roles of a user")
async def user_roles(user_id: RequiredText, engine: PolicyEngineDep) -> ApiResponse:
    subject = _subject_param(user_id)
    held = _unwrap(engine.roles_for_user(subject), "roles_for_user")
    roles = [role.name for role in held]
    return ApiResponse.ok({"user_id": subject.user_id, "roles": roles})


# ----------------------------------------------------------------------
# Policies
# ----------------------------------------------------------------------


@router.post("/add-policy", summary="Grant permission")
async def add_policy(data: PolicyRequest, engine: PolicyEngineDep) -> ApiResponse:
    added = _unwrap(
        await engine.add_policy(data.principal, data.path, data.method), "add_policy"
    )
    return ApiResponse.ok(
        {"role": data.role, "path": data.path, "method": data.method},
        msg="Policy added" if added else "Policy already exists",
    )


@router.delete("/delete-policy", summary="Revoke permission")
async def delete_policy(data: PolicyRequest, engine: PolicyEngineDep) -> ApiResponse:
    removed = _unwrap(
        await engine.remove_policy(data.principal, data.path, data.method),
        "remove_policy",
    )
    return ApiResponse.ok(
        {"role": data.role, "path": data.path, "method": data.method},
        msg="Policy removed" if removed else "Policy not found",
    )


@router.get("/check-permission", summary="Evaluate a permission")
async def check_permission(
    user_id: RequiredText,
    path: RequiredText,
    method: RequiredText,
    engine: PolicyEngineDep,
) -> ApiResponse:
    """Evaluate (user, path, method) without performing the request."""
    subject = _subject_param(user_id)
    allowed = _unwrap(engine.enforce(subject, path, method), "enforce")
    return ApiResponse.ok(
        {
            "user_id": subject.user_id,
            "path": path,
            "method": method,
            "has_access": allowed,
        }
    )
