"""Casbin authorization dependencies.

Architecture:
    - Authentication (auth_dependencies.py): who is calling
    - Authorization (this file): may they call this path with this method

Usage:
    # Every route of the router is checked against (subject, path, method)
    router = APIRouter(dependencies=[Depends(authorize_request)])

    # Role-gated route, independent of path policies
    @router.post("/admin/reload")
    async def reload(_: Annotated[Subject, Depends(require_roles("admin"))]):
        ...
"""

from collections.abc import Awaitable, Callable
from typing import Annotated

from fastapi import Depends, Request

from accessgate.core.container import get_logger
from accessgate.core.enums import ErrorCode
from accessgate.core.errors import AuthorizationError
from accessgate.core.result import Failure, Success
from accessgate.domain.errors import PolicyError
from accessgate.domain.protocols import AuthorizationProtocol
from accessgate.domain.value_objects import Role, Subject
from accessgate.presentation.routers.api.middleware.auth_dependencies import (
    CurrentSubject,
)
from accessgate.presentation.routers.api.v1.errors import (
    ApiException,
    ErrorResponseBuilder,
    ResponseCode,
)


def get_policy_engine(request: Request) -> AuthorizationProtocol:
    """Policy engine owned by the running application.

    Raises:
        ApiException 500: If the application never attached an engine.
    """
    engine: AuthorizationProtocol | None = getattr(
        request.app.state, "policy_engine", None
    )
    if engine is None:
        raise ErrorResponseBuilder.from_policy_error(
            PolicyError(
                code=ErrorCode.POLICY_ENGINE_NOT_INITIALIZED,
                message="Policy engine not initialized",
            ),
            get_logger(),
            path=request.url.path,
        )
    return engine


PolicyEngineDep = Annotated[AuthorizationProtocol, Depends(get_policy_engine)]


async def authorize_request(
    request: Request,
    subject: CurrentSubject,
    engine: PolicyEngineDep,
) -> Subject:
    """Allow the request only if (subject, path, method) is permitted.

    Returns:
        The authorized subject.

    Raises:
        ApiException 403: Policy denies; data echoes user, path and method.
        ApiException 500: The engine could not decide.
    """
    path = request.url.path
    method = request.method
    logger = get_logger()

    match engine.enforce(subject, path, method):
        case Failure(error=error):
            raise ErrorResponseBuilder.from_policy_error(
                error, logger, subject=subject.key, path=path, method=method
            )
        case Success(value=False):
            logger.warning(
                "access_denied", subject=subject.key, path=path, method=method
            )
            raise ErrorResponseBuilder.from_domain_error(
                AuthorizationError(
                    code=ErrorCode.PERMISSION_DENIED,
                    message="Forbidden: no permission to access this resource",
                    subject=subject.key,
                    resource=path,
                    action=method,
                ),
                data={"user": subject.key, "path": path, "method": method},
            )
        case _:
            return subject


def require_roles(*roles: str) -> Callable[..., Awaitable[Subject]]:
    """Create a dependency that requires the subject to hold any of roles.

    Args:
        roles: Accepted role names (at least one).

    Raises:
        ValueError: At definition time, for no roles or invalid role names.
    """
    if not roles:
        raise ValueError("require_roles needs at least one role")
    required = [Role(name=role) for role in roles]

    async def role_checker(subject: CurrentSubject, engine: PolicyEngineDep) -> Subject:
        match engine.roles_for_user(subject):
            case Failure(error=error):
                raise ErrorResponseBuilder.from_policy_error(
                    error, get_logger(), subject=subject.key
                )
            case Success(value=held):
                pass

        if any(role in held for role in required):
            return subject

        get_logger().warning(
            "role_check_denied",
            subject=subject.key,
            required_roles=[role.name for role in required],
        )
        raise ApiException(
            status_code=403,
            code=ResponseCode.ERROR_AUTH,
            msg="Forbidden: missing required role",
            data={
                "user_roles": [role.name for role in held],
                "required_roles": [role.name for role in required],
            },
        )

    return role_checker
