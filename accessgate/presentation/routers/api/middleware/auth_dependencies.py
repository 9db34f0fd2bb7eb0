"""Bearer token authentication dependencies.

FastAPI dependencies that extract the bearer credential, verify it, and
resolve the authenticated subject.

Token lookup order:
    1. ``Authorization`` header. A literal ``"Bearer "`` prefix is stripped;
       any other header value is used as the token as-is.
    2. ``token`` query parameter (kept for older clients).

Usage:
    @router.get("/me")
    async def me(subject: CurrentSubject):
        return {"subject": subject.key}
"""

from typing import Annotated

from fastapi import Depends, Request

from accessgate.core.container import get_logger
from accessgate.core.enums import ErrorCode
from accessgate.core.errors import AuthenticationError
from accessgate.core.result import Failure, Success
from accessgate.domain.errors import AuthenticationMessages
from accessgate.domain.protocols import TokenVerificationProtocol
from accessgate.domain.value_objects import Subject, resolve_subject
from accessgate.presentation.routers.api.v1.errors import ErrorResponseBuilder

BEARER_PREFIX = "Bearer "


def extract_bearer_token(request: Request) -> str:
    """Return the raw bearer token of the request.

    Raises:
        ApiException 401: If no token is present.
    """
    header = request.headers.get("Authorization")
    if header:
        token = header.removeprefix(BEARER_PREFIX)
    else:
        token = request.query_params.get("token", "")

    token = token.strip()
    if not token:
        raise ErrorResponseBuilder.from_domain_error(
            AuthenticationError(
                code=ErrorCode.TOKEN_MISSING,
                message=AuthenticationMessages.MISSING_TOKEN,
            )
        )
    return token


def get_token_service(request: Request) -> TokenVerificationProtocol:
    """Token verifier owned by the running application."""
    token_service: TokenVerificationProtocol = request.app.state.token_service
    return token_service


async def get_current_subject(
    request: Request,
    token: Annotated[str, Depends(extract_bearer_token)],
    token_service: Annotated[TokenVerificationProtocol, Depends(get_token_service)],
) -> Subject:
    """Verify the bearer token and resolve its subject.

    Raises:
        ApiException 401: Expired token (code 20002) or any other invalid
            token (code 20001), with distinct messages.
    """
    match token_service.validate_access_token(token):
        case Success(value=claims):
            return resolve_subject(claims)
        case Failure(error=error):
            get_logger().warning(
                "authentication_failed",
                code=error.code.value,
                path=request.url.path,
                method=request.method,
            )
            raise ErrorResponseBuilder.from_domain_error(error)


CurrentSubject = Annotated[Subject, Depends(get_current_subject)]
