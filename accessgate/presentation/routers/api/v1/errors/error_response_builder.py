"""Map domain errors to HTTP errors.

The presentation layer is the only place that knows about HTTP statuses:
domain and infrastructure code return ``Failure(DomainError)`` and the
builder turns the error code into an ``ApiException`` that the global
handler renders as an envelope.

Exports:
    ApiException: Exception carrying status, envelope code, message, data
    ErrorResponseBuilder: ErrorCode -> ApiException mapping
"""

from typing import Any

from fastapi import status

from accessgate.core.enums import ErrorCode
from accessgate.core.errors import DomainError
from accessgate.domain.protocols import LoggerProtocol
from accessgate.presentation.routers.api.v1.errors.api_response import (
    ApiResponse,
    ResponseCode,
)


class ApiException(Exception):
    """Error raised from dependencies and routes, rendered as an envelope.

    Attributes:
        status_code: HTTP status.
        code: Envelope response code.
        msg: Envelope message.
        data: Envelope payload.
    """

    def __init__(
        self,
        status_code: int,
        code: ResponseCode,
        msg: str,
        data: Any = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        super().__init__(msg)
        self.status_code = status_code
        self.code = code
        self.msg = msg
        self.data = data
        self.headers = headers

    def to_response(self) -> ApiResponse:
        return ApiResponse.error(self.code, self.msg, self.data)


# ErrorCode -> (HTTP status, envelope code)
_ERROR_MAPPING: dict[ErrorCode, tuple[int, ResponseCode]] = {
    ErrorCode.VALIDATION_FAILED: (
        status.HTTP_400_BAD_REQUEST,
        ResponseCode.INVALID_PARAMS,
    ),
    ErrorCode.INVALID_PRINCIPAL: (
        status.HTTP_400_BAD_REQUEST,
        ResponseCode.INVALID_PARAMS,
    ),
    ErrorCode.TOKEN_MISSING: (
        status.HTTP_401_UNAUTHORIZED,
        ResponseCode.ERROR_AUTH,
    ),
    ErrorCode.TOKEN_EXPIRED: (
        status.HTTP_401_UNAUTHORIZED,
        ResponseCode.ERROR_AUTH_CHECK_TOKEN_TIMEOUT,
    ),
    ErrorCode.TOKEN_INVALID: (
        status.HTTP_401_UNAUTHORIZED,
        ResponseCode.ERROR_AUTH_CHECK_TOKEN_FAIL,
    ),
    ErrorCode.PERMISSION_DENIED: (
        status.HTTP_403_FORBIDDEN,
        ResponseCode.ERROR_AUTH,
    ),
}


class ErrorResponseBuilder:
    """Build ApiExceptions from domain errors.

    Example:
        >>> error = AuthenticationError(
        ...     code=ErrorCode.TOKEN_EXPIRED, message="Token expired"
        ... )
        >>> raise ErrorResponseBuilder.from_domain_error(error)
        >>> # 401 {"code": 20002, "msg": "Unauthorized: Token expired", ...}
    """

    @staticmethod
    def from_domain_error(error: DomainError, data: Any = None) -> ApiException:
        status_code, code = ErrorResponseBuilder.get_status(error.code)
        headers = (
            {"WWW-Authenticate": "Bearer"}
            if status_code == status.HTTP_401_UNAUTHORIZED
            else None
        )
        msg = (
            f"Unauthorized: {error.message}"
            if status_code == status.HTTP_401_UNAUTHORIZED
            else error.message
        )
        return ApiException(
            status_code=status_code, code=code, msg=msg, data=data, headers=headers
        )

    @staticmethod
    def from_policy_error(
        error: DomainError, logger: LoggerProtocol, **context: Any
    ) -> ApiException:
        """Log an engine/store failure and build its 500 response.

        An uninitialized engine after startup is a deployment fault and is
        logged at CRITICAL.
        """
        if error.code == ErrorCode.POLICY_ENGINE_NOT_INITIALIZED:
            logger.critical("policy_engine_not_initialized", **context)
        else:
            logger.error(
                "policy_operation_failed",
                code=error.code.value,
                detail=error.message,
                **context,
            )
        return ErrorResponseBuilder.from_domain_error(error)

    @staticmethod
    def get_status(code: ErrorCode) -> tuple[int, ResponseCode]:
        """Return (HTTP status, envelope code); 500/ERROR when unmapped."""
        return _ERROR_MAPPING.get(
            code, (status.HTTP_500_INTERNAL_SERVER_ERROR, ResponseCode.ERROR)
        )
