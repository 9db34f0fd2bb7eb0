"""Response envelope shared by every endpoint.

Every response body, success or failure, has the shape::

    {"code": <int>, "msg": <str>, "data": <any>}

``code`` is an application code, not the HTTP status. The numeric values
are fixed; existing clients branch on them.
"""

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, Field


class ResponseCode(IntEnum):
    """Application response codes carried in the envelope."""

    SUCCESS = 200
    INVALID_PARAMS = 400
    ERROR = 500
    ERROR_AUTH_CHECK_TOKEN_FAIL = 20001
    ERROR_AUTH_CHECK_TOKEN_TIMEOUT = 20002
    ERROR_AUTH = 20004


RESPONSE_MESSAGES: dict[ResponseCode, str] = {
    ResponseCode.SUCCESS: "ok",
    ResponseCode.INVALID_PARAMS: "Invalid request parameters",
    ResponseCode.ERROR: "fail",
    ResponseCode.ERROR_AUTH_CHECK_TOKEN_FAIL: "Token verification failed",
    ResponseCode.ERROR_AUTH_CHECK_TOKEN_TIMEOUT: "Token has expired",
    ResponseCode.ERROR_AUTH: "Authorization failed",
}


class ApiResponse(BaseModel):
    """Response envelope.

    Attributes:
        code: Application response code.
        msg: Human-readable message.
        data: Payload, or None.
    """

    code: int = Field(..., description="Application response code")
    msg: str = Field(..., description="Human-readable message")
    data: Any = Field(None, description="Response payload")

    @classmethod
    def ok(cls, data: Any = None, msg: str | None = None) -> "ApiResponse":
        return cls(
            code=int(ResponseCode.SUCCESS),
            msg=msg or RESPONSE_MESSAGES[ResponseCode.SUCCESS],
            data=data,
        )

    @classmethod
    def error(
        cls, code: ResponseCode, msg: str | None = None, data: Any = None
    ) -> "ApiResponse":
        return cls(code=int(code), msg=msg or RESPONSE_MESSAGES[code], data=data)
