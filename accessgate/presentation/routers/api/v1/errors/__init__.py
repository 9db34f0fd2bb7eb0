"""Response envelope and error handling for the v1 API.

Exports:
    ApiResponse, ResponseCode: envelope model and codes
    ApiException, ErrorResponseBuilder: domain error -> HTTP mapping
    register_exception_handlers: install global handlers on the app
"""

from accessgate.presentation.routers.api.v1.errors.api_response import (
    ApiResponse,
    ResponseCode,
)
from accessgate.presentation.routers.api.v1.errors.error_response_builder import (
    ApiException,
    ErrorResponseBuilder,
)
from accessgate.presentation.routers.api.v1.errors.exception_handlers import (
    register_exception_handlers,
)

__all__ = [
    "ApiException",
    "ApiResponse",
    "ErrorResponseBuilder",
    "ResponseCode",
    "register_exception_handlers",
]
