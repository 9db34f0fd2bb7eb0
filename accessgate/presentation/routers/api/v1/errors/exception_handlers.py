"""Global exception handlers for the FastAPI application.

Every error leaves the service in the ``{code, msg, data}`` envelope.

Handlers:
    api_exception_handler: ApiException raised by dependencies and routes
    http_exception_handler: HTTPException (404/405 from routing, etc.)
    validation_exception_handler: RequestValidationError -> 400
    generic_exception_handler: anything else -> 500, logged

Exports:
    register_exception_handlers: Register all handlers with the app
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from accessgate.core.container import get_logger
from accessgate.presentation.routers.api.v1.errors.api_response import (
    ApiResponse,
    ResponseCode,
)
from accessgate.presentation.routers.api.v1.errors.error_response_builder import (
    ApiException,
)


async def api_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render an ApiException as its envelope."""
    assert isinstance(exc, ApiException)

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response().model_dump(),
        headers=exc.headers,
    )


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Convert HTTPException to the envelope, keeping its status."""
    assert isinstance(exc, StarletteHTTPException)

    code = (
        ResponseCode.INVALID_PARAMS
        if exc.status_code == status.HTTP_400_BAD_REQUEST
        else ResponseCode.ERROR
    )
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=ApiResponse.error(code, detail).model_dump(),
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Convert RequestValidationError to 400 INVALID_PARAMS with field errors."""
    assert isinstance(exc, RequestValidationError)

    field_errors = []
    for error in exc.errors():
        # ["body", "role"] -> "role", ["query", "user_id"] -> "user_id"
        loc = error.get("loc", [])
        field_parts = [str(p) for p in loc if p not in ("body", "query")]
        field_errors.append(
            {
                "field": ".".join(field_parts) if field_parts else "unknown",
                "message": error.get("msg", "Validation failed"),
            }
        )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ApiResponse.error(
            ResponseCode.INVALID_PARAMS, data=field_errors or None
        ).model_dump(),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions without leaking internals."""
    get_logger().error(
        "unhandled_exception",
        error=exc,
        request_path=request.url.path,
        request_method=request.method,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ApiResponse.error(ResponseCode.ERROR).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application."""
    app.add_exception_handler(ApiException, api_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
