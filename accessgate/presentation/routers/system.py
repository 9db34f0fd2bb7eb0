"""System router for non-versioned application endpoints.

These endpoints are not behind authentication or authorization and have no
side effects.
"""

from fastapi import APIRouter, Request

from accessgate.presentation.routers.api.v1.errors import ApiResponse, ResponseCode

system_router = APIRouter(tags=["System"])


@system_router.get("/health")
async def health(request: Request) -> ApiResponse:
    """Health check endpoint for monitoring and load balancers.

    Reports whether the policy engine finished its initial load.
    """
    engine = getattr(request.app.state, "policy_engine", None)
    ready = engine is not None and engine.is_ready
    return ApiResponse.ok(
        {"status": "healthy" if ready else "starting", "policy_engine_ready": ready}
    )
