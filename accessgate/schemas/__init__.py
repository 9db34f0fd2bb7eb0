"""Request schemas for API endpoints.

Pydantic models for HTTP request validation; kept separate from domain value
objects (HTTP-layer concerns only).

Usage:
    from accessgate.schemas import PolicyRequest, UserRoleRequest
"""

from accessgate.schemas.casbin_schemas import (
    CreateRoleRequest,
    PolicyRequest,
    UserRoleRequest,
)

__all__ = [
    "CreateRoleRequest",
    "PolicyRequest",
    "UserRoleRequest",
]
