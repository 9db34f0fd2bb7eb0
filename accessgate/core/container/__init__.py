"""Container module - Centralized dependency construction.

The container is organized into modules by concern:
- infrastructure: logging and token verification
- authorization: policy store and policy engine

The FastAPI app factory (accessgate.main.create_app) is the only caller of
the builders; the objects it builds live on ``app.state``.
"""

from accessgate.core.container.authorization import (
    build_policy_engine,
    build_policy_store,
    build_seed_store,
    read_model_text,
)
from accessgate.core.container.infrastructure import build_token_service, get_logger

__all__ = [
    "build_policy_engine",
    "build_policy_store",
    "build_seed_store",
    "build_token_service",
    "get_logger",
    "read_model_text",
]
