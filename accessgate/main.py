"""
Main FastAPI application entry point.

``create_app`` is the composition root: it builds the token verifier, the
policy store and the policy engine from settings and attaches them to
``app.state``. The engine is loaded in the lifespan; a store that cannot be
read aborts startup.

Usage:
    uvicorn accessgate.main:create_app --factory
    python -m accessgate
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from accessgate.core.config import Settings, get_settings
from accessgate.core.container import (
    build_policy_engine,
    build_policy_store,
    build_seed_store,
    build_token_service,
    get_logger,
)
from accessgate.core.result import Failure
from accessgate.infrastructure.authorization import SqlPolicyStore, seed_policy_store
from accessgate.presentation.routers.api.v1 import API_V1_PREFIX
from accessgate.presentation.routers.api.v1.casbin import router as casbin_router
from accessgate.presentation.routers.api.v1.errors import register_exception_handlers
from accessgate.presentation.routers.system import system_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan context manager.

    Startup:
        - create the casbin_rule table (database backend, outside production)
        - seed an empty store from ``policy_seed_path`` when configured
        - load the policy engine; failure raises and aborts startup
    Shutdown:
        - close the policy store

    Raises:
        RuntimeError: If seeding or the initial policy load fails.
    """
    settings: Settings = app.state.settings
    store = app.state.policy_store
    engine = app.state.policy_engine
    logger = get_logger()

    try:
        if isinstance(store, SqlPolicyStore) and not settings.is_production:
            await store.create_schema()

        seed_store = build_seed_store(settings)
        if seed_store is not None:
            try:
                seeded = await seed_policy_store(store, seed_store, logger)
            finally:
                await seed_store.close()
            if isinstance(seeded, Failure):
                raise RuntimeError(f"Policy seeding failed: {seeded.error}")

        loaded = await engine.load()
        if isinstance(loaded, Failure):
            raise RuntimeError(f"Policy engine failed to load: {loaded.error}")
    except BaseException:
        await store.close()
        raise

    logger.info(
        "application_started",
        environment=settings.environment.value,
        policy_backend=settings.policy_backend,
    )

    try:
        yield
    finally:
        await store.close()
        logger.info("application_stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Configuration; defaults to the cached environment settings.

    Returns:
        Application with its own (not yet loaded) policy engine.
    """
    settings = settings or get_settings()
    logger = get_logger()

    app = FastAPI(
        title=settings.app_name,
        description="Bearer-token authentication and Casbin RBAC authorization",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    store = build_policy_store(settings)
    app.state.settings = settings
    app.state.token_service = build_token_service(settings)
    app.state.policy_store = store
    app.state.policy_engine = build_policy_engine(settings, store, logger)

    # Register global exception handlers ({code, msg, data} envelope)
    register_exception_handlers(app)

    app.include_router(system_router)
    app.include_router(casbin_router, prefix=API_V1_PREFIX)

    return app
