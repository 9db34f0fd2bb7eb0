"""Pytest configuration and shared fixtures.

This configuration ensures:
1. Settings can be built without a real environment (test secret, testing env)
2. Every test gets its own policy file, store and engine (no shared state)
3. Async tests are marked automatically
"""

import asyncio
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-accessgate-0123456789abcdef")
os.environ.setdefault("ENVIRONMENT", "testing")

from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from accessgate.core.config import DEFAULT_MODEL_PATH, Settings  # noqa: E402
from accessgate.core.enums import Environment  # noqa: E402
from accessgate.core.result import Success  # noqa: E402
from accessgate.infrastructure.authorization import (  # noqa: E402
    FilePolicyStore,
    PolicyEngine,
)
from accessgate.infrastructure.security import JWTService  # noqa: E402
from accessgate.main import create_app  # noqa: E402
from tests.utils.utils import write_policy_file  # noqa: E402

TEST_SECRET_KEY = "test-secret-key-accessgate-0123456789abcdef"

# Admin (user:1) may call every administration route; user:2 holds no role;
# user:3 may only read the role list.
BASE_POLICY = """
    p, admin, /api/v1/casbin/create-role, POST
    p, admin, /api/v1/casbin/delete-role-by-name, DELETE
    p, admin, /api/v1/casbin/roles, GET
    p, admin, /api/v1/casbin/role-permissions, GET
    p, admin, /api/v1/casbin/role-users, GET
    p, admin, /api/v1/casbin/add-role, POST
    p, admin, /api/v1/casbin/delete-role, DELETE
    p, admin, /api/v1/casbin/user-roles, GET
    p, admin, /api/v1/casbin/add-policy, POST
    p, admin, /api/v1/casbin/delete-policy, DELETE
    p, admin, /api/v1/casbin/check-permission, GET
    p, user:3, /api/v1/casbin/roles, GET
    g, user:1, admin
"""


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real files and databases"
    )
    config.addinivalue_line("markers", "api: HTTP tests through the FastAPI app")


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions.

    This ensures all async tests are properly marked even if
    the developer forgets to add @pytest.mark.asyncio.
    """
    for item in items:
        if asyncio.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)


# =============================================================================
# Policy fixtures
# =============================================================================


@pytest.fixture(scope="session")
def model_text() -> str:
    """Casbin model shipped with the package."""
    return DEFAULT_MODEL_PATH.read_text(encoding="utf-8")


@pytest.fixture
def policy_file(tmp_path):
    """Fresh policy file with the base policy."""
    return write_policy_file(tmp_path / "rbac_policy.csv", BASE_POLICY)


@pytest.fixture
def file_store(policy_file) -> FilePolicyStore:
    return FilePolicyStore(policy_file)


@pytest.fixture
def mock_logger():
    """Logger double; assert on .info/.warning/.error/.critical calls."""
    return MagicMock()


@pytest_asyncio.fixture
async def engine(file_store, model_text, mock_logger) -> PolicyEngine:
    """Loaded policy engine over the base policy file."""
    engine = PolicyEngine(store=file_store, model_text=model_text, logger=mock_logger)
    result = await engine.load()
    assert isinstance(result, Success)
    return engine


# =============================================================================
# Token fixtures
# =============================================================================


@pytest.fixture
def token_service() -> JWTService:
    return JWTService(secret_key=TEST_SECRET_KEY, expiration_minutes=15)


@pytest.fixture
def admin_headers(token_service) -> dict[str, str]:
    return {"Authorization": f"Bearer {token_service.generate_access_token(1)}"}


@pytest.fixture
def user_headers(token_service) -> dict[str, str]:
    """Authenticated user without any role."""
    return {"Authorization": f"Bearer {token_service.generate_access_token(2)}"}


# =============================================================================
# Application fixtures
# =============================================================================


@pytest.fixture
def settings(policy_file) -> Settings:
    return Settings(
        secret_key=TEST_SECRET_KEY,
        environment=Environment.TESTING,
        rbac_policy_path=policy_file,
        policy_backend="file",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    """Test client with the lifespan running (engine loaded)."""
    with TestClient(app) as test_client:
        yield test_client
