"""Infrastructure dependency factories.

- Logging (structlog console adapter), application-scoped singleton
- Token verification (JWT), one per app instance
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from accessgate.core.config import Settings, get_settings

if TYPE_CHECKING:
    from accessgate.domain.protocols import LoggerProtocol
    from accessgate.infrastructure.security import JWTService


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from accessgate.infrastructure.logging import ConsoleAdapter

    settings = get_settings()
    return ConsoleAdapter(
        use_json=not settings.is_development, level=settings.log_level
    )


def build_token_service(settings: Settings) -> "JWTService":
    """Build the JWT service from settings.

    Raises:
        ValueError: If the configured secret is shorter than 256 bits.
    """
    from accessgate.infrastructure.security import JWTService

    return JWTService(
        secret_key=settings.secret_key,
        expiration_minutes=settings.access_token_expire_minutes,
        algorithm=settings.algorithm,
    )
