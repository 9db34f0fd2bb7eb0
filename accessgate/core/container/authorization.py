"""Authorization dependency factories (Casbin RBAC).

The policy engine is NOT a module-level singleton: each application built
by ``create_app`` owns one engine on ``app.state`` and loads it in its
lifespan. Builders here only construct; nothing performs I/O except
``read_model_text``.
"""

from pathlib import Path
from typing import TYPE_CHECKING

from accessgate.core.config import Settings

if TYPE_CHECKING:
    from accessgate.domain.protocols import LoggerProtocol, PolicyStoreProtocol
    from accessgate.infrastructure.authorization import PolicyEngine


def read_model_text(path: Path) -> str:
    """Read the Casbin model definition.

    Raises:
        RuntimeError: If the model file cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise RuntimeError(f"Cannot read Casbin model {path}: {e}") from e


def build_policy_store(settings: Settings) -> "PolicyStoreProtocol":
    """Build the configured policy store (file or database)."""
    if settings.policy_backend == "database":
        from accessgate.infrastructure.authorization import SqlPolicyStore

        return SqlPolicyStore(settings.database_url, echo=settings.db_echo)

    from accessgate.infrastructure.authorization import FilePolicyStore

    return FilePolicyStore(settings.rbac_policy_path)


def build_seed_store(settings: Settings) -> "PolicyStoreProtocol | None":
    """Build the store used to seed an empty policy store, if configured."""
    if settings.policy_seed_path is None:
        return None

    from accessgate.infrastructure.authorization import FilePolicyStore

    return FilePolicyStore(settings.policy_seed_path)


def build_policy_engine(
    settings: Settings,
    store: "PolicyStoreProtocol",
    logger: "LoggerProtocol",
) -> "PolicyEngine":
    """Build an (unloaded) policy engine over store.

    Call ``await engine.load()`` before serving requests.
    """
    from accessgate.infrastructure.authorization import PolicyEngine

    return PolicyEngine(
        store=store,
        model_text=read_model_text(settings.rbac_model_path),
        logger=logger,
    )
