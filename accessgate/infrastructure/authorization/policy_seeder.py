"""Initial policy seeding.

Copies a policy file (or any other store) into a store that has no tuples
yet. A store that already holds data is left untouched, so running the
seeder on every startup is safe.

Usage:
    result = await seed_policy_store(
        target=SqlPolicyStore(settings.database_url),
        source=FilePolicyStore(settings.policy_seed_path),
        logger=logger,
    )
"""

from accessgate.core.result import Failure, Result, Success
from accessgate.domain.errors import PolicyError
from accessgate.domain.protocols import LoggerProtocol, PolicyStoreProtocol


async def seed_policy_store(
    target: PolicyStoreProtocol,
    source: PolicyStoreProtocol,
    logger: LoggerProtocol,
) -> Result[bool, PolicyError]:
    """Seed target from source when target is empty.

    Returns:
        Success(True) if tuples were copied, Success(False) if the target
        already had data, Failure if either store failed.
    """
    match await target.load():
        case Failure(error=error):
            return Failure(error=error)
        case Success(value=existing) if not existing.is_empty:
            logger.debug(
                "policy_seed_skipped",
                reason="store_not_empty",
                policies=len(existing.policies),
            )
            return Success(value=False)

    match await source.load():
        case Failure(error=error):
            logger.error("policy_seed_failed", stage="read_source", detail=error.message)
            return Failure(error=error)
        case Success(value=state):
            pass

    match await target.save(state):
        case Failure(error=error):
            logger.error("policy_seed_failed", stage="write_target", detail=error.message)
            return Failure(error=error)

    logger.info(
        "policy_seeded",
        policies=len(state.policies),
        groupings=len(state.groupings),
        declared_roles=len(state.declared_roles),
    )
    return Success(value=True)
