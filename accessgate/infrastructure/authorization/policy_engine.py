"""Casbin-backed policy engine implementing AuthorizationProtocol.

The engine owns one immutable ``PolicySnapshot`` at a time and a policy
store for durability.

Lifecycle:
    Uninitialized --load()--> Ready
    Every operation on an Uninitialized engine returns
    Failure(POLICY_ENGINE_NOT_INITIALIZED). There is no way back to
    Uninitialized; re-initialisation means a new process.

Concurrency:
    - Reads (enforce and introspection) take the current snapshot reference
      and never lock or await.
    - Mutations serialise on one asyncio.Lock held across
      build-new-snapshot -> store.save() -> swap. The swap only happens after
      a successful save, so a failed save leaves the old snapshot in place
      and the cached and durable states never diverge. Readers are never
      blocked by the lock.

Reference:
    - accessgate/infrastructure/authorization/model.conf
"""

import asyncio
from collections.abc import Callable

from accessgate.core.enums import ErrorCode
from accessgate.core.result import Failure, Result, Success
from accessgate.domain.errors import PolicyError
from accessgate.domain.protocols import LoggerProtocol, PolicyStoreProtocol
from accessgate.domain.value_objects import (
    GroupingRule,
    PolicyRule,
    PolicyState,
    Principal,
    Role,
    Subject,
)
from accessgate.infrastructure.authorization.policy_snapshot import PolicySnapshot


class PolicyEngine:
    """RBAC policy engine.

    Usage:
        engine = PolicyEngine(store=store, model_text=model_text, logger=logger)
        match await engine.load():
            case Failure(error=error):
                raise RuntimeError(str(error))

        engine.enforce(Subject.from_user_id(1), "/api/v1/orders", "GET")
        await engine.add_role_for_user(Subject.from_user_id(2), Role("admin"))

    Attributes:
        _store: Durable policy store.
        _model_text: Casbin model definition, read once at startup.
        _snapshot: Current snapshot, None until load() succeeds.
        _write_lock: Serialises mutations and their persistence.
    """

    def __init__(
        self,
        store: PolicyStoreProtocol,
        model_text: str,
        logger: LoggerProtocol,
    ) -> None:
        self._store = store
        self._model_text = model_text
        self._logger = logger
        self._snapshot: PolicySnapshot | None = None
        self._write_lock = asyncio.Lock()

    @property
    def is_ready(self) -> bool:
        return self._snapshot is not None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def load(self) -> Result[None, PolicyError]:
        """Load the full state from the store and become Ready.

        Raises:
            RuntimeError: If the engine is already loaded.
        """
        if self._snapshot is not None:
            raise RuntimeError("Policy engine already initialized")
        return await self._load_from_store("load")

    async def reload(self) -> Result[None, PolicyError]:
        """Re-read the store and swap in the result.

        Only needed when the backing store was changed out of band; engine
        mutations are already visible without it.
        """
        if self._snapshot is None:
            return Failure(error=_not_initialized("reload"))
        return await self._load_from_store("reload")

    async def _load_from_store(self, operation: str) -> Result[None, PolicyError]:
        async with self._write_lock:
            match await self._store.load():
                case Failure(error=error):
                    self._logger.error(
                        "policy_load_failed",
                        operation=operation,
                        code=error.code.value,
                        detail=error.message,
                    )
                    return Failure(error=error)
                case Success(value=state):
                    self._snapshot = PolicySnapshot(state, self._model_text)
                    self._logger.info(
                        "policy_loaded",
                        operation=operation,
                        policies=len(state.policies),
                        groupings=len(state.groupings),
                        declared_roles=len(state.declared_roles),
                    )
                    return Success(value=None)

    # ------------------------------------------------------------------
    # Decisions and introspection (lock-free reads)
    # ------------------------------------------------------------------

    def enforce(
        self, principal: Principal, resource: str, action: str
    ) -> Result[bool, PolicyError]:
        """Decide whether principal may perform action on resource.

        Args:
            principal: Subject (or role) being evaluated.
            resource: Request path, matched as configured in model.conf.
            action: HTTP method, case-sensitive.

        Returns:
            Success(True/False) for a decision, Failure when no decision
            could be made.
        """
        snapshot = self._snapshot
        if snapshot is None:
            return Failure(error=_not_initialized("enforce"))
        try:
            allowed = snapshot.enforce(principal.key, resource, action)
        except Exception as e:
            self._logger.error(
                "policy_evaluation_error",
                error=e,
                principal=principal.key,
                resource=resource,
                action=action,
            )
            return Failure(
                error=PolicyError(
                    code=ErrorCode.POLICY_EVALUATION_FAILED,
                    message="Policy evaluation failed",
                    operation="enforce",
                )
            )
        return Success(value=allowed)

    def roles_for_user(self, subject: Subject) -> Result[list[Role], PolicyError]:
        snapshot = self._snapshot
        if snapshot is None:
            return Failure(error=_not_initialized("roles_for_user"))
        return Success(
            value=[g.role for g in snapshot.state.groupings if g.subject == subject]
        )

    def users_for_role(self, role: Role) -> Result[list[Subject], PolicyError]:
        snapshot = self._snapshot
        if snapshot is None:
            return Failure(error=_not_initialized("users_for_role"))
        return Success(
            value=[g.subject for g in snapshot.state.groupings if g.role == role]
        )

    def permissions_for_role(
        self, role: Role
    ) -> Result[list[PolicyRule], PolicyError]:
        snapshot = self._snapshot
        if snapshot is None:
            return Failure(error=_not_initialized("permissions_for_role"))
        return Success(
            value=[p for p in snapshot.state.policies if p.principal == role]
        )

    def all_roles(self) -> Result[frozenset[Role], PolicyError]:
        snapshot = self._snapshot
        if snapshot is None:
            return Failure(error=_not_initialized("all_roles"))
        return Success(value=snapshot.state.all_roles())

    # ------------------------------------------------------------------
    # Mutations (write-through)
    # ------------------------------------------------------------------

    async def add_policy(
        self, principal: Principal, resource: str, action: str
    ) -> Result[bool, PolicyError]:
        rule = PolicyRule(principal=principal, resource=resource, action=action)
        return await self._mutate(
            "add_policy",
            lambda state: None if rule in state.policies else state.with_policy(rule),
            principal=principal.key,
            resource=resource,
            action=action,
        )

    async def remove_policy(
        self, principal: Principal, resource: str, action: str
    ) -> Result[bool, PolicyError]:
        rule = PolicyRule(principal=principal, resource=resource, action=action)
        return await self._mutate(
            "remove_policy",
            lambda state: (
                state.without_policy(rule) if rule in state.policies else None
            ),
            principal=principal.key,
            resource=resource,
            action=action,
        )

    async def add_role_for_user(
        self, subject: Subject, role: Role
    ) -> Result[bool, PolicyError]:
        grouping = GroupingRule(subject=subject, role=role)
        return await self._mutate(
            "add_role_for_user",
            lambda state: (
                None if grouping in state.groupings else state.with_grouping(grouping)
            ),
            subject=subject.key,
            role=role.name,
        )

    async def remove_role_for_user(
        self, subject: Subject, role: Role
    ) -> Result[bool, PolicyError]:
        grouping = GroupingRule(subject=subject, role=role)
        return await self._mutate(
            "remove_role_for_user",
            lambda state: (
                state.without_grouping(grouping)
                if grouping in state.groupings
                else None
            ),
            subject=subject.key,
            role=role.name,
        )

    async def create_role(self, role: Role) -> Result[bool, PolicyError]:
        """Declare a role so it is listed before it holds any permission."""
        return await self._mutate(
            "create_role",
            lambda state: (
                None if role in state.all_roles() else state.with_declared_role(role)
            ),
            role=role.name,
        )

    async def delete_role(self, role: Role) -> Result[None, PolicyError]:
        """Remove every grant, membership, and declaration of role.

        Deleting an unknown role succeeds without touching the store.
        """

        def remove(state: PolicyState) -> PolicyState | None:
            new_state = state.without_role(role)
            return None if new_state == state else new_state

        match await self._mutate("delete_role", remove, role=role.name):
            case Failure(error=error):
                return Failure(error=error)
            case _:
                return Success(value=None)

    async def _mutate(
        self,
        operation: str,
        transition: Callable[[PolicyState], PolicyState | None],
        **context: str,
    ) -> Result[bool, PolicyError]:
        """Apply transition, persist, then swap.

        Args:
            operation: Operation name for logs and errors.
            transition: Returns the new state, or None when the operation is
                a no-op (already exists / not found).

        Returns:
            Success(True) if the state changed, Success(False) for a no-op.
        """
        async with self._write_lock:
            current = self._snapshot
            if current is None:
                return Failure(error=_not_initialized(operation))

            new_state = transition(current.state)
            if new_state is None:
                self._logger.debug(f"{operation}_noop", **context)
                return Success(value=False)

            new_snapshot = PolicySnapshot(new_state, self._model_text)

            match await self._store.save(new_state):
                case Failure(error=error):
                    self._logger.error(
                        "policy_persist_failed",
                        operation=operation,
                        code=error.code.value,
                        detail=error.message,
                        **context,
                    )
                    return Failure(error=error)
                case _:
                    self._snapshot = new_snapshot

        self._logger.info(operation, **context)
        return Success(value=True)


def _not_initialized(operation: str) -> PolicyError:
    return PolicyError(
        code=ErrorCode.POLICY_ENGINE_NOT_INITIALIZED,
        message="Policy engine not initialized",
        operation=operation,
    )
