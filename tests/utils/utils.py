"""Utility helpers for testing.

Provides an in-memory policy store with failure injection and helpers for
writing policy files.
"""

from pathlib import Path

from accessgate.core.enums import ErrorCode
from accessgate.core.result import Failure, Result, Success
from accessgate.domain.errors import PolicyError
from accessgate.domain.value_objects import PolicyState


class InMemoryPolicyStore:
    """PolicyStoreProtocol implementation kept in memory.

    Attributes:
        state: Last saved (or initial) state.
        fail_load: Make load() return POLICY_STORE_READ_FAILED.
        fail_save: Make save() return POLICY_STORE_WRITE_FAILED.
        save_count: Number of successful saves.
        closed: True once close() was awaited.
    """

    def __init__(self, state: PolicyState | None = None) -> None:
        self.state = state or PolicyState()
        self.fail_load = False
        self.fail_save = False
        self.save_count = 0
        self.closed = False

    async def load(self) -> Result[PolicyState, PolicyError]:
        if self.fail_load:
            return Failure(
                error=PolicyError(
                    code=ErrorCode.POLICY_STORE_READ_FAILED,
                    message="load failed",
                    operation="load",
                )
            )
        return Success(value=self.state)

    async def save(self, state: PolicyState) -> Result[None, PolicyError]:
        if self.fail_save:
            return Failure(
                error=PolicyError(
                    code=ErrorCode.POLICY_STORE_WRITE_FAILED,
                    message="save failed",
                    operation="save",
                )
            )
        self.state = state
        self.save_count += 1
        return Success(value=None)

    async def close(self) -> None:
        self.closed = True


def write_policy_file(path: Path, content: str) -> Path:
    """Write policy file content (dedented lines) and return the path."""
    lines = [line.strip() for line in content.strip().splitlines()]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
