"""SQL policy store over the ``casbin_rule`` table.

Uses async SQLAlchemy (any async driver; aiosqlite in development and tests).
``save`` replaces every row inside one transaction, so a concurrent reader
of the table sees either the old or the new state, never a mix.
"""

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from accessgate.core.enums import ErrorCode
from accessgate.core.result import Failure, Result, Success
from accessgate.domain.errors import PolicyError
from accessgate.domain.value_objects import PolicyState
from accessgate.infrastructure.authorization.file_policy_store import (
    PolicyFileFormatError,
    parse_policy_rows,
    state_to_rows,
)
from accessgate.infrastructure.persistence import Database
from accessgate.infrastructure.persistence.models import CasbinRule


class SqlPolicyStore:
    """Policy store backed by a relational table.

    Args:
        database_url: Async SQLAlchemy URL.
        echo: Log emitted SQL.
    """

    def __init__(self, database_url: str, echo: bool = False) -> None:
        self._database = Database(database_url, echo=echo)

    async def create_schema(self) -> None:
        """Create the ``casbin_rule`` table if missing (not in production)."""
        await self._database.create_all()

    async def load(self) -> Result[PolicyState, PolicyError]:
        try:
            async with self._database.transaction() as session:
                result = await session.execute(
                    select(CasbinRule).order_by(CasbinRule.id)
                )
                rows = [rule.to_row() for rule in result.scalars()]
            state = parse_policy_rows(rows)
        except SQLAlchemyError as e:
            return Failure(
                error=PolicyError(
                    code=ErrorCode.POLICY_STORE_READ_FAILED,
                    message=f"Failed to read policy table: {e}",
                    operation="load",
                )
            )
        except PolicyFileFormatError as e:
            return Failure(
                error=PolicyError(
                    code=ErrorCode.POLICY_STORE_READ_FAILED,
                    message=f"Malformed policy row: {e}",
                    operation="load",
                )
            )
        return Success(value=state)

    async def save(self, state: PolicyState) -> Result[None, PolicyError]:
        try:
            async with self._database.transaction() as session:
                await session.execute(delete(CasbinRule))
                session.add_all(
                    CasbinRule.from_row(row) for row in state_to_rows(state)
                )
        except SQLAlchemyError as e:
            return Failure(
                error=PolicyError(
                    code=ErrorCode.POLICY_STORE_WRITE_FAILED,
                    message=f"Failed to write policy table: {e}",
                    operation="save",
                )
            )
        return Success(value=None)

    async def close(self) -> None:
        await self._database.close()
