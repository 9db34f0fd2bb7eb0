"""Database connection and session management.

Provides the async SQLAlchemy engine and transactional sessions used by the
SQL policy store.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from accessgate.infrastructure.persistence.base import BaseModel


class Database:
    """Database connection and session management.

    Usage:
        db = Database("sqlite+aiosqlite:///./accessgate.db")
        async with db.transaction() as session:
            ...  # commits on success, rolls back on error
    """

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
    ) -> None:
        """Initialize database with connection parameters.

        Args:
            database_url: Async database URL (e.g. sqlite+aiosqlite:///...).
            echo: If True, log all SQL statements.
        """
        self.engine: AsyncEngine = create_async_engine(
            database_url, echo=echo, pool_pre_ping=True
        )
        self.async_session = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a session inside one transaction.

        Yields:
            AsyncSession: Commits when the block exits normally, rolls back
            when it raises.
        """
        async with self.async_session() as session:
            async with session.begin():
                yield session

    async def create_all(self) -> None:
        """Create all tables defined in the models.

        Warning: not for production; see the lifespan in accessgate/main.py.
        """
        # Registers CasbinRule on the metadata
        from accessgate.infrastructure.persistence import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(BaseModel.metadata.create_all)

    async def close(self) -> None:
        """Dispose of all pooled connections."""
        await self.engine.dispose()

