"""Integration tests for seeding an empty policy store from a policy file."""

import pytest
import pytest_asyncio

from accessgate.core.enums import ErrorCode
from accessgate.core.result import Failure, Success
from accessgate.domain.value_objects import PolicyState, Role
from accessgate.infrastructure.authorization import (
    FilePolicyStore,
    SqlPolicyStore,
    seed_policy_store,
)
from tests.utils.utils import InMemoryPolicyStore


@pytest_asyncio.fixture
async def sql_store(tmp_path):
    store = SqlPolicyStore(f"sqlite+aiosqlite:///{tmp_path / 'policy.db'}")
    await store.create_schema()
    yield store
    await store.close()


@pytest.mark.integration
class TestSeedPolicyStore:
    async def test_copies_file_into_empty_database(
        self, sql_store, file_store, mock_logger
    ):
        result = await seed_policy_store(sql_store, file_store, mock_logger)

        assert result == Success(value=True)
        assert (await sql_store.load()).value == (await file_store.load()).value
        mock_logger.info.assert_called_once()

    async def test_skips_store_with_data(self, file_store, mock_logger):
        existing = PolicyState.build(declared_roles=[Role(name="auditor")])
        target = InMemoryPolicyStore(existing)

        result = await seed_policy_store(target, file_store, mock_logger)

        assert result == Success(value=False)
        assert target.state == existing
        assert target.save_count == 0

    async def test_running_twice_seeds_once(self, sql_store, file_store, mock_logger):
        assert (await seed_policy_store(sql_store, file_store, mock_logger)).value
        assert not (await seed_policy_store(sql_store, file_store, mock_logger)).value

    async def test_unreadable_source(self, tmp_path, mock_logger):
        target = InMemoryPolicyStore()
        source = FilePolicyStore(tmp_path / "missing.csv")

        result = await seed_policy_store(target, source, mock_logger)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.POLICY_STORE_READ_FAILED
        assert target.save_count == 0

    async def test_target_write_failure(self, file_store, mock_logger):
        target = InMemoryPolicyStore()
        target.fail_save = True

        result = await seed_policy_store(target, file_store, mock_logger)

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.POLICY_STORE_WRITE_FAILED
