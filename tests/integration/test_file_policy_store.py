"""Integration tests for FilePolicyStore against real files.

Tests cover:
- Parsing (comments, blank lines, p/g/role rows)
- Legacy placeholder rows becoming declared roles (roles only)
- Quoting of fields holding delimiters, quotes and line breaks
- Malformed and missing files
- Atomic save (no temp files left behind, failure keeps old content)
"""

import csv
import io

import pytest

from accessgate.core.enums import ErrorCode
from accessgate.core.result import Failure, Success
from accessgate.domain.value_objects import (
    GroupingRule,
    PolicyRule,
    PolicyState,
    Role,
    Subject,
)
from accessgate.infrastructure.authorization import FilePolicyStore
from accessgate.infrastructure.authorization.file_policy_store import (
    format_policy_row,
)
from tests.utils.utils import write_policy_file

ADMIN = Role(name="admin")


@pytest.mark.integration
class TestFilePolicyStoreLoad:
    async def test_loads_all_row_types(self, tmp_path):
        path = write_policy_file(
            tmp_path / "policy.csv",
            """
            # comment
            p, admin, /api/v1/casbin/roles, GET

            p, user:1, /api/v1/orders, GET
            g, user:2, admin
            role, auditor
            """,
        )

        result = await FilePolicyStore(path).load()

        assert isinstance(result, Success)
        state = result.value
        assert state.policies == (
            PolicyRule(principal=ADMIN, resource="/api/v1/casbin/roles", action="GET"),
            PolicyRule(
                principal=Subject.from_user_id(1),
                resource="/api/v1/orders",
                action="GET",
            ),
        )
        assert state.groupings == (
            GroupingRule(subject=Subject.from_user_id(2), role=ADMIN),
        )
        assert state.declared_roles == (Role(name="auditor"),)

    async def test_legacy_placeholder_becomes_declared_role(self, tmp_path):
        path = write_policy_file(
            tmp_path / "policy.csv",
            """
            p, editor, /__placeholder__, NONE
            p, editor, /docs, GET
            """,
        )

        state = (await FilePolicyStore(path).load()).value

        assert state.declared_roles == (Role(name="editor"),)
        assert [rule.resource for rule in state.policies] == ["/docs"]

    async def test_legacy_placeholder_on_user_is_dropped(self, tmp_path):
        path = write_policy_file(
            tmp_path / "policy.csv",
            """
            p, user:1, /__placeholder__, NONE
            p, user:1, /docs, GET
            """,
        )

        result = await FilePolicyStore(path).load()

        assert isinstance(result, Success)
        assert result.value.declared_roles == ()
        assert [rule.resource for rule in result.value.policies] == ["/docs"]

    async def test_quoted_line_break_is_one_malformed_row(self, tmp_path):
        path = tmp_path / "policy.csv"
        path.write_text('p, admin, "/a\nb", GET\n', encoding="utf-8")

        result = await FilePolicyStore(path).load()

        assert isinstance(result, Failure)
        assert "line 1" in result.error.message

    async def test_missing_file(self, tmp_path):
        result = await FilePolicyStore(tmp_path / "missing.csv").load()

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.POLICY_STORE_READ_FAILED

    @pytest.mark.parametrize(
        "content",
        [
            "p, admin, /x",
            "x, admin, /x, GET",
            "g, admin, editor",
            "g, user:1, user:2",
            "role, user:1",
        ],
    )
    async def test_malformed_rows(self, tmp_path, content):
        path = write_policy_file(tmp_path / "policy.csv", content)

        result = await FilePolicyStore(path).load()

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.POLICY_STORE_READ_FAILED
        assert "line 1" in result.error.message


@pytest.mark.integration
class TestFilePolicyStoreSave:
    async def test_save_then_load_preserves_state(self, tmp_path):
        store = FilePolicyStore(tmp_path / "policy.csv")
        state = PolicyState.build(
            policies=[PolicyRule(principal=ADMIN, resource="/a,b", action="GET")],
            groupings=[GroupingRule(subject=Subject.from_user_id(9), role=ADMIN)],
            declared_roles=[Role(name="auditor")],
        )

        assert isinstance(await store.save(state), Success)

        assert (await store.load()).value == state

    async def test_save_writes_casbin_style_lines(self, tmp_path):
        path = tmp_path / "policy.csv"
        state = PolicyState.build(
            policies=[PolicyRule(principal=ADMIN, resource="/a", action="GET")],
            groupings=[GroupingRule(subject=Subject.from_user_id(2), role=ADMIN)],
        )

        await FilePolicyStore(path).save(state)

        assert path.read_text().splitlines() == [
            "p, admin, /a, GET",
            "g, user:2, admin",
        ]

    async def test_save_leaves_no_temp_files(self, tmp_path):
        store = FilePolicyStore(tmp_path / "policy.csv")

        for i in range(3):
            await store.save(PolicyState.build(declared_roles=[Role(name=f"r{i}")]))

        assert [p.name for p in tmp_path.iterdir()] == ["policy.csv"]

    async def test_failed_save_keeps_previous_content(self, tmp_path):
        path = write_policy_file(tmp_path / "policy.csv", "role, auditor")
        # Parent path is a regular file, so no temp file can be created
        blocked = FilePolicyStore(path / "nested.csv")

        result = await blocked.save(PolicyState.build(declared_roles=[ADMIN]))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.POLICY_STORE_WRITE_FAILED
        assert path.read_text() == "role, auditor\n"

    async def test_quotes_and_commas_in_every_field_round_trip(self, tmp_path):
        path = tmp_path / "policy.csv"
        store = FilePolicyStore(path)
        odd = Role(name='ops, "core"')
        state = PolicyState.build(
            policies=[PolicyRule(principal=odd, resource='/a,"b"', action='G,"T"')],
            groupings=[GroupingRule(subject=Subject.from_user_id('x"1'), role=odd)],
            declared_roles=[Role(name="qa,team")],
        )

        assert isinstance(await store.save(state), Success)

        assert len(path.read_text(encoding="utf-8").splitlines()) == 3
        assert (await store.load()).value == state


@pytest.mark.integration
class TestFormatPolicyRow:
    def test_plain_rows_keep_casbin_spacing(self):
        assert format_policy_row(["p", "admin", "/a", "GET"]) == "p, admin, /a, GET"

    @pytest.mark.parametrize(
        "row",
        [
            ["p", "ops\nteam", "/a", "GET"],
            ["p", "ops", "/a\nb", "GET"],
            ["p", "ops", "/a", "GE\r\nT"],
            ["role", "qa\rteam"],
        ],
    )
    def test_line_breaks_are_quoted(self, row):
        line = format_policy_row(row)

        reader = csv.reader(io.StringIO(line + "\n", newline=""), skipinitialspace=True)

        assert list(reader) == [row]
