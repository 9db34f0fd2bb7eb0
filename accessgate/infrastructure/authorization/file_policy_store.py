"""CSV policy file store.

File format (one tuple per line, Casbin file-adapter compatible for p/g):

    # comments and blank lines are ignored
    p, admin, /api/v1/casbin/roles, GET
    p, user:1, /api/v1/orders, GET
    g, user:2, admin
    role, auditor

``role`` lines are declared roles (created via create_role and holding no
permission yet). Rows written by older deployments as
``p, <role>, /__placeholder__, NONE`` are read as declared roles and are
written back in the ``role`` form on the next save. Fields holding a comma,
quote or line break are CSV-quoted.

Saves are atomic: the new content is written to a temporary file in the same
directory, fsynced, and moved over the policy file with ``os.replace``.
"""

import asyncio
import csv
import io
import os
import tempfile
from pathlib import Path

from accessgate.core.enums import ErrorCode
from accessgate.core.result import Failure, Result, Success
from accessgate.domain.errors import PolicyError
from accessgate.domain.value_objects import (
    LEGACY_ROLE_MARKER,
    GroupingRule,
    PolicyRule,
    PolicyState,
    Role,
    Subject,
    parse_principal,
)

POLICY_PTYPE = "p"
GROUPING_PTYPE = "g"
DECLARED_ROLE_PTYPE = "role"
_QUOTED_CHARS = frozenset(",\"\r\n")


class PolicyFileFormatError(ValueError):
    """A policy row could not be decoded."""

    def __init__(self, line_number: int, reason: str) -> None:
        super().__init__(f"line {line_number}: {reason}")
        self.line_number = line_number


def parse_policy_rows(rows: list[list[str]]) -> PolicyState:
    """Decode policy rows into a PolicyState.

    Args:
        rows: Rows already split into fields (ptype first). Row numbers in
            errors are 1-based positions in this list.

    Raises:
        PolicyFileFormatError: On unknown ptypes, wrong arity, or invalid
            principals (including role-of-role grouping rows).
    """
    policies: list[PolicyRule] = []
    groupings: list[GroupingRule] = []
    declared: list[Role] = []

    for number, row in enumerate(rows, start=1):
        fields = [field.strip() for field in row]
        ptype, values = fields[0], fields[1:]
        try:
            if ptype == POLICY_PTYPE and len(values) == 3:
                principal = parse_principal(values[0])
                resource, action = values[1], values[2]
                if (resource, action) == LEGACY_ROLE_MARKER:
                    # Only roles were ever declared this way; a marker on a
                    # user grants nothing and is dropped.
                    if isinstance(principal, Role):
                        declared.append(principal)
                    continue
                policies.append(
                    PolicyRule(
                        principal=principal,
                        resource=resource,
                        action=action,
                    )
                )
            elif ptype == GROUPING_PTYPE and len(values) == 2:
                member, role = parse_principal(values[0]), parse_principal(values[1])
                if not isinstance(member, Subject) or not isinstance(role, Role):
                    raise PolicyFileFormatError(
                        number, "grouping rows must be 'g, user:<id>, <role>'"
                    )
                groupings.append(GroupingRule(subject=member, role=role))
            elif ptype == DECLARED_ROLE_PTYPE and len(values) == 1:
                declared.append(Role(name=values[0]))
            else:
                raise PolicyFileFormatError(
                    number, f"unexpected row {ptype!r} with {len(values)} values"
                )
        except ValueError as e:
            if isinstance(e, PolicyFileFormatError):
                raise
            raise PolicyFileFormatError(number, str(e)) from e

    return PolicyState.build(policies, groupings, declared)


def state_to_rows(state: PolicyState) -> list[list[str]]:
    """Encode a PolicyState as policy rows (ptype first)."""
    rows: list[list[str]] = [
        [POLICY_PTYPE, *rule.as_row()] for rule in state.policies
    ]
    rows.extend([GROUPING_PTYPE, *grouping.as_row()] for grouping in state.groupings)
    rows.extend([DECLARED_ROLE_PTYPE, role.name] for role in state.declared_roles)
    return rows


class FilePolicyStore:
    """Policy store backed by a CSV file.

    Args:
        policy_path: Path of the policy file. Must exist at load time.
    """

    def __init__(self, policy_path: Path | str) -> None:
        self._path = Path(policy_path)

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> Result[PolicyState, PolicyError]:
        try:
            state = await asyncio.to_thread(self._read)
        except FileNotFoundError:
            return Failure(
                error=PolicyError(
                    code=ErrorCode.POLICY_STORE_READ_FAILED,
                    message=f"Policy file not found: {self._path}",
                    operation="load",
                )
            )
        except (OSError, PolicyFileFormatError, csv.Error) as e:
            return Failure(
                error=PolicyError(
                    code=ErrorCode.POLICY_STORE_READ_FAILED,
                    message=f"Policy file {self._path} unreadable: {e}",
                    operation="load",
                )
            )
        return Success(value=state)

    async def save(self, state: PolicyState) -> Result[None, PolicyError]:
        try:
            await asyncio.to_thread(self._write, state)
        except OSError as e:
            return Failure(
                error=PolicyError(
                    code=ErrorCode.POLICY_STORE_WRITE_FAILED,
                    message=f"Failed to write policy file {self._path}: {e}",
                    operation="save",
                )
            )
        return Success(value=None)

    async def close(self) -> None:
        return None

    def _read(self) -> PolicyState:
        with self._path.open(encoding="utf-8", newline="") as handle:
            rows = [
                row
                for row in csv.reader(handle, skipinitialspace=True)
                if row and row[0].strip() and not row[0].lstrip().startswith("#")
            ]
        return parse_policy_rows(rows)

    def _write(self, state: PolicyState) -> None:
        content = "".join(f"{format_policy_row(row)}\n" for row in state_to_rows(state))

        directory = self._path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=directory
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                handle.write(content)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def format_policy_row(row: list[str]) -> str:
    """Casbin-style ``a, b, c``; the whole row goes through csv.writer when a
    field holds a delimiter, quote or line break."""
    if not any(_QUOTED_CHARS.intersection(field) for field in row):
        return ", ".join(row)
    buffer = io.StringIO()
    # csv quotes any field holding a character of the line terminator
    csv.writer(buffer, lineterminator="\r\n").writerow(row)
    return buffer.getvalue().removesuffix("\r\n")
