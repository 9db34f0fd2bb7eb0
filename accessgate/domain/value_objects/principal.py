"""Principals of the policy model.

A principal is either an authenticated ``Subject`` (a user) or a ``Role``.
Both are flattened to a single string only at the storage and Casbin
boundary, where subjects use the ``user:<id>`` encoding:

    Subject(user_id="1").key  -> "user:1"
    Role(name="admin").key    -> "admin"

``parse_principal`` is the inverse used when reading stored tuples.

Usage:
    from accessgate.domain.value_objects import Role, Subject, parse_principal

    subject = Subject.from_user_id(42)
    match parse_principal("user:42"):
        case Subject(user_id=user_id):
            ...
        case Role(name=name):
            ...
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from accessgate.domain.value_objects.identity_claims import IdentityClaims

SUBJECT_PREFIX = "user:"


def check_policy_text(value: str, label: str) -> None:
    """Reject values that cannot be stored as one policy field verbatim.

    Raises:
        ValueError: If value is empty, has surrounding whitespace, or
            contains a control character (including CR and LF).
    """
    if not value:
        raise ValueError(f"{label} must not be empty")
    if value != value.strip():
        raise ValueError(f"{label} must not start or end with whitespace: {value!r}")
    if any(ord(char) < 32 or ord(char) == 127 for char in value):
        raise ValueError(f"{label} must not contain control characters: {value!r}")


@dataclass(frozen=True, slots=True, order=True)
class Subject:
    """Authenticated principal (a user).

    Attributes:
        user_id: Canonical text form of the user identifier.
    """

    user_id: str

    def __post_init__(self) -> None:
        check_policy_text(self.user_id, "Subject user_id")

    @classmethod
    def from_user_id(cls, user_id: int | str) -> "Subject":
        """Build a subject from an integer or text user identifier.

        Raises:
            ValueError: If the identifier is a bool, not an int/str, or not a
                valid policy field (see check_policy_text). Text is used
                as-is, so " 7" is rejected rather than read as "7".
        """
        if isinstance(user_id, bool) or not isinstance(user_id, (int, str)):
            raise ValueError(f"Unsupported user identifier: {user_id!r}")
        return cls(user_id=str(user_id))

    @classmethod
    def from_claims(cls, claims: "IdentityClaims") -> "Subject":
        return cls(user_id=claims.user_id)

    @property
    def key(self) -> str:
        return f"{SUBJECT_PREFIX}{self.user_id}"

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True, slots=True, order=True)
class Role:
    """Named bundle of permissions; never authenticated itself.

    Attributes:
        name: Role name. Must not be empty or use the subject prefix.
    """

    name: str

    def __post_init__(self) -> None:
        check_policy_text(self.name, "Role name")
        if self.name.startswith(SUBJECT_PREFIX):
            raise ValueError(
                f"Role name must not start with {SUBJECT_PREFIX!r}: {self.name!r}"
            )

    @property
    def key(self) -> str:
        return self.name

    def __str__(self) -> str:
        return self.name


Principal: TypeAlias = Subject | Role


def parse_principal(value: str) -> Principal:
    """Decode a flat principal string into a Subject or Role.

    Args:
        value: Stored principal, e.g. ``"user:7"`` or ``"editor"``.

    Returns:
        Subject when the value carries the ``user:`` prefix, Role otherwise.

    Raises:
        ValueError: If the value is empty or the subject id is empty.
    """
    value = value.strip()
    if value.startswith(SUBJECT_PREFIX):
        return Subject(user_id=value[len(SUBJECT_PREFIX) :])
    return Role(name=value)


def resolve_subject(claims: "IdentityClaims") -> Subject:
    """Map verified identity claims to their canonical subject."""
    return Subject.from_claims(claims)
