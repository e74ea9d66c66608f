"""Shared enumerations for the query layer and start-up helpers."""

from __future__ import annotations

import enum


class Datatype(enum.IntEnum):
    """Type of a relation attribute."""

    STRING = 0
    INTEGER = 1
    FLOAT = 2


class Operator(enum.IntEnum):
    """Comparison operator used in selections and joins."""

    LT = 0
    LTE = 1
    EQ = 2
    GTE = 3
    GT = 4
    NE = 5


class JoinType(enum.Enum):
    """Join algorithm chosen when the database is opened."""

    NESTED_LOOPS = "NL"
    SORT_MERGE = "SM"
    HASH = "HJ"


_DESCRIPTIONS = {
    JoinType.NESTED_LOOPS: "Nested Loops Join Method",
    JoinType.HASH: "Hash Join Method",
    JoinType.SORT_MERGE: "Sort Merge Join Method",
}


def join_method_from_arg(arg: str | None) -> JoinType:
    """Pick the join method from the optional command-line argument.

    ``"SM"`` selects sort-merge, ``"HJ"`` selects hash join; anything else,
    including no argument, keeps the nested-loops default.
    """
    if arg == "SM":
        return JoinType.SORT_MERGE
    if arg == "HJ":
        return JoinType.HASH
    return JoinType.NESTED_LOOPS


def banner(join_method: JoinType) -> str:
    """Return the greeting shown when the database is opened."""
    return f"Welcome to Minirel\n    Using {_DESCRIPTIONS[join_method]}"