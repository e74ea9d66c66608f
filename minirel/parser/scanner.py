"""Identifier, reserved-word and quoted-string handling for the scanner."""

from __future__ import annotations

import enum
from typing import Optional

MAX_STRING_LEN = 50


class Token(enum.Enum):
    """Token kinds the scanner hands to the parser."""

    RW_SELECT = enum.auto()
    RW_INSERT = enum.auto()
    RW_DELETE = enum.auto()
    RW_CREATE = enum.auto()
    RW_DESTROY = enum.auto()
    RW_BUILD = enum.auto()
    RW_REBUILD = enum.auto()
    RW_DROP = enum.auto()
    RW_LOAD = enum.auto()
    RW_PRINT = enum.auto()
    RW_HELP = enum.auto()
    RW_QUIT = enum.auto()
    RW_INTO = enum.auto()
    RW_WHERE = enum.auto()
    RW_PRIMARY = enum.auto()
    RW_NUMBUCKETS = enum.auto()
    RW_ALL = enum.auto()
    RW_FROM = enum.auto()
    RW_AS = enum.auto()
    RW_TABLE = enum.auto()
    RW_AND = enum.auto()
    RW_OR = enum.auto()
    RW_NOT = enum.auto()
    RW_VALUES = enum.auto()
    INT_TYPE = enum.auto()
    REAL_TYPE = enum.auto()
    CHAR_TYPE = enum.auto()
    T_STRING = enum.auto()
    NOTOKEN = enum.auto()


RESERVED_WORDS: dict[str, Token] = {
    "select": Token.RW_SELECT,
    "insert": Token.RW_INSERT,
    "delete": Token.RW_DELETE,
    "create": Token.RW_CREATE,
    "destroy": Token.RW_DESTROY,
    "buildindex": Token.RW_BUILD,
    "rebuildindex": Token.RW_REBUILD,
    "dropindex": Token.RW_DROP,
    "load": Token.RW_LOAD,
    "print": Token.RW_PRINT,
    "help": Token.RW_HELP,
    "quit": Token.RW_QUIT,
    "into": Token.RW_INTO,
    "where": Token.RW_WHERE,
    "primary": Token.RW_PRIMARY,
    "numbuckets": Token.RW_NUMBUCKETS,
    "all": Token.RW_ALL,
    "from": Token.RW_FROM,
    "as": Token.RW_AS,
    "table": Token.RW_TABLE,
    "and": Token.RW_AND,
    "or": Token.RW_OR,
    "not": Token.RW_NOT,
    "values": Token.RW_VALUES,
    "int": Token.INT_TYPE,
    "real": Token.REAL_TYPE,
    "char": Token.CHAR_TYPE,
}


def lower(src: str, limit: int) -> str:
    """Return at most ``limit`` characters of ``src`` with A-Z lower-cased."""
    return "".join(
        chr(ord(ch) + 32) if "A" <= ch <= "Z" else ch for ch in src[:limit]
    )


def get_id(text: str) -> tuple[Token, Optional[str]]:
    """Classify a word as a reserved word or an identifier.

    Reserved words are matched case-insensitively and carry no value.
    Identifiers keep their original spelling.  A word of
    ``MAX_STRING_LEN`` characters or more yields ``Token.NOTOKEN`` so
    that the parser reports an error.
    """
    lowered = lower(text, MAX_STRING_LEN)
    if len(lowered) == MAX_STRING_LEN:
        return Token.NOTOKEN, None
    token = RESERVED_WORDS.get(lowered)
    if token is not None:
        return token, None
    return Token.T_STRING, text[:len(lowered)]


def get_qstring(qstring: str) -> str:
    """Strip the surrounding quotes from a quoted string literal."""
    if len(qstring) < 2:
        raise ValueError(f"not a quoted string: {qstring!r}")
    return qstring[1:-1]