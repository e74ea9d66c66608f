"""Conversion of parse-tree lists into the argument lists of the query layer."""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass
from itertools import islice
from typing import Optional, Union

from minirel.parser.nodes import AttrTypeNode, AttrValNode, QualAttrNode, ValueNode
from minirel.parser.scanner import MAX_STRING_LEN
from minirel.types import Datatype

MAX_ATTRS = 40
INT_SIZE = 4
FLOAT_SIZE = 4

_INT_FORMAT = ord("i") - 128
_FLOAT_FORMAT = ord("f") - 128


class InterpErrorCode(enum.IntEnum):
    """Errors found while turning a parse tree into query arguments."""

    OK = 0
    INCOMPATIBLE = -1
    TOOMANYATTRS = -2
    NOLENGTH = -3
    INVINTSIZE = -4
    INVFLOATSIZE = -5
    INVFORMATSTRING = -6
    INVSTRLEN = -7
    DUPLICATEATTR = -8
    TOOLONG = -9
    STRINGTOOLONG = -10


_MESSAGES = {
    InterpErrorCode.OK: "no error",
    InterpErrorCode.INCOMPATIBLE: "attributes must be from selected relation(s)",
    InterpErrorCode.TOOMANYATTRS: "too many attributes",
    InterpErrorCode.NOLENGTH: "length must be specified for STRING attribute",
    InterpErrorCode.INVINTSIZE: (
        f"invalid size for INTEGER attribute (should be {INT_SIZE})"
    ),
    InterpErrorCode.INVFLOATSIZE: (
        f"invalid size for FLOAT attribute (should be {FLOAT_SIZE})"
    ),
    InterpErrorCode.INVFORMATSTRING: "invalid format string",
    InterpErrorCode.INVSTRLEN: "invalid length for string attribute",
    InterpErrorCode.DUPLICATEATTR: "duplicated attribute name",
    InterpErrorCode.TOOLONG: "relation name or attribute name too long",
    InterpErrorCode.STRINGTOOLONG: "string attribute too long",
}


def error_message(code: Union[int, InterpErrorCode]) -> str:
    """Return the message describing an interpreter error code."""
    try:
        return _MESSAGES[InterpErrorCode(code)]
    except ValueError:
        return f"unrecognized errval: {int(code)}"


class InterpError(Exception):
    """A parse tree that cannot be turned into query arguments."""

    def __init__(self, code: InterpErrorCode) -> None:
        self.code = InterpErrorCode(code)
        super().__init__(error_message(self.code))


@dataclass(frozen=True)
class AttrDescr:
    """Attribute declaration: name, type and length."""

    attr_name: str
    attr_type: Datatype
    attr_len: int


@dataclass(frozen=True)
class RelAttr:
    """A qualified attribute ``rel_name.attr_name``."""

    rel_name: Optional[str]
    attr_name: str


@dataclass(frozen=True)
class AttrVal:
    """An attribute with the value to store, in string form."""

    attr_name: str
    val_type: Datatype
    val_length: int
    value: str


def _bounded(items: Sequence) -> list:
    """Return the first MAX_ATTRS items, raising if the list reaches the limit."""
    head = list(islice(items, MAX_ATTRS))
    if len(head) == MAX_ATTRS:
        raise InterpError(InterpErrorCode.TOOMANYATTRS)
    return head


def mk_attrnames(
    attrlist: Sequence[QualAttrNode], relname: Optional[str]
) -> tuple[list[str], Optional[str]]:
    """Return the attribute names and the single relation they come from.

    With ``relname`` None the first attribute fixes the relation; every
    attribute must come from it.
    """
    names = []
    for count, attr in enumerate(islice(attrlist, MAX_ATTRS)):
        if relname is None:
            relname = attr.relname
        elif relname != attr.relname:
            raise InterpError(InterpErrorCode.INCOMPATIBLE)
        names.append(attr.attrname)
    if len(names) == MAX_ATTRS:
        raise InterpError(InterpErrorCode.TOOMANYATTRS)
    return names, relname


def mk_qual_attrs(
    attrlist: Sequence[QualAttrNode], relname1: str, relname2: str
) -> list[RelAttr]:
    """Return the qualified attributes; each must come from one of two relations."""
    result = []
    for attr in islice(attrlist, MAX_ATTRS):
        if attr.relname not in (relname1, relname2):
            raise InterpError(InterpErrorCode.INCOMPATIBLE)
        result.append(RelAttr(attr.relname, attr.attrname))
    if len(result) == MAX_ATTRS:
        raise InterpError(InterpErrorCode.TOOMANYATTRS)
    return result


def parse_format_string(fmt: int) -> tuple[Datatype, int]:
    """Decode an attribute type code into its datatype and length.

    ``ord('i') - 128`` is an integer, ``ord('f') - 128`` a real, and a
    value from 1 to 255 a string of that length.
    """
    if fmt == _INT_FORMAT:
        return Datatype.INTEGER, INT_SIZE
    if fmt == _FLOAT_FORMAT:
        return Datatype.FLOAT, FLOAT_SIZE
    if 1 <= fmt <= 255:
        return Datatype.STRING, fmt
    raise InterpError(InterpErrorCode.INVFORMATSTRING)


def mk_attr_descrs(attrlist: Sequence[AttrTypeNode]) -> list[AttrDescr]:
    """Return the declarations of a create statement."""
    result = []
    for attr in islice(attrlist, MAX_ATTRS):
        attr_type, attr_len = parse_format_string(attr.type)
        result.append(AttrDescr(attr.attrname, attr_type, attr_len))
    if len(result) == MAX_ATTRS:
        raise InterpError(InterpErrorCode.TOOMANYATTRS)
    return result


def value_of(node: ValueNode) -> str:
    """Return a literal's value in string form."""
    if node.type == Datatype.INTEGER:
        return f"{int(node.value)}"
    if node.type == Datatype.FLOAT:
        return f"{float(node.value):f}"
    return f"{node.value}"


def mk_ins_attrs(attrlist: Sequence[AttrValNode]) -> list[AttrVal]:
    """Return the attribute values of an insert statement."""
    result = []
    for attr in islice(attrlist, MAX_ATTRS):
        value = attr.value
        if value is None:
            raise ValueError(f"attribute {attr.attrname} has no value")
        if value.type == Datatype.STRING and value.length > MAX_STRING_LEN:
            raise InterpError(InterpErrorCode.STRINGTOOLONG)
        result.append(
            AttrVal(attr.attrname, value.type, value.length, value_of(value))
        )
    if len(result) == MAX_ATTRS:
        raise InterpError(InterpErrorCode.TOOMANYATTRS)
    return result