"""Parse-tree nodes for the query language and alias resolution."""

from __future__ import annotations

import enum
import struct
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union

from minirel.types import Datatype, Operator

_FLOAT32 = struct.Struct("<f")


class NodeKind(enum.Enum):
    """Every kind of node a parse tree can hold."""

    QUERY = enum.auto()
    INSERT = enum.auto()
    DELETE = enum.auto()
    CREATE = enum.auto()
    DESTROY = enum.auto()
    BUILD = enum.auto()
    REBUILD = enum.auto()
    DROP = enum.auto()
    LOAD = enum.auto()
    PRINT = enum.auto()
    HELP = enum.auto()
    SELECT = enum.auto()
    JOIN = enum.auto()
    PRIMATTR = enum.auto()
    QUALATTR = enum.auto()
    ATTRVAL = enum.auto()
    ATTRTYPE = enum.auto()
    VALUE = enum.auto()
    LIST = enum.auto()
    ALIAS = enum.auto()


class AliasError(Exception):
    """A relation qualifier is missing or names no relation in the query."""


@dataclass
class QualAttrNode:
    """A qualified attribute ``relname.attrname``; relname may be unset."""

    kind: ClassVar[NodeKind] = NodeKind.QUALATTR
    relname: Optional[str]
    attrname: str


@dataclass
class ValueNode:
    """A literal value with its type and, for strings, its length."""

    kind: ClassVar[NodeKind] = NodeKind.VALUE
    type: Datatype
    value: Union[int, float, str]
    length: int = 0


@dataclass
class SelectNode:
    """Qualification of the form ``attr op value``."""

    kind: ClassVar[NodeKind] = NodeKind.SELECT
    selattr: QualAttrNode
    op: Operator
    value: ValueNode


@dataclass
class JoinNode:
    """Qualification of the form ``attr1 op attr2``."""

    kind: ClassVar[NodeKind] = NodeKind.JOIN
    joinattr1: QualAttrNode
    op: Operator
    joinattr2: QualAttrNode


Qualification = Union[SelectNode, JoinNode]


@dataclass
class PrimAttrNode:
    """Primary attribute of a relation and its number of buckets."""

    kind: ClassVar[NodeKind] = NodeKind.PRIMATTR
    attrname: str
    nbuckets: int


@dataclass
class AttrValNode:
    """An ``attribute = value`` pair of an insert."""

    kind: ClassVar[NodeKind] = NodeKind.ATTRVAL
    attrname: str
    value: Optional[ValueNode] = None


@dataclass
class AttrTypeNode:
    """An attribute declaration of a create.

    ``type`` is ``ord('i') - 128`` for integers, ``ord('f') - 128`` for
    reals, and otherwise the length of a string attribute.
    """

    kind: ClassVar[NodeKind] = NodeKind.ATTRTYPE
    attrname: str
    type: int


@dataclass
class AliasNode:
    """A relation named in a query, with its optional alias."""

    kind: ClassVar[NodeKind] = NodeKind.ALIAS
    relname: str
    alias: Optional[str] = None


@dataclass
class QueryNode:
    """A select, optionally into a named result relation."""

    kind: ClassVar[NodeKind] = NodeKind.QUERY
    relname: Optional[str]
    attrlist: list[QualAttrNode] = field(default_factory=list)
    qual: Optional[Qualification] = None


@dataclass
class InsertNode:
    """An insert of attribute values into a relation."""

    kind: ClassVar[NodeKind] = NodeKind.INSERT
    relname: str
    attrlist: list[AttrValNode] = field(default_factory=list)


@dataclass
class DeleteNode:
    """A delete from a relation, with an optional qualification."""

    kind: ClassVar[NodeKind] = NodeKind.DELETE
    relname: str
    qual: Optional[Qualification] = None


@dataclass
class CreateNode:
    """Creation of a relation from attribute declarations."""

    kind: ClassVar[NodeKind] = NodeKind.CREATE
    relname: str
    attrlist: list[AttrTypeNode] = field(default_factory=list)
    primattr: Optional[PrimAttrNode] = None


@dataclass
class DestroyNode:
    """Destruction of a relation."""

    kind: ClassVar[NodeKind] = NodeKind.DESTROY
    relname: str


@dataclass
class BuildNode:
    """Building an index on an attribute."""

    kind: ClassVar[NodeKind] = NodeKind.BUILD
    relname: str
    attrname: str
    nbuckets: int


@dataclass
class RebuildNode:
    """Rebuilding an index on an attribute."""

    kind: ClassVar[NodeKind] = NodeKind.REBUILD
    relname: str
    attrname: str
    nbuckets: int


@dataclass
class DropNode:
    """Dropping an index, or all indices when no attribute is given."""

    kind: ClassVar[NodeKind] = NodeKind.DROP
    relname: str
    attrname: Optional[str] = None


@dataclass
class LoadNode:
    """Loading a file of binary tuples into a relation."""

    kind: ClassVar[NodeKind] = NodeKind.LOAD
    relname: str
    filename: str


@dataclass
class PrintNode:
    """Printing the contents of a relation."""

    kind: ClassVar[NodeKind] = NodeKind.PRINT
    relname: str


@dataclass
class HelpNode:
    """Help on one relation, or on all when none is given."""

    kind: ClassVar[NodeKind] = NodeKind.HELP
    relname: Optional[str] = None


def int_node(ival: int) -> ValueNode:
    """Return an integer literal node."""
    return ValueNode(Datatype.INTEGER, int(ival), 0)


def float_node(rval: float) -> ValueNode:
    """Return a real literal node, held at single precision."""
    (value,) = _FLOAT32.unpack(_FLOAT32.pack(rval))
    return ValueNode(Datatype.FLOAT, value, 0)


def string_node(sval: str) -> ValueNode:
    """Return a string literal node carrying the string's length."""
    return ValueNode(Datatype.STRING, sval, len(sval))


def merge_attr_value_list(
    attr_list: Sequence[AttrValNode], value_list: Sequence[ValueNode]
) -> list[AttrValNode]:
    """Attach each value to the attribute in the same position.

    Raises ValueError when the two lists differ in length.
    """
    if len(value_list) < len(attr_list):
        raise ValueError("value list is shorter than attr list")
    if len(value_list) > len(attr_list):
        raise ValueError("value list is longer than attr list")
    for attr, value in zip(attr_list, value_list):
        attr.value = value
    return list(attr_list)


def find_match_in_alias(
    aliases: Sequence[AliasNode], rel_alias: Optional[str]
) -> Optional[str]:
    """Return the relation named by ``rel_alias``, or None if nothing matches.

    A relation name matches itself; an alias matches its relation.
    """
    if rel_alias is None:
        return None
    for node in aliases:
        if node.relname == rel_alias:
            return rel_alias
        if node.alias is not None and node.alias == rel_alias:
            return node.relname
    return None


def _resolve(aliases: Sequence[AliasNode], attr: QualAttrNode) -> None:
    if attr.relname is None:
        if len(aliases) > 1:
            raise AliasError(
                "must have relation qualifier before attributes "
                "if multiple tables are involved in the query"
            )
        if not aliases:
            raise AliasError("no relation named in the query")
        attr.relname = aliases[0].relname
        return
    match = find_match_in_alias(aliases, attr.relname)
    if match is None:
        raise AliasError(f"relation qualifier {attr.relname} not found")
    attr.relname = match


def replace_alias_in_qualattr_list(
    aliases: Sequence[AliasNode], qualattr_list: Sequence[QualAttrNode]
) -> list[QualAttrNode]:
    """Replace relation aliases in the attributes with relation names."""
    for attr in qualattr_list:
        _resolve(aliases, attr)
    return list(qualattr_list)


def replace_alias_in_condition(
    aliases: Sequence[AliasNode], where: Optional[Qualification]
) -> Optional[Qualification]:
    """Replace relation aliases in a qualification with relation names."""
    if where is None:
        return None
    if isinstance(where, SelectNode):
        _resolve(aliases, where.selattr)
    else:
        _resolve(aliases, where.joinattr1)
        _resolve(aliases, where.joinattr2)
    return where