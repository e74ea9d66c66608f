"""Rendering parse trees back into query text."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Optional, Union

from minirel.parser.nodes import (
    AttrTypeNode,
    AttrValNode,
    BuildNode,
    CreateNode,
    DeleteNode,
    DestroyNode,
    DropNode,
    HelpNode,
    InsertNode,
    JoinNode,
    LoadNode,
    PrimAttrNode,
    PrintNode,
    QualAttrNode,
    QueryNode,
    RebuildNode,
    SelectNode,
    ValueNode,
)
from minirel.types import Datatype, Operator

_INT_FORMAT = ord("i") - 128
_FLOAT_FORMAT = ord("f") - 128

_OPERATORS = {
    Operator.LT: " <",
    Operator.LTE: " <=",
    Operator.EQ: " =",
    Operator.GT: " >",
    Operator.GTE: " >=",
    Operator.NE: " <>",
}


def format_op(op: Operator) -> str:
    """Return the operator with a leading space, or '' if unknown."""
    try:
        return _OPERATORS.get(Operator(op), "")
    except ValueError:
        return ""


def format_value(node: ValueNode) -> str:
    """Return a literal with a leading space; strings are quoted."""
    if node.type == Datatype.INTEGER:
        return f" {int(node.value)}"
    if node.type == Datatype.FLOAT:
        return f" {float(node.value):f}"
    if node.type == Datatype.STRING:
        return f' "{node.value}"'
    return ""


def format_qualattr(node: QualAttrNode) -> str:
    """Return ``relname.attrname``, or only the attribute when unqualified."""
    if node.relname is None:
        return node.attrname
    return f"{node.relname}.{node.attrname}"


def format_qual(node: Optional[Union[SelectNode, JoinNode]]) -> str:
    """Return the ``where`` clause, or '' when there is no qualification."""
    if node is None:
        return ""
    if isinstance(node, SelectNode):
        return (
            " where "
            + format_qualattr(node.selattr)
            + format_op(node.op)
            + format_value(node.value)
        )
    return (
        " where "
        + format_qualattr(node.joinattr1)
        + format_op(node.op)
        + " "
        + format_qualattr(node.joinattr2)
    )


def format_attrnames(attrs: Sequence[QualAttrNode]) -> str:
    """Return the qualified attributes separated by commas."""
    return ", ".join(format_qualattr(attr) for attr in attrs)


def format_attrvals(attrs: Sequence[AttrValNode]) -> str:
    """Return the ``attr = value`` pairs separated by commas."""
    parts = []
    for attr in attrs:
        if attr.value is None:
            raise ValueError(f"attribute {attr.attrname} has no value")
        parts.append(f"{attr.attrname} =" + format_value(attr.value))
    return ", ".join(parts)


def _type_text(fmt: int) -> str:
    if fmt == _INT_FORMAT:
        return "int"
    if fmt == _FLOAT_FORMAT:
        return "real"
    if 1 <= fmt <= 255:
        return f"char({fmt})"
    return ""


def format_attrdescrs(attrs: Sequence[AttrTypeNode]) -> str:
    """Return the attribute declarations separated by commas."""
    return ", ".join(f"{attr.attrname} = " + _type_text(attr.type) for attr in attrs)


def format_primattr(node: Optional[PrimAttrNode]) -> str:
    """Return the primary-attribute clause, or '' when there is none."""
    if node is None:
        return ""
    return f" primary {node.attrname} numbuckets = {node.nbuckets}"


def echo_query(node: object) -> str:
    """Return the statement text of a parse tree, ending in ';'."""
    if isinstance(node, QueryNode):
        into = f" into {node.relname}" if node.relname is not None else ""
        return (
            f"select{into} ({format_attrnames(node.attrlist)})"
            + format_qual(node.qual)
            + ";"
        )
    if isinstance(node, InsertNode):
        return f"insert {node.relname} ({format_attrvals(node.attrlist)});"
    if isinstance(node, DeleteNode):
        return f"delete {node.relname}" + format_qual(node.qual) + ";"
    if isinstance(node, CreateNode):
        return (
            f"create {node.relname} ({format_attrdescrs(node.attrlist)})"
            + format_primattr(node.primattr)
            + ";"
        )
    if isinstance(node, DestroyNode):
        return f"destroy {node.relname};"
    if isinstance(node, BuildNode):
        return f"buildindex {node.relname}({node.attrname});"
    if isinstance(node, RebuildNode):
        return (
            f"rebuildindex {node.relname}({node.attrname}) "
            f"numbuckets = {node.nbuckets};"
        )
    if isinstance(node, DropNode):
        attr = f"({node.attrname})" if node.attrname is not None else ""
        return f"dropindex {node.relname}{attr};"
    if isinstance(node, LoadNode):
        return f'load {node.relname}("{node.filename}");'
    if isinstance(node, PrintNode):
        return f"print {node.relname};"
    if isinstance(node, HelpNode):
        rel = f" {node.relname}" if node.relname is not None else ""
        return f"help{rel};"
    raise ValueError(f"cannot echo node {node!r}")