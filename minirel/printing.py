"""Column formatting for printing the tuples of a relation."""

from __future__ import annotations

import struct
from collections.abc import Sequence
from dataclasses import dataclass

from minirel.types import Datatype


@dataclass(frozen=True)
class AttrDesc:
    """Catalog description of one attribute."""

    rel_name: str
    attr_name: str
    attr_offset: int
    attr_type: Datatype
    attr_len: int


def compute_widths(attrs: Sequence[AttrDesc]) -> list[int]:
    """Return the display width of each attribute's column."""
    widths = []
    for attr in attrs:
        name_len = len(attr.attr_name)
        if attr.attr_type == Datatype.STRING:
            widths.append(min(max(name_len, attr.attr_len), 20))
        else:
            widths.append(min(max(name_len, 5), 7))
    return widths


def format_header(attrs: Sequence[AttrDesc], widths: Sequence[int]) -> str:
    """Return the line of column titles."""
    return "".join(
        f"{attr.attr_name[:width]:<{width}} " for attr, width in zip(attrs, widths)
    )


def format_separator(widths: Sequence[int]) -> str:
    """Return the dashed line drawn under the column titles."""
    return "".join("-" * width + "  " for width in widths)


def _field_text(attr: AttrDesc, width: int, data: bytes) -> str:
    offset = attr.attr_offset
    if attr.attr_type == Datatype.INTEGER:
        (value,) = struct.unpack_from("<i", data, offset)
        return f"{value:<{width}d}"
    if attr.attr_type == Datatype.FLOAT:
        (value,) = struct.unpack_from("<f", data, offset)
        return f"{value:<{width}.2f}"
    raw = bytes(data[offset:offset + attr.attr_len]).split(b"\0", 1)[0]
    return f"{raw.decode('latin-1')[:width]:<{width}}"


def format_record(
    attrs: Sequence[AttrDesc], widths: Sequence[int], data: bytes
) -> str:
    """Return one tuple laid out in the given columns."""
    return "".join(
        _field_text(attr, width, data) + "  " for attr, width in zip(attrs, widths)
    )