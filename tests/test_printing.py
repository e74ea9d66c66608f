import struct

from minirel.printing import (
    AttrDesc,
    compute_widths,
    format_header,
    format_record,
    format_separator,
)
from minirel.testdata import SOAPS
from minirel.types import Datatype

SOAP_ATTRS = [
    AttrDesc("soaps", "soapid", 0, Datatype.INTEGER, 4),
    AttrDesc("soaps", "sname", 4, Datatype.STRING, 28),
    AttrDesc("soaps", "network", 32, Datatype.STRING, 4),
    AttrDesc("soaps", "rating", 36, Datatype.FLOAT, 4),
]


def test_numeric_widths_are_clamped():
    attrs = [
        AttrDesc("r", "id", 0, Datatype.INTEGER, 4),
        AttrDesc("r", "soapid", 0, Datatype.INTEGER, 4),
        AttrDesc("r", "averyverylongname", 0, Datatype.FLOAT, 4),
    ]
    assert compute_widths(attrs) == [5, len("soapid"), 7]


def test_string_widths():
    attrs = [
        AttrDesc("r", "sname", 0, Datatype.STRING, 28),
        AttrDesc("r", "n", 0, Datatype.STRING, 3),
    ]
    assert compute_widths(attrs) == [20, 3]


def test_header_and_separator_lengths():
    widths = compute_widths(SOAP_ATTRS)
    header = format_header(SOAP_ATTRS, widths)
    separator = format_separator(widths)
    assert len(header) == sum(w + 1 for w in widths)
    assert len(separator) == sum(w + 2 for w in widths)
    assert set(separator) == {"-", " "}
    assert header.split() == [a.attr_name for a in SOAP_ATTRS]


def test_integer_and_float_fields():
    attrs = [
        AttrDesc("r", "a", 0, Datatype.INTEGER, 4),
        AttrDesc("r", "b", 4, Datatype.FLOAT, 4),
    ]
    widths = compute_widths(attrs)
    line = format_record(attrs, widths, struct.pack("<if", 42, 7.5))
    assert line.split() == ["42", "7.50"]
    assert len(line) == sum(w + 2 for w in widths)


def test_string_stops_at_nul_and_truncates():
    attrs = [
        AttrDesc("r", "s", 0, Datatype.STRING, 7),
        AttrDesc("r", "t", 7, Datatype.STRING, 30),
    ]
    widths = compute_widths(attrs)
    long_text = "x" * 30
    data = b"abc\0xyz" + long_text.encode()
    fields = format_record(attrs, widths, data).split()
    assert fields == ["abc", long_text[:widths[1]]]


def test_soap_record_line():
    widths = compute_widths(SOAP_ATTRS)
    line = format_record(SOAP_ATTRS, widths, SOAPS[0].pack())
    assert line.split() == ["0", "Days", "of", "Our", "Lives", "NBC", "7.02"]