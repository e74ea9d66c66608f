import pytest
from hypothesis import given
from hypothesis import strategies as st

from minirel.parser.interp import (
    AttrDescr,
    AttrVal,
    InterpError,
    InterpErrorCode,
    RelAttr,
    error_message,
    mk_attr_descrs,
    mk_attrnames,
    mk_ins_attrs,
    mk_qual_attrs,
    parse_format_string,
    value_of,
)
from minirel.parser.nodes import (
    AttrTypeNode,
    AttrValNode,
    QualAttrNode,
    float_node,
    int_node,
    string_node,
)
from minirel.types import Datatype


def test_mk_attrnames_takes_relation_from_first_attribute():
    attrs = [QualAttrNode("soaps", "sname"), QualAttrNode("soaps", "rating")]
    names, rel = mk_attrnames(attrs, None)
    assert names == ["sname", "rating"]
    assert rel == "soaps"


def test_mk_attrnames_uses_given_relation():
    names, rel = mk_attrnames([QualAttrNode("stars", "plays")], "stars")
    assert (names, rel) == (["plays"], "stars")


def test_mk_attrnames_rejects_mixed_relations():
    attrs = [QualAttrNode("soaps", "sname"), QualAttrNode("stars", "plays")]
    with pytest.raises(InterpError) as info:
        mk_attrnames(attrs, None)
    assert info.value.code == InterpErrorCode.INCOMPATIBLE


def test_mk_attrnames_rejects_other_relation():
    with pytest.raises(InterpError) as info:
        mk_attrnames([QualAttrNode("soaps", "sname")], "stars")
    assert info.value.code == InterpErrorCode.INCOMPATIBLE


def test_mk_attrnames_limit():
    attrs = [QualAttrNode("r", f"a{i}") for i in range(40)]
    with pytest.raises(InterpError) as info:
        mk_attrnames(attrs, None)
    assert info.value.code == InterpErrorCode.TOOMANYATTRS
    names, _ = mk_attrnames(attrs[:39], None)
    assert len(names) == 39


def test_mk_qual_attrs():
    attrs = [QualAttrNode("soaps", "sname"), QualAttrNode("stars", "plays")]
    result = mk_qual_attrs(attrs, "soaps", "stars")
    assert result == [RelAttr("soaps", "sname"), RelAttr("stars", "plays")]


def test_mk_qual_attrs_rejects_third_relation():
    with pytest.raises(InterpError) as info:
        mk_qual_attrs([QualAttrNode("other", "x")], "soaps", "stars")
    assert info.value.code == InterpErrorCode.INCOMPATIBLE


def test_parse_format_string_int_and_real():
    assert parse_format_string(ord("i") - 128) == (Datatype.INTEGER, 4)
    assert parse_format_string(ord("f") - 128) == (Datatype.FLOAT, 4)


@given(st.integers(min_value=1, max_value=255))
def test_parse_format_string_strings(length):
    assert parse_format_string(length) == (Datatype.STRING, length)


@pytest.mark.parametrize("fmt", [0, 256, -1, 1000])
def test_parse_format_string_invalid(fmt):
    with pytest.raises(InterpError) as info:
        parse_format_string(fmt)
    assert info.value.code == InterpErrorCode.INVFORMATSTRING


def test_mk_attr_descrs():
    attrs = [
        AttrTypeNode("soapid", ord("i") - 128),
        AttrTypeNode("sname", 28),
        AttrTypeNode("rating", ord("f") - 128),
    ]
    assert mk_attr_descrs(attrs) == [
        AttrDescr("soapid", Datatype.INTEGER, 4),
        AttrDescr("sname", Datatype.STRING, 28),
        AttrDescr("rating", Datatype.FLOAT, 4),
    ]


def test_mk_attr_descrs_propagates_format_error():
    with pytest.raises(InterpError) as info:
        mk_attr_descrs([AttrTypeNode("bad", 0)])
    assert info.value.code == InterpErrorCode.INVFORMATSTRING


def test_value_of_int_and_string():
    assert value_of(int_node(42)) == "42"
    assert value_of(string_node("NBC")) == "NBC"


def test_value_of_float_round_trip():
    text = value_of(float_node(7.0))
    assert float(text) == 7.0
    assert len(text.split(".")[1]) == 6


def test_mk_ins_attrs():
    attrs = [
        AttrValNode("soapid", int_node(3)),
        AttrValNode("network", string_node("ABC")),
    ]
    assert mk_ins_attrs(attrs) == [
        AttrVal("soapid", Datatype.INTEGER, 0, "3"),
        AttrVal("network", Datatype.STRING, 3, "ABC"),
    ]


def test_mk_ins_attrs_string_limit():
    ok = mk_ins_attrs([AttrValNode("s", string_node("x" * 50))])
    assert ok[0].val_length == 50
    with pytest.raises(InterpError) as info:
        mk_ins_attrs([AttrValNode("s", string_node("x" * 51))])
    assert info.value.code == InterpErrorCode.STRINGTOOLONG


def test_mk_ins_attrs_missing_value():
    with pytest.raises(ValueError):
        mk_ins_attrs([AttrValNode("s")])


def test_error_messages():
    assert error_message(InterpErrorCode.INCOMPATIBLE) == (
        "attributes must be from selected relation(s)"
    )
    assert error_message(-2) == "too many attributes"
    assert error_message(-99) == "unrecognized errval: -99"


def test_interp_error_message_matches_code():
    err = InterpError(InterpErrorCode.STRINGTOOLONG)
    assert str(err) == "string attribute too long"
    assert err.code == InterpErrorCode.STRINGTOOLONG