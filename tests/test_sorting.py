import struct

import pytest
from hypothesis import given
from hypothesis import strategies as st

from minirel.sorting import SortError, SortedFile, compare_fields, partition
from minirel.types import Datatype


def _int_rec(value, tag=0):
    return struct.pack("<ii", tag, value)


def _int_of(record):
    return struct.unpack("<ii", record)[1]


def test_compare_fields_integers():
    assert compare_fields(struct.pack("<i", 1), struct.pack("<i", 5), Datatype.INTEGER) == -1
    assert compare_fields(struct.pack("<i", 5), struct.pack("<i", 1), Datatype.INTEGER) == 1
    assert compare_fields(struct.pack("<i", -3), struct.pack("<i", -3), Datatype.INTEGER) == 0


def test_compare_fields_floats():
    assert compare_fields(struct.pack("<f", 1.5), struct.pack("<f", 2.5), Datatype.FLOAT) == -1
    assert compare_fields(struct.pack("<f", 2.5), struct.pack("<f", 2.5), Datatype.FLOAT) == 0


def test_compare_fields_strings_use_shorter_length():
    assert compare_fields(b"abc", b"abd", Datatype.STRING) == -1
    assert compare_fields(b"abc", b"ab", Datatype.STRING) == 0
    assert compare_fields(b"b", b"a", Datatype.STRING) == 1


def test_sorts_integers_across_runs():
    values = [7, 3, 9, 1, 4, 8, 2, 6, 5, 0]
    sf = SortedFile([_int_rec(v) for v in values], 4, 4, Datatype.INTEGER, 3)
    assert sf.run_count == 4
    assert [_int_of(r) for r in sf] == sorted(values)


def test_sorts_strings():
    names = [b"delta", b"alpha", b"charl", b"bravo"]
    sf = SortedFile(names, 0, 5, Datatype.STRING, 2)
    assert list(sf) == sorted(names)


def test_sorts_floats():
    values = [2.5, -1.0, 0.25, 9.0]
    records = [struct.pack("<f", v) for v in values]
    sf = SortedFile(records, 0, 4, Datatype.FLOAT, 2)
    assert [struct.unpack("<f", r)[0] for r in sf] == sorted(values)


def test_empty_input_yields_nothing():
    sf = SortedFile([], 0, 4, Datatype.INTEGER, 2)
    assert sf.next() is None
    assert sf.run_count == 0


def test_equal_keys_keep_input_order():
    records = [_int_rec(1, tag) for tag in range(6)]
    sf = SortedFile(records, 4, 4, Datatype.INTEGER, 2)
    assert list(sf) == records


def test_goto_mark_replays_from_marked_record():
    values = [5, 2, 4, 1, 3]
    sf = SortedFile([_int_rec(v) for v in values], 4, 4, Datatype.INTEGER, 2)
    first = sf.next()
    sf.set_mark()
    assert _int_of(sf.next()) == 2
    assert _int_of(sf.next()) == 3
    sf.goto_mark()
    assert sf.next() == first
    assert [_int_of(r) for r in sf] == [2, 3, 4, 5]


def test_goto_mark_without_mark_raises():
    sf = SortedFile([_int_rec(1), _int_rec(2)], 4, 4, Datatype.INTEGER, 2)
    with pytest.raises(SortError):
        sf.goto_mark()


@pytest.mark.parametrize(
    "offset,length,datatype,max_items",
    [
        (-1, 4, Datatype.INTEGER, 2),
        (0, 0, Datatype.STRING, 2),
        (0, 8, Datatype.INTEGER, 2),
        (0, 2, Datatype.FLOAT, 2),
        (0, 4, Datatype.INTEGER, 1),
        (0, 4, 99, 2),
    ],
)
def test_bad_parameters_raise(offset, length, datatype, max_items):
    with pytest.raises(SortError):
        SortedFile([_int_rec(1)], offset, length, datatype, max_items)


def test_short_record_raises():
    with pytest.raises(SortError):
        SortedFile([b"ab"], 0, 4, Datatype.INTEGER, 2)


def test_partition_places_by_hash():
    records = [_int_rec(v) for v in range(10)]
    parts = partition(records, 3, lambda rec, p: _int_of(rec) % p)
    assert len(parts) == 3
    for index, part in enumerate(parts):
        assert all(_int_of(r) % 3 == index for r in part)
    assert sorted(r for part in parts for r in part) == sorted(records)


def test_partition_rejects_bad_hash_and_count():
    with pytest.raises(ValueError):
        partition([b"x"], 2, lambda rec, p: p)
    with pytest.raises(ValueError):
        partition([b"x"], 0, lambda rec, p: 0)


@given(
    st.lists(st.integers(min_value=-(2**31), max_value=2**31 - 1), max_size=40),
    st.integers(min_value=2, max_value=7),
)
def test_sorted_output_is_permutation_in_order(values, max_items):
    sf = SortedFile([_int_rec(v) for v in values], 4, 4, Datatype.INTEGER, max_items)
    assert [_int_of(r) for r in sf] == sorted(values)