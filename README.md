# minirel

`minirel` holds the building blocks of a small relational database engine,
in pure Python with no third-party dependencies.

## What is in it

- **Slotted data pages** (`minirel.page`). A `Page` stores variable-length
  records addressed by a `RID` (page number, slot number). Its free space is
  accounted as for a 1024-byte page with a fixed header and a 4-byte slot
  per record. `insert_record(data)` returns a `RID` and reuses a freed slot
  when there is one; `delete_record(rid)` removes the record, compacts the
  record area and trims free slots at the end of the slot array;
  `get_record(rid)` returns the bytes. `first_record()` and
  `next_record(rid)` return `None` at the end, iterating a page yields its
  `RID`s in slot order, and `dump()` describes the header and slots.
  Running out of room raises `NoSpaceError`; a bad slot raises
  `InvalidSlotError`. Both derive from `PageError`.
- **Sorting and partitioning** (`minirel.sorting`). `SortedFile(records,
  offset, length, datatype, max_items)` sorts binary records on one
  attribute by splitting them into sorted runs of at most `max_items`
  records and merging the runs. `next()` returns the next record or
  `None`; the object is also iterable. `set_mark()` remembers a position
  and `goto_mark()` returns to it, as a sort-merge join needs. Bad
  parameters raise `SortError`. `compare_fields` compares two attribute
  values (little-endian 4-byte integers or floats, or strings byte-wise
  over the shorter length). `partition(records, count, hashfcn)` splits
  records into `count` lists using `hashfcn(record, count)`.
- **Column printing** (`minirel.printing`). Given `AttrDesc` descriptions,
  `compute_widths`, `format_header`, `format_separator` and `format_record`
  lay tuples out in columns: integer and float columns are 5 to 7
  characters wide, string columns at most 20, and floats show two decimals.
- **Query-language front end** (`minirel.parser`):
  - `minirel.parser.nodes`: parse-tree node dataclasses (`QueryNode`,
    `InsertNode`, `DeleteNode`, `CreateNode`, `SelectNode`, `JoinNode`,
    `ValueNode` and the rest), the literal constructors `int_node`,
    `float_node` and `string_node`, `merge_attr_value_list` (raises
    `ValueError` when the lists differ in length), and alias resolution
    with `find_match_in_alias`, `replace_alias_in_qualattr_list` and
    `replace_alias_in_condition` (which raise `AliasError`).
  - `minirel.parser.scanner`: `get_id` classifies a word as a reserved
    word or an identifier and returns a `Token` with its value; words of
    50 characters or more give `Token.NOTOKEN`. `get_qstring` strips the
    quotes from a quoted literal.
  - `minirel.parser.echo`: `echo_query` renders a statement node back as
    query text, built from `format_qual`, `format_value` and friends.
  - `minirel.parser.interp`: `mk_attrnames`, `mk_qual_attrs`,
    `mk_attr_descrs` and `mk_ins_attrs` turn node lists into attribute
    lists; `parse_format_string` decodes attribute type codes; `value_of`
    gives a literal in string form. Problems raise `InterpError` with an
    `InterpErrorCode`, described by `error_message`.
- **Common types** (`minirel.types`): the `Datatype`, `Operator` and
  `JoinType` enumerations. `join_method_from_arg` maps `"SM"` or `"HJ"` to
  a join method, with nested loops as the default, and `banner` returns the
  welcome text for a join method.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from minirel.page import Page

page = Page(0)
rid = page.insert_record(b"hello")
assert page.get_record(rid) == b"hello"
page.delete_record(rid)
assert page.first_record() is None
```

## Sample data

`minirel.testdata` holds the sample "soaps" and "stars" relations as
fixed-layout little-endian binary tuples (`Soap`, `Star`, `encode_soaps`,
`encode_stars`). To write `stars.data` and `soaps.data` into a directory
(the current one by default), run:

```
minirel-testdata [directory]
```

From Python, call `minirel.testdata.write_files(directory)`.

## What it does not do

There is no storage layer here: no heap files on disk, buffer manager or
relation and attribute catalogs. Pages and sorted runs live in memory.
There is no interactive query shell and no text parser that builds parse
trees from query text; the front-end modules work on trees built from the
node classes. Selections, joins, inserts, deletes, loading data files into
relations and printing stored relations are not carried out by the
package.