"""External-style merge sort over runs of records, and hash partitioning."""

from __future__ import annotations

import functools
import struct
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field

from minirel.types import Datatype

_INT = struct.Struct("<i")
_FLOAT = struct.Struct("<f")


class SortError(Exception):
    """Invalid sort parameters or records that cannot be sorted."""


def compare_fields(first: bytes, second: bytes, datatype: Datatype) -> int:
    """Compare two attribute values; return -1, 0 or 1.

    Integers and floats are read in their binary layout; strings are
    compared byte-wise over the length of the shorter one.
    """
    if datatype == Datatype.INTEGER:
        (a,) = _INT.unpack_from(first)
        (b,) = _INT.unpack_from(second)
        diff: float = a - b
    elif datatype == Datatype.FLOAT:
        (a,) = _FLOAT.unpack_from(first)
        (b,) = _FLOAT.unpack_from(second)
        diff = a - b
    else:
        size = min(len(first), len(second))
        left, right = bytes(first[:size]), bytes(second[:size])
        diff = (left > right) - (left < right)
    if diff < 0:
        return -1
    if diff > 0:
        return 1
    return 0


def partition(
    records: Iterable[bytes],
    count: int,
    hashfcn: Callable[[bytes, int], int],
) -> list[list[bytes]]:
    """Split records into ``count`` partitions chosen by ``hashfcn(record, count)``."""
    if count < 1:
        raise ValueError(f"number of partitions must be positive, got {count}")
    parts: list[list[bytes]] = [[] for _ in range(count)]
    for record in records:
        index = hashfcn(record, count)
        if not 0 <= index < count:
            raise ValueError(f"hash value {index} outside 0..{count - 1}")
        parts[index].append(bytes(record))
    return parts


@dataclass
class _Run:
    records: list[bytes]
    cursor: int = 0  # index of the next record to fetch
    pos: int = -1  # index of the record held, -1 when none or at end
    valid: bool = False  # True when ``pos`` reflects a fetched record
    mark: tuple[int, int] | None = field(default=None)

    def fetch(self) -> None:
        if self.cursor < len(self.records):
            self.pos = self.cursor
            self.cursor += 1
        else:
            self.pos = -1
        self.valid = True

    @property
    def current(self) -> bytes:
        return self.records[self.pos]


class SortedFile:
    """Records sorted on one attribute, produced by merging sorted runs."""

    def __init__(
        self,
        records: Iterable[bytes],
        offset: int,
        length: int,
        datatype: Datatype,
        max_items: int,
    ) -> None:
        if offset < 0 or length < 1:
            raise SortError(f"bad sort attribute offset {offset} / length {length}")
        try:
            datatype = Datatype(datatype)
        except ValueError:
            raise SortError(f"bad sort attribute type {datatype!r}") from None
        if datatype in (Datatype.INTEGER, Datatype.FLOAT) and length != 4:
            raise SortError(f"{datatype.name} attribute must be 4 bytes, got {length}")
        if max_items < 2:
            raise SortError(f"sort buffer must hold at least 2 items, got {max_items}")
        self.offset = offset
        self.length = length
        self.datatype = datatype
        self.max_items = max_items
        self._runs = [_Run(run) for run in self._generate_runs(records)]

    def _field(self, record: bytes) -> bytes:
        value = record[self.offset:self.offset + self.length]
        if len(value) < self.length:
            raise SortError(
                f"record of {len(record)} bytes too short for attribute at "
                f"offset {self.offset}, length {self.length}"
            )
        return value

    def _generate_runs(self, records: Iterable[bytes]) -> Iterator[list[bytes]]:
        key = functools.cmp_to_key(
            lambda a, b: compare_fields(a[0], b[0], self.datatype)
        )
        buffer: list[tuple[bytes, bytes]] = []
        for record in records:
            record = bytes(record)
            buffer.append((self._field(record), record))
            if len(buffer) == self.max_items:
                yield self._sorted_run(buffer, key)
                buffer = []
        if buffer:
            yield self._sorted_run(buffer, key)

    @staticmethod
    def _sorted_run(
        buffer: Sequence[tuple[bytes, bytes]], key: Callable
    ) -> list[bytes]:
        return [record for _, record in sorted(buffer, key=key)]

    @property
    def run_count(self) -> int:
        """Number of sorted sub-runs the input was split into."""
        return len(self._runs)

    def next(self) -> bytes | None:
        """Return the next record in sort order, or None when none is left."""
        smallest: _Run | None = None
        for run in self._runs:
            if not run.valid:
                run.fetch()
            if run.pos < 0:
                continue
            if smallest is None or compare_fields(
                self._field(smallest.current), self._field(run.current), self.datatype
            ) > 0:
                smallest = run
        if smallest is None:
            return None
        smallest.valid = False
        return smallest.current

    def __iter__(self) -> Iterator[bytes]:
        while (record := self.next()) is not None:
            yield record

    def set_mark(self) -> None:
        """Remember the current position in the sorted sequence."""
        for run in self._runs:
            run.mark = (run.pos, run.cursor)

    def goto_mark(self) -> None:
        """Return to the position saved by the last ``set_mark``.

        The record that was last returned when the mark was set is
        delivered again by the following ``next``.
        """
        for run in self._runs:
            if run.mark is None:
                raise SortError("no mark has been set")
            run.pos, run.cursor = run.mark
            run.valid = True