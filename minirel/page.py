"""Slotted data page holding variable-length records."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

PAGE_SIZE = 1024
SLOT_SIZE = 4
# one slot, four shorts and two ints of header
DP_FIXED = SLOT_SIZE + 4 * 2 + 2 * 4
DATA_SIZE = PAGE_SIZE - DP_FIXED


@dataclass(frozen=True)
class RID:
    """Record identifier: page number and slot number."""

    page_no: int
    slot_no: int


NULL_RID = RID(-1, -1)


class PageError(Exception):
    """Base class for page errors."""


class NoSpaceError(PageError):
    """The page has not enough free space for the record."""


class InvalidSlotError(PageError):
    """The record identifier does not name a record on the page."""


@dataclass
class _Slot:
    offset: int
    length: int  # -1 when the slot is free


class Page:
    """A data page; records are kept compacted, the slot array is not."""

    def __init__(self, page_no: int) -> None:
        self.page_no = page_no
        self.next_page = -1
        self._data = bytearray()
        self._slots: list[_Slot] = []
        self._free_space = DATA_SIZE

    @property
    def free_space(self) -> int:
        """Bytes still available for records and slots."""
        return self._free_space

    @property
    def slot_count(self) -> int:
        """Number of slots in the slot array, used or free."""
        return len(self._slots)

    def insert_record(self, data: bytes) -> RID:
        """Store a record and return its identifier."""
        data = bytes(data)
        needed = len(data) + SLOT_SIZE
        if needed > self._free_space:
            raise NoSpaceError(
                f"record of {len(data)} bytes does not fit ({self._free_space} free)"
            )
        index = next(
            (i for i, slot in enumerate(self._slots) if slot.length == -1), None
        )
        new_slot = _Slot(len(self._data), len(data))
        if index is None:
            self._free_space -= needed
            index = len(self._slots)
            self._slots.append(new_slot)
        else:
            self._free_space -= len(data)
            self._slots[index] = new_slot
        self._data += data
        return RID(self.page_no, index)

    def _valid_slot(self, rid: RID) -> _Slot:
        index = rid.slot_no
        if not 0 <= index < len(self._slots) or self._slots[index].length <= 0:
            raise InvalidSlotError(f"invalid slot number {index}")
        return self._slots[index]

    def delete_record(self, rid: RID) -> None:
        """Remove a record, compacting the data that follows it."""
        slot = self._valid_slot(rid)
        start, length = slot.offset, slot.length
        del self._data[start:start + length]
        for other in self._slots:
            if other.length >= 0 and other.offset > start:
                other.offset -= length
        self._free_space += length

        if rid.slot_no == len(self._slots) - 1:
            self._slots.pop()
            self._free_space += SLOT_SIZE
            while self._slots and self._slots[-1].length == -1:
                self._slots.pop()
                self._free_space += SLOT_SIZE
        else:
            slot.length = -1
            slot.offset = 0

    def _scan_from(self, index: int) -> RID | None:
        for i in range(max(index, 0), len(self._slots)):
            if self._slots[i].length != -1:
                return RID(self.page_no, i)
        return None

    def first_record(self) -> RID | None:
        """Return the first record's identifier, or None if the page is empty."""
        return self._scan_from(0)

    def next_record(self, rid: RID) -> RID | None:
        """Return the record after ``rid``, or None at the end of the page."""
        return self._scan_from(rid.slot_no + 1)

    def get_record(self, rid: RID) -> bytes:
        """Return the bytes of the record named by ``rid``."""
        slot = self._valid_slot(rid)
        return bytes(self._data[slot.offset:slot.offset + slot.length])

    def dump(self) -> str:
        """Describe the page header and slot array."""
        lines = [
            f"curPage = {self.page_no}, nextPage = {self.next_page}",
            f"freePtr = {len(self._data)},  freeSpace = {self._free_space}, "
            f"slotCnt = {len(self._slots)}",
        ]
        lines.extend(
            f"slot[{i}].offset = {slot.offset}, slot[{i}].length = {slot.length}"
            for i, slot in enumerate(self._slots)
        )
        return "\n".join(lines) + "\n"

    def __iter__(self) -> Iterator[RID]:
        rid = self.first_record()
        while rid is not None:
            yield rid
            rid = self.next_record(rid)