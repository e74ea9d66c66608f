"""Sample relations written as binary tuple files for loading."""

from __future__ import annotations

import struct
import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

_SOAP_FORMAT = struct.Struct("<i28s4sf")
_STAR_FORMAT = struct.Struct("<i20s12si")
SOAP_SIZE = _SOAP_FORMAT.size
STAR_SIZE = _STAR_FORMAT.size


def _fixed(text: str, size: int, field: str) -> bytes:
    raw = text.encode("latin-1")
    if len(raw) > size:
        raise ValueError(f"{field} {text!r} is longer than {size} bytes")
    return raw


@dataclass(frozen=True)
class Soap:
    """One tuple of the soaps relation."""

    soap_id: int
    name: str
    network: str
    rating: float

    def pack(self) -> bytes:
        """Return the tuple's binary layout."""
        return _SOAP_FORMAT.pack(
            self.soap_id,
            _fixed(self.name, 28, "name"),
            _fixed(self.network, 4, "network"),
            self.rating,
        )


@dataclass(frozen=True)
class Star:
    """One tuple of the stars relation."""

    star_id: int
    name: str
    plays: str
    soap_id: int

    def pack(self) -> bytes:
        """Return the tuple's binary layout."""
        return _STAR_FORMAT.pack(
            self.star_id,
            _fixed(self.name, 20, "name"),
            _fixed(self.plays, 12, "plays"),
            self.soap_id,
        )


SOAPS = (
    Soap(0, "Days of Our Lives", "NBC", 7.02),
    Soap(1, "General Hospital", "ABC", 9.81),
    Soap(2, "Guiding Light", "CBS", 4.02),
    Soap(3, "One Life to Live", "ABC", 2.31),
    Soap(4, "Santa Barbara", "NBC", 6.44),
    Soap(5, "The Young and the Restless", "CBS", 5.50),
    Soap(6, "As the World Turns", "CBS", 7.00),
    Soap(7, "Another World", "NBC", 1.97),
    Soap(8, "All My Children", "ABC", 8.82),
)

STARS = (
    Star(0, "Hayes, Kathryn", "Kim", 6),
    Star(1, "DeFreitas, Scott", "Andy", 6),
    Star(2, "Grahn, Nancy", "Julia", 4),
    Star(3, "Linder, Kate", "Esther", 5),
    Star(4, "Cooper, Jeanne", "Katherine", 5),
    Star(5, "Ehlers, Beth", "Harley", 2),
    Star(6, "Novak, John", "Keith", 4),
    Star(7, "Elliot, Patricia", "Renee", 3),
    Star(8, "Hutchinson, Fiona", "Gabrielle", 5),
    Star(9, "Carey, Phil", "Asa", 5),
    Star(10, "Walker, Nicholas", "Max", 3),
    Star(11, "Ross, Charlotte", "Eve", 0),
    Star(12, "Anthony, Eugene", "Stan", 8),
    Star(13, "Douglas, Jerry", "John", 5),
    Star(14, "Holbrook, Anna", "Sharlene", 7),
    Star(15, "Hammer, Jay", "Fletcher", 2),
    Star(16, "Sloan, Tina", "Lillian", 2),
    Star(17, "DuClos, Danielle", "Lisa", 3),
    Star(18, "Tuck, Jessica", "Megan", 3),
    Star(19, "Ashford, Matthew", "Jack", 0),
    Star(20, "Novak, John", "Keith", 4),
    Star(21, "Larson, Jill", "Opal", 8),
    Star(22, "McKinnon, Mary", "Denise", 7),
    Star(23, "Barr, Julia", "Brooke", 8),
    Star(24, "Borlenghi, Matt", "Brian", 8),
    Star(25, "Hughes, Finola", "Anna", 1),
    Star(26, "Rogers, Tristan", "Robert", 1),
    Star(27, "Richardson, Cheryl", "Jenny", 1),
    Star(28, "Evans, Mary Beth", "Kayla", 0),
)


def encode_soaps(rows: Iterable[Soap]) -> bytes:
    """Concatenate the binary tuples of the given soaps."""
    return b"".join(row.pack() for row in rows)


def encode_stars(rows: Iterable[Star]) -> bytes:
    """Concatenate the binary tuples of the given stars."""
    return b"".join(row.pack() for row in rows)


def write_files(directory: str | Path) -> tuple[Path, Path]:
    """Write ``stars.data`` and ``soaps.data`` into ``directory``."""
    base = Path(directory)
    stars_path = base / "stars.data"
    soaps_path = base / "soaps.data"
    stars_path.write_bytes(encode_stars(STARS))
    soaps_path.write_bytes(encode_soaps(SOAPS))
    return stars_path, soaps_path


def main(argv: Sequence[str] | None = None) -> int:
    """Write the sample data files into the given directory or the current one."""
    args = list(sys.argv[1:] if argv is None else argv)
    write_files(args[0] if args else ".")
    return 0


if __name__ == "__main__":
    sys.exit(main())