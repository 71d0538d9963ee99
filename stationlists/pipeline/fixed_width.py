"""Fixed-width station listing parser.

The upstream listing has no delimiters: each field sits at a fixed column range.
Column positions below are 1-based and inclusive, as documented for the listing.
If the upstream widths or the preamble/trailer line counts change, rows misalign
silently; there is no header to check them against.
"""

from __future__ import annotations

import io
import zipfile
from dataclasses import dataclass
from pathlib import Path

from stationlists.common.models import StationRecord

PREAMBLE_LINES = 4
TRAILER_LINES = 6
NULL_TOKENS = frozenset({"..", "....."})
ENCODING = "latin-1"


@dataclass(frozen=True)
class FixedWidthField:
    name: str
    start: int
    end: int
    kind: type = str

    def slice(self, line: str) -> str:
        return line[self.start - 1 : self.end]


STATION_FIELDS = (
    FixedWidthField("site", 1, 8),
    FixedWidthField("dist", 9, 14),
    FixedWidthField("name", 15, 55),
    FixedWidthField("start", 56, 63, int),
    FixedWidthField("end", 64, 71, int),
    FixedWidthField("lat", 72, 80, float),
    FixedWidthField("lon", 81, 90, float),
    FixedWidthField("source", 91, 105),
    FixedWidthField("state", 106, 109),
    FixedWidthField("elev", 110, 120, float),
    FixedWidthField("bar_ht", 121, 129, float),
    FixedWidthField("wmo", 130, 136, int),
)


@dataclass(frozen=True)
class ParseResult:
    records: list[StationRecord]
    malformed_cells: int


def _read_text(path: Path) -> str:
    if zipfile.is_zipfile(path):
        with zipfile.ZipFile(path) as archive:
            members = [info for info in archive.infolist() if not info.is_dir()]
            if not members:
                return ""
            with archive.open(members[0]) as f:
                return io.TextIOWrapper(f, encoding=ENCODING).read()
    return path.read_text(encoding=ENCODING)


def read_station_lines(path: Path) -> list[str]:
    """Return data lines: preamble dropped, then blank lines, then the trailer."""
    lines = _read_text(path).splitlines()[PREAMBLE_LINES:]
    lines = [line for line in lines if line.strip()]
    if len(lines) <= TRAILER_LINES:
        return []
    return lines[: len(lines) - TRAILER_LINES]


def _convert(raw: str, kind: type) -> tuple[object | None, bool]:
    value = raw.strip()
    if not value or value in NULL_TOKENS:
        return None, False
    if kind is str:
        return value, False
    try:
        return kind(value), False
    except ValueError:
        return None, True


def parse_station_line(line: str, fields: tuple[FixedWidthField, ...] = STATION_FIELDS) -> tuple[dict, int]:
    row: dict[str, object | None] = {}
    malformed = 0
    for field in fields:
        value, bad = _convert(field.slice(line), field.kind)
        row[field.name] = value
        malformed += int(bad)
    return row, malformed


def parse_station_file(path: Path) -> ParseResult:
    records: list[StationRecord] = []
    malformed_cells = 0
    for line in read_station_lines(path):
        row, malformed = parse_station_line(line)
        malformed_cells += malformed
        if row["site"] is None:
            malformed_cells += 1
            continue
        records.append(StationRecord(**row, active=row["end"] is None))
    return ParseResult(records=records, malformed_cells=malformed_cells)
