from __future__ import annotations

import zipfile
from pathlib import Path

import pytest

# (value, width) per column of the upstream listing, in column order.
COLUMN_WIDTHS = (8, 6, 41, 8, 8, 9, 10, 15, 4, 11, 9, 7)

PREAMBLE = [
    "Bureau of Meteorology product IDCJMC0014.                                  Produced: 17 Feb 2026",
    "",
    "   Site  Dist  Site name                                 Start     End      Lat       Lon Source         STA Height (m)   Bar_ht    WMO",
    "------- ----- ---------------------------------------- ------- ------- -------- --------- -------------- --- ---------- -------- ------",
]
TRAILER = [
    "",
    "6 stations",
    "",
    "Copyright Commonwealth of Australia 2026, Bureau of Meteorology (ABN 92 637 533 532)",
    "Please note: Information derived from this product may be inaccurate.",
    "Please see http://www.bom.gov.au/other/copyright.shtml for terms of use.",
    "Station details are subject to revision.",
    "End of listing.",
]

SAMPLE_ROWS = [
    ("086071", "86", "MELBOURNE REGIONAL OFFICE", 1908, 2015, -37.8075, 144.97, "GPS", "VIC", 31.2, 32.7, 94868),
    ("086338", "86", "MELBOURNE (OLYMPIC PARK)", 2013, None, -37.8255, 144.9816, "GPS", "VIC", 7.5, 8.5, 95936),
    ("300000", "300", "DAVIS", 1957, None, -68.5772, 77.9725, "GPS", "ANT", 18.0, 18.9, 89571),
    ("001019", "1", "KALUMBURU", 1997, None, -14.2964, 126.6453, "GPS", "WA", 23.0, None, None),
    ("009999", "9", "UNLISTED STATE STATION", 2000, None, -20.0, 130.0, "GPS", "XX", None, None, 99999),
    ("040913", "40", "BRISBANE", 1999, None, -27.4808, 153.0389, "GPS", "QLD", 8.13, 9.5, 94576),
]


def make_line(*values, null_token: str = "..") -> str:
    cells = []
    for value, width in zip(values, COLUMN_WIDTHS):
        text = null_token if value is None else str(value)
        cells.append(text.ljust(width))
    return "".join(cells).rstrip()


def write_listing(path: Path, rows=SAMPLE_ROWS) -> Path:
    lines = [*PREAMBLE, *(make_line(*row) for row in rows), *TRAILER]
    path.write_text("\n".join(lines) + "\n", encoding="latin-1")
    return path


@pytest.fixture
def listing_path(tmp_path: Path) -> Path:
    return write_listing(tmp_path / "stations.txt")


@pytest.fixture
def zipped_listing_path(tmp_path: Path, listing_path: Path) -> Path:
    archive_path = tmp_path / "stations.zip"
    with zipfile.ZipFile(archive_path, "w") as archive:
        archive.write(listing_path, arcname="stations.txt")
    return archive_path
