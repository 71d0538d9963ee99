"""Site list table export."""

from __future__ import annotations

import re
from dataclasses import replace
from pathlib import Path
from typing import Iterable

from stationlists.common.errors import ContractError
from stationlists.common.fs import read_csv_xz, write_csv_xz
from stationlists.common.models import StationRecord

URL_TABLE_COLUMNS = [
    "site",
    "dist",
    "name",
    "start",
    "end",
    "lat",
    "lon",
    "source",
    "state",
    "elev",
    "bar_ht",
    "wmo",
    "state_code",
    "url",
]
LOCATION_TABLE_COLUMNS = [
    column for column in URL_TABLE_COLUMNS if column not in {"state_code", "source", "url"}
]

_SITE_PADDING = re.compile(r"^0{1,2}")


def strip_site_padding(site: str) -> str:
    return _SITE_PADDING.sub("", site)


def build_url_table(records: Iterable[StationRecord]) -> list[StationRecord]:
    return [record for record in records if record.url is not None]


def build_location_table(records: Iterable[StationRecord]) -> list[StationRecord]:
    return [replace(record, site=strip_site_padding(record.site)) for record in records]


def check_table_contracts(url_rows: list[StationRecord], location_rows: list[StationRecord]) -> None:
    errors: list[str] = []
    if any(not row.url for row in url_rows):
        errors.append("URL_TABLE_NULL_URL")
    if any(not row.active for row in [*url_rows, *location_rows]):
        errors.append("INACTIVE_STATION_PRESENT")
    if any(row.site.startswith("00") for row in location_rows):
        errors.append("LOCATION_SITE_PADDED")
    if errors:
        raise ContractError(";".join(errors))


def _serialize_row(record: StationRecord, columns: list[str]) -> dict:
    row = record.to_dict()
    out = {}
    for key in columns:
        value = row.get(key)
        out[key] = "" if value is None else value
    return out


def write_table(path: Path, columns: list[str], rows: Iterable[StationRecord]) -> Path:
    write_csv_xz(path, columns, [_serialize_row(row, columns) for row in rows])
    return path


def read_table(path: Path) -> tuple[list[str], list[dict]]:
    return read_csv_xz(path)


def export_site_lists(
    records: list[StationRecord],
    out_dir: Path,
    output_config: dict,
) -> dict[str, Path | int]:
    """Write the URL and location tables for the active, probed station set."""
    url_rows = build_url_table(records)
    location_rows = build_location_table(records)
    check_table_contracts(url_rows, location_rows)

    url_path = write_table(out_dir / output_config["url_table_filename"], URL_TABLE_COLUMNS, url_rows)
    location_path = write_table(
        out_dir / output_config["location_table_filename"],
        LOCATION_TABLE_COLUMNS,
        location_rows,
    )
    return {
        "url_table": url_path,
        "location_table": location_path,
        "url_rows": len(url_rows),
        "location_rows": len(location_rows),
    }
