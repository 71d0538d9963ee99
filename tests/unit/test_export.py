from __future__ import annotations

from dataclasses import replace
from pathlib import Path

import pytest

from stationlists.common.errors import ContractError
from stationlists.common.models import StationRecord
from stationlists.pipeline.export import (
    LOCATION_TABLE_COLUMNS,
    URL_TABLE_COLUMNS,
    build_location_table,
    build_url_table,
    check_table_contracts,
    export_site_lists,
    read_table,
    strip_site_padding,
)

OUTPUT_CONFIG = {
    "url_table_filename": "JSONurl_site_list.csv.xz",
    "location_table_filename": "stations_site_list.csv.xz",
}

BASE = StationRecord(
    site="086338",
    dist="86",
    name="MELBOURNE (OLYMPIC PARK)",
    start=2013,
    end=2026,
    lat=-37.8255,
    lon=144.9816,
    source="GPS",
    state="VIC",
    elev=7.5,
    bar_ht=8.5,
    wmo=95936,
    active=True,
    state_code="V",
    url="http://www.bom.gov.au/fwo/IDV60801/IDV60801.95936.json",
)


def test_strip_site_padding_removes_up_to_two_zeros():
    assert strip_site_padding("001019") == "1019"
    assert strip_site_padding("086338") == "86338"
    assert strip_site_padding("300000") == "300000"


def test_location_columns_drop_url_fields():
    assert "url" not in LOCATION_TABLE_COLUMNS
    assert "state_code" not in LOCATION_TABLE_COLUMNS
    assert "source" not in LOCATION_TABLE_COLUMNS
    assert URL_TABLE_COLUMNS[-1] == "url"


def test_build_tables_split_on_url():
    no_url = replace(BASE, site="001019", wmo=None, url=None)
    url_rows = build_url_table([BASE, no_url])
    location_rows = build_location_table([BASE, no_url])

    assert [row.site for row in url_rows] == ["086338"]
    assert [row.site for row in location_rows] == ["86338", "1019"]


def test_check_table_contracts_rejects_inactive_rows():
    with pytest.raises(ContractError, match="INACTIVE_STATION_PRESENT"):
        check_table_contracts([], [replace(BASE, active=False)])


def test_check_table_contracts_rejects_null_url():
    with pytest.raises(ContractError, match="URL_TABLE_NULL_URL"):
        check_table_contracts([replace(BASE, url=None)], [])


def test_export_site_lists_writes_both_tables(tmp_path: Path):
    out_dir = tmp_path / "extdata"
    no_url = replace(BASE, site="001019", wmo=None, state="WA", state_code="W", url=None, bar_ht=None)

    result = export_site_lists([BASE, no_url], out_dir, OUTPUT_CONFIG)

    assert result["url_rows"] == 1
    assert result["location_rows"] == 2

    url_header, url_rows = read_table(out_dir / "JSONurl_site_list.csv.xz")
    assert url_header == URL_TABLE_COLUMNS
    assert url_rows[0]["site"] == "086338"
    assert url_rows[0]["url"] == BASE.url
    assert url_rows[0]["end"] == "2026"

    location_header, location_rows = read_table(out_dir / "stations_site_list.csv.xz")
    assert location_header == LOCATION_TABLE_COLUMNS
    assert [row["site"] for row in location_rows] == ["86338", "1019"]
    assert location_rows[1]["wmo"] == ""
    assert location_rows[1]["bar_ht"] == ""
    assert location_rows[0]["lat"] == "-37.8255"
