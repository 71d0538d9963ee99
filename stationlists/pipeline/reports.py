"""Run report aggregation."""

from __future__ import annotations

from pathlib import Path

from stationlists.common.fs import write_json

COUNT_KEYS = (
    "parsed_rows",
    "malformed_cells",
    "active_rows",
    "candidate_urls",
    "reachable_urls",
    "url_rows",
    "location_rows",
)


def summary_path(data_dir: Path) -> Path:
    return data_dir / "out" / "reports" / "run_summary.json"


def write_run_summary(data_dir: Path, run_id: str, run_date: str, counts: dict[str, int]) -> Path:
    totals = {key: int(counts.get(key, 0)) for key in COUNT_KEYS}

    warnings: list[str] = []
    if totals["malformed_cells"] > 0:
        warnings.append("MALFORMED_CELLS_NULLED")
    if totals["candidate_urls"] > totals["reachable_urls"]:
        warnings.append("UNREACHABLE_URLS_DROPPED")

    status = "success"
    if totals["url_rows"] == 0:
        status = "partial"

    path = summary_path(data_dir)
    payload = {
        "run_id": run_id,
        "run_date": run_date,
        "status": status,
        "totals": totals,
        "warnings": warnings,
    }
    write_json(path, payload)
    return path
