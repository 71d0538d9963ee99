"""Run dates, run ids and log timestamps.

Every date the pipeline writes into a table derives from the run date, never the
wall clock, so a rerun with the same ``--run-date`` reproduces its outputs.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from stationlists.common.errors import ConfigError


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


def parse_run_date(value: str | None) -> str:
    if not value:
        return _utc_now().date().isoformat()
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError as exc:
        raise ConfigError(f"Invalid run date {value!r}: {exc}") from exc


def run_year(run_date: str) -> int:
    """Year stamped into ``end`` for stations that are still reporting."""
    return date.fromisoformat(run_date).year


def generate_run_id() -> str:
    return _utc_now().strftime("run-%Y%m%dT%H%M%S%fZ")


def utc_timestamp_iso() -> str:
    return _utc_now().isoformat(timespec="milliseconds")
