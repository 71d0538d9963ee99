"""Data models used across the pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any


@dataclass(frozen=True)
class StationRecord:
    site: str
    dist: str | None
    name: str | None
    start: int | None
    end: int | None
    lat: float | None
    lon: float | None
    source: str | None
    state: str | None
    elev: float | None
    bar_ht: float | None
    wmo: int | None
    active: bool
    state_code: str | None = None
    url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, row: dict[str, Any]) -> "StationRecord":
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in row.items() if key in known})
