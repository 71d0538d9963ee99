"""Currently-reporting station filter."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from stationlists.common.models import StationRecord


def filter_active(records: Iterable[StationRecord], *, run_year: int) -> list[StationRecord]:
    """Keep stations with no recorded end year and stamp ``end`` with ``run_year``.

    The stamped year means "still open", not an observed closure; ``active`` keeps
    the distinction.
    """
    return [replace(record, end=run_year) for record in records if record.active]
