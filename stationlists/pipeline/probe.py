"""Live existence checks for derived feed URLs."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable

from stationlists.common.http import HttpClient
from stationlists.common.logging import log_event
from stationlists.common.models import StationRecord


def probe_feed_urls(
    records: Iterable[StationRecord],
    http_client: HttpClient,
    *,
    logger: logging.Logger | None = None,
    run_id: str | None = None,
) -> tuple[list[StationRecord], dict[str, int]]:
    out: list[StationRecord] = []
    stats = {"probed": 0, "reachable": 0, "unreachable": 0}

    for record in records:
        if record.url is None:
            out.append(record)
            continue

        stats["probed"] += 1
        if http_client.url_exists(record.url):
            stats["reachable"] += 1
            out.append(record)
            continue

        stats["unreachable"] += 1
        if logger is not None:
            log_event(
                logger,
                f"feed not served for site {record.site}: {record.url}",
                level=logging.DEBUG,
                run_id=run_id,
                stage="probe",
                source=record.url,
                event="URL_UNREACHABLE",
                status="dropped",
            )
        out.append(replace(record, url=None))

    return out, stats
