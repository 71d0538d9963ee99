"""State code lookup and JSON feed URL construction."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from stationlists.common.constants import ANTARCTIC_STATE, FEED_URL_PREFIX, PRODUCT_CODES, STATE_CODES
from stationlists.common.models import StationRecord


def state_code_for(state: str | None) -> str | None:
    if state is None:
        return None
    return STATE_CODES.get(state)


def product_code_for(state: str | None) -> str:
    if state == ANTARCTIC_STATE:
        return PRODUCT_CODES["antarctic"]
    return PRODUCT_CODES["standard"]


def build_feed_url(state: str | None, wmo: int | None, *, prefix: str = FEED_URL_PREFIX) -> str | None:
    """Return the observations feed URL, or None when the station cannot be addressed."""
    if wmo is None:
        return None
    code = state_code_for(state)
    if code is None:
        return None
    product_id = f"ID{code}{product_code_for(state)}"
    return f"{prefix.rstrip('/')}/{product_id}/{product_id}.{wmo}.json"


def derive_feed_urls(records: Iterable[StationRecord], *, prefix: str = FEED_URL_PREFIX) -> list[StationRecord]:
    return [
        replace(
            record,
            state_code=state_code_for(record.state),
            url=build_feed_url(record.state, record.wmo, prefix=prefix),
        )
        for record in records
    ]
