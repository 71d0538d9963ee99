"""Strict shape checks for ``stations.yml``."""

from __future__ import annotations

from stationlists.common.errors import ConfigError

HTTP_KEYS = {"timeout", "rate_per_sec"}
TOP_LEVEL_KEYS = {"source", "feeds", "http", "output"}


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str) -> None:
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _is_number(value) -> bool:
    return not isinstance(value, bool) and isinstance(value, (int, float))


def validate_stations_config(cfg: dict) -> dict:
    _assert_required_keys(cfg, TOP_LEVEL_KEYS, "stations config")
    _assert_no_unknown_keys(cfg, TOP_LEVEL_KEYS, "stations config")

    _assert_required_keys(cfg["source"], {"archive_url"}, "source")
    _assert_required_keys(cfg["feeds"], {"url_prefix"}, "feeds")
    _assert_required_keys(cfg["http"], HTTP_KEYS, "http")
    _assert_no_unknown_keys(cfg["http"], HTTP_KEYS, "http")
    _assert_required_keys(cfg["http"]["timeout"], {"connect", "read"}, "http.timeout")
    _assert_no_unknown_keys(cfg["http"]["timeout"], {"connect", "read"}, "http.timeout")
    _assert_required_keys(
        cfg["output"],
        {"url_table_filename", "location_table_filename"},
        "output",
    )

    for key in ("connect", "read"):
        value = cfg["http"]["timeout"][key]
        if not _is_number(value) or value <= 0:
            raise ConfigError(f"http.timeout.{key} must be a positive number")
    rate = cfg["http"]["rate_per_sec"]
    if not _is_number(rate) or rate < 0:
        raise ConfigError("http.rate_per_sec must be a number >= 0")

    if cfg["output"]["url_table_filename"] == cfg["output"]["location_table_filename"]:
        raise ConfigError("output table filenames must differ")

    return cfg
