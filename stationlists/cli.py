"""CLI entrypoint for the station site list refresh."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from stationlists.common.config_loader import load_config
from stationlists.common.constants import EXIT_HARD_FAIL, EXIT_PARTIAL, EXIT_SUCCESS, PACKAGE_EXTDATA_DIR, STAGES
from stationlists.common.errors import PipelineError, StageError
from stationlists.common.fs import read_json, write_json
from stationlists.common.http import HttpClient
from stationlists.common.logging import build_logger, close_logger, log_event
from stationlists.common.models import StationRecord
from stationlists.common.time_utils import generate_run_id, parse_run_date, run_year
from stationlists.pipeline.activity import filter_active
from stationlists.pipeline.derive import derive_feed_urls
from stationlists.pipeline.export import export_site_lists
from stationlists.pipeline.fetch import fetch_station_archive
from stationlists.pipeline.fixed_width import parse_station_file
from stationlists.pipeline.probe import probe_feed_urls
from stationlists.pipeline.reports import write_run_summary


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", choices=[*STAGES, "all"])
    parser.add_argument("--run-date", default=None)
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--config-dir", default="./config")
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--data-dir", default="./data")
    parser.add_argument("--out-dir", default=str(PACKAGE_EXTDATA_DIR))
    parser.add_argument("--source-file", default=None)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    return parser.parse_args(argv)


def _intermediate(data_dir: Path, name: str) -> Path:
    return data_dir / "intermediate" / f"{name}.json"


def _read_stage_input(data_dir: Path, name: str, stage: str) -> dict:
    path = _intermediate(data_dir, name)
    if not path.exists():
        raise StageError(f"Stage {stage} needs {path}; run the previous stage first")
    return read_json(path)


def _write_stage_output(data_dir: Path, name: str, counts: dict, records: list[StationRecord]) -> None:
    write_json(
        _intermediate(data_dir, name),
        {"counts": counts, "records": [record.to_dict() for record in records]},
    )


def _load_records(payload: dict) -> list[StationRecord]:
    return [StationRecord.from_dict(row) for row in payload.get("records", [])]


def execute_stage(
    stage: str,
    cfg: dict,
    args: argparse.Namespace,
    data_dir: Path,
    run_id: str,
    run_date: str,
    logger: logging.Logger,
) -> dict:
    if stage == "fetch":
        source_file = Path(args.source_file) if args.source_file else None
        with HttpClient.from_config(cfg["http"]) as client:
            archive_path = fetch_station_archive(
                cfg["source"]["archive_url"],
                data_dir,
                http_client=client,
                source_file=source_file,
            )
        write_json(_intermediate(data_dir, "fetch"), {"archive_path": str(archive_path)})
        return {}

    if stage == "parse":
        fetched = _read_stage_input(data_dir, "fetch", stage)
        archive_path = Path(fetched["archive_path"])
        if not archive_path.exists():
            raise StageError(f"Fetched archive is missing: {archive_path}")
        parsed = parse_station_file(archive_path)
        derived = derive_feed_urls(parsed.records, prefix=cfg["feeds"]["url_prefix"])
        active = filter_active(derived, run_year=run_year(run_date))
        counts = {
            "parsed_rows": len(parsed.records),
            "malformed_cells": parsed.malformed_cells,
            "active_rows": len(active),
            "candidate_urls": sum(1 for record in active if record.url is not None),
        }
        _write_stage_output(data_dir, "active_stations", counts, active)
        return counts

    if stage == "probe":
        payload = _read_stage_input(data_dir, "active_stations", stage)
        with HttpClient.from_config(cfg["http"]) as client:
            probed, stats = probe_feed_urls(_load_records(payload), client, logger=logger, run_id=run_id)
        counts = {**payload["counts"], "reachable_urls": stats["reachable"]}
        _write_stage_output(data_dir, "probed_stations", counts, probed)
        return counts

    if stage == "export":
        payload = _read_stage_input(data_dir, "probed_stations", stage)
        result = export_site_lists(_load_records(payload), Path(args.out_dir), cfg["output"])
        counts = {
            **payload["counts"],
            "url_rows": result["url_rows"],
            "location_rows": result["location_rows"],
        }
        write_run_summary(data_dir, run_id=run_id, run_date=run_date, counts=counts)
        return counts

    raise ValueError(f"Unknown stage: {stage}")


def _log_failure(logger: logging.Logger, message: str, *, run_id: str, stage: str | None, error_code: str) -> None:
    log_event(
        logger,
        message,
        level=logging.ERROR,
        run_id=run_id,
        stage=stage,
        event="STAGE_FAIL",
        status="error",
        error_code=error_code,
    )


def run_command(args: argparse.Namespace) -> int:
    run_id = args.run_id or generate_run_id()
    config_dir = Path(args.config_dir)
    overlay_config_dir = Path(args.overlay_config_dir) if args.overlay_config_dir else None
    data_dir = Path(args.data_dir)

    logger = build_logger(run_id, data_dir=data_dir, level=args.log_level)
    try:
        try:
            run_date = parse_run_date(args.run_date)
            cfg = load_config(config_dir, overlay_config_dir=overlay_config_dir)
        except PipelineError as exc:
            _log_failure(logger, f"run setup failed: {exc}", run_id=run_id, stage=None, error_code=exc.error_code)
            return EXIT_HARD_FAIL

        stages = STAGES if args.command == "all" else (args.command,)
        counts: dict = {}
        for stage in stages:
            log_event(logger, "stage start", run_id=run_id, stage=stage, event="STAGE_START", status="ok")
            try:
                counts = execute_stage(stage, cfg, args, data_dir, run_id, run_date, logger)
            except PipelineError as exc:
                _log_failure(logger, f"stage {stage} failed: {exc}", run_id=run_id, stage=stage, error_code=exc.error_code)
                return EXIT_HARD_FAIL
            except Exception as exc:
                _log_failure(
                    logger,
                    f"unexpected failure in stage {stage}: {exc!r}",
                    run_id=run_id,
                    stage=stage,
                    error_code="UNEXPECTED_ERROR",
                )
                return EXIT_HARD_FAIL
            log_event(
                logger,
                "stage end",
                run_id=run_id,
                stage=stage,
                event="STAGE_END",
                status="ok",
                rows_out=counts.get("url_rows", counts.get("active_rows")),
            )

        if "url_rows" in counts and counts["url_rows"] == 0:
            return EXIT_PARTIAL
        return EXIT_SUCCESS
    finally:
        close_logger(logger)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    try:
        return run_command(args)
    except Exception:
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
