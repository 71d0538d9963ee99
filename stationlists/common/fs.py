"""Filesystem helpers."""

from __future__ import annotations

import csv
import io
import json
import lzma
from pathlib import Path
from typing import Iterable, Mapping


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def read_yaml(path: Path):
    import yaml

    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def write_json(path: Path, payload) -> None:
    ensure_dir(path.parent)
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2, sort_keys=True)
        f.write("\n")


def read_json(path: Path):
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def write_csv_xz(path: Path, headers: list[str], rows: Iterable[Mapping[str, object]]) -> None:
    """Write a CSV table compressed with xz.

    The xz container carries no timestamps, so identical rows give identical bytes.
    """
    ensure_dir(path.parent)
    buffer = io.StringIO(newline="")
    writer = csv.DictWriter(buffer, fieldnames=headers, extrasaction="ignore", lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    path.write_bytes(lzma.compress(buffer.getvalue().encode("utf-8"), preset=9))


def read_csv_xz(path: Path) -> tuple[list[str], list[dict]]:
    with lzma.open(path, "rt", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        return list(reader.fieldnames or []), list(reader)
