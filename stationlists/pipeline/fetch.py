"""Station archive download stage."""

from __future__ import annotations

import shutil
import urllib.request
from pathlib import Path
from urllib.parse import urlparse

from stationlists.common.constants import USER_AGENT
from stationlists.common.errors import FetchError
from stationlists.common.fs import ensure_dir
from stationlists.common.http import HttpClient, HttpRequestError

DEFAULT_ARCHIVE_NAME = "stations.zip"


def archive_filename(source: str) -> str:
    basename = Path(urlparse(source).path).name
    return basename or DEFAULT_ARCHIVE_NAME


def _download_ftp(source_url: str, target_path: Path, timeout: float) -> None:
    # requests has no ftp adapter.
    request = urllib.request.Request(source_url, headers={"User-Agent": USER_AGENT})
    try:
        with urllib.request.urlopen(request, timeout=timeout) as response, target_path.open("wb") as f:
            shutil.copyfileobj(response, f, length=1024 * 128)
    except OSError as exc:
        raise FetchError(f"Download failed for {source_url}: {exc}") from exc


def fetch_station_archive(
    source_url: str,
    data_dir: Path,
    *,
    http_client: HttpClient | None = None,
    source_file: Path | None = None,
) -> Path:
    """Place the station listing archive under ``data_dir/raw`` and return its path.

    ``source_file`` copies a local archive instead of downloading, for offline refreshes.
    """
    raw_dir = data_dir / "raw"
    ensure_dir(raw_dir)

    if source_file is not None:
        if not source_file.exists():
            raise FetchError(f"Missing source file: {source_file}")
        target_path = raw_dir / source_file.name
        if source_file.resolve() != target_path.resolve():
            shutil.copyfile(source_file, target_path)
        return target_path

    target_path = raw_dir / archive_filename(source_url)
    scheme = urlparse(source_url).scheme.lower()
    if scheme == "ftp":
        timeout = http_client.timeout.read if http_client is not None else 120.0
        _download_ftp(source_url, target_path, timeout)
        return target_path
    if scheme not in {"http", "https"}:
        raise FetchError(f"Unsupported archive scheme: {source_url}")

    owns_client = http_client is None
    client = http_client or HttpClient()
    try:
        client.download(source_url, target_path)
    except (HttpRequestError, OSError) as exc:
        raise FetchError(f"Download failed for {source_url}: {exc}") from exc
    finally:
        if owns_client:
            client.close()
    return target_path
