from __future__ import annotations

import io
import socket
import urllib.error
import urllib.request
from pathlib import Path

import pytest

from stationlists.common.errors import FetchError
from stationlists.common.http import HttpClient, HttpRequestError, TimeoutConfig
from stationlists.pipeline.fetch import archive_filename, fetch_station_archive


class FakeHttpClient:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.urls: list[str] = []

    def download(self, url: str, target_path: Path) -> Path:
        self.urls.append(url)
        if self.fail:
            raise HttpRequestError("HTTP status: 404")
        target_path.write_bytes(b"listing")
        return target_path


def test_archive_filename_uses_url_basename():
    assert archive_filename("ftp://ftp.example/sitelists/stations.zip") == "stations.zip"
    assert archive_filename("https://example.test/") == "stations.zip"


def test_fetch_copies_local_source_file(tmp_path: Path, listing_path: Path):
    target = fetch_station_archive("ftp://unused/stations.zip", tmp_path / "data", source_file=listing_path)
    assert target == tmp_path / "data" / "raw" / "stations.txt"
    assert target.read_bytes() == listing_path.read_bytes()


def test_fetch_missing_source_file_raises(tmp_path: Path):
    with pytest.raises(FetchError):
        fetch_station_archive("ftp://unused/stations.zip", tmp_path, source_file=tmp_path / "nope.zip")


def test_fetch_downloads_http_source(tmp_path: Path):
    client = FakeHttpClient()
    target = fetch_station_archive("https://mirror.example/stations.zip", tmp_path, http_client=client)
    assert client.urls == ["https://mirror.example/stations.zip"]
    assert target.read_bytes() == b"listing"


def test_fetch_http_failure_aborts(tmp_path: Path):
    with pytest.raises(FetchError):
        fetch_station_archive("https://mirror.example/stations.zip", tmp_path, http_client=FakeHttpClient(fail=True))


def test_fetch_rejects_unknown_scheme(tmp_path: Path):
    with pytest.raises(FetchError):
        fetch_station_archive("gopher://example/stations.zip", tmp_path)


def test_fetch_ftp_source_lands_in_raw_dir(monkeypatch, tmp_path: Path):
    seen = {}

    def fake_urlopen(request, timeout):
        seen["url"] = request.full_url
        seen["user_agent"] = request.get_header("User-agent")
        seen["timeout"] = timeout
        return io.BytesIO(b"PK\x03\x04listing")

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)
    client = HttpClient(timeout=TimeoutConfig(connect=5, read=45), rate_per_sec=0)

    target = fetch_station_archive(
        "ftp://ftp.bom.gov.au/anon2/home/ncc/metadata/sitelists/stations.zip",
        tmp_path / "data",
        http_client=client,
    )

    assert target == tmp_path / "data" / "raw" / "stations.zip"
    assert target.read_bytes() == b"PK\x03\x04listing"
    assert seen["url"].startswith("ftp://ftp.bom.gov.au/")
    assert seen["user_agent"].startswith("stationlists/")
    assert seen["timeout"] == 45


@pytest.mark.parametrize(
    "failure",
    [urllib.error.URLError("ftp error: 550 No such file"), socket.timeout("timed out")],
)
def test_fetch_ftp_failure_aborts(monkeypatch, tmp_path: Path, failure):
    def fake_urlopen(_request, timeout):
        raise failure

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    with pytest.raises(FetchError, match="stations.zip"):
        fetch_station_archive("ftp://ftp.example/sitelists/stations.zip", tmp_path)
