"""HTTP session for the archive download and feed URL checks.

Each call makes exactly one request: a feed that fails its check is treated as
not served, and a failed download aborts the run.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from urllib.parse import urlparse

import requests

from stationlists.common.constants import USER_AGENT
from stationlists.common.errors import StageError


@dataclass(frozen=True)
class TimeoutConfig:
    connect: float = 20.0
    read: float = 120.0


class HttpRequestError(StageError):
    error_code = "HTTP_ERROR"


class HostThrottle:
    """Spaces consecutive requests to the same host at least ``1 / rate_per_sec`` apart."""

    def __init__(self, rate_per_sec: float, clock=time.monotonic, sleep=time.sleep) -> None:
        self.min_interval = 1.0 / rate_per_sec if rate_per_sec > 0 else 0.0
        self.last_request_at: dict[str, float] = {}
        self._clock = clock
        self._sleep = sleep

    def wait(self, host: str) -> None:
        if self.min_interval == 0.0:
            return
        previous = self.last_request_at.get(host)
        if previous is not None:
            remaining = previous + self.min_interval - self._clock()
            if remaining > 0:
                self._sleep(remaining)
        self.last_request_at[host] = self._clock()


class HttpClient:
    def __init__(self, *, timeout: TimeoutConfig | None = None, rate_per_sec: float = 5.0) -> None:
        self.timeout = timeout or TimeoutConfig()
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT, "Accept": "*/*"})
        self.throttle = HostThrottle(rate_per_sec)

    @classmethod
    def from_config(cls, http_config: dict) -> "HttpClient":
        return cls(
            timeout=TimeoutConfig(**http_config.get("timeout", {})),
            rate_per_sec=float(http_config.get("rate_per_sec", 5.0)),
        )

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _request(self, method: str, url: str, *, stream: bool = False) -> requests.Response:
        self.throttle.wait(urlparse(url).netloc)
        try:
            response = self.session.request(
                method=method,
                url=url,
                timeout=(self.timeout.connect, self.timeout.read),
                stream=stream,
                allow_redirects=True,
            )
        except requests.RequestException as exc:
            raise HttpRequestError(f"{method} {url} failed: {exc}") from exc
        if response.status_code >= 400:
            response.close()
            raise HttpRequestError(f"{method} {url} returned HTTP {response.status_code}")
        return response

    def download(self, url: str, target_path: Path) -> Path:
        """Stream ``url`` into ``target_path``."""
        with self._request("GET", url, stream=True) as response, target_path.open("wb") as f:
            for chunk in response.iter_content(chunk_size=1024 * 128):
                if chunk:
                    f.write(chunk)
        return target_path

    def url_exists(self, url: str) -> bool:
        """HEAD ``url`` once; an error status or transport failure means not served."""
        try:
            self._request("HEAD", url).close()
        except HttpRequestError:
            return False
        return True
