from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

import httpx


@dataclass(frozen=True)
class Measurement:
    duration: int
    status_code: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class HttpLatencySource:
    """Times one GET round-trip per ``measure()`` call, up to the response headers.

    A failed request still yields the time spent before the failure.
    """

    def __init__(
        self,
        url: str,
        *,
        timeout_seconds: float = 10.0,
        client: httpx.Client | None = None,
        clock: Callable[[], int] = time.perf_counter_ns,
    ) -> None:
        self.url = url
        self._owns_client = client is None
        if client is None:
            client = httpx.Client(timeout=timeout_seconds, follow_redirects=True)
        self._client = client
        self._clock = clock

    def _elapsed(self, started: int) -> int:
        return max(0, self._clock() - started)

    def measure(self) -> Measurement:
        started = self._clock()
        try:
            with self._client.stream("GET", self.url) as response:
                elapsed = self._elapsed(started)
                status_code = response.status_code
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            return Measurement(
                duration=self._elapsed(started),
                error=str(exc) or type(exc).__name__,
            )
        return Measurement(duration=elapsed, status_code=status_code)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> HttpLatencySource:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
