from __future__ import annotations

import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from itertools import islice
from typing import Protocol

from latency_probe.config import ProbeConfig
from latency_probe.http_source import Measurement
from latency_probe.logging import get_logger
from latency_stats import StatisticsEngine, StatisticsSnapshot, format_summary

logger = get_logger("latency_probe.driver")


class LatencySource(Protocol):
    def measure(self) -> Measurement:
        ...


class DisplaySink(Protocol):
    def write(self, block: str) -> None:
        ...

    def report(self, line: str) -> None:
        ...


@dataclass(frozen=True)
class ProbeResult:
    measurement: Measurement
    snapshot: StatisticsSnapshot


def stream_snapshots(
    engine: StatisticsEngine,
    source: LatencySource,
    *,
    pause: Callable[[], None] | None = None,
) -> Iterator[ProbeResult]:
    """Yield one result per measurement, forever.

    Failed measurements are recorded like any other sample. ``pause`` runs
    between measurements only, so a consumer that stops pulling never waits.
    """
    first = True
    while True:
        if not first and pause is not None:
            pause()
        first = False

        measurement = source.measure()
        if not measurement.ok:
            logger.warning(
                "latency_probe_request_failed",
                error=measurement.error,
                duration_ns=measurement.duration,
            )
        snapshot = engine.add_sample(measurement.duration)
        yield ProbeResult(measurement=measurement, snapshot=snapshot)


def run_probe(
    config: ProbeConfig,
    *,
    source: LatencySource,
    sink: DisplaySink,
    engine: StatisticsEngine | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> StatisticsSnapshot | None:
    if engine is None:
        engine = StatisticsEngine()

    results: Iterator[ProbeResult] = stream_snapshots(
        engine, source, pause=lambda: sleep(config.sleep_seconds)
    )
    if not config.unbounded:
        results = islice(results, config.count)

    last: StatisticsSnapshot | None = None
    for result in results:
        if not result.measurement.ok:
            sink.report(f"Error: {result.measurement.error}")
        sink.write(format_summary(result.snapshot))
        last = result.snapshot

    logger.info("latency_probe_finished", count=engine.count)
    return last
