from __future__ import annotations

import math
from collections.abc import Sequence

from latency_stats.snapshot import StatisticsSnapshot
from latency_stats.store import Duration, OrderedSampleStore

NANOS_PER_SECOND = 1_000_000_000

# Quantiles as exact ratios so the rank is floored with integer arithmetic.
PERCENTILES: dict[str, tuple[int, int]] = {
    "p50": (1, 2),
    "p75": (3, 4),
    "p90": (9, 10),
    "p95": (19, 20),
    "p99": (99, 100),
}


def to_seconds(duration: Duration) -> float:
    return duration / NANOS_PER_SECOND


def from_seconds(seconds: float) -> Duration:
    return round(seconds * NANOS_PER_SECOND)


def percentile_index(count: int, quantile: tuple[int, int]) -> int:
    """Nearest-rank, round-down index of ``quantile`` in ``count`` sorted samples.

    The rank is ``floor(count * quantile)``, clamped to the last element so a
    quantile at or above 1 never reads past the end.
    """
    if count <= 0:
        raise ValueError("count must be > 0")
    numerator, denominator = quantile
    return min((count * numerator) // denominator, count - 1)


def percentile(samples: Sequence[Duration], quantile: tuple[int, int]) -> Duration:
    if not samples:
        raise ValueError("samples must not be empty")
    return samples[percentile_index(len(samples), quantile)]


def mean_and_stddev(samples: Sequence[Duration]) -> tuple[Duration, Duration]:
    """Population mean and standard deviation, accumulated in float seconds.

    Summing raw nanosecond ticks of a long run overflows fixed-width integers
    and loses precision in a float, so every sample is converted to seconds
    first and the results are converted back to nanoseconds at the end.
    """
    if not samples:
        raise ValueError("samples must not be empty")
    count = len(samples)

    avg_seconds = 0.0
    for sample in samples:
        avg_seconds += to_seconds(sample)
    avg_seconds /= count

    variance_seconds = 0.0
    for sample in samples:
        deviation = to_seconds(sample) - avg_seconds
        variance_seconds += deviation * deviation
    stddev_seconds = math.sqrt(variance_seconds / count)

    return from_seconds(avg_seconds), from_seconds(stddev_seconds)


class AggregateCalculator:
    def __init__(self) -> None:
        self.minimum: float = math.inf
        self.maximum: Duration = 0

    def observe(self, sample: Duration) -> None:
        if sample < self.minimum:
            self.minimum = sample
        if sample > self.maximum:
            self.maximum = sample

    def compute(self, store: OrderedSampleStore, current: Duration) -> StatisticsSnapshot:
        if len(store) == 0:
            raise ValueError("cannot compute statistics for an empty sample store")
        samples = store.as_tuple()
        avg, stddev = mean_and_stddev(samples)
        cut_points = {name: percentile(samples, quantile) for name, quantile in PERCENTILES.items()}
        return StatisticsSnapshot(
            current=current,
            count=len(samples),
            min=int(self.minimum),
            max=self.maximum,
            avg=avg,
            stddev=stddev,
            **cut_points,
        )
