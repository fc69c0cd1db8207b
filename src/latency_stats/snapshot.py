from __future__ import annotations

from dataclasses import asdict, dataclass

NANOS_PER_MILLISECOND = 1_000_000

SUMMARY_TEMPLATE = (
    "Count: {count} | Current: {current}ms\n"
    "Min: {min}ms | Max: {max}ms | Avg: {avg}ms +/- Std: {stddev}ms\n"
    "p50: {p50}ms | p75: {p75}ms | p90: {p90}ms | p95: {p95}ms | p99: {p99}ms\n"
)


@dataclass(frozen=True)
class StatisticsSnapshot:
    """Aggregates of every sample seen up to one ingestion, in nanoseconds."""

    current: int
    count: int
    min: int
    max: int
    avg: int
    stddev: int
    p50: int
    p75: int
    p90: int
    p95: int
    p99: int

    def durations(self) -> dict[str, int]:
        values = asdict(self)
        values.pop("count")
        return values

    def to_dict(self) -> dict[str, float | int]:
        payload: dict[str, float | int] = {"count": self.count}
        for name, value in self.durations().items():
            payload[f"{name}_ms"] = value / NANOS_PER_MILLISECOND
        return payload


def whole_milliseconds(duration: int) -> int:
    return duration // NANOS_PER_MILLISECOND


def format_summary(snapshot: StatisticsSnapshot) -> str:
    truncated = {
        name: whole_milliseconds(value) for name, value in snapshot.durations().items()
    }
    return SUMMARY_TEMPLATE.format(count=snapshot.count, **truncated)
