from __future__ import annotations

from latency_stats.aggregates import AggregateCalculator
from latency_stats.snapshot import StatisticsSnapshot
from latency_stats.store import Duration, OrderedSampleStore


class StatisticsEngine:
    """Streaming order statistics over every latency sample of one run.

    Each engine owns its own store; callers must serialize ``add_sample``.
    """

    def __init__(self) -> None:
        self._store = OrderedSampleStore()
        self._calculator = AggregateCalculator()
        self._snapshot: StatisticsSnapshot | None = None

    def add_sample(self, duration: Duration) -> StatisticsSnapshot:
        self._store.insert(duration)
        self._calculator.observe(duration)
        self._snapshot = self._calculator.compute(self._store, current=duration)
        return self._snapshot

    @property
    def snapshot(self) -> StatisticsSnapshot:
        if self._snapshot is None:
            raise ValueError("no samples recorded yet")
        return self._snapshot

    @property
    def count(self) -> int:
        return len(self._store)

    @property
    def samples(self) -> tuple[Duration, ...]:
        return self._store.as_tuple()
