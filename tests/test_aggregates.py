from __future__ import annotations

import math

import pytest

from latency_stats.aggregates import (
    PERCENTILES,
    AggregateCalculator,
    from_seconds,
    mean_and_stddev,
    percentile,
    percentile_index,
    to_seconds,
)
from latency_stats.store import OrderedSampleStore

MS = 1_000_000


def test_percentile_index_rounds_rank_down() -> None:
    assert percentile_index(5, PERCENTILES["p50"]) == 2
    assert percentile_index(5, PERCENTILES["p75"]) == 3
    assert percentile_index(5, PERCENTILES["p90"]) == 4
    assert percentile_index(10, PERCENTILES["p95"]) == 9
    assert percentile_index(200, PERCENTILES["p99"]) == 198


def test_percentile_index_is_zero_for_single_sample() -> None:
    for quantile in PERCENTILES.values():
        assert percentile_index(1, quantile) == 0


def test_percentile_index_clamps_to_last_element() -> None:
    assert percentile_index(3, (1, 1)) == 2
    assert percentile_index(4, (3, 2)) == 3


def test_percentile_index_requires_samples() -> None:
    with pytest.raises(ValueError):
        percentile_index(0, PERCENTILES["p50"])


def test_percentile_reads_sorted_sequence() -> None:
    samples = [100 * MS, 200 * MS, 300 * MS, 400 * MS, 500 * MS]
    assert percentile(samples, PERCENTILES["p50"]) == 300 * MS
    assert percentile(samples, PERCENTILES["p90"]) == 500 * MS
    with pytest.raises(ValueError):
        percentile([], PERCENTILES["p50"])


def test_seconds_conversion() -> None:
    assert to_seconds(1_500_000_000) == 1.5
    assert from_seconds(1.5) == 1_500_000_000
    assert from_seconds(0.0) == 0


def test_mean_and_stddev_uses_population_variance() -> None:
    samples = [100 * MS, 200 * MS, 300 * MS, 400 * MS, 500 * MS]
    avg, stddev = mean_and_stddev(samples)
    assert avg == 300 * MS
    assert stddev == pytest.approx(math.sqrt(0.02) * 1_000_000_000, abs=1)


def test_mean_and_stddev_of_constant_samples() -> None:
    avg, stddev = mean_and_stddev([7 * MS] * 20)
    assert avg == 7 * MS
    assert stddev == 0


def test_mean_and_stddev_requires_samples() -> None:
    with pytest.raises(ValueError):
        mean_and_stddev([])


def test_calculator_tracks_running_extremes() -> None:
    calculator = AggregateCalculator()
    assert calculator.minimum == math.inf
    assert calculator.maximum == 0
    for sample in (40, 10, 90, 30):
        calculator.observe(sample)
    assert calculator.minimum == 10
    assert calculator.maximum == 90


def test_calculator_refuses_empty_store() -> None:
    with pytest.raises(ValueError):
        AggregateCalculator().compute(OrderedSampleStore(), current=0)


def test_calculator_compute_builds_snapshot() -> None:
    store = OrderedSampleStore()
    calculator = AggregateCalculator()
    for sample in (3 * MS, 1 * MS, 2 * MS):
        store.insert(sample)
        calculator.observe(sample)
    snapshot = calculator.compute(store, current=2 * MS)
    assert snapshot.count == 3
    assert snapshot.current == 2 * MS
    assert snapshot.min == 1 * MS
    assert snapshot.max == 3 * MS
    assert snapshot.avg == 2 * MS
    assert snapshot.p50 == 2 * MS
    assert snapshot.p99 == 3 * MS
