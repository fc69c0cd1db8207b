"""Streaming order statistics for latency samples."""

from __future__ import annotations

from latency_stats.aggregates import PERCENTILES, AggregateCalculator, mean_and_stddev, percentile
from latency_stats.engine import StatisticsEngine
from latency_stats.snapshot import StatisticsSnapshot, format_summary
from latency_stats.store import Duration, OrderedSampleStore

__all__ = [
    "PERCENTILES",
    "AggregateCalculator",
    "Duration",
    "OrderedSampleStore",
    "StatisticsEngine",
    "StatisticsSnapshot",
    "format_summary",
    "mean_and_stddev",
    "percentile",
]
