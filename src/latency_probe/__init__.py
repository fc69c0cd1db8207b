"""HTTP latency probe driving the streaming statistics engine."""

from __future__ import annotations

from latency_probe.config import ProbeConfig, load_probe_config
from latency_probe.display import LiveTerminalWriter
from latency_probe.driver import ProbeResult, run_probe, stream_snapshots
from latency_probe.http_source import HttpLatencySource, Measurement

__all__ = [
    "HttpLatencySource",
    "LiveTerminalWriter",
    "Measurement",
    "ProbeConfig",
    "ProbeResult",
    "load_probe_config",
    "run_probe",
    "stream_snapshots",
]
