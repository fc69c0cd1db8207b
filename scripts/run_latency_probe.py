from __future__ import annotations

import argparse
import json
import sys
import time
from collections.abc import Callable
from typing import TextIO

import httpx

from latency_probe.config import ENV_PREFIX, env_defaults, load_probe_config
from latency_probe.display import LiveTerminalWriter
from latency_probe.driver import run_probe
from latency_probe.http_source import HttpLatencySource
from latency_probe.logging import configure_logging
from latency_stats import StatisticsEngine

INTERRUPTED_EXIT_CODE = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Repeatedly time GET requests to a URL and show live latency statistics"
    )
    parser.add_argument(
        "--url",
        default=None,
        help=f"URL to do a GET request to. Defaults to {ENV_PREFIX}URL.",
    )
    parser.add_argument(
        "--sleep",
        type=int,
        default=None,
        help="Time between requests in milliseconds (default 500)",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=None,
        help="Max number of requests. 0 keeps going until interrupted.",
    )
    parser.add_argument(
        "--timeout-seconds",
        type=float,
        default=None,
        help="Per-request timeout (default 10)",
    )
    parser.add_argument(
        "--p95-budget-ms",
        type=float,
        default=None,
        help="Optional p95 budget. Exits non-zero when exceeded.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the final statistics as JSON",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Log level for structured logs on stderr",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def run(
    argv: list[str] | None = None,
    *,
    client: httpx.Client | None = None,
    stdout: TextIO | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    args = parse_args(argv)
    out = stdout if stdout is not None else sys.stdout

    try:
        configure_logging(args.log_level)
        if not args.url and "url" not in env_defaults():
            print("Error: missing url", file=sys.stderr)
            build_parser().print_help(sys.stderr)
            return 1
        config = load_probe_config(
            url=args.url,
            sleep_ms=args.sleep,
            count=args.count,
            timeout_seconds=args.timeout_seconds,
        )
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    engine = StatisticsEngine()
    interrupted = False
    with HttpLatencySource(
        config.url, timeout_seconds=config.timeout_seconds, client=client
    ) as source, LiveTerminalWriter(out) as sink:
        try:
            run_probe(config, source=source, sink=sink, engine=engine, sleep=sleep)
        except KeyboardInterrupt:
            interrupted = True

    if engine.count == 0:
        return INTERRUPTED_EXIT_CODE if interrupted else 0
    snapshot = engine.snapshot
    summary = snapshot.to_dict()

    if args.json:
        print(json.dumps({"url": config.url, **summary}), file=out)

    budget = args.p95_budget_ms
    if budget is not None and summary["p95_ms"] > budget:
        print(
            f"latency-probe: p95 {summary['p95_ms']:.2f}ms exceeds budget {budget:.2f}ms",
            file=sys.stderr,
        )
        return 1
    if interrupted:
        return INTERRUPTED_EXIT_CODE
    return 0


if __name__ == "__main__":
    raise SystemExit(run())
