"""Benchmark: chronomaster parse and format throughput.

Measures parse operations per second for each parser strategy (epoch,
strict ISO-8601, and a pattern near the end of the registry) and format
operations per second, using the public ``ChronoMaster`` API.
"""
from __future__ import annotations

import json
import time
from collections.abc import Callable
from pathlib import Path

from chronomaster import ChronoMaster
from chronomaster.config import ChronoConfig
from chronomaster.zones import UTC

_ITERATIONS: int = 20_000

_PARSE_INPUTS: dict[str, str] = {
    "epoch": "1730389800",
    "iso": "2025-10-31T12:30:00+05:30[Asia/Kolkata]",
    "registry_tail": "Oct 31, 2025",
}


def _run(operation: str, iterations: int, call: Callable[[], object]) -> dict[str, object]:
    start = time.perf_counter()
    for _ in range(iterations):
        call()
    total = time.perf_counter() - start

    result: dict[str, object] = {
        "operation": operation,
        "iterations": iterations,
        "total_seconds": round(total, 4),
        "ops_per_second": round(iterations / total, 1),
        "avg_latency_ms": round(total / iterations * 1000, 4),
    }
    print(
        f"[bench_throughput] {result['operation']}: "
        f"{result['ops_per_second']:,.0f} ops/sec  "
        f"avg {result['avg_latency_ms']:.4f} ms"
    )
    return result


def bench_parse_throughput() -> list[dict[str, object]]:
    """Benchmark ``ChronoMaster.parse_date`` for each parser strategy.

    Returns
    -------
    list of dicts with keys: operation, iterations, total_seconds,
    ops_per_second, avg_latency_ms.
    """
    chrono = ChronoMaster(ChronoConfig(input_zone=UTC, output_zone=UTC))
    return [
        _run(f"parse_{name}", _ITERATIONS, lambda text=text: chrono.parse_date(text))
        for name, text in _PARSE_INPUTS.items()
    ]


def bench_format_throughput() -> dict[str, object]:
    """Benchmark pattern formatting of an already parsed value."""
    chrono = ChronoMaster(ChronoConfig(input_zone=UTC, output_zone=UTC))
    value = chrono.parse_date("2025-10-31T12:30:00Z").unwrap()
    return _run(
        "format_pattern",
        _ITERATIONS,
        lambda: chrono.format_instant(value, "EEEE, dd MMM yyyy 'at' hh:mm a", "Asia/Tokyo"),
    )


if __name__ == "__main__":
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)

    results = bench_parse_throughput() + [bench_format_throughput()]
    output_path = results_dir / "throughput_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(results, fh, indent=2)
    print(f"Results saved to {output_path}")
