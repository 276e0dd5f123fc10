from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence

import numpy as np

from smashit.metrics.models import ErrorType, Failure, LatencyStats, Outcome, Success, Summary

PERCENTILES = (50, 75, 90, 99)


def nearest_rank(sorted_values: Sequence[float], pct: int) -> float:
    """Nearest-rank percentile of an ascending sample, without interpolation.

    The value at 1-indexed rank ``ceil(pct / 100 * n)``, clamped to ``[1, n]``.
    """
    n = len(sorted_values)
    if n == 0:
        raise ValueError("nearest_rank of an empty sample")
    if not 0 < pct <= 100:
        msg = f"Percentile must be in (0, 100], got {pct}"
        raise ValueError(msg)
    # integer ceil keeps ranks such as 90% of 10 exact
    rank = -(-pct * n // 100)
    rank = min(max(rank, 1), n)
    return float(sorted_values[rank - 1])


def latency_stats(latencies: Iterable[float]) -> LatencyStats | None:
    samples = np.sort(np.fromiter(latencies, dtype=float))
    if samples.size == 0:
        return None
    p50, p75, p90, p99 = (nearest_rank(samples, pct) for pct in PERCENTILES)
    return LatencyStats(
        samples=int(samples.size),
        min_ms=float(samples[0]),
        avg_ms=float(samples.mean()),
        max_ms=float(samples[-1]),
        p50_ms=p50,
        p75_ms=p75,
        p90_ms=p90,
        p99_ms=p99,
    )


def summarize(outcomes: Iterable[Outcome]) -> Summary:
    statuses: Counter[int] = Counter()
    failures: Counter[ErrorType] = Counter()
    latencies: list[float] = []
    total = 0
    for outcome in outcomes:
        total += 1
        if isinstance(outcome, Success):
            statuses[outcome.status_code] += 1
            latencies.append(outcome.latency_ms)
        elif isinstance(outcome, Failure):
            failures[outcome.error_type] += 1
        else:
            msg = f"Unknown outcome: {outcome!r}"
            raise TypeError(msg)
    successful = sum(statuses.values())
    return Summary(
        total=total,
        successful=successful,
        failed=total - successful,
        status_histogram=dict(sorted(statuses.items())),
        failure_histogram=dict(sorted(failures.items(), key=lambda item: item[0].value)),
        latency=latency_stats(latencies),
    )
