from __future__ import annotations

import pandas as pd

from smashit.loadgen.runner import RunResult
from smashit.metrics import Summary


def overview_frame(result: RunResult) -> pd.DataFrame:
    summary = result.summary
    return pd.DataFrame(
        {
            "value": [
                summary.total,
                summary.successful,
                summary.failed,
                round(result.elapsed_sec, 3),
                round(result.requests_per_sec, 2),
            ]
        },
        index=["🚀 Total", "✅ Successful", "❌ Failed", "⏱  Elapsed (s)", "📈 Requests/s"],
        dtype=object,
    )


def status_frame(summary: Summary) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "status": list(summary.status_histogram.keys()),
            "count": list(summary.status_histogram.values()),
        }
    )


def failure_frame(summary: Summary) -> pd.DataFrame:
    return pd.DataFrame(
        {
            "error": [err.value for err in summary.failure_histogram],
            "count": list(summary.failure_histogram.values()),
        }
    )


def latency_frame(summary: Summary) -> pd.DataFrame:
    stats = summary.latency
    if stats is None:
        return pd.DataFrame(columns=["latency_ms"])
    return pd.DataFrame(
        {
            "latency_ms": [
                stats.min_ms,
                stats.avg_ms,
                stats.max_ms,
                stats.p50_ms,
                stats.p75_ms,
                stats.p90_ms,
                stats.p99_ms,
            ]
        },
        index=["min", "avg", "max", "p50", "p75", "p90", "p99"],
    ).round(2)


def render_summary(result: RunResult) -> str:
    summary = result.summary
    sections = ["Summary", overview_frame(result).to_string(header=False)]

    sections.append("\nStatus codes")
    status = status_frame(summary)
    sections.append(status.to_string(index=False) if not status.empty else "no responses received")

    failures = failure_frame(summary)
    if not failures.empty:
        sections.append("\nFailures")
        sections.append(failures.to_string(index=False))

    sections.append("\nLatency")
    latency = latency_frame(summary)
    sections.append(latency.to_string(header=False) if not latency.empty else "no successful requests")
    return "\n".join(sections)
