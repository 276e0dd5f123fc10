from __future__ import annotations

from smashit.metrics.aggregator import PERCENTILES, latency_stats, nearest_rank, summarize
from smashit.metrics.models import ErrorType, Failure, LatencyStats, Outcome, Success, Summary

__all__ = [
    "PERCENTILES",
    "ErrorType",
    "Failure",
    "LatencyStats",
    "Outcome",
    "Success",
    "Summary",
    "latency_stats",
    "nearest_rank",
    "summarize",
]
