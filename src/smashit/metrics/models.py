from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Union


class ErrorType(str, Enum):
    TIMEOUT = "timeout"
    CONNECT = "connect"
    READ = "read"
    WRITE = "write"
    PROTOCOL = "protocol"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class Success:
    """A response was fully received; any status code counts."""

    status_code: int
    latency_ms: float


@dataclass(frozen=True, slots=True)
class Failure:
    """The attempt was abandoned before a response completed."""

    error_type: ErrorType
    latency_ms: float
    detail: str = ""


Outcome = Union[Success, Failure]


@dataclass(frozen=True, slots=True)
class LatencyStats:
    samples: int
    min_ms: float
    avg_ms: float
    max_ms: float
    p50_ms: float
    p75_ms: float
    p90_ms: float
    p99_ms: float


@dataclass(frozen=True, slots=True)
class Summary:
    total: int
    successful: int
    failed: int
    status_histogram: Mapping[int, int]
    failure_histogram: Mapping[ErrorType, int]
    latency: LatencyStats | None
