from __future__ import annotations

from smashit.loadgen.runner import RunResult
from smashit.metrics import ErrorType, Failure, Success, summarize
from smashit.ui.console import latency_frame, render_summary, status_frame


def _result(outcomes, elapsed: float = 2.0) -> RunResult:
    return RunResult(outcomes=list(outcomes), summary=summarize(outcomes), elapsed_sec=elapsed)


def test_status_table_is_sorted_by_code() -> None:
    summary = summarize([Success(500, 1.0), Success(200, 2.0), Success(404, 3.0), Success(200, 4.0)])
    frame = status_frame(summary)
    assert frame["status"].tolist() == [200, 404, 500]
    assert frame["count"].tolist() == [2, 1, 1]


def test_latency_table_rows() -> None:
    summary = summarize([Success(200, v) for v in (100.0, 200.0, 300.0, 400.0)])
    frame = latency_frame(summary)
    assert frame.loc["p50", "latency_ms"] == 200.0
    assert frame.loc["p90", "latency_ms"] == 400.0
    assert frame.loc["avg", "latency_ms"] == 250.0


def test_report_for_failure_only_run() -> None:
    result = _result([Failure(ErrorType.CONNECT, 1.0), Failure(ErrorType.TIMEOUT, 2.0)])
    text = render_summary(result)
    assert "no successful requests" in text
    assert "no responses received" in text
    assert "connect" in text
    assert "timeout" in text


def test_requests_per_sec() -> None:
    result = _result([Success(200, 1.0)] * 10, elapsed=2.0)
    assert result.requests_per_sec == 5.0
    assert _result([Success(200, 1.0)], elapsed=0.0).requests_per_sec == 0.0
