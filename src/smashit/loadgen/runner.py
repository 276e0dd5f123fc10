from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable

import httpx

from smashit.config import RunConfig, validate_run_config
from smashit.loadgen.client import send_request
from smashit.metrics import ErrorType, Failure, Outcome, Summary, summarize

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RunResult:
    outcomes: list[Outcome]
    summary: Summary
    elapsed_sec: float

    @property
    def requests_per_sec(self) -> float:
        if self.elapsed_sec <= 0:
            return 0.0
        return self.summary.total / self.elapsed_sec


AttemptFn = Callable[[int], Awaitable[Outcome]]
ProgressCallback = Callable[[int, int], Awaitable[None]]


async def run_load_test(
    config: RunConfig,
    transport: httpx.AsyncBaseTransport | None = None,
    progress: ProgressCallback | None = None,
) -> RunResult:
    config = validate_run_config(config)
    template = config.template
    logger.info(
        "Sending %d %s request(s) to %s (concurrency=%d, timeout=%gs)",
        template.count,
        template.method,
        template.url,
        config.concurrency,
        config.timeout_sec,
    )
    logger.debug("Run config: %s", config.to_metadata())
    limits = httpx.Limits(
        max_connections=config.concurrency,
        max_keepalive_connections=config.concurrency,
    )
    started_mono = time.perf_counter()
    async with httpx.AsyncClient(transport=transport, limits=limits) as client:

        async def attempt(index: int) -> Outcome:
            return await send_request(client, template, config.timeout_sec)

        outcomes = await execute_attempts(template.count, attempt, config.concurrency, progress)
    elapsed = time.perf_counter() - started_mono
    summary = summarize(outcomes)
    logger.info(
        "Finished %d request(s) in %.2fs: %d successful, %d failed",
        summary.total,
        elapsed,
        summary.successful,
        summary.failed,
    )
    return RunResult(outcomes=outcomes, summary=summary, elapsed_sec=elapsed)


async def execute_attempts(
    count: int,
    attempt: AttemptFn,
    concurrency: int,
    progress: ProgressCallback | None = None,
) -> list[Outcome]:
    """Run ``attempt`` for every index in ``range(count)`` on a bounded worker pool.

    Always returns exactly ``count`` outcomes, in completion order.
    """
    if count < 1:
        msg = f"Count must be at least 1, got {count}"
        raise ValueError(msg)
    if concurrency < 1:
        msg = f"Concurrency must be at least 1, got {concurrency}"
        raise ValueError(msg)
    pending: asyncio.Queue[int] = asyncio.Queue()
    for index in range(count):
        pending.put_nowait(index)
    outcomes: list[Outcome] = []
    lock = asyncio.Lock()

    async def worker() -> None:
        while True:
            try:
                index = pending.get_nowait()
            except asyncio.QueueEmpty:
                return
            outcome = await _guarded(attempt, index)
            async with lock:
                outcomes.append(outcome)
                done = len(outcomes)
            if progress:
                try:
                    await progress(done, count)
                except Exception as exc:
                    logger.warning("Progress callback raised %s: %s", type(exc).__name__, exc)

    workers = [asyncio.create_task(worker()) for _ in range(min(concurrency, count))]
    await asyncio.gather(*workers)
    return outcomes


async def _guarded(attempt: AttemptFn, index: int) -> Outcome:
    start_mono = time.perf_counter()
    try:
        return await attempt(index)
    except Exception as exc:
        latency_ms = (time.perf_counter() - start_mono) * 1000.0
        logger.warning("Attempt %d raised %s: %s", index, type(exc).__name__, exc)
        return Failure(error_type=ErrorType.OTHER, latency_ms=latency_ms, detail=str(exc))
