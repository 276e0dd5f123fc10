from __future__ import annotations

import asyncio
import logging
import time

import httpx

from smashit.config import RequestTemplate
from smashit.metrics import ErrorType, Failure, Outcome, Success

logger = logging.getLogger(__name__)


async def send_request(
    client: httpx.AsyncClient,
    template: RequestTemplate,
    timeout_sec: float,
) -> Outcome:
    start_mono = time.perf_counter()
    try:
        resp = await asyncio.wait_for(
            client.request(
                template.method,
                template.url,
                headers=template.headers,
                content=template.body,
                timeout=timeout_sec,
            ),
            timeout=timeout_sec,
        )
        latency_ms = (time.perf_counter() - start_mono) * 1000.0
        return Success(status_code=resp.status_code, latency_ms=latency_ms)
    except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
        err, detail = ErrorType.TIMEOUT, _describe(exc, timeout_sec)
    except httpx.ConnectError as exc:
        err, detail = ErrorType.CONNECT, _describe(exc, timeout_sec)
    except httpx.ReadError as exc:
        err, detail = ErrorType.READ, _describe(exc, timeout_sec)
    except httpx.WriteError as exc:
        err, detail = ErrorType.WRITE, _describe(exc, timeout_sec)
    except httpx.RemoteProtocolError as exc:
        err, detail = ErrorType.PROTOCOL, _describe(exc, timeout_sec)
    except httpx.HTTPError as exc:
        err, detail = ErrorType.OTHER, _describe(exc, timeout_sec)
    latency_ms = (time.perf_counter() - start_mono) * 1000.0
    logger.debug("%s %s failed after %.1f ms: %s", template.method, template.url, latency_ms, detail)
    return Failure(error_type=err, latency_ms=latency_ms, detail=detail)


def _describe(exc: BaseException, timeout_sec: float) -> str:
    if isinstance(exc, asyncio.TimeoutError):
        return f"no response within {timeout_sec:g}s"
    return str(exc) or type(exc).__name__
