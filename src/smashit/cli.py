from __future__ import annotations

import argparse
import asyncio
import logging

from smashit.config import (
    DEFAULT_CONCURRENCY,
    DEFAULT_TIMEOUT_SEC,
    ConfigError,
    HttpMethod,
    RequestTemplate,
    RunConfig,
)
from smashit.loadgen.runner import run_load_test
from smashit.ui.console import render_summary

logger = logging.getLogger("smashit")


def parse_header(raw: str) -> tuple[str, str]:
    """Split a ``KEY=VALUE`` flag on its first ``=``."""
    key, sep, value = raw.partition("=")
    key = key.strip()
    if not sep or not key:
        msg = f"Header must look like KEY=VALUE, got {raw!r}"
        raise ValueError(msg)
    return key, value.strip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="smashit",
        description="A simple, single machine HTTP load testing tool",
    )
    parser.add_argument("-u", "--url", required=True, help="The URL to load test")
    parser.add_argument(
        "-m",
        "--method",
        default=HttpMethod.GET.value,
        help="The HTTP method to use in the request (default: GET)",
    )
    parser.add_argument(
        "-c",
        "--count",
        type=int,
        default=1,
        help="The number of times to call the endpoint (default: 1)",
    )
    parser.add_argument(
        "-H",
        "--header",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="A request header, may be repeated",
    )
    parser.add_argument("-b", "--body", default=None, help="The request body")
    parser.add_argument(
        "--concurrency",
        type=int,
        default=DEFAULT_CONCURRENCY,
        help=f"Maximum requests in flight at once (default: {DEFAULT_CONCURRENCY})",
    )
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT_SEC, help="Per-request timeout (sec)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    return parser


def build_config(args: argparse.Namespace) -> RunConfig:
    headers = dict(parse_header(raw) for raw in args.header)
    template = RequestTemplate(
        url=args.url,
        method=args.method,
        headers=headers,
        body=args.body,
        count=args.count,
    )
    return RunConfig(template=template, concurrency=args.concurrency, timeout_sec=args.timeout)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    else:
        logging.getLogger("httpx").setLevel(logging.WARNING)

    try:
        config = build_config(args)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        result = asyncio.run(run_load_test(config))
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        return 2
    print(render_summary(result))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
