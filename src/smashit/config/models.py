from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

import httpx

DEFAULT_CONCURRENCY = 10
DEFAULT_TIMEOUT_SEC = 10.0

_HEADER_NAME = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")
_FORBIDDEN_VALUE_CHARS = frozenset("\r\n\x00")


class ConfigError(ValueError):
    """Raised when a run cannot start because its configuration is invalid."""


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


@dataclass(frozen=True, slots=True)
class RequestTemplate:
    url: str
    method: str = HttpMethod.GET.value
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str | bytes | None = None
    count: int = 1


@dataclass(frozen=True, slots=True)
class RunConfig:
    template: RequestTemplate
    concurrency: int = DEFAULT_CONCURRENCY
    timeout_sec: float = DEFAULT_TIMEOUT_SEC

    def to_metadata(self) -> Mapping[str, Any]:
        return {
            "concurrency": self.concurrency,
            "timeout_sec": self.timeout_sec,
            "target": {
                "url": self.template.url,
                "method": self.template.method,
                "headers": dict(self.template.headers),
                "body_bytes": len(_body_bytes(self.template.body)),
                "count": self.template.count,
            },
        }


def validate_template(template: RequestTemplate) -> RequestTemplate:
    """Check a template once, before anything is sent.

    Returns a copy with the method upper-cased and the headers frozen.
    """
    try:
        method = HttpMethod(template.method.upper())
    except ValueError:
        msg = f"Unsupported HTTP method: {template.method!r}"
        raise ConfigError(msg) from None
    try:
        url = httpx.URL(template.url)
    except httpx.InvalidURL as exc:
        msg = f"Invalid URL {template.url!r}: {exc}"
        raise ConfigError(msg) from exc
    if url.scheme not in ("http", "https"):
        msg = f"URL must use http or https: {template.url!r}"
        raise ConfigError(msg)
    if not url.host:
        msg = f"URL has no host: {template.url!r}"
        raise ConfigError(msg)
    if isinstance(template.count, bool) or not isinstance(template.count, int) or template.count < 1:
        msg = f"Count must be a positive integer, got {template.count!r}"
        raise ConfigError(msg)
    headers = _validate_headers(template.headers)
    try:
        httpx.Request(method.value, url, headers=headers, content=template.body)
    except (ValueError, TypeError, httpx.HTTPError) as exc:
        msg = f"Request cannot be built from template: {exc}"
        raise ConfigError(msg) from exc
    return replace(template, method=method.value, headers=headers)


def _validate_headers(headers: Mapping[str, str]) -> Mapping[str, str]:
    checked: dict[str, str] = {}
    for name, value in headers.items():
        if not isinstance(name, str) or not _HEADER_NAME.fullmatch(name):
            msg = f"Invalid header name: {name!r}"
            raise ConfigError(msg)
        if not isinstance(value, str) or _FORBIDDEN_VALUE_CHARS.intersection(value):
            msg = f"Invalid value for header {name!r}: {value!r}"
            raise ConfigError(msg)
        checked[name] = value
    return MappingProxyType(checked)


def validate_run_config(config: RunConfig) -> RunConfig:
    template = validate_template(config.template)
    if config.concurrency < 1:
        msg = f"Concurrency must be at least 1, got {config.concurrency}"
        raise ConfigError(msg)
    if config.timeout_sec <= 0:
        msg = f"Timeout must be positive, got {config.timeout_sec}"
        raise ConfigError(msg)
    return replace(config, template=template)


def _body_bytes(body: str | bytes | None) -> bytes:
    if body is None:
        return b""
    if isinstance(body, str):
        return body.encode("utf-8")
    return body
