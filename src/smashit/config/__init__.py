from __future__ import annotations

from smashit.config.models import (
    DEFAULT_CONCURRENCY,
    DEFAULT_TIMEOUT_SEC,
    ConfigError,
    HttpMethod,
    RequestTemplate,
    RunConfig,
    validate_run_config,
    validate_template,
)

__all__ = [
    "DEFAULT_CONCURRENCY",
    "DEFAULT_TIMEOUT_SEC",
    "ConfigError",
    "HttpMethod",
    "RequestTemplate",
    "RunConfig",
    "validate_run_config",
    "validate_template",
]
