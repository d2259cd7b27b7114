"""
resilient_client.config - Client configuration, defaults and environment loading.
"""

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from resilient_client.errors import ConfigError

DEFAULT_MAX_RETRIES = 5
DEFAULT_INITIAL_DELAY_MS = 1000
DEFAULT_REQUESTS_PER_SECOND = 2
DEFAULT_PAGE_SIZE = 10
DEFAULT_RECORDS_KEY = "data"

ENV_PREFIX = "RESILIENT_CLIENT_"

# camelCase option names accepted alongside the snake_case field names
OPTION_ALIASES = {
    "maxRetries": "max_retries",
    "initialDelay": "initial_delay_ms",
    "initial_delay": "initial_delay_ms",
    "requestsPerSecond": "requests_per_second",
    "pageSize": "page_size",
    "recordsKey": "records_key",
    "maxRateLimitRetries": "max_rate_limit_retries",
}


@dataclass(frozen=True)
class ClientConfig:
    """Immutable settings held for the lifetime of one client instance."""

    base_url: str
    api_key: str
    max_retries: int = DEFAULT_MAX_RETRIES
    initial_delay_ms: float = DEFAULT_INITIAL_DELAY_MS
    requests_per_second: float = DEFAULT_REQUESTS_PER_SECOND
    page_size: int = DEFAULT_PAGE_SIZE
    timeout: Optional[float] = None
    records_key: str = DEFAULT_RECORDS_KEY
    max_rate_limit_retries: Optional[int] = None

    def __post_init__(self):
        if not isinstance(self.base_url, str) or not self.base_url.strip():
            raise ConfigError("base_url must be a non-empty string")
        if not isinstance(self.api_key, str) or not self.api_key:
            raise ConfigError("api_key must be a non-empty string")

        for name in ("max_retries", "initial_delay_ms", "requests_per_second", "page_size"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ConfigError(f"{name} must be a number > 0, got {value!r}")
        for name in ("max_retries", "page_size"):
            if not isinstance(getattr(self, name), int):
                raise ConfigError(f"{name} must be an integer")

        if self.timeout is not None and self.timeout <= 0:
            raise ConfigError(f"timeout must be > 0 when set, got {self.timeout!r}")
        if self.max_rate_limit_retries is not None and self.max_rate_limit_retries < 0:
            raise ConfigError("max_rate_limit_retries must be >= 0 when set")

    @property
    def headers(self) -> dict:
        """Headers attached to every outbound request."""
        return {
            "x-api-key": self.api_key,
            "Content-Type": "application/json",
        }

    @classmethod
    def from_options(
        cls, base_url: str, api_key: str, options: Optional[Mapping[str, Any]] = None
    ) -> "ClientConfig":
        """
        Build a config from an options mapping.

        Keys may be camelCase (``maxRetries``) or field names
        (``max_retries``).  Falsy values fall back to the defaults, so
        ``{"pageSize": 0}`` yields a page size of 10.
        """
        kwargs = {}
        for key, value in (options or {}).items():
            field_name = OPTION_ALIASES.get(key, key)
            if field_name not in cls.__dataclass_fields__ or field_name in ("base_url", "api_key"):
                raise ConfigError(f"Unknown client option: {key!r}")
            if field_name == "max_rate_limit_retries":
                if value is not None:
                    kwargs[field_name] = value
            elif value:
                kwargs[field_name] = value
        return cls(base_url=base_url, api_key=api_key, **kwargs)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ClientConfig":
        """Resolve a config from ``RESILIENT_CLIENT_*`` environment variables."""
        env = os.environ if environ is None else environ

        def _get(name, cast, default):
            raw = env.get(ENV_PREFIX + name)
            if raw is None or raw.strip() == "":
                return default
            try:
                return cast(raw)
            except ValueError as e:
                raise ConfigError(f"{ENV_PREFIX}{name}={raw!r} is not valid: {e}") from e

        base_url = env.get(ENV_PREFIX + "BASE_URL", "")
        api_key = env.get(ENV_PREFIX + "API_KEY", "")
        if not base_url or not api_key:
            raise ConfigError(
                f"{ENV_PREFIX}BASE_URL and {ENV_PREFIX}API_KEY must both be set."
            )

        return cls(
            base_url=base_url,
            api_key=api_key,
            max_retries=_get("MAX_RETRIES", int, DEFAULT_MAX_RETRIES),
            initial_delay_ms=_get("INITIAL_DELAY_MS", float, DEFAULT_INITIAL_DELAY_MS),
            requests_per_second=_get("REQUESTS_PER_SECOND", float, DEFAULT_REQUESTS_PER_SECOND),
            page_size=_get("PAGE_SIZE", int, DEFAULT_PAGE_SIZE),
            timeout=_get("TIMEOUT", float, None),
            records_key=env.get(ENV_PREFIX + "RECORDS_KEY") or DEFAULT_RECORDS_KEY,
        )
