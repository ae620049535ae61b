"""Client configuration from environment variables and CLI flags."""

from __future__ import annotations

import math
import os
from collections.abc import Mapping
from dataclasses import dataclass, replace

from drupalorg_mcp.errors import ConfigError

DEFAULT_BASE_URL = "https://www.drupal.org/api-d7"
DEFAULT_USER_AGENT = "drupalorg-mcp/1.0"
DEFAULT_TIMEOUT = 30.0

ENV_BASE_URL = "DRUPALORG_API_BASE"
ENV_USER_AGENT = "DRUPALORG_USER_AGENT"
ENV_TIMEOUT = "DRUPALORG_TIMEOUT"


def _parse_timeout(raw: str | float) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError):
        msg = f"timeout must be a number of seconds, got {raw!r}"
        raise ConfigError(msg) from None
    if not math.isfinite(value) or value <= 0:
        msg = f"timeout must be a positive, finite number, got {raw!r}"
        raise ConfigError(msg)
    return value


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = DEFAULT_BASE_URL
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientConfig:
        """Build a config, letting ``DRUPALORG_*`` variables override defaults."""
        env = os.environ if environ is None else environ
        return cls(
            base_url=env.get(ENV_BASE_URL, DEFAULT_BASE_URL).rstrip("/"),
            user_agent=env.get(ENV_USER_AGENT, DEFAULT_USER_AGENT),
            timeout=_parse_timeout(env[ENV_TIMEOUT]) if env.get(ENV_TIMEOUT) else DEFAULT_TIMEOUT,
        )

    def with_overrides(self, *, base_url: str | None = None, timeout: float | None = None) -> ClientConfig:
        """Apply command-line overrides; ``None`` keeps the current value."""
        config = self
        if base_url is not None:
            config = replace(config, base_url=base_url.rstrip("/"))
        if timeout is not None:
            config = replace(config, timeout=_parse_timeout(timeout))
        return config

    @property
    def headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept": "application/json"}
