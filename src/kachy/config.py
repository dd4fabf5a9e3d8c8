"""Configuration objects for the Kachy Valkey client."""

from __future__ import annotations

import os
from dataclasses import InitVar, dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .errors import KachyConfigurationError

__version__ = "0.1.0"

DEFAULT_BASE_URL = "https://api.klache.net"
DEFAULT_USER_AGENT = f"kachy-valkey-python/{__version__}"

ENV_ACCESS_KEY = "KACHY_ACCESS_KEY"
ENV_BASE_URL = "KACHY_BASE_URL"
ENV_TIMEOUT = "KACHY_TIMEOUT"
ENV_MAX_RETRIES = "KACHY_MAX_RETRIES"
ENV_RETRY_DELAY = "KACHY_RETRY_DELAY"
ENV_POOL_SIZE = "KACHY_POOL_SIZE"


def _coerce(name: str, value: Any, cast: type) -> Any:
    try:
        return cast(value)
    except (TypeError, ValueError) as exc:
        raise KachyConfigurationError(f"{name} must be a valid {cast.__name__}, got {value!r}") from exc


def _resolve(
    explicit: Any, environ: Mapping[str, str], field_name: str, env_name: str, default: Any, cast: type
) -> Any:
    if explicit is not None:
        return _coerce(field_name, explicit, cast)
    raw = environ.get(env_name)
    if raw is None or raw.strip() == "":
        return default
    return _coerce(env_name, raw, cast)


@dataclass(frozen=True)
class KachyConfig:
    """Connection parameters for :class:`~kachy.client.KachyClient`.

    Unset fields resolve as explicit argument > ``KACHY_*`` environment
    variable > built-in default, so after construction every field holds a
    concrete value; ``None`` only means "not given" at the call site.
    ``max_retries`` and ``retry_delay`` are reserved; no retry loop consumes
    them.
    """

    access_key: str
    base_url: Optional[str] = None
    timeout: Optional[float] = None
    max_retries: Optional[int] = None
    retry_delay: Optional[float] = None
    pool_size: Optional[int] = None
    user_agent: Optional[str] = None
    headers: Optional[Mapping[str, str]] = None
    environ: InitVar[Optional[Mapping[str, str]]] = None

    def __post_init__(self, environ: Optional[Mapping[str, str]]) -> None:
        if not self.access_key:
            raise KachyConfigurationError(f"{ENV_ACCESS_KEY} is required")

        env = os.environ if environ is None else environ
        resolved = {
            "base_url": self.base_url or env.get(ENV_BASE_URL) or DEFAULT_BASE_URL,
            "timeout": _resolve(self.timeout, env, "timeout", ENV_TIMEOUT, 30.0, float),
            "max_retries": _resolve(self.max_retries, env, "max_retries", ENV_MAX_RETRIES, 3, int),
            "retry_delay": _resolve(self.retry_delay, env, "retry_delay", ENV_RETRY_DELAY, 1.0, float),
            "pool_size": _resolve(self.pool_size, env, "pool_size", ENV_POOL_SIZE, 10, int),
            "user_agent": self.user_agent or DEFAULT_USER_AGENT,
        }
        if resolved["timeout"] <= 0:
            raise KachyConfigurationError("timeout must be positive")
        if resolved["max_retries"] < 0:
            raise KachyConfigurationError("max_retries must not be negative")
        if resolved["retry_delay"] < 0:
            raise KachyConfigurationError("retry_delay must not be negative")
        if resolved["pool_size"] < 1:
            raise KachyConfigurationError("pool_size must be at least 1")

        if self.headers is not None:
            headers: Dict[str, str] = dict(self.headers)
        else:
            headers = {
                "User-Agent": resolved["user_agent"],
                "Accept": "application/json",
                "Content-Type": "application/json",
            }
        resolved["headers"] = MappingProxyType(headers)

        for name, value in resolved.items():
            object.__setattr__(self, name, value)

    def to_dict(self) -> Dict[str, Any]:
        """Plain snapshot of every field; ``headers`` is a fresh dict."""
        data = {
            "access_key": self.access_key,
            "base_url": self.base_url,
            "timeout": self.timeout,
            "max_retries": self.max_retries,
            "retry_delay": self.retry_delay,
            "pool_size": self.pool_size,
            "user_agent": self.user_agent,
        }
        data["headers"] = dict(self.headers or {})
        return data

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **options: Any) -> "KachyConfig":
        """Build a config whose access key comes from ``KACHY_ACCESS_KEY``."""
        env = os.environ if environ is None else environ
        access_key = env.get(ENV_ACCESS_KEY)
        if not access_key:
            raise KachyConfigurationError(f"{ENV_ACCESS_KEY} environment variable is required")
        return cls(access_key=access_key, environ=env, **options)


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_USER_AGENT",
    "KachyConfig",
]
