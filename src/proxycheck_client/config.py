"""
Configuration for proxycheck_client.
"""
import logging
import os
from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import Dict, Optional, Union
from urllib.parse import urlparse

logger = logging.getLogger("proxycheck_client.config")

DEFAULT_BASE_URL = "https://proxycheck.io/v2/"
DEFAULT_CACHE_TTL_SECONDS = 300.0

ENV_API_KEY = "PROXYCHECK_API_KEY"
ENV_BASE_URL = "PROXYCHECK_BASE_URL"
ENV_ENABLE_CACHING = "PROXYCHECK_ENABLE_CACHING"
ENV_CACHE_TTL = "PROXYCHECK_CACHE_TTL"
ENV_TIMEOUT = "PROXYCHECK_TIMEOUT"

_TRUTHY = {"1", "true", "yes", "on"}


def mask_api_key(value: Optional[str], visible_chars: int = 4) -> str:
    """Mask an API key for safe logging."""
    if value is None:
        return "<None>"
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * (len(value) - visible_chars)


@dataclass
class TimeoutConfig:
    """Timeout configuration in seconds."""

    connect: float = 10.0
    read: float = 10.0
    write: float = 10.0


@dataclass
class ClientConfig:
    """Client configuration."""

    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    enable_caching: bool = False
    default_cache_ttl: Union[float, timedelta] = DEFAULT_CACHE_TTL_SECONDS
    timeout: Union[TimeoutConfig, float, None] = None
    headers: Dict[str, str] = field(default_factory=dict)

    def __repr__(self) -> str:
        """Safe repr that masks the API key."""
        return (
            f"ClientConfig(api_key={mask_api_key(self.api_key)!r}, "
            f"base_url={self.base_url!r}, "
            f"enable_caching={self.enable_caching!r}, "
            f"default_cache_ttl={self.default_cache_ttl!r}, "
            f"timeout={self.timeout!r})"
        )

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None, **overrides) -> "ClientConfig":
        """Build a config from PROXYCHECK_* environment variables.

        Keyword overrides win over the environment.
        """
        env = os.environ if environ is None else environ
        values: Dict[str, object] = {}

        if env.get(ENV_API_KEY):
            values["api_key"] = env[ENV_API_KEY]
        if env.get(ENV_BASE_URL):
            values["base_url"] = env[ENV_BASE_URL]
        if env.get(ENV_ENABLE_CACHING):
            values["enable_caching"] = env[ENV_ENABLE_CACHING].strip().lower() in _TRUTHY
        if env.get(ENV_CACHE_TTL):
            values["default_cache_ttl"] = _parse_float(ENV_CACHE_TTL, env[ENV_CACHE_TTL])
        if env.get(ENV_TIMEOUT):
            values["timeout"] = _parse_float(ENV_TIMEOUT, env[ENV_TIMEOUT])

        values.update(overrides)
        return cls(**values)


def _parse_float(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be a number, got {raw!r}") from e


@dataclass
class ResolvedConfig:
    """Resolved configuration with all defaults applied."""

    api_key: Optional[str]
    base_url: str
    enable_caching: bool
    default_cache_ttl: float
    timeout: TimeoutConfig
    headers: Dict[str, str]

    def __repr__(self) -> str:
        return (
            f"ResolvedConfig(api_key={mask_api_key(self.api_key)!r}, "
            f"base_url={self.base_url!r}, "
            f"enable_caching={self.enable_caching!r}, "
            f"default_cache_ttl={self.default_cache_ttl!r})"
        )


DEFAULT_TIMEOUT = TimeoutConfig()


def normalize_timeout(timeout: Union[TimeoutConfig, float, None]) -> TimeoutConfig:
    """Normalize timeout config."""
    if timeout is None:
        return replace(DEFAULT_TIMEOUT)
    if isinstance(timeout, (int, float)):
        return TimeoutConfig(connect=timeout, read=timeout, write=timeout)
    return timeout


def normalize_ttl(ttl: Union[float, timedelta]) -> float:
    if isinstance(ttl, timedelta):
        return ttl.total_seconds()
    return float(ttl)


def validate_config(config: ClientConfig) -> None:
    """Validate client configuration."""
    if not config.base_url:
        raise ValueError("base_url is required")

    parsed = urlparse(config.base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Invalid base_url: {config.base_url}")

    if normalize_ttl(config.default_cache_ttl) < 0:
        raise ValueError("default_cache_ttl must be non-negative")

    if config.api_key is not None and not config.api_key.strip():
        raise ValueError("api_key must not be blank")


def resolve_config(config: ClientConfig) -> ResolvedConfig:
    """Resolve config with defaults."""
    validate_config(config)

    base_url = config.base_url if config.base_url.endswith("/") else config.base_url + "/"
    resolved = ResolvedConfig(
        api_key=config.api_key,
        base_url=base_url,
        enable_caching=config.enable_caching,
        default_cache_ttl=normalize_ttl(config.default_cache_ttl),
        timeout=normalize_timeout(config.timeout),
        headers=dict(config.headers),
    )
    logger.debug(f"resolve_config: {resolved!r}")
    return resolved
