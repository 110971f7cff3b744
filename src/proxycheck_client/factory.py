"""
Factory functions for creating proxycheck clients.
"""
from datetime import timedelta
from typing import Any, Optional, Union

import httpx

from .client import AsyncProxyCheckClient, ProxyCheckClient
from .config import ClientConfig, TimeoutConfig
from .transport import AsyncTransport, SyncTransport


def _build_config(from_env: bool, **settings: Any) -> ClientConfig:
    """Build a ClientConfig from the settings the caller actually passed."""
    values = {name: value for name, value in settings.items() if value is not None}
    if from_env:
        return ClientConfig.from_env(**values)
    return ClientConfig(**values)


def create_client(
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    enable_caching: Optional[bool] = None,
    default_cache_ttl: Optional[Union[float, timedelta]] = None,
    timeout: Union[TimeoutConfig, float, None] = None,
    transport: Optional[SyncTransport] = None,
    httpx_client: Optional[httpx.Client] = None,
    from_env: bool = False,
    **kwargs: Any,
) -> ProxyCheckClient:
    """
    Create a blocking client.

    Args:
        api_key: proxycheck.io API key; omitted from requests when None
        base_url: API base URL
        enable_caching: Cache successful responses in memory
        default_cache_ttl: TTL for cached responses (seconds or timedelta)
        timeout: Timeout config or a single timeout in seconds
        transport: Custom transport; defaults to an httpx-backed one
        httpx_client: Pre-configured httpx.Client for the default transport
        from_env: Fill unspecified settings from PROXYCHECK_* variables

    Example:
        client = create_client(api_key="...", enable_caching=True)
        client.check_ip("8.8.8.8")
    """
    config = _build_config(
        from_env,
        api_key=api_key,
        base_url=base_url,
        enable_caching=enable_caching,
        default_cache_ttl=default_cache_ttl,
        timeout=timeout,
        **kwargs,
    )
    return ProxyCheckClient(config, transport=transport, httpx_client=httpx_client)


def create_async_client(
    api_key: Optional[str] = None,
    base_url: Optional[str] = None,
    enable_caching: Optional[bool] = None,
    default_cache_ttl: Optional[Union[float, timedelta]] = None,
    timeout: Union[TimeoutConfig, float, None] = None,
    transport: Optional[AsyncTransport] = None,
    httpx_client: Optional[httpx.AsyncClient] = None,
    from_env: bool = False,
    **kwargs: Any,
) -> AsyncProxyCheckClient:
    """Create an async client. Arguments match create_client."""
    config = _build_config(
        from_env,
        api_key=api_key,
        base_url=base_url,
        enable_caching=enable_caching,
        default_cache_ttl=default_cache_ttl,
        timeout=timeout,
        **kwargs,
    )
    return AsyncProxyCheckClient(config, transport=transport, httpx_client=httpx_client)
