"""
proxycheck.io clients.

ProxyCheckClient blocks on the calling thread; AsyncProxyCheckClient
suspends only while awaiting the transport. Everything else (planning,
cache lookup, classification, cache population) runs through the same
synchronous RequestExecutor in both.
"""
import asyncio
import logging
from typing import Dict, Optional, Sequence

import httpx

from .config import ClientConfig, ResolvedConfig, resolve_config
from .core.executor import RequestExecutor
from .core.request_builder import (
    RequestPlan,
    plan_batch_check,
    plan_dashboard,
    plan_email_check,
    plan_ip_check,
)
from .errors import ProxyCheckError, TransportError
from .models import DashboardResponse, EmailCheckResponse, ProxyCheckResponse
from .options import ProxyCheckOptions
from .transport import AsyncHttpxTransport, AsyncTransport, HttpxTransport, SyncTransport

logger = logging.getLogger("proxycheck_client.client")


class _BaseClient:
    """Configuration and executor shared by both client flavours."""

    def __init__(self, config: Optional[ClientConfig] = None):
        self._config: ResolvedConfig = resolve_config(config or ClientConfig())
        self._executor = RequestExecutor(self._config)
        self._closed = False

    @property
    def config(self) -> ResolvedConfig:
        return self._config

    def clear_cache(self) -> None:
        """Drop every cached response."""
        self._executor.clear()

    def cache_stats(self) -> Dict[str, int]:
        """Number of stored entries per response cache."""
        return self._executor.stats()

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError("Client has been closed")


def _wrap_transport_error(error: Exception) -> TransportError:
    return TransportError(f"Network error: {error}", error)


class ProxyCheckClient(_BaseClient):
    """Blocking proxycheck.io client.

    Example:
        with ProxyCheckClient(ClientConfig(api_key="...", enable_caching=True)) as client:
            result = client.check_ip("8.8.8.8", ProxyCheckOptions(vpn=True, risk=True))
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[SyncTransport] = None,
        httpx_client: Optional[httpx.Client] = None,
    ):
        super().__init__(config)
        self._owns_transport = transport is None
        self._transport = transport or HttpxTransport(
            timeout=self._config.timeout,
            headers=self._config.headers,
            httpx_client=httpx_client,
        )

    def _run(self, plan: RequestPlan):
        cached = self._executor.lookup(plan)
        if not self._executor.is_miss(cached):
            return cached

        try:
            raw = self._transport.execute(plan.url)
        except ProxyCheckError:
            raise
        except (httpx.HTTPError, OSError) as e:
            raise _wrap_transport_error(e) from e

        return self._executor.complete(plan, raw)

    def check_ip(
        self, ip: str, options: Optional[ProxyCheckOptions] = None
    ) -> ProxyCheckResponse:
        """Look up a single IP address."""
        self._ensure_open()
        return self._run(plan_ip_check(self._config, ip, options))

    def check_ips(
        self, ips: Sequence[str], options: Optional[ProxyCheckOptions] = None
    ) -> Dict[str, ProxyCheckResponse]:
        """Look up several IP addresses in one request.

        Returns a mapping of IP to response; IPs the service did not report
        on are left out.
        """
        self._ensure_open()
        if not ips:
            return {}
        return self._run(plan_batch_check(self._config, ips, options))

    def check_email(
        self, email: str, options: Optional[ProxyCheckOptions] = None
    ) -> EmailCheckResponse:
        """Check whether an email address is disposable."""
        self._ensure_open()
        return self._run(plan_email_check(self._config, email, options))

    def get_dashboard(
        self, options: Optional[ProxyCheckOptions] = None
    ) -> DashboardResponse:
        """Fetch account usage and plan information. Requires an API key."""
        self._ensure_open()
        return self._run(plan_dashboard(self._config, options))

    def close(self) -> None:
        """Close the client."""
        self._closed = True
        if self._owns_transport:
            self._transport.close()

    def __enter__(self) -> "ProxyCheckClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class AsyncProxyCheckClient(_BaseClient):
    """Asynchronous proxycheck.io client.

    Example:
        async with AsyncProxyCheckClient(ClientConfig(api_key="...")) as client:
            result = await client.check_ip("8.8.8.8")
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        transport: Optional[AsyncTransport] = None,
        httpx_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(config)
        self._owns_transport = transport is None
        self._transport = transport or AsyncHttpxTransport(
            timeout=self._config.timeout,
            headers=self._config.headers,
            httpx_client=httpx_client,
        )

    async def _run(self, plan: RequestPlan):
        cached = self._executor.lookup(plan)
        if not self._executor.is_miss(cached):
            return cached

        try:
            raw = await self._transport.execute(plan.url)
        except ProxyCheckError:
            raise
        except (httpx.HTTPError, OSError, asyncio.TimeoutError) as e:
            raise _wrap_transport_error(e) from e

        return self._executor.complete(plan, raw)

    async def check_ip(
        self, ip: str, options: Optional[ProxyCheckOptions] = None
    ) -> ProxyCheckResponse:
        """Look up a single IP address."""
        self._ensure_open()
        return await self._run(plan_ip_check(self._config, ip, options))

    async def check_ips(
        self, ips: Sequence[str], options: Optional[ProxyCheckOptions] = None
    ) -> Dict[str, ProxyCheckResponse]:
        """Look up several IP addresses in one request."""
        self._ensure_open()
        if not ips:
            return {}
        return await self._run(plan_batch_check(self._config, ips, options))

    async def check_email(
        self, email: str, options: Optional[ProxyCheckOptions] = None
    ) -> EmailCheckResponse:
        """Check whether an email address is disposable."""
        self._ensure_open()
        return await self._run(plan_email_check(self._config, email, options))

    async def get_dashboard(
        self, options: Optional[ProxyCheckOptions] = None
    ) -> DashboardResponse:
        """Fetch account usage and plan information. Requires an API key."""
        self._ensure_open()
        return await self._run(plan_dashboard(self._config, options))

    async def close(self) -> None:
        """Close the client."""
        self._closed = True
        if self._owns_transport:
            await self._transport.close()

    async def __aenter__(self) -> "AsyncProxyCheckClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
