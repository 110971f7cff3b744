"""
HTTP transports for proxycheck_client.

A transport turns a URL into raw response bytes or raises TransportError.
Sync and async variants share one construction path for timeouts and
headers.
"""
import logging
from typing import Dict, Optional, Protocol, runtime_checkable

import httpx

from .config import TimeoutConfig, normalize_timeout
from .errors import TransportError

logger = logging.getLogger("proxycheck_client.transport")

DEFAULT_HEADERS = {"accept": "application/json"}


@runtime_checkable
class SyncTransport(Protocol):
    """Blocking transport."""

    def execute(self, url: str) -> bytes:
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class AsyncTransport(Protocol):
    """Non-blocking transport."""

    async def execute(self, url: str) -> bytes:
        ...

    async def close(self) -> None:
        ...


def _httpx_timeout(timeout: TimeoutConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=timeout.connect,
        read=timeout.read,
        write=timeout.write,
        pool=timeout.connect,
    )


def _redact(url: str) -> str:
    """Hide the API key in URLs written to logs."""
    parsed = httpx.URL(url)
    if "key" not in parsed.params:
        return url
    return str(parsed.copy_set_param("key", "***"))


def _check_response(response: httpx.Response, url: str) -> bytes:
    if not response.is_success:
        logger.warning(
            f"HTTP {response.status_code} {response.reason_phrase or ''} from {_redact(url)}"
        )
    return response.content


class HttpxTransport:
    """Blocking transport backed by httpx.Client."""

    def __init__(
        self,
        timeout: Optional[TimeoutConfig] = None,
        headers: Optional[Dict[str, str]] = None,
        httpx_client: Optional[httpx.Client] = None,
    ):
        self._owns_client = httpx_client is None
        if httpx_client is not None:
            self._client = httpx_client
        else:
            self._client = httpx.Client(
                timeout=_httpx_timeout(normalize_timeout(timeout)),
                headers={**DEFAULT_HEADERS, **(headers or {})},
            )
        self._closed = False

    def execute(self, url: str) -> bytes:
        """GET the URL and return the body bytes."""
        if self._closed:
            raise RuntimeError("Transport has been closed")

        logger.debug(f"HttpxTransport.execute: GET {_redact(url)}")
        try:
            response = self._client.get(url)
        except (httpx.HTTPError, OSError) as e:
            raise TransportError(f"Network error: {e}", e) from e
        return _check_response(response, url)

    def close(self) -> None:
        """Close the transport; an injected httpx client is left open."""
        self._closed = True
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpxTransport":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class AsyncHttpxTransport:
    """Non-blocking transport backed by httpx.AsyncClient."""

    def __init__(
        self,
        timeout: Optional[TimeoutConfig] = None,
        headers: Optional[Dict[str, str]] = None,
        httpx_client: Optional[httpx.AsyncClient] = None,
    ):
        self._owns_client = httpx_client is None
        if httpx_client is not None:
            self._client = httpx_client
        else:
            self._client = httpx.AsyncClient(
                timeout=_httpx_timeout(normalize_timeout(timeout)),
                headers={**DEFAULT_HEADERS, **(headers or {})},
            )
        self._closed = False

    async def execute(self, url: str) -> bytes:
        """GET the URL and return the body bytes."""
        if self._closed:
            raise RuntimeError("Transport has been closed")

        logger.debug(f"AsyncHttpxTransport.execute: GET {_redact(url)}")
        try:
            response = await self._client.get(url)
        except (httpx.HTTPError, OSError) as e:
            raise TransportError(f"Network error: {e}", e) from e
        return _check_response(response, url)

    async def close(self) -> None:
        """Close the transport; an injected httpx client is left open."""
        self._closed = True
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "AsyncHttpxTransport":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
