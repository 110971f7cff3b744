"""
Shared fixtures for proxycheck_client tests.
"""
import json
from typing import Any, Dict, List, Optional

import pytest

from proxycheck_client.config import ClientConfig, resolve_config


class RecordingTransport:
    """Sync transport that replays a canned body and records URLs."""

    def __init__(self, body: Any = None, error: Optional[Exception] = None):
        self.body = body if body is not None else {"status": "ok"}
        self.error = error
        self.urls: List[str] = []
        self.closed = False

    @property
    def calls(self) -> int:
        return len(self.urls)

    def _payload(self) -> bytes:
        if isinstance(self.body, bytes):
            return self.body
        return json.dumps(self.body).encode()

    def execute(self, url: str) -> bytes:
        self.urls.append(url)
        if self.error is not None:
            raise self.error
        return self._payload()

    def close(self) -> None:
        self.closed = True


class AsyncRecordingTransport(RecordingTransport):
    """Async counterpart of RecordingTransport."""

    async def execute(self, url: str) -> bytes:
        return RecordingTransport.execute(self, url)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def ip_payload() -> Dict[str, Any]:
    return {
        "status": "ok",
        "8.8.8.8": {
            "proxy": "no",
            "type": "Business",
            "risk": 0,
            "isocode": "US",
            "country": "United States",
            "asn": "AS15169",
            "provider": "Google LLC",
        },
    }


@pytest.fixture
def batch_payload() -> Dict[str, Any]:
    return {
        "status": "ok",
        "1.2.3.4": {"proxy": "yes", "type": "VPN", "risk": 66},
        "8.8.8.8": {"proxy": "no", "risk": 0},
    }


@pytest.fixture
def email_payload() -> Dict[str, Any]:
    return {
        "status": "ok",
        "user@mailinator.com": {"disposable": "yes"},
    }


@pytest.fixture
def dashboard_payload() -> Dict[str, Any]:
    return {
        "status": "ok",
        "plan": "Starter",
        "email": "owner@example.com",
        "queries_today": 120,
        "queries_month": 3400,
        "maxQueries_day": 10000,
        "maxQueries_month": 300000,
        "days_until_reset": 12,
    }


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(api_key="test-key-123456", enable_caching=True)


@pytest.fixture
def resolved_config(client_config):
    return resolve_config(client_config)
