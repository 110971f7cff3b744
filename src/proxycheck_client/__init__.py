"""
Client for the proxycheck.io v2 IP and email reputation API.

Provides blocking and async clients that share option resolution,
per-endpoint response caching and a typed error taxonomy.
"""
from .types import (
    QueryFlag,
    IntEnumFlag,
    VpnFlag,
    AsnFlag,
    NodeFlag,
    TimeFlag,
    InfFlag,
    RiskFlag,
    PortFlag,
    SeenFlag,
    DaysFlag,
    VerFlag,
    FeatureState,
    FeatureSetting,
    ResponseStatus,
    ProxyStatus,
    ProxyType,
)
from .options import (
    ProxyCheckOptions,
    resolve_options,
)
from .cache import (
    CacheEntry,
    ResponseCache,
)
from .errors import (
    ErrorKind,
    ERROR_TYPES,
    ProxyCheckError,
    InvalidCredentialsError,
    RateLimitedError,
    QuotaExceededError,
    MalformedRequestError,
    UpstreamError,
    UpstreamWarning,
    RequestDeniedError,
    TransportError,
    GenericFailure,
)
from .classifier import classify, raise_for_payload
from .models import (
    ProxyCheckResponse,
    EmailCheckResponse,
    DashboardResponse,
)
from .config import (
    ClientConfig,
    TimeoutConfig,
    DEFAULT_BASE_URL,
)
from .transport import (
    SyncTransport,
    AsyncTransport,
    HttpxTransport,
    AsyncHttpxTransport,
)
from .client import ProxyCheckClient, AsyncProxyCheckClient
from .factory import create_client, create_async_client

__all__ = [
    # Flags
    "QueryFlag",
    "IntEnumFlag",
    "VpnFlag",
    "AsnFlag",
    "NodeFlag",
    "TimeFlag",
    "InfFlag",
    "RiskFlag",
    "PortFlag",
    "SeenFlag",
    "DaysFlag",
    "VerFlag",
    "FeatureState",
    "FeatureSetting",
    "ResponseStatus",
    "ProxyStatus",
    "ProxyType",
    # Options
    "ProxyCheckOptions",
    "resolve_options",
    # Cache
    "CacheEntry",
    "ResponseCache",
    # Errors
    "ErrorKind",
    "ERROR_TYPES",
    "ProxyCheckError",
    "InvalidCredentialsError",
    "RateLimitedError",
    "QuotaExceededError",
    "MalformedRequestError",
    "UpstreamError",
    "UpstreamWarning",
    "RequestDeniedError",
    "TransportError",
    "GenericFailure",
    "classify",
    "raise_for_payload",
    # Models
    "ProxyCheckResponse",
    "EmailCheckResponse",
    "DashboardResponse",
    # Config
    "ClientConfig",
    "TimeoutConfig",
    "DEFAULT_BASE_URL",
    # Transport
    "SyncTransport",
    "AsyncTransport",
    "HttpxTransport",
    "AsyncHttpxTransport",
    # Clients
    "ProxyCheckClient",
    "AsyncProxyCheckClient",
    "create_client",
    "create_async_client",
]

__version__ = "0.1.0"
