"""
Request builder utilities for proxycheck_client.

Turns a subject and ProxyCheckOptions into a RequestPlan: the final URL,
its cache signature and the TTL to cache a successful result for.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Sequence, Tuple
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

from ..config import ResolvedConfig
from ..errors import InvalidCredentialsError, MalformedRequestError
from ..options import (
    ProxyCheckOptions,
    QueryParams,
    resolve_cache_ttl,
    resolve_common_params,
    resolve_options,
)
from ..types import QueryFlag

logger = logging.getLogger("proxycheck_client.request_builder")

RequestShape = Literal["ip", "ips", "email", "dashboard"]

DASHBOARD_PATH = "dashboard"


@dataclass(frozen=True)
class RequestPlan:
    """Everything needed to execute and cache one request."""

    shape: RequestShape
    url: str
    cache_key: str
    ttl_seconds: float
    subjects: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def subject(self) -> Optional[str]:
        return self.subjects[0] if self.subjects else None


def build_url(base_url: str, path: str, params: Optional[QueryParams] = None) -> str:
    """Build the full URL from base, path segment and ordered parameters."""
    url = base_url if base_url.endswith("/") else base_url + "/"
    if path:
        url = url + quote(path, safe="@:")
    if params:
        url = f"{url}?{urlencode(params, quote_via=quote, safe=',')}"
    return url


def cache_signature(method: str, url: str) -> str:
    """Canonical request signature: method plus URL with sorted parameters."""
    parts = urlsplit(url)
    query = sorted(parse_qsl(parts.query, keep_blank_values=True))
    canonical = urlunsplit(
        (parts.scheme, parts.netloc, parts.path, urlencode(query, quote_via=quote, safe=","), "")
    )
    return f"{method} {canonical}"


def _credential_params(config: ResolvedConfig) -> QueryParams:
    return [("key", config.api_key)] if config.api_key else []


def _require_subject(value: str, kind: str) -> str:
    if value is None or not str(value).strip():
        raise MalformedRequestError(f"{kind} must not be empty")
    return str(value).strip()


def _plan(
    shape: RequestShape,
    config: ResolvedConfig,
    path: str,
    params: QueryParams,
    options: Optional[ProxyCheckOptions],
    subjects: Sequence[str],
) -> RequestPlan:
    url = build_url(config.base_url, path, params)
    plan = RequestPlan(
        shape=shape,
        url=url,
        cache_key=cache_signature("GET", url),
        ttl_seconds=resolve_cache_ttl(options, config.default_cache_ttl),
        subjects=tuple(subjects),
    )
    logger.debug(f"_plan: shape={shape}, subjects={plan.subjects}, ttl={plan.ttl_seconds}")
    return plan


def plan_ip_check(
    config: ResolvedConfig, ip: str, options: Optional[ProxyCheckOptions] = None
) -> RequestPlan:
    """Plan a single-IP lookup."""
    ip = _require_subject(ip, "ip")
    params = _credential_params(config) + resolve_options(options)
    return _plan("ip", config, ip, params, options, [ip])


def plan_batch_check(
    config: ResolvedConfig, ips: Sequence[str], options: Optional[ProxyCheckOptions] = None
) -> RequestPlan:
    """Plan a multi-IP lookup; the subjects travel in the ``ips`` parameter."""
    subjects: List[str] = [_require_subject(ip, "ip") for ip in ips]
    if not subjects:
        raise MalformedRequestError("ips must not be empty")
    params = _credential_params(config) + resolve_options(options, subjects=subjects)
    return _plan("ips", config, "", params, options, subjects)


def plan_email_check(
    config: ResolvedConfig, email: str, options: Optional[ProxyCheckOptions] = None
) -> RequestPlan:
    """Plan an email lookup. The ``mail`` flag is always sent."""
    email = _require_subject(email, "email")
    opts = (options or ProxyCheckOptions()).with_flags(QueryFlag.MAIL)
    params = _credential_params(config) + resolve_options(opts)
    return _plan("email", config, email, params, options, [email])


def plan_dashboard(
    config: ResolvedConfig, options: Optional[ProxyCheckOptions] = None
) -> RequestPlan:
    """Plan an account dashboard lookup; an API key is mandatory."""
    if not config.api_key:
        raise InvalidCredentialsError("API key is required for dashboard requests")
    params = _credential_params(config) + resolve_common_params(options)
    return _plan("dashboard", config, DASHBOARD_PATH, params, options, [])
