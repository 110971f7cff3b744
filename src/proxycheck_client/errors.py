"""
Exception taxonomy for proxycheck_client.

Every failure surfaced by the client is one of the ProxyCheckError
subclasses below; ERROR_TYPES is the closed mapping from ErrorKind to class.
"""
from enum import Enum
from typing import Dict, Optional, Type


class ErrorKind(str, Enum):
    """Kind of failure raised by the client."""

    INVALID_CREDENTIALS = "invalid_credentials"
    RATE_LIMITED = "rate_limited"
    QUOTA_EXCEEDED = "quota_exceeded"
    MALFORMED_REQUEST = "malformed_request"
    UPSTREAM_ERROR = "upstream_error"
    UPSTREAM_WARNING = "upstream_warning"
    REQUEST_DENIED = "request_denied"
    TRANSPORT_FAILURE = "transport_failure"
    GENERIC_FAILURE = "generic_failure"


class ProxyCheckError(Exception):
    """Base class for all client errors."""

    kind: ErrorKind = ErrorKind.GENERIC_FAILURE

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class InvalidCredentialsError(ProxyCheckError):
    """The API key is invalid or missing."""

    kind = ErrorKind.INVALID_CREDENTIALS


class RateLimitedError(ProxyCheckError):
    """The upstream rate limit was hit."""

    kind = ErrorKind.RATE_LIMITED


class QuotaExceededError(ProxyCheckError):
    """The plan's query quota is exhausted.

    Quota fields are populated from the upstream payload when present and
    left as None otherwise.
    """

    kind = ErrorKind.QUOTA_EXCEEDED

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        plan: Optional[str] = None,
        queries_today: Optional[int] = None,
        queries_month: Optional[int] = None,
        max_queries_day: Optional[int] = None,
        max_queries_month: Optional[int] = None,
        days_until_reset: Optional[int] = None,
    ):
        super().__init__(message, cause)
        self.plan = plan
        self.queries_today = queries_today
        self.queries_month = queries_month
        self.max_queries_day = max_queries_day
        self.max_queries_month = max_queries_month
        self.days_until_reset = days_until_reset


class MalformedRequestError(ProxyCheckError):
    """The request could not be built from the given input."""

    kind = ErrorKind.MALFORMED_REQUEST


class UpstreamError(ProxyCheckError):
    """The service answered with status "error"."""

    kind = ErrorKind.UPSTREAM_ERROR


class UpstreamWarning(ProxyCheckError):
    """The service answered with status "warning"."""

    kind = ErrorKind.UPSTREAM_WARNING


class RequestDeniedError(ProxyCheckError):
    """The service answered with status "denied"."""

    kind = ErrorKind.REQUEST_DENIED


class TransportError(ProxyCheckError):
    """Connection, timeout or other I/O failure."""

    kind = ErrorKind.TRANSPORT_FAILURE


class GenericFailure(ProxyCheckError):
    """Unrecognized status or undecodable payload."""

    kind = ErrorKind.GENERIC_FAILURE


ERROR_TYPES: Dict[ErrorKind, Type[ProxyCheckError]] = {
    ErrorKind.INVALID_CREDENTIALS: InvalidCredentialsError,
    ErrorKind.RATE_LIMITED: RateLimitedError,
    ErrorKind.QUOTA_EXCEEDED: QuotaExceededError,
    ErrorKind.MALFORMED_REQUEST: MalformedRequestError,
    ErrorKind.UPSTREAM_ERROR: UpstreamError,
    ErrorKind.UPSTREAM_WARNING: UpstreamWarning,
    ErrorKind.REQUEST_DENIED: RequestDeniedError,
    ErrorKind.TRANSPORT_FAILURE: TransportError,
    ErrorKind.GENERIC_FAILURE: GenericFailure,
}
