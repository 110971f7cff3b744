"""
Maps upstream status/message pairs onto the error taxonomy.
"""
import logging
from typing import Any, Mapping, Optional

from .errors import (
    GenericFailure,
    InvalidCredentialsError,
    ProxyCheckError,
    QuotaExceededError,
    RateLimitedError,
    RequestDeniedError,
    UpstreamError,
    UpstreamWarning,
)

logger = logging.getLogger("proxycheck_client.classifier")

SUCCESS_STATUSES = frozenset({"ok", "success"})


def _optional_int(payload: Mapping[str, Any], key: str) -> Optional[int]:
    value = payload.get(key)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"_optional_int: ignoring non-numeric {key}={value!r}")
        return None


def _optional_str(payload: Mapping[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    return None if value is None else str(value)


def quota_error(message: str, payload: Optional[Mapping[str, Any]]) -> QuotaExceededError:
    """Build a QuotaExceededError from whatever quota fields the payload has."""
    payload = payload or {}
    return QuotaExceededError(
        message,
        plan=_optional_str(payload, "plan"),
        queries_today=_optional_int(payload, "queries_today"),
        queries_month=_optional_int(payload, "queries_month"),
        max_queries_day=_optional_int(payload, "maxQueries_day"),
        max_queries_month=_optional_int(payload, "maxQueries_month"),
        days_until_reset=_optional_int(payload, "days_until_reset"),
    )


def classify(
    status: str,
    message: str,
    payload: Optional[Mapping[str, Any]] = None,
) -> Optional[ProxyCheckError]:
    """Return the error for a status/message pair, or None on success.

    Message matching is case-sensitive; status matching is not.
    """
    normalized = (status or "").lower()

    if normalized in SUCCESS_STATUSES:
        return None
    if normalized == "warning":
        return UpstreamWarning(message)
    if normalized == "denied":
        return RequestDeniedError(message)
    if normalized == "error":
        if "API key" in message:
            return InvalidCredentialsError(message)
        if "rate limit" in message:
            return RateLimitedError(message)
        if "plan limit" in message or "query limit" in message:
            return quota_error(message, payload)
        return UpstreamError(message)
    return GenericFailure(f"Unknown status: {status} - {message}")


def raise_for_payload(payload: Mapping[str, Any]) -> None:
    """Raise the classified error for a decoded payload, if any.

    Payloads without a ``status`` field are left unclassified.
    """
    if "status" not in payload:
        return
    status = str(payload["status"])
    raw_message = payload.get("message")
    message = str(raw_message) if raw_message is not None else f"Unknown status: {status}"

    error = classify(status, message, payload)
    if error is not None:
        logger.debug(f"raise_for_payload: status={status}, error={error!r}")
        raise error
