"""
Synchronous request pipeline shared by the blocking and async clients.

Both clients run the same steps around a single transport call:

    plan -> lookup() -> [transport] -> complete()

lookup() consults the cache for the plan's shape; complete() decodes,
classifies, builds the result and populates the cache.
"""
import json
import logging
from typing import Any, Dict, Mapping, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..cache import ResponseCache
from ..classifier import raise_for_payload
from ..config import ResolvedConfig
from ..errors import GenericFailure
from ..models import DashboardResponse, EmailCheckResponse, ProxyCheckResponse
from .request_builder import RequestPlan, RequestShape

logger = logging.getLogger("proxycheck_client.executor")

M = TypeVar("M", bound=BaseModel)

_MISS = object()


def decode_document(raw: bytes) -> Dict[str, Any]:
    """Decode a raw body into a JSON object."""
    if not raw:
        raise GenericFailure("Empty response body")
    try:
        document = json.loads(raw)
    except (UnicodeDecodeError, ValueError) as e:
        raise GenericFailure(f"Malformed response payload: {e}", e) from e
    if not isinstance(document, dict):
        raise GenericFailure(
            f"Malformed response payload: expected an object, got {type(document).__name__}"
        )
    return document


def decode_model(document: Mapping[str, Any], model: Type[M]) -> M:
    """Validate a document into a response model."""
    try:
        return model.model_validate(document)
    except ValidationError as e:
        raise GenericFailure(f"Error decoding {model.__name__}: {e}", e) from e


def _subject_record(
    document: Mapping[str, Any], subject: str, subject_field: str
) -> Optional[Dict[str, Any]]:
    """Merge the top-level status into the partial record for one subject."""
    partial = document.get(subject)
    if not isinstance(partial, Mapping):
        return None
    record: Dict[str, Any] = {subject_field: subject}
    if "status" in document:
        record["status"] = document["status"]
    record.update(partial)
    return record


def build_single(
    document: Mapping[str, Any], subject: str, model: Type[M], subject_field: str
) -> M:
    """Build a single-subject response.

    The service nests per-subject data under the subject key; a flat
    document is decoded as-is.
    """
    record = _subject_record(document, subject, subject_field)
    return decode_model(record if record is not None else document, model)


def merge_batch(
    document: Mapping[str, Any], subjects: Sequence[str]
) -> Dict[str, ProxyCheckResponse]:
    """Build one response per requested subject present in the document.

    Subjects missing from the document are omitted from the result.
    """
    result: Dict[str, ProxyCheckResponse] = {}
    for subject in subjects:
        record = _subject_record(document, subject, "ip")
        if record is None:
            logger.debug(f"merge_batch: no record for subject={subject}")
            continue
        result[subject] = decode_model(record, ProxyCheckResponse)
    return result


class RequestExecutor:
    """
    Cache lookup and response completion for every request shape.

    Owns one ResponseCache per shape; caches are never cross-populated.
    """

    def __init__(self, config: ResolvedConfig):
        self._config = config
        self._caches: Dict[RequestShape, ResponseCache[Any]] = {
            "ip": ResponseCache(name="ip"),
            "ips": ResponseCache(name="ips"),
            "dashboard": ResponseCache(name="dashboard"),
            "email": ResponseCache(name="email"),
        }

    @property
    def caching_enabled(self) -> bool:
        return self._config.enable_caching

    def cache_for(self, shape: RequestShape) -> ResponseCache[Any]:
        return self._caches[shape]

    def lookup(self, plan: RequestPlan) -> Any:
        """Return the cached result for a plan, or the MISS sentinel."""
        if not self.caching_enabled:
            return _MISS
        cached = self._caches[plan.shape].get(plan.cache_key)
        if cached is None:
            logger.debug(f"lookup: miss shape={plan.shape}")
            return _MISS
        logger.debug(f"lookup: hit shape={plan.shape}")
        return cached

    @staticmethod
    def is_miss(value: Any) -> bool:
        return value is _MISS

    def complete(self, plan: RequestPlan, raw: bytes) -> Any:
        """Decode, classify, build and cache the result for a plan."""
        document = decode_document(raw)
        raise_for_payload(document)

        if plan.shape == "ip":
            result: Any = build_single(document, plan.subject, ProxyCheckResponse, "ip")
        elif plan.shape == "email":
            result = build_single(document, plan.subject, EmailCheckResponse, "email")
        elif plan.shape == "ips":
            result = merge_batch(document, plan.subjects)
        else:
            result = decode_model(document, DashboardResponse)

        if self.caching_enabled:
            self._caches[plan.shape].put(plan.cache_key, result, plan.ttl_seconds)
        return result

    def clear(self) -> None:
        for cache in self._caches.values():
            cache.clear()

    def stats(self) -> Dict[str, int]:
        return {shape: cache.size() for shape, cache in self._caches.items()}
