"""
Core request pipeline for proxycheck_client.
"""
from .request_builder import (
    RequestPlan,
    build_url,
    cache_signature,
    plan_ip_check,
    plan_batch_check,
    plan_email_check,
    plan_dashboard,
)
from .executor import (
    RequestExecutor,
    decode_document,
    decode_model,
    build_single,
    merge_batch,
)

__all__ = [
    "RequestPlan",
    "build_url",
    "cache_signature",
    "plan_ip_check",
    "plan_batch_check",
    "plan_email_check",
    "plan_dashboard",
    "RequestExecutor",
    "decode_document",
    "decode_model",
    "build_single",
    "merge_batch",
]
