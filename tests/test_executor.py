"""
Tests for core/executor.py
Logic testing: Decode paths, Batch merge, Cache population
"""
import json

import pytest

from proxycheck_client.config import ClientConfig, resolve_config
from proxycheck_client.core.executor import (
    RequestExecutor,
    build_single,
    decode_document,
    decode_model,
    merge_batch,
)
from proxycheck_client.core.request_builder import (
    plan_batch_check,
    plan_dashboard,
    plan_email_check,
    plan_ip_check,
)
from proxycheck_client.errors import (
    GenericFailure,
    InvalidCredentialsError,
    QuotaExceededError,
)
from proxycheck_client.models import DashboardResponse, ProxyCheckResponse


def _raw(document) -> bytes:
    return json.dumps(document).encode()


class TestDecodeDocument:
    def test_object(self):
        assert decode_document(b'{"status": "ok"}') == {"status": "ok"}

    def test_empty_body(self):
        with pytest.raises(GenericFailure, match="Empty response body"):
            decode_document(b"")

    def test_invalid_json(self):
        with pytest.raises(GenericFailure, match="Malformed response payload") as exc_info:
            decode_document(b"<html>oops</html>")
        assert exc_info.value.cause is not None

    def test_non_object(self):
        with pytest.raises(GenericFailure, match="expected an object"):
            decode_document(b"[1, 2]")


class TestDecodeModel:
    def test_validation_error_wrapped(self):
        with pytest.raises(GenericFailure, match="ProxyCheckResponse"):
            decode_model({"risk": "not-a-number"}, ProxyCheckResponse)


class TestMergeBatch:
    def test_missing_subject_omitted(self):
        document = {"status": "ok", "1.2.3.4": {"risk": 10}}
        result = merge_batch(document, ["1.2.3.4", "5.6.7.8"])
        assert list(result) == ["1.2.3.4"]
        assert result["1.2.3.4"].status == "ok"
        assert result["1.2.3.4"].risk == 10
        assert result["1.2.3.4"].ip == "1.2.3.4"

    def test_non_mapping_entry_skipped(self):
        document = {"status": "ok", "node": "EVE-SC2", "1.2.3.4": {"risk": 1}}
        result = merge_batch(document, ["1.2.3.4", "node"])
        assert list(result) == ["1.2.3.4"]

    def test_no_top_level_status(self):
        result = merge_batch({"1.2.3.4": {"proxy": "yes"}}, ["1.2.3.4"])
        assert result["1.2.3.4"].status is None
        assert result["1.2.3.4"].is_proxy is True


class TestBuildSingle:
    def test_nested_record(self, ip_payload):
        result = build_single(ip_payload, "8.8.8.8", ProxyCheckResponse, "ip")
        assert result.ip == "8.8.8.8"
        assert result.status == "ok"
        assert result.iso_code == "US"
        assert result.provider == "Google LLC"

    def test_flat_document(self):
        result = build_single(
            {"status": "ok", "proxy": "no"}, "8.8.8.8", ProxyCheckResponse, "ip"
        )
        assert result.proxy == "no"
        assert result.ip is None


class TestRequestExecutor:
    @pytest.fixture
    def executor(self, resolved_config):
        return RequestExecutor(resolved_config)

    def test_lookup_miss_then_hit(self, executor, resolved_config, ip_payload):
        plan = plan_ip_check(resolved_config, "8.8.8.8")
        assert executor.is_miss(executor.lookup(plan))

        result = executor.complete(plan, _raw(ip_payload))
        assert executor.lookup(plan) is result
        assert executor.stats()["ip"] == 1

    def test_caching_disabled(self, ip_payload):
        config = resolve_config(ClientConfig(api_key="k", enable_caching=False))
        executor = RequestExecutor(config)
        plan = plan_ip_check(config, "8.8.8.8")
        executor.complete(plan, _raw(ip_payload))
        assert executor.is_miss(executor.lookup(plan))
        assert executor.stats()["ip"] == 0

    # Decision: classified errors are raised and never cached
    def test_error_not_cached(self, executor, resolved_config):
        plan = plan_ip_check(resolved_config, "8.8.8.8")
        with pytest.raises(InvalidCredentialsError):
            executor.complete(plan, _raw({"status": "error", "message": "Invalid API key"}))
        assert executor.stats()["ip"] == 0

    def test_quota_error_from_payload(self, executor, resolved_config):
        plan = plan_batch_check(resolved_config, ["1.2.3.4"])
        payload = {"status": "error", "message": "You exceeded your query limit", "plan": "free"}
        with pytest.raises(QuotaExceededError) as exc_info:
            executor.complete(plan, _raw(payload))
        assert exc_info.value.plan == "free"

    def test_decode_failure_not_cached(self, executor, resolved_config):
        plan = plan_ip_check(resolved_config, "8.8.8.8")
        with pytest.raises(GenericFailure):
            executor.complete(plan, b"")
        assert executor.stats()["ip"] == 0

    def test_batch(self, executor, resolved_config, batch_payload):
        plan = plan_batch_check(resolved_config, ["1.2.3.4", "8.8.8.8", "9.9.9.9"])
        result = executor.complete(plan, _raw(batch_payload))
        assert sorted(result) == ["1.2.3.4", "8.8.8.8"]
        assert result["1.2.3.4"].type_enum.value == "VPN"
        assert executor.stats()["ips"] == 1

    def test_email(self, executor, resolved_config, email_payload):
        plan = plan_email_check(resolved_config, "user@mailinator.com")
        result = executor.complete(plan, _raw(email_payload))
        assert result.email == "user@mailinator.com"
        assert result.is_disposable is True

    def test_dashboard(self, executor, resolved_config, dashboard_payload):
        plan = plan_dashboard(resolved_config)
        result = executor.complete(plan, _raw(dashboard_payload))
        assert isinstance(result, DashboardResponse)
        assert result.plan == "Starter"
        assert result.max_queries_day == 10000
        assert result.days_until_reset == 12

    def test_caches_are_per_shape(self, executor, resolved_config, ip_payload):
        plan = plan_ip_check(resolved_config, "8.8.8.8")
        executor.complete(plan, _raw(ip_payload))
        assert executor.stats() == {"ip": 1, "ips": 0, "dashboard": 0, "email": 0}

    def test_clear(self, executor, resolved_config, ip_payload):
        plan = plan_ip_check(resolved_config, "8.8.8.8")
        executor.complete(plan, _raw(ip_payload))
        executor.clear()
        assert executor.is_miss(executor.lookup(plan))

    def test_cache_for(self, executor):
        assert executor.cache_for("email").name == "email"
