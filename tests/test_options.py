"""
Tests for options.py and the FeatureSetting union in types.py
Logic testing: Decision/Branch, Boundary, Determinism
"""
from datetime import date, timedelta

import pytest

from proxycheck_client.options import (
    FEATURE_PARAMS,
    ProxyCheckOptions,
    canonical_flags,
    resolve_cache_ttl,
    resolve_common_params,
    resolve_options,
)
from proxycheck_client.types import (
    AsnFlag,
    DaysFlag,
    FeatureSetting,
    FeatureState,
    InfFlag,
    QueryFlag,
    RiskFlag,
    VerFlag,
    VpnFlag,
)


def _as_dict(params):
    return dict(params)


class TestFeatureSetting:
    """Tests for FeatureSetting precedence and coercion."""

    # Decision: override beats switch, whichever way the switch points
    @pytest.mark.parametrize("switch", [True, False])
    def test_merge_override_wins(self, switch):
        setting = FeatureSetting.merge(switch, VpnFlag.ADVANCED)
        assert setting.state is FeatureState.EXPLICIT
        assert setting.query_value() == "3"

    def test_merge_switch_only(self):
        assert FeatureSetting.merge(True, None).query_value() == "1"

    def test_merge_neither(self):
        setting = FeatureSetting.merge(False, None)
        assert setting.is_set is False
        assert setting.query_value() is None

    # Boundary: explicit DISABLED is sent, not omitted
    def test_explicit_disabled_is_sent(self):
        assert FeatureSetting.explicit(VpnFlag.DISABLED).query_value() == "0"

    def test_explicit_requires_value(self):
        with pytest.raises(ValueError):
            FeatureSetting.explicit(None)

    @pytest.mark.parametrize(
        "value, expected",
        [
            (None, None),
            (False, None),
            (True, "1"),
            (RiskFlag.ENHANCED, "2"),
            (DaysFlag.of(30), "30"),
            (0, "0"),
        ],
    )
    def test_coerce(self, value, expected):
        assert FeatureSetting.coerce(value).query_value() == expected

    def test_coerce_passes_setting_through(self):
        setting = FeatureSetting.on()
        assert FeatureSetting.coerce(setting) is setting


class TestIntFlags:
    def test_from_value_known(self):
        assert VpnFlag.from_value(2) is VpnFlag.ENHANCED

    def test_from_value_unknown_falls_back_to_enabled(self):
        assert AsnFlag.from_value(42) is AsnFlag.ENABLED

    def test_days_flag_default(self):
        assert DaysFlag().value == 7

    def test_days_flag_negative(self):
        with pytest.raises(ValueError):
            DaysFlag.of(-1)


class TestVerFlag:
    def test_from_date(self):
        assert VerFlag.of(date(2021, 8, 17)).value == "17-August-2021"

    def test_from_valid_string(self):
        assert VerFlag.of("17-August-2021").value == "17-August-2021"

    def test_from_invalid_string(self):
        with pytest.raises(ValueError, match="DD-Month-YYYY"):
            VerFlag.of("2021-08-17")


class TestProxyCheckOptions:
    def test_defaults(self):
        options = ProxyCheckOptions()
        assert options.flags == ()
        assert options.use_ssl is True
        assert all(not setting.is_set for _, setting in options.features())

    def test_constructor_coerces_features(self):
        options = ProxyCheckOptions(vpn=True, risk=RiskFlag.ENHANCED)
        assert options.vpn.state is FeatureState.ON
        assert options.risk.state is FeatureState.EXPLICIT

    def test_constructor_coerces_flag_strings(self):
        options = ProxyCheckOptions(flags=("asn", QueryFlag.TOR))
        assert options.flags == (QueryFlag.ASN, QueryFlag.TOR)

    def test_immutable(self):
        options = ProxyCheckOptions()
        with pytest.raises(Exception):
            options.tag = "changed"

    def test_from_switches_override_wins(self):
        options = ProxyCheckOptions.from_switches(
            vpn_detection=True, vpn_flag=VpnFlag.DISABLED, inf=True
        )
        assert options.vpn.query_value() == "0"
        assert options.inf.query_value() == "1"

    def test_with_flags_returns_copy(self):
        options = ProxyCheckOptions(flags=(QueryFlag.ASN,))
        extended = options.with_flags(QueryFlag.MAIL)
        assert options.flags == (QueryFlag.ASN,)
        assert extended.flags == (QueryFlag.ASN, QueryFlag.MAIL)


class TestResolveOptions:
    def test_default_only_ssl(self):
        assert resolve_options(ProxyCheckOptions()) == [("ssl", "1")]

    def test_none_options(self):
        assert resolve_options(None) == [("ssl", "1")]

    def test_ssl_disabled(self):
        assert _as_dict(resolve_options(ProxyCheckOptions(use_ssl=False)))["ssl"] == "0"

    # Property: override value is emitted regardless of the switch
    @pytest.mark.parametrize("switch", [True, False])
    def test_override_value_emitted(self, switch):
        options = ProxyCheckOptions.from_switches(risk=switch, risk_flag=RiskFlag.ENHANCED)
        assert _as_dict(resolve_options(options))["risk"] == "2"

    # Property: neither switch nor override means the parameter is absent
    @pytest.mark.parametrize("name", FEATURE_PARAMS)
    def test_unset_feature_omitted(self, name):
        params = _as_dict(resolve_options(ProxyCheckOptions()))
        assert name not in params

    def test_all_features_switched_on(self):
        options = ProxyCheckOptions(**{name: True for name in FEATURE_PARAMS})
        params = resolve_options(options)
        assert [name for name, _ in params][: len(FEATURE_PARAMS)] == list(FEATURE_PARAMS)
        assert all(value == "1" for name, value in params if name in FEATURE_PARAMS)

    def test_flags_deduplicated(self):
        options = ProxyCheckOptions(flags=(QueryFlag.ASN, QueryFlag.ASN, QueryFlag.VPN))
        assert _as_dict(resolve_options(options))["flags"] == "asn,vpn"

    def test_flag_order_is_canonical(self):
        a = ProxyCheckOptions(flags=(QueryFlag.VPN, QueryFlag.ASN))
        b = ProxyCheckOptions(flags=(QueryFlag.ASN, QueryFlag.VPN))
        assert resolve_options(a) == resolve_options(b)

    def test_empty_flags_omitted(self):
        assert "flags" not in _as_dict(resolve_options(ProxyCheckOptions(flags=())))

    def test_tag_verbatim(self):
        options = ProxyCheckOptions(tag="signup form & co")
        assert _as_dict(resolve_options(options))["tag"] == "signup form & co"

    def test_ver_emitted(self):
        options = ProxyCheckOptions(ver=VerFlag.of("17-August-2021"))
        assert _as_dict(resolve_options(options))["ver"] == "17-August-2021"

    def test_subjects_last(self):
        params = resolve_options(ProxyCheckOptions(), subjects=["1.1.1.1", "8.8.8.8"])
        assert params[-1] == ("ips", "1.1.1.1,8.8.8.8")

    def test_deterministic(self):
        options = ProxyCheckOptions(
            flags=(QueryFlag.TOR, QueryFlag.CITY), vpn=VpnFlag.ENHANCED, inf=InfFlag.ENABLED, tag="t"
        )
        assert resolve_options(options) == resolve_options(options)

    def test_canonical_flags_sorted(self):
        assert canonical_flags([QueryFlag.VPN, QueryFlag.ASN, QueryFlag.VPN]) == [
            QueryFlag.ASN,
            QueryFlag.VPN,
        ]


class TestResolveCommonParams:
    def test_defaults(self):
        assert resolve_common_params() == [("ssl", "1")]

    def test_order(self):
        options = ProxyCheckOptions(
            tag="t", ver=VerFlag.of("17-August-2021"), use_ssl=False, risk=True
        )
        assert resolve_common_params(options) == [
            ("tag", "t"),
            ("ver", "17-August-2021"),
            ("ssl", "0"),
        ]

    def test_is_tail_of_resolve_options(self):
        options = ProxyCheckOptions(tag="t", vpn=True)
        assert resolve_options(options)[-2:] == resolve_common_params(options)


class TestResolveCacheTtl:
    def test_default_when_unset(self):
        assert resolve_cache_ttl(ProxyCheckOptions(), 300.0) == 300.0

    def test_default_when_no_options(self):
        assert resolve_cache_ttl(None, 60.0) == 60.0

    def test_seconds_override(self):
        assert resolve_cache_ttl(ProxyCheckOptions(cache_ttl=10), 300.0) == 10.0

    def test_timedelta_override(self):
        options = ProxyCheckOptions(cache_ttl=timedelta(minutes=2))
        assert resolve_cache_ttl(options, 300.0) == 120.0
