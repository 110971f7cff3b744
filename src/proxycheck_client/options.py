"""
Request options and their resolution into query parameters.
"""
import logging
from dataclasses import dataclass, field, replace
from datetime import timedelta
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from .types import (
    AsnFlag,
    DaysFlag,
    FeatureSetting,
    InfFlag,
    NodeFlag,
    PortFlag,
    QueryFlag,
    RiskFlag,
    SeenFlag,
    TimeFlag,
    VerFlag,
    VpnFlag,
)

logger = logging.getLogger("proxycheck_client.options")

# Emission order of the per-feature parameters.
FEATURE_PARAMS: Tuple[str, ...] = (
    "vpn",
    "asn",
    "node",
    "time",
    "inf",
    "risk",
    "port",
    "seen",
    "days",
)

QueryParams = List[Tuple[str, str]]


@dataclass(frozen=True)
class ProxyCheckOptions:
    """Immutable per-request options.

    Feature fields accept a FeatureSetting, a bool switch or a typed
    override (e.g. ``VpnFlag.ADVANCED``); they are normalized on creation.
    """

    flags: Tuple[QueryFlag, ...] = ()
    vpn: FeatureSetting = field(default_factory=FeatureSetting.unset)
    asn: FeatureSetting = field(default_factory=FeatureSetting.unset)
    node: FeatureSetting = field(default_factory=FeatureSetting.unset)
    time: FeatureSetting = field(default_factory=FeatureSetting.unset)
    inf: FeatureSetting = field(default_factory=FeatureSetting.unset)
    risk: FeatureSetting = field(default_factory=FeatureSetting.unset)
    port: FeatureSetting = field(default_factory=FeatureSetting.unset)
    seen: FeatureSetting = field(default_factory=FeatureSetting.unset)
    days: FeatureSetting = field(default_factory=FeatureSetting.unset)
    tag: Optional[str] = None
    ver: Optional[VerFlag] = None
    use_ssl: bool = True
    cache_ttl: Optional[Union[float, timedelta]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "flags", tuple(QueryFlag(f) for f in self.flags))
        for name in FEATURE_PARAMS:
            object.__setattr__(self, name, FeatureSetting.coerce(getattr(self, name)))

    @classmethod
    def from_switches(
        cls,
        flags: Iterable[QueryFlag] = (),
        vpn_detection: bool = False,
        vpn_flag: Optional[VpnFlag] = None,
        asn: bool = False,
        asn_flag: Optional[AsnFlag] = None,
        node: bool = False,
        node_flag: Optional[NodeFlag] = None,
        time: bool = False,
        time_flag: Optional[TimeFlag] = None,
        inf: bool = False,
        inf_flag: Optional[InfFlag] = None,
        risk: bool = False,
        risk_flag: Optional[RiskFlag] = None,
        port: bool = False,
        port_flag: Optional[PortFlag] = None,
        seen: bool = False,
        seen_flag: Optional[SeenFlag] = None,
        days: bool = False,
        days_flag: Optional[DaysFlag] = None,
        tag: Optional[str] = None,
        ver: Optional[VerFlag] = None,
        use_ssl: bool = True,
        cache_ttl: Optional[Union[float, timedelta]] = None,
    ) -> "ProxyCheckOptions":
        """Build options from boolean switches plus optional typed overrides."""
        return cls(
            flags=tuple(flags),
            vpn=FeatureSetting.merge(vpn_detection, vpn_flag),
            asn=FeatureSetting.merge(asn, asn_flag),
            node=FeatureSetting.merge(node, node_flag),
            time=FeatureSetting.merge(time, time_flag),
            inf=FeatureSetting.merge(inf, inf_flag),
            risk=FeatureSetting.merge(risk, risk_flag),
            port=FeatureSetting.merge(port, port_flag),
            seen=FeatureSetting.merge(seen, seen_flag),
            days=FeatureSetting.merge(days, days_flag),
            tag=tag,
            ver=ver,
            use_ssl=use_ssl,
            cache_ttl=cache_ttl,
        )

    def with_flags(self, *extra: QueryFlag) -> "ProxyCheckOptions":
        """Return a copy with additional query flags."""
        return replace(self, flags=self.flags + tuple(extra))

    def features(self) -> List[Tuple[str, FeatureSetting]]:
        return [(name, getattr(self, name)) for name in FEATURE_PARAMS]


DEFAULT_OPTIONS = ProxyCheckOptions()


def canonical_flags(flags: Iterable[QueryFlag]) -> List[QueryFlag]:
    """Deduplicate flags and order them by value."""
    return sorted(set(flags), key=lambda flag: flag.value)


def resolve_common_params(options: Optional[ProxyCheckOptions] = None) -> QueryParams:
    """The ``tag``, ``ver`` and ``ssl`` parameters sent on every endpoint."""
    opts = options or DEFAULT_OPTIONS
    params: QueryParams = []

    if opts.tag is not None:
        params.append(("tag", opts.tag))

    if opts.ver is not None:
        params.append(("ver", opts.ver.value))

    params.append(("ssl", "1" if opts.use_ssl else "0"))
    return params


def resolve_options(
    options: Optional[ProxyCheckOptions] = None,
    subjects: Optional[Sequence[str]] = None,
) -> QueryParams:
    """Resolve options into an ordered list of (name, value) query parameters.

    The output is deterministic for a given input, which keeps the cache
    signature of equivalent requests stable.
    """
    opts = options or DEFAULT_OPTIONS
    params: QueryParams = []

    flags = canonical_flags(opts.flags)
    if flags:
        params.append(("flags", QueryFlag.to_query_string(flags)))

    for name, setting in opts.features():
        value = setting.query_value()
        if value is not None:
            params.append((name, value))

    params.extend(resolve_common_params(opts))

    if subjects is not None:
        params.append(("ips", ",".join(subjects)))

    logger.debug(f"resolve_options: params={params}")
    return params


def resolve_cache_ttl(
    options: Optional[ProxyCheckOptions], default_ttl: float
) -> float:
    """Per-request TTL override in seconds, else the client default."""
    if options is None or options.cache_ttl is None:
        return default_ttl
    if isinstance(options.cache_ttl, timedelta):
        return options.cache_ttl.total_seconds()
    return float(options.cache_ttl)

