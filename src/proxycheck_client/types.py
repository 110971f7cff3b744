"""
Type definitions for proxycheck_client.

Query flags, per-feature int flags and the FeatureSetting tagged union
that reconciles boolean switches with typed overrides.
"""
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Iterable, Optional, Union


class QueryFlag(str, Enum):
    """Named toggles sent together in the comma-joined `flags` parameter."""

    VPN = "vpn"
    ASN = "asn"
    NODE = "node"
    TIME = "time"
    RISK = "risk"
    PORT = "port"
    SEEN = "seen"
    DAYS = "days"
    COUNTRY = "country"
    ISOCODE = "isocode"
    PROXY_TYPE = "proxy"
    PROVIDER = "provider"
    TOR = "tor"
    RESIDENTIAL = "residential"
    MOBILE = "mobile"
    HOSTING = "hosting"
    CITY = "city"
    REGION = "region"
    ORGANIZATION = "organization"
    HOSTNAME = "hostname"
    ISP = "isp"
    MAIL = "mail"

    @staticmethod
    def to_query_string(flags: Iterable["QueryFlag"]) -> str:
        """Join flag values with commas."""
        return ",".join(flag.value for flag in flags)


class IntEnumFlag(int, Enum):
    """Base for int-valued feature flags."""

    @classmethod
    def from_value(cls, value: int) -> "IntEnumFlag":
        """Look up a member by value, falling back to ENABLED."""
        for member in cls:
            if member.value == value:
                return member
        return cls["ENABLED"]


class VpnFlag(IntEnumFlag):
    DISABLED = 0
    ENABLED = 1
    ENHANCED = 2
    ADVANCED = 3


class RiskFlag(IntEnumFlag):
    DISABLED = 0
    ENABLED = 1
    ENHANCED = 2


class AsnFlag(IntEnumFlag):
    DISABLED = 0
    ENABLED = 1


class NodeFlag(IntEnumFlag):
    DISABLED = 0
    ENABLED = 1


class TimeFlag(IntEnumFlag):
    DISABLED = 0
    ENABLED = 1


class InfFlag(IntEnumFlag):
    DISABLED = 0
    ENABLED = 1


class PortFlag(IntEnumFlag):
    DISABLED = 0
    ENABLED = 1


class SeenFlag(IntEnumFlag):
    DISABLED = 0
    ENABLED = 1


@dataclass(frozen=True)
class DaysFlag:
    """Look-back window in days for detections."""

    value: int = 7

    @classmethod
    def of(cls, days: int) -> "DaysFlag":
        if days < 0:
            raise ValueError("days must be non-negative")
        return cls(days)


_VER_FORMAT = "%d-%B-%Y"


@dataclass(frozen=True)
class VerFlag:
    """API version pinned by release date, formatted as DD-Month-YYYY."""

    value: str

    @classmethod
    def of(cls, when: Union[str, date]) -> "VerFlag":
        """Build from a date or validate a DD-Month-YYYY string."""
        if isinstance(when, date):
            return cls(when.strftime(_VER_FORMAT))
        try:
            datetime.strptime(when, _VER_FORMAT)
        except ValueError as e:
            raise ValueError(
                "Date string must be in the format DD-Month-YYYY (e.g., 17-August-2021)"
            ) from e
        return cls(when)

    @classmethod
    def now(cls) -> "VerFlag":
        return cls.of(date.today())


FeatureOverride = Union[IntEnumFlag, DaysFlag, int]


class FeatureState(str, Enum):
    """State of a single feature parameter."""

    UNSET = "unset"
    ON = "on"
    EXPLICIT = "explicit"


@dataclass(frozen=True)
class FeatureSetting:
    """
    One feature parameter: unset, switched on, or an explicit typed value.

    An explicit override always takes precedence over the boolean switch,
    and an unset feature is omitted from the request entirely.
    """

    state: FeatureState = FeatureState.UNSET
    override: Optional[FeatureOverride] = None

    @classmethod
    def unset(cls) -> "FeatureSetting":
        return _UNSET

    @classmethod
    def on(cls) -> "FeatureSetting":
        return _ON

    @classmethod
    def explicit(cls, override: FeatureOverride) -> "FeatureSetting":
        if override is None:
            raise ValueError("explicit feature setting requires an override")
        return cls(FeatureState.EXPLICIT, override)

    @classmethod
    def merge(
        cls,
        switch: bool = False,
        override: Optional[FeatureOverride] = None,
    ) -> "FeatureSetting":
        """Combine a boolean switch and an optional typed override."""
        if override is not None:
            return cls.explicit(override)
        if switch:
            return cls.on()
        return cls.unset()

    @classmethod
    def coerce(
        cls, value: Union["FeatureSetting", bool, FeatureOverride, None]
    ) -> "FeatureSetting":
        """Accept a FeatureSetting, a bool switch, or a typed override."""
        if isinstance(value, FeatureSetting):
            return value
        if value is None or value is False:
            return cls.unset()
        if value is True:
            return cls.on()
        return cls.explicit(value)

    @property
    def is_set(self) -> bool:
        return self.state is not FeatureState.UNSET

    def query_value(self) -> Optional[str]:
        """Value to send for this feature, or None to omit it."""
        if self.state is FeatureState.EXPLICIT:
            return str(int(getattr(self.override, "value", self.override)))
        if self.state is FeatureState.ON:
            return "1"
        return None


_UNSET = FeatureSetting(FeatureState.UNSET)
_ON = FeatureSetting(FeatureState.ON)


class ResponseStatus(str, Enum):
    """Normalized upstream status."""

    SUCCESS = "success"
    ERROR = "error"
    DENIED = "denied"
    WARNING = "warning"

    @classmethod
    def from_string(cls, status: Optional[str]) -> Optional["ResponseStatus"]:
        """Map an upstream status string; "ok" and "success" are equivalent."""
        if status is None:
            return None
        normalized = status.lower()
        if normalized == "ok":
            return cls.SUCCESS
        for member in cls:
            if member.value == normalized:
                return member
        return None


class ProxyStatus(str, Enum):
    YES = "yes"
    NO = "no"
    UNKNOWN = "unknown"

    @classmethod
    def from_string(cls, status: Optional[str]) -> "ProxyStatus":
        if status is None:
            return cls.UNKNOWN
        for member in cls:
            if member.value == status.lower():
                return member
        return cls.UNKNOWN


class ProxyType(str, Enum):
    VPN = "VPN"
    TOR = "TOR"
    PUBLIC = "Public"
    RESIDENTIAL = "Residential"
    WEB = "Web"
    HOSTING = "Hosting"
    UNKNOWN = "Unknown"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "ProxyType":
        if value is None:
            return cls.UNKNOWN
        for member in cls:
            if member.value.lower() == value.lower():
                return member
        return cls.UNKNOWN
