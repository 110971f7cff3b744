"""
Response models decoded from proxycheck.io payloads.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .types import ProxyStatus, ProxyType, ResponseStatus


class _ApiModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ApiResponse(_ApiModel):
    """Fields common to every top-level response."""

    status: Optional[str] = None
    message: Optional[str] = None
    node: Optional[str] = None
    query_time: Optional[str] = Field(default=None, alias="query time")

    @property
    def status_enum(self) -> ResponseStatus:
        return ResponseStatus.from_string(self.status) or ResponseStatus.ERROR


class ProxyCheckResponse(ApiResponse):
    ip: Optional[str] = None
    proxy: Optional[str] = None
    type: Optional[str] = None
    risk: Optional[int] = None
    iso_code: Optional[str] = Field(default=None, alias="isocode")
    country: Optional[str] = None
    region: Optional[str] = None
    city: Optional[str] = None
    isp: Optional[str] = None
    asn: Optional[str] = None
    organisation: Optional[str] = None
    hostname: Optional[str] = None
    provider: Optional[str] = None
    port: Optional[int] = None
    seen: Optional[str] = None
    vpn: Optional[str] = None
    time: Optional[str] = None
    block: Optional[str] = None

    @property
    def proxy_enum(self) -> ProxyStatus:
        return ProxyStatus.from_string(self.proxy)

    @property
    def type_enum(self) -> ProxyType:
        return ProxyType.from_string(self.type)

    @property
    def is_proxy(self) -> bool:
        return self.proxy_enum is ProxyStatus.YES


class EmailCheckResponse(ApiResponse):
    email: Optional[str] = None
    disposable: Optional[str] = None
    risk: Optional[int] = None

    @property
    def is_disposable(self) -> bool:
        return (self.disposable or "").lower() in ("yes", "true", "1")


class DetectionData(_ApiModel):
    ip: Optional[str] = None
    date: Optional[str] = None
    proxy_type: Optional[str] = Field(default=None, alias="type")
    risk: Optional[int] = None
    country: Optional[str] = None
    iso_code: Optional[str] = Field(default=None, alias="isocode")
    asn: Optional[str] = None
    provider: Optional[str] = None


class DailyUsage(_ApiModel):
    queries: Optional[int] = None
    detections: Optional[int] = None
    date: Optional[str] = None


class MonthlyUsage(_ApiModel):
    queries: Optional[int] = None
    detections: Optional[int] = None
    month: Optional[str] = None
    year: Optional[str] = None


class TotalUsage(_ApiModel):
    queries: Optional[int] = None
    detections: Optional[int] = None


class UsageData(_ApiModel):
    daily_usage: Optional[Dict[str, DailyUsage]] = Field(default=None, alias="daily")
    monthly_usage: Optional[Dict[str, MonthlyUsage]] = Field(default=None, alias="monthly")
    total_usage: Optional[TotalUsage] = Field(default=None, alias="total")


class CustomListEntry(_ApiModel):
    id: Optional[str] = None
    value: Optional[str] = None
    note: Optional[str] = None
    added_at: Optional[str] = None


class CustomList(_ApiModel):
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    entries: Optional[List[CustomListEntry]] = None


class CorsStatus(_ApiModel):
    enabled: Optional[bool] = None
    allowed_origins: Optional[List[str]] = None
    allowed_methods: Optional[List[str]] = None
    allowed_headers: Optional[List[str]] = None
    allow_credentials: Optional[bool] = None
    max_age: Optional[int] = None


class TagData(_ApiModel):
    name: Optional[str] = None
    count: Optional[int] = None
    first_used: Optional[str] = None
    last_used: Optional[str] = None
    info: Optional[Dict[str, Any]] = None


class DashboardResponse(ApiResponse):
    plan: Optional[str] = None
    email: Optional[str] = None
    queries_today: Optional[int] = None
    queries_month: Optional[int] = None
    max_queries_day: Optional[int] = Field(default=None, alias="maxQueries_day")
    max_queries_month: Optional[int] = Field(default=None, alias="maxQueries_month")
    days_until_reset: Optional[int] = None
    detections: Optional[Dict[str, DetectionData]] = None
    usage: Optional[UsageData] = None
    custom_lists: Optional[List[CustomList]] = Field(default=None, alias="lists")
    cors: Optional[CorsStatus] = None
    tags: Optional[Dict[str, TagData]] = None
