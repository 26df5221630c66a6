from trafficmonitor.models.date_range import IsoDateRange, to_iso_string
from trafficmonitor.models.scan_report import IpAddressScanReport, UsageScanReport, UserActivityReport
from trafficmonitor.models.scan_request import IpAddressScanRequest, UsageScanRequest
from trafficmonitor.models.scan_result import UsageScanResult
from trafficmonitor.models.usage_record import UsageRecord
from trafficmonitor.models.user import GraphApiUserListResponse, VstsUser

__all__ = [
    "IsoDateRange",
    "to_iso_string",
    "IpAddressScanReport",
    "UsageScanReport",
    "UserActivityReport",
    "IpAddressScanRequest",
    "UsageScanRequest",
    "UsageScanResult",
    "UsageRecord",
    "GraphApiUserListResponse",
    "VstsUser",
]
