"""
trafficmonitor
Audits VSTS account activity for traffic from IP addresses outside an allow-list.

Usage:
    from trafficmonitor import OutOfRangeIpAddressScannerRule, AuthMechanismOriginValidator

    rule = OutOfRangeIpAddressScannerRule(
        ["10.0.0.0/24", "192.168.1.5"],
        include_internal_vsts_services=False,
        usage_record_origin_validators=[AuthMechanismOriginValidator()],
    )
    rule.scan_record_for_match(record)   # True -> out-of-range traffic
"""

from trafficmonitor.engine import execute_scanner_rule, scan_user_ip_addresses
from trafficmonitor.enums import AuthMechanism, ScanTimePeriod, UserOrigin
from trafficmonitor.errors import InvalidArgumentError, InvalidFormatError, TrafficMonitorError
from trafficmonitor.format_validator import is_valid_cidr_range, is_valid_ip
from trafficmonitor.models import IpAddressScanReport, IpAddressScanRequest, UsageRecord, UsageScanResult
from trafficmonitor.rules import OutOfRangeIpAddressScannerRule
from trafficmonitor.validators import (
    AuthMechanismOriginValidator,
    IpAddressOriginValidator,
    UsageRecordOriginValidator,
    UserAgentOriginValidator,
)

__version__ = "1.0.0"

__all__ = [
    "execute_scanner_rule",
    "scan_user_ip_addresses",
    "AuthMechanism",
    "ScanTimePeriod",
    "UserOrigin",
    "InvalidArgumentError",
    "InvalidFormatError",
    "TrafficMonitorError",
    "is_valid_cidr_range",
    "is_valid_ip",
    "IpAddressScanReport",
    "IpAddressScanRequest",
    "UsageRecord",
    "UsageScanResult",
    "OutOfRangeIpAddressScannerRule",
    "AuthMechanismOriginValidator",
    "IpAddressOriginValidator",
    "UsageRecordOriginValidator",
    "UserAgentOriginValidator",
]
