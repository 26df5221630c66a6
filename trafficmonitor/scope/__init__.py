"""
trafficmonitor/scope
Allow-list of IP addresses / CIDR blocks.

Usage:
    from trafficmonitor.scope import parse_allowed_ranges, is_in_range

    ranges = parse_allowed_ranges(["10.0.0.0/24", "192.168.1.5", "2001:db8::/32"])
    is_in_range("10.0.0.17", ranges)   # True
    is_in_range("8.8.8.8", ranges)     # False
    parse_allowed_ranges(["bogus"])    # raises InvalidFormatError
"""

from trafficmonitor.scope.ranges import (
    AllowedIpRange,
    AllowedIpRangeKind,
    INVALID_ALLOWED_RANGES_MESSAGE,
    is_in_range,
    parse_allowed_ranges,
)

__all__ = [
    "AllowedIpRange",
    "AllowedIpRangeKind",
    "INVALID_ALLOWED_RANGES_MESSAGE",
    "is_in_range",
    "parse_allowed_ranges",
]
