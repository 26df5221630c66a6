"""
trafficmonitor/format_validator.py
String format checks used by the allow-list parser and the request models.

Every check accepts arbitrary input (including None) and returns a bool;
none of them raise.
"""

from __future__ import annotations

import ipaddress
import re
from typing import Any

_GUID_RE = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$")

# Fractional seconds are optional, at most 3 digits (milliseconds).
_ISO_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})T((\d{2}):(\d{2}):(\d{2}))(\.\d{1,3})?Z$")

_PREFIX_RE = re.compile(r"^\d{1,3}$")


def is_valid_ip(value: Any) -> bool:
    """Return True if value is a single IPv4 or IPv6 address."""
    if not value or not isinstance(value, str):
        return False
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def is_valid_cidr_range(value: Any) -> bool:
    """
    Return True if value is an IPv4/IPv6 CIDR block (address/prefix-length).

    Host bits may be set ("10.0.0.5/24" is accepted). Netmask notation
    ("10.0.0.0/255.255.255.0") is not a CIDR block and is rejected.
    """
    if not value or not isinstance(value, str) or "/" not in value:
        return False
    address, _, prefix = value.partition("/")
    if not _PREFIX_RE.match(prefix) or not is_valid_ip(address):
        return False
    try:
        ipaddress.ip_network(value, strict=False)
    except ValueError:
        return False
    return True


def is_valid_guid(value: Any) -> bool:
    if not value or not isinstance(value, str):
        return False
    return bool(_GUID_RE.match(value))


def is_valid_iso_format(value: Any) -> bool:
    """Return True for UTC ISO-8601 strings such as 2018-01-01T00:00:00.001Z."""
    if not value or not isinstance(value, str):
        return False
    return bool(_ISO_RE.match(value))


__all__ = ["is_valid_ip", "is_valid_cidr_range", "is_valid_guid", "is_valid_iso_format"]
