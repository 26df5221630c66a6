"""
trafficmonitor/scope/ranges.py
Data model for the allow-list of IP addresses and CIDR blocks.

AllowedIpRange         one parsed allow-list entry (exact IP or CIDR block).
parse_allowed_ranges   validates and parses a whole allow-list atomically.
is_in_range            membership test for a single IP address.
"""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from trafficmonitor.errors import InvalidArgumentError, InvalidFormatError
from trafficmonitor.format_validator import is_valid_cidr_range, is_valid_ip

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]

INVALID_ALLOWED_RANGES_MESSAGE = (
    "Specified allowedIpRanges contains one or more invalid values. All values must be a valid IPv4 or "
    "IPv6 address, or a valid CIDR block"
)

EMPTY_ALLOWED_RANGES_MESSAGE = (
    "Invalid constructor parameters. allowedIpRanges parameter must be a non-empty array of valid values."
)


def _unmap_address(address: IPAddress) -> IPAddress:
    mapped = getattr(address, "ipv4_mapped", None)
    return mapped if mapped is not None else address


def _unmap_network(network: IPNetwork) -> IPNetwork:
    # Only blocks lying wholly inside ::ffff:0:0/96 have an IPv4 equivalent.
    mapped = getattr(network.network_address, "ipv4_mapped", None)
    if mapped is None or network.prefixlen < 96:
        return network
    return ipaddress.ip_network((mapped, network.prefixlen - 96))


class AllowedIpRangeKind(str, Enum):
    EXACT_IP = "exact_ip"      # 192.168.1.5
    CIDR = "cidr"              # 10.0.0.0/24


@dataclass(frozen=True)
class AllowedIpRange:
    """One entry of the allow-list."""

    raw: str                    # Original string as configured
    kind: AllowedIpRangeKind

    # Pre-parsed internals (set by AllowedIpRange.parse)
    _address: Optional[IPAddress] = field(default=None, repr=False, compare=False)
    _network: Optional[IPNetwork] = field(default=None, repr=False, compare=False)

    @classmethod
    def parse(cls, raw: str) -> "AllowedIpRange":
        """
        Parse one entry. Raises InvalidFormatError if it is neither an IP nor a CIDR block.

        The entry is validated as given; surrounding whitespace makes it invalid.
        IPv4-mapped IPv6 entries (::ffff:a.b.c.d, ::ffff:a.b.c.d/104) are stored
        in their IPv4 form.
        """
        if is_valid_ip(raw):
            return cls(raw=raw, kind=AllowedIpRangeKind.EXACT_IP, _address=_unmap_address(ipaddress.ip_address(raw)))
        if is_valid_cidr_range(raw):
            return cls(
                raw=raw,
                kind=AllowedIpRangeKind.CIDR,
                _network=_unmap_network(ipaddress.ip_network(raw, strict=False)),
            )
        raise InvalidFormatError(INVALID_ALLOWED_RANGES_MESSAGE, details={"value": raw})

    def contains(self, address: IPAddress) -> bool:
        """Return True if address equals this IP or falls inside this block."""
        if self.kind == AllowedIpRangeKind.EXACT_IP:
            return address == self._address
        # An IPv4 address is never inside an IPv6 block and vice versa.
        if address.version != self._network.version:  # type: ignore[union-attr]
            return False
        return address in self._network  # type: ignore[operator]


def parse_allowed_ranges(values: Optional[Sequence[str]]) -> Tuple[AllowedIpRange, ...]:
    """
    Parse a configured allow-list.

    Raises:
        InvalidArgumentError: values is None or empty.
        InvalidFormatError: any entry is not a valid IP address or CIDR block.
            No partial result is returned.
    """
    if values is None or len(values) == 0:
        raise InvalidArgumentError(EMPTY_ALLOWED_RANGES_MESSAGE)
    return tuple(AllowedIpRange.parse(value) for value in values)


def _candidate_addresses(ip_address: str) -> List[IPAddress]:
    try:
        address = ipaddress.ip_address(ip_address.strip())
    except ValueError:
        raise InvalidFormatError(
            f"Unable to evaluate IP address {ip_address!r}. The value is not a valid IPv4 or IPv6 address.",
            details={"value": ip_address},
        )
    candidates: List[IPAddress] = [address]
    # ::ffff:a.b.c.d is the same host as a.b.c.d
    mapped = getattr(address, "ipv4_mapped", None)
    if mapped is not None:
        candidates.append(mapped)
    return candidates


def is_in_range(ip_address: str, ranges: Iterable[AllowedIpRange]) -> bool:
    """
    Return True if ip_address is inside at least one of the ranges.

    Raises InvalidFormatError if ip_address is not a valid IP address.
    """
    candidates = _candidate_addresses(ip_address)
    return any(r.contains(candidate) for r in ranges for candidate in candidates)
