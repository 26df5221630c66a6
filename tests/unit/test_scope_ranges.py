"""Unit tests for allow-list parsing and membership."""
import pytest

from trafficmonitor.errors import ErrorCode, InvalidArgumentError, InvalidFormatError
from trafficmonitor.scope import (
    AllowedIpRange,
    AllowedIpRangeKind,
    is_in_range,
    parse_allowed_ranges,
)
from trafficmonitor.scope.ranges import EMPTY_ALLOWED_RANGES_MESSAGE, INVALID_ALLOWED_RANGES_MESSAGE


class TestParseAllowedRanges:

    def test_mixed_entries(self):
        ranges = parse_allowed_ranges(["192.168.1.5", "10.0.0.0/24", "2001:db8::/32"])
        assert [r.kind for r in ranges] == [
            AllowedIpRangeKind.EXACT_IP,
            AllowedIpRangeKind.CIDR,
            AllowedIpRangeKind.CIDR,
        ]

    @pytest.mark.parametrize("value", [" 10.0.0.0/24", "10.0.0.1 ", "\t192.168.1.5", ""])
    def test_padded_or_blank_entry_is_rejected(self, value):
        with pytest.raises(InvalidFormatError):
            parse_allowed_ranges([value])

    @pytest.mark.parametrize("values", [None, [], ()])
    def test_empty_allow_list_is_rejected(self, values):
        with pytest.raises(InvalidArgumentError) as exc_info:
            parse_allowed_ranges(values)
        assert str(exc_info.value) == EMPTY_ALLOWED_RANGES_MESSAGE
        assert exc_info.value.code == ErrorCode.INVALID_ARGUMENT

    def test_one_invalid_entry_rejects_the_list(self):
        with pytest.raises(InvalidFormatError) as exc_info:
            parse_allowed_ranges(["10.0.0.1", "10.0.0.0/99"])
        assert str(exc_info.value) == INVALID_ALLOWED_RANGES_MESSAGE

    def test_invalid_format_is_a_value_error(self):
        with pytest.raises(ValueError):
            AllowedIpRange.parse("garbage")


class TestIsInRange:

    def test_exact_ip(self):
        ranges = parse_allowed_ranges(["192.168.1.5"])
        assert is_in_range("192.168.1.5", ranges)
        assert not is_in_range("192.168.1.6", ranges)

    def test_cidr_block(self):
        ranges = parse_allowed_ranges(["10.0.0.0/24"])
        assert is_in_range("10.0.0.0", ranges)
        assert is_in_range("10.0.0.255", ranges)
        assert not is_in_range("10.0.1.0", ranges)

    def test_narrow_block(self):
        ranges = parse_allowed_ranges(["255.255.255.248/29"])
        assert is_in_range("255.255.255.250", ranges)
        assert not is_in_range("8.8.8.8", ranges)

    def test_ipv6_block(self):
        ranges = parse_allowed_ranges(["2001:db8::/32"])
        assert is_in_range("2001:db8::1", ranges)
        assert not is_in_range("2001:db9::1", ranges)

    def test_ip_version_mismatch_is_not_in_range(self):
        ranges = parse_allowed_ranges(["0.0.0.0/0"])
        assert not is_in_range("2001:db8::1", ranges)

    def test_ipv4_mapped_address_matches_ipv4_block(self):
        ranges = parse_allowed_ranges(["10.0.0.0/24"])
        assert is_in_range("::ffff:10.0.0.7", ranges)

    def test_malformed_address_raises(self):
        ranges = parse_allowed_ranges(["10.0.0.0/24"])
        with pytest.raises(InvalidFormatError):
            is_in_range("10.0.0.999", ranges)

    def test_ipv4_mapped_block_matches_ipv4_address(self):
        ranges = parse_allowed_ranges(["::ffff:10.0.0.0/104"])
        assert is_in_range("10.0.0.1", ranges)
        assert is_in_range("::ffff:10.0.0.1", ranges)
        assert not is_in_range("11.0.0.1", ranges)

    def test_ipv4_mapped_exact_ip_matches_ipv4_address(self):
        ranges = parse_allowed_ranges(["::ffff:192.168.1.5"])
        assert is_in_range("192.168.1.5", ranges)
        assert not is_in_range("192.168.1.6", ranges)

    def test_wide_ipv6_block_is_kept_as_ipv6(self):
        ranges = parse_allowed_ranges(["::ffff:0:0/80"])
        assert is_in_range("::ffff:10.0.0.1", ranges)
        assert not is_in_range("10.0.0.1", ranges)
