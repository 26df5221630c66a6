"""Unit tests for the IP / CIDR / ISO string format checks."""
import pytest

from trafficmonitor.format_validator import (
    is_valid_cidr_range,
    is_valid_guid,
    is_valid_ip,
    is_valid_iso_format,
)


class TestIsValidIp:

    @pytest.mark.parametrize("value", ["127.0.0.1", "8.8.8.8", "::1", "2001:db8::ff00:42:8329", "::ffff:10.0.0.1"])
    def test_valid_addresses(self, value):
        assert is_valid_ip(value)

    @pytest.mark.parametrize("value", ["", None, "256.1.1.1", "10.0.0", "10.0.0.0/24", "not-an-ip", 42])
    def test_invalid_addresses(self, value):
        assert not is_valid_ip(value)


class TestIsValidCidrRange:

    @pytest.mark.parametrize("value", ["10.0.0.0/24", "255.255.255.248/29", "0.0.0.0/0", "2001:db8::/32"])
    def test_valid_blocks(self, value):
        assert is_valid_cidr_range(value)

    def test_host_bits_set_is_accepted(self):
        assert is_valid_cidr_range("10.0.0.5/24")

    @pytest.mark.parametrize(
        "value",
        ["10.0.0.1", "10.0.0.0/33", "10.0.0.0/", "/24", "10.0.0.0/255.255.255.0", "2001:db8::/129", "", None],
    )
    def test_invalid_blocks(self, value):
        assert not is_valid_cidr_range(value)


class TestOtherFormats:

    def test_guid(self):
        assert is_valid_guid("3f2504e0-4f89-41d3-9a0c-0305e82c3301")
        assert not is_valid_guid("3f2504e0")
        assert not is_valid_guid(None)

    def test_iso_format(self):
        assert is_valid_iso_format("2018-01-01T00:00:00.001Z")
        assert is_valid_iso_format("2018-01-01T23:59:59Z")
        assert not is_valid_iso_format("2018-01-01 00:00:00")
        assert not is_valid_iso_format("2018-01-01T00:00:00.0001Z")
        assert not is_valid_iso_format(None)
