"""Unit tests for the internal VSTS origin validators."""
import pytest

from trafficmonitor.constants import IP_ADDRESS_CENTRAL_US, KNOWN_VSTS_IP_ADDRESSES
from trafficmonitor.errors import InvalidArgumentError
from trafficmonitor.models import UsageRecord
from trafficmonitor.validators import (
    AuthMechanismOriginValidator,
    IpAddressOriginValidator,
    UserAgentOriginValidator,
)


ALL_VALIDATORS = [IpAddressOriginValidator(), AuthMechanismOriginValidator(), UserAgentOriginValidator()]


@pytest.mark.parametrize("validator", ALL_VALIDATORS)
def test_none_record_is_rejected(validator):
    with pytest.raises(InvalidArgumentError):
        validator.is_internal_origin(None)


@pytest.mark.parametrize("validator", ALL_VALIDATORS)
def test_empty_record_is_not_internal(validator):
    assert validator.is_internal_origin(UsageRecord()) is False


class TestIpAddressOriginValidator:

    def test_every_known_address_is_internal(self):
        validator = IpAddressOriginValidator()
        for address in KNOWN_VSTS_IP_ADDRESSES:
            assert validator.is_internal_origin(UsageRecord(ip_address=address))

    def test_unknown_address(self):
        assert not IpAddressOriginValidator().is_internal_origin(UsageRecord(ip_address="8.8.8.8"))

    def test_custom_address_list(self):
        validator = IpAddressOriginValidator(known_ip_addresses=("1.2.3.4",))
        assert validator.is_internal_origin(UsageRecord(ip_address="1.2.3.4"))
        assert not validator.is_internal_origin(UsageRecord(ip_address=IP_ADDRESS_CENTRAL_US))


class TestAuthMechanismOriginValidator:

    def test_service_principal(self):
        record = UsageRecord(authentication_mechanism="S2S_ServicePrincipal")
        assert AuthMechanismOriginValidator().is_internal_origin(record)

    @pytest.mark.parametrize("value", ["PAT_Scoped", "s2s_serviceprincipal", "S2S_ServicePrincipalX", None])
    def test_other_mechanisms(self, value):
        record = UsageRecord(authentication_mechanism=value)
        assert not AuthMechanismOriginValidator().is_internal_origin(record)


class TestUserAgentOriginValidator:

    @pytest.mark.parametrize("value,expected", [
        ("VSServices", True),
        ("VSServicesFoo", True),
        ("VSServices/15.0 (Build)", True),
        ("FooVSServices", False),
        ("vsservices", False),
        ("", False),
        (None, False),
    ])
    def test_prefix_match(self, value, expected):
        record = UsageRecord(user_agent=value)
        assert UserAgentOriginValidator().is_internal_origin(record) is expected

    def test_long_alias(self):
        record = UsageRecord(user_agent="VSServices")
        assert UserAgentOriginValidator().is_internal_vsts_service_to_service_call_origin(record)
