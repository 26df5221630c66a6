# trafficmonitor/factory.py
# Builds the services, validators and scanner rule used by a scan.

from __future__ import annotations

from typing import List, Optional

from trafficmonitor.config import ApiConfig
from trafficmonitor.models.scan_request import IpAddressScanRequest
from trafficmonitor.rules import OutOfRangeIpAddressScannerRule
from trafficmonitor.services import GraphApiUserService, UtilizationApiUsageService
from trafficmonitor.validators import (
    AuthMechanismOriginValidator,
    IpAddressOriginValidator,
    UsageRecordOriginValidator,
    UserAgentOriginValidator,
)


def get_user_service(api_config: Optional[ApiConfig] = None) -> GraphApiUserService:
    return GraphApiUserService(api_config)


def get_usage_service(api_config: Optional[ApiConfig] = None) -> UtilizationApiUsageService:
    return UtilizationApiUsageService(api_config)


def get_usage_record_origin_validators() -> List[UsageRecordOriginValidator]:
    """All origin validators, cheapest signal first."""
    return [
        IpAddressOriginValidator(),
        AuthMechanismOriginValidator(),
        UserAgentOriginValidator(),
    ]


def get_out_of_range_ip_address_scanner_rule(scan_request: IpAddressScanRequest) -> OutOfRangeIpAddressScannerRule:
    """
    Build the scanner rule for a scan request.

    Raises InvalidArgumentError / InvalidFormatError for a bad allow-list.
    """
    return OutOfRangeIpAddressScannerRule(
        scan_request.allowed_ip_ranges,
        scan_request.include_internal_vsts_services,
        usage_record_origin_validators=get_usage_record_origin_validators(),
        target_auth_mechanism=scan_request.target_auth_mechanism,
    )
