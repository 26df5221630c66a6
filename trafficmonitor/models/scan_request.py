"""
trafficmonitor/models/scan_request.py
Immutable parameter bundles for a scan invocation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from trafficmonitor.enums import AuthMechanism, ScanTimePeriod, UserOrigin


@dataclass(frozen=True)
class UsageScanRequest:
    """Parameters used for a request to scan usage records on a VSTS account."""

    vsts_account_name: str
    vsts_access_token: str = field(repr=False)
    vsts_user_origin: UserOrigin = UserOrigin.ALL
    scan_time_period: ScanTimePeriod = ScanTimePeriod.PRIOR_DAY


@dataclass(frozen=True)
class IpAddressScanRequest(UsageScanRequest):
    allowed_ip_ranges: Tuple[str, ...] = ()
    include_internal_vsts_services: bool = False
    target_auth_mechanism: AuthMechanism = AuthMechanism.ANY
