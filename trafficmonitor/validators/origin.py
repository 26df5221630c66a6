"""
trafficmonitor/validators/origin.py
Validators that decide whether a usage record was produced by VSTS itself.

Internal service-to-service calls show up in the usage logs next to real
user traffic. Each validator looks at one signal of the record:

    IpAddressOriginValidator        known VSTS egress IP address
    AuthMechanismOriginValidator    S2S service principal auth mechanism
    UserAgentOriginValidator        "VSServices" user agent prefix

A record is internal when any configured validator says so.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Tuple

from trafficmonitor.constants import (
    AUTH_MECHANISM_SERVICE_TO_SERVICE,
    KNOWN_VSTS_IP_ADDRESSES,
    USER_AGENT_PREFIX_SERVICE_TO_SERVICE,
)
from trafficmonitor.errors import InvalidArgumentError

_MISSING_RECORD_MESSAGE = "Invalid parameter. Must specify a valid usageRecord"


class UsageRecordOriginValidator(ABC):
    """Analyzes the origin properties of a usage record."""

    def is_internal_origin(self, usage_record: Any) -> bool:
        """
        Return True if usage_record originated from an internal VSTS
        service-to-service call.

        Raises InvalidArgumentError if usage_record is None. Missing fields on
        a record are not an error.
        """
        if usage_record is None:
            raise InvalidArgumentError(_MISSING_RECORD_MESSAGE)
        return self._matches(usage_record)

    # Kept for callers using the long name.
    is_internal_vsts_service_to_service_call_origin = is_internal_origin

    @abstractmethod
    def _matches(self, usage_record: Any) -> bool:
        ...


class IpAddressOriginValidator(UsageRecordOriginValidator):
    """Exact string match against the known VSTS IP addresses (not CIDR aware)."""

    def __init__(self, known_ip_addresses: Tuple[str, ...] = KNOWN_VSTS_IP_ADDRESSES):
        self._known_ip_addresses = frozenset(known_ip_addresses)

    def _matches(self, usage_record: Any) -> bool:
        return getattr(usage_record, "ip_address", None) in self._known_ip_addresses


class AuthMechanismOriginValidator(UsageRecordOriginValidator):
    """Exact, case-sensitive match of the service-to-service auth mechanism."""

    def _matches(self, usage_record: Any) -> bool:
        return getattr(usage_record, "authentication_mechanism", None) == AUTH_MECHANISM_SERVICE_TO_SERVICE


class UserAgentOriginValidator(UsageRecordOriginValidator):
    """User agent starting (position 0, case-sensitive) with "VSServices"."""

    def _matches(self, usage_record: Any) -> bool:
        user_agent = getattr(usage_record, "user_agent", None)
        if not user_agent:
            return False
        return user_agent.startswith(USER_AGENT_PREFIX_SERVICE_TO_SERVICE)
