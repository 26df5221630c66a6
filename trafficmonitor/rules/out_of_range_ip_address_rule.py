"""
trafficmonitor/rules/out_of_range_ip_address_rule.py
OutOfRangeIpAddressScannerRule: flags usage records from IP addresses
outside the allow-list.

Evaluation order for one record:
  1. No IP address                               → not flagged
  2. IP inside any allowed range                 → not flagged
  3. PAT filter set, record not PAT-authenticated → not flagged
  4. Internal VSTS origin (any validator)        → flagged only if internal
                                                   services are included
  5. Otherwise                                   → flagged

Thread-safe; all state is read-only after construction.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence, Tuple

from trafficmonitor.constants import AUTH_MECHANISM_PAT_PREFIX
from trafficmonitor.enums import AuthMechanism
from trafficmonitor.errors import InvalidArgumentError
from trafficmonitor.scope import AllowedIpRange, is_in_range, parse_allowed_ranges
from trafficmonitor.validators import UsageRecordOriginValidator, UserAgentOriginValidator

logger = logging.getLogger(__name__)


class OutOfRangeIpAddressScannerRule:
    """
    Scanner rule looking for usage records that originated from an IP address
    outside the allowed addresses and/or CIDR blocks.

    Example:
        rule = OutOfRangeIpAddressScannerRule(
            ["10.0.0.0/8"],
            include_internal_vsts_services=False,
            usage_record_origin_validators=[AuthMechanismOriginValidator()],
        )
        rule.scan_record_for_match(record)  # True if record.ip_address is out of range
    """

    def __init__(
        self,
        allowed_ip_ranges: Optional[Sequence[str]],
        include_internal_vsts_services: bool,
        usage_record_origin_validators: Optional[Sequence[UsageRecordOriginValidator]] = (),
        target_auth_mechanism: AuthMechanism = AuthMechanism.ANY,
    ):
        """
        Raises:
            InvalidArgumentError: allowed_ip_ranges is None/empty, the validator
                list is None, or target_auth_mechanism is unknown.
            InvalidFormatError: an allowed range is not a valid IP or CIDR block.
        """
        self._allowed_ranges: Tuple[AllowedIpRange, ...] = parse_allowed_ranges(allowed_ip_ranges)

        if usage_record_origin_validators is None:
            raise InvalidArgumentError(
                "Invalid constructor parameters. usageRecordOriginValidators parameter cannot be null nor undefined."
            )

        try:
            self._target_auth_mechanism = AuthMechanism(target_auth_mechanism)
        except ValueError:
            raise InvalidArgumentError(
                f"Invalid constructor parameters. Unsupported targetAuthMechanism: {target_auth_mechanism!r}"
            )

        self._allowed_ip_ranges: Tuple[str, ...] = tuple(r.raw for r in self._allowed_ranges)
        self._include_internal_vsts_services = bool(include_internal_vsts_services)
        self._validators: Tuple[UsageRecordOriginValidator, ...] = tuple(usage_record_origin_validators)

        logger.debug(
            "[ScannerRule] Loaded %d allowed range(s), %d origin validator(s), include_internal=%s, auth=%s",
            len(self._allowed_ranges),
            len(self._validators),
            self._include_internal_vsts_services,
            self._target_auth_mechanism.value,
        )

    @classmethod
    def with_user_agent_validation(
        cls,
        allowed_ip_ranges: Optional[Sequence[str]],
        include_internal_vsts_services: bool,
    ) -> "OutOfRangeIpAddressScannerRule":
        """Rule that treats only "VSServices" user agents as internal traffic."""
        return cls(
            allowed_ip_ranges,
            include_internal_vsts_services,
            usage_record_origin_validators=[UserAgentOriginValidator()],
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def allowed_ip_ranges(self) -> Tuple[str, ...]:
        return self._allowed_ip_ranges

    @property
    def include_internal_vsts_services(self) -> bool:
        return self._include_internal_vsts_services

    @property
    def target_auth_mechanism(self) -> AuthMechanism:
        return self._target_auth_mechanism

    @property
    def usage_record_origin_validators(self) -> Tuple[UsageRecordOriginValidator, ...]:
        return self._validators

    def scan_record_for_match(self, usage_record: Any) -> bool:
        """
        Return True if usage_record came from an out-of-range IP address and
        should be reported.

        Raises InvalidArgumentError if usage_record is None, and
        InvalidFormatError if its IP address is malformed.
        """
        if usage_record is None:
            raise InvalidArgumentError("Invalid parameter. usageRecord cannot be null nor undefined")

        ip_address = getattr(usage_record, "ip_address", None)
        if not ip_address:
            return False

        if is_in_range(ip_address, self._allowed_ranges):
            return False

        if not self._matches_target_auth_mechanism(usage_record):
            return False

        if self.is_internal_origin(usage_record):
            return self._include_internal_vsts_services

        return True

    flag_record = scan_record_for_match

    def is_internal_origin(self, usage_record: Any) -> bool:
        """True if any configured validator classifies the record as internal VSTS traffic."""
        return any(v.is_internal_origin(usage_record) for v in self._validators)

    # ------------------------------------------------------------------
    # Internal evaluation
    # ------------------------------------------------------------------

    def _matches_target_auth_mechanism(self, usage_record: Any) -> bool:
        if self._target_auth_mechanism == AuthMechanism.ANY:
            return True
        auth_mechanism = getattr(usage_record, "authentication_mechanism", None) or ""
        return auth_mechanism.lower().startswith(AUTH_MECHANISM_PAT_PREFIX)
