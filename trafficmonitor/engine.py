# trafficmonitor/engine.py
# Runs a scanner rule over the usage records of a single user.

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol, Sequence

from trafficmonitor.errors import ErrorCode, InvalidArgumentError, build_error_message
from trafficmonitor.models.scan_result import UsageScanResult

logger = logging.getLogger(__name__)


class ScannerRule(Protocol):
    def scan_record_for_match(self, usage_record: Any) -> bool:
        ...


def execute_scanner_rule(usage_records: Sequence[Any], scanner_rule: ScannerRule) -> UsageScanResult:
    """
    Evaluate scanner_rule against each record, in order.

    A failure on one record is recorded on the result and scanning carries
    on with the next record.
    """
    scan_result = UsageScanResult()

    for record in usage_records:
        try:
            if scanner_rule.scan_record_for_match(record):
                scan_result.add_matched_record(record)
        except Exception as exc:
            logger.warning("[ScannerEngine] %s Record scan failed: %s", ErrorCode.RECORD_SCAN_FAILED.value, exc)
            scan_result.add_record_scan_error(record, build_error_message("", exc))

    scan_result.scanned_record_count = len(usage_records)
    return scan_result


def scan_user_ip_addresses(
    usage_records: Optional[Sequence[Any]],
    scanner_rule: Optional[ScannerRule],
) -> UsageScanResult:
    """
    Scan one user's usage records for out-of-range IP addresses.

    Raises InvalidArgumentError if either parameter is None.
    """
    if usage_records is None or scanner_rule is None:
        raise InvalidArgumentError(
            "Invalid parameters. usageRecords and outOfRangeIpAddressScannerRule cannot be null nor undefined."
        )
    return execute_scanner_rule(usage_records, scanner_rule)
