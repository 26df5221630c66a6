"""Unit tests for the scanner engine."""
import logging

import pytest

from trafficmonitor.engine import execute_scanner_rule, scan_user_ip_addresses
from trafficmonitor.errors import InvalidArgumentError
from trafficmonitor.models import UsageRecord
from trafficmonitor.rules import OutOfRangeIpAddressScannerRule


class ExplodingRule:
    """Matches odd records and fails on the record tagged "boom"."""

    def scan_record_for_match(self, usage_record):
        if usage_record == "boom":
            raise RuntimeError("rule exploded")
        return usage_record % 2 == 1


def test_matches_and_errors_are_collected_in_order():
    result = execute_scanner_rule([1, "boom", 3, 4], ExplodingRule())

    assert result.scanned_record_count == 4
    assert result.matched_records == [1, 3]
    assert result.contains_matched_records
    assert result.errored_scan_records == ["boom"]
    assert result.record_scan_error_messages == ["rule exploded"]
    assert result.contains_record_scan_errors


def test_empty_input():
    result = execute_scanner_rule([], ExplodingRule())
    assert result.scanned_record_count == 0
    assert not result.contains_matched_records
    assert not result.contains_record_scan_errors


def test_scan_with_real_rule():
    rule = OutOfRangeIpAddressScannerRule(["10.0.0.0/24"], False)
    records = [
        UsageRecord(ip_address="10.0.0.1"),
        UsageRecord(ip_address="8.8.8.8"),
        UsageRecord(ip_address="garbage"),
        UsageRecord(),
    ]

    result = scan_user_ip_addresses(records, rule)

    assert result.scanned_record_count == 4
    assert result.matched_records == [records[1]]
    assert result.errored_scan_records == [records[2]]
    assert len(result.record_scan_error_messages) == 1


@pytest.mark.parametrize("records,rule", [(None, ExplodingRule()), ([], None)])
def test_missing_arguments(records, rule):
    with pytest.raises(InvalidArgumentError):
        scan_user_ip_addresses(records, rule)


def test_record_failure_is_logged_as_warning(caplog):
    with caplog.at_level(logging.WARNING, logger="trafficmonitor.engine"):
        execute_scanner_rule([1, "boom"], ExplodingRule())

    (entry,) = caplog.records
    assert entry.levelno == logging.WARNING
    assert "SCAN_001" in entry.getMessage()
    assert "rule exploded" in entry.getMessage()
