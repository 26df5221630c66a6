"""
trafficmonitor/models/scan_result.py
Result of running one scanner rule over one user's usage records.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List


@dataclass
class UsageScanResult:
    """
    Accumulator for a single user scan. Created fresh per scan, never reused.

    The three lists keep scan order.
    """

    scanned_record_count: int = 0
    contains_matched_records: bool = False
    contains_record_scan_errors: bool = False
    matched_records: List[Any] = field(default_factory=list)
    record_scan_error_messages: List[str] = field(default_factory=list)
    errored_scan_records: List[Any] = field(default_factory=list)

    def add_matched_record(self, record: Any) -> None:
        self.contains_matched_records = True
        self.matched_records.append(record)

    def add_record_scan_error(self, record: Any, message: str) -> None:
        self.contains_record_scan_errors = True
        self.record_scan_error_messages.append(message)
        self.errored_scan_records.append(record)
