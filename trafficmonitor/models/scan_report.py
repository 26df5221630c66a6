"""
trafficmonitor/models/scan_report.py
Account-wide reports built up while users are scanned.

UsageScanReport       fields common to any usage scan.
UserActivityReport    one user's records and outcome.
IpAddressScanReport   out-of-range IP scan report (counts, flagged users).

Reports are mutated by concurrent user scans; every mutator takes the
report lock.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import List, Optional

from trafficmonitor.enums import ScanTimePeriod, UserOrigin
from trafficmonitor.models.scan_result import UsageScanResult
from trafficmonitor.models.usage_record import UsageRecord
from trafficmonitor.models.user import VstsUser


@dataclass
class UserActivityReport:
    """Represents a report of a user's activity on a VSTS account."""

    user: Optional[VstsUser] = None
    all_usage_records: List[UsageRecord] = field(default_factory=list)
    matched_usage_records: List[UsageRecord] = field(default_factory=list)
    errored_scan_usage_records: List[UsageRecord] = field(default_factory=list)
    scan_failure_error_messages: List[str] = field(default_factory=list)

    @property
    def display_name(self) -> str:
        if self.user is None:
            return "<unknown>"
        return self.user.display_name or self.user.principal_name or str(self.user.user_id)


@dataclass
class UsageScanReport:
    """Contains the result of a scan of the usage records on a VSTS account."""

    completed_successfully: bool = False
    scan_period: Optional[ScanTimePeriod] = None
    user_origin: Optional[UserOrigin] = None
    vsts_account_name: Optional[str] = None
    total_usage_records_scanned: int = 0
    num_matched_usage_records: int = 0
    num_unscanned_usage_records: int = 0
    num_users_active: int = 0
    num_scanner_rules_executed: int = 0
    error_message: Optional[str] = None
    debug_error_message: Optional[str] = None
    usage_retrieval_error_users: List[VstsUser] = field(default_factory=list)
    usage_retrieval_error_messages: List[str] = field(default_factory=list)

    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False, compare=False)

    def add_usage_retrieval_error(self, user: VstsUser, message: str) -> None:
        with self._lock:
            self.usage_retrieval_error_users.append(user)
            self.usage_retrieval_error_messages.append(message)

    def record_active_user(self, num_usage_records: int) -> None:
        with self._lock:
            self.num_users_active += 1
            self.total_usage_records_scanned += num_usage_records


@dataclass
class IpAddressScanReport(UsageScanReport):
    """Report from scanning the IP addresses of usage records per user."""

    num_out_of_range_ip_address_records: int = 0
    num_users_with_flagged_records: int = 0
    user_activity_reports: List[UserActivityReport] = field(default_factory=list)
    flagged_user_activity_reports: List[UserActivityReport] = field(default_factory=list)
    unscanned_user_activity_reports: List[UserActivityReport] = field(default_factory=list)
    allowed_ip_ranges: List[str] = field(default_factory=list)

    @property
    def has_matches(self) -> bool:
        return self.num_out_of_range_ip_address_records > 0

    @property
    def has_errors(self) -> bool:
        return bool(self.unscanned_user_activity_reports or self.usage_retrieval_error_users)

    def add_user_scan_result(self, activity_report: UserActivityReport, scan_result: UsageScanResult) -> None:
        """Fold one user's scan result into the report."""
        activity_report.matched_usage_records = list(scan_result.matched_records)
        activity_report.errored_scan_usage_records = list(scan_result.errored_scan_records)
        activity_report.scan_failure_error_messages.extend(scan_result.record_scan_error_messages)

        num_matched = len(scan_result.matched_records)
        with self._lock:
            if num_matched > 0:
                self.flagged_user_activity_reports.append(activity_report)
                self.num_out_of_range_ip_address_records += num_matched
                self.num_matched_usage_records += num_matched
                self.num_users_with_flagged_records += 1
            self.num_unscanned_usage_records += len(scan_result.errored_scan_records)
            self.user_activity_reports.append(activity_report)

    def add_unscanned_user(self, activity_report: UserActivityReport, message: str) -> None:
        """Record a user whose records could not be scanned at all."""
        activity_report.errored_scan_usage_records = list(activity_report.all_usage_records)
        activity_report.scan_failure_error_messages.append(message)
        with self._lock:
            self.num_unscanned_usage_records += len(activity_report.all_usage_records)
            self.unscanned_user_activity_reports.append(activity_report)
