"""
trafficmonitor/monitor.py
UsageMonitor: scans every user of a VSTS account for out-of-range IP traffic.

Pipeline for one scan:
  1. Build the scanner rule (a bad allow-list fails here, before any I/O).
  2. Retrieve the users for the requested origin (aad / all).
  3. For each user, concurrently: fetch the usage records of the scan window,
     run the rule over them, fold the result into the shared report.

Failures retrieving the user list end the scan with an unsuccessful report.
Failures for a single user are recorded on the report and the other users
are still scanned.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import List, Optional

from trafficmonitor import factory
from trafficmonitor.config import ApiConfig
from trafficmonitor.engine import scan_user_ip_addresses
from trafficmonitor.enums import UserOrigin
from trafficmonitor.errors import ErrorCode, InvalidArgumentError, TrafficMonitorError, build_error_message
from trafficmonitor.models.date_range import IsoDateRange
from trafficmonitor.models.scan_report import IpAddressScanReport, UsageScanReport, UserActivityReport
from trafficmonitor.models.scan_request import IpAddressScanRequest, UsageScanRequest
from trafficmonitor.models.user import VstsUser
from trafficmonitor.rules import OutOfRangeIpAddressScannerRule
from trafficmonitor.services import GraphApiUserService, UtilizationApiUsageService

logger = logging.getLogger(__name__)

USER_RETRIEVAL_FAILED_MESSAGE = (
    "Failed to retrieve the list of users from the specified VSTS account. "
    "Please ensure that the Graph API is enabled on the account."
)
NO_USERS_FOUND_MESSAGE = "No users were found from the specified User Origin on the specified VSTS account."
UNKNOWN_TIME_PERIOD_MESSAGE = (
    "Unable to retrieve usage records from VSTS. Unrecognized or unsupported time period specified for scan."
)
UNKNOWN_TIME_PERIOD_DEBUG_MESSAGE = "Currently the only supported scan intervals are 'priorDay' and 'last24Hours'"
USAGE_RETRIEVAL_FAILED_MESSAGE = (
    "Encountered a fatal error while trying to retrieve and analyze usage records for a user. Error details: "
)


class UsageMonitor:
    """Runs out-of-range IP address scans against a VSTS account."""

    def __init__(
        self,
        user_service: Optional[GraphApiUserService] = None,
        usage_service: Optional[UtilizationApiUsageService] = None,
        api_config: Optional[ApiConfig] = None,
    ):
        self.api_config = api_config or ApiConfig()
        self.user_service = user_service or factory.get_user_service(self.api_config)
        self.usage_service = usage_service or factory.get_usage_service(self.api_config)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def scan_for_out_of_range_ip_addresses(
        self,
        scan_request: Optional[IpAddressScanRequest],
        now: Optional[datetime] = None,
    ) -> IpAddressScanReport:
        """
        Scan the usage records of the account for activity from IP addresses
        outside the allowed ranges.

        Raises:
            InvalidArgumentError: scan_request is None, or its allow-list is empty.
            InvalidFormatError: the allow-list contains an invalid value.
        """
        if scan_request is None:
            raise InvalidArgumentError(
                "Invalid scan request parameters. Unable to execute scan for out of range Ip Addresses."
            )

        scanner_rule = factory.get_out_of_range_ip_address_scanner_rule(scan_request)

        try:
            date_range = IsoDateRange.for_period(scan_request.scan_time_period, now)
        except InvalidArgumentError:
            report = IpAddressScanReport(completed_successfully=False)
            report.error_message = UNKNOWN_TIME_PERIOD_MESSAGE
            report.debug_error_message = UNKNOWN_TIME_PERIOD_DEBUG_MESSAGE
            self._set_ip_range_scan_fields(scan_request, report)
            return report

        try:
            users = await self.get_users(scan_request)
        except TrafficMonitorError as exc:
            logger.error("[UsageMonitor] User retrieval failed: %s", exc)
            return self._build_failed_user_retrieval_report(exc, scan_request)

        if not users:
            report = IpAddressScanReport(completed_successfully=False)
            report.error_message = NO_USERS_FOUND_MESSAGE
            self._set_info_fields(scan_request, report)
            return report

        logger.info("[UsageMonitor] Scanning %d user(s) between %s and %s",
                    len(users), date_range.iso_start_time, date_range.iso_end_time)

        report = IpAddressScanReport(completed_successfully=True)
        semaphore = asyncio.Semaphore(self.api_config.max_concurrent_users)
        await asyncio.gather(*(
            self._scan_user(user, scan_request, scanner_rule, date_range, report, semaphore)
            for user in users
        ))

        self._set_ip_range_scan_fields(scan_request, report)
        return report

    async def get_users(self, scan_request: UsageScanRequest) -> List[VstsUser]:
        """Retrieve the users of the account matching the requested user origin."""
        account = scan_request.vsts_account_name
        token = scan_request.vsts_access_token

        if scan_request.vsts_user_origin == UserOrigin.AAD:
            return await self.user_service.get_aad_users(account, token)
        if scan_request.vsts_user_origin == UserOrigin.ALL:
            return await self.user_service.get_all_users(account, token)
        raise InvalidArgumentError(
            "Unable to retrieve user list from VSTS account. Unknown or unsupported user origin specified.",
            code=ErrorCode.UNKNOWN_USER_ORIGIN,
        )

    # ------------------------------------------------------------------
    # Per-user scan
    # ------------------------------------------------------------------

    async def _scan_user(
        self,
        user: VstsUser,
        scan_request: IpAddressScanRequest,
        scanner_rule: OutOfRangeIpAddressScannerRule,
        date_range: IsoDateRange,
        report: IpAddressScanReport,
        semaphore: asyncio.Semaphore,
    ) -> None:
        async with semaphore:
            try:
                usage_records = await self.usage_service.get_user_activity(
                    user.user_id,
                    date_range,
                    scan_request.vsts_account_name,
                    scan_request.vsts_access_token,
                )
            except TrafficMonitorError as exc:
                logger.warning("[UsageMonitor] Usage retrieval failed for %s: %s", user.display_name, exc)
                report.add_usage_retrieval_error(user, build_error_message(USAGE_RETRIEVAL_FAILED_MESSAGE, exc))
                return

        if not usage_records:
            return

        report.record_active_user(len(usage_records))
        activity_report = UserActivityReport(user=user, all_usage_records=list(usage_records))

        try:
            scan_result = scan_user_ip_addresses(usage_records, scanner_rule)
        except Exception as exc:
            logger.exception("[UsageMonitor] Unable to scan activity for %s", user.display_name)
            report.add_unscanned_user(activity_report, build_error_message("", exc))
            return

        report.add_user_scan_result(activity_report, scan_result)

    # ------------------------------------------------------------------
    # Report helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _set_info_fields(scan_request: UsageScanRequest, report: UsageScanReport) -> None:
        report.vsts_account_name = scan_request.vsts_account_name
        report.user_origin = scan_request.vsts_user_origin
        report.scan_period = scan_request.scan_time_period

    def _set_ip_range_scan_fields(self, scan_request: IpAddressScanRequest, report: IpAddressScanReport) -> None:
        report.num_scanner_rules_executed = 1
        report.allowed_ip_ranges = list(scan_request.allowed_ip_ranges)
        self._set_info_fields(scan_request, report)

    def _build_failed_user_retrieval_report(
        self, error: Exception, scan_request: IpAddressScanRequest
    ) -> IpAddressScanReport:
        report = IpAddressScanReport(completed_successfully=False)
        report.error_message = USER_RETRIEVAL_FAILED_MESSAGE
        report.debug_error_message = build_error_message("Error details: ", error)
        self._set_info_fields(scan_request, report)
        return report
