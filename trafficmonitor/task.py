"""
trafficmonitor/task.py
Pipeline task entrypoint: read the task inputs, run the scan, report the outcome.

The outcome separates "the scan found out-of-range traffic" from "the scan
could not be executed", so a pipeline can tell a policy violation from an
infrastructure problem by exit code.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import List, Optional, TextIO

from trafficmonitor import pipeline
from trafficmonitor.config import MonitorConfig, TaskInputs, get_config
from trafficmonitor.errors import build_error_message
from trafficmonitor.models.scan_report import IpAddressScanReport, UserActivityReport
from trafficmonitor.models.scan_request import IpAddressScanRequest
from trafficmonitor.models.usage_record import UsageRecord
from trafficmonitor.monitor import UsageMonitor
from trafficmonitor.pipeline import TaskResult

logger = logging.getLogger(__name__)

FATAL_ERROR_MESSAGE = "Fatal error encountered. Unable to scan IP Addresses."
ENABLE_DEBUGGING_MESSAGE = "Enable debugging to receive more detailed error information."
MATCHES_FOUND_MESSAGE = "Scan result included matched/invalid records. The user and traffic details are in the output."
UNSCANNED_USERS_MESSAGE = "Scan could not analyze the usage records of one or more users. Details are in the output."
SCAN_NOT_EXECUTED_MESSAGE = "Failing the task because the scan was not successfully executed."


class TaskOutcome(Enum):
    SUCCEEDED = 0
    MATCHES_FOUND = 1
    FAILED = 2

    @property
    def exit_code(self) -> int:
        return self.value


def build_scan_request(inputs: TaskInputs) -> IpAddressScanRequest:
    return IpAddressScanRequest(
        vsts_account_name=inputs.account_name,
        vsts_access_token=inputs.access_token,
        vsts_user_origin=inputs.user_origin,
        scan_time_period=inputs.time_period,
        allowed_ip_ranges=inputs.allowed_ip_ranges,
        include_internal_vsts_services=inputs.include_internal_vsts_services,
        target_auth_mechanism=inputs.target_auth_mechanism,
    )


class TrafficMonitorTask:
    """Runs one scan as a pipeline step."""

    def __init__(
        self,
        inputs: Optional[TaskInputs] = None,
        config: Optional[MonitorConfig] = None,
        monitor: Optional[UsageMonitor] = None,
        stream: Optional[TextIO] = None,
    ):
        self.inputs = inputs
        self.config = config or get_config()
        self.monitor = monitor or UsageMonitor(api_config=self.config.api)
        self.stream = stream

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def run(self) -> TaskOutcome:
        return asyncio.run(self.run_async())

    async def run_async(self) -> TaskOutcome:
        try:
            if self.inputs is None:
                self.inputs = TaskInputs.from_env()
            scan_request = build_scan_request(self.inputs)
            logger.info(
                "Starting the scan. Note that the scan may take a while if you have a large number of users in your VSTS account"
            )
            scan_report = await self.monitor.scan_for_out_of_range_ip_addresses(scan_request)
            return self.review_scan_report(scan_report)
        except Exception as exc:
            if self.inputs is not None:
                self.print_scan_parameters()
            self._error(build_error_message("Unexpected fatal execution error: ", exc))
            return self._fail(FATAL_ERROR_MESSAGE)

    # ------------------------------------------------------------------
    # Report review
    # ------------------------------------------------------------------

    def review_scan_report(self, scan_report: Optional[IpAddressScanReport]) -> TaskOutcome:
        self.print_scan_parameters()
        if scan_report is None:
            self._error("An internal error occurred. Unable to complete scan.")
            self._error(ENABLE_DEBUGGING_MESSAGE)
            self._debug("The ScanReport object returned from the Monitor was empty.")
            return self._fail(FATAL_ERROR_MESSAGE)

        self.display_usage_metrics(scan_report)
        self.handle_unscanned_users(scan_report)

        flagged = scan_report.flagged_user_activity_reports
        unscanned = scan_report.unscanned_user_activity_reports
        if flagged:
            self.display_flagged_user_information(flagged)
        if unscanned:
            self.display_unscanned_user_information(unscanned)

        if not scan_report.completed_successfully:
            self._error(
                "An error occurred while attempting to execute the scan. Error details: "
                + str(scan_report.error_message)
            )
            self._error(ENABLE_DEBUGGING_MESSAGE)
            if scan_report.debug_error_message:
                self._debug(scan_report.debug_error_message)
            return self._fail(SCAN_NOT_EXECUTED_MESSAGE)

        if flagged:
            pipeline.set_result(TaskResult.FAILED, MATCHES_FOUND_MESSAGE, stream=self.stream)
            return TaskOutcome.MATCHES_FOUND

        if unscanned:
            return self._fail(UNSCANNED_USERS_MESSAGE)

        logger.info("All activity originated from within the specified range(s) of IP Addresses.")
        pipeline.set_result(TaskResult.SUCCEEDED, stream=self.stream)
        return TaskOutcome.SUCCEEDED

    def print_scan_parameters(self) -> None:
        inputs = self.inputs
        logger.info("VSTS Account Scanned: %s", inputs.account_name)
        logger.info("Scan Period: %s", inputs.time_period.value)
        logger.info("VSTS User Origin: %s", inputs.user_origin.value)
        if inputs.include_internal_vsts_services:
            logger.info("Traffic generated from internal VSTS processes was also scanned.")
        else:
            logger.info("Traffic generated from internal VSTS processes was ignored.")
        logger.info("Target authentication mechanism: %s", inputs.target_auth_mechanism.value)
        logger.info("The allowable IP ranges that were used in this scan: %s", ",".join(inputs.allowed_ip_ranges))

    def display_usage_metrics(self, scan_report: IpAddressScanReport) -> None:
        logger.info("The usage records of: %d user(s) were analyzed.", scan_report.num_users_active)
        logger.info("A total of: %d usage record(s) were analyzed.", scan_report.total_usage_records_scanned)

    def handle_unscanned_users(self, scan_report: IpAddressScanReport) -> None:
        unscanned_users = scan_report.usage_retrieval_error_users
        if unscanned_users:
            self._error(f"Failed to retrieve usage records for {len(unscanned_users)} user(s).")
            for message in scan_report.usage_retrieval_error_messages:
                self._error(message)

    def display_flagged_user_information(self, flagged_reports: List[UserActivityReport]) -> None:
        self._error(
            f"{len(flagged_reports)} user(s) accessed the VSTS account from an unallowed IP Address "
            "that was outside the specified range."
        )
        for activity_report in flagged_reports:
            name = activity_report.display_name
            logger.info(
                "User: %s had: %d total usage record(s) during the scan period.",
                name,
                len(activity_report.all_usage_records),
            )
            self._error(
                f"User: {name} had: {len(activity_report.matched_usage_records)} "
                "usage record(s) from an unallowed IP Address."
            )
            self._write_flagged_records(activity_report.matched_usage_records)

    def display_unscanned_user_information(self, unscanned_reports: List[UserActivityReport]) -> None:
        self._error(f"Unable to scan the usage records for: {len(unscanned_reports)} user(s).")
        self._error(ENABLE_DEBUGGING_MESSAGE)
        for activity_report in unscanned_reports:
            self._error(f"Unable to analyze activity for user: {activity_report.display_name}")
            self._debug("Error details: ")
            for message in activity_report.scan_failure_error_messages:
                self._debug(message)

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------

    def _write_flagged_records(self, records: List[UsageRecord]) -> None:
        for record in records:
            self._error(record.describe())

    def _error(self, message: str) -> None:
        logger.error(message)
        pipeline.log_error(message, stream=self.stream)

    def _debug(self, message: str) -> None:
        logger.debug(message)
        pipeline.log_debug(message, stream=self.stream)

    def _fail(self, message: str) -> TaskOutcome:
        pipeline.set_result(TaskResult.FAILED, message, stream=self.stream)
        return TaskOutcome.FAILED


def run(inputs: Optional[TaskInputs] = None, config: Optional[MonitorConfig] = None) -> TaskOutcome:
    """Run the task once and return its outcome."""
    return TrafficMonitorTask(inputs=inputs, config=config).run()
