"""Unit tests for folding per-user results into the scan report."""
from trafficmonitor.models import (
    IpAddressScanReport,
    UsageRecord,
    UsageScanResult,
    UserActivityReport,
    VstsUser,
)


def make_activity(name="alice", records=2):
    user = VstsUser(display_name=name, origin="aad", cuid=f"{name}-cuid")
    usage = [UsageRecord(ip_address=f"8.8.8.{i}") for i in range(records)]
    return UserActivityReport(user=user, all_usage_records=usage)


def test_clean_user_is_not_flagged():
    report = IpAddressScanReport(completed_successfully=True)
    activity = make_activity()

    report.add_user_scan_result(activity, UsageScanResult(scanned_record_count=2))

    assert report.user_activity_reports == [activity]
    assert report.flagged_user_activity_reports == []
    assert report.num_users_with_flagged_records == 0
    assert not report.has_matches
    assert not report.has_errors


def test_flagged_user_counts():
    report = IpAddressScanReport(completed_successfully=True)
    activity = make_activity(records=3)
    result = UsageScanResult(scanned_record_count=3)
    result.add_matched_record(activity.all_usage_records[0])
    result.add_matched_record(activity.all_usage_records[2])
    result.add_record_scan_error(activity.all_usage_records[1], "bad ip")

    report.add_user_scan_result(activity, result)

    assert report.flagged_user_activity_reports == [activity]
    assert report.num_out_of_range_ip_address_records == 2
    assert report.num_matched_usage_records == 2
    assert report.num_users_with_flagged_records == 1
    assert report.num_unscanned_usage_records == 1
    assert activity.matched_usage_records == [activity.all_usage_records[0], activity.all_usage_records[2]]
    assert activity.errored_scan_usage_records == [activity.all_usage_records[1]]
    assert activity.scan_failure_error_messages == ["bad ip"]
    assert report.has_matches


def test_counts_accumulate_over_users():
    report = IpAddressScanReport(completed_successfully=True)
    for name in ("alice", "bob"):
        activity = make_activity(name=name, records=1)
        result = UsageScanResult(scanned_record_count=1)
        result.add_matched_record(activity.all_usage_records[0])
        report.add_user_scan_result(activity, result)

    assert report.num_users_with_flagged_records == 2
    assert report.num_out_of_range_ip_address_records == 2
    assert len(report.user_activity_reports) == 2


def test_unscanned_user():
    report = IpAddressScanReport(completed_successfully=True)
    activity = make_activity(records=4)

    report.add_unscanned_user(activity, "rule exploded")

    assert report.unscanned_user_activity_reports == [activity]
    assert report.num_unscanned_usage_records == 4
    assert activity.errored_scan_usage_records == activity.all_usage_records
    assert activity.scan_failure_error_messages == ["rule exploded"]
    assert report.has_errors


def test_usage_retrieval_error_and_active_users():
    report = IpAddressScanReport(completed_successfully=True)
    user = VstsUser(display_name="carol")

    report.add_usage_retrieval_error(user, "timeout")
    report.record_active_user(5)
    report.record_active_user(2)

    assert report.usage_retrieval_error_users == [user]
    assert report.usage_retrieval_error_messages == ["timeout"]
    assert report.num_users_active == 2
    assert report.total_usage_records_scanned == 7
    assert report.has_errors


def test_activity_display_name_fallbacks():
    assert UserActivityReport().display_name == "<unknown>"
    assert UserActivityReport(user=VstsUser(principal_name="dave@contoso.com")).display_name == "dave@contoso.com"
    assert UserActivityReport(user=VstsUser(cuid="abc")).display_name == "abc"
