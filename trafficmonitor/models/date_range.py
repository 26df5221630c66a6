"""
trafficmonitor/models/date_range.py
Scan windows expressed as ISO-8601 UTC strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from trafficmonitor.enums import ScanTimePeriod
from trafficmonitor.errors import ErrorCode, InvalidArgumentError
from trafficmonitor.format_validator import is_valid_iso_format

_DAY_START_SUFFIX = "T00:00:00.001Z"
_DAY_END_SUFFIX = "T23:59:59.999Z"


def _utc(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def to_iso_string(moment: datetime) -> str:
    """Format a datetime as YYYY-MM-DDTHH:MM:SS.fffZ (UTC, millisecond precision)."""
    moment = _utc(moment)
    return moment.strftime("%Y-%m-%dT%H:%M:%S") + f".{moment.microsecond // 1000:03d}Z"


@dataclass(frozen=True)
class IsoDateRange:
    """Start and end time of a scan window, as ISO strings."""

    iso_start_time: str
    iso_end_time: str

    def __post_init__(self):
        if not is_valid_iso_format(self.iso_start_time) or not is_valid_iso_format(self.iso_end_time):
            raise InvalidArgumentError(
                "Invalid constructor inputs. Both start and end time must be valid ISO strings."
            )

    @classmethod
    def for_date(cls, date: datetime) -> "IsoDateRange":
        """The whole (UTC) calendar day containing ``date``."""
        day = _utc(date).date().isoformat()
        return cls(day + _DAY_START_SUFFIX, day + _DAY_END_SUFFIX)

    @classmethod
    def prior_day(cls, now: Optional[datetime] = None) -> "IsoDateRange":
        return cls.for_date(_utc(now) - timedelta(days=1))

    @classmethod
    def last_24_hours(cls, now: Optional[datetime] = None) -> "IsoDateRange":
        end = _utc(now)
        return cls(to_iso_string(end - timedelta(hours=24)), to_iso_string(end))

    @classmethod
    def for_period(cls, period: ScanTimePeriod, now: Optional[datetime] = None) -> "IsoDateRange":
        if period == ScanTimePeriod.PRIOR_DAY:
            return cls.prior_day(now)
        if period == ScanTimePeriod.LAST_24_HOURS:
            return cls.last_24_hours(now)
        raise InvalidArgumentError(
            "Unrecognized or unsupported time period specified for scan.",
            code=ErrorCode.UNKNOWN_TIME_PERIOD,
            details={"period": str(period)},
        )
