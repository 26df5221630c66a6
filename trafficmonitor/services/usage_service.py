"""
trafficmonitor/services/usage_service.py
Usage record retrieval through the VSTS Utilization API.

https://{account}.visualstudio.com/_apis/utilization/usagesummary
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import List, Optional

from pydantic import ValidationError

from trafficmonitor.enums import ScanTimePeriod
from trafficmonitor.errors import (
    ApiError,
    ErrorCode,
    InvalidArgumentError,
    TrafficMonitorError,
    build_error_message,
)
from trafficmonitor.models.date_range import IsoDateRange
from trafficmonitor.models.usage_record import UsageRecord
from trafficmonitor.services.base import VstsApiService
from trafficmonitor.vsts_helpers import build_utilization_usage_summary_api_url

logger = logging.getLogger(__name__)

_USAGE_ERROR = "Encountered an unexpected error while attempting to retrieve VSTS User Activity. Error details: "


class UtilizationApiUsageService(VstsApiService):
    """Provides access to the usage records of individual users."""

    async def get_user_activity(
        self,
        user_id: Optional[str],
        date_range: IsoDateRange,
        vsts_account_name: str,
        access_token: str,
    ) -> List[UsageRecord]:
        """Retrieve the usage records of one user inside date_range."""
        try:
            if not user_id:
                raise InvalidArgumentError("Invalid user id.")
            url = build_utilization_usage_summary_api_url(vsts_account_name)
            params = {
                "userId": user_id,
                "startTime": date_range.iso_start_time,
                "endTime": date_range.iso_end_time,
                "api-version": self.api_config.utilization_api_version,
            }
            async with self.open_client(access_token) as client:
                payload, _ = await client.get_json(url, params=params)

            values = payload.get("value")
            if values is None:
                values = []
            if not isinstance(values, list):
                raise ApiError(
                    "Invalid or unexpected JSON encountered. Unable to determine VSTS User Activity.",
                    code=ErrorCode.API_RESPONSE_INVALID,
                )
            records = [UsageRecord.model_validate(value) for value in values]
        except (TrafficMonitorError, ValidationError) as exc:
            raise ApiError(
                build_error_message(_USAGE_ERROR, exc),
                code=ErrorCode.USAGE_RETRIEVAL_FAILED,
                status_code=getattr(exc, "status_code", None),
            ) from exc

        logger.debug("[UtilizationApiUsageService] %d usage record(s) for user %s", len(records), user_id)
        return records

    async def get_user_activity_on_date(
        self, user_id: Optional[str], date: datetime, vsts_account_name: str, access_token: str
    ) -> List[UsageRecord]:
        """Retrieve the usage records of the whole (UTC) day containing date."""
        return await self.get_user_activity(user_id, IsoDateRange.for_date(date), vsts_account_name, access_token)

    async def get_user_activity_from_yesterday(
        self, user_id: Optional[str], vsts_account_name: str, access_token: str, now: Optional[datetime] = None
    ) -> List[UsageRecord]:
        return await self.get_user_activity(user_id, IsoDateRange.prior_day(now), vsts_account_name, access_token)

    async def get_user_activity_over_last_24_hours(
        self, user_id: Optional[str], vsts_account_name: str, access_token: str, now: Optional[datetime] = None
    ) -> List[UsageRecord]:
        return await self.get_user_activity(user_id, IsoDateRange.last_24_hours(now), vsts_account_name, access_token)

    async def get_user_activity_for_period(
        self,
        user_id: Optional[str],
        period: ScanTimePeriod,
        vsts_account_name: str,
        access_token: str,
        now: Optional[datetime] = None,
    ) -> List[UsageRecord]:
        return await self.get_user_activity(
            user_id, IsoDateRange.for_period(period, now), vsts_account_name, access_token
        )
