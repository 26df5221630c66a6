"""
trafficmonitor/models/usage_record.py
Pydantic model for one record of the VSTS Utilization usage summary API.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class UsageRecord(BaseModel):
    """A single logged user action. Immutable once retrieved."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    application: Optional[str] = None
    command: Optional[str] = None
    count: Optional[int] = None
    delay: Optional[float] = None
    # ISO string representations in UTC time
    start_time: Optional[str] = Field(default=None, alias="startTime")
    end_time: Optional[str] = Field(default=None, alias="endTime")
    ip_address: Optional[str] = Field(default=None, alias="ipAddress")
    usage: Optional[float] = None
    user_agent: Optional[str] = Field(default=None, alias="userAgent")
    authentication_mechanism: Optional[str] = Field(default=None, alias="authenticationMechanism")
    status: Optional[str] = None
    vsid: Optional[str] = None
    user: Optional[str] = None

    def describe(self) -> str:
        """One-line summary used in task output for flagged records."""
        return (
            f"IP Address: {self.ip_address} Application: {self.application} "
            f"Command: {self.command} Start: {self.start_time} UserAgent: {self.user_agent} "
            f"AuthenticationMechanism: {self.authentication_mechanism}"
        )
