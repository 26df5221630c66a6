"""
trafficmonitor/models/user.py
Users returned by the VSTS Graph API.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from trafficmonitor.constants import AAD_GRAPH_SUBJECT_TYPE


class VstsUser(BaseModel):
    """Represents a User in VSTS."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    subject_kind: Optional[str] = Field(default=None, alias="subjectKind")
    domain: Optional[str] = None
    principal_name: Optional[str] = Field(default=None, alias="principalName")
    mail_address: Optional[str] = Field(default=None, alias="mailAddress")
    meta_type_id: Optional[int] = Field(default=None, alias="metaTypeId")
    origin: Optional[str] = None
    origin_id: Optional[str] = Field(default=None, alias="originId")
    id: Optional[str] = None
    cuid: Optional[str] = None
    display_name: Optional[str] = Field(default=None, alias="displayName")
    url: Optional[str] = None
    descriptor: Optional[str] = None

    @property
    def user_id(self) -> Optional[str]:
        """Identifier accepted by the Utilization API's userId parameter."""
        return self.cuid or self.origin_id or self.id

    @property
    def is_aad(self) -> bool:
        return (self.origin or "").lower() == AAD_GRAPH_SUBJECT_TYPE


@dataclass
class GraphApiUserListResponse:
    """
    One page of users from the Graph API.

    ``more_users_exist`` is True when ``users`` is only a subset; pass
    ``continuation_token`` on the next call to get the remaining users.
    """

    users: List[VstsUser] = field(default_factory=list)
    more_users_exist: bool = False
    continuation_token: Optional[str] = None
