"""
trafficmonitor/services/user_service.py
User retrieval through the VSTS Graph API.

https://{account}.vssps.visualstudio.com/_apis/graph/users
"""

from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import ValidationError

from trafficmonitor.errors import ApiError, ErrorCode, TrafficMonitorError, build_error_message
from trafficmonitor.models.user import GraphApiUserListResponse, VstsUser
from trafficmonitor.net.client import VstsHttpClient
from trafficmonitor.services.base import VstsApiService
from trafficmonitor.vsts_helpers import build_graph_api_users_url

logger = logging.getLogger(__name__)

CONTINUATION_TOKEN_HEADER = "x-ms-continuationtoken"

_ALL_USERS_ERROR = "Encountered an error while retrieving VSTS users. Error details: "
_AAD_USERS_ERROR = "Encountered an error while retrieving VSTS users from AAD. Error details: "


class GraphApiUserService(VstsApiService):
    """Provides user related functions on top of the Graph API."""

    async def get_all_users(self, vsts_account_name: str, access_token: str) -> List[VstsUser]:
        """Retrieve every user of the account, following continuation tokens."""
        try:
            url = build_graph_api_users_url(vsts_account_name)
            users: List[VstsUser] = []
            async with self.open_client(access_token) as client:
                continuation_token: Optional[str] = None
                while True:
                    page = await self._get_user_page(client, url, continuation_token)
                    users.extend(page.users)
                    if not page.more_users_exist:
                        break
                    continuation_token = page.continuation_token
        except (TrafficMonitorError, ValidationError) as exc:
            raise ApiError(
                build_error_message(_ALL_USERS_ERROR, exc),
                code=ErrorCode.USER_RETRIEVAL_FAILED,
                status_code=getattr(exc, "status_code", None),
            ) from exc

        logger.debug("[GraphApiUserService] Retrieved %d user(s) from %s", len(users), vsts_account_name)
        return users

    async def get_aad_users(self, vsts_account_name: str, access_token: str) -> List[VstsUser]:
        """Retrieve the users sourced from an Azure Active Directory tenant."""
        try:
            all_users = await self.get_all_users(vsts_account_name, access_token)
        except ApiError as exc:
            raise ApiError(
                build_error_message(_AAD_USERS_ERROR, exc),
                code=ErrorCode.USER_RETRIEVAL_FAILED,
                status_code=exc.status_code,
            ) from exc
        return [user for user in all_users if user.is_aad]

    async def _get_user_page(
        self,
        client: VstsHttpClient,
        url: str,
        continuation_token: Optional[str],
    ) -> GraphApiUserListResponse:
        params = {"api-version": self.api_config.graph_api_version}
        if continuation_token:
            params["continuationToken"] = continuation_token

        payload, headers = await client.get_json(url, params=params)
        values = payload.get("value")
        if not isinstance(values, list):
            raise ApiError("Graph API response did not contain a list of users.", code=ErrorCode.API_RESPONSE_INVALID)

        next_token = headers.get(CONTINUATION_TOKEN_HEADER)
        return GraphApiUserListResponse(
            users=[VstsUser.model_validate(value) for value in values],
            more_users_exist=bool(next_token),
            continuation_token=next_token,
        )
