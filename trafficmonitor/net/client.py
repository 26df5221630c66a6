"""
trafficmonitor/net/client.py
HTTP adapter for the VSTS REST APIs.

All outbound calls of the user and usage services go through this class.
It adds the Basic authorization header built from the personal access token
and turns transport failures, non-2xx responses and invalid JSON into ApiError.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Tuple

import httpx

from trafficmonitor.errors import ApiError, ErrorCode
from trafficmonitor.vsts_helpers import convert_pat_to_api_header

logger = logging.getLogger(__name__)


class VstsHttpClient:
    """
    Thin wrapper around httpx.AsyncClient.

    The underlying client is closed on exit only when this class created it.
    """

    def __init__(
        self,
        access_token: str,
        timeout: float = 30.0,
        underlying_client: Optional[httpx.AsyncClient] = None,
    ):
        self._auth_header = "Basic " + convert_pat_to_api_header(access_token)
        self._owns_client = underlying_client is None
        self.client = underlying_client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def __aenter__(self) -> "VstsHttpClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def get_json(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Tuple[Dict[str, Any], httpx.Headers]:
        """
        GET url and return (decoded JSON body, response headers).

        Raises ApiError on transport errors, non-2xx status or a body that is
        not a JSON object.
        """
        request_headers = {"Authorization": self._auth_header, "Accept": "application/json"}
        if headers:
            request_headers.update(headers)

        try:
            response = await self.client.get(url, params=params, headers=request_headers)
        except httpx.HTTPError as exc:
            logger.warning("[VstsHttpClient] GET %s failed: %s", url, exc)
            raise ApiError(f"Request to {url} failed: {exc}", details={"url": url}) from exc

        if not response.is_success:
            logger.warning("[VstsHttpClient] GET %s returned HTTP %s", url, response.status_code)
            raise ApiError(
                f"Request to {url} failed with HTTP status {response.status_code}.",
                details={"url": url},
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ApiError(
                "Invalid or unexpected JSON encountered.",
                code=ErrorCode.API_RESPONSE_INVALID,
                details={"url": url},
                status_code=response.status_code,
            ) from exc

        if not isinstance(payload, dict):
            raise ApiError(
                "Invalid or unexpected JSON encountered.",
                code=ErrorCode.API_RESPONSE_INVALID,
                details={"url": url},
                status_code=response.status_code,
            )

        return payload, response.headers
