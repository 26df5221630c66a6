# trafficmonitor/services/base.py
# Shared plumbing for the VSTS API services.

from __future__ import annotations

from typing import Callable, Optional

from trafficmonitor.config import ApiConfig
from trafficmonitor.net.client import VstsHttpClient

ClientFactory = Callable[[str], VstsHttpClient]


class VstsApiService:
    """Base class holding the API settings and how HTTP clients are created."""

    def __init__(self, api_config: Optional[ApiConfig] = None, client_factory: Optional[ClientFactory] = None):
        self.api_config = api_config or ApiConfig()
        self._client_factory = client_factory or self._default_client

    def _default_client(self, access_token: str) -> VstsHttpClient:
        return VstsHttpClient(access_token, timeout=self.api_config.request_timeout)

    def open_client(self, access_token: str) -> VstsHttpClient:
        return self._client_factory(access_token)
