# trafficmonitor/vsts_helpers.py
# Account name validation, PAT encoding and REST API URL builders.

from __future__ import annotations

import base64
import re
from typing import Optional

from trafficmonitor.errors import InvalidArgumentError

# Must start with a letter or number, can be followed by letters, numbers or
# hyphens, and must end with a letter or number.
_ACCOUNT_NAME_RE = re.compile(r"^[a-zA-Z0-9][a-zA-Z0-9\-]*[a-zA-Z0-9]$")

GRAPH_API_URL_SEGMENT = ".vssps.visualstudio.com/_apis/graph/"
UTILIZATION_API_URL_SEGMENT = ".visualstudio.com/_apis/utilization/"


def validate_account_name(account_name: Optional[str]) -> None:
    """Raise InvalidArgumentError unless account_name follows the VSTS naming rules."""
    if not account_name or not _ACCOUNT_NAME_RE.match(account_name):
        raise InvalidArgumentError("Invalid account name.")


def convert_pat_to_api_header(access_token: Optional[str]) -> str:
    """Encode a personal access token for a Basic Authorization header."""
    if not access_token:
        raise InvalidArgumentError("Invalid access token.")
    return base64.b64encode((":" + access_token).encode("utf-8")).decode("ascii")


def build_graph_api_url(account_name: str) -> str:
    validate_account_name(account_name)
    return "https://" + account_name + GRAPH_API_URL_SEGMENT


def build_graph_api_users_url(account_name: str) -> str:
    return build_graph_api_url(account_name) + "users"


def build_utilization_api_url(account_name: str) -> str:
    validate_account_name(account_name)
    return "https://" + account_name + UTILIZATION_API_URL_SEGMENT


def build_utilization_usage_summary_api_url(account_name: str) -> str:
    return build_utilization_api_url(account_name) + "usagesummary"
