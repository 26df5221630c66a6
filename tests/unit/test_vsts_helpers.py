"""Unit tests for account name validation, PAT encoding and URL builders."""
import base64

import pytest

from trafficmonitor.errors import InvalidArgumentError
from trafficmonitor.vsts_helpers import (
    build_graph_api_users_url,
    build_utilization_usage_summary_api_url,
    convert_pat_to_api_header,
    validate_account_name,
)


@pytest.mark.parametrize("name", ["contoso", "contoso-dev", "a1", "Fabrikam2018"])
def test_valid_account_names(name):
    validate_account_name(name)


@pytest.mark.parametrize("name", ["", None, "a", "-contoso", "contoso-", "con toso", "contoso.com"])
def test_invalid_account_names(name):
    with pytest.raises(InvalidArgumentError):
        validate_account_name(name)


def test_pat_header():
    encoded = convert_pat_to_api_header("secret")
    assert base64.b64decode(encoded).decode("utf-8") == ":secret"


@pytest.mark.parametrize("token", ["", None])
def test_pat_header_requires_token(token):
    with pytest.raises(InvalidArgumentError):
        convert_pat_to_api_header(token)


def test_urls():
    assert build_graph_api_users_url("contoso") == "https://contoso.vssps.visualstudio.com/_apis/graph/users"
    assert (
        build_utilization_usage_summary_api_url("contoso")
        == "https://contoso.visualstudio.com/_apis/utilization/usagesummary"
    )


def test_url_rejects_bad_account():
    with pytest.raises(InvalidArgumentError):
        build_graph_api_users_url("bad account")
