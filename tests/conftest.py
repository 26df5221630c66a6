"""Pytest configuration for the traffic monitor."""
import os

import pytest

from trafficmonitor.config import set_config


def pytest_configure():
    # Keep the developer's own task inputs out of the test run.
    for name in list(os.environ):
        if name.startswith("INPUT_") or name.startswith("TRAFFICMONITOR_"):
            del os.environ[name]


@pytest.fixture(autouse=True)
def reset_config():
    set_config(None)
    yield
    set_config(None)
