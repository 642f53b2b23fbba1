"""Pytest configuration for all tests."""

import pytest


RELAY_ENV_VARS = (
    "SLACK_URL",
    "RELAY_LOG_PAYLOADS",
    "RELAY_LOG_LEVEL",
    "RELAY_HOST",
    "RELAY_PORT",
)


@pytest.fixture(autouse=True)
def clean_relay_env(monkeypatch):
    """Start every test without relay configuration in the environment."""
    for name in RELAY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
