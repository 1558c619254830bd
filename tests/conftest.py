"""
Shared fixtures.

The live relay test is configured on the command line, never from the
environment:

    pytest --postal-addr https://postal.example.com --postal-token KEY --postal-from me@example.com --postal-to you@example.com
"""

from dataclasses import dataclass

import pytest

from ezpostal.config import PostalConfig


LIVE_OPTIONS = ("postal_addr", "postal_token", "postal_from", "postal_to")


def pytest_addoption(parser):
    group = parser.getgroup("postal", "live Postal relay")
    group.addoption("--postal-addr", default=None, help="Base URI of the Postal server")
    group.addoption("--postal-token", default=None, help="Postal server API key")
    group.addoption("--postal-from", default=None, help="Sender address for the live test")
    group.addoption("--postal-to", default=None, help="Recipient address for the live test")
    group.addoption("--postal-timeout", default=10.0, type=float, help="Request timeout in seconds")


@dataclass(frozen=True)
class LiveSettings:
    config: PostalConfig
    from_addr: str
    to_addr: str


@pytest.fixture
def live_settings(request) -> LiveSettings:
    values = {name: request.config.getoption(name) for name in LIVE_OPTIONS}
    missing = [f"--{name.replace('_', '-')}" for name, value in values.items() if not value]
    if missing:
        pytest.skip(f"Postal relay not configured, missing {', '.join(missing)}")

    config = PostalConfig(
        base_uri=values["postal_addr"],
        token=values["postal_token"],
        timeout=request.config.getoption("postal_timeout"),
    )
    return LiveSettings(config=config, from_addr=values["postal_from"], to_addr=values["postal_to"])
