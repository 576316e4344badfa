"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from halforms.client.hal_client import HalClient
from halforms.config.constants import ENV_SERVICE_PROFILE, ENV_SERVICE_URL, ENV_TIMEOUT
from halforms.config.manager import ConfigManager
from halforms.config.models import ServiceProfile


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's environment out of profile resolution."""
    for name in (ENV_SERVICE_URL, ENV_SERVICE_PROFILE, ENV_TIMEOUT):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Return a temporary config file path."""
    return tmp_path / "config.toml"


@pytest.fixture
def config_manager(tmp_config: Path) -> ConfigManager:
    """Return a ConfigManager pointed at a temp config file."""
    return ConfigManager(config_path=tmp_config)


@pytest.fixture
def sample_profile() -> ServiceProfile:
    """Return a sample service profile for testing."""
    return ServiceProfile(
        name="test-api",
        url="https://api.test/v1/",
        headers={"X-Tenant": "acme"},
    )


@pytest.fixture
def client():
    """A HalClient on https://hal.test/; pair it with respx to answer requests."""
    with HalClient("https://hal.test/") as hal_client:
        yield hal_client


@pytest.fixture
def orders_document() -> dict[str, Any]:
    """The example document of the HAL specification."""
    return {
        "_links": {
            "self": {"href": "/orders"},
            "curies": [
                {
                    "name": "ea",
                    "href": "http://example.com/docs/rels/{rel}",
                    "templated": True,
                },
            ],
            "next": {"href": "/orders?page=2"},
            "ea:find": {"href": "/orders{?id}", "templated": "true"},
            "ea:admin": [
                {"href": "/admins/2", "title": "Fred"},
                {"href": "/admins/5", "title": "Kate"},
            ],
        },
        "currentlyProcessing": 14,
        "shippedToday": 20,
        "_embedded": {
            "ea:order": [
                {
                    "_links": {
                        "self": {"href": "/orders/123"},
                        "ea:basket": {"href": "/baskets/98712"},
                        "ea:customer": {"href": "/customers/7809"},
                    },
                    "total": 30.0,
                    "currency": "USD",
                    "status": "shipped",
                },
                {
                    "_links": {
                        "self": {"href": "/orders/124"},
                        "ea:basket": {"href": "/baskets/97213"},
                        "ea:customer": {"href": "/customers/12369"},
                    },
                    "total": 20.0,
                    "currency": "USD",
                    "status": "processing",
                },
            ],
        },
    }
