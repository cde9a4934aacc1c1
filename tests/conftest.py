"""Pytest configuration and fixtures for unified_search.

Gateways are replaced by ControlledGateway (tests/helpers.py), whose
responses are resolved explicitly by the test so out-of-order arrival can
be reproduced.
"""

from unittest.mock import MagicMock

import pytest

from tests.helpers import ControlledGateway, FakeAuth
from unified_search.core.config import Settings, get_settings
from unified_search.infrastructure.browser.address_bar import UrlAddressBar
from unified_search.infrastructure.persistence.saved_search_memory import InMemorySavedSearchStore


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Settings are cached per process; tests that set env vars need a fresh read."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Fast settings for coordinator tests (10 ms debounce)."""
    return Settings(
        debounce_ms=10,
        page_size=20,
        suggestion_min_length=2,
        suggestion_limit=10,
        telemetry_enabled=False,
    )


@pytest.fixture
def gateway() -> ControlledGateway:
    return ControlledGateway()


@pytest.fixture
def auth() -> FakeAuth:
    return FakeAuth(signed_in=True)


@pytest.fixture
def store() -> InMemorySavedSearchStore:
    return InMemorySavedSearchStore()


@pytest.fixture
def navigator() -> MagicMock:
    return MagicMock()


@pytest.fixture
def address_bar() -> UrlAddressBar:
    return UrlAddressBar("/search")
