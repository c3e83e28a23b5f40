"""pytest plugin: browser and request fixtures driven by the harness config.

Load it from a conftest with::

    pytest_plugins = ["e2eharness.plugin", "e2eharness.steps.ui_steps", ...]

Scenarios tagged ``@live`` need a browser or the network. They are deselected
unless ``E2E_LIVE=1``.
"""

from __future__ import annotations

import os
from typing import Any, Iterable

import pytest

from e2eharness.core import config as config_core
from e2eharness.core.actions import PlaywrightActions
from e2eharness.core.api import ApiHelper
from e2eharness.core.graphql import GraphqlHelper
from e2eharness.core.storage import BrowserStorage
from e2eharness.core.logs import configure_logging, get_logger
from e2eharness.data import default_test_data

logger = get_logger(__name__)

LIVE_MARKER = "live"
LIVE_ENV = "E2E_LIVE"


def live_enabled() -> bool:
    return os.environ.get(LIVE_ENV, "").strip().lower() in {"1", "true", "yes", "on"}


def partition_live(items: Iterable[Any], enabled: bool) -> tuple[list[Any], list[Any]]:
    """Split collected items into (kept, deselected)."""
    kept: list[Any] = []
    deselected: list[Any] = []
    for item in items:
        if not enabled and item.get_closest_marker(LIVE_MARKER) is not None:
            deselected.append(item)
        else:
            kept.append(item)
    return kept, deselected


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", f"{LIVE_MARKER}: needs a browser or network access (run with {LIVE_ENV}=1)")
    configure_logging()


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    kept, deselected = partition_live(items, live_enabled())
    if deselected:
        logger.info("live.deselected", count=len(deselected), hint=f"set {LIVE_ENV}=1 to run them")
        config.hook.pytest_deselected(items=deselected)
        items[:] = kept


@pytest.fixture(scope="session")
def environment() -> config_core.Environment:
    return config_core.load_environment()


@pytest.fixture(scope="session")
def harness_settings() -> config_core.BrowserSettings:
    return config_core.load_browser_settings()


@pytest.fixture(scope="session")
def browser_type_launch_args(
    browser_type_launch_args: dict,
    harness_settings: config_core.BrowserSettings,
    pytestconfig: pytest.Config,
) -> dict:
    headed = bool(pytestconfig.getoption("headed", default=False))
    return {
        **browser_type_launch_args,
        "headless": harness_settings.headless and not headed,
        "slow_mo": harness_settings.slow_mo,
        "args": list(harness_settings.args),
        "timeout": harness_settings.launch_timeout_ms,
    }


@pytest.fixture(scope="session")
def browser_context_args(
    browser_context_args: dict,
    environment: config_core.Environment,
    harness_settings: config_core.BrowserSettings,
) -> dict:
    args = {
        **browser_context_args,
        "base_url": environment.frontend_url,
        "ignore_https_errors": harness_settings.ignore_https_errors,
        "accept_downloads": True,
    }
    if harness_settings.viewport:
        args["viewport"] = harness_settings.viewport
    return args


@pytest.fixture()
def actions(harness_settings: config_core.BrowserSettings) -> PlaywrightActions:
    return PlaywrightActions(harness_settings)


@pytest.fixture()
def storage(actions: PlaywrightActions) -> BrowserStorage:
    # Same actions object: storage reads honour `switch_to`.
    return BrowserStorage(actions)


@pytest.fixture()
def api_helper(playwright: Any, environment: config_core.Environment) -> ApiHelper:
    return ApiHelper(playwright.request, environment)


@pytest.fixture()
def graphql_helper(playwright: Any, environment: config_core.Environment) -> GraphqlHelper:
    return GraphqlHelper(playwright.request, environment)


@pytest.fixture()
def test_data() -> dict[str, Any]:
    return default_test_data()
