# pytest configuration hooks.
#
# Policy: No skipped tests. Scenarios that need a browser or the network are
# deselected (not skipped) by e2eharness.plugin unless E2E_LIVE=1.

from __future__ import annotations

import os
from pathlib import Path
import pytest

from e2eharness.core import config as config_core, ids

# The harness plugin and every step module, so fixtures and steps are discoverable.
pytest_plugins = [
    "e2eharness.plugin",
    "e2eharness.steps.filter_steps",
    "e2eharness.steps.ui_steps",
    "e2eharness.steps.api_steps",
    "e2eharness.steps.gql_steps",
    "tests.bdd.steps",
]

# Set before the plugin configures logging, which reads (and caches) the config.
os.environ.setdefault("E2E_CONFIG_PATH", str(Path(__file__).resolve().parents[1] / ".e2eharness-test-config.toml"))

_SKIP_COUNT = 0


@pytest.fixture(autouse=True)
def _fresh_caches():
    config_core.reset_config_cache()
    ids.reset_current_run_id()
    yield
    config_core.reset_config_cache()
    ids.reset_current_run_id()


def pytest_runtest_logreport(report: pytest.TestReport) -> None:
    global _SKIP_COUNT
    if report.when == "setup" and report.outcome == "skipped":
        _SKIP_COUNT += 1


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    if _SKIP_COUNT > 0:
        pytest.exit(f"Skipped tests are not allowed (skipped={_SKIP_COUNT}).", returncode=2)
