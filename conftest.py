"""
Repository-level pytest configuration.

Loads the UI framework plugin and the step definitions so that every test
module, Gherkin scenario and unit test sees the same fixtures and hooks.
"""

from __future__ import annotations

from pathlib import Path

import pytest


pytest_plugins = [
    "testsuites.ui_testing.framework.hooks",
    "testsuites.ui_testing.steps.home_page_steps",
    "testsuites.ui_testing.steps.dynamic_id_steps",
    "pytester",
]


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent
