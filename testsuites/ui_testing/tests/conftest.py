"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Page object fixtures for plain pytest UI tests. Browser lifecycle, reporting
and failure screenshots come from the framework plugin via ``ui_worker``.

================================================================================
"""

import pytest

from testsuites.ui_testing.pages.dynamic_id_page import DynamicIdPage
from testsuites.ui_testing.pages.home_page import HomePage


@pytest.fixture
def opened_home_page(ui_worker, driver_manager, framework_config) -> HomePage:
    """HomePage already navigated to the configured base URL."""
    return HomePage(ui_worker, driver_manager, framework_config).open()


@pytest.fixture
def dynamic_id_page_object(ui_worker, driver_manager, framework_config) -> DynamicIdPage:
    """DynamicIdPage bound to the worker's browser, not yet navigated."""
    return DynamicIdPage(ui_worker, driver_manager, framework_config)
