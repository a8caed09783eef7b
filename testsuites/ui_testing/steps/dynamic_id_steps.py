"""
Step definitions for dynamic_id.feature.

The page steps also serve home_page.feature, which reaches the Dynamic ID
page by clicking its link.
"""

from __future__ import annotations

import pytest
from pytest_bdd import given, parsers, then, when

from testsuites.ui_testing.pages.dynamic_id_page import DynamicIdPage


@pytest.fixture
def dynamic_id_page(worker_context, driver_manager, framework_config) -> DynamicIdPage:
    """Dynamic ID page bound to whatever the worker's browser shows."""
    return DynamicIdPage(worker_context, driver_manager, framework_config)


@given("I am on the Dynamic ID page", target_fixture="dynamic_id_page")
def open_dynamic_id_page(worker_context, driver_manager, framework_config) -> DynamicIdPage:
    page = DynamicIdPage(worker_context, driver_manager, framework_config)
    page.navigate_to(page.url)
    return page


@then("I should be on the Dynamic ID page")
def on_dynamic_id_page(dynamic_id_page: DynamicIdPage, assertions) -> None:
    assertions.assert_true(dynamic_id_page.is_on_page(), "Dynamic ID page header is displayed")


@when("I click the button with the dynamic id")
def click_dynamic_id_button(dynamic_id_page: DynamicIdPage) -> None:
    dynamic_id_page.click_dynamic_id_button()


@then(parsers.parse('the button text should be "{text}"'))
def button_text_should_be(dynamic_id_page: DynamicIdPage, text: str, assertions) -> None:
    assertions.assert_equals(dynamic_id_page.get_button_text(), text, "Dynamic ID button text")
