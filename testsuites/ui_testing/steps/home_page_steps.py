"""
================================================================================
Home Page Steps
================================================================================

Step definitions for home_page.feature.

State flows between steps through pytest-bdd target fixtures:
    home_page    - the opened HomePage
    actual_title - title text read from the page
    link_count   - number of test scenario links

================================================================================
"""

from __future__ import annotations

from loguru import logger
from pytest_bdd import given, parsers, then, when

from testsuites.ui_testing.constants import HomePageConstants, ValidationMessages
from testsuites.ui_testing.pages.home_page import HomePage


@given("I navigate to the homepage", target_fixture="home_page")
def navigate_to_homepage(worker_context, driver_manager, framework_config) -> HomePage:
    logger.info("Navigating to homepage")
    return HomePage(worker_context, driver_manager, framework_config).open()


@when("I view the page title", target_fixture="actual_title")
def view_page_title(home_page: HomePage) -> str:
    logger.info("Retrieving page title")
    actual_title = home_page.get_page_title_text()
    logger.debug(f"Actual title: {actual_title}")
    return actual_title


@then("the page title should be displayed correctly")
def page_title_displayed_correctly(actual_title: str, assertions) -> None:
    logger.info("Validating the page title content")
    assertions.assert_title(
        actual_title,
        HomePageConstants.HOME_PAGE_TITLE,
        ValidationMessages.TITLE_VERIFICATION_FAILED % (HomePageConstants.HOME_PAGE_TITLE, actual_title),
    )


@then("the page title should not be empty")
def page_title_not_empty(actual_title: str, assertions) -> None:
    logger.info("Validating that the page title is not empty")
    assertions.assert_not_null_or_empty(actual_title, "Page Title")


@when("I check the available test links", target_fixture="link_count")
def check_available_test_links(home_page: HomePage) -> int:
    return home_page.get_test_link_count()


@then(parsers.parse("I should see {count:d} test scenario links"))
def see_test_scenario_links(link_count: int, count: int, assertions) -> None:
    assertions.assert_count(link_count, count, "test links")


@when(parsers.parse('I click the "{link_text}" test link'))
def click_test_link(home_page: HomePage, link_text: str) -> None:
    home_page.click_test_link(link_text)
