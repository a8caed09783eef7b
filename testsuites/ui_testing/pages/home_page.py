"""
================================================================================
Home Page Object
================================================================================

UI Testing Playground landing page: the page title and the grid of links to
the individual test scenarios.

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from testsuites.ui_testing.constants import ErrorMessages, HomePageSelectors
from testsuites.ui_testing.framework.element_names import element
from testsuites.ui_testing.framework.exceptions import ElementNotFoundError
from testsuites.ui_testing.framework.page_base import BasePage


class HomePage(BasePage):
    """Page object for the UI Testing Playground homepage."""

    ELEMENTS = {
        "page_title": element(HomePageSelectors.PAGE_TITLE, "Page Title"),
        "test_links": element(HomePageSelectors.TEST_LINKS, "Test Links"),
    }

    @allure.step("Open homepage")
    def open(self) -> "HomePage":
        self.navigate_to(self.url)
        return self

    def get_page_title_text(self) -> str:
        return self.get_text(self.page_title)

    def click_test_link(self, link_text: str) -> "HomePage":
        """
        Click the test scenario link whose text matches exactly.

        Raises:
            ElementNotFoundError: No link carries that text
        """
        self.wait_for_element_visible(self.test_links.first)
        for link in self.test_links.all():
            if link.inner_text().strip() == link_text:
                self.click(link, f"Test Link: {link_text}")
                return self

        message = ErrorMessages.TEST_LINK_NOT_FOUND % link_text
        logger.error(message)
        raise ElementNotFoundError(message)

    def get_test_link_count(self) -> int:
        """Number of test scenario links on the homepage; 0 when none are rendered."""
        count = self.test_links.count()
        logger.info(f"Found {count} test links")
        return count


__all__ = [
    "HomePage",
]
