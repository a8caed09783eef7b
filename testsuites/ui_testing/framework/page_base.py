"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Element binding from a declarative ELEMENTS table
    - Named element logging through the element name cache
    - Explicit waits (visible / clickable) before every interaction
    - Highlighting and JavaScript helpers

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import allure
from loguru import logger
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator

from .config_manager import ConfigManager
from .driver_manager import DriverManager
from .element_names import ElementNameCache, ElementSpec
from .worker_context import WorkerContext


HIGHLIGHT_SCRIPT = "el => { el.style.border = '2px solid red'; }"


class BasePage:
    """
    Base class for all page objects.

    Construction binds the page object to the worker's browser session and
    the configured explicit wait. Every interaction waits for its element
    first; a wait that runs out raises Playwright's TimeoutError.

    Usage:
        class DynamicIdPage(BasePage):
            ELEMENTS = {
                "dynamic_id_button": element(
                    "xpath=//button[text()='Button with Dynamic ID']",
                    "Dynamic ID Button",
                ),
            }

            def click_dynamic_id_button(self):
                self.click(self.dynamic_id_button)
                return self
    """

    # Override in subclasses
    ELEMENTS: Dict[str, ElementSpec] = {}
    URL_PATH: str = ""

    def __init__(
        self,
        worker: WorkerContext,
        driver_manager: DriverManager,
        config: ConfigManager,
    ):
        """
        Initialize page object.

        Args:
            worker: Context of the worker driving this page
            driver_manager: Hands out the worker's browser session
            config: Framework configuration (base URL, explicit wait)
        """
        self.worker = worker
        self.config = config
        self.session = driver_manager.get(worker)
        self.page = self.session.page
        self.wait_timeout = config.explicit_wait * 1000
        self._element_names = ElementNameCache()
        self._bind_elements()
        logger.debug(f"Initialized page: {type(self).__name__}")

    def _bind_elements(self) -> None:
        for attribute, spec in self.ELEMENTS.items():
            locator = self.page.locator(spec.selector)
            setattr(self, attribute, locator)
            self._element_names.register(locator, spec.label_for(attribute))

    def get_element_name(self, target: Locator) -> str:
        """Cached label of an element, or the unknown-element label."""
        return self._element_names.name_of(target)

    def _label(self, target: Locator, name: Optional[str]) -> str:
        return name or self.get_element_name(target)

    # =========================================================================
    # Navigation
    # =========================================================================

    @property
    def url(self) -> str:
        """Full URL of this page."""
        return f"{self.config.base_url.rstrip('/')}{self.URL_PATH}"

    def navigate_to(self, url: str) -> None:
        """Navigate to a URL."""
        with allure.step(f"Navigate to {url}"):
            self.page.goto(url)
            logger.info(f"Navigated to URL: {url}")

    @property
    def title(self) -> str:
        """Document title of the current page."""
        return self.page.title()

    # =========================================================================
    # Waits
    # =========================================================================

    def wait_for_element_visible(self, target: Locator) -> None:
        """Wait up to the explicit wait for the element to be visible."""
        target.wait_for(state="visible", timeout=self.wait_timeout)

    def wait_for_element_clickable(self, target: Locator) -> None:
        """
        Wait up to the explicit wait for the element to accept a click.

        A trial click runs Playwright's actionability checks (visible,
        enabled, stable, receives events) without clicking.
        """
        target.click(trial=True, timeout=self.wait_timeout)

    # =========================================================================
    # Element Interactions
    # =========================================================================

    def click(self, target: Locator, name: Optional[str] = None) -> None:
        """
        Click an element once it is clickable.

        Args:
            target: Element locator
            name: Label overriding the cached element name
        """
        element_name = self._label(target, name)
        with allure.step(f"Click: {element_name}"):
            try:
                self.wait_for_element_clickable(target)
                self.highlight_element(target)
                target.click(timeout=self.wait_timeout)
                logger.info(f"Clicked on element: {element_name}")
            except Exception as e:
                logger.error(f"Failed to click on element: {element_name}: {e}")
                raise

    def send_text(self, target: Locator, text: str, name: Optional[str] = None) -> None:
        """Replace the content of an input once it is visible."""
        element_name = self._label(target, name)
        with allure.step(f"Enter text in {element_name}"):
            try:
                self.wait_for_element_visible(target)
                self.highlight_element(target)
                target.fill(text, timeout=self.wait_timeout)
                logger.info(f"Entered text in {element_name}: {text}")
            except Exception as e:
                logger.error(f"Failed to enter text in element: {element_name}: {e}")
                raise

    def get_text(self, target: Locator, name: Optional[str] = None) -> str:
        """Rendered text of an element once it is visible."""
        element_name = self._label(target, name)
        try:
            self.wait_for_element_visible(target)
            self.highlight_element(target)
            text = target.inner_text(timeout=self.wait_timeout)
            logger.info(f"Got text from {element_name}: {text}")
            return text
        except Exception as e:
            logger.error(f"Failed to get text from element: {element_name}: {e}")
            raise

    def is_element_displayed(self, target: Locator, name: Optional[str] = None) -> bool:
        """
        Check if an element is displayed right now.

        Missing, detached or ambiguous elements count as not displayed.
        """
        element_name = self._label(target, name)
        try:
            displayed = target.is_visible()
        except PlaywrightError:
            logger.info(f"{element_name} is not displayed")
            return False
        logger.info(f"{element_name} is displayed: {displayed}")
        return displayed

    # =========================================================================
    # Script Utilities
    # =========================================================================

    def highlight_element(self, target: Locator) -> None:
        """Draw a red border around the element when highlighting is enabled."""
        if not self.config.highlight_elements:
            return
        target.evaluate(HIGHLIGHT_SCRIPT)

    def execute_javascript(self, script: str, arg: Any = None) -> Any:
        """Evaluate a JavaScript expression or function in the page."""
        return self.page.evaluate(script, arg)


__all__ = [
    "BasePage",
]
