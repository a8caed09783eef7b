"""
================================================================================
Driver Manager
================================================================================

Browser lifecycle management for UI automation.

Features:
    - One browser session per worker, stored on the worker's context
    - Lazy creation on first access, explicit teardown at scenario end
    - Browser selection from configuration with a safe default
    - Implicit wait applied as the page default timeout

Playwright's sync API is bound to the thread that started it, so every
worker starts its own Playwright instance and no session crosses threads.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Tuple

from loguru import logger
from playwright.sync_api import (
    Browser,
    BrowserContext,
    Page,
    Playwright,
    sync_playwright,
)

from .config_manager import ConfigManager
from .exceptions import DriverError
from .worker_context import WorkerContext


PlaywrightFactory = Callable[[], Playwright]


def start_playwright() -> Playwright:
    """Start a Playwright instance bound to the calling thread."""
    return sync_playwright().start()


@dataclass
class BrowserSession:
    """
    A live browser bound to one worker (the "driver handle").

    Attributes:
        browser_name: Launcher used - 'chromium', 'firefox' or 'webkit'
        channel: Browser channel for branded builds ('chrome', 'msedge')
        page: The page every page object of the worker drives
    """
    browser_name: str
    playwright: Playwright
    browser: Browser
    context: BrowserContext
    page: Page
    channel: Optional[str] = None
    owner_thread: int = field(default_factory=threading.get_ident)

    def close(self) -> None:
        """Close context and browser, then stop Playwright."""
        steps = (
            ("context", self.context.close),
            ("browser", self.browser.close),
            ("playwright", self.playwright.stop),
        )
        for label, close in steps:
            try:
                close()
            except Exception as e:
                logger.warning(f"Failed to close {label}: {e}")


class DriverManager:
    """
    Creates, hands out and destroys browser sessions per worker.

    Usage:
        manager = DriverManager(config)
        worker = WorkerContext()

        session = manager.get(worker)      # launches on first call
        session.page.goto(config.base_url)
        manager.quit(worker)               # next get() launches a new one
    """

    SUPPORTED_BROWSERS: Tuple[str, ...] = ("chromium", "firefox", "webkit")

    # Branded builds driven through the chromium launcher
    BROWSER_ALIASES: Dict[str, Tuple[str, str]] = {
        "chrome": ("chromium", "chrome"),
        "edge": ("chromium", "msedge"),
    }

    DEFAULT_BROWSER = "chromium"

    CHROMIUM_ARGS = [
        "--ignore-certificate-errors",
        "--disable-gpu",
        "--window-size=1920,1080",
    ]

    DEFAULT_CONTEXT_OPTIONS: Dict[str, Any] = {
        "viewport": {"width": 1920, "height": 1080},
        "ignore_https_errors": True,
    }

    def __init__(
        self,
        config: ConfigManager,
        playwright_factory: Optional[PlaywrightFactory] = None,
    ):
        """
        Initialize driver manager.

        Args:
            config: Framework configuration (browser, headless, waits)
            playwright_factory: Starts a Playwright instance; replaceable in tests
        """
        self.config = config
        self._playwright_factory = playwright_factory or start_playwright

    @classmethod
    def resolve_browser(cls, name: Optional[str]) -> Tuple[str, Optional[str]]:
        """
        Map a configured browser identifier to (launcher, channel).

        Absent or unrecognised identifiers resolve to the default browser.
        """
        if not name:
            return cls.DEFAULT_BROWSER, None

        key = name.strip().lower()
        if key in cls.SUPPORTED_BROWSERS:
            return key, None
        if key in cls.BROWSER_ALIASES:
            return cls.BROWSER_ALIASES[key]

        logger.warning(
            f"Unrecognised browser '{name}', falling back to {cls.DEFAULT_BROWSER}"
        )
        return cls.DEFAULT_BROWSER, None

    def _launch_options(self, browser_name: str, channel: Optional[str]) -> Dict[str, Any]:
        options: Dict[str, Any] = {"headless": self.config.headless}
        if browser_name == "chromium":
            options["args"] = list(self.CHROMIUM_ARGS)
        if channel:
            options["channel"] = channel
        return options

    @staticmethod
    def _check_owner(worker: WorkerContext) -> None:
        current = threading.get_ident()
        if worker.thread_id != current:
            raise DriverError(
                f"Worker {worker.worker_id} was created on another thread; "
                f"driver handles are never shared between workers"
            )
        if worker.session is not None and worker.session.owner_thread != current:
            raise DriverError(
                f"Driver handle of {worker.worker_id} belongs to another thread"
            )

    def init(self, worker: WorkerContext) -> BrowserSession:
        """
        Launch a browser for the worker, replacing any session it still holds.

        Launch failures propagate to the caller; nothing is retried.
        """
        self._check_owner(worker)
        if worker.session is not None:
            logger.warning(f"{worker.worker_id} already has a browser, quitting it first")
            self.quit(worker)

        browser_name, channel = self.resolve_browser(self.config.browser)
        logger.info(
            f"Initializing browser for {worker.worker_id}: {browser_name}"
            f"{f' ({channel})' if channel else ''} (headless: {self.config.headless})"
        )

        playwright = self._playwright_factory()
        try:
            launcher = getattr(playwright, browser_name)
            browser = launcher.launch(**self._launch_options(browser_name, channel))
            context = browser.new_context(**self.DEFAULT_CONTEXT_OPTIONS)
            page = context.new_page()
        except Exception:
            playwright.stop()
            raise

        page.set_default_timeout(self.config.implicit_wait * 1000)
        page.set_default_navigation_timeout(self.config.page_load_timeout * 1000)

        worker.session = BrowserSession(
            browser_name=browser_name,
            channel=channel,
            playwright=playwright,
            browser=browser,
            context=context,
            page=page,
        )
        logger.info(f"Browser initialized successfully for {worker.worker_id}")
        return worker.session

    def get(self, worker: WorkerContext) -> BrowserSession:
        """Return the worker's session, launching one if it has none."""
        self._check_owner(worker)
        if worker.session is None:
            return self.init(worker)
        return worker.session

    def quit(self, worker: WorkerContext) -> None:
        """Close the worker's session and forget it. No-op without a session."""
        if worker.session is None:
            return
        self._check_owner(worker)

        logger.info(f"Quitting browser for {worker.worker_id}")
        session, worker.session = worker.session, None
        session.close()
        logger.info(f"Browser quit successfully for {worker.worker_id}")


__all__ = [
    "BrowserSession",
    "DriverManager",
    "start_playwright",
]
