"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based Page Object framework for the UI Testing Playground.

Components:
    - config_manager: YAML configuration with environment overrides
    - driver_manager: Per-worker browser lifecycle
    - page_base: Base page object with waits and named-element logging
    - report_manager: Process-wide report sink (JSON + Allure)
    - screenshot_manager: Failure screenshots
    - assertions: Assertions that log and report their outcome
    - hooks: pytest / pytest-bdd plugin wiring it all together

Author: Automation Team
License: MIT
================================================================================
"""

from .assertions import AssertionUtils, normalize_text
from .config_manager import ConfigManager
from .driver_manager import BrowserSession, DriverManager
from .element_names import ElementNameCache, ElementSpec, element
from .exceptions import ConfigurationError, DriverError, ElementNotFoundError, FrameworkError
from .page_base import BasePage
from .report_manager import ReportManager, ReportNode, Status
from .screenshot_manager import ScreenshotManager
from .worker_context import WorkerContext

__all__ = [
    "AssertionUtils",
    "BasePage",
    "BrowserSession",
    "ConfigManager",
    "ConfigurationError",
    "DriverError",
    "DriverManager",
    "ElementNameCache",
    "ElementNotFoundError",
    "ElementSpec",
    "FrameworkError",
    "ReportManager",
    "ReportNode",
    "ScreenshotManager",
    "Status",
    "WorkerContext",
    "element",
    "normalize_text",
]
