"""
================================================================================
Screenshot Manager
================================================================================

Captures the worker's current page as a PNG file.

Layout:
    <screenshotsPath>/[<feature>/]<scenario>_<yyyyMMdd_HHmmss>.png

Capture is best-effort: a missing session, a page without screenshot support
or a write failure is logged and reported as None, never raised.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

from loguru import logger
from playwright.sync_api import Error as PlaywrightError

from playground_tools.common import ensure_directory, sanitize_name

from .config_manager import ConfigManager
from .worker_context import WorkerContext


TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


class ScreenshotManager:
    """
    Usage:
        screenshots = ScreenshotManager(config)
        path = screenshots.take_screenshot(worker, "Verify page title", "home_page")
    """

    def __init__(self, config: ConfigManager):
        self.config = config

    def build_path(
        self,
        scenario_name: str,
        feature_name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Path:
        """
        Target file for a screenshot.

        A numeric suffix is added when a file with the same name already
        exists, so two captures within one second do not overwrite each other.
        """
        directory = Path(self.config.screenshots_path)
        if feature_name:
            directory = directory / sanitize_name(feature_name)

        timestamp = (now or datetime.now()).strftime(TIMESTAMP_FORMAT)
        stem = f"{sanitize_name(scenario_name)}_{timestamp}"
        candidate = directory / f"{stem}.png"

        counter = 1
        while candidate.exists():
            candidate = directory / f"{stem}_{counter}.png"
            counter += 1
        return candidate

    def take_screenshot(
        self,
        worker: WorkerContext,
        scenario_name: str,
        feature_name: Optional[str] = None,
    ) -> Optional[Path]:
        """
        Capture the visible viewport of the worker's page.

        Returns:
            Path of the saved file, or None when nothing was captured
        """
        session = worker.session
        if session is None:
            logger.error(f"No browser session for {worker.worker_id}, cannot take screenshot")
            return None

        page = session.page
        if not callable(getattr(page, "screenshot", None)):
            logger.warning("Current page doesn't support screenshots")
            return None

        try:
            target = self.build_path(scenario_name, feature_name)
            ensure_directory(target.parent)
            page.screenshot(path=str(target))
        except (OSError, PlaywrightError) as e:
            logger.error(f"Failed to take screenshot: {e}")
            return None

        logger.info(f"Screenshot saved to: {target}")
        return target


__all__ = [
    "ScreenshotManager",
]
