"""
================================================================================
Assertion Utilities
================================================================================

Assertions that record their outcome before deciding the test.

Every assertion produces exactly one log record and one report entry:
    - pass: INFO log + pass entry on the worker's scenario node
    - fail: ERROR log + fail entry, then AssertionError is raised

String operands are normalized first (runs of whitespace collapse to a single
space, ends trimmed) so rendered text compares equal to its source text.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, NoReturn, Optional

from loguru import logger

from ..constants import ValidationMessages
from .report_manager import ReportManager
from .worker_context import WorkerContext


def normalize_text(value: Any) -> Any:
    """Collapse whitespace runs and trim; None and non-strings pass through."""
    if not isinstance(value, str):
        return value
    return " ".join(value.split())


class AssertionUtils:
    """
    Usage:
        assertions = AssertionUtils(worker, report)
        assertions.assert_title(home_page.get_page_title_text(), HOME_PAGE_TITLE)
        assertions.assert_count(home_page.get_test_link_count(), 23, "test links")
    """

    def __init__(self, worker: WorkerContext, report: ReportManager):
        self.worker = worker
        self.report = report

    def _passed(self, message: str) -> None:
        logger.info(message)
        self.report.log_pass(self.worker, message)

    def _failed(self, message: str) -> NoReturn:
        logger.error(message)
        self.report.log_fail(self.worker, message)
        raise AssertionError(message)

    # =========================================================================
    # Assertions
    # =========================================================================

    def assert_title(self, actual: Optional[str], expected: str, message: Optional[str] = None) -> None:
        actual, expected = normalize_text(actual), normalize_text(expected)
        if actual == expected:
            self._passed(f"Title verified - Expected: '{expected}', Actual: '{actual}'")
            return
        self._failed(message or ValidationMessages.TITLE_VERIFICATION_FAILED % (expected, actual))

    def assert_equals(self, actual: Any, expected: Any, message: Optional[str] = None) -> None:
        actual, expected = normalize_text(actual), normalize_text(expected)
        if actual == expected:
            self._passed(f"Values are equal: '{actual}'")
            return
        detail = f"Expected '{expected}' but got '{actual}'"
        self._failed(f"{message}. {detail}" if message else detail)

    def assert_not_null_or_empty(self, actual: Optional[str], field_name: str) -> None:
        if actual is None:
            self._failed(ValidationMessages.FIELD_NOT_NULL % field_name)
        if not normalize_text(actual):
            self._failed(ValidationMessages.FIELD_NOT_EMPTY % field_name)
        self._passed(f"Validated {field_name} is not null or empty")

    def assert_contains(self, actual: Optional[str], expected: str, message: Optional[str] = None) -> None:
        actual, expected = normalize_text(actual), normalize_text(expected)
        if actual is not None and expected in actual:
            self._passed(f"'{actual}' contains '{expected}'")
            return
        detail = f"Expected '{actual}' to contain '{expected}'"
        self._failed(f"{message}. {detail}" if message else detail)

    def assert_true(self, condition: bool, message: str) -> None:
        if condition:
            self._passed(message)
            return
        self._failed(message)

    def assert_count(self, actual: int, expected: int, item_name: str = "items") -> None:
        if actual == expected:
            self._passed(f"Found {actual} {item_name} as expected")
            return
        self._failed(ValidationMessages.COUNT_MISMATCH % (expected, item_name, actual))


__all__ = [
    "AssertionUtils",
    "normalize_text",
]
