"""
================================================================================
Playground Tools
================================================================================

Shared utilities for the UI Playground automation framework.

Modules:
    - common: Logging setup and filesystem helpers
    - report_tools: Allure attachment helpers and report generation

Example:
    from playground_tools.common import init_logger
    from playground_tools.report_tools import generate_allure_report

    init_logger(level="DEBUG")
    generate_allure_report("reports/allure-results")

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
