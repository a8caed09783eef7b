from .allure_utils import (
    AllureReportProcessor,
    TestResultSummary,
    attach_screenshot,
    attach_text,
    generate_allure_report,
)

__all__ = [
    "AllureReportProcessor",
    "TestResultSummary",
    "attach_screenshot",
    "attach_text",
    "generate_allure_report",
]
