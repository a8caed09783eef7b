"""
================================================================================
Allure Report Utilities
================================================================================

Helpers that mirror framework report entries into Allure, a shared result
summary model, and generation of the Allure HTML report after a run.

Features:
- Text and screenshot attachments
- Scenario result summary (shared with the framework JSON report)
- Allure HTML report generation through the allure CLI

================================================================================
"""

import subprocess
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_text(text: str, name: str = "Text"):
    """
    Attach text content to the Allure report.

    Args:
        text: Text to attach
        name: Attachment name
    """
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_screenshot(path: Union[str, Path], name: str = "Screenshot") -> bool:
    """
    Attach a PNG screenshot file to the Allure report.

    Returns:
        True if the file existed and was attached
    """
    screenshot = Path(path)
    if not screenshot.is_file():
        logger.warning(f"Screenshot not found, nothing attached: {screenshot}")
        return False

    allure.attach.file(
        str(screenshot),
        name=name,
        attachment_type=allure.attachment_type.PNG
    )
    return True


# ================================================================================
# Result Summary
# ================================================================================

@dataclass
class TestResultSummary:
    """Summary of scenario results."""
    __test__ = False

    total: int = 0
    passed: int = 0
    failed: int = 0
    skipped: int = 0
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @classmethod
    def from_statuses(cls, statuses: Iterable[str]) -> "TestResultSummary":
        """Build a summary from scenario status strings (pass / fail / skip)."""
        summary = cls()
        for status in statuses:
            summary.total += 1
            if status == "pass":
                summary.passed += 1
            elif status == "fail":
                summary.failed += 1
            elif status == "skip":
                summary.skipped += 1
        return summary

    @property
    def pass_rate(self) -> float:
        """Calculate pass rate percentage."""
        if self.total == 0:
            return 0.0
        return (self.passed / self.total) * 100

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "skipped": self.skipped,
            "pass_rate": f"{self.pass_rate:.2f}%",
            "timestamp": self.timestamp,
        }


# ================================================================================
# Report Generation
# ================================================================================

class AllureReportProcessor:
    """
    Generates the Allure HTML report from a results directory.
    """

    def __init__(
        self,
        results_dir: Path,
        report_dir: Optional[Path] = None,
    ):
        """
        Initialize processor.

        Args:
            results_dir: Allure results directory
            report_dir: Output report directory
        """
        self.results_dir = Path(results_dir)
        self.report_dir = Path(report_dir or self.results_dir.parent / "allure-report")

    def build_command(self) -> list:
        """Allure CLI command that renders results_dir into report_dir."""
        return [
            "allure", "generate",
            str(self.results_dir),
            "-o", str(self.report_dir),
            "--clean",
        ]

    def generate_report(self) -> bool:
        """
        Generate Allure HTML report.

        Returns:
            True if successful
        """
        if not self.results_dir.exists():
            logger.warning(f"No Allure results found at {self.results_dir}")
            return False

        try:
            result = subprocess.run(self.build_command(), capture_output=True, text=True)
        except FileNotFoundError:
            logger.warning("Allure CLI not found. Install allure-commandline to render reports.")
            return False

        if result.returncode == 0:
            logger.info(f"Allure report generated at {self.report_dir}")
            return True

        logger.error(f"Allure report generation failed: {result.stderr}")
        return False


def generate_allure_report(
    results_dir: Union[str, Path],
    output_dir: Optional[Union[str, Path]] = None,
) -> bool:
    """
    Generate Allure report from results.

    Args:
        results_dir: Path to allure-results directory
        output_dir: Optional output directory

    Returns:
        True if successful
    """
    processor = AllureReportProcessor(
        Path(results_dir),
        Path(output_dir) if output_dir else None
    )
    return processor.generate_report()
