"""
================================================================================
Report Manager
================================================================================

Process-wide report sink for scenario results.

The report is a tree: one suite node, a scenario node per executed scenario
and a step node per executed step. Each worker appends only to the scenario
node stored on its own WorkerContext; the shared suite node is touched under
a lock when scenarios are created and when the report is flushed.

flush() renders the whole tree into a single JSON file under reportsPath.
Screenshots are referenced relative to that file and mirrored to Allure.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
import os
import platform
import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from loguru import logger

from playground_tools.common import ensure_directory
from playground_tools.report_tools import TestResultSummary, attach_screenshot

from .config_manager import ConfigManager
from .worker_context import WorkerContext


def _now() -> str:
    return datetime.now().isoformat(timespec="seconds")


# Precedence when a node aggregates several outcomes
_STATUS_PRECEDENCE = ("fail", "pass", "skip")


def aggregate_status(statuses: Iterable[str]) -> str:
    """Overall status of a set of outcomes: any failure wins, then any pass, then any skip."""
    present = set(statuses)
    for candidate in _STATUS_PRECEDENCE:
        if candidate in present:
            return candidate
    return "info"


class Status(str, Enum):
    """Outcome of a report node or entry."""
    PASS = "pass"
    FAIL = "fail"
    SKIP = "skip"
    INFO = "info"

    @classmethod
    def from_result(cls, value: Union[str, "Status"]) -> "Status":
        """Map runner result names (PASSED, failed, skipped, ...) to a Status."""
        if isinstance(value, Status):
            return value
        normalized = str(value).strip().lower()
        if normalized in ("pass", "passed", "success"):
            return cls.PASS
        if normalized in ("fail", "failed", "error", "broken"):
            return cls.FAIL
        if normalized in ("skip", "skipped", "pending", "undefined"):
            return cls.SKIP
        return cls.INFO


@dataclass
class LogEntry:
    """A single message logged against a node."""
    status: Status
    message: str
    attachment: Optional[str] = None
    timestamp: str = field(default_factory=_now)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "status": self.status.value,
            "message": self.message,
            "timestamp": self.timestamp,
        }
        if self.attachment:
            data["attachment"] = self.attachment
        return data


@dataclass
class ReportNode:
    """
    Suite, scenario or step record.

    Step nodes carry a fixed status; suite and scenario nodes derive theirs
    from their entries and children (any failure wins, then any pass).
    A skipped scenario is fixed to skip.
    """
    name: str
    kind: str = "scenario"
    feature: Optional[str] = None
    categories: List[str] = field(default_factory=list)
    authors: List[str] = field(default_factory=list)
    entries: List[LogEntry] = field(default_factory=list)
    children: List["ReportNode"] = field(default_factory=list)
    fixed_status: Optional[Status] = None
    started_at: str = field(default_factory=_now)
    ended_at: Optional[str] = None

    @property
    def status(self) -> Status:
        if self.fixed_status is not None:
            return self.fixed_status
        statuses = [entry.status.value for entry in list(self.entries)]
        statuses += [child.status.value for child in list(self.children)]
        return Status(aggregate_status(statuses))

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "kind": self.kind,
            "status": self.status.value,
            "startedAt": self.started_at,
            "endedAt": self.ended_at,
        }
        if self.feature:
            data["feature"] = self.feature
        if self.categories:
            data["categories"] = list(self.categories)
        if self.authors:
            data["authors"] = list(self.authors)
        if self.entries:
            data["logs"] = [entry.to_dict() for entry in list(self.entries)]
        if self.children:
            data["children"] = [child.to_dict() for child in list(self.children)]
        return data


class ReportManager:
    """
    Report sink shared by every worker of the process.

    Usage:
        report = ReportManager.instance(config)
        report.create_test(worker, "Verify home page title", "features/home_page.feature", {"smoke"})
        report.log_step(worker, "I navigate to the homepage", "PASSED")
        report.log_pass(worker, "Scenario passed")
        report.remove_test(worker)
        report.flush()
    """

    REPORT_FILE = "test-report.json"

    _instance: Optional["ReportManager"] = None
    _instance_lock = threading.Lock()

    def __init__(self, config: ConfigManager):
        self.config = config
        self.suite = ReportNode(name=config.report_name, kind="suite")
        self.system_info = {
            "OS": platform.platform(),
            "Python Version": platform.python_version(),
            "Browser": config.browser or "default",
        }
        self.report_path = self._build_report_path(config.reports_path)
        self._lock = threading.Lock()
        self._has_tests = False
        logger.info("Report manager initialized successfully")

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @classmethod
    def instance(cls, config: ConfigManager) -> "ReportManager":
        """Return the process-wide report manager, creating it exactly once."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls(config)
        return cls._instance

    @classmethod
    def current(cls) -> Optional["ReportManager"]:
        """The report manager if one was created, else None."""
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """
        Drop the process-wide instance.

        Useful for testing when a fresh report is needed.
        """
        with cls._instance_lock:
            cls._instance = None

    @classmethod
    def _build_report_path(cls, reports_dir: Path) -> Path:
        # xdist workers are separate processes; each writes its own file and
        # the controller merges them at session end
        xdist_worker = os.getenv("PYTEST_XDIST_WORKER")
        if xdist_worker:
            stem, suffix = os.path.splitext(cls.REPORT_FILE)
            return Path(reports_dir) / f"{stem}-{xdist_worker}{suffix}"
        return Path(reports_dir) / cls.REPORT_FILE

    # =========================================================================
    # Scenario Nodes
    # =========================================================================

    @staticmethod
    def parse_tags(tags: Optional[Iterable[str]]) -> Tuple[List[str], List[str]]:
        """
        Split scenario tags into (categories, authors).

        Marker characters are stripped; "author:<name>" tags become authors.
        """
        if not tags:
            return [], []
        ordered = sorted(tags) if isinstance(tags, (set, frozenset)) else list(tags)

        categories: List[str] = []
        authors: List[str] = []
        for tag in ordered:
            clean = str(tag).strip().lstrip("@")
            if not clean:
                continue
            if clean.lower().startswith("author:"):
                author = clean.split(":", 1)[1].strip()
                if author:
                    authors.append(author)
            elif clean not in categories:
                categories.append(clean)
        return categories, authors

    def create_test(
        self,
        worker: WorkerContext,
        name: str,
        feature_uri: Optional[str] = None,
        tags: Optional[Iterable[str]] = None,
    ) -> ReportNode:
        """
        Open a scenario node and make it the worker's current node.

        Args:
            worker: Worker running the scenario
            name: Scenario name
            feature_uri: Path or URI of the feature file; its stem names the feature
            tags: Scenario tags, with or without the leading '@'
        """
        categories, authors = self.parse_tags(tags)
        feature = Path(str(feature_uri)).stem if feature_uri else None
        node = ReportNode(
            name=name,
            kind="scenario",
            feature=feature,
            categories=categories,
            authors=authors,
        )

        with self._lock:
            self.suite.children.append(node)
            self._has_tests = True

        worker.report_node = node
        logger.info(f"Created test in report: {name}")
        return node

    def get_test(self, worker: WorkerContext) -> Optional[ReportNode]:
        return worker.report_node

    def remove_test(self, worker: WorkerContext) -> None:
        """Close the worker's current node and detach it from the worker."""
        node = worker.report_node
        if node is None:
            return
        node.ended_at = _now()
        worker.report_node = None

    # =========================================================================
    # Logging
    # =========================================================================

    def log_step(self, worker: WorkerContext, text: str, status: Union[str, Status]) -> Optional[ReportNode]:
        """Append a step node with the runner's result to the worker's scenario."""
        node = worker.report_node
        if node is None:
            logger.debug(f"No active test for {worker.worker_id}, step not reported: {text}")
            return None
        step = ReportNode(
            name=text,
            kind="step",
            fixed_status=Status.from_result(status),
            ended_at=_now(),
        )
        node.children.append(step)
        return step

    def log_pass(self, worker: WorkerContext, message: str, screenshot: Optional[Union[str, Path]] = None) -> Optional[LogEntry]:
        return self._log(worker, Status.PASS, message, screenshot)

    def log_fail(self, worker: WorkerContext, message: str, screenshot: Optional[Union[str, Path]] = None) -> Optional[LogEntry]:
        return self._log(worker, Status.FAIL, message, screenshot)

    def log_info(self, worker: WorkerContext, message: str, screenshot: Optional[Union[str, Path]] = None) -> Optional[LogEntry]:
        return self._log(worker, Status.INFO, message, screenshot)

    def log_skip(self, worker: WorkerContext, message: str) -> Optional[LogEntry]:
        """Record the scenario as skipped, whatever its steps reported before the skip."""
        entry = self._log(worker, Status.SKIP, message, None)
        if entry is not None:
            worker.report_node.fixed_status = Status.SKIP
        return entry

    def _log(
        self,
        worker: WorkerContext,
        status: Status,
        message: str,
        screenshot: Optional[Union[str, Path]],
    ) -> Optional[LogEntry]:
        node = worker.report_node
        if node is None:
            logger.debug(f"No active test for {worker.worker_id}, {status.value} not reported: {message}")
            return None

        entry = LogEntry(
            status=status,
            message=message,
            attachment=self._relative_to_report(screenshot) if screenshot else None,
        )
        node.entries.append(entry)
        if screenshot:
            attach_screenshot(screenshot, name=node.name)
        return entry

    def _relative_to_report(self, path: Union[str, Path]) -> str:
        try:
            relative = os.path.relpath(Path(path), self.report_path.parent)
        except ValueError:
            # different drive on Windows
            relative = str(path)
        return Path(relative).as_posix()

    # =========================================================================
    # Output
    # =========================================================================

    def to_dict(self) -> Dict[str, Any]:
        scenarios = list(self.suite.children)
        summary = TestResultSummary.from_statuses(node.status.value for node in scenarios)
        return {
            "documentTitle": self.config.document_title,
            "reportName": self.config.report_name,
            "systemInfo": dict(self.system_info),
            "generatedAt": _now(),
            "summary": summary.to_dict(),
            "suite": self.suite.to_dict(),
        }

    def flush(self) -> Optional[Path]:
        """
        Write the whole report to disk.

        Returns:
            Path of the written report, or None when no test was created yet
        """
        with self._lock:
            if not self._has_tests:
                logger.debug("No tests created yet, report flush skipped")
                return None
            data = self.to_dict()

        ensure_directory(self.report_path.parent)
        self.report_path.write_text(
            json.dumps(data, indent=2, default=str),
            encoding="utf-8",
        )
        logger.info(f"Report flushed successfully: {self.report_path}")
        return self.report_path

    # =========================================================================
    # Parallel Runs
    # =========================================================================

    @classmethod
    def worker_report_paths(cls, reports_dir: Union[str, Path]) -> List[Path]:
        """Report files written by pytest-xdist workers (test-report-gw0.json, ...)."""
        stem, suffix = os.path.splitext(cls.REPORT_FILE)
        return sorted(Path(reports_dir).glob(f"{stem}-gw*{suffix}"))

    @classmethod
    def clear_worker_reports(cls, reports_dir: Union[str, Path]) -> None:
        for path in cls.worker_report_paths(reports_dir):
            path.unlink()

    @classmethod
    def merge_worker_reports(cls, reports_dir: Union[str, Path]) -> Optional[Path]:
        """
        Combine the workers' report files into the single report file.

        Scenario nodes of every worker go under one suite node and the summary
        is recomputed. Merged worker files are removed; unreadable ones are
        logged and left in place.

        Returns:
            Path of the merged report, or None when no worker wrote a report
        """
        reports = []
        merged_paths = []
        for path in cls.worker_report_paths(reports_dir):
            try:
                reports.append(json.loads(path.read_text(encoding="utf-8")))
            except (OSError, ValueError) as e:
                logger.error(f"Cannot read worker report {path}: {e}")
                continue
            merged_paths.append(path)

        if not reports:
            return None

        scenarios = [
            scenario
            for report in reports
            for scenario in report.get("suite", {}).get("children", [])
        ]
        statuses = [scenario.get("status", "info") for scenario in scenarios]
        started = [report["suite"]["startedAt"] for report in reports if report.get("suite", {}).get("startedAt")]
        ended = [report["suite"]["endedAt"] for report in reports if report.get("suite", {}).get("endedAt")]

        merged = dict(reports[0])
        merged["generatedAt"] = _now()
        merged["summary"] = TestResultSummary.from_statuses(statuses).to_dict()
        merged["suite"] = dict(
            reports[0].get("suite", {}),
            status=aggregate_status(statuses),
            startedAt=min(started) if started else None,
            endedAt=max(ended) if ended else None,
            children=scenarios,
        )

        target = Path(reports_dir) / cls.REPORT_FILE
        ensure_directory(target.parent)
        target.write_text(json.dumps(merged, indent=2, default=str), encoding="utf-8")
        for path in merged_paths:
            path.unlink()

        logger.info(f"Merged {len(merged_paths)} worker reports into {target}")
        return target


__all__ = [
    "LogEntry",
    "ReportManager",
    "ReportNode",
    "Status",
    "aggregate_status",
]
