"""
Per-worker execution state.

A WorkerContext is created when a worker starts a scenario and is handed to
every consumer that needs the worker's driver handle or its current report
node. Nothing in it is shared between workers.
"""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .driver_manager import BrowserSession
    from .report_manager import ReportNode


def current_worker_id() -> str:
    """Identity of the calling worker: xdist process id plus thread name."""
    process = os.getenv("PYTEST_XDIST_WORKER", "main")
    return f"{process}:{threading.current_thread().name}"


@dataclass
class WorkerContext:
    """State owned by one worker for the scenario it is running."""

    worker_id: str = field(default_factory=current_worker_id)
    thread_id: int = field(default_factory=threading.get_ident)
    session: Optional["BrowserSession"] = None
    report_node: Optional["ReportNode"] = None
    scenario_failed: bool = False
    failure_message: Optional[str] = None
    scenario_skipped: bool = False
    skip_reason: Optional[str] = None

    def mark_failed(self, message: Optional[str] = None) -> None:
        self.scenario_failed = True
        if message and not self.failure_message:
            self.failure_message = message

    def mark_skipped(self, reason: Optional[str] = None) -> None:
        self.scenario_skipped = True
        if reason and not self.skip_reason:
            self.skip_reason = reason

    def reset_outcome(self) -> None:
        self.scenario_failed = False
        self.failure_message = None
        self.scenario_skipped = False
        self.skip_reason = None


__all__ = [
    "WorkerContext",
    "current_worker_id",
]
