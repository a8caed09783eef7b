"""
================================================================================
UI Framework Pytest Plugin
================================================================================

Wires the framework into pytest and pytest-bdd.

Scenario lifecycle (BDD):
    before_scenario  -> report node created, browser launched
    after_step       -> step result logged (cucumber.stepLogging)
    step_error       -> scenario marked failed
    after_scenario   -> screenshot on failure, pass/fail/skip logged,
                        browser quit, report node closed
    session finish   -> report flushed; under pytest-xdist the controller
                        merges the workers' reports into one file

Plain pytest UI tests request the ``ui_worker`` fixture and go through the
same lifecycle around the test function, including failures and skips
raised by fixtures built on it.

Register with ``pytest_plugins = ["testsuites.ui_testing.framework.hooks"]``.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import sys
from typing import Generator, Iterable, List, Optional

import pytest
from loguru import logger

from playground_tools.common import init_logger
from playground_tools.report_tools import attach_text

from .assertions import AssertionUtils
from .config_manager import ConfigManager
from .driver_manager import DriverManager
from .report_manager import ReportManager
from .screenshot_manager import ScreenshotManager
from .worker_context import WorkerContext


# Marks that say how a test runs, not what it covers
_NON_TAG_MARKERS = {
    "parametrize",
    "usefixtures",
    "filterwarnings",
    "skip",
    "skipif",
    "xfail",
}

# Lets the makereport hook find the ui_worker of a test whose setup failed
UI_WORKER_KEY = pytest.StashKey[WorkerContext]()


# ================================================================================
# Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def framework_config() -> ConfigManager:
    """Configuration snapshot for the whole session."""
    config = ConfigManager()
    init_logger(level=config.log_level, log_file=config.log_file)
    logger.info(f"Loaded UI configuration from {config.config_path}")
    return config


@pytest.fixture(scope="session")
def driver_manager(framework_config: ConfigManager) -> DriverManager:
    return DriverManager(framework_config)


@pytest.fixture(scope="session")
def report_manager(framework_config: ConfigManager) -> ReportManager:
    return ReportManager.instance(framework_config)


@pytest.fixture(scope="session")
def screenshot_manager(framework_config: ConfigManager) -> ScreenshotManager:
    return ScreenshotManager(framework_config)


@pytest.fixture
def worker_context(driver_manager: DriverManager) -> Generator[WorkerContext, None, None]:
    """
    Per-test worker state.

    The browser is quit on teardown if the scenario hooks did not get to it.
    """
    worker = WorkerContext()
    yield worker
    driver_manager.quit(worker)


@pytest.fixture
def assertions(worker_context: WorkerContext, report_manager: ReportManager) -> AssertionUtils:
    return AssertionUtils(worker_context, report_manager)


@pytest.fixture
def ui_worker(
    request: pytest.FixtureRequest,
    worker_context: WorkerContext,
    framework_config: ConfigManager,
    driver_manager: DriverManager,
    report_manager: ReportManager,
    screenshot_manager: ScreenshotManager,
) -> Generator[WorkerContext, None, None]:
    """
    Browser-backed worker for plain pytest UI tests.

    Usage:
        def test_title(ui_worker, driver_manager, framework_config, assertions):
            home_page = HomePage(ui_worker, driver_manager, framework_config).open()
            assertions.assert_title(home_page.get_page_title_text(), HOME_PAGE_TITLE)
    """
    name = request.node.name
    feature = request.node.path.stem
    request.node.stash[UI_WORKER_KEY] = worker_context
    start_scenario(
        worker_context,
        report_manager,
        driver_manager,
        name,
        feature_uri=str(request.node.path),
        tags=marker_tags(request.node.iter_markers()),
    )
    yield worker_context
    finish_scenario(
        worker_context,
        framework_config,
        driver_manager,
        report_manager,
        screenshot_manager,
        name,
        feature,
    )


# ================================================================================
# Scenario Lifecycle
# ================================================================================

def marker_tags(markers: Iterable[pytest.Mark]) -> List[str]:
    """Names of the marks on a test that describe it (smoke, homepage, P0, ...)."""
    tags: List[str] = []
    for mark in markers:
        if mark.name in _NON_TAG_MARKERS or mark.name.startswith("allure"):
            continue
        if mark.name not in tags:
            tags.append(mark.name)
    return tags


def start_scenario(
    worker: WorkerContext,
    report: ReportManager,
    drivers: DriverManager,
    name: str,
    feature_uri: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
) -> None:
    """Open the scenario's report node, then launch the worker's browser."""
    worker.reset_outcome()
    report.create_test(worker, name, feature_uri, tags)
    logger.info(f"Starting scenario: {name}")
    try:
        drivers.init(worker)
    except Exception as e:
        logger.error(f"Browser setup failed for scenario '{name}': {e}")
        report.log_fail(worker, f"Browser setup failed: {e}")
        report.remove_test(worker)
        raise


def finish_scenario(
    worker: WorkerContext,
    config: ConfigManager,
    drivers: DriverManager,
    report: ReportManager,
    screenshots: ScreenshotManager,
    name: str,
    feature: Optional[str] = None,
) -> None:
    """
    Record the scenario outcome and release the worker's browser.

    A failure takes precedence over a skip. The screenshot is taken before
    the browser is quit; a failed capture still leaves the failure message
    in the report.
    """
    try:
        if worker.scenario_failed:
            partition = feature if config.organize_by_feature else None
            screenshot = screenshots.take_screenshot(worker, name, partition)
            message = f"Scenario failed: {name}"
            if worker.failure_message:
                message = f"{message} - {worker.failure_message}"
            report.log_fail(worker, message, screenshot)
            attach_text(message, name="Failure")
            logger.error(message)
        elif worker.scenario_skipped:
            message = f"Scenario skipped: {name}"
            if worker.skip_reason:
                message = f"{message} - {worker.skip_reason}"
            report.log_skip(worker, message)
            logger.info(message)
        else:
            report.log_pass(worker, f"Scenario passed: {name}")
            logger.info(f"Scenario passed: {name}")
    finally:
        drivers.quit(worker)
        report.remove_test(worker)


def _feature_uri(feature) -> str:
    return getattr(feature, "rel_filename", None) or feature.filename


def _feature_stem(feature) -> str:
    uri = _feature_uri(feature).replace("\\", "/")
    return uri.rsplit("/", 1)[-1].rsplit(".", 1)[0]


def _step_text(step) -> str:
    return f"{step.keyword} {step.name}".strip()


# ================================================================================
# pytest-bdd Hooks
# ================================================================================

def pytest_bdd_before_scenario(request, feature, scenario):
    worker = request.getfixturevalue("worker_context")
    start_scenario(
        worker,
        request.getfixturevalue("report_manager"),
        request.getfixturevalue("driver_manager"),
        scenario.name,
        feature_uri=_feature_uri(feature),
        tags=set(scenario.tags) | set(getattr(feature, "tags", ())),
    )


def pytest_bdd_after_step(request, feature, scenario, step):
    config = request.getfixturevalue("framework_config")
    if not config.step_logging:
        return
    worker = request.getfixturevalue("worker_context")
    request.getfixturevalue("report_manager").log_step(worker, _step_text(step), "PASSED")


def pytest_bdd_step_error(request, feature, scenario, step, exception):
    worker = request.getfixturevalue("worker_context")
    worker.mark_failed(f"{_step_text(step)}: {exception}")
    if request.getfixturevalue("framework_config").step_logging:
        request.getfixturevalue("report_manager").log_step(worker, _step_text(step), "FAILED")


def pytest_bdd_step_func_lookup_error(request, feature, scenario, step, exception):
    worker = request.getfixturevalue("worker_context")
    worker.mark_failed(f"Step definition not found: {_step_text(step)}")
    if request.getfixturevalue("framework_config").step_logging:
        request.getfixturevalue("report_manager").log_step(worker, _step_text(step), "UNDEFINED")


def pytest_bdd_after_scenario(request, feature, scenario):
    worker = request.getfixturevalue("worker_context")
    # Runs from a finally block; a pending skip means the scenario never finished
    pending = sys.exc_info()[1]
    if isinstance(pending, pytest.skip.Exception):
        worker.mark_skipped(str(pending))
    finish_scenario(
        worker,
        request.getfixturevalue("framework_config"),
        request.getfixturevalue("driver_manager"),
        request.getfixturevalue("report_manager"),
        request.getfixturevalue("screenshot_manager"),
        scenario.name,
        _feature_stem(feature),
    )


# ================================================================================
# Pytest Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """
    Record the outcome of a plain UI test on its ui_worker before teardown.

    Errors raised by fixtures built on ui_worker (page objects opened during
    setup) fail the scenario just like a failing test body.
    """
    outcome = yield
    report = outcome.get_result()

    if report.when not in ("setup", "call"):
        return
    worker = item.stash.get(UI_WORKER_KEY, None)
    if worker is None:
        return

    if report.failed:
        message = str(call.excinfo.value) if call.excinfo else report.longreprtext
        worker.mark_failed(message)
    elif report.skipped:
        reason = call.excinfo.value if call.excinfo else None
        worker.mark_skipped(str(reason) if reason is not None else None)


def _is_xdist_controller(session) -> bool:
    """True in the process that distributes tests to pytest-xdist workers."""
    config = getattr(session, "config", None)
    if config is None or hasattr(config, "workerinput"):
        return False
    return bool(getattr(config.option, "numprocesses", None))


def pytest_sessionstart(session):
    if _is_xdist_controller(session):
        # leftovers of an interrupted parallel run must not end up in this report
        ReportManager.clear_worker_reports(ConfigManager().reports_path)


def pytest_sessionfinish(session, exitstatus):
    report = ReportManager.current()
    if report is not None:
        path = report.flush()
        if path is not None:
            logger.info(f"UI report available at {path}")

    if _is_xdist_controller(session):
        path = ReportManager.merge_worker_reports(ConfigManager().reports_path)
        if path is not None:
            logger.info(f"UI report available at {path}")


__all__ = [
    "finish_scenario",
    "marker_tags",
    "start_scenario",
]
