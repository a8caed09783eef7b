"""
Fakes and fixtures for framework unit tests.

The fakes mirror the slice of the Playwright sync API the framework uses
(launcher -> browser -> context -> page -> locator), so driver, page object,
screenshot and reporting behaviour can be checked without a browser.
"""

import os
from pathlib import Path

import pytest
import yaml
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from testsuites.ui_testing.framework.config_manager import ConfigManager
from testsuites.ui_testing.framework.driver_manager import DriverManager
from testsuites.ui_testing.framework.report_manager import ReportManager
from testsuites.ui_testing.framework.worker_context import WorkerContext


PNG_HEADER = b"\x89PNG\r\n\x1a\n"


class FakeLocator:
    def __init__(self, selector, text="", visible=True, children=None):
        self.selector = selector
        self.text = text
        self.visible = visible
        self.children = list(children or [])
        self.visibility_error = False
        self.clicks = 0
        self.trial_clicks = 0
        self.filled = None
        self.scripts = []

    @property
    def first(self):
        return self.children[0] if self.children else self

    def all(self):
        return list(self.children)

    def count(self):
        return len(self.children)

    def _ensure_visible(self, timeout):
        if not self.visible:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.selector}")

    def wait_for(self, state="visible", timeout=None):
        self._ensure_visible(timeout)

    def click(self, trial=False, timeout=None):
        self._ensure_visible(timeout)
        if trial:
            self.trial_clicks += 1
        else:
            self.clicks += 1

    def fill(self, value, timeout=None):
        self._ensure_visible(timeout)
        self.filled = value

    def inner_text(self, timeout=None):
        self._ensure_visible(timeout)
        return self.text

    def is_visible(self):
        if self.visibility_error:
            raise PlaywrightError("Element is not attached to the DOM")
        return self.visible

    def evaluate(self, script, arg=None):
        self.scripts.append(script)


class FakePage:
    def __init__(self):
        self.locators = {}
        self.visited = []
        self.page_title = ""
        self.default_timeout = None
        self.navigation_timeout = None
        self.screenshot_error = None
        self.screenshots = []
        self.full_page_screenshots = 0
        self.scripts = []

    def add_locator(self, locator):
        self.locators[locator.selector] = locator
        return locator

    def locator(self, selector):
        return self.locators.setdefault(selector, FakeLocator(selector))

    def goto(self, url):
        self.visited.append(url)

    def title(self):
        return self.page_title

    def set_default_timeout(self, timeout):
        self.default_timeout = timeout

    def set_default_navigation_timeout(self, timeout):
        self.navigation_timeout = timeout

    def evaluate(self, script, arg=None):
        self.scripts.append((script, arg))
        return arg

    def screenshot(self, path, full_page=False):
        if self.screenshot_error is not None:
            raise self.screenshot_error
        Path(path).write_bytes(PNG_HEADER)
        self.screenshots.append(path)
        if full_page:
            self.full_page_screenshots += 1


class FakeContext:
    def __init__(self, options):
        self.options = options
        self.page = FakePage()
        self.closed = False

    def new_page(self):
        return self.page

    def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, name, options):
        self.name = name
        self.options = options
        self.context = None
        self.closed = False

    def new_context(self, **options):
        self.context = FakeContext(options)
        return self.context

    def close(self):
        self.closed = True


class FakeLauncher:
    def __init__(self, name, launch_error=None):
        self.name = name
        self.launch_error = launch_error
        self.browsers = []

    def launch(self, **options):
        if self.launch_error is not None:
            raise self.launch_error
        browser = FakeBrowser(self.name, options)
        self.browsers.append(browser)
        return browser


class FakePlaywright:
    def __init__(self, launch_error=None):
        self.chromium = FakeLauncher("chromium", launch_error)
        self.firefox = FakeLauncher("firefox", launch_error)
        self.webkit = FakeLauncher("webkit", launch_error)
        self.stopped = False

    def stop(self):
        self.stopped = True


class FakePlaywrightFactory:
    """Stands in for start_playwright; every call starts a new fake instance."""

    def __init__(self):
        self.instances = []
        self.launch_error = None

    def __call__(self):
        playwright = FakePlaywright(self.launch_error)
        self.instances.append(playwright)
        return playwright


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch):
    for name in list(os.environ):
        if name.startswith("UI_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("PYTEST_XDIST_WORKER", raising=False)

    ReportManager.reset()
    yield
    ReportManager.reset()


@pytest.fixture
def write_config(tmp_path):
    """Write a config.yaml with output paths under tmp_path; keyword args override keys."""
    def _write(**values):
        data = {
            "screenshotsPath": str(tmp_path / "screenshots"),
            "reportsPath": str(tmp_path / "reports"),
            "logFile": "",
        }
        data.update(values)
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump(data), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def config(write_config):
    return ConfigManager(write_config())


@pytest.fixture
def playwright_factory():
    return FakePlaywrightFactory()


@pytest.fixture
def drivers(config, playwright_factory):
    return DriverManager(config, playwright_factory=playwright_factory)


@pytest.fixture
def worker():
    return WorkerContext()


@pytest.fixture
def report(config):
    return ReportManager.instance(config)


@pytest.fixture
def active_worker(worker, drivers, report):
    """Worker with a fake browser and an open report node."""
    drivers.init(worker)
    report.create_test(worker, "Unit scenario", "features/unit.feature", ["unit"])
    yield worker
    drivers.quit(worker)


@pytest.fixture
def fake_locator():
    """The FakeLocator class, for tests that put their own elements on a page."""
    return FakeLocator
