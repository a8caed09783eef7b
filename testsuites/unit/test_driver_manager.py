import threading

import pytest

from testsuites.ui_testing.framework.config_manager import ConfigManager
from testsuites.ui_testing.framework.driver_manager import DriverManager
from testsuites.ui_testing.framework.exceptions import DriverError
from testsuites.ui_testing.framework.worker_context import WorkerContext


@pytest.mark.parametrize(
    "name, expected",
    [
        (None, ("chromium", None)),
        ("", ("chromium", None)),
        ("firefox", ("firefox", None)),
        ("WebKit", ("webkit", None)),
        ("chrome", ("chromium", "chrome")),
        ("edge", ("chromium", "msedge")),
        ("netscape", ("chromium", None)),
    ],
)
def test_resolve_browser(name, expected):
    assert DriverManager.resolve_browser(name) == expected


def test_init_applies_configuration(write_config, playwright_factory):
    config = ConfigManager(write_config(browser="firefox", headless=False, implicitWait=3, pageLoadTimeout=20))
    drivers = DriverManager(config, playwright_factory=playwright_factory)
    worker = WorkerContext()

    session = drivers.init(worker)

    launcher = playwright_factory.instances[0].firefox
    assert session.browser_name == "firefox"
    assert launcher.browsers[0].options == {"headless": False}
    assert session.context.options["viewport"] == {"width": 1920, "height": 1080}
    assert session.page.default_timeout == 3000
    assert session.page.navigation_timeout == 20000
    assert worker.session is session


def test_chrome_alias_uses_channel(write_config, playwright_factory):
    config = ConfigManager(write_config(browser="chrome"))
    drivers = DriverManager(config, playwright_factory=playwright_factory)

    session = drivers.init(WorkerContext())

    options = playwright_factory.instances[0].chromium.browsers[0].options
    assert session.channel == "chrome"
    assert options["channel"] == "chrome"
    assert "--disable-gpu" in options["args"]


def test_get_returns_same_handle_until_quit(drivers, worker, playwright_factory):
    first = drivers.get(worker)
    assert drivers.get(worker) is first
    assert len(playwright_factory.instances) == 1

    drivers.quit(worker)
    assert worker.session is None
    assert first.context.closed and first.browser.closed and first.playwright.stopped

    second = drivers.get(worker)
    assert second is not first
    assert len(playwright_factory.instances) == 2


def test_quit_without_session_is_noop(drivers, worker, playwright_factory):
    drivers.quit(worker)
    drivers.quit(worker)

    assert worker.session is None
    assert playwright_factory.instances == []


def test_init_replaces_existing_session(drivers, worker):
    first = drivers.init(worker)
    second = drivers.init(worker)

    assert second is not first
    assert first.playwright.stopped
    assert worker.session is second


def test_workers_on_different_threads_get_different_handles(drivers):
    sessions = {}
    errors = []

    def run(name):
        worker = WorkerContext()
        try:
            sessions[name] = drivers.get(worker)
            assert drivers.get(worker) is sessions[name]
        except Exception as e:
            errors.append(e)
        finally:
            drivers.quit(worker)

    threads = [threading.Thread(target=run, args=(f"worker-{i}",)) for i in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert sessions["worker-0"] is not sessions["worker-1"]
    assert sessions["worker-0"].page is not sessions["worker-1"].page


def test_handle_is_not_usable_from_another_thread(drivers, worker):
    drivers.get(worker)
    errors = []

    def borrow():
        try:
            drivers.get(worker)
        except DriverError as e:
            errors.append(e)

    thread = threading.Thread(target=borrow)
    thread.start()
    thread.join()

    assert len(errors) == 1


def test_launch_failure_propagates_and_stops_playwright(drivers, worker, playwright_factory):
    playwright_factory.launch_error = RuntimeError("browser executable not found")

    with pytest.raises(RuntimeError, match="browser executable not found"):
        drivers.init(worker)

    assert worker.session is None
    assert playwright_factory.instances[0].stopped
