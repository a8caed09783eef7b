import sys

import pytest

import run_tests
from run_tests import TestRunner, to_marker_expression


def _flag_value(cmd, flag):
    # skip the interpreter prefix: python -m pytest
    return cmd[cmd.index(flag, 3) + 1]


def test_to_marker_expression():
    assert to_marker_expression("@smoke or @homepage") == "smoke or homepage"
    assert to_marker_expression("  @regression  and not @dynamic_id ") == "regression and not dynamic_id"


def test_smoke_suite_command(monkeypatch):
    monkeypatch.setattr(run_tests, "parallel_from_config", lambda: None)

    cmd = TestRunner(suite="smoke").build_command()

    assert cmd[:3] == [sys.executable, "-m", "pytest"]
    assert "testsuites/ui_testing/tests" in cmd
    assert _flag_value(cmd, "-m") == "smoke"
    assert "-n" not in cmd
    assert "--alluredir" in cmd


def test_homepage_suite_includes_smoke(monkeypatch):
    monkeypatch.setattr(run_tests, "parallel_from_config", lambda: None)

    cmd = TestRunner(suite="homepage", allure_report=False).build_command()

    assert _flag_value(cmd, "-m") == "smoke or homepage"
    assert "--alluredir" not in cmd


def test_tags_override_suite_tags(monkeypatch):
    monkeypatch.setattr(run_tests, "parallel_from_config", lambda: None)

    cmd = TestRunner(suite="smoke", tags="@regression and not @dynamic_id").build_command()

    assert _flag_value(cmd, "-m") == "regression and not dynamic_id"


def test_parallel_flag_and_config_default(monkeypatch):
    monkeypatch.setattr(run_tests, "parallel_from_config", lambda: "auto")

    assert _flag_value(TestRunner(suite="all", parallel="4").build_command(), "-n") == "4"
    assert _flag_value(TestRunner(suite="all").build_command(), "-n") == "auto"
    assert "-n" not in TestRunner(suite="unit").build_command()


def test_browser_overrides_go_to_environment():
    env = TestRunner(suite="smoke", browser="firefox", headed=True).build_env()

    assert env["UI_BROWSER"] == "firefox"
    assert env["UI_HEADLESS"] == "false"


def test_unknown_suite_rejected():
    with pytest.raises(ValueError):
        TestRunner(suite="api")


def test_parser_defaults():
    args = run_tests.build_parser().parse_args([])

    assert args.suite == "all"
    assert args.tags is None
    assert args.parallel is None
    assert args.headed is False
