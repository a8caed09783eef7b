import pytest
import yaml

from testsuites.ui_testing.framework.config_manager import ConfigManager, env_key
from testsuites.ui_testing.framework.exceptions import ConfigurationError


def test_defaults_when_file_missing(tmp_path):
    config = ConfigManager(tmp_path / "missing.yaml")

    assert config.base_url == "http://uitestingplayground.com"
    assert config.implicit_wait == 5
    assert config.explicit_wait == 10
    assert config.page_load_timeout == 30
    assert config.browser == "chromium"
    assert config.headless is True
    assert config.parallel is False
    assert config.step_logging is True
    assert config.organize_by_feature is True


def test_file_values_override_defaults(write_config):
    config = ConfigManager(write_config(
        baseUrl="http://localhost:8080",
        implicitWait=2,
        browser="firefox",
        cucumber={"parallel": True},
    ))

    assert config.base_url == "http://localhost:8080"
    assert config.implicit_wait == 2
    assert config.browser == "firefox"
    assert config.parallel is True
    # untouched nested keys keep their defaults
    assert config.step_logging is True
    assert config.get("cucumber.organizeByFeature") is True


def test_env_overrides_file(monkeypatch, write_config):
    path = write_config(baseUrl="http://file.example.com", explicitWait=4)
    monkeypatch.setenv("UI_BASE_URL", "http://env.example.com")
    monkeypatch.setenv("UI_EXPLICIT_WAIT", "7")
    monkeypatch.setenv("UI_HEADLESS", "false")
    monkeypatch.setenv("UI_CUCUMBER_STEP_LOGGING", "no")

    config = ConfigManager(path)

    assert config.base_url == "http://env.example.com"
    assert config.explicit_wait == 7
    assert config.headless is False
    assert config.step_logging is False


def test_config_path_from_env(monkeypatch, write_config):
    path = write_config(reportName="From Env Path")
    monkeypatch.setenv("UI_CONFIG_PATH", str(path))

    assert ConfigManager().report_name == "From Env Path"


def test_env_key_names():
    assert env_key("baseUrl") == "UI_BASE_URL"
    assert env_key("pageLoadTimeout") == "UI_PAGE_LOAD_TIMEOUT"
    assert env_key("cucumber.organizeByFeature") == "UI_CUCUMBER_ORGANIZE_BY_FEATURE"


def test_malformed_yaml_raises(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("baseUrl: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigManager(path)


def test_non_mapping_root_raises(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump(["a", "b"]), encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigManager(path)


@pytest.mark.parametrize("value", ["soon", True, -1, None])
def test_invalid_wait_raises(write_config, value):
    with pytest.raises(ConfigurationError):
        ConfigManager(write_config(implicitWait=value))


def test_invalid_wait_from_env_raises(monkeypatch, write_config):
    path = write_config()
    monkeypatch.setenv("UI_IMPLICIT_WAIT", "five")

    with pytest.raises(ConfigurationError):
        ConfigManager(path)


def test_snapshot_is_read_only(config):
    with pytest.raises(TypeError):
        config.snapshot["baseUrl"] = "http://elsewhere"
    with pytest.raises(TypeError):
        config.snapshot["cucumber"]["parallel"] = True


def test_get_missing_key_returns_default(config):
    assert config.get("cucumber.unknown", "fallback") == "fallback"
    assert config.get("baseUrl.nested") is None


def test_empty_browser_and_log_file_are_none(write_config):
    config = ConfigManager(write_config(browser="", logFile=""))

    assert config.browser is None
    assert config.log_file is None
