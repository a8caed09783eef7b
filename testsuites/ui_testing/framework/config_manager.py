"""
================================================================================
Configuration Manager
================================================================================

YAML-based framework settings with environment variable overrides.

Features:
    - Defaults for every recognised key
    - YAML file overrides defaults
    - Environment variables override both (baseUrl -> UI_BASE_URL)
    - Immutable snapshot built once per instance
    - Typed accessors for waits, paths, browser and cucumber toggles

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import copy
import os
import re
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from loguru import logger

from .exceptions import ConfigurationError


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "config" / "config.yaml"

ENV_PREFIX = "UI_"

DEFAULTS: Dict[str, Any] = {
    "baseUrl": "http://uitestingplayground.com",
    "implicitWait": 5,
    "explicitWait": 10,
    "pageLoadTimeout": 30,
    "browser": "chromium",
    "headless": True,
    "highlightElements": True,
    "screenshotsPath": "reports/screenshots",
    "reportsPath": "reports",
    "reportName": "Test Execution Report",
    "documentTitle": "UI Playground Automation Report",
    "logLevel": "INFO",
    "logFile": "",
    "cucumber": {
        "parallel": False,
        "stepLogging": True,
        "organizeByFeature": True,
    },
}

# Keys that must hold whole seconds
_INTEGER_KEYS = ("implicitWait", "explicitWait", "pageLoadTimeout")


def env_key(key: str) -> str:
    """
    Environment variable name for a dotted camelCase key.

    Examples:
        >>> env_key("baseUrl")
        'UI_BASE_URL'
        >>> env_key("cucumber.stepLogging")
        'UI_CUCUMBER_STEP_LOGGING'
    """
    snake = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", "_", key)
    return ENV_PREFIX + snake.replace(".", "_").upper()


def _convert_type(value: str, reference: Any) -> Any:
    """
    Convert string value to match reference type.

    Used for environment variables which are always strings.
    """
    if reference is None:
        return value

    if isinstance(reference, bool):
        return value.lower() in ("true", "1", "yes", "on")
    if isinstance(reference, int):
        try:
            return int(value)
        except ValueError:
            return value
    if isinstance(reference, float):
        try:
            return float(value)
        except ValueError:
            return value

    return value


def _deep_merge(base: Dict, override: Dict) -> Dict:
    """Deep merges two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _flatten(data: Mapping[str, Any], prefix: str = "") -> Dict[str, Any]:
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, Mapping):
            flat.update(_flatten(value, f"{dotted}."))
        else:
            flat[dotted] = value
    return flat


def _set_nested(data: Dict[str, Any], key: str, value: Any) -> None:
    parts = key.split(".")
    for part in parts[:-1]:
        data = data.setdefault(part, {})
    data[parts[-1]] = value


def _freeze(data: Dict[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType({
        key: _freeze(value) if isinstance(value, dict) else value
        for key, value in data.items()
    })


class ConfigManager:
    """
    Framework configuration loaded once and kept as a read-only snapshot.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (UI_BASE_URL, UI_BROWSER, ...)
        2. YAML configuration file
        3. Built-in defaults

    Usage:
        >>> config = ConfigManager()
        >>> config.base_url
        'http://uitestingplayground.com'
        >>> config.get("cucumber.stepLogging")
        True
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None) -> None:
        """
        Initialize configuration manager.

        Args:
            config_path: Path to YAML configuration file. Falls back to the
                UI_CONFIG_PATH env var, then DEFAULT_CONFIG_PATH.
        """
        self._config_path = Path(
            config_path or os.getenv("UI_CONFIG_PATH") or DEFAULT_CONFIG_PATH
        )
        self._values = _freeze(self._load())

    # =========================================================================
    # Loading
    # =========================================================================

    def _load(self) -> Dict[str, Any]:
        values = copy.deepcopy(DEFAULTS)
        values = _deep_merge(values, self._read_file())
        self._apply_env_overrides(values)
        self._validate(values)
        return values

    def _read_file(self) -> Dict[str, Any]:
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using defaults and environment variables only."
            )
            return {}

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration root must be a mapping: {self._config_path}"
            )

        logger.info(f"Configuration loaded successfully from: {self._config_path}")
        return data

    @staticmethod
    def _apply_env_overrides(values: Dict[str, Any]) -> None:
        for key, current in _flatten(values).items():
            raw = os.environ.get(env_key(key))
            if raw is None:
                continue
            reference = _flatten(DEFAULTS).get(key, current)
            _set_nested(values, key, _convert_type(raw, reference))
            logger.debug(f"Configuration override from environment: {env_key(key)}")

    @staticmethod
    def _validate(values: Dict[str, Any]) -> None:
        for key in _INTEGER_KEYS:
            value = values.get(key)
            if isinstance(value, bool):
                raise ConfigurationError(f"'{key}' must be a whole number of seconds, got {value!r}")
            try:
                values[key] = int(value)
            except (TypeError, ValueError) as e:
                raise ConfigurationError(
                    f"'{key}' must be a whole number of seconds, got {value!r}"
                ) from e
            if values[key] < 0:
                raise ConfigurationError(f"'{key}' must not be negative, got {value!r}")

    # =========================================================================
    # Access
    # =========================================================================

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        Args:
            key: Dot-notation path (e.g., "cucumber.parallel")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        value: Any = self._values
        for part in key.split("."):
            if isinstance(value, Mapping) and part in value:
                value = value[part]
            else:
                return default
        return value

    @property
    def snapshot(self) -> Mapping[str, Any]:
        """Read-only view of every setting."""
        return self._values

    @property
    def config_path(self) -> Path:
        return self._config_path

    @property
    def base_url(self) -> str:
        return str(self.get("baseUrl"))

    @property
    def implicit_wait(self) -> int:
        """Implicit wait in seconds."""
        return self.get("implicitWait")

    @property
    def explicit_wait(self) -> int:
        """Explicit wait in seconds."""
        return self.get("explicitWait")

    @property
    def page_load_timeout(self) -> int:
        return self.get("pageLoadTimeout")

    @property
    def browser(self) -> Optional[str]:
        value = self.get("browser")
        return str(value) if value else None

    @property
    def headless(self) -> bool:
        return bool(self.get("headless"))

    @property
    def highlight_elements(self) -> bool:
        return bool(self.get("highlightElements"))

    @property
    def screenshots_path(self) -> Path:
        return Path(self.get("screenshotsPath"))

    @property
    def reports_path(self) -> Path:
        return Path(self.get("reportsPath"))

    @property
    def report_name(self) -> str:
        return str(self.get("reportName"))

    @property
    def document_title(self) -> str:
        return str(self.get("documentTitle"))

    @property
    def log_level(self) -> str:
        return str(self.get("logLevel"))

    @property
    def log_file(self) -> Optional[str]:
        return self.get("logFile") or None

    @property
    def parallel(self) -> bool:
        return bool(self.get("cucumber.parallel"))

    @property
    def step_logging(self) -> bool:
        return bool(self.get("cucumber.stepLogging"))

    @property
    def organize_by_feature(self) -> bool:
        return bool(self.get("cucumber.organizeByFeature"))


__all__ = [
    "ConfigManager",
    "ConfigurationError",
    "DEFAULTS",
    "env_key",
]
