"""
================================================================================
Playground Tools Common Utilities
================================================================================

Logging setup and small filesystem helpers shared by the framework, the
pytest plugin and the command line runner.

Exports:
    - init_logger: Configure loguru once per process
    - ensure_directory: Create a directory tree if missing
    - sanitize_name: Make a string safe for use in file names

Usage:
    from playground_tools.common import init_logger

    init_logger(level="DEBUG", log_file="reports/logs/framework.log")

================================================================================
"""

import os
import re
import sys
from pathlib import Path
from typing import Optional, Union

from loguru import logger

# ============================================================
# Logging Setup
# ============================================================

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{thread.name}</cyan> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)

_logger_initialized = False


def init_logger(
    level: Optional[str] = None,
    format_string: Optional[str] = None,
    log_file: Optional[str] = None,
) -> None:
    """
    Initializes the loguru logger with standard settings.

    Only the first call in a process has an effect, so the pytest plugin and
    the runner can both call it safely.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to LOG_LEVEL env var or INFO.
        format_string: Log format string. Uses default if not provided.
        log_file: Optional file path to write logs to.
    """
    global _logger_initialized

    if _logger_initialized:
        return

    logger.remove()

    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    format_string = format_string or DEFAULT_LOG_FORMAT

    logger.add(
        sys.stderr,
        format=format_string,
        level=level,
        colorize=True,
    )

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        # enqueue keeps writes from parallel worker threads ordered
        logger.add(
            log_file,
            format=format_string,
            level=level,
            rotation="10 MB",
            retention="7 days",
            enqueue=True,
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {level}")


# ============================================================
# Common Utilities
# ============================================================

def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensures a directory exists, creating it if necessary.

    Args:
        path: Directory path

    Returns:
        The path as a Path (for chaining)
    """
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def sanitize_name(name: str) -> str:
    """Replace every character outside [a-zA-Z0-9] with an underscore."""
    return re.sub(r"[^a-zA-Z0-9]", "_", name)


__all__ = [
    "init_logger",
    "ensure_directory",
    "sanitize_name",
]
