"""Exceptions raised by the UI framework."""


class FrameworkError(Exception):
    """Base class for framework errors."""
    pass


class ConfigurationError(FrameworkError):
    """Raised when configuration loading or access fails."""
    pass


class DriverError(FrameworkError):
    """Raised when a driver handle is used outside the worker that owns it."""
    pass


class ElementNotFoundError(FrameworkError):
    """Raised when no element matches a page-level lookup."""
    pass


__all__ = [
    "FrameworkError",
    "ConfigurationError",
    "DriverError",
    "ElementNotFoundError",
]
