"""
Constants shared by page objects, step definitions and tests.
"""

from .messages import ErrorMessages, ValidationMessages
from .pages import DynamicIdPageConstants, HomePageConstants
from .page_selectors import DynamicIdPageSelectors, HomePageSelectors

__all__ = [
    "DynamicIdPageConstants",
    "DynamicIdPageSelectors",
    "ErrorMessages",
    "HomePageConstants",
    "HomePageSelectors",
    "ValidationMessages",
]
