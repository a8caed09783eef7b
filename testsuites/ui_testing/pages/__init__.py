"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for the UI Testing Playground.

Each page class declares:
    - Its elements in an ELEMENTS table (selector + display name)
    - Page-specific actions
    - Verification helpers

Author: Automation Team
License: MIT
================================================================================
"""

from .dynamic_id_page import DynamicIdPage
from .home_page import HomePage

__all__ = [
    "DynamicIdPage",
    "HomePage",
]
