"""
================================================================================
Root Pytest Configuration
================================================================================

Registers the project's markers and tags tests by the suite they live in.
Gherkin tags (@smoke, @homepage, ...) arrive as the same markers.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: Browser-backed tests"
    )
    config.addinivalue_line(
        "markers", "unit: Framework tests that run without a browser"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "homepage: Tests related to the playground home page"
    )
    config.addinivalue_line(
        "markers", "dynamic_id: Tests related to the Dynamic ID page"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-add the suite marker from the directory a test lives in."""
    for item in items:
        path = str(item.fspath)
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
        elif "unit" in path:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "UI Testing Playground Automation Framework",
        "=" * 60,
        "",
    ]
