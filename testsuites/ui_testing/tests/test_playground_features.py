"""
Binds every Gherkin scenario under ``ui_testing/features`` to pytest.

Tags become pytest marks, so ``-m "smoke or homepage"`` selects scenarios
the same way the runner suites do.
"""

from pytest_bdd import scenarios

scenarios("home_page.feature", "dynamic_id.feature")
