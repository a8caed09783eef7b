"""
Test suites package.

Kept importable so that step definitions, page objects and the framework
plugin can be referenced by dotted path (``pytest_plugins``, ``run_tests.py``).
"""
