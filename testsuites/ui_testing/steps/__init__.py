"""
Step definitions for the Gherkin features under ``ui_testing/features``.

Modules here are loaded as pytest plugins so every scenario can use them.
"""
