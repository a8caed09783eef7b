"""
Message templates for logs, assertions and errors.

Templates use %-style placeholders; fill them with ``template % (...)``.
"""


class ErrorMessages:
    TEST_LINK_NOT_FOUND = "Test scenario link not found: %s"


class ValidationMessages:
    FIELD_NOT_NULL = "%s should not be null"
    FIELD_NOT_EMPTY = "%s should not be empty"

    TITLE_VERIFICATION_FAILED = "Page title verification failed: expected '%s' but got '%s'"

    COUNT_MISMATCH = "Expected %d %s but found %d"
