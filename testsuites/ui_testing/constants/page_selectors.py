"""
Playwright selectors for the UI Testing Playground pages.

CSS by default; XPath selectors carry the ``xpath=`` prefix.
"""


class HomePageSelectors:
    PAGE_TITLE = ".container h1"
    TEST_LINKS = ".container .row .col-sm h3 a"


class DynamicIdPageSelectors:
    DYNAMIC_ID_BUTTON = "xpath=//button[text()='Button with Dynamic ID']"
    PAGE_HEADER = "xpath=//h3[normalize-space()='Dynamic ID']"
