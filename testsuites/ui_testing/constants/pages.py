"""Expected page content."""


class HomePageConstants:
    HOME_PAGE_TITLE = "UI Test Automation Playground"

    DYNAMIC_ID_LINK_TITLE = "Dynamic ID"

    # Available test scenario links on the homepage
    EXPECTED_LINK_COUNT = 23


class DynamicIdPageConstants:
    URL_PATH = "/dynamicid"
    PAGE_HEADER = "Dynamic ID"
    BUTTON_TEXT = "Button with Dynamic ID"
