"""
Dynamic ID page object.

The button on this page gets a new id on every load, so it is located by its
text instead.
"""

from __future__ import annotations

from testsuites.ui_testing.constants import DynamicIdPageConstants, DynamicIdPageSelectors
from testsuites.ui_testing.framework.element_names import element
from testsuites.ui_testing.framework.page_base import BasePage


class DynamicIdPage(BasePage):

    URL_PATH = DynamicIdPageConstants.URL_PATH

    ELEMENTS = {
        "dynamic_id_button": element(DynamicIdPageSelectors.DYNAMIC_ID_BUTTON, "Dynamic ID Button"),
        "page_header": element(DynamicIdPageSelectors.PAGE_HEADER, "Page Header"),
    }

    def is_on_page(self) -> bool:
        """True when the page header reads 'Dynamic ID'."""
        return self.get_text(self.page_header).strip() == DynamicIdPageConstants.PAGE_HEADER

    def click_dynamic_id_button(self) -> "DynamicIdPage":
        self.click(self.dynamic_id_button)
        return self

    def get_button_text(self) -> str:
        return self.get_text(self.dynamic_id_button)


__all__ = [
    "DynamicIdPage",
]
