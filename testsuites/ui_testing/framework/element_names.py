"""
================================================================================
Element Names
================================================================================

Declarative element table for page objects and the per-page name cache used
in log and report messages.

Page objects declare their elements once:

    class HomePage(BasePage):
        ELEMENTS = {
            "page_title": element(".container h1", "Page Title"),
            "test_links": element(".container .row .col-sm h3 a"),
        }

At construction every entry becomes a locator attribute and its label is
cached. An entry without a label is named after its attribute.

================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


UNKNOWN_ELEMENT = "Unknown Element"


@dataclass(frozen=True)
class ElementSpec:
    """
    One declared element.

    Attributes:
        selector: Playwright selector (css, xpath=..., text=...)
        name: Human-readable label for logs and reports
    """
    selector: str
    name: Optional[str] = None

    def label_for(self, attribute: str) -> str:
        return self.name or attribute


def element(selector: str, name: Optional[str] = None) -> ElementSpec:
    """Shorthand for declaring an element in a page's ELEMENTS table."""
    return ElementSpec(selector=selector, name=name)


class ElementNameCache:
    """
    Maps located elements to their labels for the lifetime of a page object.

    Entries are keyed by object identity; the element is kept alongside its
    label so the identity cannot be recycled while the page object lives.
    """

    def __init__(self) -> None:
        self._names: Dict[int, Tuple[Any, str]] = {}

    def register(self, target: Any, name: str) -> None:
        self._names[id(target)] = (target, name)

    def name_of(self, target: Any) -> str:
        """Label of a registered element, UNKNOWN_ELEMENT otherwise."""
        entry = self._names.get(id(target))
        if entry is None or entry[0] is not target:
            return UNKNOWN_ELEMENT
        return entry[1]

    def __contains__(self, target: Any) -> bool:
        entry = self._names.get(id(target))
        return entry is not None and entry[0] is target

    def __len__(self) -> int:
        return len(self._names)


__all__ = [
    "ElementNameCache",
    "ElementSpec",
    "UNKNOWN_ELEMENT",
    "element",
]
