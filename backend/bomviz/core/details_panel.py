"""Details Panel — passive text sink for the currently selected element.

Invariants:
    - show() replaces content synchronously; the latest call always wins
    - Attribute bags render as JSON indented by 3 spaces
"""

import json
from typing import Any

from bomviz.core.domain_types import DETAILS_INDENT, DETAILS_LOAD_FAILED, DETAILS_PROMPT


def format_attributes(attributes: dict[str, Any]) -> str:
    """Pretty-print an attribute bag the way the browser panel displays it."""
    return json.dumps(attributes, indent=DETAILS_INDENT, ensure_ascii=False, default=str)


class DetailsPanel:
    """Holds the text shown next to the graph."""

    def __init__(self, content: str = DETAILS_PROMPT) -> None:
        self._content = content

    @property
    def content(self) -> str:
        return self._content

    def show(self, content: str) -> None:
        self._content = content

    def show_attributes(self, attributes: dict[str, Any]) -> None:
        self.show(format_attributes(attributes))

    def show_prompt(self) -> None:
        self.show(DETAILS_PROMPT)

    def show_failure(self) -> None:
        self.show(DETAILS_LOAD_FAILED)
