"""Browser Render Engine — RenderEngine bridge to a vis-network canvas in the browser.

Invariants:
    - bind() happens once; a second bind replaces the click handler and views
    - fit_generation only grows; the browser calls network.fit() whenever it changes
    - click() before bind() is ignored (page raced the first load)

Design Decisions:
    - Physics, hit-testing and pan/zoom run in the browser; this side only keeps
      what the page polls (bound collections, options, fit requests) and feeds
      clicks back into the controller
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from bomviz.core.domain_types import ElementId
from bomviz.core.graph_records import Edge, Node
from bomviz.core.render_protocols import ClickEvent, ClickHandler, RenderOptions

logger = logging.getLogger(__name__)

_EMPTY: Mapping = {}


class BrowserRenderEngine:
    """Server-side half of the browser canvas."""

    def __init__(self) -> None:
        self.nodes: Mapping[ElementId, Node] = _EMPTY
        self.edges: Mapping[ElementId, Edge] = _EMPTY
        self.options = RenderOptions()
        self.fit_generation = 0
        self._on_click: ClickHandler | None = None

    @property
    def is_bound(self) -> bool:
        return self._on_click is not None

    def bind(
        self,
        nodes: Mapping[ElementId, Node],
        edges: Mapping[ElementId, Edge],
        options: RenderOptions,
        on_click: ClickHandler,
    ) -> None:
        self.nodes = nodes
        self.edges = edges
        self.options = options
        self._on_click = on_click

    def fit(self) -> None:
        self.fit_generation += 1

    def click(
        self,
        node_ids: Sequence[ElementId] = (),
        edge_ids: Sequence[ElementId] = (),
    ) -> None:
        """Deliver a browser click (ids under the cursor) to the bound handler."""
        if self._on_click is None:
            logger.warning("Click received before the engine was bound")
            return
        self._on_click(ClickEvent(nodes=list(node_ids), edges=list(edge_ids)))

    def vis_options(self) -> dict[str, Any]:
        return self.options.to_vis_options()
