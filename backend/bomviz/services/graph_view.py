"""Graph View — orchestrates the load → adapt → store → fit cycle and click handling.

Invariants:
    - Owns exactly one GraphDataStore, DetailsPanel, GraphLoader and RenderEngine
    - The engine is bound to the store's live collections at construction
    - Successful load: parse, replace store, show prompt, fit (in that order)
    - Failed load: show the fixed failure message, store untouched
    - Selection: first node wins, then first edge, else the prompt

Design Decisions:
    - Parse happens before the store is touched, so a ParseError raised here
      reaches the loader's on_error with the previous graph still in place
    - One user-facing failure message; the typed error is kept in last_error
      for logs and API state
"""

import asyncio
import logging

from bomviz.core.details_panel import DetailsPanel
from bomviz.core.domain_types import DEFAULT_GRAPH_PATH
from bomviz.core.errors import GraphLoadError
from bomviz.core.gephi_adapter import GephiParseOptions, parse
from bomviz.core.graph_records import Edge, Node
from bomviz.core.graph_store import GraphDataStore
from bomviz.core.render_protocols import ClickEvent, RenderEngine, RenderOptions
from bomviz.infrastructure.graph_loader import GraphDocument, GraphLoader

logger = logging.getLogger(__name__)


def build_graph_path(graph_path: str, query_string: str = "") -> str:
    """Append the page's query string verbatim, adding '?' when it is missing."""
    if not query_string:
        return graph_path
    if not query_string.startswith("?"):
        query_string = "?" + query_string
    return graph_path + query_string


class GraphView:
    """One interactive graph per page session."""

    def __init__(
        self,
        loader: GraphLoader,
        engine: RenderEngine,
        graph_path: str = DEFAULT_GRAPH_PATH,
        parse_options: GephiParseOptions | None = None,
        render_options: RenderOptions | None = None,
        view_id: str | None = None,
    ):
        self.view_id = view_id
        self.store = GraphDataStore()
        self.panel = DetailsPanel()
        self.loader = loader
        self.engine = engine
        self.graph_path = graph_path
        self.parse_options = parse_options or GephiParseOptions()
        self.current_path = graph_path
        self.last_error: GraphLoadError | None = None
        self.engine.bind(
            self.store.nodes,
            self.store.edges,
            render_options or RenderOptions(),
            self.handle_selection,
        )

    def start(self, query_string: str = "") -> asyncio.Task:
        """Issue the first load for this page."""
        return self.load(build_graph_path(self.graph_path, query_string))

    def load(self, path: str | None = None) -> asyncio.Task:
        """Refetch the graph (default: the last requested path)."""
        self.current_path = path or self.current_path
        logger.info(
            f"Loading graph from {self.current_path}",
            extra={"view_id": self.view_id, "path": self.current_path},
        )
        return self.loader.load(self.current_path, self._on_load_success, self._on_load_error)

    def reload(self) -> None:
        """Re-render the retained snapshot without refetching."""
        self.loader.reload(self._on_load_success, self._on_load_error)

    def close(self) -> None:
        cancelled = self.loader.cancel_pending()
        if cancelled:
            logger.info(
                f"Cancelled {cancelled} pending graph load(s)",
                extra={"view_id": self.view_id},
            )

    def handle_selection(self, event: ClickEvent) -> None:
        """Show the attribute bag of the first selected node, else edge, else the prompt."""
        record: Node | Edge | None = None
        if event.nodes:
            record = self.store.get_node(event.nodes[0])
        elif event.edges:
            record = self.store.get_edge(event.edges[0])

        if record is None:
            self.panel.show_prompt()
        else:
            self.panel.show_attributes(record.attributes)

    # ─── Loader Callbacks ────────────────────────────────────────

    def _on_load_success(self, document: GraphDocument) -> None:
        parsed = parse(document, self.parse_options)
        self.store.replace(parsed.nodes, parsed.edges)
        self.last_error = None
        self.panel.show_prompt()
        self.engine.fit()
        logger.info(
            "Graph loaded",
            extra={
                "view_id": self.view_id,
                "node_count": self.store.node_count,
                "edge_count": self.store.edge_count,
            },
        )

    def _on_load_error(self, error: GraphLoadError) -> None:
        self.last_error = error
        self.panel.show_failure()
        logger.warning(
            f"Graph load failed: {error.message}",
            extra={
                "view_id": self.view_id,
                "error_code": error.code,
                "path": error.context.path,
                "sequence": error.context.sequence,
                "status_code": error.context.status_code,
            },
        )
