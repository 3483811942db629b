"""Graph Data Store — the single source of truth for what is rendered.

Invariants:
    - Two collections (nodes, edges) keyed by id; a later record with the same id wins
    - nodes/edges views stay the same objects for the store's lifetime, so a
      rendering engine binds once and sees every reload
    - replace() clears and repopulates without yielding to the event loop:
      no half-loaded graph is ever observable
    - No referential-integrity checks (an edge to a missing node is kept)
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType

from bomviz.core.domain_types import ElementId
from bomviz.core.graph_records import Edge, Node


class GraphDataStore:
    """Mutable node/edge collections with O(1) lookup by id."""

    def __init__(self) -> None:
        self._nodes: dict[ElementId, Node] = {}
        self._edges: dict[ElementId, Edge] = {}

    @property
    def nodes(self) -> Mapping[ElementId, Node]:
        """Read-only live view of the node collection."""
        return MappingProxyType(self._nodes)

    @property
    def edges(self) -> Mapping[ElementId, Edge]:
        """Read-only live view of the edge collection."""
        return MappingProxyType(self._edges)

    @property
    def node_count(self) -> int:
        return len(self._nodes)

    @property
    def edge_count(self) -> int:
        return len(self._edges)

    def clear(self) -> None:
        self._nodes.clear()
        self._edges.clear()

    def add_nodes(self, nodes: Iterable[Node]) -> None:
        for node in nodes:
            self._nodes[node.id] = node

    def add_edges(self, edges: Iterable[Edge]) -> None:
        for edge in edges:
            self._edges[edge.id] = edge

    def replace(self, nodes: Iterable[Node], edges: Iterable[Edge]) -> None:
        """Swap in a whole snapshot. Callers parse first, so a bad document never gets here."""
        self.clear()
        self.add_nodes(nodes)
        self.add_edges(edges)

    def get(self, element_id: ElementId) -> Node | Edge | None:
        """Look up a node, then an edge, by id."""
        node = self._nodes.get(element_id)
        if node is not None:
            return node
        return self._edges.get(element_id)

    def get_node(self, node_id: ElementId) -> Node | None:
        return self._nodes.get(node_id)

    def get_edge(self, edge_id: ElementId) -> Edge | None:
        return self._edges.get(edge_id)
