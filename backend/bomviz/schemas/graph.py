"""Graph Schemas — Pydantic models for the node/edge payload the browser canvas renders.

Invariants:
    - GraphData shape matches vis-network DataSet items
    - Edge endpoints serialize as "from"/"to" (vis-network keys)
    - Unset display fields are omitted so the engine applies its defaults

Design Decisions:
    - Separate from view schemas: graph data is consumed by the canvas,
      view state by the page controller script
"""

from typing import Any

from pydantic import BaseModel, Field

from bomviz.core.graph_records import Edge, Node

ElementIdField = str | int | float


class GraphNode(BaseModel):
    """A node as a vis-network DataSet item."""
    id: ElementIdField
    label: str | None = None
    x: float | None = None
    y: float | None = None
    size: float | None = None
    color: str | dict | None = None
    title: str | None = None
    fixed: bool = False
    attributes: dict[str, Any] = {}

    @classmethod
    def from_record(cls, node: Node) -> "GraphNode":
        return cls(
            id=node.id, label=node.label, x=node.x, y=node.y, size=node.size,
            color=node.color, title=node.title, fixed=node.fixed,
            attributes=node.attributes,
        )


class GraphEdge(BaseModel):
    """An edge as a vis-network DataSet item."""
    id: ElementIdField
    source: ElementIdField = Field(serialization_alias="from")
    target: ElementIdField = Field(serialization_alias="to")
    label: str | None = None
    title: str | None = None
    arrows: str | None = None
    color: str | dict | None = None
    attributes: dict[str, Any] = {}

    @classmethod
    def from_record(cls, edge: Edge) -> "GraphEdge":
        return cls(
            id=edge.id, source=edge.source, target=edge.target,
            label=edge.label, title=edge.title, arrows=edge.arrows,
            color=edge.color, attributes=edge.attributes,
        )


class GraphData(BaseModel):
    """Complete graph for one render pass."""
    nodes: list[GraphNode] = []
    edges: list[GraphEdge] = []
