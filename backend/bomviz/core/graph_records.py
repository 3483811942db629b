"""Graph Records — renderable node/edge records produced by the Gephi adapter.

Invariants:
    - attributes is the opaque bag of domain metadata, never inspected by the core
    - Display fields left as None are defaulted by the rendering engine
    - Edge source/target are not checked against the node set (dangling edges render)
"""

from dataclasses import dataclass, field
from typing import Any

from bomviz.core.domain_types import ElementId


@dataclass
class Node:
    """One software component in the graph."""
    id: ElementId
    label: str | None = None
    x: float | None = None
    y: float | None = None
    size: float | None = None
    color: str | dict | None = None
    title: str | None = None
    fixed: bool = False
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass
class Edge:
    """One relationship between two components."""
    id: ElementId
    source: ElementId
    target: ElementId
    label: str | None = None
    title: str | None = None
    arrows: str | None = None
    color: str | dict | None = None
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass
class ParsedGraph:
    """Adapter output for one document, committed to the store as a unit."""
    nodes: list[Node] = field(default_factory=list)
    edges: list[Edge] = field(default_factory=list)
