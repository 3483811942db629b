"""Rendering Boundary — contract between the view controller and the rendering engine.

Invariants:
    - The engine is bound once to the store's live node/edge mappings
    - Click events carry ids only; lookups happen in the controller
    - fit() is a request, the engine decides when the viewport actually moves

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - RenderOptions defaults give the BDIO viewer look and physics
      (dot nodes, thin continuous edges, Barnes-Hut with strong repulsion)
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol

from bomviz.core.domain_types import ElementId
from bomviz.core.graph_records import Edge, Node


@dataclass(frozen=True)
class ClickEvent:
    """Ids under the cursor at click time. Both lists empty means background click."""
    nodes: list[ElementId] = field(default_factory=list)
    edges: list[ElementId] = field(default_factory=list)


ClickHandler = Callable[[ClickEvent], None]


@dataclass(frozen=True)
class RenderOptions:
    """Engine configuration: styling, interaction and physics parameters."""
    node_shape: str = "dot"
    font_face: str = "Tahoma"
    edge_width: float = 0.15
    arrow_scale_factor: float = 0.5
    smooth_type: str = "continuous"
    tooltip_delay_ms: int = 200
    hide_edges_on_drag: bool = True
    stabilization: bool = False
    gravitational_constant: float = -10000
    spring_constant: float = 0.002
    spring_length: float = 150

    def to_vis_options(self) -> dict[str, Any]:
        """Nested options object in vis-network's shape."""
        return {
            "nodes": {
                "shape": self.node_shape,
                "font": {"face": self.font_face},
            },
            "edges": {
                "width": self.edge_width,
                "arrows": {"to": {"scaleFactor": self.arrow_scale_factor}},
                "smooth": {"type": self.smooth_type},
            },
            "interaction": {
                "tooltipDelay": self.tooltip_delay_ms,
                "hideEdgesOnDrag": self.hide_edges_on_drag,
            },
            "physics": {
                "stabilization": self.stabilization,
                "barnesHut": {
                    "gravitationalConstant": self.gravitational_constant,
                    "springConstant": self.spring_constant,
                    "springLength": self.spring_length,
                },
            },
        }


class RenderEngine(Protocol):
    """Force-directed rendering surface — implemented outside the core."""
    def bind(
        self,
        nodes: Mapping[ElementId, Node],
        edges: Mapping[ElementId, Edge],
        options: RenderOptions,
        on_click: ClickHandler,
    ) -> None: ...

    def fit(self) -> None: ...
