"""Domain Types — identifiers, reserved Gephi fields and fixed panel strings.

Invariants:
    - ElementId is a string or a finite number; bool is never an id
    - Reserved field sets are the only fields stripped from attribute bags
    - Panel strings are fixed: tests and browser shells compare them verbatim

Design Decisions:
    - frozenset constants over per-call literals: one definition shared by
      the adapter and its tests
"""

from typing import Union


# ─── Identity Types ──────────────────────────────────────────────

ElementId = Union[str, int, float]


# ─── Constants ───────────────────────────────────────────────────

DEFAULT_GRAPH_PATH = "data/graph.json"

DETAILS_PROMPT = "Click a node or edge to view details"
DETAILS_LOAD_FAILED = "Failed to load graph."

# same output as JSON.stringify(value, undefined, 3) in the browser
DETAILS_INDENT = 3

NODE_RESERVED_FIELDS = frozenset({
    "id", "label", "x", "y", "z", "size", "color", "title", "fixed", "attributes",
})
EDGE_RESERVED_FIELDS = frozenset({
    "id", "source", "target", "label", "title", "type", "color", "size",
    "weight", "attributes",
})

DIRECTED_EDGE_TYPE = "directed"
