"""Gephi Adapter — converts a Gephi JSON document into node/edge records.

Invariants:
    - parse() returns exactly one record per source entry (duplicates included;
      the store applies last-write-wins)
    - Attribute bag = source object minus reserved fields, merged with the
      nested "attributes" object when present (nested entries win)
    - Any malformed entry fails the whole document with ParseError; nothing
      partial is ever returned
    - Pure: no IO, input document is never mutated

Design Decisions:
    - Field mapping follows the vis.js Gephi parser (from/to on the engine side,
      "Directed" edge type → arrow, fixed only when both x and y are present)
    - parse_color=False leaves colors to the engine's default styling instead
      of copying them through
    - label/title always reach the engine as text: numbers and other JSON
      values are rendered as their JSON text
"""

import json
import math
from dataclasses import dataclass
from typing import Any

from bomviz.core.domain_types import (
    DIRECTED_EDGE_TYPE,
    EDGE_RESERVED_FIELDS,
    NODE_RESERVED_FIELDS,
    ElementId,
)
from bomviz.core.errors import ParseError
from bomviz.core.graph_records import Edge, Node, ParsedGraph


@dataclass(frozen=True)
class GephiParseOptions:
    """Adapter switches, mirroring the vis.js parseGephi options."""
    fixed: bool = False
    parse_color: bool = False
    inherit_color: bool = False


def parse(document: Any, options: GephiParseOptions | None = None) -> ParsedGraph:
    """Adapt a parsed Gephi document. Raises ParseError on any malformed entry."""
    options = options or GephiParseOptions()
    if not isinstance(document, dict):
        raise ParseError("document must be a JSON object")

    raw_nodes = _require_list(document, "nodes", required=True)
    raw_edges = _require_list(document, "edges", required=False)

    nodes = [_parse_node(raw, i, options) for i, raw in enumerate(raw_nodes)]
    edges = [_parse_edge(raw, i, options) for i, raw in enumerate(raw_edges)]
    return ParsedGraph(nodes=nodes, edges=edges)


def attribute_bag(raw: dict, reserved: frozenset[str]) -> dict[str, Any]:
    """Free-form metadata of a source entry: everything but reserved fields."""
    bag = {key: value for key, value in raw.items() if key not in reserved}
    nested = raw.get("attributes")
    if nested is None:
        return bag
    if not isinstance(nested, dict):
        raise ParseError("attributes must be a JSON object")
    bag.update(nested)
    return bag


def expand_color(color: Any) -> Any:
    """Expand a flat color string into the engine's per-state color object."""
    if not isinstance(color, str):
        return color
    return {
        "background": color,
        "border": color,
        "highlight": {"background": color, "border": color},
        "hover": {"background": color, "border": color},
    }


# ─── Entry Parsers ───────────────────────────────────────────────

def _parse_node(raw: Any, index: int, options: GephiParseOptions) -> Node:
    _require_object(raw, "nodes", index)
    node_id = _require_id(raw, "id", "nodes", index)
    x = _optional_number(raw, "x", "nodes", index)
    y = _optional_number(raw, "y", "nodes", index)
    try:
        bag = attribute_bag(raw, NODE_RESERVED_FIELDS)
    except ParseError as e:
        raise ParseError(e.reason, "nodes", index) from e

    return Node(
        id=node_id,
        label=_display_text(raw.get("label")),
        x=x,
        y=y,
        size=_optional_number(raw, "size", "nodes", index),
        color=expand_color(raw.get("color")) if options.parse_color else None,
        title=_title(raw),
        fixed=options.fixed and x is not None and y is not None,
        attributes=bag,
    )


def _parse_edge(raw: Any, index: int, options: GephiParseOptions) -> Edge:
    _require_object(raw, "edges", index)
    edge_id = _require_id(raw, "id", "edges", index)
    source = _require_id(raw, "source", "edges", index)
    target = _require_id(raw, "target", "edges", index)
    try:
        bag = attribute_bag(raw, EDGE_RESERVED_FIELDS)
    except ParseError as e:
        raise ParseError(e.reason, "edges", index) from e

    edge_type = raw.get("type")
    directed = isinstance(edge_type, str) and edge_type.lower() == DIRECTED_EDGE_TYPE
    keep_color = options.parse_color and not options.inherit_color

    return Edge(
        id=edge_id,
        source=source,
        target=target,
        label=_display_text(raw.get("label")),
        title=_title(raw),
        arrows="to" if directed else None,
        color=raw.get("color") if keep_color else None,
        attributes=bag,
    )


# ─── Field Helpers ───────────────────────────────────────────────

def _require_list(document: dict, key: str, required: bool) -> list:
    if key not in document:
        if required:
            raise ParseError(f"missing top-level '{key}' array")
        return []
    value = document[key]
    if not isinstance(value, list):
        raise ParseError(f"top-level '{key}' must be an array")
    return value


def _require_object(raw: Any, element: str, index: int) -> None:
    if not isinstance(raw, dict):
        raise ParseError("entry must be a JSON object", element, index)


def _require_id(raw: dict, key: str, element: str, index: int) -> ElementId:
    value = raw.get(key)
    if value is None:
        raise ParseError(f"missing '{key}'", element, index)
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ParseError(f"'{key}' must be a string or number", element, index)
    if isinstance(value, float) and not math.isfinite(value):
        raise ParseError(f"'{key}' must be a finite number", element, index)
    return value


def _optional_number(raw: dict, key: str, element: str, index: int) -> float | None:
    value = raw.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ParseError(f"'{key}' must be a number", element, index)
    return value


def _title(raw: dict) -> str | None:
    nested = raw.get("attributes")
    if isinstance(nested, dict) and nested.get("title") is not None:
        return _display_text(nested["title"])
    return _display_text(raw.get("title"))


def _display_text(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, default=str)
