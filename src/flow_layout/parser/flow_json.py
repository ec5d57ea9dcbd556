"""Reader and writer for JSON flow definitions.

Accepts either a bare definition (``{"nodes": [...], "edges": [...]}``)
or an update-request style wrapper holding it under ``flowDefinition``.
Output always uses the wrapper shape with an ``autoLayout`` flag, which
is what the flow service expects after positions have been recomputed.
"""

from __future__ import annotations

import json
from typing import Any

from flow_layout.errors import FlowDefinitionError
from flow_layout.parser.model import EdgeType, FlowEdge, FlowGraph, FlowNode, NodeType

_NODE_KEYS = {"id", "type", "displayName", "position", "width", "height"}
_EDGE_KEYS = {"id", "source", "target", "type"}


def parse_flow_definition(text: str) -> FlowGraph:
    """Parse a JSON flow definition.

    Raises FlowDefinitionError on malformed JSON, missing node ids or
    edge endpoints, unknown node/edge types and duplicate node ids.
    """
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise FlowDefinitionError(f"Invalid JSON: {e}") from e
    if not isinstance(doc, dict):
        raise FlowDefinitionError("Flow definition must be a JSON object")

    envelope: dict[str, Any] = {}
    definition = doc
    if "flowDefinition" in doc:
        definition = doc["flowDefinition"]
        if not isinstance(definition, dict):
            raise FlowDefinitionError("'flowDefinition' must be a JSON object")
        envelope = {k: v for k, v in doc.items() if k not in ("flowDefinition", "autoLayout")}

    graph = FlowGraph(
        name=str(envelope.get("name", definition.get("name", ""))),
        auto_layout=bool(doc.get("autoLayout", False)),
        extra={k: v for k, v in definition.items() if k not in ("nodes", "edges", "autoLayout")},
        envelope=envelope,
    )

    for i, raw in enumerate(definition.get("nodes") or []):
        graph.add_node(_parse_node(raw, i))
    for i, raw in enumerate(definition.get("edges") or []):
        graph.add_edge(_parse_edge(raw, i))

    return graph


def _parse_node(raw: Any, index: int) -> FlowNode:
    if not isinstance(raw, dict) or raw.get("id") in (None, ""):
        raise FlowDefinitionError(f"Node #{index} has no 'id'")
    type_name = raw.get("type", NodeType.REQUEST.value)
    try:
        node_type = NodeType(type_name)
    except ValueError:
        valid = ", ".join(t.value for t in NodeType)
        raise FlowDefinitionError(
            f"Node '{raw['id']}' has invalid type '{type_name}' (must be one of: {valid})"
        ) from None

    position = raw.get("position") or {}
    try:
        x = int(position.get("x", 0))
        y = int(position.get("y", 0))
        width = int(raw["width"]) if raw.get("width") is not None else None
        height = int(raw["height"]) if raw.get("height") is not None else None
    except (TypeError, ValueError, AttributeError):
        raise FlowDefinitionError(f"Node '{raw['id']}' has an invalid position or size") from None

    return FlowNode(
        id=str(raw["id"]),
        type=node_type,
        display_name=str(raw.get("displayName", "")),
        x=x,
        y=y,
        width=width,
        height=height,
        extra={k: v for k, v in raw.items() if k not in _NODE_KEYS},
    )


def _parse_edge(raw: Any, index: int) -> FlowEdge:
    if not isinstance(raw, dict) or any(raw.get(k) in (None, "") for k in ("source", "target")):
        raise FlowDefinitionError(f"Edge #{index} needs both 'source' and 'target'")
    type_name = raw.get("type", EdgeType.SUCCESS.value)
    try:
        edge_type = EdgeType(type_name)
    except ValueError:
        raise FlowDefinitionError(
            f"Edge {raw['source']} -> {raw['target']} has invalid type '{type_name}' "
            "(must be 'success' or 'failure')"
        ) from None
    return FlowEdge(
        source=str(raw["source"]),
        target=str(raw["target"]),
        type=edge_type,
        id=raw.get("id"),
        extra={k: v for k, v in raw.items() if k not in _EDGE_KEYS},
    )


def dump_flow_definition(graph: FlowGraph) -> str:
    """Serialize a flow graph as an update request with current positions."""
    definition: dict[str, Any] = dict(graph.extra)
    definition["nodes"] = [_dump_node(node) for node in graph.nodes.values()]
    definition["edges"] = [_dump_edge(edge) for edge in graph.edges]

    doc: dict[str, Any] = dict(graph.envelope)
    doc["flowDefinition"] = definition
    doc["autoLayout"] = graph.auto_layout
    return json.dumps(doc, indent=2) + "\n"


def _dump_node(node: FlowNode) -> dict[str, Any]:
    out: dict[str, Any] = {"id": node.id, "type": node.type.value}
    if node.display_name:
        out["displayName"] = node.display_name
    out["position"] = {"x": node.x, "y": node.y}
    if node.width is not None:
        out["width"] = node.width
    if node.height is not None:
        out["height"] = node.height
    out.update(node.extra)
    return out


def _dump_edge(edge: FlowEdge) -> dict[str, Any]:
    out: dict[str, Any] = {}
    if edge.id is not None:
        out["id"] = edge.id
    out["source"] = edge.source
    out["target"] = edge.target
    out["type"] = edge.type.value
    out.update(edge.extra)
    return out
