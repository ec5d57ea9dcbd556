"""Structural checks on a flow definition before it is laid out."""

from __future__ import annotations

from flow_layout.errors import CyclicGraphError
from flow_layout.layout.layers import assign_levels
from flow_layout.parser.model import FlowGraph


def validate_flow(graph: FlowGraph) -> list[str]:
    """Return human-readable problems with *graph*; empty when it can be laid out."""
    errors: list[str] = []

    seen: set[tuple[str, str]] = set()
    for edge in graph.edges:
        if edge.source not in graph.nodes:
            errors.append(f"Edge {edge.source} -> {edge.target} references unknown source node '{edge.source}'")
        if edge.target not in graph.nodes:
            errors.append(f"Edge {edge.source} -> {edge.target} references unknown target node '{edge.target}'")
        pair = (edge.source, edge.target)
        if pair in seen:
            errors.append(f"Duplicate edge {edge.source} -> {edge.target}")
        seen.add(pair)

    try:
        assign_levels(graph.node_ids(), graph.layout_edges())
    except CyclicGraphError as e:
        errors.append(str(e))

    return errors
