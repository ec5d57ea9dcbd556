"""Layered placement engine for flow graphs.

Public API:
- compute_layout: Full pipeline ("lay out this whole graph")
- place_new_node: Incremental placement of a single node
- Canvas, Edge, NodePlacement, Position: Engine value types
"""

from flow_layout.layout.engine import compute_layout
from flow_layout.layout.model import Canvas, Edge, NodePlacement, Position
from flow_layout.layout.placement import format_position, new_node_id, place_new_node

__all__ = [
    "Canvas",
    "Edge",
    "NodePlacement",
    "Position",
    "compute_layout",
    "format_position",
    "new_node_id",
    "place_new_node",
]
