"""Data model for flow definition documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from flow_layout.errors import FlowDefinitionError
from flow_layout.layout.model import Canvas, Edge, NodePlacement, Position
from flow_layout.layout.placement import new_node_id


class NodeType(Enum):
    """Kind of step a flow node performs."""

    REQUEST = "request"
    DELAY = "delay"
    START = "start"
    END = "end"


class EdgeType(Enum):
    """Which outcome of the source node follows an edge."""

    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class FlowNode:
    """A step in a flow."""

    id: str
    type: NodeType = NodeType.REQUEST
    display_name: str = ""
    x: int = 0
    y: int = 0
    # Box size; None means the canvas default
    width: int | None = None
    height: int | None = None
    # Document fields not interpreted by layout (request data, delay duration, ...)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def position(self) -> Position:
        return Position(self.x, self.y)


@dataclass
class FlowEdge:
    """A success/failure transition between two nodes."""

    source: str
    target: str
    type: EdgeType = EdgeType.SUCCESS
    id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass
class FlowGraph:
    """Complete flow definition."""

    name: str = ""
    nodes: dict[str, FlowNode] = field(default_factory=dict)
    edges: list[FlowEdge] = field(default_factory=list)
    auto_layout: bool = False
    # Definition fields other than nodes/edges, kept for round trips
    extra: dict[str, Any] = field(default_factory=dict)
    # Fields of the request wrapping the definition (everything but flowDefinition/autoLayout)
    envelope: dict[str, Any] = field(default_factory=dict)

    def add_node(self, node: FlowNode) -> None:
        if node.id in self.nodes:
            raise FlowDefinitionError(f"Duplicate node id '{node.id}'")
        self.nodes[node.id] = node

    def add_edge(self, edge: FlowEdge) -> None:
        self.edges.append(edge)

    def connect(self, source: str, target: str, edge_type: EdgeType = EdgeType.SUCCESS) -> FlowEdge:
        """Add a new edge between two existing nodes.

        Raises FlowDefinitionError if either node is unknown or the
        source/target pair is already connected.
        """
        if source not in self.nodes:
            raise FlowDefinitionError(f"Source node not found: {source}")
        if target not in self.nodes:
            raise FlowDefinitionError(f"Target node not found: {target}")
        for edge in self.edges:
            if edge.source == source and edge.target == target:
                raise FlowDefinitionError(f"Edge already exists from {source} to {target}")
        edge = FlowEdge(source=source, target=target, type=edge_type, id=new_node_id())
        self.add_edge(edge)
        return edge

    def node_ids(self) -> list[str]:
        return list(self.nodes)

    def layout_edges(self) -> list[Edge]:
        return [Edge(e.source, e.target) for e in self.edges]

    def placements(self, canvas: Canvas | None = None) -> list[NodePlacement]:
        """Node boxes in document order, sized from the canvas where unset."""
        canvas = canvas or Canvas()
        return [
            NodePlacement(
                id=node.id,
                position=node.position,
                width=node.width if node.width is not None else canvas.node_width,
                height=node.height if node.height is not None else canvas.node_height,
            )
            for node in self.nodes.values()
        ]

    def apply_placements(self, placements: list[NodePlacement]) -> None:
        """Copy computed positions back onto the document's nodes.

        Placements for unknown IDs are ignored.
        """
        for placement in placements:
            node = self.nodes.get(placement.id)
            if node:
                node.x = placement.position.x
                node.y = placement.position.y
