"""Flow definition model and JSON codec."""

from flow_layout.parser.flow_json import dump_flow_definition, parse_flow_definition
from flow_layout.parser.model import EdgeType, FlowEdge, FlowGraph, FlowNode, NodeType

__all__ = [
    "EdgeType",
    "FlowEdge",
    "FlowGraph",
    "FlowNode",
    "NodeType",
    "dump_flow_definition",
    "parse_flow_definition",
]
