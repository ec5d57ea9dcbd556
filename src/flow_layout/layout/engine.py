"""Layout coordinator: combines level assignment, collision handling,
crossing reduction and canvas centering.

Pipeline for one graph:
  1. Level assignment (longest path)
  2. Level grouping (input order)
  3. Initial positions (one centered row per level)
  4. Collision resolution
  5. Crossing minimization (barycenter)
  6. Canvas centering
"""

from __future__ import annotations

__all__ = ["compute_layout", "center_on_canvas", "initial_positions"]

import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace

from flow_layout.layout.collisions import resolve_collisions
from flow_layout.layout.constants import TOP_OFFSET
from flow_layout.layout.layers import build_digraph, group_by_level, levels_from_digraph
from flow_layout.layout.model import Canvas, Edge, NodePlacement, Position
from flow_layout.layout.ordering import minimize_crossings, row_start_x

_log = logging.getLogger(__name__)


def compute_layout(
    nodes: Sequence[NodePlacement],
    edges: Iterable[Edge],
    canvas: Canvas | None = None,
    logger: logging.Logger | None = None,
) -> list[NodePlacement]:
    """Compute positions for every node of a flow graph.

    The input list is not modified; a new list of placements in the same
    order is returned with ``position`` filled in.

    Raises CyclicGraphError if the edges form a cycle.
    """
    log = logger or _log
    canvas = canvas or Canvas()
    if not nodes:
        return []

    node_ids = [n.id for n in nodes]

    G = build_digraph(node_ids, edges, logger=log)
    levels = levels_from_digraph(G)
    level_groups = group_by_level(node_ids, levels)
    log.debug("Assigned %d node(s) to %d level(s)", len(node_ids), len(level_groups))

    positions = initial_positions(level_groups, canvas)

    passes = resolve_collisions(positions, level_groups, canvas, logger=log)
    log.debug("Collision resolution finished after %d pass(es)", passes)

    minimize_crossings(positions, G, level_groups, canvas, logger=log)

    center_on_canvas(positions, canvas)

    return [replace(node, position=positions[node.id]) for node in nodes]


def initial_positions(level_groups: dict[int, list[str]], canvas: Canvas) -> dict[str, Position]:
    """Place each level on its own centered row, top to bottom."""
    positions: dict[str, Position] = {}
    for level in sorted(level_groups):
        ids = level_groups[level]
        y = TOP_OFFSET + level * canvas.pitch_y
        start_x = row_start_x(len(ids), canvas)
        for i, nid in enumerate(ids):
            positions[nid] = Position(start_x + i * canvas.pitch_x, y)
    return positions


def center_on_canvas(positions: dict[str, Position], canvas: Canvas) -> None:
    """Translate all positions so their bounding box is centered on the canvas."""
    if not positions:
        return

    min_x = min(p.x for p in positions.values())
    max_x = max(p.x for p in positions.values())
    min_y = min(p.y for p in positions.values())
    max_y = max(p.y for p in positions.values())

    graph_width = max_x - min_x + canvas.node_width
    graph_height = max_y - min_y + canvas.node_height
    offset_x = (canvas.width - graph_width) // 2
    offset_y = (canvas.height - graph_height) // 2

    for nid, pos in positions.items():
        positions[nid] = Position(pos.x - min_x + offset_x, pos.y - min_y + offset_y)
