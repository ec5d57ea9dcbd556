"""Horizontal ordering within levels.

Rows are laid out left-to-right with a fixed pitch, centered on the
canvas. Non-root rows are reordered by the barycenter (average
predecessor x) heuristic to reduce edge crossings.
"""

from __future__ import annotations

__all__ = ["minimize_crossings", "row_start_x"]

import logging

import networkx as nx

from flow_layout.layout.constants import MIN_LEFT_MARGIN
from flow_layout.layout.model import Canvas, Position

_log = logging.getLogger(__name__)


def row_start_x(count: int, canvas: Canvas) -> int:
    """X of the first node in a centered row of *count* nodes.

    Clamped to MIN_LEFT_MARGIN so narrow canvases never produce
    negative coordinates.
    """
    total_width = count * canvas.node_width + (count - 1) * canvas.padding_x
    return max((canvas.width - total_width) // 2, MIN_LEFT_MARGIN)


def _predecessor_avg(node: str, G: nx.DiGraph, positions: dict[str, Position]) -> float | None:
    """Average x of a node's already-placed predecessors."""
    xs = [positions[p].x for p in G.predecessors(node) if p in positions]
    if not xs:
        return None
    return sum(xs) / len(xs)


def minimize_crossings(
    positions: dict[str, Position],
    G: nx.DiGraph,
    level_groups: dict[int, list[str]],
    canvas: Canvas,
    logger: logging.Logger | None = None,
) -> None:
    """Reorder every non-root level by predecessor barycenter.

    Levels are processed in ascending order, so each level sees the
    already-reordered x positions of the rows above it. Nodes without
    placed predecessors keep their own x as score; ties keep the current
    order. The level lists in *level_groups* are overwritten with the new
    order and x positions reassigned with the centered row spacing.
    """
    log = logger or _log

    for level in sorted(level_groups):
        if level == 0:
            continue
        nodes = level_groups[level]

        scores: dict[str, float] = {}
        for node in nodes:
            avg = _predecessor_avg(node, G, positions)
            scores[node] = avg if avg is not None else float(positions[node].x)

        ordered = sorted(nodes, key=lambda n: scores[n])
        if ordered != nodes:
            log.debug("Level %d reordered: %s", level, ordered)
        level_groups[level] = ordered

        start_x = row_start_x(len(ordered), canvas)
        for i, node in enumerate(ordered):
            positions[node] = Position(start_x + i * canvas.pitch_x, positions[node].y)
