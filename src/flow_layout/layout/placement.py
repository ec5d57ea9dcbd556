"""Incremental placement of a single new node into an existing layout.

Unlike compute_layout(), this never moves existing nodes: the new node is
put next to its source connections (or next to the rightmost node) and
slid downward until it no longer collides with anything.
"""

from __future__ import annotations

__all__ = ["format_position", "new_node_id", "place_new_node"]

import logging
import uuid
from collections.abc import Iterable, Sequence

from flow_layout.layout.collisions import is_position_occupied
from flow_layout.layout.constants import TOP_OFFSET
from flow_layout.layout.model import Canvas, NodePlacement, Position

_log = logging.getLogger(__name__)


def place_new_node(
    existing_nodes: Sequence[NodePlacement],
    connected_from: Iterable[str] = (),
    canvas: Canvas | None = None,
    logger: logging.Logger | None = None,
) -> Position:
    """Choose a position for a new node given the nodes that point to it.

    Args:
        existing_nodes: Already-placed nodes; never modified.
        connected_from: IDs of nodes with an edge into the new node.
            IDs not found among *existing_nodes* are skipped.
        canvas: Sizing and padding; defaults to Canvas().
        logger: Optional logger for placement decisions.

    Returns the top-left position for the new node.
    """
    log = logger or _log
    canvas = canvas or Canvas()

    if not existing_nodes:
        return Position(canvas.width // 2, TOP_OFFSET)

    by_id = {node.id: node for node in existing_nodes}
    occupied = [node.position for node in existing_nodes]
    step = canvas.node_height + canvas.padding_y // 2

    sources = [by_id[nid].position for nid in connected_from if nid in by_id]
    if sources:
        avg_x = sum(p.x for p in sources) // len(sources)
        avg_y = sum(p.y for p in sources) // len(sources)
        x = avg_x + canvas.pitch_x
        y = avg_y
        log.debug("Placing new node right of %d source(s) at avg (%d, %d)", len(sources), avg_x, avg_y)
    else:
        max_x = max([0] + [p.x for p in occupied])
        x = max_x + canvas.pitch_x
        y = TOP_OFFSET
        log.debug("Placing new node right of rightmost node at x=%d", max_x)

    while is_position_occupied(Position(x, y), occupied, canvas):
        y += step

    return Position(x, y)


def new_node_id() -> str:
    """Generate an identifier for a new node or edge."""
    return str(uuid.uuid4())


def format_position(pos: Position) -> str:
    return f"({pos.x}, {pos.y})"
