"""Overlap detection and best-effort separation of nodes within a level."""

from __future__ import annotations

__all__ = ["check_collision", "is_position_occupied", "resolve_collisions"]

import logging
from collections.abc import Iterable

from flow_layout.layout.constants import MAX_COLLISION_PASSES
from flow_layout.layout.model import Canvas, Position

_log = logging.getLogger(__name__)


def check_collision(a: Position, b: Position, canvas: Canvas) -> bool:
    """Whether two node boxes are closer than the collision threshold on both axes.

    The threshold is the node size plus half the configured padding.
    """
    return (
        abs(a.x - b.x) < canvas.node_width + canvas.padding_x // 2
        and abs(a.y - b.y) < canvas.node_height + canvas.padding_y // 2
    )


def is_position_occupied(candidate: Position, occupied: Iterable[Position], canvas: Canvas) -> bool:
    return any(check_collision(candidate, pos, canvas) for pos in occupied)


def resolve_collisions(
    positions: dict[str, Position],
    level_groups: dict[int, list[str]],
    canvas: Canvas,
    max_passes: int = MAX_COLLISION_PASSES,
    logger: logging.Logger | None = None,
) -> int:
    """Push colliding same-level nodes apart along the x-axis.

    Each pass checks every unordered pair within each level. A colliding
    pair is re-centered on its midpoint, half a pitch to either side.
    Stops after the first pass with no collisions, or after *max_passes*
    passes with whatever overlap remains.

    Mutates *positions* in place and returns the number of passes run.
    """
    log = logger or _log
    half_pitch = canvas.pitch_x // 2
    passes = 0

    for _ in range(max_passes):
        passes += 1
        collisions = 0

        for level in sorted(level_groups):
            nodes = level_groups[level]
            for i in range(len(nodes)):
                for j in range(i + 1, len(nodes)):
                    pos1 = positions[nodes[i]]
                    pos2 = positions[nodes[j]]
                    if not check_collision(pos1, pos2, canvas):
                        continue
                    collisions += 1
                    midpoint = (pos1.x + pos2.x) // 2
                    positions[nodes[i]] = Position(midpoint - half_pitch, pos1.y)
                    positions[nodes[j]] = Position(midpoint + half_pitch, pos2.y)

        if not collisions:
            break
        log.debug("Collision pass %d separated %d pair(s)", passes, collisions)
    else:
        log.debug("Collision passes exhausted after %d; accepting residual overlap", passes)

    return passes
