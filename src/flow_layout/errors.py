"""Exceptions raised by flow-layout."""

from __future__ import annotations


class FlowLayoutError(Exception):
    """Base class for all flow-layout errors."""


class CyclicGraphError(FlowLayoutError, ValueError):
    """The edge set contains a cycle, so no layered layout exists.

    ``cycle`` lists the offending edges as ``(source, target)`` pairs in
    traversal order.
    """

    def __init__(self, cycle: list[tuple[str, str]]) -> None:
        self.cycle = cycle
        path = " -> ".join([src for src, _ in cycle] + [cycle[0][0]]) if cycle else ""
        super().__init__(f"Flow graph contains a cycle: {path}")


class FlowDefinitionError(FlowLayoutError, ValueError):
    """A flow definition document could not be read."""
