"""Level assignment for flow layout (Y-coordinate rows).

Uses longest-path layering on a topological sort so that every edge
points downward: a node sits at least one row below its deepest
predecessor.
"""

from __future__ import annotations

__all__ = ["assign_levels", "build_digraph", "group_by_level", "levels_from_digraph"]

import logging
from collections.abc import Iterable, Sequence

import networkx as nx

from flow_layout.errors import CyclicGraphError
from flow_layout.layout.model import Edge

_log = logging.getLogger(__name__)


def build_digraph(
    node_ids: Sequence[str],
    edges: Iterable[Edge],
    logger: logging.Logger | None = None,
) -> nx.DiGraph:
    """Build a DiGraph over *node_ids*, keeping input order.

    Edges whose source or target is not one of *node_ids* are dropped,
    so they never influence levels or ordering.
    """
    log = logger or _log
    G = nx.DiGraph()
    G.add_nodes_from(node_ids)
    for edge in edges:
        if edge.source not in G or edge.target not in G:
            log.debug("Ignoring edge %s -> %s with unknown endpoint", edge.source, edge.target)
            continue
        G.add_edge(edge.source, edge.target)
    return G


def assign_levels(
    node_ids: Sequence[str],
    edges: Iterable[Edge],
    logger: logging.Logger | None = None,
) -> dict[str, int]:
    """Assign each node to a level (integer row).

    Uses longest-path layering: nodes without incoming edges are level 0,
    every other node is 1 + the maximum level of its predecessors. Edges
    touching unknown ids are ignored, as if they were not there.

    Raises CyclicGraphError if the edges form a cycle.

    Returns a dict mapping node_id -> level, in input node order.
    """
    return levels_from_digraph(build_digraph(node_ids, edges, logger))


def levels_from_digraph(G: nx.DiGraph) -> dict[str, int]:
    """Longest-path levels for a graph built by build_digraph()."""
    try:
        cycle = nx.find_cycle(G)
    except nx.NetworkXNoCycle:
        cycle = None
    if cycle:
        raise CyclicGraphError([(src, tgt) for src, tgt in cycle])

    computed: dict[str, int] = {}
    for node in nx.topological_sort(G):
        preds = list(G.predecessors(node))
        if not preds:
            computed[node] = 0
        else:
            computed[node] = max(computed[p] for p in preds) + 1

    return {nid: computed[nid] for nid in G.nodes}


def group_by_level(node_ids: Sequence[str], levels: dict[str, int]) -> dict[int, list[str]]:
    """Partition node ids by level.

    Lists keep the input node order; keys are in ascending level order.
    """
    groups: dict[int, list[str]] = {}
    for nid in node_ids:
        groups.setdefault(levels.get(nid, 0), []).append(nid)
    return {level: groups[level] for level in sorted(groups)}
