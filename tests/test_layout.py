"""Tests for the full layout pipeline."""

import logging

import pytest

from flow_layout.errors import CyclicGraphError
from flow_layout.layout import Canvas, Edge, NodePlacement, Position, compute_layout
from flow_layout.layout.collisions import check_collision, resolve_collisions
from flow_layout.layout.constants import MAX_COLLISION_PASSES, MIN_LEFT_MARGIN
from flow_layout.layout.engine import center_on_canvas, initial_positions
from flow_layout.layout.layers import build_digraph
from flow_layout.layout.ordering import minimize_crossings, row_start_x


def _nodes(*ids):
    return [NodePlacement(id=nid) for nid in ids]


def _edges(*pairs):
    return [Edge(src, tgt) for src, tgt in pairs]


def _by_id(placements):
    return {p.id: p.position for p in placements}


def _assert_centered(positions, canvas):
    xs = [p.x for p in positions]
    ys = [p.y for p in positions]
    left = min(xs)
    right = canvas.width - (max(xs) + canvas.node_width)
    top = min(ys)
    bottom = canvas.height - (max(ys) + canvas.node_height)
    assert abs(left - right) <= 1
    assert abs(top - bottom) <= 1


# --- Full pipeline ---


def test_empty_graph():
    assert compute_layout([], []) == []


def test_linear_chain_one_row_per_level():
    placements = compute_layout(
        _nodes("a", "b", "c", "d"),
        _edges(("a", "b"), ("b", "c"), ("c", "d")),
    )
    pos = _by_id(placements)
    # Single-node rows are centered: (2000 - 220) // 2
    assert {p.x for p in pos.values()} == {890}
    assert [pos[n].y for n in "abcd"] == [190, 370, 550, 730]


def test_diamond_layout():
    placements = compute_layout(
        _nodes("a", "b", "c", "d"),
        _edges(("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")),
    )
    pos = _by_id(placements)
    assert pos["a"] == Position(890, 280)
    assert pos["b"] == Position(750, 460)
    assert pos["c"] == Position(1030, 460)
    assert pos["d"] == Position(890, 640)


def test_disconnected_nodes_single_centered_row():
    canvas = Canvas()
    placements = compute_layout(_nodes("n1", "n2", "n3", "n4", "n5"), [], canvas)
    xs = [p.position.x for p in placements]
    ys = {p.position.y for p in placements}

    assert len(ys) == 1
    assert xs == [330, 610, 890, 1170, 1450]
    assert all(b - a == canvas.node_width + canvas.padding_x for a, b in zip(xs, xs[1:]))
    _assert_centered([p.position for p in placements], canvas)

    for i, a in enumerate(placements):
        for b in placements[i + 1:]:
            assert not check_collision(a.position, b.position, canvas)


def test_result_keeps_input_order_and_leaves_input_untouched():
    nodes = _nodes("c", "a", "b")
    placements = compute_layout(nodes, _edges(("a", "b")))
    assert [p.id for p in placements] == ["c", "a", "b"]
    assert all(n.position == Position(0, 0) for n in nodes)
    assert placements[0] is not nodes[0]


def test_node_sizes_are_carried_through():
    nodes = [NodePlacement(id="a", width=300, height=50)]
    placements = compute_layout(nodes, [])
    assert placements[0].width == 300
    assert placements[0].height == 50


def test_layout_is_deterministic():
    nodes = _nodes("a", "b", "c", "d", "e", "f")
    edges = _edges(("a", "c"), ("b", "c"), ("a", "d"), ("d", "e"), ("c", "f"), ("b", "f"))
    assert compute_layout(nodes, edges) == compute_layout(nodes, edges)


def test_layout_is_centered_on_canvas():
    canvas = Canvas(width=3000, height=1500)
    placements = compute_layout(
        _nodes("a", "b", "c", "d", "e"),
        _edges(("a", "b"), ("a", "c"), ("a", "d"), ("d", "e")),
        canvas,
    )
    _assert_centered([p.position for p in placements], canvas)


def test_edges_point_downward():
    edges = _edges(("a", "b"), ("b", "c"), ("a", "c"), ("c", "d"), ("b", "d"))
    pos = _by_id(compute_layout(_nodes("a", "b", "c", "d"), edges))
    for edge in edges:
        assert pos[edge.target].y > pos[edge.source].y


def test_crossing_minimizer_follows_parent_order():
    """Children listed in reverse parent order are swapped back under their parents."""
    pos = _by_id(compute_layout(
        _nodes("r1", "r2", "c2", "c1"),
        _edges(("r1", "c1"), ("r2", "c2")),
    ))
    assert pos["r1"].x < pos["r2"].x
    assert pos["c1"].x < pos["c2"].x


def test_cycle_is_reported():
    with pytest.raises(CyclicGraphError):
        compute_layout(_nodes("a", "b"), _edges(("a", "b"), ("b", "a")))


def test_explicit_logger_receives_stage_messages(caplog):
    log = logging.getLogger("test.flow_layout")
    with caplog.at_level(logging.DEBUG, logger="test.flow_layout"):
        compute_layout(_nodes("a", "b"), _edges(("a", "b")), logger=log)
    assert any("level" in r.getMessage() for r in caplog.records)
    assert all(r.name == "test.flow_layout" for r in caplog.records)


# --- Stages ---


def test_initial_positions_rows_and_pitch():
    canvas = Canvas()
    positions = initial_positions({0: ["a"], 1: ["b", "c"]}, canvas)
    assert positions["a"] == Position(890, 100)
    assert positions["b"] == Position(750, 280)
    assert positions["c"] == Position(1030, 280)


def test_initial_positions_clamped_on_narrow_canvas():
    canvas = Canvas(width=500)
    positions = initial_positions({0: ["a", "b", "c"]}, canvas)
    assert positions["a"].x == MIN_LEFT_MARGIN
    assert positions["c"].x == MIN_LEFT_MARGIN + 2 * canvas.pitch_x


def test_row_start_x_centers_row():
    canvas = Canvas()
    assert row_start_x(1, canvas) == 890
    assert row_start_x(2, canvas) == 750


def test_resolve_collisions_separates_pair():
    canvas = Canvas()
    positions = {"a": Position(100, 100), "b": Position(150, 100)}
    passes = resolve_collisions(positions, {0: ["a", "b"]}, canvas)
    assert positions["a"] == Position(-15, 100)
    assert positions["b"] == Position(265, 100)
    assert not check_collision(positions["a"], positions["b"], canvas)
    assert passes == 2


def test_resolve_collisions_no_overlap_single_pass():
    canvas = Canvas()
    positions = initial_positions({0: ["a", "b", "c"]}, canvas)
    before = dict(positions)
    assert resolve_collisions(positions, {0: ["a", "b", "c"]}, canvas) == 1
    assert positions == before


def test_resolve_collisions_only_compares_same_level():
    canvas = Canvas()
    positions = {"a": Position(100, 100), "b": Position(100, 100)}
    resolve_collisions(positions, {0: ["a"], 1: ["b"]}, canvas)
    assert positions["a"] == positions["b"] == Position(100, 100)


def test_resolve_collisions_stops_at_pass_cap_deterministically():
    canvas = Canvas()
    ids = [f"n{i}" for i in range(8)]
    start = {nid: Position(500, 100) for nid in ids}

    first = dict(start)
    second = dict(start)
    passes = resolve_collisions(first, {0: ids}, canvas)
    resolve_collisions(second, {0: ids}, canvas)

    assert passes == MAX_COLLISION_PASSES
    assert first == second


def test_resolve_collisions_respects_max_passes():
    canvas = Canvas()
    ids = ["a", "b", "c"]
    positions = {nid: Position(500, 100) for nid in ids}
    assert resolve_collisions(positions, {0: ids}, canvas, max_passes=1) == 1


def test_minimize_crossings_rewrites_level_order():
    canvas = Canvas()
    groups = {0: ["r1", "r2"], 1: ["c2", "c1"]}
    positions = initial_positions(groups, canvas)
    G = build_digraph(["r1", "r2", "c2", "c1"], _edges(("r1", "c1"), ("r2", "c2")))
    minimize_crossings(positions, G, groups, canvas)
    assert groups[1] == ["c1", "c2"]
    assert groups[0] == ["r1", "r2"]
    assert positions["c1"].x < positions["c2"].x


def test_minimize_crossings_ties_keep_order():
    canvas = Canvas()
    groups = {0: ["a"], 1: ["b", "c", "d"]}
    positions = initial_positions(groups, canvas)
    G = build_digraph(["a", "b", "c", "d"], _edges(("a", "b"), ("a", "c"), ("a", "d")))
    minimize_crossings(positions, G, groups, canvas)
    assert groups[1] == ["b", "c", "d"]


def test_center_on_canvas():
    canvas = Canvas()
    positions = {"a": Position(0, 0), "b": Position(500, 300)}
    center_on_canvas(positions, canvas)
    assert positions["a"] == Position(640, 310)
    assert positions["b"] == Position(1140, 610)
    _assert_centered(positions.values(), canvas)


def test_center_on_canvas_empty():
    positions = {}
    center_on_canvas(positions, Canvas())
    assert positions == {}


def test_canvas_from_options_skips_none():
    canvas = Canvas.from_options(width=800, height=None)
    assert canvas.width == 800
    assert canvas.height == Canvas().height


def test_canvas_from_options_rejects_unknown():
    with pytest.raises(TypeError):
        Canvas.from_options(depth=3)
