"""CLI for flow-layout."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from flow_layout import __version__
from flow_layout.errors import FlowLayoutError
from flow_layout.layout import Canvas, compute_layout, format_position, new_node_id, place_new_node
from flow_layout.layout.layers import assign_levels, group_by_level
from flow_layout.parser import (
    EdgeType,
    FlowGraph,
    FlowNode,
    NodeType,
    dump_flow_definition,
    parse_flow_definition,
)
from flow_layout.validate import validate_flow

_log = logging.getLogger(__name__)


def _load(input_file: Path) -> FlowGraph:
    try:
        return parse_flow_definition(input_file.read_text())
    except FlowLayoutError as e:
        click.echo(f"Parse error: {e}", err=True)
        raise SystemExit(1)


def _write(graph: FlowGraph, output: Path) -> None:
    output.write_text(dump_flow_definition(graph))


@click.group()
@click.version_option(version=__version__)
@click.option("-v", "--verbose", count=True, help="Log progress (-v) or layout details (-vv)")
def cli(verbose: int) -> None:
    """flow-layout: Compute node positions for API-test flow graphs."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG if verbose > 1 else logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Output JSON file path. Defaults to <input>_layout.json")
@click.option("--width", type=click.IntRange(min=1), default=None, help="Canvas width (default: 2000)")
@click.option("--height", type=click.IntRange(min=1), default=None, help="Canvas height (default: 1000)")
@click.option("--node-width", type=click.IntRange(min=1), default=None,
              help="Node box width (default: 220)")
@click.option("--node-height", type=click.IntRange(min=1), default=None,
              help="Node box height (default: 80)")
@click.option("--padding-x", type=click.IntRange(min=0), default=None,
              help="Horizontal gap between nodes (default: 60)")
@click.option("--padding-y", type=click.IntRange(min=0), default=None,
              help="Vertical gap between levels (default: 100)")
def layout(
    input_file: Path,
    output: Path | None,
    width: int | None,
    height: int | None,
    node_width: int | None,
    node_height: int | None,
    padding_x: int | None,
    padding_y: int | None,
) -> None:
    """Lay out every node of a flow definition."""
    canvas = Canvas.from_options(
        width=width,
        height=height,
        node_width=node_width,
        node_height=node_height,
        padding_x=padding_x,
        padding_y=padding_y,
    )
    graph = _load(input_file)

    try:
        placements = compute_layout(graph.placements(canvas), graph.layout_edges(), canvas)
    except FlowLayoutError as e:
        click.echo(f"Layout error: {e}", err=True)
        raise SystemExit(1)

    graph.apply_placements(placements)
    graph.auto_layout = True

    if output is None:
        output = input_file.with_name(input_file.stem + "_layout.json")
    _write(graph, output)
    _log.info("Wrote %d node position(s) to %s", len(placements), output)

    levels = {p.position.y for p in placements}
    click.echo(f"Laid out {len(graph.nodes)} nodes, "
               f"{len(graph.edges)} edges, "
               f"{len(levels)} levels -> {output}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
@click.option("--from", "sources", multiple=True,
              help="ID of a node that connects to the new node (repeatable)")
@click.option("--name", default="", help="Display name of the new node")
@click.option("--type", "node_type", type=click.Choice(["request", "delay"]), default="request",
              help="Node type (default: request)")
@click.option("--edge-type", type=click.Choice([t.value for t in EdgeType]), default="success",
              help="Type of the edges created from --from nodes (default: success)")
@click.option("-o", "--output", type=click.Path(path_type=Path), default=None,
              help="Write the updated definition to this file")
@click.option("--width", type=click.IntRange(min=1), default=None, help="Canvas width (default: 2000)")
@click.option("--height", type=click.IntRange(min=1), default=None, help="Canvas height (default: 1000)")
@click.option("--node-width", type=click.IntRange(min=1), default=None,
              help="Node box width (default: 220)")
@click.option("--node-height", type=click.IntRange(min=1), default=None,
              help="Node box height (default: 80)")
@click.option("--padding-x", type=click.IntRange(min=0), default=None,
              help="Horizontal gap between nodes (default: 60)")
@click.option("--padding-y", type=click.IntRange(min=0), default=None,
              help="Vertical gap between levels (default: 100)")
def place(
    input_file: Path,
    sources: tuple[str, ...],
    name: str,
    node_type: str,
    edge_type: str,
    output: Path | None,
    width: int | None,
    height: int | None,
    node_width: int | None,
    node_height: int | None,
    padding_x: int | None,
    padding_y: int | None,
) -> None:
    """Add one node next to its connections without moving existing nodes."""
    canvas = Canvas.from_options(
        width=width,
        height=height,
        node_width=node_width,
        node_height=node_height,
        padding_x=padding_x,
        padding_y=padding_y,
    )
    graph = _load(input_file)
    sources = tuple(dict.fromkeys(sources))

    missing = [sid for sid in sources if sid not in graph.nodes]
    if missing:
        click.echo(f"Source node not found: {', '.join(missing)}", err=True)
        raise SystemExit(1)

    position = place_new_node(graph.placements(canvas), sources, canvas)
    node = FlowNode(
        id=new_node_id(),
        type=NodeType(node_type),
        display_name=name,
        x=position.x,
        y=position.y,
    )
    graph.add_node(node)
    for sid in sources:
        graph.connect(sid, node.id, EdgeType(edge_type))

    click.echo(f"Node added: {node.id} at {format_position(position)}")

    if output is not None:
        _write(graph, output)
        click.echo(f"Wrote {output}")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def validate(input_file: Path) -> None:
    """Validate that a flow definition can be laid out."""
    graph = _load(input_file)

    errors = validate_flow(graph)
    if errors:
        click.echo("Validation errors:", err=True)
        for err in errors:
            click.echo(f"  - {err}", err=True)
        raise SystemExit(1)

    click.echo(f"Valid: {len(graph.nodes)} nodes, {len(graph.edges)} edges")


@cli.command()
@click.argument("input_file", type=click.Path(exists=True, path_type=Path))
def info(input_file: Path) -> None:
    """Show nodes of a flow definition grouped by level."""
    graph = _load(input_file)

    click.echo(f"Name: {graph.name or '(none)'}")
    click.echo(f"Nodes: {len(graph.nodes)}")
    click.echo(f"Edges: {len(graph.edges)}")

    try:
        levels = assign_levels(graph.node_ids(), graph.layout_edges())
    except FlowLayoutError as e:
        click.echo(f"Levels: unavailable ({e})")
        return

    groups = group_by_level(graph.node_ids(), levels)
    click.echo(f"Levels: {len(groups)}")
    for level, ids in groups.items():
        names = [graph.nodes[nid].display_name or nid for nid in ids]
        click.echo(f"  [{level}] {', '.join(names)}")
