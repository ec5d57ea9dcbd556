"""Value types consumed and produced by the layout engine."""

from __future__ import annotations

from dataclasses import dataclass, field, fields

from flow_layout.layout.constants import (
    CANVAS_HEIGHT,
    CANVAS_WIDTH,
    NODE_HEIGHT,
    NODE_WIDTH,
    PADDING_X,
    PADDING_Y,
)


@dataclass(frozen=True)
class Position:
    """A 2D integer coordinate (top-left corner of a node box)."""

    x: int
    y: int


@dataclass
class NodePlacement:
    """A node with its box size and (possibly not yet computed) position."""

    id: str
    position: Position = field(default_factory=lambda: Position(0, 0))
    width: int = NODE_WIDTH
    height: int = NODE_HEIGHT


@dataclass(frozen=True)
class Edge:
    """A directed connection between two nodes."""

    source: str
    target: str


@dataclass(frozen=True)
class Canvas:
    """Coordinate space and sizing/padding used by a layout run."""

    width: int = CANVAS_WIDTH
    height: int = CANVAS_HEIGHT
    node_width: int = NODE_WIDTH
    node_height: int = NODE_HEIGHT
    padding_x: int = PADDING_X
    padding_y: int = PADDING_Y

    @classmethod
    def from_options(cls, **overrides: int | None) -> Canvas:
        """Build a canvas from keyword overrides, skipping ``None`` values.

        Unknown keys raise ``TypeError`` like the dataclass constructor.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown canvas option(s): {', '.join(sorted(unknown))}")
        return cls(**{k: v for k, v in overrides.items() if v is not None})

    @property
    def pitch_x(self) -> int:
        """Horizontal distance between the left edges of adjacent nodes."""
        return self.node_width + self.padding_x

    @property
    def pitch_y(self) -> int:
        """Vertical distance between the top edges of adjacent levels."""
        return self.node_height + self.padding_y
