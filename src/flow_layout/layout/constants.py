"""Layout constants used across layout modules.

Centralizes the canvas defaults and the magic numbers of the layered
placement pipeline (engine.py, collisions.py, placement.py).
"""

# ---------------------------------------------------------------------------
# Canvas defaults
# ---------------------------------------------------------------------------
CANVAS_WIDTH: int = 2000
"""Overall canvas width."""

CANVAS_HEIGHT: int = 1000
"""Overall canvas height."""

NODE_WIDTH: int = 220
"""Fixed width of a node box."""

NODE_HEIGHT: int = 80
"""Fixed height of a node box."""

PADDING_X: int = 60
"""Minimum horizontal gap between neighbouring nodes in a level."""

PADDING_Y: int = 100
"""Minimum vertical gap between levels."""

# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------
TOP_OFFSET: int = 100
"""Y coordinate of level 0, and of the first slot tried for a new node."""

MIN_LEFT_MARGIN: int = 100
"""Lower bound for the first x of a centered row on narrow canvases."""

MAX_COLLISION_PASSES: int = 10
"""Upper bound on collision resolver relaxation passes."""
