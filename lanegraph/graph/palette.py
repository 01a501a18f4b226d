"""Lane colors."""

from collections.abc import Sequence

from lanegraph.constants import DEFAULT_LANE_COLORS

LANE_COLORS = DEFAULT_LANE_COLORS


def get_lane_color(lane: int, palette: Sequence[str] | None = None) -> str:
    """Get color for a lane/column.

    The same lane always maps to the same color, so a branch keeps its
    color while it occupies a lane. A recycled lane reuses the color.
    """
    colors = palette or LANE_COLORS
    return colors[lane % len(colors)]
