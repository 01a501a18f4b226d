"""Scene geometry - maps layout rows and lanes to pixel positions."""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from lanegraph.config.settings import Settings
from lanegraph.constants import (
    DEFAULT_COLUMN_WIDTH,
    DEFAULT_LANE_COLORS,
    DEFAULT_PADDING,
    DEFAULT_ROW_HEIGHT,
)
from lanegraph.graph.palette import get_lane_color
from lanegraph.graph.types import CommitRecord, GraphLayout

Point = tuple[float, float]


@dataclass(frozen=True)
class Edge:
    """A child to parent connection, ready to be drawn.

    COORDINATE SYSTEM NOTE:
    Children are above their parents, so start.y < end.y. The edge leaves
    the child, reaches its travel lane at `corner` one row down, runs
    straight down that lane and enters the parent at `end`.
    """

    child_id: Any
    parent_id: Any
    start: Point
    corner: Point
    end: Point
    # Lane the edge runs down; also picks its color
    lane: int


@dataclass(frozen=True)
class GraphGeometry:
    """Fixed-size grid: one column per lane, one row per commit."""

    column_width: float = DEFAULT_COLUMN_WIDTH
    row_height: float = DEFAULT_ROW_HEIGHT
    padding: float = DEFAULT_PADDING
    palette: tuple[str, ...] = tuple(DEFAULT_LANE_COLORS)

    @classmethod
    def from_settings(cls, settings: Settings) -> "GraphGeometry":
        return cls(
            column_width=float(settings.get("geometry.column_width", DEFAULT_COLUMN_WIDTH)),
            row_height=float(settings.get("geometry.row_height", DEFAULT_ROW_HEIGHT)),
            padding=float(settings.get("geometry.padding", DEFAULT_PADDING)),
            palette=tuple(settings.get_lane_colors()),
        )

    def node_pos(self, row: int, lane: int) -> Point:
        """Get the position of a node's center."""
        x = self.padding + lane * self.column_width + self.column_width / 2
        y = self.padding + row * self.row_height + self.row_height / 2
        return (x, y)

    def lane_color(self, lane: int) -> str:
        return get_lane_color(lane, self.palette)

    def scene_size(self, layout: GraphLayout[Any]) -> tuple[float, float]:
        """Width and height of the scene, padding included."""
        num_columns = max(layout.width, 1)
        width = num_columns * self.column_width + 2 * self.padding
        height = len(layout) * self.row_height + 2 * self.padding
        return (width, height)

    def iter_edges(
        self, commits: Sequence[CommitRecord[Any]], layout: GraphLayout[Any]
    ) -> Iterator[Edge]:
        """Yield every edge whose parent is inside the layout."""
        for commit in commits:
            child = layout.get(commit.id)
            if child is None:
                continue
            for parent_id, lane in zip(commit.parent_ids, child.parent_lanes):
                if lane is None:
                    continue
                parent = layout[parent_id]
                yield Edge(
                    child_id=commit.id,
                    parent_id=parent_id,
                    start=self.node_pos(child.row, child.lane),
                    corner=self.node_pos(child.row + 1, lane),
                    end=self.node_pos(parent.row, parent.lane),
                    lane=lane,
                )
