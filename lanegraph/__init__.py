"""lanegraph - lane layout for revision graphs."""

from lanegraph.graph import (
    CommitRecord,
    GraphIntegrityError,
    GraphLayout,
    LaneLayoutEngine,
    LayoutRow,
    compute_layout,
    merge_streams,
    topological_sort,
)

__all__ = [
    "CommitRecord",
    "GraphIntegrityError",
    "GraphLayout",
    "LaneLayoutEngine",
    "LayoutRow",
    "compute_layout",
    "merge_streams",
    "topological_sort",
]
