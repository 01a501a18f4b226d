"""Commit ordering and lane layout."""

from lanegraph.graph.layout import LaneLayoutEngine, compute_layout
from lanegraph.graph.ordering import GraphIntegrityError, merge_streams, topological_sort
from lanegraph.graph.types import CommitRecord, CommitSource, GraphLayout, LayoutRow

__all__ = [
    "CommitRecord",
    "CommitSource",
    "GraphIntegrityError",
    "GraphLayout",
    "LaneLayoutEngine",
    "LayoutRow",
    "compute_layout",
    "merge_streams",
    "topological_sort",
]
