"""
Load a unified graph from one or more commit sources.

Each source is read in full, the records are merged into a single
children-before-parents order, and the result is laid out. Hosts are
expected to run this off their interactive thread and drop the result if
the sources changed in the meantime.
"""

import logging
from typing import Any

from lanegraph.config.settings import Settings
from lanegraph.graph.layout import compute_layout
from lanegraph.graph.ordering import merge_streams
from lanegraph.graph.types import CommitRecord, CommitSource, GraphLayout

logger = logging.getLogger(__name__)


def load_layout(
    *sources: CommitSource, settings: Settings | None = None
) -> tuple[list[CommitRecord[Any]], GraphLayout[Any]]:
    """Read, order and lay out commits from every source.

    Returns the ordered records together with their layout; the record at
    index i is drawn on row i.
    """
    strict = settings.get_strict_ordering() if settings is not None else True

    streams = [list(source.iter_records()) for source in sources]
    commits = merge_streams(*streams, strict=strict)
    layout = compute_layout(commits)

    logger.debug(
        "Merged %d commits from %d source(s) into %d lanes",
        len(commits),
        len(streams),
        layout.width,
    )
    return commits, layout
