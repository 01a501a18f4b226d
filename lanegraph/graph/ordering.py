"""
Topological ordering of commit records.

The lane layout needs every commit to appear before all of its parents.
Commits arrive unordered, or as several independently ordered streams (one
per repository), so they are re-sorted here with Kahn's algorithm. Among
commits that are free to go next, the newest timestamp wins.
"""

import heapq
import logging
from collections.abc import Hashable, Iterable
from itertools import chain
from typing import Any

from lanegraph.graph.types import CommitRecord, IdT

logger = logging.getLogger(__name__)


class GraphIntegrityError(ValueError):
    """Raised when some commits can never be emitted (the input has a cycle)."""

    def __init__(self, missing: list[Hashable]) -> None:
        self.missing = missing
        preview = ", ".join(repr(m) for m in missing[:5])
        if len(missing) > 5:
            preview += ", ..."
        super().__init__(f"{len(missing)} commit(s) are part of a cycle: {preview}")


class _NewestFirst:
    """Heap key that puts newer timestamps first and missing timestamps last."""

    __slots__ = ("timestamp",)

    def __init__(self, timestamp: Any) -> None:
        self.timestamp = timestamp

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _NewestFirst):
            return NotImplemented
        return bool(self.timestamp == other.timestamp)

    def __lt__(self, other: "_NewestFirst") -> bool:
        if self.timestamp is None:
            return False
        if other.timestamp is None:
            return True
        return bool(self.timestamp > other.timestamp)


def _unique(records: Iterable[CommitRecord[IdT]]) -> dict[IdT, CommitRecord[IdT]]:
    by_id: dict[IdT, CommitRecord[IdT]] = {}
    duplicates = 0
    for record in records:
        if record.id in by_id:
            duplicates += 1
            continue
        by_id[record.id] = record
    if duplicates:
        logger.debug("Dropped %d duplicate commit record(s)", duplicates)
    return by_id


def topological_sort(
    records: Iterable[CommitRecord[IdT]], *, strict: bool = True
) -> list[CommitRecord[IdT]]:
    """
    Order commits so that every child comes before its parents.

    Args:
        records: Commit records in any order. Parents that are not part of
            the collection (older history) are ignored.
        strict: Raise GraphIntegrityError when some commits cannot be
            emitted. With strict=False a warning is logged and the partial
            order is returned.

    Returns:
        The records in display order, newest first where the DAG allows.
    """
    by_id = _unique(records)
    if not by_id:
        return []

    # Count children inside the set only
    child_count: dict[IdT, int] = dict.fromkeys(by_id, 0)
    for record in by_id.values():
        for parent_id in record.parent_ids:
            if parent_id in child_count:
                child_count[parent_id] += 1

    # Input position breaks timestamp ties, so ids never need to be orderable
    position = {commit_id: index for index, commit_id in enumerate(by_id)}

    ready: list[tuple[_NewestFirst, int, IdT]] = [
        (_NewestFirst(record.timestamp), position[commit_id], commit_id)
        for commit_id, record in by_id.items()
        if child_count[commit_id] == 0
    ]
    heapq.heapify(ready)

    ordered: list[CommitRecord[IdT]] = []
    while ready:
        _, _, commit_id = heapq.heappop(ready)
        record = by_id[commit_id]
        ordered.append(record)

        for parent_id in record.parent_ids:
            if parent_id not in child_count:
                continue
            child_count[parent_id] -= 1
            if child_count[parent_id] == 0:
                parent = by_id[parent_id]
                heapq.heappush(ready, (_NewestFirst(parent.timestamp), position[parent_id], parent_id))

    if len(ordered) < len(by_id):
        emitted = {record.id for record in ordered}
        missing = [commit_id for commit_id in by_id if commit_id not in emitted]
        if strict:
            raise GraphIntegrityError(missing)
        logger.warning("%d commit(s) left out of the ordering (cycle in input)", len(missing))

    logger.debug("Ordered %d commits", len(ordered))
    return ordered


def merge_streams(
    *streams: Iterable[CommitRecord[IdT]], strict: bool = True
) -> list[CommitRecord[IdT]]:
    """Combine commit streams from several sources into one display order."""
    return topological_sort(chain.from_iterable(streams), strict=strict)
