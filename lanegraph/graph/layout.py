"""
Lane layout for an ordered commit sequence.

The layout is a single forward pass. Each commit either takes the lane a
child already promised to it or opens a fresh one, then promises lanes to
its own parents: the first parent continues the commit's lane so the main
line of history stays straight, and every further (merge) parent gets a
lane of its own. A parent with several children ends up on the leftmost
of their lanes.
"""

import logging
from collections.abc import Sequence

from lanegraph.graph.allocator import LaneAllocator
from lanegraph.graph.types import CommitRecord, GraphLayout, IdT, LayoutRow

logger = logging.getLogger(__name__)


class LaneLayoutEngine:
    """Computes lane layouts. Holds no state between calls."""

    def __init__(self, check_invariants: bool = False) -> None:
        # Verifies the allocator after every commit; meant for tests
        self.check_invariants = check_invariants

    def layout(self, commits: Sequence[CommitRecord[IdT]]) -> GraphLayout[IdT]:
        """
        Lay out commits given children-before-parents order.

        Args:
            commits: Ordered commit records, e.g. from topological_sort().

        Returns:
            A GraphLayout with one row per commit, in input order.
        """
        allocator: LaneAllocator[IdT] = LaneAllocator()
        row_of: dict[IdT, int] = {}
        for index, commit in enumerate(commits):
            row_of.setdefault(commit.id, index)

        rows: list[LayoutRow[IdT]] = []
        for index, commit in enumerate(commits):
            rows.append(self.place(allocator, commit, index, row_of))
            if self.check_invariants:
                allocator.check_consistency()

        logger.debug("Laid out %d commits across %d lanes", len(rows), allocator.width)
        return GraphLayout(rows, allocator.width)

    def place(
        self,
        allocator: LaneAllocator[IdT],
        commit: CommitRecord[IdT],
        row: int,
        row_of: dict[IdT, int],
    ) -> LayoutRow[IdT]:
        """Place one commit and update the allocator for the rows below it."""
        lane, was_pending = allocator.acquire(commit.id)
        child_lanes = allocator.take_child_lanes(commit.id)

        # Snapshot before this commit's parents add their own promises
        pass_through = frozenset(allocator.in_flight() - {lane})

        parent_lanes: list[int | None] = []
        visible_parents: list[IdT] = []
        for position, parent_id in enumerate(commit.parent_ids):
            # Parents not below this row are outside the loaded window
            if row_of.get(parent_id, -1) <= row:
                parent_lanes.append(None)
                continue

            promised = allocator.pending.get(parent_id)
            if promised is None:
                if position == 0 and not allocator.is_promised(lane):
                    parent_lane = lane
                else:
                    parent_lane = allocator.allocate()
                allocator.promise(parent_id, parent_lane)
            elif lane < promised and not allocator.is_promised(lane):
                allocator.repromise(parent_id, lane)
                parent_lane = lane
            else:
                parent_lane = promised

            parent_lanes.append(parent_lane)
            visible_parents.append(parent_id)
            allocator.add_child(parent_id, lane)

        if not allocator.is_promised(lane):
            self._retire(allocator, lane, was_pending, visible_parents)

        return LayoutRow(
            id=commit.id,
            row=row,
            lane=lane,
            parent_lanes=tuple(parent_lanes),
            pass_through_lanes=pass_through,
            child_lanes=child_lanes,
        )

    def _retire(
        self,
        allocator: LaneAllocator[IdT],
        lane: int,
        was_pending: bool,
        visible_parents: list[IdT],
    ) -> None:
        """Decide what happens to a lane that no parent continues."""
        if not visible_parents or was_pending:
            # Branch ends here, or it diagonals into another lane
            allocator.release(lane)
        else:
            # A fresh tip merging elsewhere keeps its lane until the parent
            # row so that consecutive sibling tips do not stack on one lane
            allocator.hold(visible_parents[0], lane, drawn=False)


def compute_layout(commits: Sequence[CommitRecord[IdT]]) -> GraphLayout[IdT]:
    """Lay out an ordered commit sequence with a fresh engine."""
    return LaneLayoutEngine().layout(commits)
