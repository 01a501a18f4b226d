"""Lane bookkeeping for a single layout pass."""

import heapq
from dataclasses import dataclass
from typing import Generic

from lanegraph.graph.types import IdT


@dataclass
class HeldLane:
    """A lane kept out of the free set until its parent's row is reached."""

    lane: int
    # True while an edge is still drawn down the lane
    drawn: bool


class LaneAllocator(Generic[IdT]):
    """
    Owns every lane of one layout pass.

    Between two commits each lane below `next_new_lane` is in exactly one
    place: promised to a pending parent, held for a parent, or free. The
    lane of the commit being placed is the only one outside these sets, and
    only until the commit is finished.

    A new allocator must be used for every pass.
    """

    def __init__(self) -> None:
        self.pending: dict[IdT, int] = {}
        self.next_new_lane = 0
        self.child_lanes: dict[IdT, list[int]] = {}
        self._free: list[int] = []  # min-heap
        self._free_set: set[int] = set()
        self._promised_to: dict[int, IdT] = {}
        self._held: dict[IdT, list[HeldLane]] = {}

    @property
    def free_lanes(self) -> set[int]:
        return set(self._free_set)

    @property
    def width(self) -> int:
        """Number of lanes allocated so far."""
        return self.next_new_lane

    def allocate(self) -> int:
        """Take the smallest free lane, or open a new one."""
        if self._free:
            lane = heapq.heappop(self._free)
            self._free_set.discard(lane)
            return lane
        lane = self.next_new_lane
        self.next_new_lane += 1
        return lane

    def release(self, lane: int) -> None:
        if lane in self._free_set:
            return
        self._free_set.add(lane)
        heapq.heappush(self._free, lane)

    def acquire(self, commit_id: IdT) -> tuple[int, bool]:
        """
        Get the lane for a commit about to be placed.

        Returns (lane, was_pending). A commit that a child already pointed to
        takes the promised lane; anything else is a fresh tip and gets a new
        one. Lanes held for this commit are freed, since the edges they
        carry end at this row.
        """
        for held in self._held.pop(commit_id, []):
            self.release(held.lane)

        if commit_id in self.pending:
            lane = self.pending.pop(commit_id)
            del self._promised_to[lane]
            return lane, True
        return self.allocate(), False

    def in_flight(self) -> set[int]:
        """Lanes with an edge passing down through the current row."""
        lanes = set(self.pending.values())
        for held_lanes in self._held.values():
            lanes.update(held.lane for held in held_lanes if held.drawn)
        return lanes

    def is_promised(self, lane: int) -> bool:
        return lane in self._promised_to

    def promise(self, parent_id: IdT, lane: int) -> None:
        self.pending[parent_id] = lane
        self._promised_to[lane] = parent_id

    def repromise(self, parent_id: IdT, lane: int) -> None:
        """
        Move a pending parent onto a lane further left.

        The lane it leaves still carries the earlier child's edge, so it is
        held (drawn) until the parent's row.
        """
        old_lane = self.pending[parent_id]
        del self._promised_to[old_lane]
        self.promise(parent_id, lane)
        self.hold(parent_id, old_lane, drawn=True)

    def hold(self, parent_id: IdT, lane: int, drawn: bool) -> None:
        self._held.setdefault(parent_id, []).append(HeldLane(lane, drawn))

    def add_child(self, parent_id: IdT, child_lane: int) -> None:
        self.child_lanes.setdefault(parent_id, []).append(child_lane)

    def take_child_lanes(self, commit_id: IdT) -> tuple[int, ...]:
        return tuple(self.child_lanes.pop(commit_id, ()))

    def check_consistency(self) -> None:
        """Assert the lane partition invariant. Only valid between commits."""
        pending = list(self.pending.values())
        held = [h.lane for held_lanes in self._held.values() for h in held_lanes]
        if len(set(pending)) != len(pending):
            raise AssertionError(f"Two parents share a lane: {self.pending}")
        owned = pending + held + list(self._free_set)
        if len(set(owned)) != len(owned):
            raise AssertionError(
                f"Lane owned twice: pending={pending} held={held} free={sorted(self._free_set)}"
            )
        if set(owned) != set(range(self.next_new_lane)):
            raise AssertionError(
                f"Lanes unaccounted for: {set(range(self.next_new_lane)) - set(owned)}"
            )
        if self._promised_to != {lane: parent for parent, lane in self.pending.items()}:
            raise AssertionError("Promise index out of sync with pending")
