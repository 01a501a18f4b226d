"""Tests for LaneAllocator bookkeeping."""

import pytest

from lanegraph.graph.allocator import LaneAllocator


class TestAllocation:
    def test_new_lanes_are_sequential(self):
        allocator = LaneAllocator()

        assert [allocator.allocate() for _ in range(3)] == [0, 1, 2]
        assert allocator.width == 3

    def test_smallest_free_lane_is_reused_first(self):
        allocator = LaneAllocator()
        for _ in range(4):
            allocator.allocate()

        allocator.release(3)
        allocator.release(1)

        assert allocator.free_lanes == {1, 3}
        assert allocator.allocate() == 1
        assert allocator.allocate() == 3
        assert allocator.allocate() == 4

    def test_double_release_is_harmless(self):
        allocator = LaneAllocator()
        allocator.allocate()

        allocator.release(0)
        allocator.release(0)

        assert allocator.allocate() == 0
        assert allocator.allocate() == 1


class TestPromises:
    def test_acquire_takes_promised_lane(self):
        allocator = LaneAllocator()
        lane, was_pending = allocator.acquire("child")
        allocator.promise("parent", lane)

        assert allocator.is_promised(lane)
        assert allocator.acquire("parent") == (0, True)
        assert not allocator.is_promised(0)

    def test_fresh_commit_gets_new_lane(self):
        allocator = LaneAllocator()
        allocator.promise("parent", allocator.allocate())

        assert allocator.acquire("stranger") == (1, False)

    def test_repromise_holds_old_lane_until_parent(self):
        allocator = LaneAllocator()
        allocator.allocate()
        allocator.promise("parent", allocator.allocate())  # lane 1
        allocator.release(0)

        lane, _ = allocator.acquire("child")
        allocator.repromise("parent", lane)

        assert allocator.pending == {"parent": 0}
        assert allocator.in_flight() == {0, 1}
        allocator.check_consistency()

        assert allocator.acquire("parent") == (0, True)
        assert allocator.free_lanes == {1}

    def test_blank_hold_is_not_in_flight(self):
        allocator = LaneAllocator()
        allocator.promise("parent", allocator.allocate())
        allocator.hold("parent", allocator.allocate(), drawn=False)

        assert allocator.in_flight() == {0}
        allocator.check_consistency()

    def test_child_lanes_are_taken_once(self):
        allocator = LaneAllocator()
        allocator.add_child("p", 2)
        allocator.add_child("p", 0)

        assert allocator.take_child_lanes("p") == (2, 0)
        assert allocator.take_child_lanes("p") == ()


class TestConsistency:
    def test_unaccounted_lane_is_reported(self):
        allocator = LaneAllocator()
        allocator.allocate()

        with pytest.raises(AssertionError, match="unaccounted"):
            allocator.check_consistency()

    def test_shared_lane_is_reported(self):
        allocator = LaneAllocator()
        lane = allocator.allocate()
        allocator.promise("a", lane)
        allocator.pending["b"] = lane

        with pytest.raises(AssertionError, match="share a lane"):
            allocator.check_consistency()

    def test_lane_both_held_and_free_is_reported(self):
        allocator = LaneAllocator()
        lane = allocator.allocate()
        allocator.hold("p", lane, drawn=True)
        allocator.release(lane)

        with pytest.raises(AssertionError, match="owned twice"):
            allocator.check_consistency()
