"""Tests for scene geometry and lane colors."""

from lanegraph.config.settings import Settings
from lanegraph.graph.geometry import GraphGeometry
from lanegraph.graph.layout import compute_layout
from lanegraph.graph.palette import LANE_COLORS, get_lane_color
from lanegraph.graph.types import CommitRecord


def entry(commit_id, parent_ids=()):
    return CommitRecord(commit_id, tuple(parent_ids))


class TestLaneColors:
    def test_same_lane_same_color(self):
        assert get_lane_color(3) == get_lane_color(3) == LANE_COLORS[3]

    def test_colors_cycle_after_palette_exhausted(self):
        assert get_lane_color(len(LANE_COLORS)) == get_lane_color(0)

    def test_custom_palette(self):
        palette = ["#111111", "#222222"]

        assert get_lane_color(0, palette) == "#111111"
        assert get_lane_color(3, palette) == "#222222"


class TestGeometry:
    def test_node_pos_is_cell_center(self):
        geometry = GraphGeometry()

        assert geometry.node_pos(0, 0) == (180, 115)
        assert geometry.node_pos(2, 1) == (440, 375)

    def test_from_settings(self, tmp_path):
        settings = Settings(tmp_path / "s.json")
        settings.set("geometry.column_width", 20)
        settings.set("geometry.row_height", 10)
        settings.set("geometry.padding", 0)

        geometry = GraphGeometry.from_settings(settings)

        assert geometry.node_pos(1, 1) == (30, 15)

    def test_lane_color_from_settings(self, tmp_path):
        settings = Settings(tmp_path / "s.json")
        settings.set("palette.colors", ["#111111", "#222222"])

        geometry = GraphGeometry.from_settings(settings)

        assert geometry.lane_color(0) == "#111111"
        assert geometry.lane_color(3) == "#222222"

    def test_default_lane_color(self):
        assert GraphGeometry().lane_color(2) == LANE_COLORS[2]

    def test_scene_size(self):
        geometry = GraphGeometry(column_width=10, row_height=20, padding=5)
        layout = compute_layout([entry("M", ["L", "R"]), entry("L"), entry("R")])

        assert geometry.scene_size(layout) == (30, 70)

    def test_scene_size_of_empty_layout_has_one_column(self):
        geometry = GraphGeometry(column_width=10, row_height=20, padding=5)

        assert geometry.scene_size(compute_layout([])) == (20, 10)


class TestEdges:
    def test_merge_edges(self):
        geometry = GraphGeometry(column_width=10, row_height=10, padding=0)
        commits = [entry("M", ["L", "R"]), entry("L"), entry("R")]
        layout = compute_layout(commits)

        edges = list(geometry.iter_edges(commits, layout))

        assert [(e.child_id, e.parent_id, e.lane) for e in edges] == [("M", "L", 0), ("M", "R", 1)]
        to_r = edges[1]
        assert to_r.start == (5, 5)
        assert to_r.corner == (15, 15)
        assert to_r.end == (15, 25)
        assert to_r.start[1] < to_r.end[1]

    def test_missing_parents_have_no_edge(self):
        geometry = GraphGeometry()
        commits = [entry("C", ["gone"])]

        assert list(geometry.iter_edges(commits, compute_layout(commits))) == []
