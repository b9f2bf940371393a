"""Tests for the tracer module."""

from lanegraph.renderer import Canvas
from lanegraph.tracer import CharacterPlacement, PipelineStage, RenderTrace


def placement(x, y, char, step, previous=" "):
    return CharacterPlacement(x=x, y=y, char=char, previous_char=previous, step=step)


class TestCharacterPlacement:
    """Tests for CharacterPlacement."""

    def test_edge_index_from_step(self):
        assert placement(0, 0, "─", "routed_edge#12").edge_index == 12
        assert placement(0, 0, "─", "forward_edge#0").edge_index == 0

    def test_box_has_no_edge_index(self):
        assert placement(0, 0, "┌", "box:A").edge_index is None

    def test_box_label_with_hash(self):
        """Test that a '#' inside a label is not read as an edge index."""
        assert placement(0, 0, "x", "box:task#3").edge_index is None

    def test_crossing(self):
        assert placement(2, 4, "┼", "routed_edge#4", previous="─").is_crossing
        assert not placement(2, 4, "│", "routed_edge#4").is_crossing

    def test_str(self):
        assert str(placement(10, 5, "│", "routed_edge#2")) == "(10,5) '│' by routed_edge#2"
        crossing = placement(3, 4, "┼", "routed_edge#4", previous="─")
        assert str(crossing) == "(3,4) '─' -> '┼' by routed_edge#4"


class TestPipelineStage:
    """Tests for PipelineStage."""

    def test_describe_data_and_canvas(self):
        stage = PipelineStage("boxes_drawn", {"boxes": 1}, ["┌───┐", "│ A │", "└───┘"])
        assert stage.describe() == [
            "[boxes_drawn]",
            "  boxes = 1",
            "  |┌───┐|",
            "  |│ A │|",
            "  |└───┘|",
        ]

    def test_describe_truncates_long_values(self):
        stage = PipelineStage("layout", {"box_x": list(range(100))})
        line = stage.describe(max_value_len=20)[1]
        assert line == "  box_x = " + repr(list(range(100)))[:20] + "..."


class TestRenderTrace:
    """Tests for RenderTrace."""

    def test_record_stage_copies_data(self):
        trace = RenderTrace()
        data = {"edge_count": 2}
        trace.record_stage("parse", data)
        data["edge_count"] = 99
        assert trace.stage("parse").data == {"edge_count": 2}
        assert trace.stage("parse").canvas is None

    def test_record_stage_renders_canvas(self):
        trace = RenderTrace()
        canvas = Canvas(3, 2)
        canvas.set(0, 0, "X")
        trace.record_stage("boxes_drawn", {}, canvas)
        assert trace.canvas_after("boxes_drawn") == ["X"]

    def test_blank_canvas_is_empty_list(self):
        trace = RenderTrace()
        trace.record_stage("canvas_created", {}, Canvas(3, 2))
        assert trace.canvas_after("canvas_created") == []

    def test_missing_stage(self):
        trace = RenderTrace()
        assert trace.stage("layout") is None
        assert trace.canvas_after("layout") is None

    def test_queries(self):
        trace = RenderTrace()
        trace.record_placement(placement(1, 1, "─", "forward_edge#0"))
        trace.record_placement(placement(2, 4, "─", "routed_edge#3"))
        trace.record_placement(placement(2, 4, "┼", "routed_edge#4", previous="─"))
        trace.record_placement(placement(2, 5, "│", "routed_edge#4"))

        assert len(trace.placements_at(2, 4)) == 2
        assert [p.char for p in trace.crossings()] == ["┼"]
        assert len(trace.placements_by_step("routed_edge")) == 3
        assert trace.edge_cells(4) == [(2, 4), (2, 5)]
        assert trace.edge_cells(7) == []

    def test_summary(self):
        trace = RenderTrace(input_text="A -> B", lane_side="above")
        trace.record_stage("layout", {"lane_count": 2})
        trace.record_placement(placement(0, 0, "┌", "box:A"))
        trace.record_placement(placement(5, 1, "─", "forward_edge#0"))
        trace.record_placement(placement(6, 1, "►", "forward_edge#0"))
        assert trace.summary().split("\n") == [
            "input: 'A -> B'",
            "lane side: above, lanes used: 2",
            "stages: layout",
            "glyphs: 3",
            "  box: 1",
            "  forward_edge: 2",
            "crossings: 0",
        ]

    def test_dump(self):
        trace = RenderTrace()
        trace.record_stage("parse", {"edge_count": 1})
        trace.record_placement(placement(0, 0, "┌", "box:A"))
        dump = trace.dump()
        assert "[parse]\n  edge_count = 1" in dump
        assert dump.endswith("(0,0) '┌' by box:A")

    def test_dump_to_file(self, tmp_path):
        trace = RenderTrace(input_text="A -> B")
        path = tmp_path / "trace.txt"
        trace.dump_to_file(str(path))
        assert path.read_text(encoding="utf-8") == trace.dump() + "\n"
