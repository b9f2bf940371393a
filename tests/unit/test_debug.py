"""Tests for the debug module."""

from lanegraph.debug import TracedCanvas, visual_diff
from lanegraph.renderer import BoxRenderer, Canvas, LineRenderer
from lanegraph.tracer import RenderTrace


def traced(width=10, height=5):
    trace = RenderTrace()
    return TracedCanvas(Canvas(width, height), trace), trace


class TestTracedCanvas:
    """Tests for TracedCanvas."""

    def test_delegates_dimensions(self):
        canvas, _ = traced(12, 7)
        assert (canvas.width, canvas.height) == (12, 7)

    def test_set_records_placement(self):
        canvas, trace = traced()
        canvas.step = "routed_edge#1"
        canvas.set(3, 2, "│")
        recorded = trace.placements[-1]
        assert (recorded.x, recorded.y, recorded.char) == (3, 2, "│")
        assert recorded.previous_char == " "
        assert recorded.step == "routed_edge#1"
        assert canvas.get(3, 2) == "│"
        assert canvas.canvas.get(3, 2) == "│"

    def test_default_step(self):
        canvas, trace = traced()
        canvas.set(0, 0, "x")
        assert trace.placements[0].step == "setup"

    def test_box_drawn_through_wrapper(self):
        canvas, trace = traced(5, 3)
        canvas.step = "box:A"
        BoxRenderer().draw_box(canvas, 0, 0, 5, "A")
        assert canvas.render() == "┌───┐\n│ A │\n└───┘"
        assert len(trace.placements_by_step("box:A")) == 13

    def test_line_cells_shared_with_wrapped_canvas(self):
        """Test that lines drawn through the wrapper still cross."""
        canvas, trace = traced(5, 3)
        lines = LineRenderer()
        lines.draw_horizontal_line(canvas, 0, 4, 1)
        lines.draw_vertical_line(canvas, 2, 0, 2)
        assert canvas.get(2, 1) == "┼"
        assert [(p.x, p.y) for p in trace.crossings()] == [(2, 1)]


class TestVisualDiff:
    """Tests for visual_diff."""

    def test_identical(self):
        assert visual_diff("A\nB", "A\nB") == ""

    def test_differing_row(self):
        assert visual_diff("┌─┐\n│A│", "┌─┐\n│B│").split("\n") == [
            "1 row(s) differ",
            "row 1:",
            "  expected |│A│|",
            "  actual   |│B│|",
            "             ^",
        ]

    def test_caret_under_extra_column(self):
        report = visual_diff("ab", "abc").split("\n")
        assert report[-1] == "              ^"

    def test_missing_row(self):
        report = visual_diff("a\nb", "a")
        assert "  expected |b|" in report
        assert "  actual   |<missing>|" in report

    def test_counts_rows(self):
        assert visual_diff("a\nb\nc", "x\nb\ny").startswith("2 row(s) differ")
