"""
Debug helpers for lanegraph.

- TracedCanvas: a Canvas stand-in that reports every glyph to a RenderTrace
- visual_diff: a row-by-row comparison of two diagrams for test failures

    >>> assert actual == expected, visual_diff(expected, actual)
"""

from itertools import zip_longest
from typing import List, Set, Tuple

from .renderer import Canvas
from .tracer import CharacterPlacement, RenderTrace


class TracedCanvas:
    """
    Wraps a Canvas and records each ``set`` as a CharacterPlacement.

    ``step`` names the drawing step in progress; the generator updates it
    before drawing each box and edge.
    """

    def __init__(self, canvas: Canvas, trace: RenderTrace):
        self.canvas = canvas
        self.trace = trace
        self.step = "setup"

    @property
    def width(self) -> int:
        return self.canvas.width

    @property
    def height(self) -> int:
        return self.canvas.height

    @property
    def line_cells(self) -> Set[Tuple[int, int]]:
        return self.canvas.line_cells

    def get(self, x: int, y: int) -> str:
        return self.canvas.get(x, y)

    def set(self, x: int, y: int, char: str) -> None:
        previous = self.canvas.get(x, y)
        self.canvas.set(x, y, char)
        self.trace.record_placement(CharacterPlacement(x, y, char, previous, self.step))

    def render(self) -> str:
        return self.canvas.render()


def visual_diff(expected: str, actual: str) -> str:
    """
    Describe how two diagrams differ, row by row.

    Each differing row is printed expected-over-actual with a caret under
    every differing column. Returns an empty string for equal diagrams.
    """
    report: List[str] = []
    differing = 0
    rows = zip_longest(expected.split("\n"), actual.split("\n"), fillvalue=None)

    for number, (want, got) in enumerate(rows):
        if want == got:
            continue
        want_text = "<missing>" if want is None else want
        got_text = "<missing>" if got is None else got
        differing += 1
        report.append(f"row {number}:")
        report.append(f"  expected |{want_text}|")
        report.append(f"  actual   |{got_text}|")
        if want is not None and got is not None:
            carets = "".join(
                "^" if a != b else " "
                for a, b in zip_longest(want, got, fillvalue="")
            )
            report.append("            " + carets.rstrip())

    if differing:
        report.insert(0, f"{differing} row(s) differ")
    return "\n".join(report)
