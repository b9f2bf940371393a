"""
ASCII renderer module for diagram generation.

Handles drawing labelled boxes, straight connectors and lane-routed
edges onto a character canvas, using either Unicode box-drawing
characters or plain ASCII.

Drawing is additive: every glyph lands on a blank cell, except where a
vertical line passes a horizontal one and the two merge into a crossing.
Anything else is a layout defect and raises LayoutCollisionError.
"""

from dataclasses import dataclass
from typing import Dict, List, Set, Tuple

# Unicode box-drawing characters
BOX_CHARS = {
    "top_left": "┌",
    "top_right": "┐",
    "bottom_left": "└",
    "bottom_right": "┘",
    "horizontal": "─",
    "vertical": "│",
}

# Arrow characters
ARROW_CHARS = {
    "down": "▼",
    "up": "▲",
    "right": "►",
    "left": "◄",
}

# Line drawing characters for routing
LINE_CHARS = {
    "horizontal": "─",
    "vertical": "│",
    "corner_top_left": "┌",
    "corner_top_right": "┐",
    "corner_bottom_left": "└",
    "corner_bottom_right": "┘",
    "cross": "┼",
}

BOX_CHARS_ASCII = {
    "top_left": "+",
    "top_right": "+",
    "bottom_left": "+",
    "bottom_right": "+",
    "horizontal": "-",
    "vertical": "|",
}

ARROW_CHARS_ASCII = {
    "down": "v",
    "up": "^",
    "right": ">",
    "left": "<",
}

LINE_CHARS_ASCII = {
    "horizontal": "-",
    "vertical": "|",
    "corner_top_left": "+",
    "corner_top_right": "+",
    "corner_bottom_left": "+",
    "corner_bottom_right": "+",
    "cross": "+",
}


@dataclass(frozen=True)
class GlyphSet:
    """The characters used for one rendering."""

    box: Dict[str, str]
    line: Dict[str, str]
    arrow: Dict[str, str]


GLYPH_SETS = {
    "unicode": GlyphSet(box=BOX_CHARS, line=LINE_CHARS, arrow=ARROW_CHARS),
    "ascii": GlyphSet(box=BOX_CHARS_ASCII, line=LINE_CHARS_ASCII, arrow=ARROW_CHARS_ASCII),
}


class LayoutCollisionError(Exception):
    """Raised when a glyph would overwrite another; the layout is wrong."""

    def __init__(self, x: int, y: int, existing: str, char: str):
        self.x = x
        self.y = y
        self.existing = existing
        self.char = char
        super().__init__(
            f"Cell ({x},{y}) already holds '{existing}', cannot place '{char}'"
        )


class Canvas:
    """
    A 2D character canvas for drawing ASCII art.
    """

    def __init__(self, width: int, height: int, fill_char: str = " "):
        self.width = width
        self.height = height
        self.fill_char = fill_char
        self.grid: List[List[str]] = [
            [fill_char for _ in range(width)] for _ in range(height)
        ]
        # Cells holding straight line segments, the only ones lines may cross
        self.line_cells: Set[Tuple[int, int]] = set()

    def set(self, x: int, y: int, char: str) -> None:
        """Set a character at position (x, y)."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.grid[y][x] = char

    def get(self, x: int, y: int) -> str:
        """Get character at position (x, y)."""
        if 0 <= x < self.width and 0 <= y < self.height:
            return self.grid[y][x]
        return " "

    def render(self) -> str:
        """
        Render the canvas to a string.

        Trailing rows and columns that are blank throughout are dropped;
        the remaining lines all have the same width.
        """
        lines = ["".join(row) for row in self.grid]

        # Remove trailing empty lines
        while lines and not lines[-1].strip():
            lines.pop()

        width = max((len(line.rstrip()) for line in lines), default=0)
        return "\n".join(line[:width] for line in lines)


def place(canvas: Canvas, x: int, y: int, char: str) -> None:
    """Place a glyph on a blank cell."""
    current = canvas.get(x, y)
    if current != " ":
        raise LayoutCollisionError(x, y, current, char)
    canvas.set(x, y, char)


class BoxRenderer:
    """
    Renders labelled boxes.

    Box structure (label centred, one row high)::

        ┌───────┐
        │ LABEL │
        └───────┘
    """

    def __init__(self, glyphs: GlyphSet = GLYPH_SETS["unicode"]):
        self.glyphs = glyphs

    def draw_box(self, canvas: Canvas, x: int, y: int, width: int, label: str) -> None:
        """Draw a three-row box with its label centred at position (x, y)."""
        box = self.glyphs.box

        # Top and bottom borders
        for row, left, right in (
            (y, box["top_left"], box["top_right"]),
            (y + 2, box["bottom_left"], box["bottom_right"]),
        ):
            place(canvas, x, row, left)
            for i in range(1, width - 1):
                place(canvas, x + i, row, box["horizontal"])
            place(canvas, x + width - 1, row, right)

        # Sides
        place(canvas, x, y + 1, box["vertical"])
        place(canvas, x + width - 1, y + 1, box["vertical"])

        # Label
        available_width = width - 2
        text_x = x + 1 + (available_width - len(label)) // 2
        for i, char in enumerate(label):
            if char != " ":
                place(canvas, text_x + i, y + 1, char)


class LineRenderer:
    """
    Renders connectors, lane routes and arrowheads.
    """

    def __init__(self, glyphs: GlyphSet = GLYPH_SETS["unicode"]):
        self.glyphs = glyphs

    def draw_horizontal_line(self, canvas: Canvas, x_start: int, x_end: int, y: int) -> None:
        """Draw a horizontal line over the cells strictly between x_start and x_end."""
        if x_start > x_end:
            x_start, x_end = x_end, x_start

        for x in range(x_start + 1, x_end):
            self._draw_segment(canvas, x, y, "horizontal", across="vertical")

    def draw_vertical_line(self, canvas: Canvas, x: int, y_start: int, y_end: int) -> None:
        """Draw a vertical line over rows y_start to y_end inclusive."""
        if y_start > y_end:
            y_start, y_end = y_end, y_start

        for y in range(y_start, y_end + 1):
            self._draw_segment(canvas, x, y, "vertical", across="horizontal")

    def _draw_segment(
        self, canvas: Canvas, x: int, y: int, kind: str, across: str
    ) -> None:
        """Draw one line cell, merging with a perpendicular line into a crossing."""
        line = self.glyphs.line
        if (x, y) in canvas.line_cells and canvas.get(x, y) == line[across]:
            canvas.set(x, y, line["cross"])
            return
        place(canvas, x, y, line[kind])
        canvas.line_cells.add((x, y))

    def draw_corner(self, canvas: Canvas, x: int, y: int, corner_type: str) -> None:
        """
        Draw a corner character.
        corner_type: 'top_left', 'top_right', 'bottom_left', 'bottom_right'
        """
        place(canvas, x, y, self.glyphs.line[f"corner_{corner_type}"])

    def draw_arrow(self, canvas: Canvas, x: int, y: int, direction: str) -> None:
        """Draw an arrowhead pointing 'up', 'down', 'left' or 'right'."""
        place(canvas, x, y, self.glyphs.arrow[direction])

    def draw_connector(self, canvas: Canvas, x_start: int, x_end: int, y: int) -> None:
        """
        Draw a straight rightward connector between two boxes.

        x_start is the source's right border and x_end the target's left
        border; the arrowhead sits in the cell just before x_end.
        """
        self.draw_horizontal_line(canvas, x_start, x_end - 1, y)
        self.draw_arrow(canvas, x_end - 1, y, "right")

    def draw_lane_route(
        self,
        canvas: Canvas,
        source_x: int,
        target_x: int,
        border_y: int,
        lane_y: int,
    ) -> None:
        """
        Draw an edge leaving one box border, running along a lane and
        entering another (or the same) box through the same border.

        The lane lies below the border when lane_y > border_y and above it
        otherwise. Lane 0 below, going left::

            ▲   │
            └───┘
        """
        step = 1 if lane_y > border_y else -1
        first_row = border_y + step  # Row just outside the boxes
        if step == 1:
            # Lines come down from the boxes and turn at the lane
            source_corner = "bottom_left" if target_x > source_x else "bottom_right"
            target_corner = "bottom_right" if target_x > source_x else "bottom_left"
            arrow = "up"
        else:
            source_corner = "top_left" if target_x > source_x else "top_right"
            target_corner = "top_right" if target_x > source_x else "top_left"
            arrow = "down"

        # Leave the source box
        self.draw_vertical_line(canvas, source_x, first_row, lane_y - step)
        self.draw_corner(canvas, source_x, lane_y, source_corner)

        # Along the lane
        self.draw_horizontal_line(canvas, source_x, target_x, lane_y)

        # Into the target box
        self.draw_corner(canvas, target_x, lane_y, target_corner)
        if lane_y - step != first_row:
            self.draw_vertical_line(canvas, target_x, first_row + step, lane_y - step)
        self.draw_arrow(canvas, target_x, first_row, arrow)
