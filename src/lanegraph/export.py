"""
Write finished diagrams to disk.

The core only ever returns strings; DiagramExporter is the one place that
touches the filesystem. PNG output lays the diagram out on a fixed grid of
character cells so boxes and lanes line up exactly as they do on screen,
whatever the font's own advance widths.
"""

import logging
import math
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

logger = logging.getLogger(__name__)

MONOSPACE_FONTS = (
    "DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/System/Library/Fonts/Menlo.ttc",
    "C:/Windows/Fonts/consola.ttf",
)


class DiagramExporter:
    """
    Saves diagrams as text or PNG files.

    Attributes:
        default_font: Font file tried first for PNG export.
    """

    def __init__(self, default_font: Optional[str] = None):
        self.default_font = default_font

    def save_txt(self, diagram: str, filename: str) -> None:
        """Write the diagram followed by a newline; an empty diagram writes an empty file."""
        path = Path(filename)
        path.write_text(diagram + "\n" if diagram else "", encoding="utf-8")
        logger.debug("wrote %s", path)

    def save_png(
        self,
        diagram: str,
        filename: str,
        font_size: int = 16,
        padding: int = 20,
        font: Optional[str] = None,
        scale: int = 2,
    ) -> None:
        """
        Rasterize the diagram, black on white, one glyph per grid cell.

        Args:
            diagram: Diagram text as returned by DiagramGenerator.generate.
            filename: Output path.
            font_size: Font size in points before scaling.
            padding: Blank margin around the grid, in pixels before scaling.
            font: Font file to try before default_font and the system fonts.
            scale: Multiplier applied to font size and padding.
        """
        rows = diagram.split("\n") if diagram else []
        loaded_font = self._load_font(font_size * scale, font or self.default_font)
        cell_width, cell_height = self.cell_size(loaded_font, diagram)

        margin = padding * scale
        columns = max((len(row) for row in rows), default=0)
        size = (
            max(1, 2 * margin + columns * cell_width),
            max(1, 2 * margin + len(rows) * cell_height),
        )

        img = Image.new("RGB", size, "white")
        draw = ImageDraw.Draw(img)
        for y, row in enumerate(rows):
            for x, char in enumerate(row):
                if char != " ":
                    position = (margin + x * cell_width, margin + y * cell_height)
                    draw.text(position, char, font=loaded_font, fill="black")

        path = Path(filename)
        img.save(path, "PNG")
        logger.debug("wrote %s (%dx%d, %d rows)", path, size[0], size[1], len(rows))

    @staticmethod
    def cell_size(loaded_font, diagram: str) -> Tuple[int, int]:
        """
        Pixel size of one grid cell for the given font.

        Wide enough for the widest glyph the diagram uses and tall enough
        for the lowest-reaching one, so adjacent line glyphs meet.
        """
        glyphs = set(diagram.replace("\n", "")) | {"M"}
        width = max(loaded_font.getlength(glyph) for glyph in glyphs)
        height = max(loaded_font.getbbox(glyph)[3] for glyph in glyphs)
        return max(1, math.ceil(width)), max(1, math.ceil(height))

    def _load_font(self, size: int, preferred: Optional[str] = None):
        candidates = ((preferred,) if preferred else ()) + MONOSPACE_FONTS
        for candidate in candidates:
            try:
                return ImageFont.truetype(candidate, size)
            except OSError:
                logger.debug("font %s not available", candidate)
        logger.debug("no monospace font found, using Pillow's default")
        return ImageFont.load_default(size=size)
