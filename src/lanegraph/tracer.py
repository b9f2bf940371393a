"""
Render tracing for lanegraph.

``DiagramGenerator.generate(debug=True)`` fills a RenderTrace with one
PipelineStage per pipeline step and one CharacterPlacement per glyph the
drawing steps write. Drawing steps are named after what they draw:
``box:<label>``, ``forward_edge#<index>`` and ``routed_edge#<index>``.

Usage:
    >>> generator = DiagramGenerator()
    >>> generator.generate("A -> B\\nB -> A", debug=True)
    >>> trace = generator.get_trace()
    >>> print(trace.summary())
    >>> trace.edge_cells(1)
"""

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class CharacterPlacement:
    """A glyph written at (x, y) by one drawing step."""

    x: int
    y: int
    char: str
    previous_char: str
    step: str

    @property
    def is_crossing(self) -> bool:
        return self.previous_char != " "

    @property
    def edge_index(self) -> Optional[int]:
        """Index of the edge that drew the glyph; None for box glyphs."""
        if self.step.startswith("box:"):
            return None
        _, _, index = self.step.partition("#")
        return int(index) if index.isdigit() else None

    def __str__(self) -> str:
        if self.is_crossing:
            glyph = f"'{self.previous_char}' -> '{self.char}'"
        else:
            glyph = f"'{self.char}'"
        return f"({self.x},{self.y}) {glyph} by {self.step}"


@dataclass
class PipelineStage:
    """
    Data recorded after one pipeline step.

    Attributes:
        name: parse, graph, layout, canvas_created, boxes_drawn,
            forward_edges_drawn or routed_edges_drawn.
        data: Values the step produced (edge counts, lanes, ...).
        canvas: Rendered canvas rows once drawing has started, else None.
    """

    name: str
    data: Dict[str, Any]
    canvas: Optional[List[str]] = None

    def describe(self, max_value_len: int = 100) -> List[str]:
        lines = [f"[{self.name}]"]
        for key, value in self.data.items():
            text = repr(value)
            if len(text) > max_value_len:
                text = text[:max_value_len] + "..."
            lines.append(f"  {key} = {text}")
        for row in self.canvas or []:
            lines.append(f"  |{row}|")
        return lines


@dataclass
class RenderTrace:
    """Stages and glyph placements of one render."""

    input_text: str = ""
    lane_side: str = "below"
    stages: List[PipelineStage] = field(default_factory=list)
    placements: List[CharacterPlacement] = field(default_factory=list)

    def record_stage(self, name: str, data: Dict[str, Any], canvas=None) -> None:
        """Append a stage; ``canvas`` is rendered and stored when given."""
        rows = None
        if canvas is not None:
            rendered = canvas.render()
            rows = rendered.split("\n") if rendered else []
        self.stages.append(PipelineStage(name, dict(data), rows))

    def record_placement(self, placement: CharacterPlacement) -> None:
        self.placements.append(placement)

    def stage(self, name: str) -> Optional[PipelineStage]:
        return next((s for s in self.stages if s.name == name), None)

    def canvas_after(self, name: str) -> Optional[List[str]]:
        """Canvas rows as they stood after the named stage."""
        stage = self.stage(name)
        return stage.canvas if stage else None

    def placements_at(self, x: int, y: int) -> List[CharacterPlacement]:
        return [p for p in self.placements if (p.x, p.y) == (x, y)]

    def placements_by_step(self, prefix: str) -> List[CharacterPlacement]:
        """Placements of every step whose name starts with ``prefix``."""
        return [p for p in self.placements if p.step.startswith(prefix)]

    def crossings(self) -> List[CharacterPlacement]:
        """Placements over a non-blank cell; only line crossings in a valid render."""
        return [p for p in self.placements if p.is_crossing]

    def edge_cells(self, index: int) -> List[Tuple[int, int]]:
        """Cells drawn for the edge with the given input index, in drawing order."""
        return [(p.x, p.y) for p in self.placements if p.edge_index == index]

    def summary(self) -> str:
        kinds = Counter(
            p.step.partition(":")[0].partition("#")[0] for p in self.placements
        )
        layout = self.stage("layout")
        lane_count = layout.data.get("lane_count", 0) if layout else 0

        lines = [
            f"input: {self.input_text!r}",
            f"lane side: {self.lane_side}, lanes used: {lane_count}",
            "stages: " + ", ".join(s.name for s in self.stages),
            f"glyphs: {len(self.placements)}",
            *(f"  {kind}: {count}" for kind, count in sorted(kinds.items())),
            f"crossings: {len(self.crossings())}",
        ]
        return "\n".join(lines)

    def dump(self) -> str:
        """Summary, every stage with its data and canvas, then every placement."""
        lines = [self.summary(), ""]
        for stage in self.stages:
            lines.extend(stage.describe())
        lines.append("")
        lines.extend(str(p) for p in self.placements)
        return "\n".join(lines)

    def dump_to_file(self, filename: str) -> None:
        Path(filename).write_text(self.dump() + "\n", encoding="utf-8")
