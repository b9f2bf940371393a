"""
Main diagram generator module.

Combines parsing, graph building, layout and rendering to produce
single-baseline ASCII diagrams.
"""

import logging
from typing import Optional, Union

from .debug import TracedCanvas
from .graph import GraphModel, build_graph
from .layout import LANE_SIDES, LayoutEngine, LayoutResult
from .parser import Parser
from .renderer import GLYPH_SETS, BoxRenderer, Canvas, LineRenderer
from .tracer import RenderTrace

logger = logging.getLogger(__name__)

CanvasLike = Union[Canvas, TracedCanvas]


class DiagramGenerator:
    """
    Generate ASCII diagrams from simple edge lists.

    Example:
        >>> generator = DiagramGenerator()
        >>> diagram = generator.generate('''
        ...     A -> B
        ...     B -> C
        ...     C -> A
        ... ''')
        >>> print(diagram)

    produces::

        ┌───┐    ┌───┐    ┌───┐
        │ A │───►│ B │───►│ C │
        └───┘    └───┘    └───┘
          ▲                 │
          └─────────────────┘
    """

    def __init__(
        self,
        horizontal_gap: int = 4,
        padding: int = 1,
        lane_side: str = "below",
        glyphs: str = "unicode",
    ):
        """
        Initialize the diagram generator.

        Args:
            horizontal_gap: Blank columns between neighbouring boxes (>= 2)
            padding: Spaces on each side of a label inside its box
            lane_side: Route wrapping edges "below" or "above" the boxes
            glyphs: "unicode" box-drawing characters or plain "ascii"
        """
        if lane_side not in LANE_SIDES:
            raise ValueError("lane_side must be 'below' or 'above'")
        if glyphs not in GLYPH_SETS:
            raise ValueError("glyphs must be 'unicode' or 'ascii'")

        self.horizontal_gap = horizontal_gap
        self.padding = padding
        self.lane_side = lane_side
        self.glyphs = glyphs

        self.parser = Parser()
        self.layout_engine = LayoutEngine(
            horizontal_gap=horizontal_gap, padding=padding, lane_side=lane_side
        )
        self.box_renderer = BoxRenderer(GLYPH_SETS[glyphs])
        self.line_renderer = LineRenderer(GLYPH_SETS[glyphs])
        self._trace: Optional[RenderTrace] = None

    def generate(self, input_text: str, debug: bool = False) -> str:
        """
        Generate an ASCII diagram from input text.

        Args:
            input_text: Multi-line string with connections like "A -> B"
            debug: Record a RenderTrace, available from get_trace()

        Returns:
            The diagram; empty when the input holds no connections

        Raises:
            ParseError: If a line is not a valid connection
        """
        trace = RenderTrace(input_text=input_text, lane_side=self.lane_side) if debug else None
        self._trace = trace

        edges = self.parser.parse(input_text)
        if trace:
            trace.record_stage("parse", {"edges": edges, "edge_count": len(edges)})

        graph = build_graph(edges)
        if trace:
            trace.record_stage(
                "graph",
                {
                    "columns": [node.label for node in graph.nodes],
                    "forward_edges": len(graph.forward_edges),
                    "back_edges": len(graph.back_edges),
                    "has_cycles": graph.has_cycles,
                    "cycles": graph.cycles(),
                },
            )

        if not graph.nodes:
            return ""

        layout = self.layout_engine.layout(graph)
        if trace:
            trace.record_stage(
                "layout",
                {
                    "width": layout.width,
                    "height": layout.height,
                    "box_x": [node.x for node in layout.nodes],
                    "lanes": layout.lanes,
                    "lane_count": layout.lane_count,
                },
            )

        canvas: CanvasLike = Canvas(layout.width, layout.height)
        if trace:
            canvas = TracedCanvas(canvas, trace)
            trace.record_stage("canvas_created", {}, canvas)

        self._draw_boxes(canvas, layout)
        if trace:
            trace.record_stage("boxes_drawn", {"boxes": len(layout.nodes)}, canvas)

        self._draw_straight_edges(canvas, layout)
        if trace:
            trace.record_stage(
                "forward_edges_drawn", {"edges": len(layout.straight_edges)}, canvas
            )

        self._draw_routed_edges(canvas, layout, graph)
        if trace:
            trace.record_stage(
                "routed_edges_drawn", {"edges": len(layout.routed_edges)}, canvas
            )

        return canvas.render()

    def get_trace(self) -> Optional[RenderTrace]:
        """Trace of the last generate() call made with debug=True."""
        return self._trace

    def _draw_boxes(self, canvas: CanvasLike, layout: LayoutResult) -> None:
        for node_layout in layout.nodes:
            self._begin_step(canvas, f"box:{node_layout.node.label}")
            self.box_renderer.draw_box(
                canvas,
                node_layout.x,
                node_layout.y,
                node_layout.width,
                node_layout.node.label,
            )

    def _draw_straight_edges(self, canvas: CanvasLike, layout: LayoutResult) -> None:
        for edge in layout.straight_edges:
            source = layout.nodes[edge.source]
            target = layout.nodes[edge.target]
            self._begin_step(canvas, f"forward_edge#{edge.index}")
            self.line_renderer.draw_connector(
                canvas, source.right_x, target.x, source.mid_y
            )

    def _draw_routed_edges(
        self, canvas: CanvasLike, layout: LayoutResult, graph: GraphModel
    ) -> None:
        for route in layout.routed_edges:
            edge = route.edge
            self._begin_step(canvas, f"routed_edge#{edge.index}")
            logger.debug(
                "routing %s -> %s (%s) in lane %d",
                graph.label(edge.source),
                graph.label(edge.target),
                edge.kind.value,
                route.lane,
            )
            self.line_renderer.draw_lane_route(
                canvas, route.source_x, route.target_x, route.border_y, route.lane_y
            )

    @staticmethod
    def _begin_step(canvas: CanvasLike, step: str) -> None:
        if isinstance(canvas, TracedCanvas):
            canvas.step = step


def render(input_text: str, **kwargs) -> str:
    """
    Render input text as a diagram with a fresh generator.

    Args:
        input_text: Multi-line string with connections like "A -> B"
        **kwargs: Passed to DiagramGenerator

    Returns:
        The diagram text

    Raises:
        ParseError: If a line is not a valid connection
    """
    return DiagramGenerator(**kwargs).generate(input_text)
