"""
lanegraph - Edge lists as single-row ASCII diagrams

Draws every node of a small directed graph as a box on one baseline and
routes edges that wrap back (cycles, self-loops) through lanes below or
above the boxes.

Example:
    >>> from lanegraph import render
    >>> print(render('''
    ...     A -> B
    ...     B -> C
    ...     C -> A
    ... '''))

Debug Mode Example:
    >>> generator = DiagramGenerator()
    >>> diagram = generator.generate("A -> B", debug=True)
    >>> trace = generator.get_trace()
    >>> print(trace.summary())
"""

from .debug import TracedCanvas, visual_diff
from .export import DiagramExporter
from .generator import DiagramGenerator, render
from .graph import GraphModel, build_graph
from .layout import LayoutEngine, LayoutResult, NodeLayout, RoutedEdge, compute_layout
from .models import ClassifiedEdge, Edge, EdgeKind, Node
from .parser import ParseError, Parser, parse_edges
from .renderer import (
    GLYPH_SETS,
    BoxRenderer,
    Canvas,
    GlyphSet,
    LayoutCollisionError,
    LineRenderer,
)
from .tracer import CharacterPlacement, PipelineStage, RenderTrace

__version__ = "0.1.0"

__all__ = [
    # Main API
    "render",
    "DiagramGenerator",
    # Parser
    "Parser",
    "ParseError",
    "parse_edges",
    # Graph model
    "Edge",
    "Node",
    "EdgeKind",
    "ClassifiedEdge",
    "GraphModel",
    "build_graph",
    # Layout
    "LayoutEngine",
    "LayoutResult",
    "NodeLayout",
    "RoutedEdge",
    "compute_layout",
    # Renderer
    "Canvas",
    "BoxRenderer",
    "LineRenderer",
    "GlyphSet",
    "GLYPH_SETS",
    "LayoutCollisionError",
    # Export
    "DiagramExporter",
    # Debug/Tracing
    "RenderTrace",
    "CharacterPlacement",
    "PipelineStage",
    "TracedCanvas",
    "visual_diff",
]
