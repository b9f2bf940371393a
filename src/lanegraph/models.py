"""
Data models for diagram generation.

This module contains the value types that flow through the pipeline: raw
edges produced by the parser, nodes with their interned column index, and
edges classified against those columns.

Classes:
    Edge: A (source, target) pair of labels as written in the input.
    Node: A unique label and the column it occupies on the baseline.
    EdgeKind: Whether an edge points rightward or wraps back.
    ClassifiedEdge: An edge expressed by node ids, with its kind.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


class Edge(NamedTuple):
    """A directed edge between two labels, in input order."""

    source: str
    target: str


@dataclass(frozen=True)
class Node:
    """
    A node on the baseline.

    The column is 0-based and doubles as the node's id once the graph
    model is built; labels are only needed again when drawing.

    Attributes:
        label: Text shown inside the box.
        column: Horizontal slot, assigned by first appearance.
    """

    label: str
    column: int


class EdgeKind(Enum):
    FORWARD = "forward"
    BACK = "back"


@dataclass(frozen=True)
class ClassifiedEdge:
    """
    An edge between two node ids together with its kind.

    Attributes:
        index: Position of the edge in the input (0-based).
        source: Column of the source node.
        target: Column of the target node.
        kind: FORWARD when the target lies strictly right of the source,
              BACK otherwise (self-loops included).
    """

    index: int
    source: int
    target: int
    kind: EdgeKind

    @property
    def is_self_loop(self) -> bool:
        return self.source == self.target

    @property
    def span_start(self) -> int:
        return min(self.source, self.target)

    @property
    def span_end(self) -> int:
        return max(self.source, self.target)

    @property
    def span(self) -> int:
        """Number of columns between the endpoints (0 for a self-loop)."""
        return self.span_end - self.span_start

    def overlaps(self, other: "ClassifiedEdge") -> bool:
        """Whether the inclusive column ranges of two edges intersect."""
        return (
            self.span_start <= other.span_end and other.span_start <= self.span_end
        )
