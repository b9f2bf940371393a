"""
Layout module for single-baseline diagrams.

Places every node on one row of boxes, left to right by column, and
routes the edges that cannot be drawn as a straight connector through
horizontal lanes beside that row.

Uses networkx for:
- Lane allocation, as greedy colouring of the span-overlap graph
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import networkx as nx

from .graph import GraphModel
from .models import ClassifiedEdge, EdgeKind, Node

logger = logging.getLogger(__name__)

BOX_HEIGHT = 3
ROWS_PER_LANE = 2
LANE_SIDES = ("below", "above")

# Port ordering groups along a box border
_OTHER_END_LEFT = 0
_SELF_LOOP = 1
_OTHER_END_RIGHT = 2


@dataclass
class NodeLayout:
    """Represents a node's box on the canvas."""

    node: Node
    x: int = 0  # Left border
    y: int = 0  # Top border
    width: int = 0
    height: int = BOX_HEIGHT

    @property
    def right_x(self) -> int:
        return self.x + self.width - 1

    @property
    def bottom_y(self) -> int:
        return self.y + self.height - 1

    @property
    def mid_y(self) -> int:
        return self.y + self.height // 2


@dataclass
class RoutedEdge:
    """
    An edge drawn through a lane.

    Attributes:
        edge: The classified edge being routed.
        lane: Lane index, 0 being nearest the boxes.
        source_x: Column of the port on the source box.
        target_x: Column of the port on the target box.
        border_y: Row of the box border the ports sit on.
        lane_y: Row holding the lane's horizontal segment.
    """

    edge: ClassifiedEdge
    lane: int
    source_x: int
    target_x: int
    border_y: int
    lane_y: int


@dataclass
class LayoutResult:
    """Result of the layout algorithm."""

    width: int = 0
    height: int = 0
    baseline_y: int = 0  # Top border row of every box
    lane_side: str = "below"
    nodes: List[NodeLayout] = field(default_factory=list)
    straight_edges: List[ClassifiedEdge] = field(default_factory=list)
    routed_edges: List[RoutedEdge] = field(default_factory=list)
    lanes: Dict[int, int] = field(default_factory=dict)  # edge index -> lane

    @property
    def lane_count(self) -> int:
        return max(self.lanes.values()) + 1 if self.lanes else 0


class LayoutEngine:
    """
    Computes box positions and edge routes for a GraphModel.

    Forward edges between neighbouring columns become straight connectors
    at mid-height. Every other edge (back edges, self-loops, forward edges
    skipping a column, repeated neighbour edges) is routed: out of the
    source box into a lane, along the lane, and back into the target box.
    """

    def __init__(
        self, horizontal_gap: int = 4, padding: int = 1, lane_side: str = "below"
    ):
        """
        Initialize the layout engine.

        Args:
            horizontal_gap: Blank columns between neighbouring boxes
            padding: Spaces between a label and its box's side borders
            lane_side: "below" or "above" the row of boxes
        """
        if horizontal_gap < 2:
            raise ValueError("horizontal_gap must be at least 2")
        if padding < 0:
            raise ValueError("padding must not be negative")
        if lane_side not in LANE_SIDES:
            raise ValueError("lane_side must be 'below' or 'above'")

        self.horizontal_gap = horizontal_gap
        self.padding = padding
        self.lane_side = lane_side

    def layout(self, graph: GraphModel) -> LayoutResult:
        """
        Compute the layout for the given graph.

        Args:
            graph: Graph model with column assignment and edge kinds

        Returns:
            LayoutResult with canvas size, boxes, lanes and routes
        """
        straight, routed = self.split_edges(graph.edges)
        lanes = self.assign_lanes(routed)
        ports = self.order_ports(graph, routed, lanes)

        lane_count = max(lanes.values()) + 1 if lanes else 0
        if self.lane_side == "below":
            baseline_y = 0
        else:
            baseline_y = lane_count * ROWS_PER_LANE

        node_layouts = self._place_boxes(graph, ports, baseline_y)
        port_x = self._port_positions(node_layouts, ports)

        result = LayoutResult(
            width=self._total_width(node_layouts),
            height=BOX_HEIGHT + lane_count * ROWS_PER_LANE,
            baseline_y=baseline_y,
            lane_side=self.lane_side,
            nodes=node_layouts,
            straight_edges=straight,
            lanes=lanes,
        )

        for edge in routed:
            result.routed_edges.append(
                RoutedEdge(
                    edge=edge,
                    lane=lanes[edge.index],
                    source_x=port_x[(edge.index, "source")],
                    target_x=port_x[(edge.index, "target")],
                    border_y=self.border_row(baseline_y),
                    lane_y=self.lane_row(baseline_y, lanes[edge.index]),
                )
            )

        logger.debug(
            "layout %dx%d, %d straight edge(s), %d routed in %d lane(s)",
            result.width,
            result.height,
            len(straight),
            len(routed),
            lane_count,
        )
        return result

    def split_edges(
        self, edges: List[ClassifiedEdge]
    ) -> Tuple[List[ClassifiedEdge], List[ClassifiedEdge]]:
        """
        Separate straight connectors from routed edges.

        Only the first forward edge between two neighbouring columns is
        drawn straight; repeats would share its cells.
        """
        straight: List[ClassifiedEdge] = []
        routed: List[ClassifiedEdge] = []
        seen_pairs = set()

        for edge in edges:
            pair = (edge.source, edge.target)
            if (
                edge.kind is EdgeKind.FORWARD
                and edge.target == edge.source + 1
                and pair not in seen_pairs
            ):
                seen_pairs.add(pair)
                straight.append(edge)
            else:
                routed.append(edge)

        return straight, routed

    def assign_lanes(self, routed: List[ClassifiedEdge]) -> Dict[int, int]:
        """
        Assign a lane to every routed edge.

        Edges are taken by ascending span, ties by input order, and each
        gets the lowest lane not held by an already placed edge whose
        column span overlaps its own. Short edges therefore nest inside
        long ones, and self-loops take the lanes nearest the boxes.

        Returns:
            Mapping of edge index to lane
        """
        ranking = sorted(routed, key=lambda e: (e.span, e.index))

        conflicts = nx.Graph()
        conflicts.add_nodes_from(e.index for e in ranking)
        for i, edge in enumerate(ranking):
            for other in ranking[i + 1 :]:
                if edge.overlaps(other):
                    conflicts.add_edge(edge.index, other.index)

        order = [e.index for e in ranking]
        return nx.greedy_color(conflicts, strategy=lambda graph, colors: iter(order))

    def order_ports(
        self,
        graph: GraphModel,
        routed: List[ClassifiedEdge],
        lanes: Dict[int, int],
    ) -> Dict[int, List[Tuple[int, str]]]:
        """
        Order the routed edge endpoints along each box border.

        From left to right: edges reaching further left (inner lanes
        first), then self-loops as adjacent source/target pairs, then
        edges reaching further right (outer lanes first). With that order
        a lane's vertical segments never cut through the horizontal
        segment of a nested edge on the same box.

        Returns:
            Mapping of node id to ordered (edge index, role) pairs
        """
        entries: Dict[int, List[Tuple[tuple, Tuple[int, str]]]] = {
            node.column: [] for node in graph.nodes
        }

        for edge in routed:
            lane = lanes[edge.index]
            if edge.is_self_loop:
                for rank, role in enumerate(("source", "target")):
                    key = (_SELF_LOOP, lane, edge.index, rank)
                    entries[edge.source].append((key, (edge.index, role)))
                continue

            for node_id, other, role in (
                (edge.source, edge.target, "source"),
                (edge.target, edge.source, "target"),
            ):
                if other < node_id:
                    key = (_OTHER_END_LEFT, lane, edge.index, 0)
                else:
                    key = (_OTHER_END_RIGHT, -lane, edge.index, 0)
                entries[node_id].append((key, (edge.index, role)))

        return {
            node_id: [port for _, port in sorted(items)]
            for node_id, items in entries.items()
        }

    def box_width(self, label: str, port_count: int) -> int:
        """Box width fitting the padded label and one cell per port."""
        interior = max(len(label) + 2 * self.padding, port_count, 1)
        return interior + 2

    def border_row(self, baseline_y: int) -> int:
        """Row of the box border facing the lanes."""
        if self.lane_side == "below":
            return baseline_y + BOX_HEIGHT - 1
        return baseline_y

    def lane_row(self, baseline_y: int, lane: int) -> int:
        """Row holding the horizontal segment of the given lane."""
        offset = (lane + 1) * ROWS_PER_LANE
        if self.lane_side == "below":
            return self.border_row(baseline_y) + offset
        return self.border_row(baseline_y) - offset

    def _place_boxes(
        self,
        graph: GraphModel,
        ports: Dict[int, List[Tuple[int, str]]],
        baseline_y: int,
    ) -> List[NodeLayout]:
        """Position boxes left to right; x(c) sums preceding widths and gaps."""
        layouts: List[NodeLayout] = []
        current_x = 0

        for node in graph.nodes:
            width = self.box_width(node.label, len(ports[node.column]))
            layouts.append(NodeLayout(node=node, x=current_x, y=baseline_y, width=width))
            current_x += width + self.horizontal_gap

        return layouts

    def _port_positions(
        self,
        node_layouts: List[NodeLayout],
        ports: Dict[int, List[Tuple[int, str]]],
    ) -> Dict[Tuple[int, str], int]:
        """Centre each box's ports on its border, one cell apart."""
        positions: Dict[Tuple[int, str], int] = {}

        for layout in node_layouts:
            node_ports = ports[layout.node.column]
            interior = layout.width - 2
            start_x = layout.x + 1 + (interior - len(node_ports)) // 2
            for offset, port in enumerate(node_ports):
                positions[port] = start_x + offset

        return positions

    def _total_width(self, node_layouts: List[NodeLayout]) -> int:
        if not node_layouts:
            return 0
        return node_layouts[-1].right_x + 1


def compute_layout(graph: GraphModel, **kwargs) -> LayoutResult:
    """
    Convenience function to lay out a graph.

    Args:
        graph: Graph model to lay out
        **kwargs: Passed to LayoutEngine

    Returns:
        LayoutResult
    """
    return LayoutEngine(**kwargs).layout(graph)
