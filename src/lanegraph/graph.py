"""
Graph module for diagram generation.

Builds the graph model from parsed edges: every distinct label becomes a
Node whose column is fixed by first appearance, and every edge is
classified as forward or back against those columns.

Uses networkx for:
- Exposing the model as a MultiDiGraph
- Cycle detection
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List

import networkx as nx

from .models import ClassifiedEdge, Edge, EdgeKind, Node

logger = logging.getLogger(__name__)


@dataclass
class GraphModel:
    """
    Nodes in column order and edges in input order.

    Attributes:
        nodes: Nodes indexed by column; ``nodes[c].column == c``.
        edges: Classified edges; ``edges[i].index == i``.
    """

    nodes: List[Node] = field(default_factory=list)
    edges: List[ClassifiedEdge] = field(default_factory=list)

    def label(self, node_id: int) -> str:
        """Label of the node at the given column."""
        return self.nodes[node_id].label

    def node_id(self, label: str) -> int:
        """Column of the node with the given label."""
        for node in self.nodes:
            if node.label == label:
                return node.column
        raise KeyError(label)

    @property
    def forward_edges(self) -> List[ClassifiedEdge]:
        return [e for e in self.edges if e.kind is EdgeKind.FORWARD]

    @property
    def back_edges(self) -> List[ClassifiedEdge]:
        return [e for e in self.edges if e.kind is EdgeKind.BACK]

    @property
    def has_cycles(self) -> bool:
        """Whether the graph contains a directed cycle (self-loops count)."""
        return not nx.is_directed_acyclic_graph(self.to_networkx())

    def cycles(self) -> List[List[str]]:
        """
        Elementary cycles as label lists.

        Each cycle starts at its leftmost node; cycles are sorted by the
        columns they visit. Parallel edges do not repeat a cycle.
        """
        found = []
        for cycle in nx.simple_cycles(nx.DiGraph(self.to_networkx())):
            start = cycle.index(min(cycle))
            found.append(cycle[start:] + cycle[:start])
        return [[self.label(node_id) for node_id in cycle] for cycle in sorted(found)]

    def to_networkx(self) -> nx.MultiDiGraph:
        """
        Build a networkx view of the model.

        Nodes are keyed by column and carry ``label`` and ``column``
        attributes; edges carry ``index`` and ``kind``.
        """
        graph = nx.MultiDiGraph()
        for node in self.nodes:
            graph.add_node(node.column, label=node.label, column=node.column)
        for edge in self.edges:
            graph.add_edge(
                edge.source, edge.target, index=edge.index, kind=edge.kind.value
            )
        return graph


def assign_columns(edges: List[Edge]) -> Dict[str, int]:
    """
    Assign a column to every label by first appearance.

    Scans edges in order, checking the source before the target, so a
    simple chain A -> B, B -> C yields columns 0, 1, 2.
    """
    columns: Dict[str, int] = {}
    for source, target in edges:
        for label in (source, target):
            if label not in columns:
                columns[label] = len(columns)
    return columns


def classify(index: int, source: int, target: int) -> ClassifiedEdge:
    """Classify one edge from the final column assignment."""
    kind = EdgeKind.FORWARD if target > source else EdgeKind.BACK
    return ClassifiedEdge(index=index, source=source, target=target, kind=kind)


def build_graph(edges: List[Edge]) -> GraphModel:
    """
    Create a GraphModel from a list of edges.

    Args:
        edges: Parsed (source, target) edges in input order

    Returns:
        GraphModel with nodes in column order and classified edges
    """
    columns = assign_columns(edges)

    nodes = [Node(label=label, column=column) for label, column in columns.items()]
    classified = [
        classify(index, columns[source], columns[target])
        for index, (source, target) in enumerate(edges)
    ]

    model = GraphModel(nodes=nodes, edges=classified)
    logger.debug(
        "graph has %d node(s), %d forward and %d back edge(s)",
        len(nodes),
        len(model.forward_edges),
        len(model.back_edges),
    )
    return model
