"""Pytest configuration and shared fixtures for lanegraph tests."""

import pytest

from lanegraph import DiagramGenerator, LayoutEngine, Parser, build_graph
from lanegraph.models import Edge
from lanegraph.renderer import Canvas


@pytest.fixture
def simple_input():
    """Simple linear chain input."""
    return """
    A -> B
    B -> C
    C -> D
    """


@pytest.fixture
def cyclic_input():
    """Three-node cycle."""
    return """
    A -> B
    B -> C
    C -> A
    """


@pytest.fixture
def nested_input():
    """Two back edges into A, one nested inside the other."""
    return """
    A -> B
    B -> C
    C -> A
    B -> A
    """


@pytest.fixture
def crossing_input():
    """Two back edges whose spans interleave."""
    return """
    A -> B
    B -> C
    C -> D
    C -> A
    D -> B
    """


@pytest.fixture
def parser():
    """Default Parser instance."""
    return Parser()


@pytest.fixture
def generator():
    """Default DiagramGenerator instance."""
    return DiagramGenerator()


@pytest.fixture
def layout_engine():
    """Default LayoutEngine instance."""
    return LayoutEngine()


@pytest.fixture
def canvas():
    """Blank 20x10 canvas."""
    return Canvas(20, 10)


@pytest.fixture
def cyclic_graph():
    """Pre-built three-node cycle graph."""
    return build_graph([Edge("A", "B"), Edge("B", "C"), Edge("C", "A")])
