"""
Parser module for diagram generation.

Handles parsing of input text into an ordered list of edges.

Each non-blank line holds exactly one connection::

    A -> B
    "Load data" -> Validate
    Done <- Validate

Labels are runs of non-whitespace characters containing neither the
arrow token nor a double quote. Wrapping a label in double quotes allows
plain spaces inside it. A reversed arrow ``B <- A`` is read as
``A -> B``.
"""

import logging
import re
from typing import List, Optional

from .models import Edge

logger = logging.getLogger(__name__)

# Quoted labels may hold plain spaces but no other whitespace; bare labels
# hold neither, and neither kind may contain a double quote.
_QUOTED = r'"((?:(?!{arrow})[^"\s]| )+)"'
_BARE = r'((?:(?!{arrow})[^"\s])+)'


def _line_pattern(arrow: str) -> "re.Pattern[str]":
    token = re.escape(arrow)
    label = "(?:" + _QUOTED.format(arrow=token) + "|" + _BARE.format(arrow=token) + ")"
    return re.compile(r"^\s*" + label + r"\s*" + token + r"\s*" + label + r"\s*$")


class ParseError(Exception):
    """
    Raised when an input line is not a valid connection.

    Attributes:
        line_number: 1-based number of the offending line.
        line_text: The offending line as written.
    """

    def __init__(self, line_number: int, line_text: str):
        self.line_number = line_number
        self.line_text = line_text
        super().__init__(f"Line {line_number}: cannot parse connection: {line_text}")


class Parser:
    """Parses diagram input text into edges."""

    FORWARD_PATTERN = _line_pattern("->")
    REVERSE_PATTERN = _line_pattern("<-")

    def parse(self, input_text: str) -> List[Edge]:
        """
        Parse input text and return its edges in order.

        Args:
            input_text: Multi-line string with connections like "A -> B"

        Returns:
            List of Edge tuples; empty when the input has no content.

        Raises:
            ParseError: On the first line that is not a connection.
        """
        edges: List[Edge] = []

        for line_num, line in enumerate(input_text.splitlines(), 1):
            if not line.strip():
                continue

            edge = self.parse_line(line)
            if edge is None:
                raise ParseError(line_num, line)
            edges.append(edge)

        logger.debug("parsed %d edge(s)", len(edges))
        return edges

    def parse_line(self, line: str) -> Optional[Edge]:
        """Parse a single line, returning None if it is not a connection."""
        match = self.FORWARD_PATTERN.match(line)
        if match:
            source, target = self._labels(match)
            return Edge(source, target)

        match = self.REVERSE_PATTERN.match(line)
        if match:
            target, source = self._labels(match)
            return Edge(source, target)

        return None

    @staticmethod
    def _labels(match: "re.Match[str]") -> List[str]:
        # Groups come in (quoted, bare) pairs, one pair per label
        quoted_left, bare_left, quoted_right, bare_right = match.groups()
        return [quoted_left or bare_left, quoted_right or bare_right]


def parse_edges(input_text: str) -> List[Edge]:
    """
    Convenience function to parse diagram input.

    Args:
        input_text: Multi-line string with connections

    Returns:
        List of Edge tuples
    """
    parser = Parser()
    return parser.parse(input_text)
