"""
Dependency graph construction and pattern classification.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Sequence

from .models import Classification, Coordinate, DependencyGraph, Relation
from .parser import ParsedLine, parse_line
from .patterns import Pattern, matches_any
from .tree_tool import MavenTreeTool


logger = logging.getLogger(__name__)

LineParser = Callable[[str], Optional[ParsedLine]]


class GraphBuilder:
    """Accumulate roots, nodes and edges from tree tool output."""

    def __init__(self, line_parser: LineParser = parse_line) -> None:
        """Initialize an empty builder.

        Args:
            line_parser: Strategy turning one output line into a root
                declaration ``(root, None)``, an edge ``(depender, dependee)``
                or None.
        """
        self._parse = line_parser
        self.roots = set()
        self.nodes = set()
        self.edges = set()

    def add_root(self, root: Coordinate) -> None:
        self.roots.add(root)
        self.nodes.add(root)

    def add_edge(self, depender: Coordinate, dependee: Coordinate) -> None:
        self.nodes.add(depender)
        self.nodes.add(dependee)
        self.edges.add(Relation(depender, dependee))

    def feed(self, line: str) -> None:
        parsed = self._parse(line)
        if parsed is None:
            return
        first, second = parsed
        if second is None:
            self.add_root(first)
        else:
            self.add_edge(first, second)

    def feed_lines(self, lines: Iterable[str]) -> "GraphBuilder":
        for line in lines:
            self.feed(line)
        return self

    def load(self, tree_tool: MavenTreeTool) -> "GraphBuilder":
        """Run the tree tool and feed everything it reported."""
        return self.feed_lines(tree_tool.dump_lines())

    def build(self) -> DependencyGraph:
        graph = DependencyGraph(
            roots=set(self.roots),
            nodes=set(self.nodes),
            edges=set(self.edges),
        )
        logger.info(
            "Parsed %d roots, %d nodes, %d edges",
            len(graph.roots), len(graph.nodes), len(graph.edges),
        )
        return graph


def classify(graph: DependencyGraph, patterns: Sequence[Pattern]) -> Classification:
    """Split non-root nodes into those matched by any pattern and the rest."""
    matched = set()
    unmatched = set()
    for node in graph.non_roots():
        if matches_any(patterns, node):
            logger.debug("Node matches pattern: %s", node.identity())
            matched.add(node)
        else:
            logger.debug("Node does not match pattern: %s", node.identity())
            unmatched.add(node)
    return Classification(matched=frozenset(matched), unmatched=frozenset(unmatched))
