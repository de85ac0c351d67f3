"""
Core data models for dependency graphs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Set


@dataclass(frozen=True)
class Coordinate:
    """A single dependency unit identified by group, artifact and version."""

    group: str
    artifact: str
    version: str

    def identity(self) -> str:
        """Canonical node id used in the generated graph description."""
        return f"{self.group}_{self.artifact}_{self.version}"

    def label(self) -> str:
        """Multi-line display label in Graphviz HTML-like markup."""
        return f"{self.group}<BR/>{self.artifact}<BR/>{self.version}"


@dataclass(frozen=True)
class Relation:
    """A directed dependency edge: ``depender`` depends on ``dependee``."""

    depender: Coordinate
    dependee: Coordinate


@dataclass
class DependencyGraph:
    """Roots, nodes and edges discovered in one tree tool run."""

    roots: Set[Coordinate] = field(default_factory=set)
    nodes: Set[Coordinate] = field(default_factory=set)
    edges: Set[Relation] = field(default_factory=set)

    def non_roots(self) -> Set[Coordinate]:
        return self.nodes - self.roots


@dataclass(frozen=True)
class Classification:
    """Non-root nodes split by whether any pattern matched them."""

    matched: FrozenSet[Coordinate]
    unmatched: FrozenSet[Coordinate]

    def role_of(self, coordinate: Coordinate) -> str:
        if coordinate in self.matched:
            return "matched"
        if coordinate in self.unmatched:
            return "unmatched"
        return "root"
