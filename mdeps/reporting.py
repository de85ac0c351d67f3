"""
Reporting and export utilities.
"""

from __future__ import annotations

from collections import Counter
from pathlib import Path
import logging

import pandas as pd

from .models import Classification, DependencyGraph
from .render import sorted_coordinates


COLUMNS = [
    "node",
    "group",
    "artifact",
    "version",
    "role",
    "dependencies",
    "dependents",
]


def build_node_table(graph: DependencyGraph, classification: Classification) -> pd.DataFrame:
    """One row per node: roots first, then matched, then unmatched."""
    outgoing = Counter(edge.depender for edge in graph.edges)
    incoming = Counter(edge.dependee for edge in graph.edges)

    ordered = (
        sorted_coordinates(graph.roots)
        + sorted_coordinates(classification.matched)
        + sorted_coordinates(classification.unmatched)
    )
    rows = [
        {
            "node": node.identity(),
            "group": node.group,
            "artifact": node.artifact,
            "version": node.version,
            "role": classification.role_of(node),
            "dependencies": outgoing[node],
            "dependents": incoming[node],
        }
        for node in ordered
    ]
    return pd.DataFrame(rows, columns=COLUMNS)


def export_node_table(
    graph: DependencyGraph,
    classification: Classification,
    report_file: Path,
) -> Path:
    report_file = Path(report_file)
    report_file.parent.mkdir(parents=True, exist_ok=True)
    df = build_node_table(graph, classification)
    df.to_csv(report_file, index=False)
    logger.info("Node report saved to: %s", report_file)
    return report_file


def summarize(graph: DependencyGraph, classification: Classification) -> None:
    logger.info("=" * 60)
    logger.info("DEPENDENCY GRAPH")
    logger.info("=" * 60)
    logger.info("Roots: %d", len(graph.roots))
    logger.info("Matched: %d", len(classification.matched))
    logger.info("Unmatched: %d", len(classification.unmatched))
    logger.info("Edges: %d", len(graph.edges))
    logger.info("=" * 60)
logger = logging.getLogger(__name__)
