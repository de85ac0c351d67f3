"""
Graphviz serialization and rendering of a classified dependency graph.
"""

from __future__ import annotations

import logging
from typing import IO, Iterable, List, Tuple, Union

from packaging import version as pkg_version

from .config import MdepsConfig
from .file_utils import temporary_path
from .interfaces import ProcessRunner
from .models import Classification, Coordinate, DependencyGraph, Relation


logger = logging.getLogger(__name__)

DOT = "dot"
UNFLATTEN = "unflatten"

LAYOUT_ARGS = ["-Gnodesep=0.1", "-Granksep=0.02", "-Gdpi=50", "-Gratio=0.56"]
UNFLATTEN_ARGS = ["-l10", "-f", "-c3"]

ROOT_STYLE = "fillcolor=black shape=box fontcolor=white style=filled"
MATCHED_STYLE = "fillcolor=gold style=filled shape=box"
UNMATCHED_STYLE = "shape=box"


def version_key(value: str) -> Tuple[int, Union[pkg_version.Version, str]]:
    """PEP 440 versions compare numerically and sort before anything else."""
    try:
        return 0, pkg_version.parse(value)
    except pkg_version.InvalidVersion:
        return 1, value


def coordinate_key(coordinate: Coordinate):
    # PEP 440 equates "1", "1.0" and "1.0.0"; the raw string breaks the tie.
    return (
        coordinate.group,
        coordinate.artifact,
        version_key(coordinate.version),
        coordinate.version,
    )


def sorted_coordinates(coordinates: Iterable[Coordinate]) -> List[Coordinate]:
    return sorted(coordinates, key=coordinate_key)


def sorted_relations(relations: Iterable[Relation]) -> List[Relation]:
    return sorted(
        relations,
        key=lambda r: (coordinate_key(r.depender), coordinate_key(r.dependee)),
    )


def _node_line(coordinate: Coordinate, style: str) -> str:
    return f'  "{coordinate.identity()}" [{style} label=<{coordinate.label()}>];\n'


class GraphRenderer:
    """Turn a classified graph into DOT source and an image."""

    def __init__(self, runner: ProcessRunner, config: MdepsConfig) -> None:
        self.runner = runner
        self.config = config

    def to_dot(self, graph: DependencyGraph, classification: Classification) -> str:
        parts = ['digraph "deps" {\n']
        for root in sorted_coordinates(graph.roots):
            parts.append(_node_line(root, ROOT_STYLE))
        for node in sorted_coordinates(classification.matched):
            parts.append(_node_line(node, MATCHED_STYLE))
        for node in sorted_coordinates(classification.unmatched):
            parts.append(_node_line(node, UNMATCHED_STYLE))
        for edge in sorted_relations(graph.edges):
            parts.append(f'  "{edge.depender.identity()}" -> "{edge.dependee.identity()}";\n')
        parts.append("}\n")
        return "".join(parts)

    def render(self, dot_path: str, destination: IO[bytes]) -> None:
        """Lay out and render a DOT file into ``destination``.

        The three stages run one after another, each stage's output being the
        next stage's input.

        Raises:
            ToolInvocationError: if any stage cannot be started or fails.
        """
        stream = self.config.diagnostic_stream

        layout = self.runner.run(
            [DOT, *LAYOUT_ARGS, dot_path],
            stderr=stream,
        ).check(DOT)
        unflattened = self.runner.run(
            [UNFLATTEN, *UNFLATTEN_ARGS],
            stdin=layout.stdout,
            stderr=stream,
        ).check(UNFLATTEN)
        self.runner.run(
            [DOT, f"-T{self.config.output_format}"],
            stdin=unflattened.stdout,
            stdout=destination,
            stderr=stream,
        ).check(DOT)

    def render_graph(
        self,
        graph: DependencyGraph,
        classification: Classification,
        destination: IO[bytes],
    ) -> str:
        """Write the DOT source to a scratch file and render it.

        Returns:
            The DOT source that was rendered.
        """
        source = self.to_dot(graph, classification)
        logger.debug("dot file:\n%s", source)
        with temporary_path(".dot") as dot_path:
            dot_path.write_text(source, encoding="utf-8")
            self.render(str(dot_path), destination)
        return source
