"""
Line parser for the DOT output of ``mvn dependency:tree``.

Coordinates in that output look like ``group:artifact:packaging:version[:scope]``.
Only group, artifact and version are kept.
"""

from __future__ import annotations

import re
from typing import Optional, Tuple

from .models import Coordinate


_COORDINATE = r'"([^:]+):([^:]+):([^:]+):([^:]+)(:[^:]+)?"'

ROOT_RE = re.compile(r"digraph " + _COORDINATE)
EDGE_RE = re.compile(_COORDINATE + r"\s+->\s+" + _COORDINATE)

ParsedLine = Tuple[Coordinate, Optional[Coordinate]]


def _coordinate(groups: Tuple[Optional[str], ...]) -> Coordinate:
    group, artifact, _packaging, version, _extra = groups
    return Coordinate(group, artifact, version)


def parse_line(line: str) -> Optional[ParsedLine]:
    """Parse one line of tree tool output.

    Returns:
        ``(root, None)`` for a root declaration, ``(depender, dependee)`` for
        an edge, or None for any other line.
    """
    match = ROOT_RE.search(line)
    if match:
        return _coordinate(match.groups()), None

    match = EDGE_RE.search(line)
    if match:
        groups = match.groups()
        return _coordinate(groups[:5]), _coordinate(groups[5:])

    return None
