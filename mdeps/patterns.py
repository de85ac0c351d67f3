"""
Glob patterns over dependency group and artifact names.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from fnmatch import fnmatchcase
from typing import Iterable, List, Sequence, Tuple

from .errors import InvalidPatternError
from .models import Coordinate


class PatternMode(Enum):
    """How the group and artifact globs combine when matching."""

    BOTH_SPECIFIED = "both_specified"
    EITHER = "either"


def glob_match(name: str, glob: str) -> bool:
    """Case-sensitive glob match; ``[^...]`` negates like ``[!...]``."""
    return fnmatchcase(name, glob.replace("[^", "[!"))


@dataclass(frozen=True)
class Pattern:
    """A user-supplied filter such as ``org.foo``, ``org.foo:*`` or ``*:bar``."""

    group_glob: str
    artifact_glob: str
    mode: PatternMode

    @classmethod
    def parse(cls, raw: str) -> "Pattern":
        """Parse a single pattern token.

        A token without ':' (or with one trailing ':') is matched against the
        group OR the artifact. ``group:artifact`` (optionally with one more
        trailing ':') must match both.

        Raises:
            InvalidPatternError: if the token contains ',' or too many ':'.
        """
        if "," in raw:
            raise InvalidPatternError(f"Patterns may not contain ','. Illegal pattern: '{raw}'")

        colons = raw.count(":")
        trailing = raw.endswith(":")

        if colons == 0:
            return cls(raw, raw, PatternMode.EITHER)
        if colons == 1 and trailing:
            stripped = raw[:-1]
            return cls(stripped, stripped, PatternMode.EITHER)
        if colons == 1 or (colons == 2 and trailing):
            parts = raw.split(":")
            return cls(parts[0], parts[1], PatternMode.BOTH_SPECIFIED)

        raise InvalidPatternError(f"Bad dep pattern, too many ':' delimiters: '{raw}'")

    def match(self, coordinate: Coordinate) -> bool:
        group_ok = glob_match(coordinate.group, self.group_glob)
        artifact_ok = glob_match(coordinate.artifact, self.artifact_glob)
        if self.mode is PatternMode.BOTH_SPECIFIED:
            return group_ok and artifact_ok
        return group_ok or artifact_ok

    def to_include_expressions(self) -> List[str]:
        """Expand into ``group:artifact`` filters understood by the tree tool.

        The tree tool only supports conjunctive filters, so an EITHER pattern
        needs one expression per side.
        """
        both = f"{self.group_glob}:{self.artifact_glob}"
        if self.mode is PatternMode.BOTH_SPECIFIED:
            return [both]
        return [both, f"{self.group_glob}:*", f"*:{self.artifact_glob}"]


def parse_patterns(tokens: Iterable[str]) -> Tuple[Pattern, ...]:
    return tuple(Pattern.parse(token) for token in tokens)


def matches_any(patterns: Sequence[Pattern], coordinate: Coordinate) -> bool:
    return any(pattern.match(coordinate) for pattern in patterns)


def include_filter(patterns: Iterable[Pattern]) -> str:
    """Comma-joined union of every pattern's include expressions."""
    return ",".join(
        expression
        for pattern in patterns
        for expression in pattern.to_include_expressions()
    )
