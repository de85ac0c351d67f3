"""
Run configuration built once from command-line input.
"""

from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple

from .errors import InvalidOptionError
from .interfaces import Destination
from .patterns import Pattern, include_filter


ALL_SCOPES = ("compile", "provided", "runtime", "test", "system", "import")
DEFAULT_EXCLUDED_SCOPES = ("compile", "runtime")
OUTPUT_FORMATS = ("svg", "pdf", "png")
DEFAULT_OUTPUT_FORMAT = "svg"
DEFAULT_BROWSER = "google-chrome"
STDOUT_MARKER = "-"


def excluded_from_included(included: Iterable[str]) -> Tuple[str, ...]:
    """Turn the scopes to include into the complement the tree tool excludes."""
    included = [scope.strip() for scope in included if scope.strip()]
    unknown = [scope for scope in included if scope not in ALL_SCOPES]
    if unknown:
        raise InvalidOptionError(
            f"Unknown scope(s): {', '.join(unknown)}. Choose from {', '.join(ALL_SCOPES)}"
        )
    return tuple(scope for scope in ALL_SCOPES if scope not in included)


def validate_output_format(value: str) -> str:
    if value not in OUTPUT_FORMATS:
        raise InvalidOptionError(f"Unknown output format: '{value}'")
    return value


@dataclass(frozen=True)
class MdepsConfig:
    """Immutable settings for a single run."""

    patterns: Tuple[Pattern, ...] = ()
    browser: str = DEFAULT_BROWSER
    output_file: Optional[str] = None
    output_format: str = DEFAULT_OUTPUT_FORMAT
    excluded_scopes: Tuple[str, ...] = DEFAULT_EXCLUDED_SCOPES
    debug: bool = False
    mvn_verbose: bool = False
    report_file: Optional[Path] = None
    open_viewer: bool = True

    @property
    def writes_to_stdout(self) -> bool:
        return self.output_file == STDOUT_MARKER

    @property
    def diagnostic_stream(self) -> Destination:
        """Where child process output goes: stderr with --debug, else discarded."""
        return sys.stderr if self.debug else subprocess.DEVNULL

    def include_filter(self) -> str:
        return include_filter(self.patterns)

    def exclude_filter(self) -> str:
        return ",".join(f"::::{scope}" for scope in self.excluded_scopes)
