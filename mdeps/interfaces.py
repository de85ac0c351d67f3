"""
Interfaces for running external tools.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import IO, Optional, Protocol, Sequence, Tuple, Union

from .errors import ToolFailure, ToolInvocationError


# A binary stream, or subprocess.PIPE / subprocess.DEVNULL.
Destination = Union[int, IO[bytes], IO[str]]


@dataclass(frozen=True)
class ProcessResult:
    """Outcome of one blocking external process run."""

    argv: Tuple[str, ...]
    returncode: int
    stdout: bytes = b""

    def check(self, tool: str) -> "ProcessResult":
        if self.returncode != 0:
            raise ToolInvocationError(tool, ToolFailure.EXIT_STATUS, returncode=self.returncode)
        return self


class ProcessRunner(Protocol):
    """Start external processes."""

    def run(
        self,
        argv: Sequence[str],
        *,
        stdin: Optional[bytes] = None,
        stdout: Destination = subprocess.PIPE,
        stderr: Destination = subprocess.DEVNULL,
    ) -> ProcessResult:
        ...

    def launch(
        self,
        argv: Sequence[str],
        *,
        stdout: Destination = subprocess.DEVNULL,
        stderr: Destination = subprocess.DEVNULL,
    ) -> None:
        ...
