"""
Subprocess-backed implementation of the process runner.
"""

from __future__ import annotations

import logging
import subprocess
from typing import List, Optional, Sequence

from .errors import ToolFailure, ToolInvocationError
from .interfaces import Destination, ProcessResult


logger = logging.getLogger(__name__)


class SubprocessRunner:
    """Run external tools with :mod:`subprocess`."""

    def __init__(self) -> None:
        # Detached children outlive the run; their handles are kept, never waited on.
        self.launched: List[subprocess.Popen] = []

    def run(
        self,
        argv: Sequence[str],
        *,
        stdin: Optional[bytes] = None,
        stdout: Destination = subprocess.PIPE,
        stderr: Destination = subprocess.DEVNULL,
    ) -> ProcessResult:
        argv = tuple(argv)
        logger.debug("Running: %s", " ".join(argv))
        try:
            completed = subprocess.run(
                argv,
                input=stdin,
                stdout=stdout,
                stderr=stderr,
                check=False,
            )
        except OSError as e:
            raise ToolInvocationError(argv[0], ToolFailure.LAUNCH, reason=str(e)) from e
        return ProcessResult(argv=argv, returncode=completed.returncode, stdout=completed.stdout or b"")

    def launch(
        self,
        argv: Sequence[str],
        *,
        stdout: Destination = subprocess.DEVNULL,
        stderr: Destination = subprocess.DEVNULL,
    ) -> None:
        argv = tuple(argv)
        logger.debug("Launching: %s", " ".join(argv))
        try:
            process = subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=stdout,
                stderr=stderr,
                start_new_session=True,
            )
        except OSError as e:
            raise ToolInvocationError(argv[0], ToolFailure.LAUNCH, reason=str(e)) from e
        self.launched.append(process)
