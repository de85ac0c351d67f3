"""
Error types raised while building and rendering a dependency graph.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class MdepsError(Exception):
    """Base class for all mdeps failures."""


class InvalidPatternError(MdepsError, ValueError):
    """Raised when a pattern token cannot be parsed."""


class InvalidOptionError(MdepsError, ValueError):
    """Raised when a command-line option value is not acceptable."""


class ToolFailure(Enum):
    """Why an external tool invocation failed."""

    LAUNCH = "launch"
    EXIT_STATUS = "exit_status"


class ToolInvocationError(MdepsError):
    """An external tool could not be started or exited with a failure status."""

    def __init__(
        self,
        tool: str,
        failure: ToolFailure,
        returncode: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> None:
        self.tool = tool
        self.failure = failure
        self.returncode = returncode
        self.reason = reason
        if failure is ToolFailure.LAUNCH:
            message = f"Failed to exec {tool}: {reason}"
        else:
            message = f"{tool} run failed"
        super().__init__(message)
