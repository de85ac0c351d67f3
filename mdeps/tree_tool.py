"""
Invocation of ``mvn dependency:tree`` in DOT output mode.
"""

from __future__ import annotations

import logging
from typing import List

from .config import MdepsConfig
from .file_utils import temporary_path
from .interfaces import ProcessRunner


logger = logging.getLogger(__name__)

MVN = "mvn"


class MavenTreeTool:
    """Dump the dependency graph of the Maven project in the working directory."""

    def __init__(self, runner: ProcessRunner, config: MdepsConfig) -> None:
        self.runner = runner
        self.config = config

    def command(self, output_file: str) -> List[str]:
        return [
            MVN,
            "dependency:tree",
            "-DoutputType=dot",
            f"-Dverbose={str(self.config.mvn_verbose).lower()}",
            f"-DoutputFile={output_file}",
            "-DappendOutput=true",
            f"-Dincludes={self.config.include_filter()}",
            f"-Dexcludes={self.config.exclude_filter()}",
        ]

    def dump_lines(self) -> List[str]:
        """Run the tree tool and return the lines of the graph it wrote.

        Raises:
            ToolInvocationError: if mvn cannot be started or fails.
        """
        stream = self.config.diagnostic_stream
        with temporary_path(".dot") as scratch:
            self.runner.run(
                self.command(str(scratch)),
                stdout=stream,
                stderr=stream,
            ).check(MVN)
            with open(scratch, encoding="utf-8") as f:
                lines = f.readlines()
        logger.debug("Tree tool wrote %d lines", len(lines))
        return lines
