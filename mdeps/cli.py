"""
Command-line interface for mdeps.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .builder import GraphBuilder, classify
from .config import (
    ALL_SCOPES,
    DEFAULT_BROWSER,
    DEFAULT_EXCLUDED_SCOPES,
    DEFAULT_OUTPUT_FORMAT,
    OUTPUT_FORMATS,
    STDOUT_MARKER,
    MdepsConfig,
    excluded_from_included,
    validate_output_format,
)
from .errors import InvalidOptionError, InvalidPatternError, ToolFailure, ToolInvocationError
from .file_utils import check_writable, new_temp_path, replace_on_success
from .interfaces import ProcessRunner
from .patterns import parse_patterns
from .process import SubprocessRunner
from .render import GraphRenderer
from .reporting import export_node_table, summarize
from .tree_tool import MavenTreeTool


logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_LAUNCH_FAILED = 1
EXIT_TOOL_FAILED = 2
EXIT_USAGE = 64


class _ArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises instead of exiting on bad input."""

    def error(self, message):
        raise InvalidOptionError(message)


def _output_format(value: str) -> str:
    try:
        return validate_output_format(value)
    except InvalidOptionError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _excluded_scopes(value: str):
    try:
        return excluded_from_included(value.split(","))
    except InvalidOptionError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    from . import __version__

    parser = _ArgumentParser(
        prog="mdeps",
        usage="%(prog)s [options] [patterns]...",
        description=(
            "Render the dependency graph of the Maven project in the current "
            "directory, highlighting dependencies that match the given patterns"
        ),
    )

    parser.add_argument(
        "patterns",
        nargs="*",
        help="Glob patterns: 'group', 'artifact', 'group:artifact' (no ',')"
    )

    parser.add_argument(
        "-b", "--browser",
        default=DEFAULT_BROWSER,
        help=f"Program used to open the rendered graph. Default: {DEFAULT_BROWSER}"
    )

    parser.add_argument(
        "-o", "--output-file",
        default=None,
        metavar="PATH",
        help="Where to write the image ('-' for standard output). Default: a temporary file"
    )

    parser.add_argument(
        "-f", "--output-format",
        type=_output_format,
        default=DEFAULT_OUTPUT_FORMAT,
        metavar="{" + ",".join(OUTPUT_FORMATS) + "}",
        help=f"Image format. Default: {DEFAULT_OUTPUT_FORMAT}"
    )

    parser.add_argument(
        "--scopes",
        dest="excluded_scopes",
        type=_excluded_scopes,
        default=DEFAULT_EXCLUDED_SCOPES,
        metavar="compile,runtime,test",
        help=(
            f"Dependency scopes to include, from {','.join(ALL_SCOPES)}. "
            f"Default: everything except {','.join(DEFAULT_EXCLUDED_SCOPES)}"
        )
    )

    parser.add_argument(
        "-d", "--debug",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Print debug output"
    )

    parser.add_argument(
        "-v", "--mvn-verbose",
        action=argparse.BooleanOptionalAction,
        default=False,
        help="Invoke maven with verbose=true"
    )

    parser.add_argument(
        "--report",
        type=Path,
        default=None,
        metavar="CSV_PATH",
        help="Also write a CSV table of every node and its classification"
    )

    parser.add_argument(
        "--no-open",
        dest="open_viewer",
        action="store_false",
        help="Do not open the rendered graph"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def parse_args(argv: Optional[List[str]] = None) -> MdepsConfig:
    """Parse command-line arguments into a run configuration.

    Raises:
        InvalidOptionError: for unknown options or bad option values.
        InvalidPatternError: for malformed pattern tokens.
    """
    args = build_parser().parse_intermixed_args(argv)
    if args.output_file not in (None, STDOUT_MARKER):
        try:
            check_writable(Path(args.output_file))
        except OSError as e:
            raise InvalidOptionError(f"Cannot write output file: {e}") from e
    return MdepsConfig(
        patterns=parse_patterns(args.patterns),
        browser=args.browser,
        output_file=args.output_file,
        output_format=args.output_format,
        excluded_scopes=tuple(args.excluded_scopes),
        debug=args.debug,
        mvn_verbose=args.mvn_verbose,
        report_file=args.report,
        open_viewer=args.open_viewer,
    )


def configure_logging(debug: bool) -> logging.Logger:
    """Send mdeps log records to stderr; DEBUG with --debug, else WARNING."""
    level = logging.DEBUG if debug else logging.WARNING
    package_logger = logging.getLogger("mdeps")
    package_logger.handlers.clear()
    package_logger.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    package_logger.addHandler(handler)
    return package_logger


def open_viewer(runner: ProcessRunner, config: MdepsConfig, image: Path) -> None:
    stream = config.diagnostic_stream
    try:
        runner.launch([config.browser, str(image)], stdout=stream, stderr=stream)
    except ToolInvocationError as e:
        logger.warning("Could not open %s: %s", image, e)


def run(config: MdepsConfig, runner: ProcessRunner) -> Optional[Path]:
    """Build, classify, render and show the dependency graph.

    Returns:
        Path of the rendered image, or None when it went to standard output.
    """
    graph = GraphBuilder().load(MavenTreeTool(runner, config)).build()
    classification = classify(graph, config.patterns)
    summarize(graph, classification)

    if config.report_file is not None:
        export_node_table(graph, classification, config.report_file)

    renderer = GraphRenderer(runner, config)

    if config.writes_to_stdout:
        sys.stdout.flush()
        renderer.render_graph(graph, classification, sys.stdout.buffer)
        return None

    if config.output_file:
        output_path = Path(config.output_file)
        generated = False
    else:
        output_path = new_temp_path(f".{config.output_format}")
        generated = True

    try:
        with replace_on_success(output_path) as output:
            renderer.render_graph(graph, classification, output)
    except ToolInvocationError:
        if generated:
            output_path.unlink(missing_ok=True)
        raise

    logger.info("Graph written to: %s", output_path)

    if config.open_viewer:
        open_viewer(runner, config, output_path)
    return output_path


def main(argv: Optional[List[str]] = None, runner: Optional[ProcessRunner] = None) -> int:
    """Main entry point for the CLI."""
    try:
        config = parse_args(argv)
    except (InvalidOptionError, InvalidPatternError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE

    configure_logging(config.debug)

    try:
        run(config, runner or SubprocessRunner())
    except ToolInvocationError as e:
        print(e, file=sys.stderr)
        if e.failure is ToolFailure.LAUNCH:
            return EXIT_LAUNCH_FAILED
        return EXIT_TOOL_FAILED

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
