"""
mdeps

Render a filtered, highlighted picture of a Maven project's dependency graph.
"""

__version__ = "0.1.0"

from .cli import main

__all__ = ["main"]
