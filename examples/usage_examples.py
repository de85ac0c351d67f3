#!/usr/bin/env python3
"""
Example script showing how to use mdeps as a library.
"""

from pathlib import Path

from mdeps.builder import GraphBuilder, classify
from mdeps.config import MdepsConfig
from mdeps.patterns import parse_patterns
from mdeps.process import SubprocessRunner
from mdeps.render import GraphRenderer
from mdeps.reporting import build_node_table


SAMPLE_TREE = """\
digraph "com.acme:app:jar:1.0-SNAPSHOT" {
    "com.acme:app:jar:1.0-SNAPSHOT" -> "com.google.guava:guava:jar:32.1.2-jre:compile" ;
    "com.acme:app:jar:1.0-SNAPSHOT" -> "org.slf4j:slf4j-api:jar:2.0.9:compile" ;
    "com.google.guava:guava:jar:32.1.2-jre:compile" -> "com.google.guava:failureaccess:jar:1.0.1:compile" ;
    "com.acme:app:jar:1.0-SNAPSHOT" -> "junit:junit:jar:4.13.2:test" ;
 }
"""


def example_classify_saved_tree():
    """Example: Parse tree tool output and classify it against patterns."""
    print("="*60)
    print("Example 1: Classify a saved dependency tree")
    print("="*60)

    patterns = parse_patterns(["com.google.*:*", "junit"])
    graph = GraphBuilder().feed_lines(SAMPLE_TREE.splitlines()).build()
    classification = classify(graph, patterns)

    print(f"\nRoots: {sorted(c.identity() for c in graph.roots)}")
    print(f"Matched: {sorted(c.identity() for c in classification.matched)}")
    print(f"Unmatched: {sorted(c.identity() for c in classification.unmatched)}")
    print()
    print(build_node_table(graph, classification).to_string(index=False))


def example_dot_source():
    """Example: Produce the Graphviz source without rendering it."""
    print("\n" + "="*60)
    print("Example 2: DOT source")
    print("="*60)

    config = MdepsConfig(patterns=parse_patterns(["guava"]))
    graph = GraphBuilder().feed_lines(SAMPLE_TREE.splitlines()).build()
    renderer = GraphRenderer(SubprocessRunner(), config)

    print(renderer.to_dot(graph, classify(graph, config.patterns)))


def example_render_png():
    """Example: Render the sample graph to a PNG (needs Graphviz)."""
    print("\n" + "="*60)
    print("Example 3: Render to PNG")
    print("="*60)

    config = MdepsConfig(patterns=parse_patterns(["org.slf4j:*"]), output_format="png")
    graph = GraphBuilder().feed_lines(SAMPLE_TREE.splitlines()).build()
    renderer = GraphRenderer(SubprocessRunner(), config)

    output = Path("./output/example3.png")
    output.parent.mkdir(parents=True, exist_ok=True)
    with open(output, "wb") as f:
        renderer.render_graph(graph, classify(graph, config.patterns), f)
    print(f"\nGraph written to: {output}")


if __name__ == "__main__":
    import sys

    print("mdeps - Example Usage")
    print("="*60)
    print("\nNOTE: Example 3 requires Graphviz (dot, unflatten) on the PATH.")

    try:
        example_classify_saved_tree()
        example_dot_source()
        example_render_png()

        print("\n" + "="*60)
        print("Examples completed successfully!")
        print("="*60)

    except Exception as e:
        print(f"\nError running examples: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        sys.exit(1)
