"""Tests for tree output parsing, graph building and classification."""

import logging

from mdeps.builder import GraphBuilder, classify
from mdeps.models import Coordinate, Relation
from mdeps.parser import parse_line
from mdeps.patterns import parse_patterns


ROOT_LINE = 'digraph "com.acme:app:jar:1.0:compile" {'
EDGE_LINE = '"com.acme:app:jar:1.0:compile" -> "com.acme:lib:jar:2.0:compile" ;'

APP = Coordinate("com.acme", "app", "1.0")
LIB = Coordinate("com.acme", "lib", "2.0")


def test_parse_root_declaration():
    assert parse_line(ROOT_LINE) == (APP, None)


def test_parse_root_without_scope():
    assert parse_line('digraph "com.acme:app:war:1.0-SNAPSHOT" {') == (
        Coordinate("com.acme", "app", "1.0-SNAPSHOT"),
        None,
    )


def test_parse_edge_drops_packaging_and_scope():
    assert parse_line(EDGE_LINE) == (APP, LIB)


def test_parse_edge_with_indentation_and_mixed_field_counts():
    line = '\t"com.acme:app:jar:1.0-SNAPSHOT" -> "junit:junit:jar:4.13.2:test" ;\n'

    assert parse_line(line) == (
        Coordinate("com.acme", "app", "1.0-SNAPSHOT"),
        Coordinate("junit", "junit", "4.13.2"),
    )


def test_parse_ignores_other_lines():
    assert parse_line("}") is None
    assert parse_line("") is None
    assert parse_line("[INFO] BUILD SUCCESS") is None


def test_feeding_the_same_edge_twice_is_a_no_op():
    graph = GraphBuilder().feed_lines([EDGE_LINE, EDGE_LINE]).build()

    assert graph.edges == {Relation(APP, LIB)}
    assert graph.nodes == {APP, LIB}


def test_roots_are_nodes():
    graph = GraphBuilder().feed_lines([ROOT_LINE, "}"]).build()

    assert graph.roots == {APP}
    assert graph.nodes == {APP}
    assert graph.edges == set()


def test_every_edge_endpoint_is_a_node():
    lines = [
        ROOT_LINE,
        EDGE_LINE,
        '"com.acme:lib:jar:2.0:compile" -> "org.slf4j:slf4j-api:jar:2.0.9:compile" ;',
        '"org.slf4j:slf4j-api:jar:2.0.9:compile" -> "com.acme:lib:jar:2.0:compile" ;',
        "}",
    ]
    graph = GraphBuilder().feed_lines(lines).build()

    assert len(graph.edges) == 3
    for edge in graph.edges:
        assert edge.depender in graph.nodes
        assert edge.dependee in graph.nodes
    assert graph.roots <= graph.nodes


def test_multi_module_output_yields_several_roots():
    lines = [
        'digraph "com.acme:parent:pom:1.0" {',
        "}",
        'digraph "com.acme:core:jar:1.0" {',
        '"com.acme:core:jar:1.0" -> "com.acme:lib:jar:2.0:compile" ;',
        "}",
    ]
    graph = GraphBuilder().feed_lines(lines).build()

    assert graph.roots == {
        Coordinate("com.acme", "parent", "1.0"),
        Coordinate("com.acme", "core", "1.0"),
    }


def test_classification_excludes_roots():
    x = Coordinate("com.acme", "x", "1")
    y = Coordinate("com.acme", "y", "1")
    z = Coordinate("org.other", "z", "1")
    builder = GraphBuilder()
    builder.add_root(x)
    builder.add_edge(x, y)
    builder.add_edge(x, z)
    graph = builder.build()

    classification = classify(graph, parse_patterns(["com.acme:*"]))

    assert classification.matched == {y}
    assert classification.unmatched == {z}
    assert x not in classification.matched | classification.unmatched


def test_without_patterns_everything_is_unmatched():
    graph = GraphBuilder().feed_lines([ROOT_LINE, EDGE_LINE]).build()

    classification = classify(graph, ())

    assert classification.matched == frozenset()
    assert classification.unmatched == {LIB}


def test_end_to_end_scenario():
    graph = GraphBuilder().feed_lines([ROOT_LINE, EDGE_LINE]).build()

    classification = classify(graph, parse_patterns(["com.acme:lib"]))

    assert graph.roots == {APP}
    assert graph.nodes == {APP, LIB}
    assert graph.edges == {Relation(APP, LIB)}
    assert classification.matched == {LIB}
    assert classification.unmatched == frozenset()


def test_classification_decisions_are_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="mdeps")
    graph = GraphBuilder().feed_lines([ROOT_LINE, EDGE_LINE]).build()

    classify(graph, parse_patterns(["nothing"]))

    assert "Node does not match pattern: com.acme_lib_2.0" in caplog.text


def test_line_parser_is_swappable():
    def split_parser(line):
        depender, _, dependee = line.partition(" > ")
        if not dependee:
            return None
        return Coordinate(*depender.split("/")), Coordinate(*dependee.split("/"))

    graph = GraphBuilder(line_parser=split_parser).feed_lines(
        ["com.acme/app/1.0 > com.acme/lib/2.0", "noise"]
    ).build()

    assert graph.edges == {Relation(APP, LIB)}


def test_load_reads_from_the_tree_tool():
    class FakeTreeTool:
        def dump_lines(self):
            return [ROOT_LINE + "\n", EDGE_LINE + "\n", "}\n"]

    graph = GraphBuilder().load(FakeTreeTool()).build()

    assert graph.roots == {APP}
    assert graph.edges == {Relation(APP, LIB)}
