import pytest

from quadtopo.builders import build_lattice, lattice_vertex_id
from quadtopo.graph import PlanarGraph
from quadtopo.models import Edge, Vertex
from quadtopo.validation import QUAD_ONLY, TRI_OR_QUAD


def test_check_references():
    vertices = [Vertex("a", 0, 0), Vertex("b", 1, 0)]
    edges = [
        Edge("e1", ("a", "b")),
        Edge("e2", ("b", "a")),
        Edge("e3", ("a", "ghost")),
        Edge("e4", ("b", "b")),
    ]
    errors = PlanarGraph(vertices, edges).check_references()

    assert errors == [
        "Edge e2 duplicates edge e1",
        "Edge e3 references missing vertex ghost",
        "Edge e4 is a self-loop on b",
    ]


def test_clean_lattice_has_no_reference_errors():
    assert build_lattice(2, 3).check_references() == []


def test_rule_from_metadata():
    assert PlanarGraph([], []).rule() is QUAD_ONLY
    assert PlanarGraph([], [], {"rule": "tri-quad"}).rule() is TRI_OR_QUAD
    with pytest.raises(ValueError):
        PlanarGraph([], [], {"rule": "pentagons"}).rule()


def test_validate_faces_uses_metadata_rule():
    vertices = [Vertex("a", 0, 0), Vertex("b", 1, 0), Vertex("c", 1, 1), Vertex("d", 0, 1)]
    edges = [
        Edge("ab", ("a", "b")),
        Edge("bc", ("b", "c")),
        Edge("cd", ("c", "d")),
        Edge("da", ("d", "a")),
        Edge("ac", ("a", "c")),
    ]
    relaxed = PlanarGraph(vertices, edges, {"rule": "tri-quad"})

    assert relaxed.validate_faces().is_valid
    assert not relaxed.validate_faces(QUAD_ONLY).is_valid


def test_repaired_keeps_metadata():
    grid = build_lattice(1, 1, metadata={"rule": "quad"})
    near = grid.vertices[lattice_vertex_id(1, 1)]
    grid.vertices["extra"] = Vertex("extra", near.x + 1, near.y + 1)
    grid.edges["dup"] = Edge("dup", ("extra", lattice_vertex_id(0, 1)))

    repaired = grid.repaired()

    assert "extra" not in repaired.vertices
    assert len(repaired.edges) == 4
    assert repaired.metadata == grid.metadata
    assert repaired.metadata is not grid.metadata


def test_faces_include_outer():
    assert len(build_lattice(2, 2).faces()) == 5


def _hyphenated_square():
    vertices = [
        Vertex("a", 0, 0),
        Vertex("b-c", 60, 0),
        Vertex("c", 60, 60),
        Vertex("a-b", 0, 60),
    ]
    edges = [
        Edge("e1", ("a", "b-c")),
        Edge("e2", ("b-c", "c")),
        Edge("e3", ("c", "a-b")),
        Edge("e4", ("a-b", "a")),
    ]
    return vertices, edges


def test_repaired_keeps_every_edge_with_hyphenated_ids():
    repaired = PlanarGraph(*_hyphenated_square()).repaired()

    assert len(repaired.edges) == 4
    assert repaired.check_references() == []
    assert repaired.validate_faces().message == "Perfect Topology!"


def test_check_references_reports_reused_ids():
    vertices = [Vertex("a", 0, 0), Vertex("b", 1, 0), Vertex("a", 5, 5)]
    edges = [Edge("e1", ("a", "b")), Edge("e1", ("b", "a"))]
    graph = PlanarGraph(vertices, edges)

    assert graph.vertices["a"].position() == (5, 5)
    assert graph.edges["e1"].vertex_ids == ("b", "a")
    assert graph.check_references() == [
        "Duplicate vertex id a, earlier record replaced",
        "Duplicate edge id e1, earlier record replaced",
    ]
