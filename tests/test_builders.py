import pytest

from quadtopo.builders import GRID_OFFSET, GRID_SCALE, build_lattice, lattice_vertex_id


def test_build_lattice_counts():
    grid = build_lattice(3, 2)
    assert len(grid.vertices) == 12
    assert len(grid.edges) == 17
    assert all(v.authoritative for v in grid.vertices.values())


def test_perimeter_only_counts():
    grid = build_lattice(3, 2, perimeter_only=True)
    assert len(grid.edges) == 10
    assert lattice_vertex_id(1, 1) in grid.vertices


def test_lattice_positions():
    grid = build_lattice(2, 2)
    vertex = grid.vertices[lattice_vertex_id(2, 1)]
    assert vertex.position() == (GRID_OFFSET[0] + 2 * GRID_SCALE, GRID_OFFSET[1] + GRID_SCALE)


def test_lattice_metadata():
    grid = build_lattice(1, 4, metadata={"rule": "tri-quad"})
    assert grid.metadata == {"cols": 1, "rows": 4, "rule": "tri-quad"}


def test_invalid_size():
    with pytest.raises(ValueError):
        build_lattice(0, 3)
