"""Play through a 1 x 4 ladder puzzle: perimeter given, rungs drawn by the player."""

import sys
from pathlib import Path

ROOT = Path(__file__).parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from quadtopo.builders import build_lattice, lattice_vertex_id
from quadtopo.models import Edge, Vertex
from quadtopo.validation import check_topology


def main() -> None:
    level = build_lattice(1, 4, perimeter_only=True, metadata={"rule": "quad"})
    rule = level.rule()
    user_vertices: list[Vertex] = []
    user_edges: list[Edge] = []

    for row in range(1, 5):
        vertices, edges, verdict = check_topology(
            list(level.vertices.values()) + user_vertices,
            list(level.edges.values()) + user_edges,
            rule,
        )
        print(f"{len(user_edges)} rungs: {verdict.message} ({len(edges)} edges)")
        for polygon in verdict.invalid_faces:
            print("  highlight:", polygon)
        if verdict.is_valid:
            break

        # Player drags from slightly off the left grid point to the right one.
        left = level.vertices[lattice_vertex_id(0, row)]
        user_vertices.append(Vertex(f"user_{row}", left.x + 3, left.y - 2))
        user_edges.append(Edge(f"stroke_{row}", (f"user_{row}", lattice_vertex_id(1, row))))


if __name__ == "__main__":
    main()
