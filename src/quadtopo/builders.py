from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from .graph import PlanarGraph
from .models import Edge, Vertex

GRID_SCALE = 60.0
GRID_OFFSET = (100.0, 100.0)


def build_lattice(
    cols: int,
    rows: int,
    scale: float = GRID_SCALE,
    offset: Tuple[float, float] = GRID_OFFSET,
    perimeter_only: bool = False,
    metadata: Optional[dict] = None,
) -> PlanarGraph:
    """Build a *cols* x *rows* cell lattice in game display units.

    Vertex ``g{i}_{j}`` sits at grid column *i*, row *j*; all vertices are
    authoritative.  With *perimeter_only* only the outer ring of unit
    segments is connected, which is how a puzzle starts; otherwise every
    cell is closed and the result is an all-quad mesh.
    """
    if cols < 1 or rows < 1:
        raise ValueError("cols and rows must be >= 1")

    vertices: Dict[Tuple[int, int], Vertex] = {}
    for j in range(rows + 1):
        for i in range(cols + 1):
            vertices[(i, j)] = Vertex(
                id=lattice_vertex_id(i, j),
                x=offset[0] + i * scale,
                y=offset[1] + j * scale,
                authoritative=True,
            )

    edges: List[Edge] = []
    for j in range(rows + 1):
        for i in range(cols):
            if perimeter_only and 0 < j < rows:
                continue
            edges.append(_edge(i, j, i + 1, j))
    for i in range(cols + 1):
        for j in range(rows):
            if perimeter_only and 0 < i < cols:
                continue
            edges.append(_edge(i, j, i, j + 1))

    meta = {"cols": cols, "rows": rows}
    meta.update(metadata or {})
    return PlanarGraph(vertices.values(), edges, meta)


def lattice_vertex_id(i: int, j: int) -> str:
    return f"g{i}_{j}"


def _edge(i1: int, j1: int, i2: int, j2: int) -> Edge:
    a = lattice_vertex_id(i1, j1)
    b = lattice_vertex_id(i2, j2)
    return Edge(id=f"{a}-{b}", vertex_ids=(a, b))
