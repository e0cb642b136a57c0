"""Half-edge construction and face walking for straight-line plane graphs.

Every undirected edge yields two twinned half-edges.  Around each vertex
the outgoing half-edges are sorted by polar angle (counter-clockwise), and
a face boundary is recovered by arriving along a half-edge, locating its
twin in the destination's sorted list and leaving along the entry just
before it.  Each half-edge belongs to exactly one face walk, so the face
side counts sum to twice the number of edges.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from .geometry import direction_angle, polygon_area
from .models import Edge, Face, Vertex

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class HalfEdge:
    index: int
    origin: str
    dest: str
    angle: float
    twin: int


def build_half_edges(
    vertices: Mapping[str, Vertex],
    edges: Iterable[Edge],
) -> List[HalfEdge]:
    """Return two twinned half-edges per usable edge.

    Edges that reference a missing vertex or join a vertex to itself are
    skipped rather than treated as fatal.
    """
    half_edges: List[HalfEdge] = []
    for edge in edges:
        a, b = edge.vertex_ids
        u = vertices.get(a)
        v = vertices.get(b)
        if u is None or v is None:
            _LOGGER.debug("skipping edge %s: missing endpoint", edge.id)
            continue
        if a == b:
            _LOGGER.debug("skipping edge %s: self-loop", edge.id)
            continue
        i = len(half_edges)
        half_edges.append(HalfEdge(i, a, b, direction_angle(u, v), i + 1))
        half_edges.append(HalfEdge(i + 1, b, a, direction_angle(v, u), i))
    return half_edges


def sort_outgoing(half_edges: Sequence[HalfEdge]) -> Dict[str, List[HalfEdge]]:
    """Group half-edges by origin, each group sorted by angle ascending.

    The sort is stable, so equal angles keep their construction order.
    """
    outgoing: Dict[str, List[HalfEdge]] = defaultdict(list)
    for he in half_edges:
        outgoing[he.origin].append(he)
    return {vid: sorted(group, key=lambda he: he.angle) for vid, group in outgoing.items()}


def next_half_edge(
    he: HalfEdge,
    outgoing: Mapping[str, List[HalfEdge]],
) -> Optional[HalfEdge]:
    """The half-edge following *he* on its face, or None if *he* has no twin at its destination."""
    siblings = outgoing.get(he.dest, [])
    for pos, candidate in enumerate(siblings):
        if candidate.index == he.twin:
            return siblings[(pos - 1) % len(siblings)]
    return None


def extract_faces(
    vertices: Mapping[str, Vertex],
    edges: Iterable[Edge],
) -> List[Face]:
    """Walk every half-edge once and return the closed faces, outer face included.

    Walks start from vertices in *vertices* order and, at each vertex, from
    its outgoing half-edges in angle order.  A walk that reaches an
    already-consumed half-edge other than its start, or cannot find a twin,
    contributes no face.
    """
    half_edges = build_half_edges(vertices, edges)
    outgoing = sort_outgoing(half_edges)
    consumed: set[int] = set()
    faces: List[Face] = []

    for vid in vertices:
        for start in outgoing.get(vid, []):
            if start.index in consumed:
                continue
            path = _walk(start, outgoing, consumed)
            if path is None:
                _LOGGER.debug("walk from %s->%s did not close", start.origin, start.dest)
                continue
            vertex_ids = tuple(he.origin for he in path)
            polygon = tuple(vertices[v].position() for v in vertex_ids)
            faces.append(
                Face(
                    id=f"f{len(faces) + 1}",
                    vertex_ids=vertex_ids,
                    polygon=polygon,
                    area=polygon_area(polygon),
                )
            )

    return faces


def find_outer_face(faces: Sequence[Face]) -> Optional[Face]:
    """Return the first face with the strictly largest area."""
    outer: Optional[Face] = None
    for face in faces:
        if outer is None or face.area > outer.area:
            outer = face
    return outer


def _walk(
    start: HalfEdge,
    outgoing: Mapping[str, List[HalfEdge]],
    consumed: set[int],
) -> Optional[List[HalfEdge]]:
    path: List[HalfEdge] = []
    current: Optional[HalfEdge] = start
    while current is not None:
        if current.index in consumed:
            return None
        consumed.add(current.index)
        path.append(current)
        current = next_half_edge(current, outgoing)
        if current is not None and current.index == start.index:
            return path
    return None
