from __future__ import annotations

from collections import Counter, defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

from .geometry import segments_intersect
from .graph import PlanarGraph
from .halfedge import build_half_edges, sort_outgoing
from .models import Face
from .validation import FaceRule


def has_edge_crossings(graph: PlanarGraph) -> bool:
    """True if two edges without a shared endpoint touch or cross."""
    return bool(edge_crossings(graph, first_only=True))


def edge_crossings(graph: PlanarGraph, first_only: bool = False) -> List[Tuple[str, str]]:
    """Return id pairs of edges that intersect away from a shared endpoint."""
    edges = [
        e for e in graph.edges.values()
        if all(vid in graph.vertices for vid in e.vertex_ids)
    ]
    crossings: List[Tuple[str, str]] = []
    for i, edge_a in enumerate(edges):
        a1, a2 = edge_a.vertex_ids
        pa1 = graph.vertices[a1].position()
        pa2 = graph.vertices[a2].position()
        for edge_b in edges[i + 1 :]:
            b1, b2 = edge_b.vertex_ids
            if len({a1, a2, b1, b2}) < 4:
                continue
            pb1 = graph.vertices[b1].position()
            pb2 = graph.vertices[b2].position()
            if segments_intersect(pa1, pa2, pb1, pb2):
                crossings.append((edge_a.id, edge_b.id))
                if first_only:
                    return crossings
    return crossings


def angle_collisions(graph: PlanarGraph) -> List[Tuple[str, float]]:
    """Return ``(vertex_id, angle)`` where two outgoing edges leave at the same angle.

    Face walking is ambiguous at such vertices; they come from collinear
    overlapping strokes or unrepaired duplicate edges.
    """
    outgoing = sort_outgoing(build_half_edges(graph.vertices, graph.edges.values()))
    collisions: List[Tuple[str, float]] = []
    for vid in graph.vertices:
        counts = Counter(he.angle for he in outgoing.get(vid, []))
        for angle, count in counts.items():
            if count > 1:
                collisions.append((vid, angle))
    return collisions


def connected_components(graph: PlanarGraph) -> List[List[str]]:
    """Vertex ids grouped by connectivity, in first-seen order."""
    neighbors: Dict[str, List[str]] = defaultdict(list)
    for edge in graph.edges.values():
        a, b = edge.vertex_ids
        if a in graph.vertices and b in graph.vertices:
            neighbors[a].append(b)
            neighbors[b].append(a)

    visited: set[str] = set()
    components: List[List[str]] = []
    for start in graph.vertices:
        if start in visited:
            continue
        visited.add(start)
        component = [start]
        frontier = [start]
        while frontier:
            next_frontier: List[str] = []
            for vid in frontier:
                for neighbor in neighbors.get(vid, []):
                    if neighbor in visited:
                        continue
                    visited.add(neighbor)
                    component.append(neighbor)
                    next_frontier.append(neighbor)
            frontier = next_frontier
        components.append(component)
    return components


def euler_characteristic(graph: PlanarGraph, faces: Optional[Iterable[Face]] = None) -> int:
    """V - E + F with F counted from the face walks.

    Each component is walked on its own, so every component with an edge
    contributes 2 and every isolated vertex 1.
    """
    if faces is None:
        faces = graph.faces()
    return len(graph.vertices) - len(graph.edges) + len(list(faces))


def face_size_histogram(faces: Iterable[Face]) -> Dict[int, int]:
    counts = Counter(face.vertex_count() for face in faces)
    return dict(sorted(counts.items()))


def diagnostics_report(graph: PlanarGraph, rule: Optional[FaceRule] = None) -> Dict[str, object]:
    """Build a structured diagnostics report suitable for JSON export."""
    verdict = graph.validate_faces(rule)
    faces = list(verdict.faces)
    internal = [f for f in faces if f is not verdict.outer_face]
    components = connected_components(graph)

    return {
        "vertex_count": len(graph.vertices),
        "edge_count": len(graph.edges),
        "face_count": len(faces),
        "component_count": len(components),
        "euler_characteristic": euler_characteristic(graph, faces),
        "internal_face_sizes": {str(k): v for k, v in face_size_histogram(internal).items()},
        "reference_errors": graph.check_references(),
        "edge_crossings": [list(pair) for pair in edge_crossings(graph)],
        "angle_collisions": [
            {"vertex": vid, "angle": angle} for vid, angle in angle_collisions(graph)
        ],
        "verdict": verdict.to_dict(),
    }
