"""Id-keyed container for one drawing, with its JSON dict form.

Vertices and edges are kept in insertion order.  A record whose id is
already present replaces the earlier one; the replaced ids are reported by
:meth:`PlanarGraph.check_references`.
"""

from __future__ import annotations

import json
from typing import Dict, Iterable, List, Optional

from .halfedge import extract_faces
from .models import Edge, Face, Vertex
from .repair import DEFAULT_REPAIR, RepairConfig, repair_topology
from .validation import QUAD_ONLY, FaceRule, Verdict, rule_by_name, validate_topology


class PlanarGraph:
    """Container for the vertices and straight-line edges of one drawing.

    *metadata* carries level-level settings; ``metadata["rule"]`` names the
    active :class:`~quadtopo.validation.FaceRule`.
    """

    VERSION = "1.0"

    def __init__(
        self,
        vertices: Iterable[Vertex],
        edges: Iterable[Edge],
        metadata: Optional[dict] = None,
    ) -> None:
        self.vertices: Dict[str, Vertex] = {}
        self.edges: Dict[str, Edge] = {}
        self.replaced_ids: List[str] = []
        for vertex in vertices:
            if vertex.id in self.vertices:
                self.replaced_ids.append(f"vertex id {vertex.id}")
            self.vertices[vertex.id] = vertex
        for edge in edges:
            if edge.id in self.edges:
                self.replaced_ids.append(f"edge id {edge.id}")
            self.edges[edge.id] = edge
        self.metadata = metadata or {}

    def rule(self) -> FaceRule:
        return rule_by_name(self.metadata.get("rule", QUAD_ONLY.name))

    def check_references(self) -> list[str]:
        """Return reference errors: reused ids, missing vertices, self-loops, duplicate edges."""
        errors: list[str] = [
            f"Duplicate {item}, earlier record replaced" for item in self.replaced_ids
        ]
        seen: Dict[tuple[str, str], str] = {}

        for edge in self.edges.values():
            for vertex_id in edge.vertex_ids:
                if vertex_id not in self.vertices:
                    errors.append(f"Edge {edge.id} references missing vertex {vertex_id}")
            if edge.is_loop():
                errors.append(f"Edge {edge.id} is a self-loop on {edge.source}")
                continue
            key = edge.key()
            if key in seen:
                errors.append(f"Edge {edge.id} duplicates edge {seen[key]}")
            else:
                seen[key] = edge.id

        return errors

    def faces(self) -> List[Face]:
        """All faces of the embedding, outer face included."""
        return extract_faces(self.vertices, self.edges.values())

    def validate_faces(self, rule: Optional[FaceRule] = None) -> Verdict:
        return validate_topology(
            self.vertices.values(),
            self.edges.values(),
            rule or self.rule(),
        )

    def repaired(self, config: RepairConfig = DEFAULT_REPAIR) -> "PlanarGraph":
        vertices, edges = repair_topology(self.vertices.values(), self.edges.values(), config)
        return PlanarGraph(vertices, edges, dict(self.metadata))

    def to_dict(self) -> dict:
        vertices_payload = []
        for vertex in self.vertices.values():
            vertices_payload.append(
                {
                    "id": vertex.id,
                    "position": {"x": vertex.x, "y": vertex.y},
                    "authoritative": vertex.authoritative,
                }
            )

        edges_payload = []
        for edge in self.edges.values():
            edges_payload.append({"id": edge.id, "vertices": list(edge.vertex_ids)})

        return {
            "version": self.VERSION,
            "metadata": self.metadata,
            "vertices": vertices_payload,
            "edges": edges_payload,
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "PlanarGraph":
        vertices = [
            Vertex(
                id=vertex["id"],
                x=float(vertex["position"]["x"]),
                y=float(vertex["position"]["y"]),
                authoritative=bool(vertex.get("authoritative", False)),
            )
            for vertex in payload.get("vertices", [])
        ]
        edges = []
        for edge in payload.get("edges", []):
            a, b = edge["vertices"]
            edges.append(Edge(id=edge["id"], vertex_ids=(a, b)))
        return cls(vertices, edges, payload.get("metadata", {}))

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)

    @classmethod
    def from_json(cls, json_data: str) -> "PlanarGraph":
        return cls.from_dict(json.loads(json_data))
