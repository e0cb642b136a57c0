from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from .graph import PlanarGraph
from .validation import RULES


PathLike = Union[str, Path]


def load_json(path: PathLike) -> PlanarGraph:
    """Read a graph file, raising ``ValueError`` if its structure is wrong."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be an object")
    errors = validate_graph_payload(data)
    if errors:
        raise ValueError(f"{path}: " + "; ".join(errors))
    return PlanarGraph.from_dict(data)


def save_json(graph: PlanarGraph, path: PathLike) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(graph.to_json(), encoding="utf-8")
    return out


def validate_graph_payload(payload: Dict[str, Any]) -> List[str]:
    """Validate a graph payload against the expected structure.

    Returns a list of error messages (empty = valid).

    This is a lightweight structural validator that accepts exactly what
    ``schemas/graph.schema.json`` accepts, plus a check for reused ids.
    ``version`` and ``metadata`` are optional.
    """
    errors: List[str] = []

    for key in ("vertices", "edges"):
        if key not in payload:
            errors.append(f"Missing top-level key: {key}")

    if "version" in payload and not isinstance(payload["version"], str):
        errors.append("'version' must be a string")

    metadata = payload.get("metadata", {})
    if not isinstance(metadata, dict):
        errors.append("'metadata' must be an object")
    elif "rule" in metadata and metadata["rule"] not in RULES:
        errors.append(f"Unknown face rule in metadata: {metadata['rule']!r}")

    vertices = payload.get("vertices", [])
    if not isinstance(vertices, list):
        errors.append("'vertices' must be a list")
        vertices = []
    vertex_ids = set()
    for i, vertex in enumerate(vertices):
        if not isinstance(vertex, dict):
            errors.append(f"Vertex {i}: must be an object")
            continue
        vid = vertex.get("id")
        if not isinstance(vid, str):
            errors.append(f"Vertex {i}: 'id' must be a string")
        elif vid in vertex_ids:
            errors.append(f"Vertex {i}: duplicate id {vid!r}")
        else:
            vertex_ids.add(vid)
        if "authoritative" in vertex and not isinstance(vertex["authoritative"], bool):
            errors.append(f"Vertex {i}: 'authoritative' must be true or false")
        position = vertex.get("position")
        if not isinstance(position, dict):
            errors.append(f"Vertex {i}: missing 'position'")
            continue
        for axis in ("x", "y"):
            value = position.get(axis)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(f"Vertex {i}: position '{axis}' must be a number")

    edges = payload.get("edges", [])
    if not isinstance(edges, list):
        errors.append("'edges' must be a list")
        edges = []
    edge_ids = set()
    for i, edge in enumerate(edges):
        if not isinstance(edge, dict):
            errors.append(f"Edge {i}: must be an object")
            continue
        eid = edge.get("id")
        if not isinstance(eid, str):
            errors.append(f"Edge {i}: 'id' must be a string")
        elif eid in edge_ids:
            errors.append(f"Edge {i}: duplicate id {eid!r}")
        else:
            edge_ids.add(eid)
        ends = edge.get("vertices")
        if (
            not isinstance(ends, list)
            or len(ends) != 2
            or not all(isinstance(end, str) for end in ends)
        ):
            errors.append(f"Edge {i}: 'vertices' must be [source, target]")

    return errors
