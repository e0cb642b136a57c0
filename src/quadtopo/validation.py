"""Face-shape validation of a drawn planar subdivision.

Usage
-----
>>> from quadtopo.validation import validate_topology, TRI_OR_QUAD
>>> verdict = validate_topology(vertices, edges, TRI_OR_QUAD)
>>> verdict.is_valid, verdict.message

Every anomaly (no edges, open chains, shape violations) comes back as an
invalid :class:`Verdict`; nothing here raises for bad geometry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Tuple

from .halfedge import extract_faces, find_outer_face
from .models import Edge, Face, Polygon, Vertex
from .repair import DEFAULT_REPAIR, RepairConfig, repair_topology

_LOGGER = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
# Rules
# ═══════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class FaceRule:
    """Which internal faces count as valid.

    Attributes
    ----------
    name : str
        Identifier used in level metadata and on the command line.
    allowed_sides : frozenset[int]
        Side counts an internal face may have.
    violation_label : str
        Plural noun phrase for the failure message, e.g. ``"non-quad faces"``.
    violation_label_one : str
        Singular form, used when exactly one face violates the rule.
    """

    name: str
    allowed_sides: FrozenSet[int]
    violation_label: str = "invalid faces"
    violation_label_one: str = "invalid face"

    def __post_init__(self) -> None:
        if not self.allowed_sides:
            raise ValueError("allowed_sides must not be empty")

    def accepts(self, face: Face) -> bool:
        return face.vertex_count() in self.allowed_sides

    def violation_message(self, count: int) -> str:
        label = self.violation_label_one if count == 1 else self.violation_label
        return f"Found {count} {label}"


QUAD_ONLY = FaceRule(
    name="quad",
    allowed_sides=frozenset({4}),
    violation_label="non-quad faces",
    violation_label_one="non-quad face",
)

TRI_OR_QUAD = FaceRule(
    name="tri-quad",
    allowed_sides=frozenset({3, 4}),
    violation_label="faces that are not triangles or quads",
    violation_label_one="face that is not a triangle or quad",
)

RULES: Dict[str, FaceRule] = {rule.name: rule for rule in (QUAD_ONLY, TRI_OR_QUAD)}


def rule_by_name(name: str) -> FaceRule:
    """Return the preset rule called *name*, or raise ``ValueError``."""
    try:
        return RULES[name]
    except KeyError:
        raise ValueError(f"Unknown face rule: {name!r}") from None


# ═══════════════════════════════════════════════════════════════════
# Verdict
# ═══════════════════════════════════════════════════════════════════

MSG_NO_EDGES = "No edges connected"
MSG_INCOMPLETE = "Incomplete mesh"
MSG_NO_ENCLOSED = "No enclosed faces found"
MSG_VALID = "Perfect Topology!"


@dataclass(frozen=True)
class Verdict:
    """Result of :func:`validate_topology`.

    *invalid_faces* holds the polygons to highlight; *faces* and
    *outer_face* expose the full extraction for diagnostics.
    """

    is_valid: bool
    message: str
    invalid_faces: Tuple[Polygon, ...] = ()
    faces: Tuple[Face, ...] = field(default=(), repr=False)
    outer_face: Optional[Face] = field(default=None, repr=False)

    def internal_faces(self) -> List[Face]:
        return [f for f in self.faces if f is not self.outer_face]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "message": self.message,
            "invalid_faces": [[list(p) for p in poly] for poly in self.invalid_faces],
            "face_count": len(self.faces),
            "outer_face": self.outer_face.id if self.outer_face else None,
        }


# ═══════════════════════════════════════════════════════════════════
# Validation
# ═══════════════════════════════════════════════════════════════════


def validate_topology(
    vertices: Iterable[Vertex],
    edges: Iterable[Edge],
    rule: FaceRule = QUAD_ONLY,
) -> Verdict:
    """Extract faces, drop the outer one and check the rest against *rule*."""
    vertex_map = {v.id: v for v in vertices}
    edge_list = list(edges)
    if not edge_list:
        return Verdict(False, MSG_NO_EDGES)

    faces = tuple(extract_faces(vertex_map, edge_list))
    if len(faces) < 2:
        return Verdict(False, MSG_INCOMPLETE, faces=faces)

    outer = find_outer_face(faces)
    internal = [f for f in faces if f is not outer]
    _LOGGER.debug("%d faces, outer %s with area %.3f", len(faces), outer.id, outer.area)
    if not internal:
        return Verdict(False, MSG_NO_ENCLOSED, faces=faces, outer_face=outer)

    violations = [f for f in internal if not rule.accepts(f)]
    if violations:
        return Verdict(
            False,
            rule.violation_message(len(violations)),
            invalid_faces=tuple(f.polygon for f in violations),
            faces=faces,
            outer_face=outer,
        )

    return Verdict(True, MSG_VALID, faces=faces, outer_face=outer)


validate = validate_topology


def check_topology(
    vertices: Iterable[Vertex],
    edges: Iterable[Edge],
    rule: FaceRule = QUAD_ONLY,
    repair_config: RepairConfig = DEFAULT_REPAIR,
) -> Tuple[List[Vertex], List[Edge], Verdict]:
    """Repair then validate; the repaired geometry is returned alongside the verdict."""
    fixed_vertices, fixed_edges = repair_topology(vertices, edges, repair_config)
    verdict = validate_topology(fixed_vertices, fixed_edges, rule)
    return fixed_vertices, fixed_edges, verdict
