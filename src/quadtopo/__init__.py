"""quadtopo — planar face topology engine for grid-drawing puzzles.

Public API is organised into layers:

- **Core** — models, half-edge face extraction, graph container, I/O
- **Repair** — vertex snapping and edge clean-up
- **Validation** — face rules and verdicts
- **Diagnostics** — crossings, angle collisions and face statistics
- **Building** — lattice constructors
"""

# ── Core ────────────────────────────────────────────────────────────
from .models import Vertex, Edge, Face
from .halfedge import HalfEdge, build_half_edges, sort_outgoing, extract_faces, find_outer_face
from .graph import PlanarGraph
from .io import load_json, save_json, validate_graph_payload

# ── Repair ──────────────────────────────────────────────────────────
from .repair import MERGE_DIST, RepairConfig, DEFAULT_REPAIR, repair_topology, repair

# ── Validation ──────────────────────────────────────────────────────
from .validation import (
    FaceRule,
    QUAD_ONLY,
    TRI_OR_QUAD,
    Verdict,
    rule_by_name,
    validate_topology,
    validate,
    check_topology,
)

# ── Diagnostics ─────────────────────────────────────────────────────
from .diagnostics import (
    has_edge_crossings,
    edge_crossings,
    angle_collisions,
    connected_components,
    euler_characteristic,
    face_size_histogram,
    diagnostics_report,
)

# ── Building ────────────────────────────────────────────────────────
from .builders import build_lattice, lattice_vertex_id

__all__ = [
    # Core
    "Vertex",
    "Edge",
    "Face",
    "HalfEdge",
    "build_half_edges",
    "sort_outgoing",
    "extract_faces",
    "find_outer_face",
    "PlanarGraph",
    "load_json",
    "save_json",
    "validate_graph_payload",
    # Repair
    "MERGE_DIST",
    "RepairConfig",
    "DEFAULT_REPAIR",
    "repair_topology",
    "repair",
    # Validation
    "FaceRule",
    "QUAD_ONLY",
    "TRI_OR_QUAD",
    "Verdict",
    "rule_by_name",
    "validate_topology",
    "validate",
    "check_topology",
    # Diagnostics
    "has_edge_crossings",
    "edge_crossings",
    "angle_collisions",
    "connected_components",
    "euler_characteristic",
    "face_size_histogram",
    "diagnostics_report",
    # Building
    "build_lattice",
    "lattice_vertex_id",
]
