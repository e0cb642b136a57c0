"""Topology repair: snap near-coincident vertices and clean up edges.

Usage
-----
>>> from quadtopo.repair import repair_topology
>>> vertices, edges = repair_topology(raw_vertices, raw_edges)

Authoritative (level) vertices are preferred as merge representatives
over player-created ones.  Repairing an already-repaired graph returns it
unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

import numpy as np

from .models import Edge, Vertex

_LOGGER = logging.getLogger(__name__)

MERGE_DIST = 15.0


@dataclass(frozen=True)
class RepairConfig:
    """Tuneable parameters for :func:`repair_topology`.

    Attributes
    ----------
    merge_dist : float
        Two vertices merge when they are within this distance on both the
        x and the y axis.  In game display units (one grid cell is 60).
    """

    merge_dist: float = MERGE_DIST


DEFAULT_REPAIR = RepairConfig()


def repair_topology(
    vertices: Iterable[Vertex],
    edges: Iterable[Edge],
    config: RepairConfig = DEFAULT_REPAIR,
) -> Tuple[List[Vertex], List[Edge]]:
    """Return canonical ``(vertices, edges)`` for a raw drawing.

    Empty input gives empty output.
    """
    if config.merge_dist < 0:
        raise ValueError("merge_dist must be >= 0")

    merged, redirect = _merge_vertices(vertices, config.merge_dist)
    clean_edges = _remap_edges(edges, redirect)
    return merged, clean_edges


repair = repair_topology


def _merge_vertices(
    vertices: Iterable[Vertex],
    merge_dist: float,
) -> Tuple[List[Vertex], Dict[str, str]]:
    # Stable sort: authoritative first, otherwise input order.
    ordered = sorted(vertices, key=lambda v: not v.authoritative)

    merged: List[Vertex] = []
    redirect: Dict[str, str] = {}
    accepted_xy = np.empty((0, 2), dtype=float)

    for vertex in ordered:
        close = np.all(np.abs(accepted_xy - (vertex.x, vertex.y)) <= merge_dist, axis=1)
        hits = np.flatnonzero(close)
        if hits.size:
            redirect[vertex.id] = merged[int(hits[0])].id
        else:
            merged.append(vertex)
            redirect[vertex.id] = vertex.id
            accepted_xy = np.vstack([accepted_xy, (vertex.x, vertex.y)])

    merged_count = len(redirect) - len(merged)
    if merged_count:
        _LOGGER.debug("merged %d vertices into %d representatives", merged_count, len(merged))
    return merged, redirect


def _remap_edges(edges: Iterable[Edge], redirect: Dict[str, str]) -> List[Edge]:
    clean: List[Edge] = []
    seen: set[tuple[str, str]] = set()
    used_ids: set[str] = set()
    dropped = 0

    for edge in edges:
        u = redirect.get(edge.source)
        v = redirect.get(edge.target)
        if u is None or v is None or u == v:
            dropped += 1
            continue
        key = (u, v) if u < v else (v, u)
        if key in seen:
            dropped += 1
            continue
        seen.add(key)
        edge_id = _edge_id(key, used_ids)
        used_ids.add(edge_id)
        clean.append(Edge(id=edge_id, vertex_ids=(u, v)))

    if dropped:
        _LOGGER.debug("dropped %d degenerate or duplicate edges", dropped)
    return clean


def _edge_id(key: Tuple[str, str], used_ids: set[str]) -> str:
    """``"a-b"`` for the pair, suffixed ``#2``, ``#3``... if hyphenated vertex ids collide."""
    base = f"{key[0]}-{key[1]}"
    edge_id = base
    n = 2
    while edge_id in used_ids:
        edge_id = f"{base}#{n}"
        n += 1
    if edge_id != base:
        _LOGGER.debug("edge id %s already taken, using %s", base, edge_id)
    return edge_id
