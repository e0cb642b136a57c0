from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

Point = Tuple[float, float]
Polygon = Tuple[Point, ...]


@dataclass(frozen=True)
class Vertex:
    id: str
    x: float
    y: float
    authoritative: bool = False

    def position(self) -> Point:
        return (self.x, self.y)


@dataclass(frozen=True)
class Edge:
    id: str
    vertex_ids: tuple[str, str]

    @property
    def source(self) -> str:
        return self.vertex_ids[0]

    @property
    def target(self) -> str:
        return self.vertex_ids[1]

    def key(self) -> tuple[str, str]:
        """Endpoint pair with the lexicographically smaller id first."""
        a, b = self.vertex_ids
        return (a, b) if a < b else (b, a)

    def is_loop(self) -> bool:
        return self.vertex_ids[0] == self.vertex_ids[1]


@dataclass(frozen=True)
class Face:
    """A face recovered by walking half-edges.

    *vertex_ids* is the cyclic walk order; a vertex may repeat when the
    boundary runs along a dangling edge.  *polygon* holds the matching
    positions and *area* the absolute shoelace area.
    """

    id: str
    vertex_ids: tuple[str, ...]
    polygon: Polygon
    area: float

    def vertex_count(self) -> int:
        return len(self.vertex_ids)
