from __future__ import annotations
from dataclasses import dataclass, field
import numpy as np
from typing import Dict, Hashable, List, Optional, Set, Tuple

from .adjacency import EdgeAdjacency
from .primitives import Edge, Point, Triangle


Segment2D = Tuple[Tuple[float, float], Tuple[float, float]]


@dataclass
class Triangulation2D:
    """
    Result of one sweep run.
    - points: (N,2) float64, the triangulated coordinates
    - ids: host identity for each row of points
    - triangles: finalized triangles, perimeter artifacts excluded
    - adjacency: edge -> finalized triangles containing it
    - perimeter: the synthetic bounding triangle (None for an empty result)
    - rows: input row of each entry in points (differs from 0..N-1 only when
      lenient mode dropped duplicates)
    """
    points: np.ndarray
    ids: List[Hashable]
    triangles: List[Triangle]
    adjacency: EdgeAdjacency
    perimeter: Optional[Triangle] = None
    index_of: Dict[Point, int] = field(default_factory=dict, repr=False)
    rows: List[int] = field(default_factory=list, repr=False)

    @classmethod
    def empty(cls) -> Triangulation2D:
        return cls(
            points=np.zeros((0, 2), dtype=np.float64),
            ids=[],
            triangles=[],
            adjacency=EdgeAdjacency(),
        )

    def is_empty(self) -> bool:
        return len(self.triangles) == 0

    def triangle_count(self) -> int:
        return len(self.triangles)

    def edge_count(self) -> int:
        return len(self.delaunay_edges())

    def identity(self, p: Point) -> Hashable:
        return self.ids[self.index_of[p]]

    def delaunay_edges(self) -> List[Edge]:
        # dict keeps first-seen order and drops edges shared by two triangles
        seen: Dict[Edge, None] = {}
        for t in self.triangles:
            for e in t.edges():
                seen.setdefault(e, None)
        return list(seen)

    def delaunay_pairs(self) -> List[Tuple[Hashable, Hashable]]:
        return [(self.identity(e.low), self.identity(e.high)) for e in self.delaunay_edges()]

    def interior_edges(self) -> List[Edge]:
        return [e for e, _, _ in self.adjacency.interior()]

    def hull_edges(self) -> List[Edge]:
        return [e for e, _ in self.adjacency.hull()]

    def voronoi_segments(self) -> List[Segment2D]:
        segments = []
        for _, t0, t1 in self.adjacency.interior():
            c0, c1 = t0.circumcenter, t1.circumcenter
            if c0 == c1:
                continue
            segments.append((c0.as_tuple(), c1.as_tuple()))
        return segments

    def neighbors(self) -> Dict[Hashable, Set[Hashable]]:
        out: Dict[Hashable, Set[Hashable]] = {i: set() for i in self.ids}
        for a, b in self.delaunay_pairs():
            out[a].add(b)
            out[b].add(a)
        return out

    def triangles_as_array(self) -> np.ndarray:
        """
        (T,3) int row indices into the caller's input array, vertices in
        construction order. Rows dropped as duplicates never appear.
        """
        if not self.triangles:
            return np.zeros((0, 3), dtype=int)
        rows = self.rows or list(range(len(self.points)))
        return np.array(
            [[rows[self.index_of[p]] for p in t.vertices()] for t in self.triangles],
            dtype=int,
        )

    def voronoi_segments_array(self) -> np.ndarray:
        segs = self.voronoi_segments()
        if not segs:
            return np.zeros((0, 2, 2), dtype=np.float64)
        return np.asarray(segs, dtype=np.float64)


@dataclass(frozen=True)
class VoronoiEdge2D:
    v0: int
    v1: int
    sites: Tuple[Hashable, Hashable]  # identities of the dual Delaunay edge


@dataclass
class VoronoiDiagram2D:
    vertices: np.ndarray        # (M,2)
    edges: List[VoronoiEdge2D]
    triangulation: Triangulation2D

    def vertex_count(self) -> int:
        return len(self.vertices)

    def edge_count(self) -> int:
        return len(self.edges)

    def cell_neighbors(self) -> Dict[Hashable, List[Hashable]]:
        """
        site -> sites whose cells share a Voronoi edge with it
        """
        nbs: Dict[Hashable, List[Hashable]] = {i: [] for i in self.triangulation.ids}
        for e in self.edges:
            a, b = e.sites
            if b not in nbs[a]:
                nbs[a].append(b)
            if a not in nbs[b]:
                nbs[b].append(a)
        return nbs

    def segments_array(self) -> np.ndarray:
        if not self.edges:
            return np.zeros((0, 2, 2), dtype=np.float64)
        idx = np.array([[e.v0, e.v1] for e in self.edges], dtype=int)
        return self.vertices[idx]
