from __future__ import annotations

from collections import Counter
from typing import Dict, Hashable, List, Optional, Sequence, Tuple

import numpy as np
import structlog

from .adjacency import EdgeAdjacency
from .datastructures import Triangulation2D
from .errors import DegenerateGeometryError, InvalidInputError
from .geometry import all_collinear, bounding_box, perimeter_triangle_vertices
from .primitives import Edge, Point, Triangle

logger = structlog.get_logger()


def unique_edges(edge_buffer: Sequence[Edge]) -> List[Edge]:
    """
    Edges that occur exactly once in the buffer, in buffer order.
    Any edge seen two or more times is dropped from every position.
    """
    counts = Counter(edge_buffer)
    return [e for e in edge_buffer if counts[e] == 1]


def _coerce_points(points) -> np.ndarray:
    if points is None:
        raise InvalidInputError("points is required")

    try:
        P = np.asarray(points, dtype=np.float64)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"points must be a sequence of (x, y) pairs: {exc}") from exc

    if P.ndim >= 1 and len(P) < 3:
        raise InvalidInputError(f"at least 3 points required, got {len(P)}")
    if P.ndim != 2 or P.shape[1] != 2:
        raise InvalidInputError(f"points must be (N,2), got shape {P.shape}")
    if not np.all(np.isfinite(P)):
        raise InvalidInputError("points contain non-finite coordinates")

    return P


def _coerce_ids(ids, n: int) -> List[Hashable]:
    if ids is None:
        return list(range(n))
    ids = list(ids)
    if len(ids) != n:
        raise InvalidInputError(f"got {len(ids)} ids for {n} points")
    return ids


def _index_points(P: np.ndarray, ids: List[Hashable], *, strict: bool):
    """
    Map every distinct Point to its row. Coincident points are an error in strict
    mode; otherwise the first occurrence wins and later ones are dropped.
    Returns the kept points, their ids, the Point -> kept-row map and the input
    row of every kept point.
    """
    index_of: Dict[Point, int] = {}
    keep: List[int] = []
    for i, (x, y) in enumerate(P):
        p = Point(float(x), float(y))
        if p in index_of:
            if strict:
                raise DegenerateGeometryError(
                    f"points {index_of[p]} and {i} coincide at ({p.x}, {p.y})"
                )
            logger.warning("Dropping duplicate point", index=i, first=index_of[p], x=p.x, y=p.y)
            continue
        index_of[p] = len(keep)
        keep.append(i)

    if len(keep) != len(P):
        P = P[keep]
        ids = [ids[i] for i in keep]
        if len(P) < 3:
            raise InvalidInputError(f"at least 3 distinct points required, got {len(P)}")

    return P, ids, index_of, keep


def _perimeter_triangle(P: np.ndarray, scale: float) -> Triangle:
    a, b, c = perimeter_triangle_vertices(bounding_box(P), scale=scale)
    return Triangle.from_points(Point(*a), Point(*b), Point(*c))


def _sweep(vertices: List[Point], perimeter: Triangle) -> Tuple[List[Triangle], EdgeAdjacency]:
    open_triangles: List[Triangle] = [perimeter]
    closed: List[Triangle] = []
    adjacency = EdgeAdjacency()

    def finalize(t: Triangle) -> None:
        if t.has_shared_vertex(perimeter):
            return
        closed.append(t)
        adjacency.register(t)

    for p in sorted(vertices, key=lambda v: v.x):
        kept: List[Triangle] = []
        edge_buffer: List[Edge] = []

        for t in open_triangles:
            # circumcircle fully left of p: no later point can reach it
            if t.is_left_of(p.x):
                finalize(t)
                continue
            if t.in_circumcircle(p):
                edge_buffer.extend(t.edges())
                continue
            kept.append(t)

        for e in unique_edges(edge_buffer):
            kept.append(Triangle.from_edge(e, p))

        open_triangles = kept

    for t in open_triangles:
        finalize(t)

    return closed, adjacency


def _triangulate(points, ids, *, strict: bool, perimeter_scale: float) -> Triangulation2D:
    P = _coerce_points(points)
    ids = _coerce_ids(ids, len(P))
    P, ids, index_of, rows = _index_points(P, ids, strict=strict)

    if all_collinear(P):
        raise DegenerateGeometryError(f"all {len(P)} points are collinear")

    perimeter = _perimeter_triangle(P, perimeter_scale)
    triangles, adjacency = _sweep(list(index_of), perimeter)

    if not triangles:
        raise DegenerateGeometryError("no triangle survived the sweep; input is (nearly) collinear")

    logger.debug(
        "Sweep complete",
        points=len(P),
        triangles=len(triangles),
        edges=len(adjacency),
    )

    return Triangulation2D(
        points=P,
        ids=ids,
        triangles=triangles,
        adjacency=adjacency,
        perimeter=perimeter,
        index_of=index_of,
        rows=rows,
    )


def triangulate_2d(
    points,
    ids: Optional[Sequence[Hashable]] = None,
    *,
    strict: bool = True,
    perimeter_scale: float = 1.0,
) -> Triangulation2D:
    """
    Delaunay triangulation of 2D points by an x-sorted sweep.

    points: (N,2) array or sequence of (x, y) pairs, N >= 3
    ids: host identity per point (defaults to the row index); returned by delaunay_pairs()

    Key design detail:
    - A synthetic perimeter triangle seeds the sweep; every finalized triangle
      touching it is discarded.
    - perimeter_scale > 1 enlarges that triangle, which keeps thin hull triangles
      whose circumcircle would otherwise reach a perimeter vertex.
    - strict=False turns invalid or degenerate input into an empty result (logged)
      and drops duplicate points instead of rejecting them.
    """
    if perimeter_scale <= 0:
        raise ValueError("perimeter_scale must be > 0")

    try:
        return _triangulate(points, ids, strict=strict, perimeter_scale=perimeter_scale)
    except (InvalidInputError, DegenerateGeometryError) as exc:
        if strict:
            raise
        logger.warning("Triangulation skipped", error=type(exc).__name__, reason=str(exc))
        return Triangulation2D.empty()
