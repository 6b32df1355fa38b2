import numpy as np
import structlog
from shapely.geometry import LineString, Polygon

from .datastructures import Triangulation2D, VoronoiDiagram2D, VoronoiEdge2D
from .delaunay import triangulate_2d
from .errors import InvalidInputError

logger = structlog.get_logger()


def _as_polygon(clip_polygon) -> Polygon:
    if isinstance(clip_polygon, Polygon):
        poly = clip_polygon
    else:
        try:
            poly = Polygon(np.asarray(clip_polygon, dtype=np.float64))
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"clip_polygon must be (K,2) with K >= 3: {exc}") from exc

    if poly.is_empty or not poly.is_valid:
        raise InvalidInputError("clip_polygon must be a valid, non-empty polygon")
    return poly


def _clip_segment(p0, p1, poly: Polygon):
    """
    Parts of segment p0-p1 inside poly, as endpoint pairs.
    A non-convex polygon can cut one segment into several parts.
    """
    clipped = LineString([p0, p1]).intersection(poly)
    if clipped.is_empty:
        return []

    parts = []
    for g in getattr(clipped, "geoms", [clipped]):
        if g.geom_type != "LineString" or g.is_empty:
            continue
        coords = list(g.coords)
        parts.append((coords[0], coords[-1]))
    return parts


def voronoi_from_triangulation(
    tri: Triangulation2D,
    *,
    clip_polygon=None,
    weld_decimals: int = 9,
) -> VoronoiDiagram2D:
    """
    Voronoi graph dual to a triangulation.

    Every interior Delaunay edge contributes the segment between the circumcenters of
    its two triangles; the segment remembers the two sites it separates.
    Circumcenters are welded by rounding to weld_decimals, and segments that
    collapse to a single vertex are dropped.
    """
    poly = _as_polygon(clip_polygon) if clip_polygon is not None else None

    vertices = []
    vertex_map = {}

    def get_vertex_index(pt2):
        key = (round(float(pt2[0]), weld_decimals), round(float(pt2[1]), weld_decimals))
        if key not in vertex_map:
            vertex_map[key] = len(vertices)
            vertices.append([key[0], key[1]])
        return vertex_map[key]

    edges = []
    dropped = 0

    for edge, t0, t1 in tri.adjacency.interior():
        c0 = t0.circumcenter.as_tuple()
        c1 = t1.circumcenter.as_tuple()
        if c0 == c1:
            continue

        parts = _clip_segment(c0, c1, poly) if poly is not None else [(c0, c1)]
        if not parts:
            dropped += 1
            continue

        sites = (tri.identity(edge.low), tri.identity(edge.high))
        for a, b in parts:
            v0 = get_vertex_index(a)
            v1 = get_vertex_index(b)
            if v0 == v1:
                continue
            edges.append(VoronoiEdge2D(v0, v1, sites))

    if poly is not None:
        logger.debug("Clipped Voronoi segments", kept=len(edges), outside=dropped)

    vertices_arr = np.array(vertices, dtype=np.float64) if vertices else np.zeros((0, 2), dtype=np.float64)

    return VoronoiDiagram2D(
        vertices=vertices_arr,
        edges=edges,
        triangulation=tri,
    )


def compute_voronoi_2d(
    points,
    ids=None,
    *,
    clip_polygon=None,
    weld_decimals: int = 9,
    strict: bool = True,
    perimeter_scale: float = 1.0,
) -> VoronoiDiagram2D:
    """
    Triangulate points with triangulate_2d and return the dual Voronoi graph.
    Only finite segments exist: hull edges have no dual segment here.
    """
    tri = triangulate_2d(points, ids, strict=strict, perimeter_scale=perimeter_scale)
    return voronoi_from_triangulation(tri, clip_polygon=clip_polygon, weld_decimals=weld_decimals)
