from .datastructures import Triangulation2D, VoronoiDiagram2D, VoronoiEdge2D
from .delaunay import triangulate_2d, unique_edges
from .errors import TriangulationError, InvalidInputError, DegenerateGeometryError, TopologyError
from .primitives import Point, Edge, Triangle
from .sampling import sample_sites_in_box, sample_sites_in_polygon
from .voronoi import compute_voronoi_2d, voronoi_from_triangulation

__all__ = [
    "Triangulation2D",
    "VoronoiDiagram2D",
    "VoronoiEdge2D",
    "triangulate_2d",
    "unique_edges",
    "TriangulationError",
    "InvalidInputError",
    "DegenerateGeometryError",
    "TopologyError",
    "Point",
    "Edge",
    "Triangle",
    "sample_sites_in_box",
    "sample_sites_in_polygon",
    "compute_voronoi_2d",
    "voronoi_from_triangulation",
]
