import numpy as np
import pytest
from shapely.geometry import Polygon

from src.delaunay2d.delaunay import triangulate_2d
from src.delaunay2d.errors import DegenerateGeometryError, InvalidInputError
from src.delaunay2d.voronoi import compute_voronoi_2d, voronoi_from_triangulation


def _square_with_center():
    return np.array([
        [0.0, 0.0],   # 0
        [1.0, 0.0],   # 1
        [1.0, 1.0],   # 2
        [0.0, 1.0],   # 3
        [0.5, 0.5],   # 4 center
    ], dtype=np.float64)


def _vertex_set(d):
    return {(round(float(x), 6), round(float(y), 6)) for x, y in d.vertices}


def test_center_cell_is_a_diamond():
    d = compute_voronoi_2d(_square_with_center())

    assert d.vertex_count() == 4
    assert d.edge_count() == 4
    assert _vertex_set(d) == {(0.5, 0.0), (1.0, 0.5), (0.5, 1.0), (0.0, 0.5)}

    # every segment is dual to a spoke from the center to a corner
    for e in d.edges:
        assert 4 in e.sites

    nbs = d.cell_neighbors()
    assert sorted(nbs[4]) == [0, 1, 2, 3]
    assert nbs[0] == [4]


def test_segments_array_matches_triangulation_segments():
    pts = _square_with_center()
    d = compute_voronoi_2d(pts)
    tri = triangulate_2d(pts)

    arr = d.segments_array()
    assert arr.shape == (4, 2, 2)
    assert np.allclose(arr, tri.voronoi_segments_array())


def test_cocircular_square_has_no_voronoi_edges():
    d = compute_voronoi_2d([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)])
    assert d.edge_count() == 0
    assert d.vertices.shape == (0, 2)


def test_sites_follow_custom_ids():
    pts = [(0.0, 0.0), (2.0, -1.0), (4.0, 0.0), (2.0, 1.0)]
    d = compute_voronoi_2d(pts, ids=["w", "s", "e", "n"])

    assert d.edge_count() == 1
    assert set(d.edges[0].sites) == {"s", "n"}
    assert d.cell_neighbors()["s"] == ["n"]
    assert d.cell_neighbors()["w"] == []


def test_clip_to_polygon_cuts_segments():
    clip = np.array([[0.0, 0.0], [0.75, 0.0], [0.75, 1.0], [0.0, 1.0]])
    d = compute_voronoi_2d(_square_with_center(), clip_polygon=clip)

    assert d.edge_count() == 4
    assert _vertex_set(d) == {(0.5, 0.0), (0.75, 0.25), (0.75, 0.75), (0.5, 1.0), (0.0, 0.5)}
    assert np.all(d.vertices[:, 0] <= 0.75 + 1e-12)


def test_clip_accepts_shapely_polygon_and_drops_outside_segments():
    far = Polygon([(2.0, 2.0), (3.0, 2.0), (3.0, 3.0), (2.0, 3.0)])
    d = compute_voronoi_2d(_square_with_center(), clip_polygon=far)
    assert d.edge_count() == 0


def test_invalid_clip_polygon():
    bowtie = np.array([[0.0, 0.0], [1.0, 1.0], [1.0, 0.0], [0.0, 1.0]])
    with pytest.raises(InvalidInputError):
        compute_voronoi_2d(_square_with_center(), clip_polygon=bowtie)

    with pytest.raises(InvalidInputError):
        compute_voronoi_2d(_square_with_center(), clip_polygon=[[0.0, 0.0], [1.0, 1.0]])


def test_degenerate_input_propagates():
    with pytest.raises(DegenerateGeometryError):
        compute_voronoi_2d([(0.0, 0.0), (1.0, 1.0), (2.0, 2.0)])


def test_lenient_empty_triangulation_gives_empty_diagram():
    tri = triangulate_2d([(0.0, 0.0), (1.0, 1.0)], strict=False)
    d = voronoi_from_triangulation(tri)
    assert d.edge_count() == 0
    assert d.segments_array().shape == (0, 2, 2)
