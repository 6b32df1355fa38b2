import math

import numpy as np
from shapely.geometry import Point, Polygon

from src.delaunay2d.geometry import (
    all_collinear,
    bounding_box,
    circle_left_of,
    circumcenter,
    det3_homogeneous,
    exact_circumcircle,
    incircle,
    orient2d,
    perimeter_triangle_vertices,
    squared_circumradius,
)


def test_det3_sign_follows_orientation():
    ccw = det3_homogeneous((0.0, 0.0), (1.0, 0.0), (0.0, 1.0))
    cw = det3_homogeneous((0.0, 0.0), (0.0, 1.0), (1.0, 0.0))

    assert ccw == 1.0
    assert cw == -1.0


def test_circumcenter_of_collinear_points_is_flagged():
    x, y, axy = circumcenter((0.0, 0.0), (1.0, 1.0), (3.0, 3.0))
    assert axy == 0.0
    assert math.isnan(x) and math.isnan(y)


def test_squared_circumradius_from_sides():
    # equilateral triangle with side 1 -> R^2 = 1/3
    assert math.isclose(squared_circumradius(1.0, 1.0, 1.0), 1.0 / 3.0, rel_tol=1e-12)
    # flat triangle
    assert math.isinf(squared_circumradius(1.0, 1.0, 2.0))


def test_perimeter_triangle_contains_bounding_box():
    pts = np.array([
        [3.0, 2.0],
        [13.0, 2.0],
        [13.0, 7.0],
        [3.0, 7.0],
        [8.0, 4.0],
    ], dtype=np.float64)

    bounds = bounding_box(pts)
    assert bounds == (3.0, 2.0, 13.0, 7.0)

    tri = Polygon(perimeter_triangle_vertices(bounds))
    for p in pts:
        assert tri.contains(Point(float(p[0]), float(p[1])))


def test_perimeter_triangle_is_equilateral_and_scales():
    bounds = (0.0, 0.0, 4.0, 2.0)
    a, b, c = (np.array(v) for v in perimeter_triangle_vertices(bounds))

    sides = [np.linalg.norm(a - b), np.linalg.norm(b - c), np.linalg.norm(c - a)]
    assert np.allclose(sides, sides[0])
    # inscribed circle radius is the larger extent (4) -> side 2*sqrt(3)*4
    assert np.isclose(sides[0], 8.0 * math.sqrt(3.0))

    big = perimeter_triangle_vertices(bounds, scale=10.0)
    assert Polygon(big).area > 99.0 * Polygon((a, b, c)).area


def test_all_collinear():
    assert all_collinear(np.array([[0.0, 0.0], [1.0, 1.0], [2.0, 2.0]]))
    assert all_collinear(np.array([[1.0, 1.0], [1.0, 1.0], [1.0, 5.0], [1.0, -3.0]]))
    assert all_collinear(np.array([[2.0, 2.0], [2.0, 2.0], [2.0, 2.0]]))
    assert not all_collinear(np.array([[0.0, 0.0], [1.0, 0.0], [0.0, 1.0]]))


def test_orient2d_signs():
    assert orient2d((0.0, 0.0), (1.0, 0.0), (0.0, 1.0)) == 1
    assert orient2d((0.0, 0.0), (0.0, 1.0), (1.0, 0.0)) == -1
    assert orient2d((0.0, 0.0), (1.0, 1.0), (3.0, 3.0)) == 0


def test_orient2d_is_exact_near_a_line():
    # the float determinant rounds to zero for both perturbed points
    a = (0.5, 0.5)
    b = (12.0, 12.0)
    c = (24.0, 24.0)
    assert orient2d(a, b, c) == 0
    assert orient2d(a, b, (24.0, 24.000000000000004)) == 1
    assert orient2d(a, b, (24.000000000000004, 24.0)) == -1


def test_incircle_signs_and_ties():
    a, b, c = (5.0, 0.0), (3.0, 4.0), (-4.0, 3.0)  # counter-clockwise on x^2 + y^2 = 25
    assert incircle(a, b, c, (0.0, 0.0)) == 1
    assert incircle(a, b, c, (6.0, 6.0)) == -1
    assert incircle(a, b, c, (0.0, -5.0)) == 0
    assert incircle(a, c, b, (0.0, 0.0)) == -1


def test_incircle_far_from_origin():
    off = 1e6
    a, b, c = (off + 5.0, off), (off + 3.0, off + 4.0), (off - 4.0, off + 3.0)
    assert incircle(a, b, c, (off, off - 5.0)) == 0
    assert incircle(a, b, c, (off, off - 4.999999999)) == 1


def test_exact_circumcircle_and_left_of():
    circle = exact_circumcircle((0.0, 0.0), (4.0, 0.0), (0.0, 3.0))
    assert circle == (2, 1.5, 6.25)

    assert not circle_left_of(circle, 4.5)
    assert circle_left_of(circle, 4.500000000000001)
    assert not circle_left_of(circle, -0.6)


def test_circumcenter_keeps_precision_far_from_origin():
    off = 1e6
    x, y, _ = circumcenter((off, off), (off + 4.0, off), (off, off + 3.0))
    assert (x, y) == (off + 2.0, off + 1.5)
