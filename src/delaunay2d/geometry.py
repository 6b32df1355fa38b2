import math
from fractions import Fraction

import numpy as np
from shewchuk import incircle_test


SQRT3 = math.sqrt(3.0)

# Shewchuk's static error bound for the float orientation determinant
EPSILON = 2.0 ** -53
CCW_ERRBOUND = (3.0 + 16.0 * EPSILON) * EPSILON


def _sign(v) -> int:
    return (v > 0) - (v < 0)


def det3_homogeneous(a, b, c) -> float:
    """
    Determinant of the 3x3 matrix whose rows are (a0, a1, 1), (b0, b1, 1), (c0, c1, 1).
    a, b, c: 2-tuples of floats
    """
    return a[0] * b[1] + a[1] * c[0] + b[0] * c[1] - b[1] * c[0] - a[1] * b[0] - a[0] * c[1]


def orient2d(a, b, c) -> int:
    """
    Sign of det3_homogeneous(a, b, c), exact for float input.
    +1 counter-clockwise, -1 clockwise, 0 collinear.

    The float determinant is trusted when it clears the forward error bound;
    otherwise the sign is recomputed with rationals.
    """
    detleft = (a[0] - c[0]) * (b[1] - c[1])
    detright = (a[1] - c[1]) * (b[0] - c[0])
    det = detleft - detright

    errbound = CCW_ERRBOUND * (abs(detleft) + abs(detright))
    if det > errbound or -det > errbound:
        return _sign(det)

    ax, ay, bx, by, cx, cy = (Fraction(v) for v in (a[0], a[1], b[0], b[1], c[0], c[1]))
    return _sign((ax - cx) * (by - cy) - (ay - cy) * (bx - cx))


def incircle(a, b, c, d) -> int:
    """
    Exact in-circle sign: +1 if d lies inside the circle through a, b, c when
    (a, b, c) is counter-clockwise, -1 outside, 0 on the circle. The sign flips
    for a clockwise triangle.
    """
    return _sign(incircle_test(d[0], d[1], a[0], a[1], b[0], b[1], c[0], c[1]))


def exact_circumcircle(a, b, c):
    """
    Rational circumcircle of a non-collinear triangle: (cx, cy, r2) as Fractions.
    """
    ax, ay = Fraction(a[0]), Fraction(a[1])
    bx, by = Fraction(b[0]) - ax, Fraction(b[1]) - ay
    cx, cy = Fraction(c[0]) - ax, Fraction(c[1]) - ay

    d = 2 * (bx * cy - by * cx)
    if d == 0:
        raise ValueError("collinear points have no circumcircle")
    nb = bx * bx + by * by
    nc = cx * cx + cy * cy
    ux = (cy * nb - by * nc) / d
    uy = (bx * nc - cx * nb) / d
    return ax + ux, ay + uy, ux * ux + uy * uy


def circle_left_of(circle, x: float) -> bool:
    """
    Exact: True if the circle (cx, cy, r2) lies strictly left of the vertical line at x.
    """
    cx, _, r2 = circle
    dx = Fraction(x) - cx
    return dx > 0 and dx * dx > r2


def circumcenter(a, b, c):
    """
    Circumcenter of the triangle (a, b, c) from the homogeneous determinant formula,
    evaluated relative to a so that large coordinates keep their precision.
    Returns (x, y, axy) with axy the float determinant; (x, y) is (nan, nan) only
    when the three points are exactly collinear.
    """
    bx, by = b[0] - a[0], b[1] - a[1]
    cx, cy = c[0] - a[0], c[1] - a[1]
    nb = bx * bx + by * by
    nc = cx * cx + cy * cy

    origin = (0.0, 0.0)
    axy = det3_homogeneous(origin, (bx, by), (cx, cy))
    sx = -det3_homogeneous(origin, (nb, by), (nc, cy))
    sy = det3_homogeneous(origin, (nb, bx), (nc, cx))

    if axy == 0.0:
        if orient2d(a, b, c) == 0:
            return math.nan, math.nan, 0.0
        # rounding cancelled a tiny but non-zero area
        ex, ey, _ = exact_circumcircle(a, b, c)
        return float(ex), float(ey), axy
    return a[0] - sx / (2.0 * axy), a[1] - sy / (2.0 * axy), axy


def squared_circumradius(ab: float, bc: float, ca: float) -> float:
    """
    Squared circumradius from the three side lengths (Heron-derived).
    Non-positive or non-finite for zero-area triangles.
    """
    denom = (ab + bc + ca) * (bc + ca - ab) * (ab + ca - bc) * (ab + bc - ca)
    if denom == 0.0:
        return math.inf
    prod = ab * bc * ca
    return (prod * prod) / denom


def bounding_box(points_xy: np.ndarray):
    """
    points_xy: (N,2) -> (minx, miny, maxx, maxy)
    """
    mn = points_xy.min(axis=0)
    mx = points_xy.max(axis=0)
    return float(mn[0]), float(mn[1]), float(mx[0]), float(mx[1])


def perimeter_triangle_vertices(bounds, scale: float = 1.0):
    """
    Equilateral triangle circumscribing a circle centred on the box centre.
    The circle radius is the larger box extent (times scale), so the triangle
    strictly contains the box.

    bounds: (minx, miny, maxx, maxy)
    Returns three (x, y) tuples: apex, bottom-left, bottom-right.
    """
    minx, miny, maxx, maxy = map(float, bounds)
    cx = 0.5 * (minx + maxx)
    cy = 0.5 * (miny + maxy)

    radius = max(abs(maxx - minx), abs(maxy - miny)) * float(scale)
    side = 2.0 * SQRT3 * radius
    height = SQRT3 * side / 2.0

    return (
        (cx, cy + height - radius),
        (cx - side / 2.0, cy - radius),
        (cx + side / 2.0, cy - radius),
    )


def all_collinear(points_xy: np.ndarray) -> bool:
    """
    Exact test: True if every point lies on the line through the first point
    and the first point distinct from it (or if all points coincide).
    """
    P = np.asarray(points_xy, dtype=np.float64)
    if len(P) < 3:
        return True

    p0 = P[0]
    nonzero = np.flatnonzero(np.any(P != p0, axis=1))
    if len(nonzero) == 0:
        return True

    a = (float(p0[0]), float(p0[1]))
    q = P[nonzero[0]]
    b = (float(q[0]), float(q[1]))
    return all(orient2d(a, b, (float(x), float(y))) == 0 for x, y in P)
