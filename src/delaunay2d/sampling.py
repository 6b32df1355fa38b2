import numpy as np
import shapely
from shapely.geometry import Polygon


def sample_sites_in_box(
    width: float,
    height: float,
    n: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """
    Uniform sites in [0..width] x [0..height]
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    pts = np.empty((n, 2), dtype=np.float64)
    pts[:, 0] = rng.random(n) * float(width)
    pts[:, 1] = rng.random(n) * float(height)
    return pts


def sample_sites_in_polygon(
    polygon,
    *,
    n_points: int | None = None,
    target_area: float | None = None,
    rng: np.random.Generator,
    max_tries: int = 1_000_000,
) -> np.ndarray:
    """
    Rejection-sample sites strictly inside a polygon ((K,2) array or shapely Polygon).
    Either n_points or target_area (area per site) decides how many.
    Deterministic given rng seed.
    """
    poly = polygon if isinstance(polygon, Polygon) else Polygon(np.asarray(polygon, dtype=np.float64))
    if poly.is_empty or not poly.is_valid:
        raise ValueError("polygon must be valid and non-empty")

    if n_points is None:
        if target_area is None:
            raise ValueError("Either target_area or n_points required")
        n_points = max(1, int(poly.area / target_area))

    minx, miny, maxx, maxy = poly.bounds
    lo = np.array([minx, miny], dtype=np.float64)
    span = np.array([maxx - minx, maxy - miny], dtype=np.float64)

    out = np.zeros((0, 2), dtype=np.float64)
    tries = 0
    batch = max(64, n_points * 2)

    while len(out) < n_points and tries < max_tries:
        P = rng.random((batch, 2)) * span + lo
        mask = shapely.contains_xy(poly, P[:, 0], P[:, 1])
        out = np.vstack([out, P[mask]])
        tries += batch

    if len(out) < n_points:
        raise RuntimeError(f"Sampling failed: needed {n_points} sites, got {len(out)} (tries={tries})")

    return out[:n_points]
