from __future__ import annotations

import math
from dataclasses import dataclass, field
from functools import cached_property
from typing import Optional, Tuple, Union

from .errors import DegenerateGeometryError
from .geometry import (
    circle_left_of,
    circumcenter,
    exact_circumcircle,
    incircle,
    orient2d,
    squared_circumradius,
)


# below this relative margin the float circumcircle cannot settle is_left_of
_LEFT_OF_RTOL = 1e-6


@dataclass(frozen=True, order=True)
class Point:
    """
    2D coordinate value. Equality is exact; ordering is lexicographic on (x, y).
    """
    x: float
    y: float

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, other: Union[Point, float]) -> Point:
        if isinstance(other, Point):
            return Point(self.x * other.x, self.y * other.y)
        return Point(self.x * other, self.y * other)

    __rmul__ = __mul__

    def length_squared(self) -> float:
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def distance_squared(self, other: Point) -> float:
        return (self - other).length_squared()

    def distance(self, other: Point) -> float:
        return math.sqrt(self.distance_squared(other))

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class Edge:
    """
    Undirected segment stored as (low, high) with low < high in Point order,
    so Edge.between(a, b) == Edge.between(b, a).
    """
    low: Point
    high: Point
    length: float = field(compare=False)

    @classmethod
    def between(cls, a: Point, b: Point) -> Edge:
        if a == b:
            raise DegenerateGeometryError(f"Edge endpoints coincide at ({a.x}, {a.y})")
        low, high = (a, b) if a < b else (b, a)
        return cls(low, high, low.distance(high))

    def endpoints(self) -> Tuple[Point, Point]:
        return self.low, self.high


@dataclass(frozen=True, eq=False)
class Triangle:
    """
    Three vertices, their canonical edges and the circumcircle, all fixed at construction.
    Two triangles are equal when they have the same vertex set.

    The float circumcircle is what callers see; containment and sweep-line
    decisions go through exact predicates so cocircular input stays consistent.
    """
    a: Point
    b: Point
    c: Point
    ab: Edge
    bc: Edge
    ca: Edge
    circumcenter: Point
    squared_circumradius: float
    orientation: int = field(repr=False)

    @classmethod
    def from_points(cls, a: Point, b: Point, c: Point) -> Triangle:
        ab = Edge.between(a, b)
        bc = Edge.between(b, c)
        ca = Edge.between(c, a)

        orientation = orient2d(a.as_tuple(), b.as_tuple(), c.as_tuple())
        cx, cy, _ = circumcenter(a.as_tuple(), b.as_tuple(), c.as_tuple())
        if orientation == 0 or not (math.isfinite(cx) and math.isfinite(cy)):
            raise DegenerateGeometryError(
                f"Collinear triangle ({a.x}, {a.y}), ({b.x}, {b.y}), ({c.x}, {c.y})"
            )
        center = Point(cx, cy)

        r2 = squared_circumradius(ab.length, bc.length, ca.length)
        if not (math.isfinite(r2) and r2 > 0.0):
            # Heron cancels badly on slivers
            r2 = center.distance_squared(a)
        if not (math.isfinite(r2) and r2 > 0.0):
            raise DegenerateGeometryError(
                f"Zero-area triangle ({a.x}, {a.y}), ({b.x}, {b.y}), ({c.x}, {c.y})"
            )

        return cls(a, b, c, ab, bc, ca, center, r2, orientation)

    @classmethod
    def from_edge(cls, edge: Edge, p: Point) -> Triangle:
        return cls.from_points(edge.low, edge.high, p)

    def vertices(self) -> Tuple[Point, Point, Point]:
        return self.a, self.b, self.c

    def edges(self) -> Tuple[Edge, Edge, Edge]:
        return self.ab, self.bc, self.ca

    def in_circumcircle(self, p: Point) -> bool:
        # strict: points on the circle are outside
        side = incircle(self.a.as_tuple(), self.b.as_tuple(), self.c.as_tuple(), p.as_tuple())
        return side * self.orientation > 0

    def is_left_of(self, x: float) -> bool:
        """True if the whole circumcircle lies left of the vertical line at x."""
        dx = x - self.circumcenter.x
        margin = dx * dx - self.squared_circumradius
        if abs(margin) > _LEFT_OF_RTOL * (dx * dx + self.squared_circumradius):
            return dx > 0.0 and margin > 0.0
        return circle_left_of(self._exact_circle, x)

    @cached_property
    def _exact_circle(self):
        return exact_circumcircle(self.a.as_tuple(), self.b.as_tuple(), self.c.as_tuple())

    def has_vertex(self, p: Point) -> bool:
        return p == self.a or p == self.b or p == self.c

    def has_shared_vertex(self, other: Triangle) -> bool:
        return self.has_vertex(other.a) or self.has_vertex(other.b) or self.has_vertex(other.c)

    def shared_edge(self, other: Triangle) -> Optional[Edge]:
        theirs = other.edges()
        for e in self.edges():
            if e in theirs:
                return e
        return None

    def _key(self) -> frozenset:
        return frozenset((self.a, self.b, self.c))

    def __eq__(self, other):
        if not isinstance(other, Triangle):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())
