from __future__ import annotations

from typing import Dict, Iterator, List, Optional, Tuple

from .errors import TopologyError
from .primitives import Edge, Triangle


class EdgeAdjacency:
    """
    Canonical edge -> the (at most two) finalized triangles that contain it.

    An edge with two triangles is interior and has a dual Voronoi segment;
    an edge with one triangle lies on the hull.
    """

    def __init__(self) -> None:
        self._slots: Dict[Edge, List[Optional[Triangle]]] = {}

    def register(self, triangle: Triangle) -> None:
        for edge in triangle.edges():
            slot = self._slots.get(edge)
            if slot is None:
                self._slots[edge] = [triangle, None]
            elif slot[1] is None:
                slot[1] = triangle
            else:
                raise TopologyError(
                    f"Edge ({edge.low.x}, {edge.low.y})-({edge.high.x}, {edge.high.y}) "
                    f"is shared by more than two triangles"
                )

    def triangles_of(self, edge: Edge) -> Tuple[Triangle, ...]:
        slot = self._slots.get(edge)
        if slot is None:
            return ()
        return tuple(t for t in slot if t is not None)

    def interior(self) -> Iterator[Tuple[Edge, Triangle, Triangle]]:
        for edge, (t0, t1) in self._slots.items():
            if t1 is not None:
                yield edge, t0, t1

    def hull(self) -> Iterator[Tuple[Edge, Triangle]]:
        for edge, (t0, t1) in self._slots.items():
            if t1 is None:
                yield edge, t0

    def __len__(self) -> int:
        return len(self._slots)
