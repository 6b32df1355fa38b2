class TriangulationError(Exception):
    """Base class for every failure raised by a triangulation run."""


class InvalidInputError(TriangulationError, ValueError):
    """
    Point source missing, too short, malformed (wrong arity, non-finite values)
    or inconsistent with the supplied identities.
    """


class DegenerateGeometryError(TriangulationError, ValueError):
    """
    Input cannot be triangulated: collinear points, coincident points,
    or a triangle whose circumcircle is not finite.
    """


class TopologyError(TriangulationError, RuntimeError):
    """An edge was claimed by more than two finalized triangles."""
