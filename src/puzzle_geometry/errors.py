"""Exception types raised by the geometry kernel."""


class GeometryError(ValueError):
    """Base class for geometry failures."""


class NoIntersectionError(GeometryError):
    """Three planes do not meet in a single feasible point.

    Raised only by ``Intersection.unwrap()``; the solver itself reports this
    case through a falsy ``Intersection``.
    """


class DegenerateFaceError(GeometryError):
    """A face has every vertex on the plane it is being classified against."""


class ShapeError(GeometryError):
    """Face planes do not bound a closed solid."""


class GroupClosureError(GeometryError):
    """Rotation generators do not close into a finite group."""
