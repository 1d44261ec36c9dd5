"""
Plane intersection solver.

Vertices of a convex polytope are found without a hull algorithm: every
triple of bounding planes is intersected with Cramer's rule and the point is
kept only if it satisfies every other half-space.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from itertools import combinations

import numpy as np
from scipy.spatial import cKDTree

from .constants import DEDUP_TOL, EPS
from .errors import NoIntersectionError
from .quat import Plane, Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Intersection:
    """Outcome of a plane intersection: a point, or the reason there is none.

    Falsy when there is no point, so callers can write ``if result:``.
    """

    point: Point | None
    reason: str = ""

    @classmethod
    def at(cls, point: Point) -> Intersection:
        return cls(point)

    @classmethod
    def none(cls, reason: str) -> Intersection:
        return cls(None, reason)

    def __bool__(self) -> bool:
        return self.point is not None

    def unwrap(self) -> Point:
        if self.point is None:
            raise NoIntersectionError(self.reason)
        return self.point


def det3x3(rows: Sequence[Sequence[float]]) -> float:
    """Determinant of a 3x3 matrix given as rows."""
    return float(np.linalg.det(np.array(rows, dtype=np.float64)))


def intersect_three(
    p1: Plane,
    p2: Plane,
    p3: Plane,
    tolerance: float = EPS
) -> Intersection:
    """Intersect three planes with Cramer's rule.

    Args:
        p1, p2, p3: Planes (offset, nx, ny, nz)
        tolerance: Determinants below this are treated as singular

    Returns:
        Intersection holding the common point, or an empty Intersection
        when the normals are linearly dependent
    """
    normals = np.array([p1.vector, p2.vector, p3.vector])
    offsets = np.array([p1.a, p2.a, p3.a])

    det = det3x3(normals)
    if abs(det) < tolerance:
        return Intersection.none("planes are parallel or degenerate")

    coords = []
    for column in range(3):
        m = normals.copy()
        m[:, column] = offsets
        coords.append(det3x3(m) / det)

    return Intersection.at(Point.from_xyz(*coords))


def solve_three_planes(
    i: int,
    j: int,
    k: int,
    planes: Sequence[Plane],
    tolerance: float = EPS
) -> Intersection:
    """Intersect planes i, j, k, keeping the point only if it is interior.

    The point must lie on the inner side of every other plane: for a plane
    with positive offset, ``point . normal <= offset``; for a negative
    offset, ``point . normal >= offset``. Planes through the origin impose
    no constraint.

    Args:
        i, j, k: Indices into ``planes``
        planes: Full half-space system bounding the region
        tolerance: Slack allowed on each constraint

    Returns:
        Intersection with the feasible vertex, or an empty Intersection
    """
    result = intersect_three(planes[i], planes[j], planes[k], tolerance=tolerance)
    if not result:
        return result

    p = result.point
    for m, plane in enumerate(planes):
        if m in (i, j, k):
            continue
        dt = plane.dot(p)
        if (plane.a > 0 and dt > plane.a + tolerance) or \
           (plane.a < 0 and dt < plane.a - tolerance):
            return Intersection.none(f"outside plane {m}")

    return result


def deduplicate_vertices(
    vertices: np.ndarray,
    tolerance: float = DEDUP_TOL
) -> np.ndarray:
    """Drop vertices within ``tolerance`` of an earlier one."""
    if len(vertices) == 0:
        return vertices

    tree = cKDTree(vertices)

    unique_indices = []
    visited = set()

    for i in range(len(vertices)):
        if i in visited:
            continue
        visited.update(tree.query_ball_point(vertices[i], tolerance))
        unique_indices.append(i)

    return vertices[unique_indices]


def enumerate_vertices(
    planes: Sequence[Plane],
    tolerance: float = EPS,
    dedup_tol: float = DEDUP_TOL
) -> np.ndarray:
    """Find every vertex of the region bounded by ``planes``.

    Runs ``solve_three_planes`` over all plane triples. Where more than three
    planes meet, the repeated vertex is merged.

    Returns:
        Nx3 array of unique vertices (possibly empty)
    """
    found = []
    rejected = 0
    for i, j, k in combinations(range(len(planes)), 3):
        result = solve_three_planes(i, j, k, planes, tolerance=tolerance)
        if result:
            found.append(result.point.vector)
        else:
            rejected += 1

    vertices = np.array(found, dtype=np.float64).reshape(-1, 3)
    unique = deduplicate_vertices(vertices, dedup_tol)
    logger.debug(
        "%d planes: %d feasible triples, %d rejected, %d unique vertices",
        len(planes), len(found), rejected, len(unique),
    )
    return unique
