"""
Face clipping.

Splits polygons by a cutting plane. A face is only split when it has
vertices strictly on both sides; vertices lying on the plane go into both
halves, and new vertices are interpolated wherever an edge crosses.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

import numpy as np

from .constants import EPS
from .errors import DegenerateFaceError
from .intersect import deduplicate_vertices
from .quat import Cubie, Face, Plane, Point


class Keep(Enum):
    """Which faces ``cut_faces`` returns."""

    BOTH = 0
    BELOW = -1
    ABOVE = 1


def side(x: float, tolerance: float = EPS) -> int:
    """Sign of ``x``, with anything within ``tolerance`` of zero counted as 0."""
    if x > tolerance:
        return 1
    if x < -tolerance:
        return -1
    return 0


def classify_face(
    plane: Plane,
    face: Sequence[Point],
    tolerance: float = EPS
) -> tuple[int, ...]:
    """Side of ``plane`` for every vertex of ``face``."""
    return tuple(side(plane.signed_distance(p), tolerance) for p in face)


def face_side(plane: Plane, face: Sequence[Point], tolerance: float = EPS) -> int:
    """Side of ``plane`` a face lies on, from its first vertex off the plane.

    Raises:
        DegenerateFaceError: every vertex lies on the plane
    """
    for p in face:
        s = side(plane.signed_distance(p), tolerance)
        if s != 0:
            return s
    raise DegenerateFaceError(f"Could not determine side of plane {plane} for face")


def _split_face(
    plane: Plane,
    face: Sequence[Point],
    inout: tuple[int, ...],
    s: int
) -> Face:
    """The part of ``face`` on side ``s``, including interpolated crossings."""
    n = len(face)
    nface = []
    for k in range(n):
        if inout[k] == s or inout[k] == 0:
            nface.append(face[k])
        kk = (k + 1) % n
        if inout[k] + inout[kk] == 0 and inout[k] != 0:
            vk = plane.signed_distance(face[k])
            vkk = plane.signed_distance(face[kk])
            r = vk / (vk - vkk)
            nface.append(face[k].scalar_multiply(1 - r).add(face[kk].scalar_multiply(r)))
    return tuple(nface)


def cut_faces(
    plane: Plane,
    faces: Sequence[Sequence[Point]],
    keep: Keep = Keep.BOTH,
    tolerance: float = EPS
) -> list[Sequence[Point]]:
    """Cut a set of faces by a plane.

    Args:
        plane: Cutting plane
        faces: Polygons as vertex sequences
        keep: ``Keep.BOTH`` returns both halves of split faces and passes
            every other face through untouched. ``Keep.BELOW``/``Keep.ABOVE``
            return only what lies on the -1/+1 side; faces lying in the plane
            are always kept.
        tolerance: Distance under which a vertex counts as on the plane

    Returns:
        List of faces. Faces that are not split are returned as the same
        objects that were passed in.
    """
    nfaces = []
    for face in faces:
        inout = classify_face(plane, face, tolerance)
        seen = 0
        for s in inout:
            seen |= 1 << (s + 1)

        if (seen & 5) == 5:
            for s in (-1, 1):
                if keep is Keep.BOTH or keep.value == s:
                    nfaces.append(_split_face(plane, face, inout, s))
        elif keep is Keep.BOTH or seen == 2 or (seen & (1 << (keep.value + 1))):
            nfaces.append(face)

    return nfaces


def angular_order(
    points: np.ndarray,
    normal: np.ndarray,
    tolerance: float = 1e-6
) -> list[int]:
    """Indices of coplanar ``points`` sorted counter-clockwise about ``normal``."""
    normal = normal / np.linalg.norm(normal)
    center = np.mean(points, axis=0)

    u = points[0] - center
    u = u - np.dot(u, normal) * normal
    if np.linalg.norm(u) < tolerance and len(points) > 1:
        u = points[1] - center
        u = u - np.dot(u, normal) * normal
    u = u / (np.linalg.norm(u) + 1e-10)
    v = np.cross(normal, u)

    angles = []
    for idx, p in enumerate(points):
        vec = p - center
        angles.append((np.arctan2(np.dot(vec, v), np.dot(vec, u)), idx))

    angles.sort()
    return [idx for _, idx in angles]


def _cap_face(
    plane: Plane,
    faces: Sequence[Sequence[Point]],
    outward: np.ndarray,
    tolerance: float
) -> Face | None:
    on_plane = [
        p.vector for face in faces for p in face
        if side(plane.signed_distance(p), tolerance) == 0
    ]
    if len(on_plane) < 3:
        return None
    # merge radius must not exceed the side test, or sliver caps collapse
    points = deduplicate_vertices(np.array(on_plane), tolerance)
    if len(points) < 3:
        return None
    return tuple(Point.from_xyz(*points[i]) for i in angular_order(points, outward))


def split_cubie(
    plane: Plane,
    cubie: Sequence[Sequence[Point]],
    tolerance: float = EPS
) -> tuple[Cubie | None, Cubie | None]:
    """Split a convex cubie into the pieces below and above ``plane``.

    Each piece gets a cap face in the cutting plane, wound counter-clockwise
    seen from outside the piece. If a cap cannot be closed (fewer than three
    distinct points on the plane), the cubie is returned whole on the side of
    its farthest vertex.

    Returns:
        ``(below, above)``; the side the cubie does not reach is ``None``

    Raises:
        DegenerateFaceError: every vertex of the cubie lies on the plane
    """
    sides = {s for face in cubie for s in classify_face(plane, face, tolerance)}
    sides.discard(0)
    if not sides:
        raise DegenerateFaceError(f"Cubie lies entirely in plane {plane}")
    if sides == {-1}:
        return tuple(tuple(f) for f in cubie), None
    if sides == {1}:
        return None, tuple(tuple(f) for f in cubie)

    below, above = [], []
    for face in cut_faces(plane, cubie, Keep.BOTH, tolerance):
        if face_side(plane, face, tolerance) < 0:
            below.append(tuple(face))
        else:
            above.append(tuple(face))

    normal = plane.normal
    below_cap = _cap_face(plane, below, normal, tolerance)
    above_cap = _cap_face(plane, above, -normal, tolerance)
    if below_cap is None or above_cap is None:
        whole = tuple(tuple(f) for f in cubie)
        distances = [plane.signed_distance(p) for face in cubie for p in face]
        if max(distances) > -min(distances):
            return None, whole
        return whole, None
    below.append(below_cap)
    above.append(above_cap)

    return tuple(below), tuple(above)
