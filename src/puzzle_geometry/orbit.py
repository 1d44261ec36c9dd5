"""
Orbit expansion under a rotation group.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import numpy as np

from .constants import EPS, MAX_GROUP_SIZE
from .errors import GroupClosureError
from .quat import Face, Plane, Point, Quat, Rotation, as_rotation

logger = logging.getLogger(__name__)


def expand_faces(
    rotations: Sequence[Quat],
    faces: Sequence[Sequence[Quat]]
) -> list[Face]:
    """Apply every rotation to every face.

    Planes keep their offset and only their normal turns; every other value
    is treated as a point and conjugated. Plain ``Quat`` rotations are used
    as given, without renormalizing.

    Args:
        rotations: Unit quaternions
        faces: Sequences of points or planes

    Returns:
        ``len(rotations) * len(faces)`` faces, rotation-major, with no
        deduplication
    """
    nfaces = []
    for rot in map(as_rotation, rotations):
        for face in faces:
            nfaces.append(tuple(
                rot.rotate_plane(element) if isinstance(element, Plane)
                else rot.rotate_point(element)
                for element in face
            ))
    return nfaces


def expand_planes(
    rotations: Sequence[Rotation],
    planes: Sequence[Plane]
) -> list[Plane]:
    """Images of every plane under every rotation, rotation-major."""
    return [plane.rotate(rot) for rot in rotations for plane in planes]


def unique_planes(planes: Iterable[Plane], tolerance: float = EPS) -> list[Plane]:
    """Drop planes describing the same locus as an earlier one."""
    unique: list[Plane] = []
    for plane in planes:
        if not any(plane.same_plane(u, tolerance) for u in unique):
            unique.append(plane)
    return unique


def center_of_mass_face(face: Sequence[Quat]) -> Point:
    """Mean of the vertices of a face (not the area centroid)."""
    if not face:
        raise ValueError("Face has no vertices")
    s = Point(0.0, 0.0, 0.0, 0.0)
    for p in face:
        s = s.add(p)
    return s.scalar_multiply(1.0 / len(face))


def random_rotation(rng: np.random.Generator | None = None) -> Rotation:
    """Random unit rotation for sampling and fuzzing.

    Not uniform over SO(3): a uniform 4-vector from [-1, 1) is scaled to
    unit length.
    """
    if rng is None:
        rng = np.random.default_rng()
    q = Rotation.from_array(rng.uniform(-1.0, 1.0, size=4))
    return q.normalize()


def close_group(
    generators: Iterable[Rotation],
    tolerance: float = 1e-6,
    max_size: int = MAX_GROUP_SIZE
) -> list[Rotation]:
    """Close a set of rotations under composition.

    ``q`` and ``-q`` are treated as the same rotation. The identity is always
    the first element.

    Raises:
        GroupClosureError: more than ``max_size`` distinct rotations appear
    """
    gens = list(generators)
    group = [Rotation.identity()]
    frontier = [Rotation.identity()]

    while frontier:
        next_frontier = []
        for g in frontier:
            for h in gens:
                candidate = h.multiply(g)
                if any(candidate.same_rotation(r, tolerance) for r in group):
                    continue
                group.append(candidate)
                next_frontier.append(candidate)
                if len(group) > max_size:
                    raise GroupClosureError(
                        f"Generators did not close within {max_size} rotations"
                    )
        frontier = next_frontier

    logger.debug("Closed %d generators into a group of %d", len(gens), len(group))
    return group
