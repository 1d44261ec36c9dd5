"""
Puzzle Geometry Engine.

Builds the outer shape of a puzzle from face planes and a rotation group,
then cuts it into cubies with the puzzle's cut planes.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

import numpy as np

from .clipping import angular_order, split_cubie
from .constants import EPS
from .errors import ShapeError
from .intersect import enumerate_vertices
from .models import PuzzlePieces, PuzzleShape
from .orbit import close_group, expand_planes, unique_planes
from .quat import Cubie, Plane, Point, Rotation

logger = logging.getLogger(__name__)


def compute_face_vertices(
    vertices: np.ndarray,
    plane: Plane,
    tolerance: float = 1e-6
) -> list[int]:
    """Find vertices that lie on a face plane.

    Args:
        vertices: All vertices
        plane: Face plane with unit normal
        tolerance: Numerical tolerance

    Returns:
        List of vertex indices on this face, ordered counter-clockwise
        when viewed from outside
    """
    normal = plane.normal
    on_face = [
        i for i, v in enumerate(vertices)
        if abs(np.dot(normal, v) - plane.offset) < tolerance
    ]

    if len(on_face) < 3:
        return []

    order = angular_order(vertices[on_face], normal, tolerance)
    return [on_face[i] for i in order]


def build_shape(
    face_planes: Sequence[Plane],
    rotations: Sequence[Rotation],
    tolerance: float = EPS
) -> PuzzleShape:
    """Compute the convex shape bounded by the orbit of ``face_planes``.

    Args:
        face_planes: Generating face planes, each with a positive offset
        rotations: Rotation group of the puzzle
        tolerance: Side and equality tolerance

    Returns:
        PuzzleShape with vertices and ordered faces
    """
    for plane in face_planes:
        if plane.offset <= 0:
            raise ValueError(f"Face plane {plane} must have a positive offset")

    planes = [p.normalized() for p in unique_planes(
        expand_planes(rotations, face_planes), tolerance
    )]

    vertices = enumerate_vertices(planes, tolerance=tolerance)
    if len(vertices) < 4:
        raise ShapeError("Failed to compute puzzle shape - no closed solid")

    faces = []
    final_planes = []
    face_indices = []
    for plane in planes:
        loop = compute_face_vertices(vertices, plane)
        if len(loop) >= 3:
            faces.append(tuple(Point.from_xyz(*vertices[i]) for i in loop))
            final_planes.append(plane)
            face_indices.append(loop)

    logger.debug(
        "Shape from %d face planes: %d vertices, %d faces",
        len(planes), len(vertices), len(faces),
    )
    return PuzzleShape(
        vertices=vertices,
        faces=faces,
        face_planes=final_planes,
        face_indices=face_indices,
    )


def cut_cubies(
    cubies: Sequence[Cubie],
    cut_planes: Sequence[Plane],
    tolerance: float = EPS
) -> list[Cubie]:
    """Split every cubie by every cut plane in turn."""
    result = list(cubies)
    for plane in cut_planes:
        pieces = []
        for cubie in result:
            for piece in split_cubie(plane, cubie, tolerance):
                if piece is not None:
                    pieces.append(piece)
        result = pieces
    return result


def build_pieces(
    face_planes: Sequence[Plane],
    cut_planes: Sequence[Plane],
    rotations: Sequence[Rotation],
    tolerance: float = EPS
) -> PuzzlePieces:
    """Build a puzzle shape and cut it into cubies.

    Args:
        face_planes: Generating face planes
        cut_planes: Generating cut planes
        rotations: Rotation group applied to both plane sets
        tolerance: Side and equality tolerance

    Returns:
        PuzzlePieces with the shape, distinct cut planes and cubies
    """
    shape = build_shape(face_planes, rotations, tolerance)

    cuts = [p.normalized() for p in unique_planes(
        expand_planes(rotations, cut_planes), tolerance
    )]
    cubies = cut_cubies([shape.as_cubie()], cuts, tolerance)

    logger.debug("%d cut planes produced %d cubies", len(cuts), len(cubies))
    return PuzzlePieces(shape=shape, cubies=cubies, cut_planes=cuts)


def cube_rotations() -> list[Rotation]:
    """The 24 proper rotations of the cube."""
    return close_group([
        Rotation.from_axis_angle([0, 0, 1], math.pi / 2),
        Rotation.from_axis_angle([1, 0, 0], math.pi / 2),
    ])


def tetrahedral_rotations() -> list[Rotation]:
    """The 12 proper rotations of the tetrahedron."""
    return close_group([
        Rotation.from_axis_angle([1, 1, 1], 2 * math.pi / 3),
        Rotation.from_axis_angle([1, 0, 0], math.pi),
    ])


def create_cube(scale: float = 1.0) -> PuzzleShape:
    """Cube with face centers at distance ``scale`` from the origin."""
    return build_shape([Plane(scale, 1.0, 0.0, 0.0)], cube_rotations())


def create_octahedron(scale: float = 1.0) -> PuzzleShape:
    """Octahedron with face centers at distance ``scale`` from the origin."""
    normal = np.array([1.0, 1.0, 1.0]) / math.sqrt(3)
    return build_shape([Plane.from_normal(normal, scale)], cube_rotations())


def create_tetrahedron(scale: float = 1.0) -> PuzzleShape:
    """Tetrahedron with face centers at distance ``scale`` from the origin."""
    normal = np.array([1.0, 1.0, 1.0]) / math.sqrt(3)
    return build_shape([Plane.from_normal(normal, scale)], tetrahedral_rotations())
