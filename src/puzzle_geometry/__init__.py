"""
Puzzle Geometry - polyhedral geometry for twisty puzzles.

Computes the shape, cubies and facelets of a twisty puzzle from its face
planes, cut planes and rotation group. Quaternions carry points, planes
and rotations.

Example:
    >>> from puzzle_geometry import Plane, build_pieces, cube_rotations
    >>>
    >>> face = Plane(1.0, 1.0, 0.0, 0.0)
    >>> cut = Plane(1 / 3, 1.0, 0.0, 0.0)
    >>> pieces = build_pieces([face], [cut], cube_rotations())
    >>> print(len(pieces.cubies))
    27
"""

__version__ = "1.0.0"

from .clipping import (
    Keep,
    classify_face,
    cut_faces,
    face_side,
    side,
    split_cubie,
)
from .constants import DEDUP_TOL, EPS

# Errors
from .errors import (
    DegenerateFaceError,
    GeometryError,
    GroupClosureError,
    NoIntersectionError,
    ShapeError,
)

# Shape and piece construction
from .geometry import (
    build_pieces,
    build_shape,
    compute_face_vertices,
    create_cube,
    create_octahedron,
    create_tetrahedron,
    cube_rotations,
    cut_cubies,
    tetrahedral_rotations,
)
from .intersect import (
    Intersection,
    enumerate_vertices,
    intersect_three,
    solve_three_planes,
)

# Data classes
from .models import PuzzlePieces, PuzzleShape

# Orbits
from .orbit import (
    center_of_mass_face,
    close_group,
    expand_faces,
    expand_planes,
    random_rotation,
    unique_planes,
)

# Values
from .quat import Cubie, Face, Plane, Point, Quat, Rotation, as_rotation

__all__ = [
    # Version
    "__version__",
    # Values
    "Quat",
    "Point",
    "Plane",
    "Rotation",
    "Face",
    "Cubie",
    "as_rotation",
    # Tolerances
    "EPS",
    "DEDUP_TOL",
    # Intersection
    "Intersection",
    "intersect_three",
    "solve_three_planes",
    "enumerate_vertices",
    # Clipping
    "Keep",
    "side",
    "classify_face",
    "face_side",
    "cut_faces",
    "split_cubie",
    # Orbits
    "expand_faces",
    "expand_planes",
    "unique_planes",
    "center_of_mass_face",
    "random_rotation",
    "close_group",
    # Construction
    "build_shape",
    "build_pieces",
    "cut_cubies",
    "compute_face_vertices",
    "cube_rotations",
    "tetrahedral_rotations",
    "create_cube",
    "create_octahedron",
    "create_tetrahedron",
    # Data classes
    "PuzzleShape",
    "PuzzlePieces",
    # Errors
    "GeometryError",
    "NoIntersectionError",
    "DegenerateFaceError",
    "ShapeError",
    "GroupClosureError",
]
