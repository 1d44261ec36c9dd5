"""
Data classes for computed puzzle geometry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from .clipping import side
from .constants import EPS
from .quat import Cubie, Face, Plane


@dataclass
class PuzzleShape:
    """Outer shape of a puzzle: a convex polyhedron.

    Attributes:
        vertices: Nx3 array of vertex positions
        faces: Faces as ordered vertex loops
        face_planes: Plane carrying each face (same order as ``faces``)
        face_indices: Each face as indices into ``vertices``
    """

    vertices: np.ndarray
    faces: list[Face]
    face_planes: list[Plane]
    face_indices: list[list[int]] = field(default_factory=list)

    def center(self) -> np.ndarray:
        return np.mean(self.vertices, axis=0)

    def get_edges(self) -> list[tuple[int, int]]:
        """Unique edges as sorted vertex index pairs."""
        edges = set()
        for loop in self.face_indices:
            for i in range(len(loop)):
                a, b = loop[i], loop[(i + 1) % len(loop)]
                edges.add((min(a, b), max(a, b)))
        return sorted(edges)

    def euler_characteristic(self) -> int:
        return len(self.vertices) - len(self.get_edges()) + len(self.faces)

    def is_valid(self) -> bool:
        """Closed convex polyhedron with at least four vertices."""
        return (
            len(self.vertices) >= 4
            and len(self.faces) >= 4
            and self.euler_characteristic() == 2
        )

    def as_cubie(self) -> Cubie:
        return tuple(self.faces)

    def to_dict(self) -> dict[str, Any]:
        return {
            'vertices': self.vertices.tolist(),
            'faces': [list(loop) for loop in self.face_indices],
            'face_planes': [list(p) for p in self.face_planes],
        }


@dataclass
class PuzzlePieces:
    """A puzzle shape cut into cubies.

    Attributes:
        shape: The uncut outer shape
        cubies: Convex pieces, each a tuple of faces
        cut_planes: Distinct cut planes applied to the shape
    """

    shape: PuzzleShape
    cubies: list[Cubie]
    cut_planes: list[Plane]

    def facelets(self, index: int, tolerance: float = EPS) -> list[tuple[int, Face]]:
        """Visible faces of cubie ``index`` as (shape face index, face) pairs."""
        result = []
        for face in self.cubies[index]:
            for plane_idx, plane in enumerate(self.shape.face_planes):
                if all(side(plane.signed_distance(p), tolerance) == 0 for p in face):
                    result.append((plane_idx, face))
                    break
        return result

    def to_dict(self) -> dict[str, Any]:
        return {
            'shape': self.shape.to_dict(),
            'cut_planes': [list(p) for p in self.cut_planes],
            'cubies': [
                [[[p.x, p.y, p.z] for p in face] for face in cubie]
                for cubie in self.cubies
            ],
        }
