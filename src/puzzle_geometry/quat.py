"""
Quaternion values used as points, planes and rotations.

A ``Quat`` is an immutable 4-tuple (a, b, c, d). Three tagged subtypes give
the tuple its geometric meaning:

    Point     (0, x, y, z)
    Plane     (offset, nx, ny, nz), the locus of p with p . n == offset
    Rotation  (cos(t/2), sin(t/2) * axis)

Operations shared by every role (sums, scaling, vector-part dot/cross) live
on ``Quat``; rotating and plane handling are only exposed on the subtype that
makes sense for them.

Equality and hashing compare the four components only, so
``Point(0, 1, 0, 0) == Quat(0, 1, 0, 0)``. Component-wise arithmetic keeps
the role of the left operand.
"""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from .constants import EPS
from .errors import GeometryError

if TYPE_CHECKING:
    from .clipping import Keep
    from .intersect import Intersection


@dataclass(frozen=True, eq=False)
class Quat:
    """Plain quaternion with Hamilton product and component-wise algebra."""

    a: float
    b: float
    c: float
    d: float

    # =========================================================================
    # Construction and conversion
    # =========================================================================

    @classmethod
    def from_array(cls, values: Sequence[float] | np.ndarray) -> Quat:
        """Build a value of this role from four numbers.

        Args:
            values: Components (a, b, c, d)

        Returns:
            New instance of ``cls``

        Raises:
            ValueError: ``values`` does not hold exactly four numbers
        """
        if len(values) != 4:
            raise ValueError(f"Expected 4 components, got {len(values)}")
        return cls(*(float(v) for v in values))

    def as_array(self) -> np.ndarray:
        """All four components as a numpy array."""
        return np.array([self.a, self.b, self.c, self.d], dtype=np.float64)

    @property
    def vector(self) -> np.ndarray:
        """Vector part (b, c, d) as a numpy array."""
        return np.array([self.b, self.c, self.d], dtype=np.float64)

    def __iter__(self) -> Iterator[float]:
        return iter((self.a, self.b, self.c, self.d))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quat):
            return NotImplemented
        return tuple(self) == tuple(other)

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __str__(self) -> str:
        return f"Q[{self.a},{self.b},{self.c},{self.d}]"

    def _same_kind(self, a: float, b: float, c: float, d: float) -> Quat:
        return type(self)(a, b, c, d)

    # =========================================================================
    # Algebra
    # =========================================================================

    def multiply(self, q: Quat) -> Quat:
        """Hamilton product ``self * q`` (non-commutative).

        Args:
            q: Right-hand factor

        Returns:
            Plain Quat product
        """
        return Quat(
            self.a * q.a - self.b * q.b - self.c * q.c - self.d * q.d,
            self.a * q.b + self.b * q.a + self.c * q.d - self.d * q.c,
            self.a * q.c - self.b * q.d + self.c * q.a + self.d * q.b,
            self.a * q.d + self.b * q.c - self.c * q.b + self.d * q.a,
        )

    def dot(self, q: Quat) -> float:
        """Dot product of the vector parts."""
        return self.b * q.b + self.c * q.c + self.d * q.d

    def cross(self, q: Quat) -> Point:
        """Cross product of the vector parts."""
        return Point(
            0.0,
            self.c * q.d - self.d * q.c,
            self.d * q.b - self.b * q.d,
            self.b * q.c - self.c * q.b,
        )

    def length(self) -> float:
        """Euclidean norm over all four components."""
        return float(np.linalg.norm(self.as_array()))

    def distance(self, q: Quat) -> float:
        """Euclidean distance to ``q`` over all four components."""
        return float(np.linalg.norm(self.as_array() - q.as_array()))

    def scalar_multiply(self, m: float) -> Quat:
        """Scale every component by ``m``."""
        return self._same_kind(self.a * m, self.b * m, self.c * m, self.d * m)

    def add(self, q: Quat) -> Quat:
        """Component-wise sum, with the role of ``self``."""
        return self._same_kind(self.a + q.a, self.b + q.b, self.c + q.c, self.d + q.d)

    def subtract(self, q: Quat) -> Quat:
        """Component-wise difference, with the role of ``self``."""
        return self._same_kind(self.a - q.a, self.b - q.b, self.c - q.c, self.d - q.d)

    def normalize(self) -> Quat:
        """Scale to unit length over all four components.

        Raises:
            GeometryError: the quaternion is zero
        """
        n = self.length()
        if n == 0.0:
            raise GeometryError("Cannot normalize a zero quaternion")
        return self._same_kind(self.a / n, self.b / n, self.c / n, self.d / n)

    def is_close(self, q: Quat, tolerance: float = EPS) -> bool:
        """True when ``q`` is within ``tolerance`` of this value."""
        return self.distance(q) < tolerance

    def __mul__(self, other):
        if isinstance(other, Quat):
            return self.multiply(other)
        if isinstance(other, (int, float)):
            return self.scalar_multiply(other)
        return NotImplemented

    def __rmul__(self, other):
        if isinstance(other, (int, float)):
            return self.scalar_multiply(other)
        return NotImplemented

    def __add__(self, other: Quat) -> Quat:
        return self.add(other)

    def __sub__(self, other: Quat) -> Quat:
        return self.subtract(other)

    def __neg__(self) -> Quat:
        return self.scalar_multiply(-1.0)


def as_rotation(q: Quat) -> Rotation:
    """View any quaternion as a Rotation, without renormalizing it."""
    if isinstance(q, Rotation):
        return q
    return Rotation(*q)


@dataclass(frozen=True, eq=False)
class Point(Quat):
    """A point in space, stored as the pure quaternion (0, x, y, z)."""

    @classmethod
    def from_xyz(cls, x: float, y: float, z: float) -> Point:
        return cls(0.0, float(x), float(y), float(z))

    @property
    def x(self) -> float:
        return self.b

    @property
    def y(self) -> float:
        return self.c

    @property
    def z(self) -> float:
        return self.d

    def rotate(self, rotation: Quat) -> Point:
        """Rotate about the origin by a unit quaternion."""
        return as_rotation(rotation).rotate_point(self)


@dataclass(frozen=True, eq=False)
class Plane(Quat):
    """Plane ``p . normal == offset``; the normal need not be unit length."""

    @classmethod
    def from_normal(cls, normal: Quat | Sequence[float] | np.ndarray,
                    offset: float) -> Plane:
        """Build a cut plane at ``offset`` from a normal direction.

        Args:
            normal: Direction as a Quat (vector part used) or three numbers
            offset: Value of ``p . normal`` on the plane

        Returns:
            Plane (offset, nx, ny, nz)
        """
        if isinstance(normal, Quat):
            nx, ny, nz = normal.b, normal.c, normal.d
        else:
            nx, ny, nz = (float(v) for v in normal)
        return cls(float(offset), nx, ny, nz)

    @property
    def offset(self) -> float:
        return self.a

    @property
    def normal(self) -> np.ndarray:
        return self.vector

    def normal_length(self) -> float:
        return math.hypot(self.b, self.c, self.d)

    def normalized(self) -> Plane:
        """Divide all components by the normal length (same locus)."""
        n = self.normal_length()
        if n == 0.0:
            raise GeometryError(f"Plane {self} has a zero normal")
        return Plane(self.a / n, self.b / n, self.c / n, self.d / n)

    def unit_normal(self) -> Point:
        """Unit normal direction as a Point."""
        n = self.normal_length()
        if n == 0.0:
            raise GeometryError(f"Plane {self} has a zero normal")
        return Point(0.0, self.b / n, self.c / n, self.d / n)

    def signed_distance(self, point: Quat) -> float:
        """``point . normal - offset``, scaled by the normal length."""
        return point.dot(self) - self.a

    def rotate(self, rotation: Quat) -> Plane:
        """Rotate the normal about the origin; the offset is unchanged."""
        return as_rotation(rotation).rotate_plane(self)

    def same_plane(self, p: Plane, tolerance: float = EPS) -> bool:
        """True when both describe the same locus, for either normal sign."""
        a = self.normalized()
        b = p.normalized()
        return a.distance(b) < tolerance or a.distance(-b) < tolerance

    def cut_faces(
        self,
        faces: Sequence[Sequence[Point]],
        keep: Keep | None = None,
        tolerance: float = EPS
    ) -> list[Sequence[Point]]:
        """Cut ``faces`` by this plane; see ``clipping.cut_faces``."""
        from .clipping import Keep, cut_faces

        return cut_faces(self, faces, keep=Keep.BOTH if keep is None else keep,
                         tolerance=tolerance)

    def face_side(self, face: Sequence[Point], tolerance: float = EPS) -> int:
        """Side of this plane ``face`` lies on; see ``clipping.face_side``."""
        from .clipping import face_side

        return face_side(self, face, tolerance=tolerance)

    def intersect_three(
        self,
        p2: Plane,
        p3: Plane,
        tolerance: float = EPS
    ) -> Intersection:
        """Common point of three planes; see ``intersect.intersect_three``."""
        from .intersect import intersect_three

        return intersect_three(self, p2, p3, tolerance=tolerance)


@dataclass(frozen=True, eq=False)
class Rotation(Quat):
    """Unit quaternion acting on points and planes by conjugation."""

    @classmethod
    def identity(cls) -> Rotation:
        return cls(1.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_axis_angle(cls, axis: Sequence[float] | np.ndarray,
                        angle: float) -> Rotation:
        """Rotation of ``angle`` radians about ``axis``.

        Args:
            axis: Rotation axis, any non-zero length
            angle: Angle in radians, counter-clockwise looking down the axis

        Returns:
            Unit Rotation
        """
        axis = np.asarray(axis, dtype=np.float64)
        norm = np.linalg.norm(axis)
        if norm == 0.0:
            raise ValueError("Rotation axis must be non-zero")
        s = math.sin(angle / 2) / norm
        return cls(math.cos(angle / 2), axis[0] * s, axis[1] * s, axis[2] * s)

    def multiply(self, q: Quat) -> Quat:
        """Hamilton product; the product of two rotations is a Rotation."""
        product = super().multiply(q)
        if isinstance(q, Rotation):
            return Rotation(*product)
        return product

    def inverse(self) -> Rotation:
        """Inverse of a unit rotation (conjugate)."""
        return Rotation(self.a, -self.b, -self.c, -self.d)

    def angle(self) -> float:
        """Rotation angle in radians, ``2 * acos(a)`` with ``a`` clamped."""
        return 2.0 * math.acos(float(np.clip(self.a, -1.0, 1.0)))

    def same_rotation(self, r: Rotation, tolerance: float = EPS) -> bool:
        """``q`` and ``-q`` describe the same rotation."""
        return self.distance(r) < tolerance or self.distance(-r) < tolerance

    def rotate_point(self, point: Quat) -> Point:
        """Conjugate ``point`` by this rotation: ``q * p * q^-1``."""
        return Point(*self.multiply(point).multiply(self.inverse()))

    def rotate_plane(self, plane: Plane) -> Plane:
        """Rotate the plane normal by conjugation and keep the offset.

        Args:
            plane: Plane to rotate

        Returns:
            Plane with the same offset and rotated normal
        """
        t = self.multiply(Quat(0.0, plane.b, plane.c, plane.d)).multiply(self.inverse())
        return Plane(plane.a, t.b, t.c, t.d)

    def rotate_face(self, face: Sequence[Quat]) -> Face:
        """Rotate every vertex of a face, keeping vertex order."""
        return tuple(self.rotate_point(p) for p in face)

    def rotate_cubie(self, cubie: Sequence[Sequence[Quat]]) -> Cubie:
        """Rotate every face of a cubie, keeping face grouping and order."""
        return tuple(self.rotate_face(face) for face in cubie)


Face = tuple[Point, ...]
Cubie = tuple[Face, ...]
