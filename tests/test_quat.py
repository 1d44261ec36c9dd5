"""
Tests for the quaternion value types.

Covers the shared algebra, the point/plane/rotation roles and the rotation
properties (isometry, inversion, offset preservation).
"""

import math

import numpy as np
import pytest

from puzzle_geometry import (
    EPS,
    GeometryError,
    Plane,
    Point,
    Quat,
    Rotation,
    as_rotation,
    random_rotation,
)


# =============================================================================
# Algebra Tests
# =============================================================================

class TestAlgebra:
    """Test operations shared by every quaternion role."""

    def test_multiply_basis(self):
        """i * j == k and j * i == -k."""
        i = Quat(0, 1, 0, 0)
        j = Quat(0, 0, 1, 0)
        assert i.multiply(j) == Quat(0, 0, 0, 1)
        assert j.multiply(i) == Quat(0, 0, 0, -1)

    def test_multiply_operator(self):
        """``*`` is the Hamilton product between quaternions."""
        q = Quat(1, 2, 3, 4)
        r = Quat(0.5, -1, 0, 2)
        assert q * r == q.multiply(r)

    def test_multiply_identity(self):
        q = Quat(0.3, -0.2, 0.7, 1.5)
        assert Quat(1, 0, 0, 0).multiply(q) == q
        assert q.multiply(Quat(1, 0, 0, 0)) == q

    def test_dot_uses_vector_part(self):
        """The scalar component does not contribute to the dot product."""
        assert Quat(100, 1, 2, 3).dot(Quat(-50, 4, 5, 6)) == 32

    def test_cross_uses_vector_part(self):
        c = Quat(9, 1, 0, 0).cross(Quat(9, 0, 1, 0))
        assert isinstance(c, Point)
        assert c == Point(0, 0, 0, 1)

    def test_length_and_distance(self):
        assert Quat(1, 2, 2, 4).length() == pytest.approx(5.0)
        assert Quat(1, 1, 1, 1).distance(Quat(1, 1, 1, 1)) == 0.0
        assert Quat(0, 0, 0, 0).distance(Quat(0, 3, 0, 4)) == pytest.approx(5.0)

    def test_component_wise(self):
        q = Quat(1, 2, 3, 4)
        r = Quat(4, 3, 2, 1)
        assert q.add(r) == Quat(5, 5, 5, 5)
        assert q.subtract(r) == Quat(-3, -1, 1, 3)
        assert q.scalar_multiply(2) == Quat(2, 4, 6, 8)
        assert 2 * q == q * 2 == Quat(2, 4, 6, 8)
        assert -q == Quat(-1, -2, -3, -4)

    def test_normalize_uses_full_norm(self):
        """normalize() divides by the 4-vector norm, scalar part included."""
        n = Quat(1, 1, 1, 1).normalize()
        assert np.allclose(n.as_array(), [0.5, 0.5, 0.5, 0.5])
        assert n.length() == pytest.approx(1.0)

    def test_normalize_zero_raises(self):
        with pytest.raises(GeometryError):
            Quat(0, 0, 0, 0).normalize()

    def test_role_preserved(self):
        """Component-wise operations keep the role of the left operand."""
        p = Point.from_xyz(1, 2, 3)
        assert isinstance(p.add(Point.from_xyz(1, 1, 1)), Point)
        assert isinstance(p.scalar_multiply(0.5), Point)
        assert isinstance(Plane(1, 1, 0, 0).scalar_multiply(-1), Plane)

    def test_from_array_round_trip(self):
        q = Quat.from_array([1.0, 2.0, 3.0, 4.0])
        assert q == Quat(1, 2, 3, 4)
        assert np.array_equal(q.as_array(), [1, 2, 3, 4])
        assert list(q) == [1, 2, 3, 4]

    def test_from_array_wrong_size(self):
        with pytest.raises(ValueError):
            Quat.from_array([1.0, 2.0, 3.0])

    def test_str(self):
        assert str(Quat(1, 0, 0.5, -2)) == "Q[1,0,0.5,-2]"

    def test_equality_ignores_role(self):
        """Equal components compare and hash equal whatever the role."""
        p = Point(0, 1, 0, 0)
        q = Quat(0, 1, 0, 0)
        assert p == q
        assert q == p
        assert hash(p) == hash(q)
        assert len({p, q, Plane(0, 1, 0, 0)}) == 1
        assert p != Quat(0, 1, 0, 1)
        assert p != (0, 1, 0, 0)

    def test_values_are_immutable(self):
        q = Quat(1, 2, 3, 4)
        with pytest.raises(AttributeError):
            q.a = 5


# =============================================================================
# Point and Plane Tests
# =============================================================================

class TestPointPlane:
    """Test role-specific point and plane operations."""

    def test_point_coordinates(self):
        p = Point.from_xyz(1, 2, 3)
        assert p.a == 0.0
        assert (p.x, p.y, p.z) == (1.0, 2.0, 3.0)

    def test_plane_accessors(self):
        plane = Plane(2.0, 0.0, 3.0, 4.0)
        assert plane.offset == 2.0
        assert np.array_equal(plane.normal, [0.0, 3.0, 4.0])
        assert plane.normal_length() == pytest.approx(5.0)

    def test_normalized_plane_scales_offset(self):
        """Offset is divided by the normal length along with the normal."""
        plane = Plane(6.0, 0.0, 3.0, 4.0).normalized()
        assert np.allclose(plane.as_array(), [1.2, 0.0, 0.6, 0.8])

    def test_unit_normal(self):
        n = Plane(7.0, 0.0, 0.0, 2.0).unit_normal()
        assert n == Point(0.0, 0.0, 0.0, 1.0)

    def test_zero_normal_raises(self):
        with pytest.raises(GeometryError):
            Plane(1.0, 0.0, 0.0, 0.0).normalized()

    def test_from_normal(self):
        plane = Plane.from_normal(Point.from_xyz(0, 1, 0), 0.5)
        assert plane == Plane(0.5, 0.0, 1.0, 0.0)
        assert Plane.from_normal([1, 0, 0], 2) == Plane(2.0, 1.0, 0.0, 0.0)

    def test_signed_distance(self):
        plane = Plane(1.0, 1.0, 0.0, 0.0)
        assert plane.signed_distance(Point.from_xyz(3, 5, 7)) == 2.0
        assert plane.signed_distance(Point.from_xyz(0, 5, 7)) == -1.0

    def test_same_plane_reflexive(self):
        plane = Plane(0.3, 1.0, -2.0, 0.5)
        assert plane.same_plane(plane)

    def test_same_plane_negated(self):
        """Both normal orientations describe one plane."""
        plane = Plane(0.3, 1.0, -2.0, 0.5)
        assert plane.same_plane(plane.scalar_multiply(-1))

    def test_same_plane_scaled(self):
        plane = Plane(1.0, 1.0, 1.0, 0.0)
        assert plane.same_plane(plane.scalar_multiply(3.5))

    def test_different_planes(self):
        assert not Plane(1.0, 1.0, 0.0, 0.0).same_plane(Plane(-1.0, 1.0, 0.0, 0.0))
        assert not Plane(1.0, 1.0, 0.0, 0.0).same_plane(Plane(1.0, 0.0, 1.0, 0.0))


# =============================================================================
# Rotation Tests
# =============================================================================

class TestRotation:
    """Test rotations acting on points, planes, faces and cubies."""

    def test_identity(self):
        p = Point.from_xyz(1, -2, 3)
        assert Rotation.identity().rotate_point(p) == p

    def test_inverse(self):
        r = Rotation(0.5, 0.5, -0.5, 0.5)
        assert r.inverse() == Rotation(0.5, -0.5, 0.5, -0.5)

    def test_rotate_quarter_turn(self):
        """90 degrees about z takes x to y."""
        r = Rotation.from_axis_angle([0, 0, 1], math.pi / 2)
        p = Point.from_xyz(1, 0, 0).rotate(r)
        assert isinstance(p, Point)
        assert np.allclose(p.vector, [0, 1, 0], atol=EPS)

    def test_axis_normalized(self):
        r = Rotation.from_axis_angle([0, 0, 5], math.pi)
        assert r.length() == pytest.approx(1.0)
        assert r.angle() == pytest.approx(math.pi)

    def test_zero_axis_raises(self):
        with pytest.raises(ValueError):
            Rotation.from_axis_angle([0, 0, 0], 1.0)

    def test_compose_returns_rotation(self):
        r = Rotation.from_axis_angle([1, 0, 0], math.pi / 2)
        assert isinstance(r * r, Rotation)
        assert (r * r).angle() == pytest.approx(math.pi)

    def test_composition_applies_right_to_left(self):
        rx = Rotation.from_axis_angle([1, 0, 0], math.pi / 2)
        rz = Rotation.from_axis_angle([0, 0, 1], math.pi / 2)
        p = Point.from_xyz(0, 1, 0)
        step = rz.rotate_point(rx.rotate_point(p))
        both = rz.multiply(rx).rotate_point(p)
        assert both.is_close(step)

    def test_angle_clamped(self):
        """Slightly denormalized scalar part must not produce NaN."""
        assert Rotation(1.0 + 1e-12, 0, 0, 0).angle() == 0.0
        assert Rotation(-1.0 - 1e-12, 0, 0, 0).angle() == pytest.approx(2 * math.pi)

    def test_same_rotation_sign(self):
        r = Rotation.from_axis_angle([1, 2, 3], 0.7)
        assert r.same_rotation(-r)
        assert not r.same_rotation(r.inverse())

    def test_rotation_is_isometry(self):
        rng = np.random.default_rng(7)
        for _ in range(20):
            q = random_rotation(rng)
            p1 = Point.from_xyz(*rng.uniform(-3, 3, size=3))
            p2 = Point.from_xyz(*rng.uniform(-3, 3, size=3))
            before = p1.distance(p2)
            after = p1.rotate(q).distance(p2.rotate(q))
            assert after == pytest.approx(before, abs=1e-9)

    def test_round_trip_inversion(self):
        rng = np.random.default_rng(11)
        for _ in range(20):
            q = random_rotation(rng)
            p = Point.from_xyz(*rng.uniform(-3, 3, size=3))
            back = p.rotate(q).rotate(q.inverse())
            assert back.is_close(p, tolerance=EPS)

    def test_plane_rotation_preserves_offset(self):
        rng = np.random.default_rng(3)
        plane = Plane(0.37, 1.0, 2.0, -0.5)
        for _ in range(20):
            rotated = plane.rotate(random_rotation(rng))
            assert isinstance(rotated, Plane)
            assert rotated.offset == plane.offset

    def test_plane_rotation_moves_normal(self):
        r = Rotation.from_axis_angle([0, 0, 1], math.pi / 2)
        rotated = Plane(2.0, 1.0, 0.0, 0.0).rotate(r)
        assert np.allclose(rotated.normal, [0, 1, 0], atol=EPS)

    def test_rotate_face_preserves_order(self):
        r = Rotation.from_axis_angle([0, 0, 1], math.pi)
        face = [Point.from_xyz(1, 0, 0), Point.from_xyz(0, 1, 0), Point.from_xyz(0, 0, 1)]
        rotated = r.rotate_face(face)
        assert len(rotated) == 3
        expected = [[-1, 0, 0], [0, -1, 0], [0, 0, 1]]
        for p, e in zip(rotated, expected, strict=True):
            assert np.allclose(p.vector, e, atol=EPS)

    def test_rotate_cubie_preserves_grouping(self):
        r = Rotation.from_axis_angle([1, 1, 1], 2 * math.pi / 3)
        cubie = (
            (Point.from_xyz(1, 0, 0), Point.from_xyz(0, 1, 0), Point.from_xyz(0, 0, 1)),
            (Point.from_xyz(0, 0, 0), Point.from_xyz(1, 0, 0), Point.from_xyz(0, 1, 0)),
        )
        rotated = r.rotate_cubie(cubie)
        assert [len(f) for f in rotated] == [3, 3]
        # x -> y -> z -> x about the body diagonal
        assert np.allclose(rotated[0][0].vector, [0, 1, 0], atol=EPS)
        assert np.allclose(rotated[1][0].vector, [0, 0, 0], atol=EPS)

    def test_rotate_by_plain_quat(self):
        """Points and planes accept a rotation given as a plain Quat."""
        half = math.sqrt(0.5)
        quarter = Quat(half, 0.0, 0.0, half)
        p = Point.from_xyz(1, 0, 0).rotate(quarter)
        assert isinstance(p, Point)
        assert np.allclose(p.vector, [0, 1, 0], atol=EPS)

        plane = Plane(2.0, 1.0, 0.0, 0.0).rotate(quarter)
        assert isinstance(plane, Plane)
        assert plane.offset == 2.0
        assert np.allclose(plane.normal, [0, 1, 0], atol=EPS)

    def test_as_rotation(self):
        r = Rotation.from_axis_angle([0, 1, 0], 1.0)
        assert as_rotation(r) is r
        q = as_rotation(Quat(*r))
        assert isinstance(q, Rotation)
        assert q == r
