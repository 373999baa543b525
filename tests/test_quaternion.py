import math

import pytest

from octomath.angles import HALF_PI
from octomath.quaternion import Quat
from octomath.vector import Vec3


def _approx(v):
    return pytest.approx(list(v), abs=1e-9)


def test_identity_is_neutral_for_multiplication():
    q = Quat(0.1, -0.4, 0.7, 0.5)
    assert Quat.identity() * q == q
    assert q * Quat.identity() == q


def test_conjugate_twice_is_original():
    q = Quat(0.3, 0.2, -0.9, 0.1)
    assert q.conjugate().conjugate() == q


def test_product_with_conjugate_has_no_vector_part():
    q = Quat(0.3, 0.2, -0.9, 0.1)
    p = q * q.conjugate()
    assert [p.x, p.y, p.z] == pytest.approx([0.0, 0.0, 0.0])
    assert p.w == pytest.approx(sum(c * c for c in q))


def test_from_scalar_and_vec3_places_components():
    q = Quat.from_scalar_and_vec3(0.5, Vec3(1.0, 2.0, 3.0))
    assert q == Quat(1.0, 2.0, 3.0, 0.5)


def test_normalize_places_scalar_into_x():
    assert Quat(0.0, 0.0, 0.0, 2.0).normalize() == Quat(1.0, 0.0, 0.0, 0.0)


def test_normalize_gives_unit_length():
    q = Quat(1.0, -2.0, 3.0, 4.0).normalize()
    assert sum(c * c for c in q) == pytest.approx(1.0)


def test_normalize_zero_quaternion_unchanged():
    assert Quat().normalize() == Quat()


def test_roll_pitch_yaw_matches_euler_angles():
    angles = Vec3(0.3, -0.2, 1.1)
    assert list(Quat.from_roll_pitch_yaw(angles)) == _approx(Quat.from_euler_angles(angles))


@pytest.mark.parametrize("angles", [Vec3(0.3, -0.2, 1.1), Vec3(-1.0, 0.5, -2.5), Vec3(0.0, 0.0, 0.0)])
def test_euler_round_trip(angles):
    assert list(Quat.from_euler_angles(angles).to_euler_angles()) == _approx(angles)


def test_euler_pitch_is_clamped():
    angles = Quat(0.0, 1.0, 0.0, 1.0).to_euler_angles()
    assert angles.y == pytest.approx(HALF_PI)


def test_rotate_by_identity_keeps_vector():
    v = Vec3(1.0, -2.0, 3.0)
    assert list(Quat.identity().rotate(v)) == _approx(v)


def test_rotate_quarter_turn_about_z():
    half = math.pi / 4
    q = Quat.from_scalar_and_vec3(math.cos(half), Vec3(0.0, 0.0, math.sin(half)))
    assert list(q.rotate(Vec3(1.0, 0.0, 0.0))) == _approx(Vec3(0.0, 1.0, 0.0))


def test_rotate_preserves_length():
    q = Quat.from_euler_angles(Vec3(0.4, 1.2, -0.7))
    v = Vec3(2.0, -1.0, 0.5)
    assert q.rotate(v).magnitude() == pytest.approx(v.magnitude())


def test_rotate_then_conjugate_round_trips():
    q = Quat.from_euler_angles(Vec3(0.4, 1.2, -0.7))
    v = Vec3(2.0, -1.0, 0.5)
    assert list(q.conjugate().rotate(q.rotate(v))) == _approx(v)


def test_multiply_rejects_other_types():
    with pytest.raises(TypeError):
        Quat.identity() * 2.0