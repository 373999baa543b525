import pytest

from octomath.vector import Vec2, Vec3, Vec4


def _approx(v):
    return pytest.approx(list(v))


def test_vec2_add_then_subtract_round_trips():
    a, b = Vec2(1.5, -2.0), Vec2(0.25, 7.0)
    assert list((a + b) - b) == _approx(a)


def test_vec2_multiply_then_divide_round_trips():
    a, b = Vec2(3.0, -5.0), Vec2(2.0, 4.0)
    assert list((a * b) / b) == _approx(a)


def test_vec2_divide_by_zero_component_gives_zero():
    result = Vec2(3.0, 6.0) / Vec2(0.0, 3.0)
    assert result.x == 0.0
    assert result.y == pytest.approx(6.0 / 3.0)


def test_vec2_zero_numerator_gives_zero():
    assert Vec2(0.0, 0.0) / Vec2(5.0, 5.0) == Vec2(0.0, 0.0)


def test_vec2_rejects_other_types():
    with pytest.raises(TypeError):
        Vec2(1.0, 2.0) + 3.0


def test_splat_fills_every_component():
    assert Vec3.splat(4.5) == Vec3(4.5, 4.5, 4.5)


def test_vec3_scalar_add_subtract_round_trip():
    v = Vec3(1.0, -2.0, 3.5)
    assert list((v + 2.5) - 2.5) == _approx(v)


def test_vec3_scalar_multiply_divide_round_trip():
    v = Vec3(1.0, -2.0, 3.5)
    assert list((v * 3.0) / 3.0) == _approx(v)
    assert 3.0 * v == v * 3.0


def test_vec3_componentwise_divide_skips_zero():
    result = Vec3(2.0, 4.0, 6.0) / Vec3(2.0, 0.0, 3.0)
    assert result.y == 0.0
    assert result.x == pytest.approx(2.0 / 2.0)
    assert result.z == pytest.approx(6.0 / 3.0)


def test_vec3_scalar_divide_by_zero_raises():
    with pytest.raises(ZeroDivisionError):
        Vec3(1.0, 1.0, 1.0) / 0.0


def test_negation_matches_scalar_multiply():
    v = Vec3(1.0, -2.0, 3.0)
    assert -v == v * -1.0


def test_cross_of_axes():
    x, y, z = Vec3(1.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0), Vec3(0.0, 0.0, 1.0)
    assert x.cross(y) == z
    assert y.cross(z) == x
    assert y.cross(x) == -z


def test_cross_is_perpendicular():
    a, b = Vec3(1.0, 2.0, 3.0), Vec3(-4.0, 0.5, 2.0)
    c = a.cross(b)
    assert c.dot(a) == pytest.approx(0.0)
    assert c.dot(b) == pytest.approx(0.0)


def test_magnitude_of_pythagorean_triple():
    assert Vec3(3.0, 4.0, 0.0).magnitude() == pytest.approx(5.0)


def test_magnitude_sq_is_square_of_magnitude():
    v = Vec3(1.2, -3.4, 5.6)
    assert v.magnitude_sq() == pytest.approx(v.magnitude() ** 2)


def test_distance_matches_difference():
    a, b = Vec3(1.0, 2.0, 3.0), Vec3(-1.0, 0.0, 8.0)
    assert a.distance(b) == pytest.approx((a - b).magnitude())
    assert a.distance_sq(b) == pytest.approx(a.distance(b) ** 2)
    assert a.distance(b) == pytest.approx(b.distance(a))


def test_normalize_gives_unit_length():
    v = Vec3(2.0, -7.0, 1.5).normalize()
    assert v.magnitude() == pytest.approx(1.0)


def test_normalize_zero_vector_stays_zero():
    assert Vec3().normalize() == Vec3(0.0, 0.0, 0.0)


def test_vec4_fields_and_iteration():
    v = Vec4(1.0, 2.0, 3.0, 4.0)
    assert list(v) == [1.0, 2.0, 3.0, 4.0]
    assert v.w == 4.0