import pytest

from octomath.angles import (
    HALF_PI,
    PI,
    RADIAN_MULTIPLIER,
    TAU,
    degrees_to_radians,
    radians_to_degrees,
)


def test_half_turn_is_pi():
    assert degrees_to_radians(180.0) == pytest.approx(PI)


def test_quarter_turn_is_half_pi():
    assert degrees_to_radians(90.0) == pytest.approx(HALF_PI)


def test_full_turn_is_tau():
    assert degrees_to_radians(360.0) == pytest.approx(TAU)


def test_zero_maps_to_zero():
    assert degrees_to_radians(0.0) == 0.0
    assert radians_to_degrees(0.0) == 0.0


def test_radians_to_degrees_uses_multiplier():
    assert radians_to_degrees(1.0) == pytest.approx(RADIAN_MULTIPLIER)


@pytest.mark.parametrize("value", [-720.0, -1.5, 0.25, 45.0, 1000.0])
def test_both_directions_share_the_factor(value):
    assert radians_to_degrees(value) == pytest.approx(degrees_to_radians(value))


@pytest.mark.parametrize("value", [-3.0, 2.0, 10.0])
def test_conversion_is_linear(value):
    assert degrees_to_radians(2 * value) == pytest.approx(2 * degrees_to_radians(value))