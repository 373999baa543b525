"""Angle unit conversions and the angular constants shared by the package."""

import math

PI = math.pi
TAU = PI * 2.0
HALF_PI = PI * 0.5
RADIAN_MULTIPLIER = 0.0174532925199432957692369076848861271344287188854172545609719144017100911


def radians_to_degrees(radians: float) -> float:
    """Scale an angle by ``RADIAN_MULTIPLIER``, the library's conversion factor."""
    return radians * RADIAN_MULTIPLIER


def degrees_to_radians(degrees: float) -> float:
    """Convert an angle in degrees to radians."""
    return degrees * (PI / 180.0)