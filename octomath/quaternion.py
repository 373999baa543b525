"""Rotation quaternions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator

from octomath.angles import HALF_PI
from octomath.vector import Vec3


@dataclass(frozen=True)
class Quat:
    """A quaternion with vector part ``(x, y, z)`` and scalar part ``w``."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    w: float = 0.0

    @classmethod
    def identity(cls) -> Quat:
        return cls(0.0, 0.0, 0.0, 1.0)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def __mul__(self, other: Quat) -> Quat:
        """Hamilton product."""
        if not isinstance(other, Quat):
            return NotImplemented
        a, b = self, other
        return Quat(
            x=a.w * b.x + a.x * b.w + a.y * b.z - a.z * b.y,
            y=a.w * b.y - a.x * b.z + a.y * b.w + a.z * b.x,
            z=a.w * b.z + a.x * b.y - a.y * b.x + a.z * b.w,
            w=a.w * b.w - a.x * b.x - a.y * b.y - a.z * b.z,
        )

    def conjugate(self) -> Quat:
        return Quat(-self.x, -self.y, -self.z, self.w)

    def normalize(self) -> Quat:
        """Divide by the length, placing w/len, x/len, y/len, z/len into x, y, z, w.

        A zero quaternion is returned unchanged.
        """
        length = math.sqrt(self.w * self.w + self.x * self.x + self.y * self.y + self.z * self.z)
        if length == 0.0:
            return self
        return Quat(self.w / length, self.x / length, self.y / length, self.z / length)

    @classmethod
    def from_scalar_and_vec3(cls, scalar: float, v: Vec3) -> Quat:
        return cls(v.x, v.y, v.z, scalar)

    @classmethod
    def from_roll_pitch_yaw(cls, v: Vec3) -> Quat:
        """Build from roll (x), pitch (y) and yaw (z) in radians, ZYX order."""
        cy, sy = math.cos(v.z * 0.5), math.sin(v.z * 0.5)
        cp, sp = math.cos(v.y * 0.5), math.sin(v.y * 0.5)
        cr, sr = math.cos(v.x * 0.5), math.sin(v.x * 0.5)
        return cls(
            x=sr * cp * cy - cr * sp * sy,
            y=cr * sp * cy + sr * cp * sy,
            z=cr * cp * sy - sr * sp * cy,
            w=cr * cp * cy + sr * sp * sy,
        )

    @classmethod
    def from_euler_angles(cls, euler_angles: Vec3) -> Quat:
        """Build from Euler angles (x, y, z) in radians."""
        cx, sx = math.cos(euler_angles.x * 0.5), math.sin(euler_angles.x * 0.5)
        cy, sy = math.cos(euler_angles.y * 0.5), math.sin(euler_angles.y * 0.5)
        cz, sz = math.cos(euler_angles.z * 0.5), math.sin(euler_angles.z * 0.5)
        return cls(
            x=sx * cy * cz - cx * sy * sz,
            y=cx * sy * cz + sx * cy * sz,
            z=cx * cy * sz - sx * sy * cz,
            w=cx * cy * cz + sx * sy * sz,
        )

    def to_euler_angles(self) -> Vec3:
        """Roll, pitch and yaw in radians; pitch is clamped to +/- pi/2."""
        q = self
        roll = math.atan2(2 * (q.w * q.x + q.y * q.z), 1 - 2 * (q.x * q.x + q.y * q.y))
        sinp = 2 * (q.w * q.y - q.z * q.x)
        pitch = math.copysign(HALF_PI, sinp) if abs(sinp) >= 1 else math.asin(sinp)
        yaw = math.atan2(2 * (q.w * q.z + q.x * q.y), 1 - 2 * (q.y * q.y + q.z * q.z))
        return Vec3(roll, pitch, yaw)

    def rotate(self, v: Vec3) -> Vec3:
        """Rotate ``v`` by this quaternion (q * v * q')."""
        rotated = self * Quat(v.x, v.y, v.z, 0.0) * self.conjugate()
        return Vec3(rotated.x, rotated.y, rotated.z)