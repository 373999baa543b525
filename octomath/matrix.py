"""Row-major 3x3 and 4x4 matrices and 4x4 view/projection builders."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Sequence, Tuple, Union

from octomath.quaternion import Quat
from octomath.vector import Vec3

Rows = Tuple[Tuple[float, ...], ...]

_SINGULAR_EPSILON = 1e-6


def _square(rows: Iterable[Iterable[float]], size: int) -> Rows:
    out = tuple(tuple(float(v) for v in row) for row in rows)
    if len(out) != size or any(len(row) != size for row in out):
        raise ValueError(f"matrix needs {size}x{size} elements")
    return out


def _zero_rows(size: int) -> Rows:
    return tuple((0.0,) * size for _ in range(size))


def _identity_rows(size: int) -> list[list[float]]:
    return [[1.0 if i == j else 0.0 for j in range(size)] for i in range(size)]


@dataclass(frozen=True)
class Mat3:
    """A 3x3 matrix stored as rows."""

    rows: Rows = field(default_factory=lambda: _zero_rows(3))

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", _square(self.rows, 3))

    def __getitem__(self, key: Union[int, Tuple[int, int]]):
        if isinstance(key, tuple):
            row, col = key
            return self.rows[row][col]
        return self.rows[key]


@dataclass(frozen=True)
class Mat4:
    """A 4x4 matrix stored as rows; ``m[i, j]`` is row i, column j."""

    rows: Rows = field(default_factory=lambda: _zero_rows(4))

    def __post_init__(self) -> None:
        object.__setattr__(self, "rows", _square(self.rows, 4))

    @classmethod
    def identity(cls) -> Mat4:
        return cls(_identity_rows(4))

    @classmethod
    def zeros(cls) -> Mat4:
        return cls(_zero_rows(4))

    def __getitem__(self, key: Union[int, Tuple[int, int]]):
        if isinstance(key, tuple):
            row, col = key
            return self.rows[row][col]
        return self.rows[key]

    def __iter__(self) -> Iterator[Tuple[float, ...]]:
        return iter(self.rows)

    def __matmul__(self, other: Mat4) -> Mat4:
        if not isinstance(other, Mat4):
            return NotImplemented
        columns = list(zip(*other.rows))
        return Mat4(
            tuple(sum(a * b for a, b in zip(row, col)) for col in columns) for row in self.rows
        )

    def inverse(self) -> Mat4:
        """Gauss-Jordan inverse without pivoting.

        Returns the zero matrix when a diagonal pivot is (near) zero.
        """
        augmented: list[list[float]] = [
            list(row) + ident for row, ident in zip(self.rows, _identity_rows(4))
        ]
        for i in range(4):
            pivot = augmented[i][i]
            if abs(pivot) < _SINGULAR_EPSILON:
                return Mat4.zeros()
            augmented[i] = [v / pivot for v in augmented[i]]
            for k, row in enumerate(augmented):
                if k != i:
                    factor = row[i]
                    augmented[k] = [a - factor * b for a, b in zip(row, augmented[i])]
        return Mat4(row[4:] for row in augmented)

    @classmethod
    def affine_transformation(
        cls, scaling: Vec3, rotation_origin: Vec3, rotation: Quat, translation: Vec3
    ) -> Mat4:
        """Translation @ rotation @ scale. ``rotation_origin`` is accepted but not used."""
        scale = _identity_rows(4)
        scale[0][0], scale[1][1], scale[2][2] = scaling.x, scaling.y, scaling.z

        q = rotation
        xx, yy, zz = q.x * q.x, q.y * q.y, q.z * q.z
        xy, xz, yz = q.x * q.y, q.x * q.z, q.y * q.z
        wx, wy, wz = q.w * q.x, q.w * q.y, q.w * q.z
        rot = [
            [1 - 2 * (yy + zz), 2 * (xy - wz), 2 * (xz + wy), 0.0],
            [2 * (xy + wz), 1 - 2 * (xx + zz), 2 * (yz - wx), 0.0],
            [2 * (xz - wy), 2 * (yz + wx), 1 - 2 * (xx + yy), 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]

        move = _identity_rows(4)
        move[0][3], move[1][3], move[2][3] = translation.x, translation.y, translation.z

        return cls(move) @ (cls(rot) @ cls(scale))

    @classmethod
    def _view(cls, x: Vec3, y: Vec3, z: Vec3, eye: Vec3) -> Mat4:
        return cls(
            (
                (x.x, y.x, z.x, 0.0),
                (x.y, y.y, z.y, 0.0),
                (x.z, y.z, z.z, 0.0),
                (-x.dot(eye), -y.dot(eye), -z.dot(eye), 1.0),
            )
        )

    @classmethod
    def look_at_rh(cls, eye_position: Vec3, focus_position: Vec3, up: Vec3) -> Mat4:
        """Right-handed view matrix looking from the eye towards the focus point."""
        z_axis = (eye_position - focus_position).normalize()
        x_axis = up.cross(z_axis).normalize()
        y_axis = z_axis.cross(x_axis)
        return cls._view(x_axis, y_axis, z_axis, eye_position)

    @classmethod
    def look_to_rh(cls, eye_position: Vec3, direction: Vec3, up: Vec3) -> Mat4:
        """Right-handed view matrix looking from the eye along ``direction``."""
        z_axis = direction.normalize() * -1.0
        x_axis = up.cross(z_axis).normalize()
        y_axis = z_axis.cross(x_axis)
        return cls._view(x_axis, y_axis, z_axis, eye_position)

    @classmethod
    def perspective_fov_rh(
        cls, fov_y: float, aspect_ratio: float, near_z: float, far_z: float
    ) -> Mat4:
        """Right-handed perspective projection from a vertical field of view."""
        f = 1.0 / math.tan(fov_y * 0.5)
        rows = [list(row) for row in _zero_rows(4)]
        rows[0][0] = f / aspect_ratio
        rows[1][1] = f
        rows[2][2] = far_z / (near_z - far_z)
        rows[2][3] = -1.0
        rows[3][2] = (near_z * far_z) / (near_z - far_z)
        return cls(rows)

    @classmethod
    def orthographic_rh(
        cls, view_width: float, view_height: float, near_z: float, far_z: float
    ) -> Mat4:
        """Right-handed orthographic projection centred on the view axis."""
        rows = _identity_rows(4)
        rows[0][0] = 2.0 / view_width
        rows[1][1] = 2.0 / view_height
        rows[2][2] = 1.0 / (near_z - far_z)
        rows[2][3] = near_z / (near_z - far_z)
        return cls(rows)

    @classmethod
    def xr_projection(
        cls,
        left: float,
        right: float,
        up: float,
        down: float,
        near_z: float,
        far_z: float,
    ) -> Mat4:
        """Asymmetric projection from four field-of-view angles in radians."""
        tan_l, tan_r = math.tan(left), math.tan(right)
        tan_up, tan_down = math.tan(up), math.tan(down)
        tan_width = tan_r - tan_l
        tan_height = tan_up - tan_down
        return cls(
            (
                (2.0 / tan_width, 0.0, (tan_r + tan_l) / tan_width, 0.0),
                (0.0, 2.0 / tan_height, (tan_up + tan_down) / tan_height, 0.0),
                (0.0, 0.0, -far_z / (far_z - near_z), -(far_z * near_z) / (far_z - near_z)),
                (0.0, 0.0, -1.0, 0.0),
            )
        )


def _as_rows(values: Sequence[Sequence[float]]) -> Rows:
    return tuple(tuple(row) for row in values)