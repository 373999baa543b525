# octomath

A small 3D math toolkit for rendering code. It needs nothing outside the
Python standard library.

- `octomath.angles` has `degrees_to_radians` and `radians_to_degrees`. It also holds the constants `PI`, `TAU`, `HALF_PI` and `RADIAN_MULTIPLIER`.
- `octomath.vector` has the immutable dataclasses `Vec2`, `Vec3` and `Vec4`.
- `octomath.quaternion` has `Quat`, which composes rotations, converts to and from Euler angles and rotates vectors.
- `octomath.matrix` has `Mat3` and `Mat4`. `Mat4` builds right-handed look-at, look-to, perspective, orthographic and XR projection matrices. It also builds affine transforms and computes inverses.
- `octomath.tspace` generates tangent spaces for triangle and quad meshes, for normal mapping. It is built on `octomath.tspace_mesh` and `octomath.tspace_topology`.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Angles

`degrees_to_radians(d)` returns `d * PI / 180`. `radians_to_degrees(r)` multiplies by `RADIAN_MULTIPLIER`, and that constant is also π/180. So both functions scale by the same factor.

## Vectors

```python
from octomath.vector import Vec3

a = Vec3(1.0, 0.0, 0.0)
b = Vec3(0.0, 1.0, 0.0)
print(a.cross(b))         # Vec3(x=0.0, y=0.0, z=1.0)
print(a.dot(b))           # 0.0
print((a + b) * 2.0)      # Vec3(x=2.0, y=2.0, z=0.0)
print(Vec3.splat(3.0))    # Vec3(x=3.0, y=3.0, z=3.0)
```

`Vec3` supports the operators `+`, `-`, `*` and `/`. The other operand can be a `Vec3`, which applies the operator component-wise, or a number, which applies it to every component. `Vec3` also supports unary `-`.

Its methods are `cross`, `dot`, `magnitude`, `magnitude_sq`, `distance`, `distance_sq` and `normalize`. `normalize` leaves the zero vector at zero.

When you divide by a `Vec3`, any component whose divisor is 0 comes out as `0.0`. `Vec2` supports `+`, `-`, `*` and `/` with another `Vec2`. Its division gives `0.0` wherever either operand's component is 0. All vector types are iterable.

## Quaternions

```python
import math
from octomath.quaternion import Quat
from octomath.vector import Vec3

q = Quat.from_euler_angles(Vec3(0.0, 0.0, math.pi / 2))
print(q.rotate(Vec3(1.0, 0.0, 0.0)))  # roughly Vec3(0, 1, 0)
```

`Quat(x, y, z, w)` offers:

- `Quat.identity()`
- the Hamilton product `*`
- `conjugate()`
- `from_scalar_and_vec3`
- `from_roll_pitch_yaw`
- `from_euler_angles`
- `to_euler_angles()`, which clamps pitch to ±π/2
- `rotate(v)`

`normalize()` divides every component by the length. It then stores the results in the order `(w, x, y, z)` into the fields `(x, y, z, w)`. A zero quaternion is returned unchanged.

## Matrices

```python
from octomath.matrix import Mat4
from octomath.vector import Vec3

view = Mat4.look_at_rh(Vec3(0, 0, 5), Vec3(0, 0, 0), Vec3(0, 1, 0))
proj = Mat4.perspective_fov_rh(1.0, 16 / 9, 0.1, 100.0)
view_proj = view @ proj
inverse = view.inverse()
print(view[3, 2], view[3][2])
```

`Mat4` stores its values as rows. `m[i, j]` is row `i`, column `j`, and `m[i]` is row `i`. `@` multiplies two matrices.

The constructors are:

- `identity`
- `zeros`
- `affine_transformation(scaling, rotation_origin, rotation, translation)`. The result is translation @ rotation @ scale, and `rotation_origin` is not used.
- `look_at_rh`
- `look_to_rh`
- `perspective_fov_rh`
- `orthographic_rh`
- `xr_projection`, which takes four field-of-view angles in radians

`inverse()` uses Gauss-Jordan elimination without pivoting. It returns the zero matrix when a diagonal pivot is close to zero.

`Mat3` is a plain 3x3 container with the same indexing and no operations.

## Tangent spaces

To generate tangent spaces, subclass `octomath.tspace_mesh.MeshInterface` and implement these methods:

- `num_faces()`
- `num_vertices_of_face(face)`
- `position(face, vert)`
- `normal(face, vert)`
- `tex_coord(face, vert)`, which returns `(u, v)`

```python
from octomath.tspace import generate_tangent_space_default
from octomath.tspace_mesh import MeshInterface


class Quad(MeshInterface):
    positions = [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)]
    uvs = [(0, 0), (1, 0), (1, 1), (0, 1)]

    def num_faces(self):
        return 1

    def num_vertices_of_face(self, face):
        return 4

    def position(self, face, vert):
        return self.positions[vert]

    def normal(self, face, vert):
        return (0.0, 0.0, 1.0)

    def tex_coord(self, face, vert):
        return self.uvs[vert]


mesh = Quad()
spaces = generate_tangent_space_default(mesh)
print(spaces[0].v_os, spaces[0].orient)
print(mesh.tspace_basic_results[(0, 0)])  # (tangent, sign)
```

`generate_tangent_space(mesh, angular_threshold)` returns one `TangentSpace` per face corner, in face and corner order. Corners that share a vertex get separate spaces where their directions differ by more than `angular_threshold` degrees. `generate_tangent_space_default(mesh)` uses 180 degrees, which turns splitting off.

Each `TangentSpace` holds:

- `v_os`, the unit tangent
- `v_ot`, the unit bitangent
- `mag_s` and `mag_t`, their magnitudes
- `orient`, which is true when the corner is orientation preserving

Every result is also passed to `mesh.set_tspace` and `mesh.set_tspace_basic`. By default these record it in `mesh.tspace_results` and `mesh.tspace_basic_results`, keyed by `(face, vert)`. The basic sign is `1.0` or `-1.0`. Override the setters to handle the results another way.

Faces with neither 3 nor 4 corners are skipped. Quads are split along their shorter diagonal. If the mesh has no triangle or quad, `generate_tangent_space` raises `octomath.tspace.TangentSpaceError`, a subclass of `ValueError`.

## What this package does not do

The package has no command-line tool, and it does no rendering, GPU upload or mesh file loading. Your code supplies the mesh data and uses the results.