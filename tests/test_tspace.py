import math

import pytest

from octomath.tspace import (
    TangentSpace,
    TangentSpaceError,
    average_tangent_space,
    generate_tangent_space,
    generate_tangent_space_default,
)
from octomath.tspace_mesh import MeshInterface
from octomath.vector import Vec3

UP = (0.0, 0.0, 1.0)


class RecordingMesh(MeshInterface):
    """A mesh given as a list of faces, each a list of (position, normal, uv)."""

    def __init__(self, faces):
        self.faces = faces
        self.full = {}
        self.basic = {}

    def num_faces(self):
        return len(self.faces)

    def num_vertices_of_face(self, face):
        return len(self.faces[face])

    def position(self, face, vert):
        return self.faces[face][vert][0]

    def normal(self, face, vert):
        return self.faces[face][vert][1]

    def tex_coord(self, face, vert):
        return self.faces[face][vert][2]

    def set_tspace(self, tangent, bitangent, mag_s, mag_t, is_orientation_preserving, face, vert):
        self.full[(face, vert)] = (tangent, bitangent, mag_s, mag_t, is_orientation_preserving)

    def set_tspace_basic(self, tangent, sign, face, vert):
        self.basic[(face, vert)] = (tangent, sign)


def _planar(points, flip_u=False):
    return [
        ((x, y, 0.0), UP, (-x if flip_u else x, y)) for x, y in points
    ]


def _close(a, b, tol=1e-6):
    return all(math.isclose(p, q, abs_tol=tol) for p, q in zip(a, b))


def test_single_triangle_tangent_follows_u():
    mesh = RecordingMesh([_planar([(0, 0), (1, 0), (0, 1)])])
    result = generate_tangent_space_default(mesh)
    assert len(result) == 3
    for vert in range(3):
        tangent, bitangent, mag_s, mag_t, orient = mesh.full[(0, vert)]
        assert _close(tangent, (1.0, 0.0, 0.0))
        assert _close(bitangent, (0.0, 1.0, 0.0))
        assert math.isclose(mag_s, 1.0)
        assert math.isclose(mag_t, 1.0)
        assert orient is True
        assert mesh.basic[(0, vert)][1] == 1.0


def test_mirrored_uv_flips_orientation():
    mesh = RecordingMesh([_planar([(0, 0), (1, 0), (0, 1)], flip_u=True)])
    generate_tangent_space_default(mesh)
    for vert in range(3):
        tangent, _, _, _, orient = mesh.full[(0, vert)]
        assert orient is False
        assert _close(tangent, (-1.0, 0.0, 0.0))
        assert mesh.basic[(0, vert)][1] == -1.0


def test_quad_corners_all_receive_spaces():
    mesh = RecordingMesh([_planar([(0, 0), (1, 0), (1, 1), (0, 1)])])
    result = generate_tangent_space_default(mesh)
    assert len(result) == 4
    assert set(mesh.full) == {(0, v) for v in range(4)}
    for ts in result:
        assert _close(ts.v_os, (1.0, 0.0, 0.0))
        assert ts.orient is True
        assert ts.counter >= 1


def test_unsupported_faces_are_skipped():
    pentagon = _planar([(0, 0), (1, 0), (2, 1), (1, 2), (0, 1)])
    triangle = _planar([(0, 0), (1, 0), (0, 1)])
    mesh = RecordingMesh([pentagon, triangle])
    result = generate_tangent_space_default(mesh)
    assert len(result) == 3
    assert set(mesh.basic) == {(1, 0), (1, 1), (1, 2)}


def test_mesh_without_faces_raises():
    with pytest.raises(TangentSpaceError):
        generate_tangent_space_default(RecordingMesh([]))


def test_mesh_with_only_unsupported_faces_raises():
    mesh = RecordingMesh([_planar([(0, 0), (1, 0), (2, 1), (1, 2), (0, 1)])])
    with pytest.raises(TangentSpaceError):
        generate_tangent_space(mesh, 90.0)


def test_tangents_are_unit_and_perpendicular_to_normal():
    p0, p1, p2 = Vec3(0, 0, 0), Vec3(2, 0, 1), Vec3(0, 3, 0)
    n = (p1 - p0).cross(p2 - p0).normalize()
    normal = tuple(n)
    face = [
        (tuple(p0), normal, (0.1, 0.2)),
        (tuple(p1), normal, (0.9, 0.3)),
        (tuple(p2), normal, (0.2, 0.8)),
    ]
    mesh = RecordingMesh([face])
    for ts in generate_tangent_space_default(mesh):
        assert math.isclose(ts.v_os.magnitude(), 1.0, rel_tol=1e-6)
        assert math.isclose(ts.v_ot.magnitude(), 1.0, rel_tol=1e-6)
        assert abs(ts.v_os.dot(n)) < 1e-6
        assert abs(ts.v_ot.dot(n)) < 1e-6


def test_default_matches_threshold_of_180_degrees():
    faces = [
        _planar([(0, 0), (1, 0), (1, 1), (0, 1)]),
        _planar([(1, 0), (2, 0), (2, 1)]),
    ]
    default = generate_tangent_space_default(RecordingMesh(faces))
    explicit = generate_tangent_space(RecordingMesh(faces), 180.0)
    assert default == explicit


def test_shared_vertex_gets_same_space_across_faces():
    first = _planar([(0, 0), (1, 0), (1, 1)])
    second = _planar([(0, 0), (1, 1), (0, 1)])
    mesh = RecordingMesh([first, second])
    generate_tangent_space_default(mesh)
    assert mesh.full[(0, 0)] == mesh.full[(1, 0)]
    assert mesh.full[(0, 2)] == mesh.full[(1, 1)]


def test_degenerate_triangle_keeps_initial_space():
    face = [((0.0, 0.0, 0.0), UP, (0.0, 0.0)),
            ((0.0, 0.0, 0.0), UP, (1.0, 0.0)),
            ((1.0, 0.0, 0.0), UP, (0.0, 1.0))]
    mesh = RecordingMesh([face])
    result = generate_tangent_space_default(mesh)
    assert result == [TangentSpace()] * 3
    assert all(sign == -1.0 for _, sign in mesh.basic.values())


def test_quad_with_one_degenerate_triangle_copies_coinciding_corner():
    mesh = RecordingMesh([_planar([(0, 0), (1, 0), (1, 1), (1, 1)])])
    result = generate_tangent_space_default(mesh)
    assert result[2] == result[3]
    assert _close(result[0].v_os, (1.0, 0.0, 0.0))


def test_average_of_identical_spaces_is_unchanged():
    ts = TangentSpace(Vec3(0.0, 0.0, 1.0), 2.5, Vec3(1.0, 0.0, 0.0), 0.5, counter=1, orient=True)
    avg = average_tangent_space(ts, ts)
    assert (avg.v_os, avg.mag_s, avg.v_ot, avg.mag_t) == (ts.v_os, ts.mag_s, ts.v_ot, ts.mag_t)
    assert avg.counter == 0


def test_average_of_different_spaces_is_normalised():
    a = TangentSpace(Vec3(1.0, 0.0, 0.0), 1.0, Vec3(0.0, 1.0, 0.0), 1.0)
    b = TangentSpace(Vec3(0.0, 1.0, 0.0), 3.0, Vec3(0.0, 1.0, 0.0), 1.0)
    avg = average_tangent_space(a, b)
    assert math.isclose(avg.mag_s, 2.0)
    assert math.isclose(avg.v_os.magnitude(), 1.0)
    assert math.isclose(avg.v_os.x, avg.v_os.y)
    assert _close(avg.v_ot, (0.0, 1.0, 0.0))


def test_average_is_symmetric():
    a = TangentSpace(Vec3(1.0, 0.0, 0.0), 1.0, Vec3(0.0, 0.0, 1.0), 4.0)
    b = TangentSpace(Vec3(0.0, 0.6, 0.8), 2.0, Vec3(0.0, 1.0, 0.0), 1.0)
    ab = average_tangent_space(a, b)
    ba = average_tangent_space(b, a)
    assert _close(ab.v_os, ba.v_os)
    assert _close(ab.v_ot, ba.v_ot)
    assert math.isclose(ab.mag_t, ba.mag_t)