"""Per-corner tangent space generation for triangle and quad meshes.

Results are handed to the mesh through :meth:`MeshInterface.set_tspace`
and :meth:`MeshInterface.set_tspace_basic`, one call per face corner.
They are unindexed: every corner of every supported face gets its own
tangent space.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import MutableSequence, Sequence

from octomath.angles import PI
from octomath.tspace_mesh import (
    MeshInterface,
    TriangleFlag,
    TriangleInfo,
    build_initial_triangles,
    count_triangles,
    make_index,
    vertex_normal,
    vertex_position,
    weld_vertices,
)
from octomath.tspace_topology import (
    Group,
    build_groups,
    init_triangle_info,
    mark_degenerate,
    reorder_degenerate,
)
from octomath.vector import Vec3

_EPSILON = 1e-5


class TangentSpaceError(ValueError):
    """Raised when no tangent space can be generated for a mesh."""


@dataclass(frozen=True)
class TangentSpace:
    """Tangent ``v_os`` and bitangent ``v_ot`` (unit length) with their magnitudes.

    ``counter`` tells how many groups contributed to this space and
    ``orient`` whether it is orientation preserving.
    """

    v_os: Vec3 = Vec3(1.0, 0.0, 0.0)
    mag_s: float = 1.0
    v_ot: Vec3 = Vec3(0.0, 1.0, 0.0)
    mag_t: float = 1.0
    counter: int = 0
    orient: bool = False


def _not_zero(v: Vec3) -> bool:
    return any(abs(c) > _EPSILON for c in v)


def _normalized_if_not_zero(v: Vec3) -> Vec3:
    return v * (1.0 / v.magnitude()) if _not_zero(v) else v


def _project(v: Vec3, n: Vec3) -> Vec3:
    """Project ``v`` onto the plane orthogonal to ``n`` and normalise it."""
    return _normalized_if_not_zero(v - n * n.dot(v))


def average_tangent_space(first: TangentSpace, second: TangentSpace) -> TangentSpace:
    """Average two tangent spaces; identical inputs are returned unchanged.

    The returned space has a zero counter and no orientation set.
    """
    if (
        first.mag_s == second.mag_s
        and first.mag_t == second.mag_t
        and first.v_os == second.v_os
        and first.v_ot == second.v_ot
    ):
        return TangentSpace(first.v_os, first.mag_s, first.v_ot, first.mag_t)
    return TangentSpace(
        v_os=_normalized_if_not_zero(first.v_os + second.v_os),
        mag_s=0.5 * (first.mag_s + second.mag_s),
        v_ot=_normalized_if_not_zero(first.v_ot + second.v_ot),
        mag_t=0.5 * (first.mag_t + second.mag_t),
    )


def _eval_tspace(
    members: Sequence[int],
    tri_list: Sequence[int],
    infos: Sequence[TriangleInfo],
    mesh: MeshInterface,
    vertex_representative: int,
) -> TangentSpace:
    """Angle-weighted average over the valid triangles of a subgroup."""
    res_os = Vec3()
    res_ot = Vec3()
    mag_s = mag_t = 0.0
    angle_sum = 0.0

    for tri in members:
        info = infos[tri]
        if info.flag & TriangleFlag.GROUP_WITH_ANY:
            continue
        corners = tuple(tri_list[3 * tri : 3 * tri + 3])
        i = corners.index(vertex_representative)
        n = vertex_normal(mesh, corners[i])
        v_os = _project(info.v_os, n)
        v_ot = _project(info.v_ot, n)

        p0 = vertex_position(mesh, corners[i - 1])
        p1 = vertex_position(mesh, corners[i])
        p2 = vertex_position(mesh, corners[(i + 1) % 3])
        v1 = _project(p0 - p1, n)
        v2 = _project(p2 - p1, n)

        angle = math.acos(max(-1.0, min(1.0, v1.dot(v2))))
        res_os = res_os + v_os * angle
        res_ot = res_ot + v_ot * angle
        mag_s += angle * info.mag_s
        mag_t += angle * info.mag_t
        angle_sum += angle

    if angle_sum > 0:
        mag_s /= angle_sum
        mag_t /= angle_sum
    return TangentSpace(
        v_os=_normalized_if_not_zero(res_os),
        mag_s=mag_s,
        v_ot=_normalized_if_not_zero(res_ot),
        mag_t=mag_t,
    )


def _generate_tspaces(
    tspaces: MutableSequence[TangentSpace],
    infos: Sequence[TriangleInfo],
    groups: Sequence[Group],
    tri_list: Sequence[int],
    thres_cos: float,
    mesh: MeshInterface,
) -> None:
    """Split each group into subgroups by angle and write their spaces out."""
    for group in groups:
        subgroups: list[tuple[list[int], TangentSpace]] = []
        for tri in group.face_indices:
            info = infos[tri]
            corner = next(i for i, g in enumerate(info.assigned_group) if g is group)
            n = vertex_normal(mesh, tri_list[3 * tri + corner])
            v_os = _project(info.v_os, n)
            v_ot = _project(info.v_ot, n)

            members = []
            for other_tri in group.face_indices:
                other = infos[other_tri]
                os2 = _project(other.v_os, n)
                ot2 = _project(other.v_ot, n)
                any_group = (info.flag | other.flag) & TriangleFlag.GROUP_WITH_ANY
                same_face = info.org_face_number == other.org_face_number
                if (
                    any_group
                    or same_face
                    or (v_os.dot(os2) > thres_cos and v_ot.dot(ot2) > thres_cos)
                ):
                    members.append(other_tri)
            members.sort()

            match = next((ts for m, ts in subgroups if m == members), None)
            if match is None:
                match = _eval_tspace(
                    members, tri_list, infos, mesh, group.vertex_representative
                )
                subgroups.append((members, match))

            slot = info.tspaces_offset + info.vert_num[corner]
            current = tspaces[slot]
            if current.counter == 1:
                merged = average_tangent_space(current, match)
                tspaces[slot] = replace(merged, counter=2, orient=group.orient_preserving)
            else:
                tspaces[slot] = replace(match, counter=1, orient=group.orient_preserving)


def _degen_epilogue(
    tspaces: MutableSequence[TangentSpace],
    infos: Sequence[TriangleInfo],
    tri_list: Sequence[int],
    mesh: MeshInterface,
    good_count: int,
    total_count: int,
) -> None:
    """Give degenerate triangles the spaces of good triangles sharing a vertex."""
    good_span = 3 * good_count
    for tri in range(good_count, total_count):
        info = infos[tri]
        if info.flag & TriangleFlag.QUAD_ONE_DEGEN_TRI:
            continue
        for i in range(3):
            try:
                j = tri_list.index(tri_list[3 * tri + i], 0, good_span)
            except ValueError:
                continue
            src = infos[j // 3]
            tspaces[info.tspaces_offset + info.vert_num[i]] = tspaces[
                src.tspaces_offset + src.vert_num[j % 3]
            ]

    for info in infos[:good_count]:
        if not info.flag & TriangleFlag.QUAD_ONE_DEGEN_TRI:
            continue
        used = 0
        for vert in info.vert_num:
            used |= 1 << vert
        missing = 0
        if not used & 2:
            missing = 1
        elif not used & 4:
            missing = 2
        elif not used & 8:
            missing = 3
        face = info.org_face_number
        target = vertex_position(mesh, make_index(face, missing))
        for vert in info.vert_num:
            if vertex_position(mesh, make_index(face, vert)) == target:
                offset = info.tspaces_offset
                tspaces[offset + missing] = tspaces[offset + vert]
                break


def generate_tangent_space(
    mesh: MeshInterface, angular_threshold: float
) -> list[TangentSpace]:
    """Generate a tangent space for every corner of every triangle and quad.

    Corners sharing a vertex are split into separate spaces where their
    directions differ by more than ``angular_threshold`` degrees. Each
    result is passed to the mesh's ``set_tspace`` and ``set_tspace_basic``
    and the whole list, in face and corner order, is returned.

    Raises :class:`TangentSpaceError` if the mesh has no triangles or quads.
    """
    thres_cos = math.cos(angular_threshold * PI / 180.0)

    if count_triangles(mesh) <= 0:
        raise TangentSpaceError("mesh has no triangles or quads")

    infos, tri_list, tspace_count = build_initial_triangles(mesh)
    tri_list = weld_vertices(mesh, tri_list)

    total_count = len(infos)
    good_count = total_count - mark_degenerate(infos, tri_list, mesh)
    reorder_degenerate(infos, tri_list, good_count, total_count)

    init_triangle_info(infos, tri_list, mesh, good_count)
    groups = build_groups(infos, tri_list, good_count)

    tspaces: list[TangentSpace] = [TangentSpace() for _ in range(tspace_count)]
    _generate_tspaces(tspaces, infos, groups, tri_list, thres_cos, mesh)
    _degen_epilogue(tspaces, infos, tri_list, mesh, good_count, total_count)

    slots = iter(tspaces)
    for face in range(mesh.num_faces()):
        corners = mesh.num_vertices_of_face(face)
        if corners not in (3, 4):
            continue
        for vert in range(corners):
            ts = next(slots)
            mesh.set_tspace(ts.v_os, ts.v_ot, ts.mag_s, ts.mag_t, ts.orient, face, vert)
            mesh.set_tspace_basic(ts.v_os, 1.0 if ts.orient else -1.0, face, vert)
    return tspaces


def generate_tangent_space_default(mesh: MeshInterface) -> list[TangentSpace]:
    """Generate tangent spaces with the angular threshold disabled (180 degrees)."""
    return generate_tangent_space(mesh, 180.0)