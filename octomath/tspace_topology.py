"""Triangle topology for tangent space generation.

This module flags and reorders degenerate triangles, computes the first
order texture derivatives of each triangle and links triangles to their
edge neighbours. It then gathers the corners that share a vertex into
groups of consistent orientation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import islice
from typing import MutableSequence, Sequence

from octomath.tspace_mesh import (
    MeshInterface,
    TriangleFlag,
    TriangleInfo,
    vertex_position,
    vertex_tex_coord,
)
from octomath.vector import Vec3

_EPSILON = 1e-5


def _not_zero(value: float) -> bool:
    return abs(value) > _EPSILON


@dataclass(eq=False)
class Group:
    """Triangles that share a welded vertex and agree on orientation.

    Groups compare by identity: two groups are the same only if they are
    the same object.
    """

    vertex_representative: int
    orient_preserving: bool
    face_indices: list[int] = field(default_factory=list)


def _corners(tri_list: Sequence[int], tri: int) -> tuple[int, int, int]:
    a, b, c = tri_list[3 * tri : 3 * tri + 3]
    return a, b, c


def mark_degenerate(
    infos: Sequence[TriangleInfo], tri_list: Sequence[int], mesh: MeshInterface
) -> int:
    """Flag triangles with two coinciding corner positions.

    Returns the number of degenerate triangles found.
    """
    degenerate = 0
    for tri, info in enumerate(infos):
        p0, p1, p2 = (vertex_position(mesh, index) for index in _corners(tri_list, tri))
        if p0 == p1 or p0 == p2 or p1 == p2:
            info.flag |= TriangleFlag.DEGENERATE
            degenerate += 1
    return degenerate


def reorder_degenerate(
    infos: MutableSequence[TriangleInfo],
    tri_list: MutableSequence[int],
    good_count: int,
    total_count: int,
) -> None:
    """Flag quads with exactly one degenerate triangle, then move all good
    triangles to the front of ``infos`` and ``tri_list`` keeping their order.
    """
    t = 0
    while t < total_count - 1:
        first, second = infos[t], infos[t + 1]
        if first.org_face_number == second.org_face_number:
            deg_a = bool(first.flag & TriangleFlag.DEGENERATE)
            deg_b = bool(second.flag & TriangleFlag.DEGENERATE)
            if deg_a != deg_b:
                first.flag |= TriangleFlag.QUAD_ONE_DEGEN_TRI
                second.flag |= TriangleFlag.QUAD_ONE_DEGEN_TRI
            t += 2
        else:
            t += 1

    next_good = 1
    t = 0
    while t < good_count:
        if not infos[t].flag & TriangleFlag.DEGENERATE:
            next_good = max(next_good, t + 2)
        else:
            while next_good < total_count and infos[next_good].flag & TriangleFlag.DEGENERATE:
                next_good += 1
            if next_good >= total_count:
                return
            swap = next_good
            next_good += 1
            a, b = 3 * t, 3 * swap
            tri_list[a : a + 3], tri_list[b : b + 3] = tri_list[b : b + 3], tri_list[a : a + 3]
            infos[t], infos[swap] = infos[swap], infos[t]
        t += 1


def _tex_area(mesh: MeshInterface, corners: Sequence[int]) -> float:
    t1, t2, t3 = (vertex_tex_coord(mesh, index) for index in corners)
    t21x, t21y = t2.x - t1.x, t2.y - t1.y
    t31x, t31y = t3.x - t1.x, t3.y - t1.y
    return abs(t21x * t31y - t21y * t31x)


def init_triangle_info(
    infos: Sequence[TriangleInfo],
    tri_list: Sequence[int],
    mesh: MeshInterface,
    count: int,
) -> None:
    """Compute derivatives, orientation and neighbours of the first ``count`` triangles."""
    good = infos[:count]
    for info in good:
        info.face_neighbors = [-1, -1, -1]
        info.assigned_group = [None, None, None]
        info.v_os = Vec3()
        info.v_ot = Vec3()
        info.mag_s = 0.0
        info.mag_t = 0.0
        info.flag |= TriangleFlag.GROUP_WITH_ANY

    for tri, info in enumerate(good):
        corners = _corners(tri_list, tri)
        v1, v2, v3 = (vertex_position(mesh, index) for index in corners)
        t1, t2, t3 = (vertex_tex_coord(mesh, index) for index in corners)

        t21x, t21y = t2.x - t1.x, t2.y - t1.y
        t31x, t31y = t3.x - t1.x, t3.y - t1.y
        d1, d2 = v2 - v1, v3 - v1

        signed_area = t21x * t31y - t21y * t31x
        v_os = d1 * t31y - d2 * t21y
        v_ot = d1 * -t31x + d2 * t21x

        if signed_area > 0:
            info.flag |= TriangleFlag.ORIENT_PRESERVING

        if _not_zero(signed_area):
            abs_area = abs(signed_area)
            len_os = v_os.magnitude()
            len_ot = v_ot.magnitude()
            sign = 1.0 if info.flag & TriangleFlag.ORIENT_PRESERVING else -1.0
            if _not_zero(len_os):
                info.v_os = v_os * (sign / len_os)
            if _not_zero(len_ot):
                info.v_ot = v_ot * (sign / len_ot)
            info.mag_s = len_os / abs_area
            info.mag_t = len_ot / abs_area
            if _not_zero(info.mag_s) and _not_zero(info.mag_t):
                info.flag &= ~TriangleFlag.GROUP_WITH_ANY

    _force_quad_orientation(good, tri_list, mesh)
    build_neighbors(infos, tri_list, count)


def _force_quad_orientation(
    infos: Sequence[TriangleInfo], tri_list: Sequence[int], mesh: MeshInterface
) -> None:
    t = 0
    while t < len(infos) - 1:
        first, second = infos[t], infos[t + 1]
        if first.org_face_number != second.org_face_number:
            t += 1
            continue
        degenerate = (first.flag | second.flag) & TriangleFlag.DEGENERATE
        orient_a = bool(first.flag & TriangleFlag.ORIENT_PRESERVING)
        orient_b = bool(second.flag & TriangleFlag.ORIENT_PRESERVING)
        if not degenerate and orient_a != orient_b:
            choose_first = bool(second.flag & TriangleFlag.GROUP_WITH_ANY) or _tex_area(
                mesh, _corners(tri_list, t)
            ) >= _tex_area(mesh, _corners(tri_list, t + 1))
            source, target = (first, second) if choose_first else (second, first)
            target.flag &= ~TriangleFlag.ORIENT_PRESERVING
            target.flag |= source.flag & TriangleFlag.ORIENT_PRESERVING
        t += 2


def _edge_of(corners: Sequence[int], i0: int, i1: int) -> tuple[int, int, int]:
    """Ordered endpoints and edge number (0-2) of the edge {i0, i1} in a triangle."""
    a, b, c = corners
    ends = (i0, i1)
    if a in ends:
        if b in ends:
            return a, b, 0
        return c, a, 2
    return b, c, 1


def build_neighbors(
    infos: Sequence[TriangleInfo], tri_list: Sequence[int], count: int
) -> None:
    """Link each edge of the first ``count`` triangles to the triangle that
    runs along it in the opposite direction.

    ``face_neighbors[e]`` of a triangle is the neighbour across edge ``e``
    (corner ``e`` to corner ``e + 1``), or -1 if there is none.
    """
    edges = sorted(
        (min(i0, i1), max(i0, i1), tri)
        for tri in range(count)
        for i0, i1 in (
            (tri_list[3 * tri + k], tri_list[3 * tri + (k + 1) % 3]) for k in range(3)
        )
    )

    for pos, (i0, i1, tri) in enumerate(edges):
        a0, a1, edge_a = _edge_of(_corners(tri_list, tri), i0, i1)
        if infos[tri].face_neighbors[edge_a] != -1:
            continue
        for j0, j1, other in islice(edges, pos + 1, None):
            if (j0, j1) != (i0, i1):
                break
            b1, b0, edge_b = _edge_of(_corners(tri_list, other), j0, j1)
            if a0 == b0 and a1 == b1 and infos[other].face_neighbors[edge_b] == -1:
                infos[tri].face_neighbors[edge_a] = other
                infos[other].face_neighbors[edge_b] = tri
                break


def _side_neighbors(info: TriangleInfo, corner: int) -> tuple[int, int]:
    return info.face_neighbors[corner], info.face_neighbors[corner - 1 if corner > 0 else 2]


def _assign(
    infos: Sequence[TriangleInfo], tri_list: Sequence[int], tri: int, group: Group
) -> tuple[int, ...]:
    """Try to add ``tri`` to ``group``; return the neighbours to visit next."""
    info = infos[tri]
    corners = _corners(tri_list, tri)
    if group.vertex_representative not in corners:
        raise ValueError(
            f"triangle {tri} does not use vertex {group.vertex_representative}"
        )
    corner = corners.index(group.vertex_representative)

    assigned = info.assigned_group[corner]
    if assigned is not None:
        return ()
    if info.flag & TriangleFlag.GROUP_WITH_ANY and all(g is None for g in info.assigned_group):
        info.flag &= ~TriangleFlag.ORIENT_PRESERVING
        if group.orient_preserving:
            info.flag |= TriangleFlag.ORIENT_PRESERVING
    if bool(info.flag & TriangleFlag.ORIENT_PRESERVING) != group.orient_preserving:
        return ()

    group.face_indices.append(tri)
    info.assigned_group[corner] = group
    return _side_neighbors(info, corner)


def _grow(
    infos: Sequence[TriangleInfo],
    tri_list: Sequence[int],
    group: Group,
    left: int,
    right: int,
) -> None:
    # Depth first, left neighbour before right, as a recursive walk would.
    stack = [n for n in (right, left) if n >= 0]
    while stack:
        tri = stack.pop()
        nxt_left, nxt_right = (_assign(infos, tri_list, tri, group) or (-1, -1))
        stack.extend(n for n in (nxt_right, nxt_left) if n >= 0)


def build_groups(
    infos: Sequence[TriangleInfo], tri_list: Sequence[int], count: int
) -> list[Group]:
    """Gather triangle corners sharing a vertex into orientation-consistent groups.

    Every corner of a triangle that is not flagged ``GROUP_WITH_ANY`` ends
    up in exactly one group; such flagged triangles only join groups
    started elsewhere.
    """
    groups: list[Group] = []
    for tri in range(count):
        info = infos[tri]
        for corner in range(3):
            if info.flag & TriangleFlag.GROUP_WITH_ANY or info.assigned_group[corner] is not None:
                continue
            group = Group(
                vertex_representative=tri_list[3 * tri + corner],
                orient_preserving=bool(info.flag & TriangleFlag.ORIENT_PRESERVING),
            )
            groups.append(group)
            info.assigned_group[corner] = group
            group.face_indices.append(tri)
            left, right = _side_neighbors(info, corner)
            _grow(infos, tri_list, group, left, right)
    return groups