"""Mesh access and the first stages of tangent space generation.

Triangles are described by vertex indices that pack a face number and a
corner number into one integer. Faces with three corners become one
triangle; faces with four are split along their shorter diagonal. Faces
with any other corner count are ignored.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntFlag
from typing import Any, Optional, Sequence

from octomath.vector import Vec3

GRID_CELLS = 2048


class MeshInterface(ABC):
    """The mesh a tangent space is generated for.

    Subclasses supply faces, corner counts and per-corner attributes.
    ``vert`` runs over 0-2 for triangles and 0-3 for quads. Results are
    handed back through :meth:`set_tspace` and :meth:`set_tspace_basic`.
    By default they are recorded in :attr:`tspace_results` and
    :attr:`tspace_basic_results`, keyed by ``(face, vert)``; override the
    setters to handle them differently.
    """

    @abstractmethod
    def num_faces(self) -> int:
        """Number of faces (triangles, quads or others) in the mesh."""

    @abstractmethod
    def num_vertices_of_face(self, face: int) -> int:
        """Number of corners of ``face``."""

    @abstractmethod
    def position(self, face: int, vert: int) -> Sequence[float]:
        """Position (x, y, z) of a face corner."""

    @abstractmethod
    def normal(self, face: int, vert: int) -> Sequence[float]:
        """Unit normal (x, y, z) of a face corner."""

    @abstractmethod
    def tex_coord(self, face: int, vert: int) -> Sequence[float]:
        """Texture coordinate (u, v) of a face corner."""

    @property
    def tspace_results(self) -> dict[tuple[int, int], tuple[Vec3, Vec3, float, float, bool]]:
        """Full tangent spaces received so far, keyed by ``(face, vert)``."""
        try:
            return self._tspace_results
        except AttributeError:
            self._tspace_results: dict[tuple[int, int], tuple[Vec3, Vec3, float, float, bool]] = {}
            return self._tspace_results

    @property
    def tspace_basic_results(self) -> dict[tuple[int, int], tuple[Vec3, float]]:
        """Tangents and bitangent signs received so far, keyed by ``(face, vert)``."""
        try:
            return self._tspace_basic_results
        except AttributeError:
            self._tspace_basic_results: dict[tuple[int, int], tuple[Vec3, float]] = {}
            return self._tspace_basic_results

    def set_tspace(
        self,
        tangent: Vec3,
        bitangent: Vec3,
        mag_s: float,
        mag_t: float,
        is_orientation_preserving: bool,
        face: int,
        vert: int,
    ) -> None:
        """Receive the full tangent space of a face corner and record it."""
        self.tspace_results[(face, vert)] = (
            tangent,
            bitangent,
            mag_s,
            mag_t,
            bool(is_orientation_preserving),
        )

    def set_tspace_basic(self, tangent: Vec3, sign: float, face: int, vert: int) -> None:
        """Receive the tangent and bitangent sign of a face corner and record it."""
        self.tspace_basic_results[(face, vert)] = (tangent, sign)


class TriangleFlag(IntFlag):
    """State bits kept for every triangle."""

    DEGENERATE = 1
    QUAD_ONE_DEGEN_TRI = 2
    GROUP_WITH_ANY = 4
    ORIENT_PRESERVING = 8


@dataclass
class TriangleInfo:
    """Per-triangle bookkeeping.

    ``vert_num`` holds the corners of the original face the triangle uses,
    ``tspaces_offset`` the position of that face's first corner in the
    output, ``v_os``/``v_ot`` the normalised first order derivatives and
    ``mag_s``/``mag_t`` their original magnitudes.
    """

    org_face_number: int
    tspaces_offset: int
    vert_num: tuple[int, int, int]
    flag: TriangleFlag = TriangleFlag(0)
    face_neighbors: list[int] = field(default_factory=lambda: [-1, -1, -1])
    assigned_group: list[Optional[Any]] = field(default_factory=lambda: [None, None, None])
    v_os: Vec3 = Vec3()
    v_ot: Vec3 = Vec3()
    mag_s: float = 0.0
    mag_t: float = 0.0


def make_index(face: int, vert: int) -> int:
    """Pack a face number and a corner number (0-3) into one vertex index."""
    if not 0 <= vert < 4:
        raise ValueError(f"corner number out of range: {vert}")
    if face < 0:
        raise ValueError(f"face number must not be negative: {face}")
    return (face << 2) | (vert & 0x3)


def split_index(index: int) -> tuple[int, int]:
    """Unpack a vertex index into ``(face, vert)``."""
    return index >> 2, index & 0x3


def vertex_position(mesh: MeshInterface, index: int) -> Vec3:
    face, vert = split_index(index)
    x, y, z = mesh.position(face, vert)[:3]
    return Vec3(x, y, z)


def vertex_normal(mesh: MeshInterface, index: int) -> Vec3:
    face, vert = split_index(index)
    x, y, z = mesh.normal(face, vert)[:3]
    return Vec3(x, y, z)


def vertex_tex_coord(mesh: MeshInterface, index: int) -> Vec3:
    """Texture coordinate as ``Vec3(u, v, 1.0)``."""
    face, vert = split_index(index)
    u, v = mesh.tex_coord(face, vert)[:2]
    return Vec3(u, v, 1.0)


def count_triangles(mesh: MeshInterface) -> int:
    """Number of triangles the supported faces of ``mesh`` split into."""
    total = 0
    for face in range(mesh.num_faces()):
        corners = mesh.num_vertices_of_face(face)
        if corners == 3:
            total += 1
        elif corners == 4:
            total += 2
    return total


def _quad_diagonal_is_02(mesh: MeshInterface, indices: Sequence[int]) -> bool:
    i0, i1, i2, i3 = indices
    tex_02 = vertex_tex_coord(mesh, i0).distance_sq(vertex_tex_coord(mesh, i2))
    tex_13 = vertex_tex_coord(mesh, i1).distance_sq(vertex_tex_coord(mesh, i3))
    if tex_02 < tex_13:
        return True
    if tex_13 < tex_02:
        return False
    pos_02 = vertex_position(mesh, i0).distance_sq(vertex_position(mesh, i2))
    pos_13 = vertex_position(mesh, i1).distance_sq(vertex_position(mesh, i3))
    return not pos_13 < pos_02


def build_initial_triangles(
    mesh: MeshInterface,
) -> tuple[list[TriangleInfo], list[int], int]:
    """Split the supported faces into triangles.

    Returns the triangle infos, the flat list of three vertex indices per
    triangle and the total number of tangent spaces (face corners) to output.
    Quads are split along the diagonal that is shorter in texture space,
    falling back to the shorter one in object space.
    """
    infos: list[TriangleInfo] = []
    tri_list: list[int] = []
    offset = 0
    for face in range(mesh.num_faces()):
        corners = mesh.num_vertices_of_face(face)
        if corners not in (3, 4):
            continue

        if corners == 3:
            layouts = [(0, 1, 2)]
        elif _quad_diagonal_is_02(mesh, [make_index(face, v) for v in range(4)]):
            layouts = [(0, 1, 2), (0, 2, 3)]
        else:
            layouts = [(0, 1, 3), (1, 2, 3)]

        for layout in layouts:
            infos.append(TriangleInfo(org_face_number=face, tspaces_offset=offset, vert_num=layout))
            tri_list.extend(make_index(face, v) for v in layout)
        offset += corners

    return infos, tri_list, offset


def find_grid_cell(f_min: float, f_max: float, value: float) -> int:
    """Cell (0 to ``GRID_CELLS - 1``) that ``value`` falls in along [f_min, f_max]."""
    span = f_max - f_min
    if span == 0.0:
        return 0
    cell = GRID_CELLS * ((value - f_min) / span)
    if math.isnan(cell) or cell < 0:
        return 0
    if cell >= GRID_CELLS:
        return GRID_CELLS - 1
    return int(cell)


def _widest_channel(points: Sequence[Vec3]) -> int:
    lows = [min(p[c] for p in points) for c in range(3)] if points else [0.0] * 3
    highs = [max(p[c] for p in points) for c in range(3)] if points else [0.0] * 3
    dx, dy, dz = (hi - lo for lo, hi in zip(lows, highs))
    if dy > dx and dy > dz:
        return 1
    if dz > dx:
        return 2
    return 0


def weld_vertices(mesh: MeshInterface, tri_list: Sequence[int]) -> list[int]:
    """Replace vertex indices that share position, normal and texture
    coordinate with the index of the first such vertex in the list.

    Vertices with a NaN attribute are never welded.
    """
    welded = list(tri_list)
    if not welded:
        return welded

    positions = [tuple(vertex_position(mesh, index)) for index in welded]
    channel = _widest_channel(positions)
    values = [p[channel] for p in positions if not math.isnan(p[channel])]
    f_min = min(values) if values else 0.0
    f_max = max(values) if values else 0.0

    cells: dict[int, list[int]] = {}
    for slot, point in enumerate(positions):
        cells.setdefault(find_grid_cell(f_min, f_max, point[channel]), []).append(slot)

    for slots in cells.values():
        if len(slots) < 2:
            continue
        first_seen: dict[tuple[float, ...], int] = {}
        for slot in slots:
            index = welded[slot]
            key = (
                positions[slot]
                + tuple(vertex_normal(mesh, index))
                + tuple(vertex_tex_coord(mesh, index))
            )
            if any(math.isnan(v) for v in key):
                continue
            if key in first_seen:
                welded[slot] = first_seen[key]
            else:
                first_seen[key] = index
    return welded