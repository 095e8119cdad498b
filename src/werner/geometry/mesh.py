"""Triangle meshes with per-vertex group tags."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True, eq=False)
class Mesh:
    """An immutable triangle mesh.

    Triangles do not share vertices, so every triangle is flat shaded.
    Each vertex carries the group id of the triangle it belongs to;
    renderers use groups to map picks back to the logical entity that
    produced the geometry.

    Attributes:
        vertices: Vertex positions, shape ``(n_vertices, 3)``.
        normals: Unit vertex normals, shape ``(n_vertices, 3)``.
        indices: Triangle vertex indices, shape ``(n_triangles, 3)``.
        groups: Group id per vertex, shape ``(n_vertices,)``.
    """

    vertices: np.ndarray
    normals: np.ndarray
    indices: np.ndarray
    groups: np.ndarray

    @classmethod
    def empty(cls) -> Mesh:
        return MeshBuilder(0).get_mesh()

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.indices)

    @property
    def triangle_groups(self) -> np.ndarray:
        """Group id per triangle, shape ``(n_triangles,)``."""
        if self.triangle_count == 0:
            return np.zeros(0, dtype=np.int64)
        return self.groups[self.indices[:, 0]]

    @property
    def group_ids(self) -> np.ndarray:
        """Sorted distinct group ids present in the mesh."""
        return np.unique(self.triangle_groups)

    def triangles(self, group: int | None = None) -> np.ndarray:
        """Return triangle corner positions, shape ``(n, 3, 3)``.

        Args:
            group: If given, only triangles of this group.
        """
        indices = self.indices
        if group is not None:
            indices = indices[self.triangle_groups == group]
        return self.vertices[indices]


def _face_normal(a: np.ndarray, b: np.ndarray, c: np.ndarray) -> np.ndarray:
    n = np.cross(b - a, c - a)
    length = np.linalg.norm(n)
    if length > 1e-12:
        return n / length
    return np.zeros(3)


class MeshBuilder:
    """Accumulates triangles into growable buffers.

    Set :attr:`current_group` before adding the triangles of a group;
    every vertex added afterwards is tagged with it.  Buffers grow by
    doubling, so the initial size is only a hint.

    Args:
        initial_vertex_count: Vertex capacity to reserve.
        mesh: A previous mesh whose size is used as a lower bound for
            the reserved capacity.
    """

    def __init__(self, initial_vertex_count: int = 0, mesh: Mesh | None = None) -> None:
        capacity = max(int(initial_vertex_count), 3)
        if mesh is not None:
            capacity = max(capacity, mesh.vertex_count)
        self.current_group = 0
        self._vertices = np.empty((capacity, 3), dtype=float)
        self._normals = np.empty((capacity, 3), dtype=float)
        self._groups = np.empty(capacity, dtype=np.int64)
        self._n_vertices = 0

    @property
    def vertex_count(self) -> int:
        return self._n_vertices

    @property
    def triangle_count(self) -> int:
        return self._n_vertices // 3

    def _reserve(self, n_vertices: int) -> None:
        capacity = len(self._vertices)
        if n_vertices <= capacity:
            return
        while capacity < n_vertices:
            capacity *= 2
        for name in ("_vertices", "_normals", "_groups"):
            old = getattr(self, name)
            new = np.empty((capacity, *old.shape[1:]), dtype=old.dtype)
            new[:self._n_vertices] = old[:self._n_vertices]
            setattr(self, name, new)

    def add_triangle(self, a: np.ndarray, b: np.ndarray, c: np.ndarray) -> None:
        """Append triangle ``(a, b, c)`` to the current group."""
        a = np.asarray(a, dtype=float)
        b = np.asarray(b, dtype=float)
        c = np.asarray(c, dtype=float)
        start = self._n_vertices
        self._reserve(start + 3)
        self._vertices[start:start + 3] = (a, b, c)
        self._normals[start:start + 3] = _face_normal(a, b, c)
        self._groups[start:start + 3] = self.current_group
        self._n_vertices = start + 3

    def get_mesh(self) -> Mesh:
        """Return the accumulated triangles as an immutable :class:`Mesh`."""
        n = self._n_vertices
        vertices = self._vertices[:n].copy()
        normals = self._normals[:n].copy()
        groups = self._groups[:n].copy()
        indices = np.arange(n, dtype=np.int64).reshape(-1, 3)
        for arr in (vertices, normals, groups, indices):
            arr.flags.writeable = False
        return Mesh(vertices=vertices, normals=normals, indices=indices, groups=groups)
