"""
Half-Edge Store
===============

Vertices and half-edges with a vertex-ownership column and the vertex
permutation σ. Foundation for rotation graphs.

A *corolla* is a vertex together with its incident half-edges; the number of
half-edges is its *valence*. add_corolla numbers the new half-edges
consecutively and sets σ to the consecutive rotation on them:

    add_corolla(3) on an empty store:
        half-edges  0  1  2
        vertex      0  0  0
        σ           1  2  0

INVARIANT:
    vertex[σ[h]] == vertex[h]   (σ never leaves a corolla)
"""

from typing import List

import numpy as np

from ..spec.errors import check_count
from .tables import ColumnTable


class HalfEdgeStore:
    """Vertex table V plus half-edge table H(vertex, sigma), vertex indexed."""

    def __init__(self):
        self._V = ColumnTable('vertex')
        self._H = ColumnTable('half-edge', columns=self._half_edge_columns(),
                              index=('vertex',))

    @classmethod
    def _half_edge_columns(cls) -> tuple:
        return ('vertex', 'sigma')

    # -------------------------------------------------------------- counts

    @property
    def nv(self) -> int:
        return len(self._V)

    @property
    def nh(self) -> int:
        return len(self._H)

    def vertices(self) -> range:
        return self._V.rows()

    def half_edges(self) -> range:
        return self._H.rows()

    # -------------------------------------------------------------- build

    def add_vertex(self) -> int:
        """Add an isolated vertex and return its index."""
        return self._V.add_row()

    def add_vertices(self, n: int) -> List[int]:
        """Add n isolated vertices and return their indices."""
        return list(self._V.add_rows(n))

    def add_corolla(self, valence: int) -> List[int]:
        """
        Add a vertex with `valence` new half-edges rotating consecutively.

        Returns:
            the new half-edge indices (the new vertex is self.nv - 1)
        """
        valence = check_count(valence, "Corolla valence")
        v = self._V.add_row()
        n = self.nh
        new = np.arange(n, n + valence)
        rows = self._H.add_rows(valence, vertex=v, sigma=np.roll(new, -1))
        return list(rows)

    # -------------------------------------------------------------- queries

    def vertex_of(self, h: int) -> int:
        """Owning vertex of half-edge h, O(1)."""
        return self._H.get('vertex', h)

    def half_edges_of(self, v: int) -> List[int]:
        """Half-edges owned by vertex v, ascending, O(valence)."""
        self._V.check_row(v)
        return self._H.incident('vertex', v)

    def valence(self, v: int) -> int:
        return len(self.half_edges_of(v))

    def vertex(self, h=None):
        """Vertex column (whole array, or the value(s) at h)."""
        return self._H.get('vertex', h)

    def sigma(self, h=None):
        """Vertex permutation σ (whole array, or the value(s) at h)."""
        return self._H.get('sigma', h)

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._V == other._V and self._H == other._H
