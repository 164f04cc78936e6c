"""
Semi-Simplicial Sets in Dimensions 1 and 2
==========================================

Vertices (0-simplices), edges (1-simplices) and triangles (2-simplices) with
face maps but no degeneracies.

FACE MAPS (face i deletes vertex i of the ordered simplex):
    Edge e = (src, tgt):
        ∂₁(0, e) = tgt(e)
        ∂₁(1, e) = src(e)

    Triangle t = (v0, v1, v2), stored as its three boundary edges:
        ∂₂(0, t) = (v1, v2)
        ∂₂(1, t) = (v0, v2)
        ∂₂(2, t) = (v0, v1)

SEMI-SIMPLICIAL IDENTITY (0 ≤ i < j ≤ n):
    ∂_{n-1}(i, ∂_n(j, x)) == ∂_{n-1}(j-1, ∂_n(i, x))

    For a triangle this says the three edges agree on the shared vertices:
        (0,1): tgt(∂₂0) == tgt(∂₂1) == v2
        (0,2): src(∂₂0) == tgt(∂₂2) == v1
        (1,2): src(∂₂1) == src(∂₂2) == v0

EDGES ARE DIRECTED:
    glue_triangle(v0, v1, v2) looks up (or creates) the edges (v0,v1),
    (v1,v2), (v0,v2) exactly in that orientation. An edge (3, 2) is not
    reused for a request (2, 3).
    A *sorted* edge has src < tgt; glue_sorted_triangle sorts its vertices
    first, so every edge it touches is sorted.

Example (triangulated square, 0-based):
    s = SemiSimplicialSet2D()
    s.add_vertices(4)
    s.glue_triangle(0, 1, 2)
    s.glue_triangle(0, 3, 2)
    → 2 triangles, 5 edges: (0,1), (1,2), (0,2), (0,3), (3,2)
"""

from typing import List, Tuple

import numpy as np

from ..spec.errors import AxiomViolation, DegenerateSimplex, check_index
from .tables import ColumnTable, lookup


class SemiSimplicialSet1D:
    """Vertices and directed edges (src, tgt); a semi-simplicial set of dim 1."""

    def __init__(self):
        self._V = ColumnTable('vertex')
        self._E = ColumnTable('edge', columns=('src', 'tgt'), index=('src', 'tgt'))

    # -------------------------------------------------------------- counts

    @property
    def nv(self) -> int:
        return len(self._V)

    @property
    def ne(self) -> int:
        return len(self._E)

    def vertices(self) -> range:
        return self._V.rows()

    def edges(self) -> range:
        return self._E.rows()

    # -------------------------------------------------------------- build

    def add_vertex(self) -> int:
        return self._V.add_row()

    def add_vertices(self, n: int) -> List[int]:
        return list(self._V.add_rows(n))

    def _check_edge(self, src, tgt) -> Tuple[int, int]:
        src = self._V.check_row(src)
        tgt = self._V.check_row(tgt)
        if src == tgt:
            raise DegenerateSimplex(f"Edge ({src},{tgt}) is a self-loop")
        return src, tgt

    def add_edge(self, src: int, tgt: int) -> int:
        """Add the directed edge src → tgt and return its index."""
        src, tgt = self._check_edge(src, tgt)
        return self._E.add_row(src=src, tgt=tgt)

    def add_edges(self, srcs, tgts) -> List[int]:
        """Bulk add_edge; every pair is validated before any edge is added."""
        srcs, tgts = list(srcs), list(tgts)
        if len(srcs) != len(tgts):
            raise ValueError(f"Got {len(srcs)} sources but {len(tgts)} targets")
        pairs = [self._check_edge(u, v) for u, v in zip(srcs, tgts)]
        return list(self._E.add_rows(len(pairs),
                                     src=[u for u, _ in pairs],
                                     tgt=[v for _, v in pairs]))

    def add_sorted_edge(self, u: int, v: int) -> int:
        """Add the edge {u, v} stored as (min, max)."""
        u, v = self._check_edge(u, v)
        return self._E.add_row(src=min(u, v), tgt=max(u, v))

    def add_sorted_edges(self, us, vs) -> List[int]:
        """Elementwise add_sorted_edge, validated as a whole first."""
        us, vs = list(us), list(vs)
        if len(us) != len(vs):
            raise ValueError(f"Got {len(us)} sources but {len(vs)} targets")
        pairs = [self._check_edge(u, v) for u, v in zip(us, vs)]
        return list(self._E.add_rows(len(pairs),
                                     src=[min(p) for p in pairs],
                                     tgt=[max(p) for p in pairs]))

    # -------------------------------------------------------------- queries

    def edges_between(self, src: int, tgt: int) -> List[int]:
        """All edges src → tgt, ascending."""
        self._V.check_row(src)
        self._V.check_row(tgt)
        return lookup(self._E, src=src, tgt=tgt)

    def has_edge(self, src: int, tgt: int) -> bool:
        return len(self.edges_between(src, tgt)) > 0

    def get_edge(self, src: int, tgt: int) -> int:
        """First edge src → tgt, created if missing."""
        existing = self.edges_between(src, tgt)
        return existing[0] if existing else self.add_edge(src, tgt)

    def src(self, e=None):
        return self._E.get('src', e)

    def tgt(self, e=None):
        return self._E.get('tgt', e)

    def boundary1(self, i: int, e=None):
        """∂₁(i, e): i=0 gives tgt, i=1 gives src."""
        if i == 0:
            return self.tgt(e)
        if i == 1:
            return self.src(e)
        raise ValueError(f"Edge face index must be 0 or 1, got {i}")

    def edge_vertices(self, e: int) -> Tuple[int, int]:
        return (self.src(e), self.tgt(e))

    # -------------------------------------------------------------- identity

    def _tables(self) -> tuple:
        return (self._V, self._E)

    def copy(self):
        other = type(self).__new__(type(self))
        for name, value in vars(self).items():
            setattr(other, name, value.copy() if isinstance(value, ColumnTable) else value)
        return other

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._tables() == other._tables()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(nv={self.nv}, ne={self.ne})"


class SemiSimplicialSet2D(SemiSimplicialSet1D):
    """Adds triangles stored by their boundary edges ∂₂(0..2, t)."""

    def __init__(self):
        super().__init__()
        self._T = ColumnTable('triangle', columns=('d0', 'd1', 'd2'),
                              index=('d0', 'd1', 'd2'))

    @property
    def ntriangles(self) -> int:
        return len(self._T)

    def triangles(self) -> range:
        return self._T.rows()

    def add_triangle(self, e0: int, e1: int, e2: int) -> int:
        """
        Add a triangle from its boundary edges, face index order.

        Raises:
            IndexOutOfRange: if an edge does not exist
            AxiomViolation: if the edges do not satisfy the face identities
        """
        e0, e1, e2 = (self._E.check_row(e) for e in (e0, e1, e2))
        checks = (
            ((0, 1), self.tgt(e1), self.tgt(e0)),
            ((0, 2), self.tgt(e2), self.src(e0)),
            ((1, 2), self.src(e2), self.src(e1)),
        )
        for (i, j), lhs, rhs in checks:
            if lhs != rhs:
                raise AxiomViolation(
                    f"Edges ({e0},{e1},{e2}) violate the face identity (i={i}, j={j}): "
                    f"{lhs} != {rhs}"
                )
        return self._T.add_row(d0=e0, d1=e1, d2=e2)

    def glue_triangle(self, v0: int, v1: int, v2: int) -> int:
        """
        Glue the triangle (v0, v1, v2), reusing existing directed edges.

        Returns:
            the new triangle index
        """
        v0, v1, v2 = (self._V.check_row(v) for v in (v0, v1, v2))
        if len({v0, v1, v2}) < 3:
            raise DegenerateSimplex(f"Triangle ({v0},{v1},{v2}) repeats a vertex")
        e01 = self.get_edge(v0, v1)
        e12 = self.get_edge(v1, v2)
        e02 = self.get_edge(v0, v2)
        return self.add_triangle(e12, e02, e01)

    def glue_sorted_triangle(self, v0: int, v1: int, v2: int) -> int:
        """glue_triangle on the vertices in ascending order."""
        return self.glue_triangle(*sorted((v0, v1, v2)))

    def boundary2(self, i: int, t=None):
        """∂₂(i, t): the edge of t opposite its i-th vertex."""
        if i not in (0, 1, 2):
            raise ValueError(f"Triangle face index must be 0, 1 or 2, got {i}")
        return self._T.get(f'd{i}', t)

    def triangle_edges(self, t: int) -> Tuple[int, int, int]:
        return tuple(self.boundary2(i, t) for i in range(3))

    def triangle_vertex(self, i: int, t=None):
        """
        i-th vertex of triangle t, read through the face maps:
            v0 = src(∂₂2), v1 = tgt(∂₂2), v2 = tgt(∂₂0)
        """
        if i == 0:
            return self.src(self.boundary2(2, t))
        if i == 1:
            return self.tgt(self.boundary2(2, t))
        if i == 2:
            return self.tgt(self.boundary2(0, t))
        raise ValueError(f"Triangle vertex index must be 0, 1 or 2, got {i}")

    def triangle_vertices(self, t: int) -> Tuple[int, int, int]:
        return tuple(self.triangle_vertex(i, t) for i in range(3))

    def edge_triangles(self, e: int) -> List[int]:
        """Triangles having e as any of their three faces, ascending."""
        self._E.check_row(e)
        found = set()
        for column in ('d0', 'd1', 'd2'):
            found.update(self._T.incident(column, e))
        return sorted(found)

    def _tables(self) -> tuple:
        return (self._V, self._E, self._T)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(nv={self.nv}, ne={self.ne}, ntriangles={self.ntriangles})"


# =============================================================================
# FUNCTIONAL INTERFACE
# =============================================================================

def src(s, e=None):
    return s.src(e)


def tgt(s, e=None):
    return s.tgt(e)


def boundary1(s, i: int, e=None):
    """Face map ∂₁(i, e) of a semi-simplicial set."""
    return s.boundary1(i, e)


def boundary2(s, i: int, t=None):
    """Face map ∂₂(i, t) of a 2D semi-simplicial set."""
    return s.boundary2(i, t)


def boundary(s, n: int, i: int, x=None):
    """Face map ∂_n(i, x) for n = 1 or 2."""
    if n == 1:
        return s.boundary1(i, x)
    if n == 2:
        return s.boundary2(i, x)
    raise ValueError(f"Face maps exist for n = 1, 2 only, got n={n}")


def triangle_vertex(s, i: int, t=None):
    return s.triangle_vertex(i, t)


def is_semi_simplicial(s, n: int) -> bool:
    """
    Check the semi-simplicial identities in dimension n.

    For all 0 ≤ i < j ≤ n and every n-simplex x:
        ∂_{n-1}(i, ∂_n(j, x)) == ∂_{n-1}(j-1, ∂_n(i, x))

    The range deliberately includes i = 0, which is stricter than the usual
    1 ≤ i < j ≤ n formulation: a wrong ∂_n(0) fails the (0, j) identities and
    would go unnoticed otherwise.

    Returns False on the first violation; never raises for a violation.

    Raises:
        ValueError: if n is not 2 (the only dimension with two face levels here)
    """
    if n < 2:
        raise ValueError(f"Semi-simplicial identities need n >= 2, got n={n}")
    if n > 2 or not isinstance(s, SemiSimplicialSet2D):
        raise ValueError(f"Dimension {n} is not stored by {type(s).__name__}")

    for i in range(n + 1):
        for j in range(i + 1, n + 1):
            lhs = boundary(s, n - 1, i, boundary(s, n, j))
            rhs = boundary(s, n - 1, j - 1, boundary(s, n, i))
            if not np.array_equal(lhs, rhs):
                return False
    return True
