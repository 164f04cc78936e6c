"""
Incidence Matrices of Semi-Simplicial Sets
==========================================

Pure combinatorics - signed boundary operators read off the face maps.

DEFINITIONS:
    d₀: E × V  "gradient" - oriented edge-vertex incidence
    d₁: T × E  "curl" - alternating sum of triangle faces

    d₀[e, v] = Σᵢ (-1)^(i+1) [∂₁(i, e) == v]   → -1 at src, +1 at tgt
    d₁[t, e] = Σᵢ (-1)^i     [∂₂(i, t) == e]

EXACTNESS:
    d₁ d₀ = 0  ⟸  the semi-simplicial identities.
    Proof sketch: the (i, j) identity pairs the term (-1)^i (-1)^j of
    deleting vertex j then i with the term of opposite sign deleting i then
    j-1, so every vertex contribution cancels.

TRACE IDENTITY:
    Tr(d₀d₀ᵀ) = 2E  (each edge has 2 distinct endpoints)

Both matrices are scipy.sparse CSR with integer entries.
"""

import numpy as np
from scipy import sparse
from typing import Tuple

from ..spec.constants import EPS_CLOSE
from ..spec.errors import AxiomViolation


def build_d0(s) -> sparse.csr_matrix:
    """
    Build gradient operator d₀: C⁰ → C¹.

    DEFINITION:
        d₀[e, v] = -1 if v = src(e)
        d₀[e, v] = +1 if v = tgt(e)

    Args:
        s: SemiSimplicialSet1D or 2D

    Returns:
        d0: (E, V) sparse incidence matrix

    PROPERTY:
        Each row has exactly one -1 and one +1 (edges are never loops).
    """
    E, V = s.ne, s.nv
    rows = np.repeat(np.arange(E), 2)
    cols = np.column_stack([s.src(), s.tgt()]).ravel() if E else np.zeros(0, dtype=int)
    vals = np.tile([-1, +1], E)
    return sparse.csr_matrix((vals, (rows, cols)), shape=(E, V), dtype=np.int64)


def build_d1(s) -> sparse.csr_matrix:
    """
    Build curl operator d₁: C¹ → C².

    DEFINITION:
        d₁[t, ∂₂(0, t)] = +1
        d₁[t, ∂₂(1, t)] = -1
        d₁[t, ∂₂(2, t)] = +1

    Args:
        s: SemiSimplicialSet2D

    Returns:
        d1: (T, E) sparse incidence matrix

    PROPERTY:
        Column e has one entry per triangle incident to e; for a closed
        surface every column has exactly 2 non-zeros.
    """
    T, E = s.ntriangles, s.ne
    rows = np.repeat(np.arange(T), 3)
    cols = (np.column_stack([s.boundary2(i) for i in range(3)]).ravel()
            if T else np.zeros(0, dtype=int))
    vals = np.tile([+1, -1, +1], T)
    # Duplicates are summed by the COO → CSR conversion
    return sparse.csr_matrix((vals, (rows, cols)), shape=(T, E), dtype=np.int64)


def build_incidence_matrices(s) -> Tuple[sparse.csr_matrix, sparse.csr_matrix]:
    """
    Build both incidence matrices d₀ and d₁.

    EXACTNESS THEOREM:
        d₁ d₀ = 0

    Returns:
        d0: (E, V) gradient matrix
        d1: (T, E) curl matrix

    Raises:
        AxiomViolation: if d₁d₀ ≠ 0 (face maps inconsistent)
    """
    d0 = build_d0(s)
    d1 = build_d1(s)

    d1d0 = d1 @ d0
    norm = abs(d1d0).sum() if d1d0.nnz else 0
    if norm > EPS_CLOSE:
        raise AxiomViolation(f"Exactness failed: Σ|d₁d₀| = {norm}")

    return d0, d1


def verify_faces_per_edge(d1: sparse.spmatrix, k: int) -> dict:
    """
    Check that every edge has exactly k incident triangles.

        - k=2: closed 2-manifold surface
        - k=1: every edge on the boundary

    Args:
        d1: (T, E) face-edge incidence matrix
        k: expected triangles per edge

    Returns:
        dict with:
            'valid': bool - all edges have exactly k triangles
            'min', 'max': int - extreme counts
            'expected': int - k
            'histogram': dict - {count: n_edges_with_that_count}
    """
    faces_per_edge = np.asarray(abs(d1).sum(axis=0)).ravel().astype(int)
    if len(faces_per_edge) == 0:
        return {'valid': True, 'min': 0, 'max': 0, 'expected': k, 'histogram': {}}

    fpe_min = int(faces_per_edge.min())
    fpe_max = int(faces_per_edge.max())

    unique, counts = np.unique(faces_per_edge, return_counts=True)
    histogram = {int(u): int(c) for u, c in zip(unique, counts)}

    return {
        'valid': fpe_min == fpe_max == k,
        'min': fpe_min,
        'max': fpe_max,
        'expected': k,
        'histogram': histogram,
    }


# Self-test when run directly
# Run with: python -m combinatorial_spaces.operators.incidence (from src/)
if __name__ == "__main__":
    from combinatorial_spaces.builders import build_tetrahedron_surface, build_triangulated_square

    print("=" * 60)
    print("INCIDENCE OPERATORS - VERIFICATION")
    print("=" * 60)

    for name, builder in [("tetrahedron", build_tetrahedron_surface),
                          ("square", build_triangulated_square)]:
        s, _ = builder()
        d0, d1 = build_incidence_matrices(s)
        tr = (d0 @ d0.T).diagonal().sum()
        fpe = verify_faces_per_edge(d1, 2)
        print(f"\n=== {name.upper()} ===")
        print(f"V={s.nv}, E={s.ne}, T={s.ntriangles}")
        print(f"  Tr(d₀d₀ᵀ) = {tr} (expected 2E = {2 * s.ne})")
        print(f"  faces per edge: {fpe['histogram']}")

    print("\n" + "=" * 60)
    print("Verification complete.")
    print("=" * 60)
