"""
Topology Verification Functions
===============================

Validity predicates for half-edge structures and topological invariants of
maps and semi-simplicial sets.

Predicates return bool and never raise for an invalid structure; they are
explicit operations, not run implicitly on every mutation.

EULER CHARACTERISTIC:
    maps:                χ = #σ-cycles - #α-cycles + #ϕ-cycles
    semi-simplicial:     χ = V - E + T

GENUS (closed orientable surface with c components):
    χ = 2c - 2g   ⟹   g = (2c - χ) / 2

BETTI NUMBERS (from incidence ranks, real coefficients):
    b₀ = V - rank d₀
    b₁ = E - rank d₀ - rank d₁
    b₂ = T - rank d₁
"""

import numpy as np
from scipy import sparse
from scipy.sparse.csgraph import connected_components
from typing import Tuple

from ..spec.constants import UNPAIRED
from ..core.combinatorial_maps import Hypermap, RotationGraph, RotationSystem
from ..core.permutations import is_involution, is_permutation
from ..core.simplicial_sets import (
    SemiSimplicialSet1D,
    SemiSimplicialSet2D,
    is_semi_simplicial,
)
from ..operators.incidence import build_d0, build_d1


def is_valid_rotation_graph(g: RotationGraph) -> bool:
    """
    Check every rotation graph law.

        σ is a permutation
        vertex[σ[h]] == vertex[h]
        every half-edge is paired and inv∘inv = id
    """
    sigma = g.sigma()
    if not is_permutation(sigma):
        return False
    vertex = g.vertex()
    if not np.array_equal(vertex[sigma], vertex):
        return False
    inv = g.inv()
    if np.any(inv == UNPAIRED):
        return False
    return is_involution(inv)


def is_valid_rotation_system(s: RotationSystem) -> bool:
    """σ is a permutation, every half-edge is paired and α∘α = id."""
    if not is_permutation(s.sigma()):
        return False
    if s.unpaired_half_edges():
        return False
    return is_involution(s.alpha())


def is_valid_hypermap(m: Hypermap) -> bool:
    """σ∘α∘ϕ = id (and α∘α = id for a CombinatorialMap)."""
    return m.axioms_hold()


def euler_characteristic(x) -> int:
    """
    Euler characteristic of a map-like structure or semi-simplicial set.

    For half-edge structures every σ-cycle counts as a vertex; a vertex with
    no half-edges has no σ-cycle and is not counted.
    """
    if isinstance(x, SemiSimplicialSet2D):
        return x.nv - x.ne + x.ntriangles
    if isinstance(x, SemiSimplicialSet1D):
        return x.nv - x.ne
    return len(x.trace_vertices()) - len(x.trace_edges()) + len(x.trace_faces())


def count_connected_components(x) -> int:
    """
    Connected components.

    Semi-simplicial sets: components of the 1-skeleton (isolated vertices
    count). Half-edge structures: orbits of the group generated by σ and α.
    """
    if isinstance(x, SemiSimplicialSet1D):
        n = x.nv
        rows, cols = x.src(), x.tgt()
    else:
        n = x.nh
        h = np.arange(n)
        rows = np.concatenate([h, h])
        cols = np.concatenate([x.sigma(), x.alpha()])
    if n == 0:
        return 0
    adjacency = sparse.coo_matrix(
        (np.ones(len(rows), dtype=np.int8), (rows, cols)), shape=(n, n)
    )
    n_components, _ = connected_components(adjacency, directed=False)
    return int(n_components)


def genus(x) -> int:
    """
    Genus of a closed orientable surface, summed over components.

    Raises:
        ValueError: if 2c - χ is odd (not a closed orientable surface)
    """
    chi = euler_characteristic(x)
    c = count_connected_components(x)
    twice_g = 2 * c - chi
    if twice_g % 2 != 0 or twice_g < 0:
        raise ValueError(
            f"χ = {chi} with {c} component(s) is not a closed orientable surface"
        )
    return twice_g // 2


def _rank(m: sparse.spmatrix) -> int:
    if min(m.shape) == 0:
        return 0
    return int(np.linalg.matrix_rank(m.toarray()))


def betti_numbers(s) -> Tuple[int, ...]:
    """
    Betti numbers over ℝ of a semi-simplicial set.

    Returns:
        (b₀, b₁) for a 1D set, (b₀, b₁, b₂) for a 2D set

    PROPERTY:
        b₀ - b₁ + b₂ = χ
    """
    r0 = _rank(build_d0(s))
    if not isinstance(s, SemiSimplicialSet2D):
        return (s.nv - r0, s.ne - r0)
    r1 = _rank(build_d1(s))
    return (s.nv - r0, s.ne - r0 - r1, s.ntriangles - r1)
