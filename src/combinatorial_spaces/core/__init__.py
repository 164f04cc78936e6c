"""Indexed tables, permutation algebra, surface structures, semi-simplicial sets."""

from .tables import ColumnTable, lookup

from .permutations import (
    identity,
    is_permutation,
    check_permutation,
    invert,
    compose,
    sortperm,
    cycles,
    cycle_type,
    fixed_points,
    is_involution,
    cycle_successors,
    cycle_permutation,
)

from .half_edges import HalfEdgeStore

from .combinatorial_maps import (
    RotationGraph,
    RotationSystem,
    Hypermap,
    CombinatorialMap,
    sigma,
    alpha,
    phi,
    trace_vertices,
    trace_edges,
    trace_faces,
)

from .simplicial_sets import (
    SemiSimplicialSet1D,
    SemiSimplicialSet2D,
    src,
    tgt,
    boundary,
    boundary1,
    boundary2,
    triangle_vertex,
    is_semi_simplicial,
)
