#!/usr/bin/env python3
"""
Tests for 1D and 2D semi-simplicial sets.

Covers:
- Face maps ∂₁, ∂₂ and triangle vertices
- Directed edge reuse in glue_triangle
- Sorted gluing independence from vertex order
- Semi-simplicial identities, including detection of corrupted faces

Run: pytest tests/core/test_simplicial_sets.py -v
"""

import sys
import os
from itertools import permutations
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from combinatorial_spaces.spec.errors import AxiomViolation
from combinatorial_spaces.core.simplicial_sets import (
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
from combinatorial_spaces.builders.polyhedra import build_triangulated_square


# =============================================================================
# 1D
# =============================================================================

def test_sorted_edges_and_face_maps():
    s = SemiSimplicialSet1D()
    s.add_vertices(4)
    s.add_sorted_edge(1, 0)
    s.add_sorted_edges([1, 3], [2, 2])
    assert src(s).tolist() == [0, 1, 2]
    assert tgt(s).tolist() == [1, 2, 3]
    assert boundary1(s, 0).tolist() == [1, 2, 3], "∂₁(0) is the target"
    assert boundary1(s, 1).tolist() == [0, 1, 2], "∂₁(1) is the source"
    assert boundary(s, 1, 0, 2) == 3


def test_add_edge_keeps_direction():
    s = SemiSimplicialSet1D()
    s.add_vertices(3)
    e = s.add_edge(2, 0)
    assert s.edge_vertices(e) == (2, 0)
    assert s.has_edge(2, 0)
    assert not s.has_edge(0, 2)


def test_bulk_add_edges():
    s = SemiSimplicialSet1D()
    s.add_vertices(3)
    assert s.add_edges([0, 1], [1, 2]) == [0, 1]
    assert s.ne == 2
    with pytest.raises(ValueError, match="sources"):
        s.add_edges([0], [1, 2])


def test_parallel_edges_allowed():
    """Semi-simplicial sets may have several edges with the same endpoints."""
    s = SemiSimplicialSet1D()
    s.add_vertices(2)
    s.add_edge(0, 1)
    s.add_edge(0, 1)
    assert s.edges_between(0, 1) == [0, 1]
    assert s.get_edge(0, 1) == 0, "get_edge returns the first match"
    assert s.ne == 2


def test_boundary1_bad_index():
    s = SemiSimplicialSet1D()
    with pytest.raises(ValueError, match="0 or 1"):
        s.boundary1(2)
    with pytest.raises(ValueError, match="n = 1, 2"):
        boundary(s, 3, 0)


def test_copy_and_equality():
    s = SemiSimplicialSet1D()
    s.add_vertices(3)
    s.add_edge(0, 1)
    c = s.copy()
    assert c == s
    c.add_edge(1, 2)
    assert c != s
    assert s.ne == 1, "Copy must not share tables"


# =============================================================================
# 2D
# =============================================================================

def test_single_triangle():
    s = SemiSimplicialSet2D()
    s.add_vertices(3)
    t = s.glue_triangle(0, 1, 2)
    assert t == 0
    assert s.ntriangles == 1
    assert is_semi_simplicial(s, 2)
    assert tuple(boundary2(s, i, t) for i in range(3)) == (1, 2, 0)
    assert tuple(triangle_vertex(s, i, t) for i in range(3)) == (0, 1, 2)


def test_sorted_triangle_matches_glue():
    a = SemiSimplicialSet2D()
    a.add_vertices(3)
    a.glue_sorted_triangle(1, 2, 0)
    b = SemiSimplicialSet2D()
    b.add_vertices(3)
    b.glue_triangle(0, 1, 2)
    assert a == b


def test_sorted_triangle_any_vertex_order():
    ref = SemiSimplicialSet2D()
    ref.add_vertices(5)
    ref.glue_triangle(1, 3, 4)
    for order in permutations((1, 3, 4)):
        s = SemiSimplicialSet2D()
        s.add_vertices(5)
        s.glue_sorted_triangle(*order)
        assert s == ref, f"glue_sorted_triangle{order} differs"


def test_triangulated_square():
    s, _ = build_triangulated_square()
    assert s.ntriangles == 2
    assert list(s.triangles()) == [0, 1]
    assert s.ne == 5
    assert sorted(zip(s.src().tolist(), s.tgt().tolist())) == \
        [(0, 1), (0, 2), (0, 3), (1, 2), (3, 2)]
    assert s.triangle_vertices(1) == (0, 3, 2)
    assert triangle_vertex(s, 0).tolist() == [0, 0]
    assert s.edge_triangles(2) == [0, 1], "Diagonal is shared"
    assert is_semi_simplicial(s, 2)


def test_glue_reuses_only_same_direction():
    s = SemiSimplicialSet2D()
    s.add_vertices(3)
    s.glue_triangle(0, 1, 2)
    s.glue_triangle(0, 2, 1)
    # (0,2) and (0,1) reused, (2,1) is new
    assert s.ne == 4
    assert s.edges_between(2, 1) == [3]
    assert is_semi_simplicial(s, 2)


def test_add_triangle_validates_faces():
    s = SemiSimplicialSet2D()
    s.add_vertices(3)
    e01 = s.add_edge(0, 1)
    e12 = s.add_edge(1, 2)
    e02 = s.add_edge(0, 2)
    with pytest.raises(AxiomViolation, match="face identity"):
        s.add_triangle(e01, e12, e02)
    assert s.ntriangles == 0
    assert s.add_triangle(e12, e02, e01) == 0


def test_corrupted_face_detected():
    s, _ = build_triangulated_square()
    assert is_semi_simplicial(s, 2)
    # Replace ∂₂(0) of triangle 0 by the edge (0, 3)
    s._T.set('d0', 0, 3)
    assert not is_semi_simplicial(s, 2)


def test_empty_set_is_semi_simplicial():
    assert is_semi_simplicial(SemiSimplicialSet2D(), 2)


def test_is_semi_simplicial_dimension_guard():
    s2 = SemiSimplicialSet2D()
    with pytest.raises(ValueError, match="n >= 2"):
        is_semi_simplicial(s2, 1)
    with pytest.raises(ValueError, match="not stored"):
        is_semi_simplicial(s2, 3)
    with pytest.raises(ValueError, match="not stored"):
        is_semi_simplicial(SemiSimplicialSet1D(), 2)


def test_triangle_index_guards():
    s = SemiSimplicialSet2D()
    with pytest.raises(ValueError, match="0, 1 or 2"):
        s.boundary2(3)
    with pytest.raises(ValueError, match="0, 1 or 2"):
        s.triangle_vertex(-1)
