#!/usr/bin/env python3
"""
Tests for rotation graphs, rotation systems, hypermaps and combinatorial maps.

Covers:
- Corolla construction and vertex tracing
- Pairing: completeness, involution, refusal to re-pair
- Face permutation: σ∘α∘ϕ = id
- Hypermaps with hyperedges, maps rejecting them
- Axiom checking on construction and mutation

Run: pytest tests/core/test_combinatorial_maps.py -v
"""

import sys
import os
import warnings
import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from combinatorial_spaces.spec.constants import UNPAIRED
from combinatorial_spaces.spec.errors import (
    AxiomViolation,
    IncompleteStructure,
    IndexOutOfRange,
)
from combinatorial_spaces.core.permutations import compose, identity, invert, is_involution
from combinatorial_spaces.core.combinatorial_maps import (
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
from combinatorial_spaces.builders.polyhedra import TETRAHEDRON_FACES, octahedron_faces
from combinatorial_spaces.builders.surfaces import (
    build_rotation_graph_from_faces,
    build_combinatorial_map_from_faces,
)


def _digon_graph(cls=RotationGraph):
    """Two vertices of valence 2 joined by two edges (a sphere with 2 faces)."""
    g = cls()
    g.add_corolla(2)
    g.add_corolla(2)
    g.pair_half_edges(0, 2)
    g.pair_half_edges(1, 3)
    return g


def _theta(cls):
    """Theta graph: two trivalent vertices joined by three edges."""
    s = cls()
    s.add_corolla(3)
    s.add_corolla(3)
    s.pair_half_edges(0, 3)
    s.pair_half_edges(1, 5)
    s.pair_half_edges(2, 4)
    return s


# =============================================================================
# Rotation graphs
# =============================================================================

def test_trace_vertices_one_cycle_per_corolla():
    g = RotationGraph()
    g.add_corolla(3)
    g.add_corolla(2)
    cycles_v = trace_vertices(g)
    assert cycles_v == [[0, 1, 2], [3, 4]]
    assert [len(c) for c in cycles_v] == [3, 2]


def test_unpaired_graph_raises_on_alpha_and_phi():
    g = RotationGraph()
    g.add_corolla(3)
    g.add_corolla(2)
    g.pair_half_edges(0, 3)
    g.pair_half_edges(1, 4)
    assert g.unpaired_half_edges() == [2]
    assert not g.is_paired(2)
    assert g.inv(2) == UNPAIRED, "Raw pairing column is always readable"
    with pytest.raises(IncompleteStructure, match="unpaired"):
        g.phi()
    with pytest.raises(IncompleteStructure):
        g.alpha(0)
    with pytest.raises(IncompleteStructure):
        trace_edges(g)


def test_self_paired_half_edge_completes_graph():
    g = RotationGraph()
    g.add_corolla(3)
    g.add_corolla(2)
    g.pair_half_edges(0, 3)
    g.pair_half_edges(1, 4)
    g.pair_half_edges(2, 2)
    assert g.alpha().tolist() == [3, 4, 2, 0, 1]
    assert is_involution(g.alpha())
    assert g.phi().tolist() == [2, 3, 4, 1, 0]
    assert trace_faces(g) == [[0, 2, 4], [1, 3]]


def test_digon_faces():
    g = _digon_graph()
    assert phi(g).tolist() == [3, 2, 1, 0]
    assert trace_faces(g) == [[0, 3], [1, 2]]
    assert trace_edges(g) == [[0, 2], [1, 3]]


def test_composition_law_rotation_graph():
    g = build_rotation_graph_from_faces(octahedron_faces())
    s, a, p = sigma(g), alpha(g), phi(g)
    assert np.array_equal(compose(s, a, p), identity(g.nh)), "σ∘α∘ϕ must be id"


def test_sigma_cycles_partition_by_vertex():
    g = build_rotation_graph_from_faces(octahedron_faces())
    cycles_v = g.trace_vertices()
    assert len(cycles_v) == g.nv == 6
    assert sorted(h for c in cycles_v for h in c) == list(range(g.nh))
    for c in cycles_v:
        owners = {g.vertex_of(h) for h in c}
        assert len(owners) == 1, f"σ-cycle {c} spans vertices {owners}"


def test_repair_raises_and_leaves_state():
    g = RotationGraph()
    g.add_corolla(2)
    g.add_corolla(2)
    g.pair_half_edges(0, 2)
    with pytest.raises(AxiomViolation, match="already paired"):
        g.pair_half_edges(0, 3)
    assert g.inv(0) == 2
    assert g.inv(3) == UNPAIRED
    # Pairing the same two again is a no-op
    g.pair_half_edges(2, 0)
    assert g.inv().tolist() == [2, UNPAIRED, 0, UNPAIRED]


def test_pair_out_of_range():
    g = RotationGraph()
    g.add_corolla(2)
    with pytest.raises(IndexOutOfRange):
        g.pair_half_edges(0, 7)
    assert g.inv().tolist() == [UNPAIRED, UNPAIRED]


def test_phi_single_half_edge_query():
    g = _digon_graph()
    assert g.phi(1) == 2
    assert g.alpha([0, 3]).tolist() == [2, 1]
    with pytest.raises(IndexOutOfRange):
        g.phi(4)


# =============================================================================
# Rotation systems
# =============================================================================

def test_rotation_system_theta():
    s = _theta(RotationSystem)
    assert s.nv == 2
    assert s.vertex_of(4) == 1
    assert trace_edges(s) == [[0, 3], [1, 5], [2, 4]]
    assert s.phi().tolist() == [4, 3, 5, 1, 0, 2]
    assert trace_faces(s) == [[0, 4], [1, 3], [2, 5]]


def test_rotation_system_matches_rotation_graph():
    s = _theta(RotationSystem)
    g = _theta(RotationGraph)
    assert np.array_equal(s.sigma(), g.sigma())
    assert np.array_equal(s.alpha(), g.alpha())
    assert np.array_equal(s.phi(), g.phi())


def test_rotation_system_incomplete():
    s = RotationSystem()
    s.add_corolla(2)
    with pytest.raises(IncompleteStructure):
        s.phi()
    s.pair_half_edges(0, 1)
    assert trace_faces(s) == [[0], [1]]


# =============================================================================
# Hypermaps
# =============================================================================

def test_hypermap_new_half_edges_are_free():
    m = Hypermap()
    assert m.add_corolla(3) == [0, 1, 2]
    assert m.alpha().tolist() == [0, 1, 2]
    assert m.unpaired_half_edges() == [0, 1, 2]
    assert m.phi().tolist() == [2, 0, 1], "ϕ = σ⁻¹ while α = id"
    assert m.axioms_hold()


def test_hypermap_accepts_hyperedge():
    m = Hypermap()
    m.add_corolla(3)
    m.set_edge_cycle([0, 1, 2])
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        edges = trace_edges(m)
    assert edges == [[0, 1, 2]], "Hyperedges are returned as-is"
    assert m.phi().tolist() == [1, 2, 0]
    assert np.array_equal(compose(m.sigma(), m.alpha(), m.phi()), identity(3))
    assert not m.unpaired_half_edges()


def test_hypermap_overlapping_cycle_rejected():
    m = Hypermap()
    m.add_corolla(4)
    m.set_edge_cycle([0, 1])
    with pytest.raises(AxiomViolation, match="no longer be a permutation"):
        m.set_edge_cycle([1, 2])
    assert m.alpha().tolist() == [1, 0, 2, 3]


def test_hypermap_from_permutations_checks_phi():
    with pytest.raises(AxiomViolation, match="σ∘α∘ϕ"):
        Hypermap.from_permutations([1, 0], [1, 0], phi=[1, 0])
    m = Hypermap.from_permutations([1, 0], [1, 0], phi=[0, 1])
    assert m.axioms_hold()


def test_hypermap_unchecked_construction():
    m = Hypermap.from_permutations([1, 0], [1, 0], phi=[1, 0], check=False)
    assert not m.axioms_hold()
    with pytest.raises(AxiomViolation):
        m.verify_axioms()


def test_from_permutations_size_mismatch():
    with pytest.raises(ValueError, match="points"):
        Hypermap.from_permutations([0, 1], [0, 1, 2])
    with pytest.raises(ValueError, match="not a permutation"):
        Hypermap.from_permutations([0, 0], [0, 1])


# =============================================================================
# Combinatorial maps
# =============================================================================

def test_map_rejects_hyperedge():
    m = CombinatorialMap()
    m.add_corolla(3)
    with pytest.raises(AxiomViolation, match="at most 2"):
        m.set_edge_cycle([0, 1, 2])
    assert m.alpha().tolist() == [0, 1, 2]


def test_map_rejects_non_involution_input():
    with pytest.raises(AxiomViolation, match="α∘α"):
        CombinatorialMap.from_permutations([0, 1, 2], [1, 2, 0])


def test_map_matches_rotation_graph():
    m = _digon_graph(CombinatorialMap)
    g = _digon_graph(RotationGraph)
    assert np.array_equal(m.phi(), g.phi())
    assert m.trace_faces() == g.trace_faces()
    assert m.nv == 2


def test_map_repair_raises():
    m = _digon_graph(CombinatorialMap)
    before = m.alpha().tolist()
    with pytest.raises(AxiomViolation):
        m.pair_half_edges(0, 3)
    assert m.alpha().tolist() == before, "Failed mutation must not commit"


def test_map_from_tetrahedron():
    m = build_combinatorial_map_from_faces(TETRAHEDRON_FACES)
    assert m.nh == 12
    assert m.trace_faces() == [[0, 1, 2], [3, 4, 5], [6, 7, 8], [9, 10, 11]]
    assert len(m.trace_edges()) == 6
    assert all(len(c) == 3 for c in m.trace_vertices())
    assert not m.unpaired_half_edges(), "Closed surface has no free half-edges"
    for h in m.half_edges():
        assert m.sigma(m.alpha(m.phi(h))) == h, f"σ(α(ϕ({h}))) != {h}"


def test_map_equality():
    a = build_combinatorial_map_from_faces(TETRAHEDRON_FACES)
    b = build_combinatorial_map_from_faces(TETRAHEDRON_FACES)
    assert a == b
    assert a != Hypermap.from_permutations(a.sigma(), a.alpha())


# =============================================================================
# Incremental mutation (only touched rows are written)
# =============================================================================

def _ring(cls, n, **kwargs):
    """n valence-2 vertices joined in a cycle: half-edge 2k+1 pairs with 2k+2."""
    x = cls(**kwargs)
    for _ in range(n):
        x.add_corolla(2)
    for k in range(n):
        x.pair_half_edges(2 * k + 1, (2 * k + 2) % (2 * n))
    return x


@pytest.mark.parametrize("check", [True, False])
def test_incremental_phi_matches_rotation_graph(check):
    m = _ring(CombinatorialMap, 40, check=check)
    g = _ring(RotationGraph, 40)
    assert np.array_equal(m.phi(), g.phi()), "Stored ϕ must equal (σ∘α)⁻¹"
    assert m.axioms_hold()
    assert len(m.trace_faces()) == 2, "A cycle on the sphere bounds 2 faces"


def test_unchecked_mutation_writes_only_touched_rows(monkeypatch):
    m = CombinatorialMap(check=False)
    for _ in range(50):
        m.add_corolla(2)

    written = []
    original_set = m._H.set

    def recording_set(column, rows, values):
        written.append((column, len(rows)))
        original_set(column, rows, values)

    monkeypatch.setattr(m._H, 'set', recording_set)

    m.add_corolla(3)
    assert written == [], "New corollas are appended, old rows untouched"

    m.pair_half_edges(1, 2)
    assert written == [('alpha', 2), ('phi', 2)]
    assert m.axioms_hold()


def test_hyperedge_merge_keeps_phi_consistent():
    """Growing an α-cycle from a pair to a triple rewrites only its rows."""
    m = Hypermap(check=False)
    m.add_corolla(3)
    m.add_corolla(2)
    m.pair_half_edges(0, 3)
    m.set_edge_cycle([0, 3, 4])
    assert m.trace_edges() == [[0, 3, 4], [1], [2]]
    assert np.array_equal(m.phi(), invert(compose(m.sigma(), m.alpha())))
    assert m.axioms_hold()
