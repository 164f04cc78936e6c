"""
Half-Edge Structures from Face Lists
====================================

Convert an oriented polygon list of a closed surface into a rotation graph,
rotation system or combinatorial map.

HALF-EDGE CONVENTION:
    Every directed face segment u → v is one half-edge, owned by its head v.

        α(u→v) = v→u                      (twin)
        σ(w→v) = u→v   for consecutive u → v → w in a face
        ϕ(u→v) = v→w                      (next segment of the same face)

    With these, σ[α[ϕ[h]]] == h: the face cycles of the map are exactly the
    input polygons.

REQUIREMENTS (fail-fast, ValueError):
    - every face has >= 3 distinct vertices
    - every directed segment appears at most once (consistent orientation)
    - every segment has a twin (closed surface)
    - each vertex has a single ring of faces (manifold vertex)
"""

import numpy as np
from typing import Dict, List, Tuple

from ..spec.constants import CHECK_AXIOMS, INDEX_DTYPE
from ..core.combinatorial_maps import CombinatorialMap, RotationGraph, RotationSystem
from ..core.permutations import cycles
from ..core.simplicial_sets import SemiSimplicialSet2D


def half_edge_permutations(faces) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Build σ, α and the head vertex of each half-edge from oriented faces.

    Half-edges are numbered face by face, segment by segment.

    Args:
        faces: list of vertex cycles, consistently oriented

    Returns:
        sigma: vertex permutation
        alpha: edge involution (fixed-point free)
        head: head[h] = vertex owning half-edge h
    """
    darts: Dict[Tuple[int, int], int] = {}
    segments: List[Tuple[int, int]] = []

    for f_idx, face in enumerate(faces):
        face = [int(v) for v in face]
        if len(face) < 3:
            raise ValueError(f"Face {f_idx} has < 3 vertices: {face}")
        if len(set(face)) != len(face):
            raise ValueError(f"Face {f_idx} repeats a vertex: {face}")
        n = len(face)
        for k in range(n):
            key = (face[k], face[(k + 1) % n])
            if key in darts:
                raise ValueError(
                    f"Segment {key[0]}->{key[1]} used twice (face {f_idx}); "
                    f"faces are not consistently oriented"
                )
            darts[key] = len(segments)
            segments.append(key)

    n_half = len(segments)
    alpha = np.empty(n_half, dtype=INDEX_DTYPE)
    head = np.empty(n_half, dtype=INDEX_DTYPE)
    for h, (u, v) in enumerate(segments):
        twin = darts.get((v, u))
        if twin is None:
            raise ValueError(f"Segment {u}->{v} has no twin; the surface must be closed")
        alpha[h] = twin
        head[h] = v

    sigma = np.empty(n_half, dtype=INDEX_DTYPE)
    for face in faces:
        face = [int(v) for v in face]
        n = len(face)
        for k in range(n):
            u, v, w = face[k - 1], face[k], face[(k + 1) % n]
            sigma[darts[(w, v)]] = darts[(u, v)]

    # One σ-cycle per vertex, otherwise the vertex is pinched
    rings: Dict[int, int] = {}
    for cycle in cycles(sigma):
        v = int(head[cycle[0]])
        rings[v] = rings.get(v, 0) + 1
    pinched = sorted(v for v, count in rings.items() if count > 1)
    if pinched:
        raise ValueError(f"Vertices {pinched} have more than one ring of faces")

    return sigma, alpha, head


def _corolla_blocks(sigma: np.ndarray, head: np.ndarray) -> List[List[int]]:
    """σ-cycles ordered by head vertex, each starting at its smallest half-edge."""
    by_vertex = {int(head[c[0]]): c for c in cycles(sigma)}
    return [by_vertex[v] for v in sorted(by_vertex)]


def _build_by_corollas(structure, faces):
    sigma, alpha, head = half_edge_permutations(faces)
    relabel = np.empty(len(sigma), dtype=INDEX_DTYPE)
    for block in _corolla_blocks(sigma, head):
        new = structure.add_corolla(len(block))
        relabel[block] = new
    for h in range(len(alpha)):
        if h < alpha[h]:
            structure.pair_half_edges(int(relabel[h]), int(relabel[alpha[h]]))
    return structure


def build_rotation_graph_from_faces(faces) -> RotationGraph:
    """
    Rotation graph of a closed oriented surface, built corolla by corolla.

    Vertices are numbered in ascending order of the labels used in `faces`.
    """
    return _build_by_corollas(RotationGraph(), faces)


def build_rotation_system_from_faces(faces) -> RotationSystem:
    """Rotation system of a closed oriented surface, built corolla by corolla."""
    return _build_by_corollas(RotationSystem(), faces)


def build_combinatorial_map_from_faces(faces, check: bool = CHECK_AXIOMS) -> CombinatorialMap:
    """
    Combinatorial map of a closed oriented surface.

    Half-edges keep the face-by-face numbering of half_edge_permutations,
    so trace_faces returns the input polygons as consecutive blocks.
    """
    sigma, alpha, _ = half_edge_permutations(faces)
    return CombinatorialMap.from_permutations(sigma, alpha, check=check)


def build_semi_simplicial_set(n_vertices: int, triangles, sort: bool = False) -> SemiSimplicialSet2D:
    """
    Glue triangles onto n_vertices fresh vertices.

    Args:
        n_vertices: number of vertices
        triangles: iterable of (v0, v1, v2)
        sort: use glue_sorted_triangle instead of glue_triangle
    """
    s = SemiSimplicialSet2D()
    s.add_vertices(n_vertices)
    glue = s.glue_sorted_triangle if sort else s.glue_triangle
    for v0, v1, v2 in triangles:
        glue(v0, v1, v2)
    return s
