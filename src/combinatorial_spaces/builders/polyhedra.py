"""
Polyhedral Surfaces
===================

Small closed and open triangulated surfaces used as fixtures and examples.

SURFACES INCLUDED:
    - Tetrahedron (V=4, E=6, F=4), χ = 2
    - Octahedron (V=6, E=12, F=8), χ = 2
    - Triangulated square (V=4, E=5, F=2), χ = 1, open disk
    - n × n torus (V=n², E=3n², F=2n²), χ = 0

Each raw builder returns (complex, points); the *_mesh wrappers return mesh
dicts. Oriented face lists (outward normals, each directed edge used once)
are exported for the half-edge builders in surfaces.py.
"""

import numpy as np
from typing import List, Tuple

from ..core.simplicial_sets import SemiSimplicialSet2D
from .mesh import make_mesh
from .surfaces import build_semi_simplicial_set


# Outward-oriented: every directed edge appears exactly once
TETRAHEDRON_FACES = [[0, 1, 2], [0, 3, 1], [0, 2, 3], [1, 3, 2]]


def octahedron_faces() -> List[List[int]]:
    """
    Outward-oriented octahedron faces.

    Vertex 2a is +e_a, vertex 2a+1 is -e_a. Octant (sx, sy, sz) spans one
    vertex per axis; (X, Y, Z) is counterclockwise seen from outside when
    sx·sy·sz > 0, otherwise (X, Z, Y) is.
    """
    faces = []
    for sx in (1, -1):
        for sy in (1, -1):
            for sz in (1, -1):
                x = 0 if sx > 0 else 1
                y = 2 if sy > 0 else 3
                z = 4 if sz > 0 else 5
                faces.append([x, y, z] if sx * sy * sz > 0 else [x, z, y])
    return faces


def build_tetrahedron_surface() -> Tuple[SemiSimplicialSet2D, np.ndarray]:
    """
    Boundary of the regular tetrahedron inscribed in the cube [-1, 1]³.

    TOPOLOGY:
        V = 4, E = 6, F = 4
        χ = V - E + F = 2

    Triangles are glued sorted, so every edge has src < tgt.

    Returns:
        s: SemiSimplicialSet2D
        points: (4, 3) array
    """
    points = np.array([
        (1, 1, 1), (1, -1, -1), (-1, 1, -1), (-1, -1, 1),
    ], dtype=float)
    s = build_semi_simplicial_set(4, TETRAHEDRON_FACES, sort=True)

    if (s.nv, s.ne, s.ntriangles) != (4, 6, 4):
        raise ValueError(f"Expected (4, 6, 4), got {(s.nv, s.ne, s.ntriangles)}")
    return s, points


def build_octahedron_surface() -> Tuple[SemiSimplicialSet2D, np.ndarray]:
    """
    Boundary of the regular octahedron with vertices ±e_x, ±e_y, ±e_z.

    TOPOLOGY:
        V = 6, E = 12, F = 8
        χ = V - E + F = 2

    Returns:
        s: SemiSimplicialSet2D
        points: (6, 3) array
    """
    points = np.array([
        (1, 0, 0), (-1, 0, 0),
        (0, 1, 0), (0, -1, 0),
        (0, 0, 1), (0, 0, -1),
    ], dtype=float)
    s = build_semi_simplicial_set(6, octahedron_faces(), sort=True)

    if (s.nv, s.ne, s.ntriangles) != (6, 12, 8):
        raise ValueError(f"Expected (6, 12, 8), got {(s.nv, s.ne, s.ntriangles)}")
    return s, points


def build_triangulated_square() -> Tuple[SemiSimplicialSet2D, np.ndarray]:
    """
    Unit square split along its diagonal 0-2 (a commutative square).

        3 ──── 2
        │    ╱ │
        │  ╱   │
        0 ──── 1

    Triangles glue_triangle(0, 1, 2) and glue_triangle(0, 3, 2), so the
    edge set is (0,1), (1,2), (0,2), (0,3), (3,2).

    Returns:
        s: SemiSimplicialSet2D
        points: (4, 2) array
    """
    points = np.array([(0, 0), (1, 0), (1, 1), (0, 1)], dtype=float)
    s = build_semi_simplicial_set(4, [(0, 1, 2), (0, 3, 2)], sort=False)
    return s, points


def build_tetrahedron_mesh() -> dict:
    s, points = build_tetrahedron_surface()
    return make_mesh(s, points, name="tetrahedron")


def build_octahedron_mesh() -> dict:
    s, points = build_octahedron_surface()
    return make_mesh(s, points, name="octahedron")


def build_square_mesh() -> dict:
    s, points = build_triangulated_square()
    return make_mesh(s, points, name="square")


def torus_faces(n: int = 3) -> List[List[int]]:
    """
    Oriented triangulation of the n × n square torus.

    Vertex (i, j) has index n·(i mod n) + (j mod n). Square (i, j) is split
    along its diagonal into (a, b, c) and (a, c, d):

        d ──── c        a = (i, j)      b = (i+1, j)
        │    ╱ │        c = (i+1, j+1)  d = (i, j+1)
        │  ╱   │
        a ──── b

    TOPOLOGY:
        V = n², E = 3n², F = 2n²,  χ = 0

    Raises:
        ValueError: if n < 3 (opposite sides would share directed segments)
    """
    if n < 3:
        raise ValueError(f"Torus triangulation requires n >= 3, got n={n}")

    def idx(i, j):
        return n * (i % n) + (j % n)

    faces = []
    for i in range(n):
        for j in range(n):
            a, b, c, d = idx(i, j), idx(i + 1, j), idx(i + 1, j + 1), idx(i, j + 1)
            faces.append([a, b, c])
            faces.append([a, c, d])
    return faces


def build_torus_surface(n: int = 3, R: float = 2.0, r: float = 1.0) \
        -> Tuple[SemiSimplicialSet2D, np.ndarray]:
    """
    Triangulated torus of revolution (major radius R, minor radius r).

    Returns:
        s: SemiSimplicialSet2D with sorted triangles
        points: (n², 3) array
    """
    faces = torus_faces(n)
    u = 2 * np.pi * np.repeat(np.arange(n), n) / n
    v = 2 * np.pi * np.tile(np.arange(n), n) / n
    points = np.column_stack([
        (R + r * np.cos(v)) * np.cos(u),
        (R + r * np.cos(v)) * np.sin(u),
        r * np.sin(v),
    ])
    s = build_semi_simplicial_set(n * n, faces, sort=True)

    expected = (n * n, 3 * n * n, 2 * n * n)
    if (s.nv, s.ne, s.ntriangles) != expected:
        raise ValueError(f"Expected {expected}, got {(s.nv, s.ne, s.ntriangles)}")
    return s, points


def build_torus_mesh(n: int = 3) -> dict:
    s, points = build_torus_surface(n)
    return make_mesh(s, points, name=f"torus_{n}")
