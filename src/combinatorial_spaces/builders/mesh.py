"""
Mesh Export
===========

The single geometry handoff to plotting code. Coordinates are external to
the complexes: the caller supplies one point per vertex and gets back a
contract-compliant mesh dict (see spec/structures.py).

    s, points = build_tetrahedron_surface()
    mesh = make_mesh(s, points, name="tetrahedron")
    mesh['V']   (4, 3) float array
    mesh['E']   [(src, tgt), ...]
    mesh['F']   [[v0, v1, v2], ...]   one per triangle
"""

import warnings

import numpy as np

from ..spec.constants import POINT_DTYPE
from ..spec.structures import create_mesh


def make_mesh(s, points, name: str = "unnamed") -> dict:
    """
    Export a semi-simplicial set with vertex coordinates as a mesh dict.

    Args:
        s: SemiSimplicialSet1D or SemiSimplicialSet2D
        points: (nv, 2) or (nv, 3) coordinates, row v for vertex v
        name: Human-readable name

    Returns:
        Contract-compliant mesh dict (F is empty for 1D sets)

    Raises:
        ValueError: if points do not match the vertex count
    """
    V = np.asarray(points, dtype=POINT_DTYPE)
    if V.ndim != 2 or len(V) != s.nv:
        raise ValueError(
            f"Need one point per vertex: {s.nv} vertices, points shape {V.shape}"
        )

    E = list(zip(s.src().tolist(), s.tgt().tolist()))

    F = []
    if hasattr(s, 'ntriangles'):
        F = [list(s.triangle_vertices(t)) for t in s.triangles()]
        if F:
            covered = {v for face in F for v in face}
            loose = s.nv - len(covered)
            if loose > 0:
                warnings.warn(
                    f"{loose} vertex/vertices of '{name}' lie on no triangle "
                    f"and will only appear as points",
                    stacklevel=2,
                )

    return create_mesh(V, E, F, name=name)
