"""
Builders - construction of complexes and mesh export.

EXPORTS:
- Mesh export: make_mesh (returns mesh dicts)
- Polyhedra: build_*_surface (return complex, points), build_*_mesh
- From faces: build_rotation_graph_from_faces, build_rotation_system_from_faces,
  build_combinatorial_map_from_faces, build_semi_simplicial_set
"""

# === Mesh export ===
from .mesh import make_mesh

# === Polyhedra ===
from .polyhedra import (
    TETRAHEDRON_FACES,
    octahedron_faces,
    build_tetrahedron_surface,
    build_octahedron_surface,
    build_triangulated_square,
    build_tetrahedron_mesh,
    build_octahedron_mesh,
    build_square_mesh,
    torus_faces,
    build_torus_surface,
    build_torus_mesh,
)

# === Half-edge structures from faces ===
from .surfaces import (
    half_edge_permutations,
    build_rotation_graph_from_faces,
    build_rotation_system_from_faces,
    build_combinatorial_map_from_faces,
    build_semi_simplicial_set,
)
