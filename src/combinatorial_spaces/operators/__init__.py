"""Incidence (boundary) matrices of semi-simplicial sets."""

from .incidence import (
    build_d0,
    build_d1,
    build_incidence_matrices,
    verify_faces_per_edge,
)
