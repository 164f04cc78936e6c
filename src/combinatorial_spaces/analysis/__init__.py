"""
Analysis functions - depend on core and operators layers.

Separated from builders to maintain clean layering:
    builders → core → spec
    analysis → operators → core → spec

Includes:
- verify_topology: validity predicates, Euler characteristic, genus,
  connected components, Betti numbers
"""

from .verify_topology import (
    is_valid_rotation_graph,
    is_valid_rotation_system,
    is_valid_hypermap,
    is_semi_simplicial,
    is_involution,
    euler_characteristic,
    count_connected_components,
    genus,
    betti_numbers,
)
