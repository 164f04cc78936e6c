"""
COMBINATORIAL_SPACES - Incidence structures for combinatorial surfaces
======================================================================

NO geometry kernels. NO plotting. Coordinates only cross the mesh export.

Structure:
    spec/       - Constants, error taxonomy, mesh contract
    core/       - Indexed tables, permutations, rotation graphs/systems,
                  hypermaps, combinatorial maps, semi-simplicial sets
    operators/  - Incidence matrices d0, d1
    builders/   - Polyhedra, structures from faces, mesh export
    analysis/   - Validity predicates and topological invariants

Requirements:
    Python >= 3.9
    numpy >= 1.20
    scipy >= 1.11
"""

import sys

# Python version check
if sys.version_info < (3, 9):
    raise ImportError(f"combinatorial_spaces requires Python >= 3.9, got {sys.version}")

# scipy version check (sparse csgraph / csr interfaces)
import scipy
_scipy_version = tuple(int(p) for p in scipy.__version__.split('.')[:2] if p.isdigit())
if _scipy_version < (1, 11):
    raise ImportError(f"combinatorial_spaces requires scipy >= 1.11, got {scipy.__version__}")

# numpy version check
import numpy as np
_numpy_version = tuple(int(p) for p in np.__version__.split('.')[:2] if p.isdigit())
if _numpy_version < (1, 20):
    raise ImportError(f"combinatorial_spaces requires numpy >= 1.20, got {np.__version__}")

__version__ = "0.1.0"

from . import spec
from . import core
from . import operators
from . import builders
from . import analysis

from .spec.errors import (
    CombinatorialError,
    IndexOutOfRange,
    DegenerateSimplex,
    IncompleteStructure,
    AxiomViolation,
)
from .core import (
    RotationGraph,
    RotationSystem,
    Hypermap,
    CombinatorialMap,
    SemiSimplicialSet1D,
    SemiSimplicialSet2D,
    trace_vertices,
    trace_edges,
    trace_faces,
    is_semi_simplicial,
)
from .builders import make_mesh
