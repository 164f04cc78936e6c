"""Constants, error taxonomy and the mesh contract."""

from .constants import (
    INDEX_DTYPE,
    POINT_DTYPE,
    UNPAIRED,
    CHECK_AXIOMS,
    EPS_CLOSE,
)
from .errors import (
    CombinatorialError,
    IndexOutOfRange,
    DegenerateSimplex,
    IncompleteStructure,
    AxiomViolation,
)
from .structures import canonical_face, validate_mesh, create_mesh, MeshContract
