"""
Combinatorial Maps and Related Structures
=========================================

An *embedded graph* is a graph drawn on an oriented surface, up to
orientation-preserving homeomorphism. It is encoded by permutations of its
half-edges:

    σ  vertex permutation   next half-edge around the same vertex
    α  edge permutation     the other half of the same edge
    ϕ  face permutation     next half-edge around the same face

tied together by the composition law (right-to-left, see permutations.py)

    σ∘α∘ϕ = id      i.e.   σ[α[ϕ[h]]] == h,   so   ϕ = (σ∘α)⁻¹

STRUCTURES:
    RotationGraph     half-edge store + σ + inv (pairing column, gives α)
    RotationSystem    σ + α only; vertices are recovered from σ's cycles
    Hypermap          σ, α, ϕ all stored; α arbitrary
    CombinatorialMap  Hypermap with α∘α = id

For RotationGraph/RotationSystem ϕ is recomputed on every query, never
cached. For Hypermap/CombinatorialMap ϕ is stored and each mutation rewrites
only the rows it touches, O(changed half-edges); with check=True the axioms
are also verified on the full candidate arrays before anything is committed.

CONSTRUCTION (two phases):
    1. add_corolla(valence) repeatedly   fixes σ (and vertex ownership)
    2. pair_half_edges(h, h2)            sets α(h) = h2, α(h2) = h

    Querying α or ϕ of a rotation graph/system while a half-edge is still
    unpaired raises IncompleteStructure.
"""

from typing import List

import numpy as np

from ..spec.constants import CHECK_AXIOMS, INDEX_DTYPE, UNPAIRED
from ..spec.errors import AxiomViolation, IncompleteStructure, check_count, check_index
from .half_edges import HalfEdgeStore
from .permutations import (
    as_permutation_array,
    check_permutation,
    compose,
    cycle_successors,
    cycles,
    identity,
    invert,
    is_permutation,
    sortperm,
)
from .tables import ColumnTable


def _select(values: np.ndarray, h, what: str = "half-edge"):
    """Whole array for h=None, one int for a scalar h, else a sub-array."""
    if h is None:
        return values
    if np.isscalar(h):
        return int(values[check_index(h, len(values), what)])
    return values[[check_index(i, len(values), what) for i in h]]


def _require_paired(partner: np.ndarray, structure: str) -> np.ndarray:
    unpaired = np.flatnonzero(partner == UNPAIRED)
    if len(unpaired) > 0:
        raise IncompleteStructure(
            f"{structure}: {len(unpaired)} half-edge(s) unpaired, "
            f"first is {int(unpaired[0])}. Pair every half-edge before querying α or ϕ."
        )
    return partner


def _pair(table: ColumnTable, column: str, h, h2) -> None:
    """Symmetric pairing on `column`, refusing to re-pair a half-edge."""
    h = table.check_row(h)
    h2 = table.check_row(h2)
    for a, b in ((h, h2), (h2, h)):
        current = table.get(column, a)
        if current != UNPAIRED and current != b:
            raise AxiomViolation(
                f"Half-edge {a} is already paired with {current}; "
                f"pairing it with {b} would break α∘α = id"
            )
    table.set(column, [h, h2], [h2, h])


class _SurfaceMixin:
    """Tracing shared by every structure exposing sigma/alpha/phi."""

    def trace_vertices(self) -> List[List[int]]:
        """One cycle of σ per vertex."""
        return cycles(self.sigma())

    def trace_edges(self) -> List[List[int]]:
        """
        Cycles of α. Pairs (or fixed points) for rotation structures and
        combinatorial maps; arbitrary lengths for hypermaps.
        """
        return cycles(self.alpha())

    def trace_faces(self) -> List[List[int]]:
        """One cycle of ϕ per face, half-edges in traversal order."""
        return cycles(self.phi())

    def vertex_labels(self) -> np.ndarray:
        """labels[h] = index of the σ-cycle containing h."""
        labels = np.empty(self.nh, dtype=INDEX_DTYPE)
        for k, cycle in enumerate(self.trace_vertices()):
            labels[cycle] = k
        return labels

    def is_paired(self, h) -> bool:
        return self._partner(h) != UNPAIRED

    def unpaired_half_edges(self) -> List[int]:
        return [int(h) for h in np.flatnonzero(self._partner() == UNPAIRED)]


# =============================================================================
# ROTATION GRAPHS
# =============================================================================

class RotationGraph(_SurfaceMixin, HalfEdgeStore):
    """
    Half-edge graph with a rotation σ at each vertex.

    Vertex ownership is an indexed column, so half_edges_of(v) is O(valence).
    α is the `inv` pairing column; ϕ = sortperm(σ∘α).
    """

    @classmethod
    def _half_edge_columns(cls) -> tuple:
        return ('vertex', 'sigma', 'inv')

    def _partner(self, h=None):
        return self._H.get('inv', h)

    def inv(self, h=None):
        """Raw pairing column; UNPAIRED where no partner is set yet."""
        return self._H.get('inv', h)

    def pair_half_edges(self, h: int, h2: int) -> None:
        """Pair h and h2 into an edge: inv[h] = h2, inv[h2] = h."""
        _pair(self._H, 'inv', h, h2)

    def alpha(self, h=None):
        inv = _require_paired(self._H.get('inv'), type(self).__name__)
        return _select(inv, h)

    def phi(self, h=None):
        return _select(sortperm(compose(self.sigma(), self.alpha())), h)


# =============================================================================
# ROTATION SYSTEMS
# =============================================================================

class RotationSystem(_SurfaceMixin):
    """
    Permutations σ and α on half-edges, no vertex table.

    Vertices are the cycles of σ: nv and vertex_of are derived on demand.
    """

    def __init__(self):
        self._H = ColumnTable('half-edge', columns=('sigma', 'alpha'))

    @property
    def nh(self) -> int:
        return len(self._H)

    @property
    def nv(self) -> int:
        return len(self.trace_vertices())

    def half_edges(self) -> range:
        return self._H.rows()

    def add_corolla(self, valence: int) -> List[int]:
        """Add `valence` half-edges forming one new σ-cycle; return them."""
        valence = check_count(valence, "Corolla valence")
        n = self.nh
        new = np.arange(n, n + valence)
        return list(self._H.add_rows(valence, sigma=np.roll(new, -1)))

    def pair_half_edges(self, h: int, h2: int) -> None:
        _pair(self._H, 'alpha', h, h2)

    def _partner(self, h=None):
        return self._H.get('alpha', h)

    def sigma(self, h=None):
        return self._H.get('sigma', h)

    def alpha(self, h=None):
        alpha = _require_paired(self._H.get('alpha'), type(self).__name__)
        return _select(alpha, h)

    def phi(self, h=None):
        return _select(sortperm(compose(self.sigma(), self.alpha())), h)

    def vertex_of(self, h: int) -> int:
        self._H.check_row(h)
        return int(self.vertex_labels()[h])

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._H == other._H


# =============================================================================
# HYPERMAPS AND COMBINATORIAL MAPS
# =============================================================================

class Hypermap(_SurfaceMixin):
    """
    Independent generators σ, α, ϕ subject to σ∘α∘ϕ = id.

    New half-edges start free (α fixes them), so ϕ is always defined.
    Every mutation keeps ϕ = (σ∘α)⁻¹ by rewriting the touched rows only.
    With check=True the laws are also verified on the full candidate arrays
    and AxiomViolation is raised before anything is written.
    """

    def __init__(self, check: bool = CHECK_AXIOMS):
        self.check = check
        self._H = ColumnTable('half-edge', columns=('sigma', 'alpha', 'phi'))

    @classmethod
    def from_permutations(cls, sigma, alpha, phi=None, check: bool = CHECK_AXIOMS):
        """
        Build from explicit generators.

        Args:
            sigma, alpha: permutation arrays of equal length
            phi: optional face permutation; derived as (σ∘α)⁻¹ if omitted
            check: verify the axioms now and after every later mutation

        Raises:
            ValueError: if an argument is not a permutation or sizes differ
            AxiomViolation: if check is on and a law fails
        """
        sigma = check_permutation(sigma, "σ")
        alpha = check_permutation(alpha, "α")
        if len(alpha) != len(sigma):
            raise ValueError(f"σ has {len(sigma)} points but α has {len(alpha)}")
        if phi is None:
            phi = invert(compose(sigma, alpha))
        else:
            phi = check_permutation(phi, "ϕ")
            if len(phi) != len(sigma):
                raise ValueError(f"σ has {len(sigma)} points but ϕ has {len(phi)}")

        m = cls(check=check)
        if check:
            m._verify(sigma, alpha, phi)
        m._H.add_rows(len(sigma), sigma=sigma, alpha=alpha, phi=phi)
        return m

    # -------------------------------------------------------------- axioms

    def _axiom_errors(self, sigma, alpha, phi) -> List[str]:
        errors = []
        for name, p in (("σ", sigma), ("α", alpha), ("ϕ", phi)):
            if not is_permutation(p):
                errors.append(f"{name} is not a permutation")
        if errors:
            return errors
        bad = np.flatnonzero(compose(sigma, alpha, phi) != identity(len(sigma)))
        if len(bad) > 0:
            errors.append(
                f"σ∘α∘ϕ ≠ id at {len(bad)} half-edge(s), first is {int(bad[0])}"
            )
        return errors

    def axioms_hold(self) -> bool:
        return not self._axiom_errors(self.sigma(), self._partner(), self.phi())

    def _verify(self, sigma, alpha, phi) -> None:
        errors = self._axiom_errors(sigma, alpha, phi)
        if errors:
            raise AxiomViolation(f"{type(self).__name__}: {'; '.join(errors)}")

    def verify_axioms(self) -> None:
        """Raise AxiomViolation listing every failed law."""
        self._verify(self.sigma(), self._partner(), self.phi())

    # -------------------------------------------------------------- build

    @property
    def nh(self) -> int:
        return len(self._H)

    @property
    def nv(self) -> int:
        return len(self.trace_vertices())

    def half_edges(self) -> range:
        return self._H.rows()

    def add_corolla(self, valence: int) -> List[int]:
        """
        Add `valence` free half-edges forming one new σ-cycle; return them.

        Only new rows are written. On a free corolla α = id, so ϕ = σ⁻¹ on the
        block and the laws hold without looking at the rest of the map.
        """
        valence = check_count(valence, "Corolla valence")
        n = self.nh
        new = np.arange(n, n + valence, dtype=INDEX_DTYPE)
        rows = self._H.add_rows(valence, sigma=np.roll(new, -1), alpha=new,
                                phi=np.roll(new, 1))
        return list(rows)

    def set_edge_cycle(self, half_edges) -> None:
        """
        Make α cycle the given half-edges: h0 → h1 → ... → h0.

        Generalises pair_half_edges to hyperedges. The result must still be a
        permutation, so the half-edges must be a union of current α-cycles
        (a half-edge can only leave its α-cycle if the whole cycle is
        rewritten).

        Only the rewritten rows of α and the matching rows of ϕ are written:
            α[h] = next(h),   ϕ[σ[α[h]]] = h
        With check=True the laws are verified on the full candidate arrays
        first.
        """
        half_edges = [check_index(h, self.nh, "half-edge") for h in half_edges]
        if not half_edges:
            return
        if len(set(half_edges)) != len(half_edges):
            raise ValueError(f"Edge cycle repeats a half-edge: {half_edges}")

        if set(self._partner(half_edges).tolist()) != set(half_edges):
            raise AxiomViolation(
                f"Cycle {half_edges} overlaps an existing α-cycle; "
                f"α would no longer be a permutation"
            )
        points, images = cycle_successors(half_edges)

        if self.check:
            alpha = self._partner().copy()
            alpha[points] = images
            sigma = self.sigma()
            self._verify(sigma, alpha, invert(compose(sigma, alpha)))

        self._H.set('alpha', points, images)
        self._H.set('phi', self._H.get('sigma', images), points)

    def pair_half_edges(self, h: int, h2: int) -> None:
        """α(h) = h2 and α(h2) = h."""
        if h == h2:
            self.set_edge_cycle([h])
        else:
            self.set_edge_cycle([h, h2])

    # -------------------------------------------------------------- queries

    def _partner(self, h=None):
        return self._H.get('alpha', h)

    def is_paired(self, h) -> bool:
        return self._partner(h) != self._H.check_row(h)

    def unpaired_half_edges(self) -> List[int]:
        alpha = self._partner()
        return [int(h) for h in np.flatnonzero(alpha == np.arange(len(alpha)))]

    def sigma(self, h=None):
        return self._H.get('sigma', h)

    def alpha(self, h=None):
        return self._H.get('alpha', h)

    def phi(self, h=None):
        return self._H.get('phi', h)

    def vertex_of(self, h: int) -> int:
        self._H.check_row(h)
        return int(self.vertex_labels()[h])

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._H == other._H


class CombinatorialMap(Hypermap):
    """Hypermap whose edge permutation is an involution: α∘α = id."""

    def _axiom_errors(self, sigma, alpha, phi) -> List[str]:
        errors = super()._axiom_errors(sigma, alpha, phi)
        alpha = as_permutation_array(alpha)
        if is_permutation(alpha):
            bad = np.flatnonzero(alpha[alpha] != np.arange(len(alpha)))
            if len(bad) > 0:
                errors.append(
                    f"α∘α ≠ id at {len(bad)} half-edge(s), first is {int(bad[0])}"
                )
        return errors

    def set_edge_cycle(self, half_edges) -> None:
        if len(half_edges) > 2:
            raise AxiomViolation(
                f"Combinatorial map edges have at most 2 half-edges, got {list(half_edges)}"
            )
        super().set_edge_cycle(half_edges)


# =============================================================================
# FUNCTIONAL INTERFACE
# =============================================================================

def sigma(x, h=None):
    """Vertex permutation of a rotation graph, rotation system or map."""
    return x.sigma(h)


def alpha(x, h=None):
    """Edge permutation of a rotation graph, rotation system or map."""
    return x.alpha(h)


def phi(x, h=None):
    """Face permutation of a rotation graph, rotation system or map."""
    return x.phi(h)


def trace_vertices(x) -> List[List[int]]:
    """Trace vertices, returning a list of σ-cycles."""
    return x.trace_vertices()


def trace_edges(x) -> List[List[int]]:
    """
    Trace edges, returning a list of α-cycles.

    Usually these are pairs of half-edges, but in a hypermap the cycles can
    have any length.
    """
    return x.trace_edges()


def trace_faces(x) -> List[List[int]]:
    """Trace faces, returning a list of ϕ-cycles."""
    return x.trace_faces()
