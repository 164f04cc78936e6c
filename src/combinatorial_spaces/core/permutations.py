"""
Permutation Algebra
===================

Finite permutations of {0, ..., n-1} stored as integer arrays: p[i] is the
image of i.

COMPOSITION CONVENTION (right-to-left, like function composition):
    compose(p, q)[i] = p[q[i]]      apply q first, then p

    This is the order the surface axioms are written in:
        σ∘α∘ϕ = id   means   σ[α[ϕ[h]]] == h   for every half-edge h

CYCLES:
    cycles(p) is deterministic. A new cycle always starts at the smallest
    element not yet visited, and each cycle lists i, p[i], p[p[i]], ...

    Example:
        p = [1, 2, 0, 4, 3]
        cycles(p) = [[0, 1, 2], [3, 4]]

REFERENCE: the face/edge/vertex permutation encoding of embedded graphs,
    see Lando & Zvonkin, "Graphs on Surfaces and Their Applications".
"""

import numpy as np
from typing import List, Tuple

from ..spec.constants import INDEX_DTYPE


def as_permutation_array(p) -> np.ndarray:
    """Return `p` as a 1-D intp array (no validation)."""
    arr = np.asarray(p, dtype=INDEX_DTYPE)
    if arr.ndim != 1:
        raise ValueError(f"Permutation must be 1-D, got shape {arr.shape}")
    return arr


def identity(n: int) -> np.ndarray:
    """Identity permutation on n points."""
    if n < 0:
        raise ValueError(f"Permutation size must be >= 0, got {n}")
    return np.arange(n, dtype=INDEX_DTYPE)


def is_permutation(p) -> bool:
    """True if p is a bijection of {0, ..., len(p)-1}."""
    arr = as_permutation_array(p)
    n = len(arr)
    if n == 0:
        return True
    if arr.min() < 0 or arr.max() >= n:
        return False
    seen = np.zeros(n, dtype=bool)
    seen[arr] = True
    return bool(seen.all())


def check_permutation(p, name: str = "p") -> np.ndarray:
    """
    Validate and return p as an array.

    Raises:
        ValueError: if p is not a bijection of {0, ..., len(p)-1}
    """
    arr = as_permutation_array(p)
    if not is_permutation(arr):
        raise ValueError(f"{name} is not a permutation of 0..{len(arr)-1}: {arr.tolist()}")
    return arr


def invert(p) -> np.ndarray:
    """
    Inverse permutation, single pass: inv[p[i]] = i.

    Args:
        p: permutation array

    Returns:
        p⁻¹ as intp array
    """
    arr = as_permutation_array(p)
    inv = np.empty_like(arr)
    inv[arr] = np.arange(len(arr), dtype=INDEX_DTYPE)
    return inv


def compose(*perms) -> np.ndarray:
    """
    Compose permutations right-to-left.

        compose(p, q)[i]    = p[q[i]]
        compose(p, q, r)[i] = p[q[r[i]]]

    All arguments must have the same length.
    """
    if not perms:
        raise ValueError("compose() needs at least one permutation")
    arrays = [as_permutation_array(p) for p in perms]
    n = len(arrays[0])
    for k, arr in enumerate(arrays):
        if len(arr) != n:
            raise ValueError(
                f"Cannot compose permutations of different sizes: "
                f"argument 0 has {n}, argument {k} has {len(arr)}"
            )
    result = arrays[-1]
    for arr in reversed(arrays[:-1]):
        result = arr[result]
    return result


def sortperm(p) -> np.ndarray:
    """
    Indices that sort p in ascending order: q with p[q[0]] <= p[q[1]] <= ...

    For a permutation this is exactly its inverse, q[p[i]] = i. It is kept
    as a separate name because face permutations are classically written
    ϕ = sortperm(σ∘α).
    """
    return np.argsort(as_permutation_array(p), kind='stable').astype(INDEX_DTYPE)


def cycles(p) -> List[List[int]]:
    """
    Disjoint cycle decomposition.

    Cycles start at the smallest unvisited element; fixed points are
    returned as 1-cycles.

    Raises:
        ValueError: if p is not a permutation (a cycle would never close)
    """
    arr = check_permutation(p)
    n = len(arr)
    visited = np.zeros(n, dtype=bool)
    result = []
    for start in range(n):
        if visited[start]:
            continue
        cycle = []
        i = start
        while not visited[i]:
            visited[i] = True
            cycle.append(i)
            i = int(arr[i])
        result.append(cycle)
    return result


def cycle_type(p) -> List[int]:
    """Cycle lengths, sorted descending (a partition of len(p))."""
    return sorted((len(c) for c in cycles(p)), reverse=True)


def fixed_points(p) -> np.ndarray:
    """Points i with p[i] == i."""
    arr = as_permutation_array(p)
    return np.flatnonzero(arr == np.arange(len(arr)))


def is_involution(p) -> bool:
    """True if p is a permutation with p∘p = id."""
    arr = as_permutation_array(p)
    if not is_permutation(arr):
        return False
    return bool(np.array_equal(arr[arr], np.arange(len(arr))))


def cycle_successors(elements) -> Tuple[List[int], List[int]]:
    """
    The cycle e0 → e1 → ... → e0 as (points, images).

    Example:
        cycle_successors([3, 1, 2]) = ([3, 1, 2], [1, 2, 3])

    Raises:
        ValueError: if an element repeats
    """
    elements = [int(e) for e in elements]
    if len(set(elements)) != len(elements):
        raise ValueError(f"Cycle repeats an element: {elements}")
    return elements, elements[1:] + elements[:1]


def cycle_permutation(elements, n: int) -> np.ndarray:
    """
    Permutation on n points that cycles `elements` (e0 → e1 → ... → e0)
    and fixes everything else.
    """
    p = identity(n)
    points, images = cycle_successors(elements)
    p[points] = images
    return p
