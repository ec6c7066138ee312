# scorer.py
from typing import FrozenSet, List, Mapping

from rapidfuzz.distance import Levenshtein

from adjacency import KEYBOARD_ADJACENCY, neighbors
from config import ADJACENT_SUBSTITUTION_COST


def levenshtein(a: str, b: str) -> int:
    """Classic edit distance: insert, delete and substitute all cost 1."""
    return Levenshtein.distance(a, b)


def substitution_cost(
    a: str, b: str, adjacency: Mapping[str, FrozenSet[str]] = KEYBOARD_ADJACENCY
) -> float:
    if a == b:
        return 0.0
    if b in neighbors(a, adjacency):
        return ADJACENT_SUBSTITUTION_COST
    return 1.0


def keyboard_distance(
    a: str, b: str, adjacency: Mapping[str, FrozenSet[str]] = KEYBOARD_ADJACENCY
) -> float:
    """Edit distance where hitting a neighbouring key costs half a substitution.

    Both strings are lowercased first. Insertions and deletions cost 1.0.
    """
    a, b = a.lower(), b.lower()
    m, n = len(a), len(b)
    if m == 0:
        return float(n)
    if n == 0:
        return float(m)
    prev: List[float] = [float(j) for j in range(n + 1)]
    for i in range(1, m + 1):
        curr = [float(i)] + [0.0] * n
        for j in range(1, n + 1):
            curr[j] = min(
                prev[j] + 1.0,
                curr[j - 1] + 1.0,
                prev[j - 1] + substitution_cost(a[i - 1], b[j - 1], adjacency),
            )
        prev = curr
    return prev[n]
