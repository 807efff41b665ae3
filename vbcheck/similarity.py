from __future__ import annotations

"""
Bounded title similarity used to accept or reject a catalog hit.

similarity(a, b) is in [0, 1]:

* 1.0 when one normalized key contains the other (both longer than
  CONTAINMENT_MIN_LENGTH) -- series/subtitle truncation on either side
* otherwise 1 - levenshtein / max(len) over the normalized keys
"""

from rapidfuzz.distance import Levenshtein as _Lev

from .config import CONTAINMENT_MIN_LENGTH, SIMILARITY_THRESHOLD
from .normalize import normalize_title_key


def levenshtein(a: str, b: str) -> int:
    """Unit-cost edit distance (insert / delete / substitute)."""
    return int(_Lev.distance(a, b))


def _contains_either(n1: str, n2: str) -> bool:
    if len(n1) <= CONTAINMENT_MIN_LENGTH or len(n2) <= CONTAINMENT_MIN_LENGTH:
        return False
    return n1 in n2 or n2 in n1


def similarity(a: str | None, b: str | None) -> float:
    n1 = normalize_title_key(a)
    n2 = normalize_title_key(b)
    if _contains_either(n1, n2):
        return 1.0

    max_len = max(len(n1), len(n2))
    if max_len == 0:
        return 1.0
    distance = levenshtein(n1, n2)
    return max(0.0, min(1.0, 1.0 - distance / max_len))


def is_acceptable(score: float, threshold: float = SIMILARITY_THRESHOLD) -> bool:
    """Threshold is inclusive: a score exactly at the threshold is a match."""
    return score >= threshold
