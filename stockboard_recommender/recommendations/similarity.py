"""
Similarity primitives shared by the content and collaborative scorers.

cosine_similarity(v1, v2)
    dot(v1, v2) / (|v1| * |v2|). Defined as 0.0 when either norm is zero or
    the vectors differ in length. Never returns NaN.

jaccard_similarity(a, b)
    |a ∩ b| / |a ∪ b|. Defined as 0.0 when both sets are empty.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence


def cosine_similarity(v1: Sequence[float], v2: Sequence[float]) -> float:
    if len(v1) != len(v2):
        return 0.0

    dot = 0.0
    norm1 = 0.0
    norm2 = 0.0
    for a, b in zip(v1, v2):
        dot   += a * b
        norm1 += a * a
        norm2 += b * b

    if norm1 == 0.0 or norm2 == 0.0:
        return 0.0

    result = dot / (math.sqrt(norm1) * math.sqrt(norm2))
    return result if math.isfinite(result) else 0.0


def jaccard_similarity(a: Iterable[str], b: Iterable[str]) -> float:
    set_a = frozenset(a)
    set_b = frozenset(b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)
