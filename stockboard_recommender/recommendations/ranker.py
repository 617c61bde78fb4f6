"""
Recommendation ranker: ordering, truncation, and weighted fusion of score lists.

Every public ranking operation funnels its output through ``rank_scores()``
so that all lists share one ordering contract:

    score descending, then item_id ascending (lexicographic), then truncate.

The explicit tie-break keeps output identical across runs regardless of
input order or dict iteration order.

Fusion flow (hybrid recommendations)
------------------------------------
1. Each source yields a ranked list of RecommendationScore.
2. merge_weighted([(content, 0.4), (collaborative, 0.6)])
   -> one RecommendationScore per item_id:
        score  = sum(source_score * source_weight)
        reason = source reasons joined with " & " in source order
3. rank_scores(merged, limit)
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from numbers import Real

from stockboard_recommender.models.recommendation import RecommendationScore

REASON_SEPARATOR = " & "


def rank_scores(
    scores: Iterable[RecommendationScore],
    limit:  int,
) -> list[RecommendationScore]:
    """Sort by score descending (item_id ascending on ties) and keep ``limit``.

    Raises:
        ValueError: If ``limit`` is negative or not an int.
    """
    validate_limit(limit)
    ordered = sorted(scores, key=lambda r: (-r.score, r.item_id))
    return ordered[:limit]


def merge_weighted(
    sources:     Sequence[tuple[Sequence[RecommendationScore], float]],
    renormalize: bool = False,
) -> list[RecommendationScore]:
    """Fuse several score lists into one entry per item_id.

    A source that did not score an item contributes nothing to it. By
    default scores are not rescaled, so an item found by a single source
    carries only that source's weight. With ``renormalize=True`` each fused
    score is divided by the summed weight of the sources that scored it
    (items whose contributing weights sum to zero keep score 0).

    Args:
        sources:     ``(scores, weight)`` pairs, in reason-concatenation order.
        renormalize: Divide by the weight actually present per item.

    Returns:
        Unordered list of fused scores (pass through ``rank_scores``).
    """
    totals:  dict[str, float] = {}
    weights: dict[str, float] = {}
    reasons: dict[str, list[str]] = {}

    for scores, weight in sources:
        validate_weight(weight)
        for rec in scores:
            if rec.item_id not in totals:
                totals[rec.item_id]  = 0.0
                weights[rec.item_id] = 0.0
                reasons[rec.item_id] = []
            totals[rec.item_id]  += rec.score * weight
            weights[rec.item_id] += weight
            reasons[rec.item_id].append(rec.reason)

    merged: list[RecommendationScore] = []
    for item_id, total in totals.items():
        if renormalize:
            present = weights[item_id]
            total = total / present if present > 0 else 0.0
        merged.append(
            RecommendationScore(
                item_id=item_id,
                score=total,
                reason=REASON_SEPARATOR.join(reasons[item_id]),
            )
        )
    return merged


# ── Argument checks ───────────────────────────────────────────────────────────

def validate_limit(limit: int) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValueError(f"limit must be an int, got {limit!r}.")
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}.")
    return limit


def validate_weight(weight: float, name: str = "weight") -> float:
    if isinstance(weight, bool) or not isinstance(weight, Real):
        raise ValueError(f"{name} must be a number, got {weight!r}.")
    if not math.isfinite(weight) or weight < 0:
        raise ValueError(f"{name} must be finite and non-negative, got {weight}.")
    return float(weight)
