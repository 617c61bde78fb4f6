"""
Content-based scoring: posts similar to a target post.

Each candidate is encoded with ``extract_content_features()`` and scored by
cosine similarity against the target's vector. The target itself (matched
by ``id``) is never a candidate.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from stockboard_recommender.features.content_features import (
    POPULARITY_CAP,
    extract_content_features,
)
from stockboard_recommender.models.content import ContentItem
from stockboard_recommender.models.recommendation import RecommendationScore
from stockboard_recommender.recommendations.ranker import rank_scores, validate_limit
from stockboard_recommender.recommendations.similarity import cosine_similarity

log = logging.getLogger(__name__)


def similar_item_reason(category: str) -> str:
    return f"{category} category — similar item"


def similar_posts(
    target:         ContentItem,
    candidates:     Iterable[ContentItem],
    limit:          int = 5,
    popularity_cap: float = POPULARITY_CAP,
) -> list[RecommendationScore]:
    """Rank ``candidates`` by cosine similarity to ``target``.

    Args:
        target:         The post being viewed.
        candidates:     Posts to score; may include ``target``.
        limit:          Maximum results.
        popularity_cap: Popularity feature cap (see content_features).

    Returns:
        Ranked list, score descending, item_id ascending on ties.
    """
    validate_limit(limit)
    target_vec = extract_content_features(target, popularity_cap)
    reason = similar_item_reason(target.category)

    scored: list[RecommendationScore] = []
    for item in candidates:
        if item.id == target.id:
            continue
        vec = extract_content_features(item, popularity_cap)
        scored.append(
            RecommendationScore(
                item_id=item.id,
                score=cosine_similarity(target_vec, vec),
                reason=reason,
            )
        )

    log.debug("similar_posts: target=%s candidates=%d", target.id, len(scored))
    return rank_scores(scored, limit)
