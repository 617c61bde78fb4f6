"""
Trending scoring: time-decayed popularity over a trailing window.

    age_hours = hours since created_at (future timestamps count as age 0)
    decay     = exp(-age_hours / time_window_hours)
    score     = (view_count + 2 * like_count) * decay

Only posts younger than ``time_window_hours`` are scored.
``now`` is injectable so callers and tests get reproducible output.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from datetime import datetime
from numbers import Real
from typing import Optional

from stockboard_recommender.models.content import ContentItem
from stockboard_recommender.models.recommendation import RecommendationScore
from stockboard_recommender.recommendations.ranker import rank_scores, validate_limit
from stockboard_recommender.utils.time_utils import (
    ensure_utc,
    hours_between,
    utcnow,
)

log = logging.getLogger(__name__)

TRENDING_REASON = "trending item"


def time_decay(age_hours: float, time_window_hours: float) -> float:
    return math.exp(-max(age_hours, 0.0) / time_window_hours)


def recommend_trending(
    items:             Iterable[ContentItem],
    time_window_hours: float = 24.0,
    limit:             int = 10,
    now:               Optional[datetime] = None,
) -> list[RecommendationScore]:
    """Rank recent posts by engagement damped with exponential decay.

    Args:
        items:             Post snapshots.
        time_window_hours: Trailing window length; also the decay constant.
        limit:             Maximum results.
        now:               Reference time; defaults to the current UTC time.

    Raises:
        ValueError: If the window is not a positive finite number or
            ``limit`` is invalid.
    """
    if (
        isinstance(time_window_hours, bool)
        or not isinstance(time_window_hours, Real)
        or not math.isfinite(time_window_hours)
        or time_window_hours <= 0
    ):
        raise ValueError(
            f"time_window_hours must be a positive finite number, got {time_window_hours!r}."
        )
    validate_limit(limit)

    now = ensure_utc(now) if now is not None else utcnow()

    scored: list[RecommendationScore] = []
    for item in items:
        age_hours = hours_between(item.created_at, now)
        if age_hours >= time_window_hours:
            continue
        scored.append(
            RecommendationScore(
                item_id=item.id,
                score=item.engagement * time_decay(age_hours, time_window_hours),
                reason=TRENDING_REASON,
            )
        )

    log.debug("recommend_trending: window=%sh in_window=%d", time_window_hours, len(scored))
    return rank_scores(scored, limit)
