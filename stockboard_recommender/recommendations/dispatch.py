"""
Request dispatch: maps a recommendation type to an engine entry point.

Mirrors the board's ``GET /api/recommendations?type=...&limit=...`` handler:

    posts    -> RecommendationEngine.recommend            (default)
    trending -> RecommendationEngine.recommend_trending
    stocks   -> RecommendationEngine.recommend_instruments

Query-string parsing lives here too so that every caller rejects bad input
the same way.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from enum import StrEnum
from typing import Optional

from stockboard_recommender.models.content import ContentItem, Instrument
from stockboard_recommender.models.profile import UserProfile
from stockboard_recommender.models.recommendation import RecommendationScore
from stockboard_recommender.recommendations.engine import RecommendationEngine
from stockboard_recommender.recommendations.ranker import validate_limit

DEFAULT_LIMIT = 10


class RecommendationType(StrEnum):
    """Kinds of recommendation lists a handler can request."""

    POSTS = "posts"
    TRENDING = "trending"
    STOCKS = "stocks"


class UnknownRecommendationTypeError(ValueError):
    """Raised for a ``type`` value outside ``RecommendationType``."""

    def __init__(self, raw: str) -> None:
        super().__init__(
            f"Invalid type '{raw}'. Must be one of {[t.value for t in RecommendationType]}."
        )
        self.raw = raw


def parse_recommendation_type(raw: Optional[str]) -> RecommendationType:
    """Parse a ``type`` query value; empty or ``None`` means ``posts``.

    Matching is exact: ``"Posts"`` or ``" posts"`` is rejected.
    """
    if not raw:
        return RecommendationType.POSTS
    try:
        return RecommendationType(raw)
    except ValueError:
        raise UnknownRecommendationTypeError(raw) from None


def parse_limit(raw: Optional[str], default: int = DEFAULT_LIMIT) -> int:
    """Parse a ``limit`` query value; blank means ``default``.

    Raises:
        ValueError: If the value is not a non-negative integer.
    """
    if raw is None or not raw.strip():
        return default
    try:
        limit = int(raw.strip())
    except ValueError:
        raise ValueError(f"limit must be an integer, got '{raw}'.") from None
    return validate_limit(limit)


def dispatch(
    engine:               RecommendationEngine,
    rec_type:             RecommendationType,
    user:                 Optional[UserProfile],
    all_users:            Sequence[UserProfile],
    all_items:            Sequence[ContentItem],
    all_instruments:      Sequence[Instrument],
    limit:                Optional[int] = None,
    content_weight:       Optional[float] = None,
    collaborative_weight: Optional[float] = None,
    time_window_hours:    Optional[float] = None,
    now:                  Optional[datetime] = None,
) -> list[RecommendationScore]:
    """Run the engine entry point for ``rec_type``.

    ``None`` arguments fall back to the engine's configured defaults.
    Weight overrides apply to ``posts`` only; the window applies to
    ``trending`` only.

    Raises:
        ValueError: If ``user`` is ``None`` for a personalized type, or on
            invalid weights / limit / window.
    """
    if rec_type is RecommendationType.TRENDING:
        return engine.recommend_trending(
            all_items, time_window_hours=time_window_hours, limit=limit, now=now
        )
    if user is None:
        raise ValueError(f"A target user is required for type '{rec_type}'.")
    if rec_type is RecommendationType.POSTS:
        return engine.recommend(
            user,
            all_users,
            all_items,
            content_weight=content_weight,
            collaborative_weight=collaborative_weight,
            limit=limit,
        )
    if rec_type is RecommendationType.STOCKS:
        return engine.recommend_instruments(user, all_instruments, limit=limit)
    raise UnknownRecommendationTypeError(str(rec_type))


def effective_limit(
    engine:   RecommendationEngine,
    rec_type: RecommendationType,
    limit:    Optional[int] = None,
) -> int:
    """The limit ``dispatch()`` applies for ``rec_type`` given ``limit``."""
    if limit is not None:
        return limit
    if rec_type is RecommendationType.TRENDING:
        return engine.trending_settings.limit
    if rec_type is RecommendationType.STOCKS:
        return engine.instrument_settings.limit
    return engine.settings.default_limit
