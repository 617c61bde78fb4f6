"""
Hybrid recommendation engine: the entry point request handlers call.

``RecommendationEngine`` is a stateless service: it holds only frozen
configuration, so one instance is built per process (``from_config``) and
shared by every request handler and thread. Inputs must be immutable
snapshots; the engine never mutates or retains them.

Entry points
------------
recommend_similar_items(target, candidates, limit)
    Content-based similar posts.
recommend(user, users, items, ...)
    content (most recently viewed post) + collaborative, weighted fusion.
recommend_trending(items, ...)
    Time-decayed popularity.
recommend_instruments(user, instruments, limit)
    Sector affinity + performance for stocks.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from stockboard_recommender.config import InstrumentConfig, RecommenderConfig, TrendingConfig
from stockboard_recommender.models.content import ContentItem, Instrument
from stockboard_recommender.models.profile import UserProfile
from stockboard_recommender.models.recommendation import RecommendationScore
from stockboard_recommender.recommendations import collaborative, content, instruments, trending
from stockboard_recommender.recommendations.ranker import (
    merge_weighted,
    rank_scores,
    validate_limit,
    validate_weight,
)

if TYPE_CHECKING:
    from stockboard_recommender.config import AppConfig

log = logging.getLogger(__name__)


class RecommendationEngine:
    """Stateless facade over the individual scorers.

    Args:
        settings:            Hybrid scoring defaults.
        trending_settings:   Trending window / limit defaults.
        instrument_settings: Instrument weights / limit defaults.
    """

    def __init__(
        self,
        settings:            RecommenderConfig = RecommenderConfig(),
        trending_settings:   TrendingConfig = TrendingConfig(),
        instrument_settings: InstrumentConfig = InstrumentConfig(),
    ) -> None:
        self._settings = settings
        self._trending = trending_settings
        self._instruments = instrument_settings

    @classmethod
    def from_config(cls, config: "AppConfig") -> "RecommendationEngine":
        return cls(config.recommender, config.trending, config.instruments)

    @property
    def settings(self) -> RecommenderConfig:
        return self._settings

    @property
    def trending_settings(self) -> TrendingConfig:
        return self._trending

    @property
    def instrument_settings(self) -> InstrumentConfig:
        return self._instruments

    # ── Content ───────────────────────────────────────────────────────────────

    def recommend_similar_items(
        self,
        target:     ContentItem,
        candidates: Sequence[ContentItem],
        limit:      Optional[int] = None,
    ) -> list[RecommendationScore]:
        """Posts most similar to ``target``; never includes ``target`` itself."""
        return content.similar_posts(
            target,
            candidates,
            limit=self._settings.similar_limit if limit is None else limit,
            popularity_cap=self._settings.popularity_cap,
        )

    # ── Hybrid ────────────────────────────────────────────────────────────────

    def recommend(
        self,
        user:                 UserProfile,
        all_users:            Sequence[UserProfile],
        all_items:            Sequence[ContentItem],
        content_weight:       Optional[float] = None,
        collaborative_weight: Optional[float] = None,
        limit:                Optional[int] = None,
        renormalize:          Optional[bool] = None,
    ) -> list[RecommendationScore]:
        """Personalized post feed combining content and collaborative signals.

        The content source is anchored on the user's most recently viewed
        post; when that post is unknown (or nothing was viewed) only the
        collaborative source contributes. Each source supplies up to
        ``limit * candidate_multiplier`` candidates before fusion:

            final = content_score * content_weight
                    + collaborative_score * collaborative_weight

        A missing source contributes 0 and, unless ``renormalize`` is set,
        scores are not rescaled to the weight actually present.

        Args:
            user:                 Target user snapshot.
            all_users:            User universe for peer search.
            all_items:            Post universe for content similarity.
            content_weight:       Defaults to ``settings.content_weight``.
            collaborative_weight: Defaults to ``settings.collaborative_weight``.
            limit:                Defaults to ``settings.default_limit``.
            renormalize:          Defaults to ``settings.renormalize``.

        Raises:
            ValueError: On non-finite, negative or non-numeric weights, or an
                invalid limit.
        """
        s = self._settings
        w_content = validate_weight(
            s.content_weight if content_weight is None else content_weight,
            "content_weight",
        )
        w_collab = validate_weight(
            s.collaborative_weight if collaborative_weight is None else collaborative_weight,
            "collaborative_weight",
        )
        limit = validate_limit(s.default_limit if limit is None else limit)
        renormalize = s.renormalize if renormalize is None else renormalize

        candidate_limit = limit * s.candidate_multiplier

        content_recs: list[RecommendationScore] = []
        recent_id = user.most_recent_item
        recent_item = _find_item(all_items, recent_id) if recent_id is not None else None
        if recent_item is not None:
            content_recs = content.similar_posts(
                recent_item, all_items, candidate_limit, s.popularity_cap
            )
        else:
            log.debug("recommend: user=%s has no known recent item", user.user_id)

        collab_recs = collaborative.from_peers(user, all_users, candidate_limit)

        merged = merge_weighted(
            [(content_recs, w_content), (collab_recs, w_collab)],
            renormalize=renormalize,
        )
        result = rank_scores(merged, limit)
        log.debug(
            "recommend: user=%s content=%d collaborative=%d returned=%d",
            user.user_id, len(content_recs), len(collab_recs), len(result),
        )
        return result

    # ── Trending ──────────────────────────────────────────────────────────────

    def recommend_trending(
        self,
        all_items:         Sequence[ContentItem],
        time_window_hours: Optional[float] = None,
        limit:             Optional[int] = None,
        now:               Optional[datetime] = None,
    ) -> list[RecommendationScore]:
        return trending.recommend_trending(
            all_items,
            time_window_hours=(
                self._trending.time_window_hours if time_window_hours is None
                else time_window_hours
            ),
            limit=self._trending.limit if limit is None else limit,
            now=now,
        )

    # ── Instruments ───────────────────────────────────────────────────────────

    def recommend_instruments(
        self,
        user:            UserProfile,
        all_instruments: Sequence[Instrument],
        limit:           Optional[int] = None,
    ) -> list[RecommendationScore]:
        return instruments.recommend_instruments(
            user,
            all_instruments,
            limit=self._instruments.limit if limit is None else limit,
            sector_weight=self._instruments.sector_weight,
            performance_weight=self._instruments.performance_weight,
        )


def _find_item(items: Sequence[ContentItem], item_id: str) -> Optional[ContentItem]:
    """First item with ``item_id``, or ``None``."""
    for item in items:
        if item.id == item_id:
            return item
    return None
