"""
Instrument scoring: stocks in sectors the user already follows.

    sector_affinity[sector] = number of viewed stocks in that sector
    score = sector_weight * sector_affinity[sector]
            + performance_weight * change_percent

Stocks the user has already viewed are not recommended. The empty sector
(unknown / missing) never accumulates affinity, so such stocks rank on
performance alone. Non-finite ``change_percent`` values score as 0.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Sequence

from stockboard_recommender.models.content import Instrument
from stockboard_recommender.models.profile import UserProfile
from stockboard_recommender.models.recommendation import RecommendationScore
from stockboard_recommender.recommendations.ranker import (
    rank_scores,
    validate_limit,
    validate_weight,
)

log = logging.getLogger(__name__)

SECTOR_AFFINITY_WEIGHT: float = 0.6
PERFORMANCE_WEIGHT: float = 0.4


def sector_affinity(
    target:      UserProfile,
    instruments: Sequence[Instrument],
) -> Counter[str]:
    """Count viewed instruments per non-empty sector."""
    return Counter(
        inst.sector
        for inst in instruments
        if inst.id in target.viewed_instruments and inst.sector
    )


def recommend_instruments(
    target:             UserProfile,
    instruments:        Sequence[Instrument],
    limit:              int = 5,
    sector_weight:      float = SECTOR_AFFINITY_WEIGHT,
    performance_weight: float = PERFORMANCE_WEIGHT,
) -> list[RecommendationScore]:
    """Rank unseen instruments by sector affinity plus recent performance."""
    validate_limit(limit)
    validate_weight(sector_weight, "sector_weight")
    validate_weight(performance_weight, "performance_weight")

    affinity = sector_affinity(target, instruments)

    scored: list[RecommendationScore] = []
    for inst in instruments:
        if inst.id in target.viewed_instruments:
            continue
        change = inst.change_percent if math.isfinite(inst.change_percent) else 0.0
        scored.append(
            RecommendationScore(
                item_id=inst.id,
                score=sector_weight * affinity[inst.sector] + performance_weight * change,
                reason=f"{inst.sector} sector affinity",
            )
        )

    log.debug(
        "recommend_instruments: user=%s sectors=%d candidates=%d",
        target.user_id, len(affinity), len(scored),
    )
    return rank_scores(scored, limit)
