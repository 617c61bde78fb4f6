"""
Content feature extraction: ContentItem -> fixed-length feature vector.

Vector layout
-------------
    [ one-hot category ... , popularity ]

  - One dimension per ``ContentCategory`` in ``CATEGORY_ORDER``. A post in an
    unknown category gets zeros across all category dimensions.
  - popularity = min((view_count + 2 * like_count) / popularity_cap, 1.0)

Example (order free, stock, notice; cap 1000)::

    stock post, 100 views, 50 likes  ->  (0.0, 1.0, 0.0, 0.2)

Pure function: same item and cap always yield the same tuple.
"""

from __future__ import annotations

import math

from stockboard_recommender.models.content import ContentItem
from stockboard_recommender.taxonomy.content_taxonomy import CATEGORY_ORDER

POPULARITY_CAP: float = 1000.0

FEATURE_NAMES: tuple[str, ...] = tuple(
    f"category_{c}" for c in CATEGORY_ORDER
) + ("popularity",)

FeatureVector = tuple[float, ...]


def extract_content_features(
    item:           ContentItem,
    popularity_cap: float = POPULARITY_CAP,
) -> FeatureVector:
    """Encode a post as ``len(CATEGORY_ORDER) + 1`` floats.

    Args:
        item:           Post snapshot.
        popularity_cap: Engagement level mapped to popularity 1.0.

    Returns:
        Feature tuple in ``FEATURE_NAMES`` order.

    Raises:
        ValueError: If ``popularity_cap`` is not a positive finite number.
    """
    if not math.isfinite(popularity_cap) or popularity_cap <= 0:
        raise ValueError(
            f"popularity_cap must be a positive finite number, got {popularity_cap}."
        )

    category_dims = tuple(1.0 if item.category == c else 0.0 for c in CATEGORY_ORDER)
    popularity = min(item.engagement / popularity_cap, 1.0)
    return category_dims + (popularity,)
