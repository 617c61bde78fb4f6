"""
Recommendation result models.

``RecommendationScore`` is the unit every public ranking operation returns.
``PeerSimilarity`` is the intermediate result of nearest-peer search.

Both are frozen; fusion builds new instances instead of mutating scores.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, field_validator


class RecommendationScore(BaseModel):
    """A scored recommendation for one post or stock.

    Attributes:
        item_id: Post or instrument ID.
        score: Ranking score; unbounded, conventionally non-negative.
        reason: Human-readable provenance. When two sources scored the item
            their reasons are joined with ``" & "``.
    """

    model_config = ConfigDict(frozen=True)

    item_id: str
    score: float
    reason: str

    @field_validator("reason")
    @classmethod
    def validate_reason_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("reason must not be empty.")
        return v


class PeerSimilarity(BaseModel):
    """Similarity between the target user and one peer."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    similarity: float
