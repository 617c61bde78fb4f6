"""
Content and market snapshots.

``ContentItem`` is a board post as supplied by the content store.
``Instrument`` is a tradable stock as supplied by the market-data service.

Both are frozen. Validation here is limited to what the fetch layer
guarantees (bounded non-negative counters, non-empty IDs); sparse or odd values
such as an unknown category or a missing sector are accepted and scored
neutrally downstream.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Largest count that still converts to float exactly.
MAX_COUNT = 2**53 - 1


class ContentItem(BaseModel):
    """A board post.

    Attributes:
        id: Post identifier.
        category: Board section slug (see ``ContentCategory``). Unknown
            values are allowed and encode to all-zero category dimensions.
        tags: Optional free-form tags.
        view_count: Total views (0 to ``MAX_COUNT``).
        like_count: Total likes (0 to ``MAX_COUNT``).
        created_at: Publication timestamp; naive values are treated as UTC.
        title: Display title, not used for scoring.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    category: str
    tags: frozenset[str] = Field(default_factory=frozenset)
    view_count: int = Field(default=0, ge=0, le=MAX_COUNT)
    like_count: int = Field(default=0, ge=0, le=MAX_COUNT)
    created_at: datetime
    title: Optional[str] = None

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("id must not be empty.")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_missing_tags(cls, v: Any) -> Any:
        return frozenset() if v is None else v

    @property
    def engagement(self) -> int:
        """Views plus double-weighted likes."""
        return self.view_count + 2 * self.like_count


class Instrument(BaseModel):
    """A tradable stock.

    Attributes:
        id: Ticker or internal instrument ID.
        sector: Market sector; missing values become ``""``.
        change_percent: Signed daily change in percent; missing values become 0.
        name: Display name, not used for scoring.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    sector: str = ""
    change_percent: float = 0.0
    name: Optional[str] = None

    @field_validator("sector", mode="before")
    @classmethod
    def coerce_missing_sector(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("change_percent", mode="before")
    @classmethod
    def coerce_missing_change(cls, v: Any) -> Any:
        return 0.0 if v is None else v
