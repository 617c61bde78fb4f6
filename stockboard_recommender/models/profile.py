"""
User behaviour snapshot.

``UserProfile`` is produced by the behaviour tracker and handed to the engine
as a read-only snapshot for the duration of one recommendation call. The
model is frozen and its collections are immutable (tuples / frozensets), so
a profile cannot change underneath a running scorer.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserProfile(BaseModel):
    """Behavioural signals for one board user.

    Attributes:
        user_id: Unique user identifier.
        viewed_items: Post IDs in view order, most recent last.
        liked_items: Post IDs the user has liked.
        viewed_instruments: Stock IDs (tickers) the user has looked at.
        search_history: Search queries in issue order.
        last_active: Last activity timestamp, or ``None`` if unknown.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str
    viewed_items: tuple[str, ...] = ()
    liked_items: frozenset[str] = Field(default_factory=frozenset)
    viewed_instruments: frozenset[str] = Field(default_factory=frozenset)
    search_history: tuple[str, ...] = ()
    last_active: Optional[datetime] = None

    @field_validator("user_id")
    @classmethod
    def validate_user_id(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("user_id must not be empty.")
        return v

    @property
    def most_recent_item(self) -> Optional[str]:
        """The last viewed post ID, or ``None`` when nothing was viewed."""
        return self.viewed_items[-1] if self.viewed_items else None
