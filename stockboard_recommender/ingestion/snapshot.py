"""
Snapshot loading: read a JSON fixture of users, posts and stocks into
immutable engine inputs.

The engine itself never touches disk; this loader exists for local runs,
the CLI, and test fixtures. File layout::

    {
      "users": [
        {"user_id": "u1", "viewed_items": ["p1", "p2"], "liked_items": ["p1"],
         "viewed_instruments": ["AAPL"], "search_history": ["dividends"],
         "last_active": "2026-02-24T15:00:00Z"}
      ],
      "items": [
        {"id": "p1", "category": "stock", "tags": ["earnings"],
         "view_count": 100, "like_count": 20,
         "created_at": "2026-02-24T12:00:00Z"}
      ],
      "instruments": [
        {"id": "AAPL", "name": "Apple", "sector": "Technology",
         "change_percent": 2.5}
      ]
    }

Any section may be omitted (loads as empty). Duplicate IDs within a section
are rejected so that lookups by ID are unambiguous.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

from stockboard_recommender.models.content import ContentItem, Instrument
from stockboard_recommender.models.profile import UserProfile

logger = logging.getLogger(__name__)


class EngineSnapshot(BaseModel):
    """Immutable bundle of engine inputs for one recommendation run."""

    model_config = ConfigDict(frozen=True)

    users: tuple[UserProfile, ...] = ()
    items: tuple[ContentItem, ...] = ()
    instruments: tuple[Instrument, ...] = ()

    def find_user(self, user_id: str) -> Optional[UserProfile]:
        for user in self.users:
            if user.user_id == user_id:
                return user
        return None

    def find_item(self, item_id: str) -> Optional[ContentItem]:
        for item in self.items:
            if item.id == item_id:
                return item
        return None


def parse_snapshot(data: dict[str, Any]) -> EngineSnapshot:
    """Validate a decoded snapshot document.

    Raises:
        ValueError: On a non-object document or duplicate IDs.
        pydantic.ValidationError: On malformed records.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Snapshot must be a JSON object, got {type(data).__name__}.")

    snapshot = EngineSnapshot(
        users=data.get("users") or (),
        items=data.get("items") or (),
        instruments=data.get("instruments") or (),
    )
    _reject_duplicates("user", (u.user_id for u in snapshot.users))
    _reject_duplicates("item", (i.id for i in snapshot.items))
    _reject_duplicates("instrument", (i.id for i in snapshot.instruments))
    return snapshot


def load_snapshot(path: Path) -> EngineSnapshot:
    """Load and validate a snapshot JSON file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: On invalid JSON, a non-object document, or duplicate IDs.
        pydantic.ValidationError: On malformed records.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {path}")

    with path.open(encoding="utf-8") as f:
        data = json.load(f)

    snapshot = parse_snapshot(data)
    logger.debug(
        "Loaded snapshot %s: %d users, %d items, %d instruments",
        path, len(snapshot.users), len(snapshot.items), len(snapshot.instruments),
    )
    return snapshot


def _reject_duplicates(kind: str, ids: Iterable[str]) -> None:
    seen: set[str] = set()
    for i, ident in enumerate(ids):
        if ident in seen:
            raise ValueError(f"Duplicate {kind} id '{ident}' at index {i}.")
        seen.add(ident)
