"""
Export helpers: RecommendationScore lists -> JSON-ready payloads.

Request handlers serialize results with camelCase keys::

    [{"itemId": "post-42", "score": 0.87, "reason": "stock category — similar item"}]

``build_response_payload()`` wraps that list in the envelope the board's
recommendations endpoint returns::

    {"success": true, "data": [...], "meta": {"type": "posts", "limit": 10, "count": 1}}
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from stockboard_recommender.models.recommendation import RecommendationScore


def scores_to_records(scores: Sequence[RecommendationScore]) -> list[dict]:
    """Convert scores to camelCase dicts, preserving order."""
    return [
        {"itemId": r.item_id, "score": r.score, "reason": r.reason}
        for r in scores
    ]


def build_response_payload(
    rec_type: str,
    limit:    int,
    scores:   Sequence[RecommendationScore],
) -> dict:
    """Wrap ranked scores in the endpoint response envelope."""
    return {
        "success": True,
        "data": scores_to_records(scores),
        "meta": {
            "type": str(rec_type),
            "limit": limit,
            "count": len(scores),
        },
    }


def export_to_json(
    data: dict | list,
    path: Path,
) -> Path:
    """Write ``data`` to a pretty-printed UTF-8 JSON file.

    Returns:
        ``path`` as written (parent dirs created if missing).
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(data, indent=2, ensure_ascii=False, default=str),
        encoding="utf-8",
    )
    return path
