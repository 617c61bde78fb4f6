"""Tests for stockboard_recommender/reporting/export.py."""

from __future__ import annotations

import json

from stockboard_recommender.models.recommendation import RecommendationScore
from stockboard_recommender.recommendations.dispatch import RecommendationType
from stockboard_recommender.reporting.export import (
    build_response_payload,
    export_to_json,
    scores_to_records,
)

_SCORES = [
    RecommendationScore(item_id="post-42", score=0.87, reason="stock category — similar item"),
    RecommendationScore(item_id="post-7", score=0.5, reason="liked by similar users"),
]


class TestScoresToRecords:
    def test_camel_case_keys(self):
        records = scores_to_records(_SCORES)
        assert records[0] == {
            "itemId": "post-42",
            "score": 0.87,
            "reason": "stock category — similar item",
        }

    def test_order_preserved(self):
        assert [r["itemId"] for r in scores_to_records(_SCORES)] == ["post-42", "post-7"]

    def test_empty(self):
        assert scores_to_records([]) == []


class TestBuildResponsePayload:
    def test_envelope(self):
        payload = build_response_payload(RecommendationType.POSTS, 10, _SCORES)
        assert payload["success"] is True
        assert payload["meta"] == {"type": "posts", "limit": 10, "count": 2}
        assert len(payload["data"]) == 2

    def test_json_serializable(self):
        payload = build_response_payload(RecommendationType.TRENDING, 5, [])
        decoded = json.loads(json.dumps(payload))
        assert decoded["meta"]["type"] == "trending"
        assert decoded["meta"]["count"] == 0


class TestExportToJson:
    def test_writes_file(self, tmp_path):
        path = export_to_json(scores_to_records(_SCORES), tmp_path / "out" / "recs.json")
        assert path.exists()
        loaded = json.loads(path.read_text(encoding="utf-8"))
        assert loaded[1]["itemId"] == "post-7"
        assert "similar item" in path.read_text(encoding="utf-8")
