"""
Tests for the Typer CLI (stockboard_recommender/cli.py).

Uses typer.testing.CliRunner against a snapshot written to tmp_path.
Trending items are timestamped relative to the real clock because the CLI
always scores against the current time.
"""

from __future__ import annotations

import json
from datetime import timedelta
from pathlib import Path

import pytest
from typer.testing import CliRunner

from stockboard_recommender.cli import app
from stockboard_recommender.utils.time_utils import utcnow

runner = CliRunner()


@pytest.fixture
def snapshot_file(tmp_path: Path) -> Path:
    fresh = (utcnow() - timedelta(hours=1)).isoformat()
    stale = (utcnow() - timedelta(hours=48)).isoformat()
    doc = {
        "users": [
            {"user_id": "u1", "viewed_items": ["p1"], "liked_items": ["p1", "p2"],
             "viewed_instruments": ["AAPL", "GOOGL"]},
            {"user_id": "u2", "liked_items": ["p2", "p3"]},
            {"user_id": "u3", "liked_items": ["p1", "p2", "p4"]},
        ],
        "items": [
            {"id": "p1", "category": "stock", "view_count": 100, "like_count": 50, "created_at": fresh},
            {"id": "p2", "category": "stock", "view_count": 100, "like_count": 50, "created_at": fresh},
            {"id": "p3", "category": "stock", "view_count": 900, "like_count": 300, "created_at": fresh},
            {"id": "p4", "category": "free", "view_count": 10, "like_count": 0, "created_at": stale},
        ],
        "instruments": [
            {"id": "AAPL", "sector": "Technology", "change_percent": 2.5},
            {"id": "GOOGL", "sector": "Technology", "change_percent": 1.8},
            {"id": "MSFT", "sector": "Technology", "change_percent": 0.5},
            {"id": "JPM", "sector": "Financials", "change_percent": 1.0},
        ],
    }
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(doc), encoding="utf-8")
    return path


class TestValidateConfig:
    def test_default_config_valid(self):
        result = runner.invoke(app, ["validate-config"])
        assert result.exit_code == 0
        assert "Configuration validated successfully." in result.output
        assert "Content weight:       0.4" in result.output

    def test_missing_config_exits_1(self, tmp_path):
        result = runner.invoke(app, ["validate-config", "--config", str(tmp_path / "x.toml")])
        assert result.exit_code == 1
        assert "[ERROR]" in result.output


class TestRecommend:
    def test_posts_json_payload(self, snapshot_file):
        result = runner.invoke(
            app, ["recommend", "--snapshot", str(snapshot_file), "--user", "u1", "--json"]
        )
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["success"] is True
        assert payload["meta"] == {"type": "posts", "limit": 10, "count": len(payload["data"])}
        ids = [r["itemId"] for r in payload["data"]]
        assert "p1" not in ids
        assert ids[0] == "p3"

    def test_posts_table(self, snapshot_file):
        result = runner.invoke(
            app, ["recommend", "--snapshot", str(snapshot_file), "--user", "u1", "--limit", "2"]
        )
        assert result.exit_code == 0, result.output
        assert "=== Recommendations: posts ===" in result.output
        assert "Count: 2" in result.output

    def test_trending(self, snapshot_file):
        result = runner.invoke(
            app, ["recommend", "--snapshot", str(snapshot_file), "--type", "trending", "--json"]
        )
        assert result.exit_code == 0, result.output
        ids = [r["itemId"] for r in json.loads(result.output)["data"]]
        assert ids[0] == "p3"
        assert "p4" not in ids

    def test_stocks(self, snapshot_file):
        result = runner.invoke(
            app,
            ["recommend", "--snapshot", str(snapshot_file), "--type", "stocks",
             "--user", "u1", "--json"],
        )
        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert [r["itemId"] for r in payload["data"]] == ["MSFT", "JPM"]
        assert payload["meta"]["limit"] == 5

    def test_writes_output_file(self, snapshot_file, tmp_path):
        out = tmp_path / "out" / "recs.json"
        result = runner.invoke(
            app,
            ["recommend", "--snapshot", str(snapshot_file), "--user", "u1",
             "--output", str(out)],
        )
        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text(encoding="utf-8"))["success"] is True

    @pytest.mark.parametrize("rec_type", ["videos", "POSTS"])
    def test_invalid_type(self, snapshot_file, rec_type):
        result = runner.invoke(
            app, ["recommend", "--snapshot", str(snapshot_file), "--type", rec_type]
        )
        assert result.exit_code == 1
        assert "Invalid type" in result.output

    def test_very_large_trending_window(self, snapshot_file):
        result = runner.invoke(
            app,
            ["recommend", "--snapshot", str(snapshot_file), "--type", "trending",
             "--window-hours", "1e12", "--json"],
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["success"] is True

    def test_unknown_user(self, snapshot_file):
        result = runner.invoke(
            app, ["recommend", "--snapshot", str(snapshot_file), "--user", "ghost"]
        )
        assert result.exit_code == 1
        assert "Unknown user" in result.output

    def test_user_required_for_posts(self, snapshot_file):
        result = runner.invoke(app, ["recommend", "--snapshot", str(snapshot_file)])
        assert result.exit_code == 1
        assert "--user is required" in result.output

    def test_negative_weight_rejected(self, snapshot_file):
        result = runner.invoke(
            app,
            ["recommend", "--snapshot", str(snapshot_file), "--user", "u1",
             "--content-weight=-1"],
        )
        assert result.exit_code == 1
        assert "content_weight" in result.output

    def test_missing_snapshot(self, tmp_path):
        result = runner.invoke(
            app, ["recommend", "--snapshot", str(tmp_path / "none.json"), "--user", "u1"]
        )
        assert result.exit_code == 1
        assert "Snapshot file not found" in result.output


class TestSimilar:
    def test_similar_items(self, snapshot_file):
        result = runner.invoke(
            app, ["similar", "--snapshot", str(snapshot_file), "--item", "p1"]
        )
        assert result.exit_code == 0, result.output
        assert "similar to p1" in result.output
        assert result.output.index("p2") < result.output.index("p3")

    def test_unknown_item(self, snapshot_file):
        result = runner.invoke(
            app, ["similar", "--snapshot", str(snapshot_file), "--item", "zzz"]
        )
        assert result.exit_code == 1
        assert "Unknown item" in result.output
