"""
Tests for stockboard_recommender/recommendations/instruments.py.

recommend_instruments():
  - score = 0.6 * sector_affinity + 0.4 * change_percent.
  - Viewed instruments are never recommended.
  - Missing sector never accumulates affinity.
  - Non-finite change_percent scores as 0.
"""

from __future__ import annotations

import pytest

from stockboard_recommender.models.content import Instrument
from stockboard_recommender.recommendations.instruments import (
    recommend_instruments,
    sector_affinity,
)


@pytest.fixture
def tech_fan(user_factory):
    return user_factory("u1", viewed_instruments=("AAPL", "GOOGL"))


class TestSectorAffinity:
    def test_counts_viewed_sectors(self, tech_fan, sample_instruments):
        assert sector_affinity(tech_fan, sample_instruments) == {"Technology": 2}

    def test_empty_sector_not_counted(self, user_factory):
        user = user_factory("u", viewed_instruments=("X",))
        assert sector_affinity(user, [Instrument(id="X", sector=None)]) == {}

    def test_unknown_viewed_ids_ignored(self, user_factory, sample_instruments):
        user = user_factory("u", viewed_instruments=("NOPE",))
        assert sector_affinity(user, sample_instruments) == {}


class TestRecommendInstruments:
    def test_scores_and_order(self, tech_fan, sample_instruments):
        out = recommend_instruments(tech_fan, sample_instruments, limit=10)
        assert [r.item_id for r in out] == ["MSFT", "JPM", "XOM"]
        assert out[0].score == pytest.approx(0.6 * 2 + 0.4 * 0.5)
        assert out[1].score == pytest.approx(0.4 * 1.0)
        assert out[2].score == pytest.approx(0.4 * -1.5)

    def test_excludes_viewed(self, tech_fan, sample_instruments):
        ids = {r.item_id for r in recommend_instruments(tech_fan, sample_instruments, 10)}
        assert not ids & tech_fan.viewed_instruments

    def test_reason(self, tech_fan, sample_instruments):
        out = recommend_instruments(tech_fan, sample_instruments, 1)
        assert out[0].reason == "Technology sector affinity"

    def test_missing_sector_ranks_on_performance(self, user_factory):
        user = user_factory("u", viewed_instruments=("A",))
        instruments = [
            Instrument(id="A", sector=None),
            Instrument(id="B", sector=None, change_percent=2.0),
        ]
        out = recommend_instruments(user, instruments, 5)
        assert out[0].item_id == "B"
        assert out[0].score == pytest.approx(0.8)

    def test_nan_change_scores_zero(self, user_factory):
        user = user_factory("u")
        out = recommend_instruments(user, [Instrument(id="A", change_percent=float("nan"))], 5)
        assert out[0].score == 0.0

    def test_custom_weights(self, tech_fan, sample_instruments):
        out = recommend_instruments(
            tech_fan, sample_instruments, 1, sector_weight=1.0, performance_weight=0.0
        )
        assert out[0].item_id == "MSFT"
        assert out[0].score == pytest.approx(2.0)

    def test_cold_user_ranks_by_change(self, user_factory, sample_instruments):
        out = recommend_instruments(user_factory("new"), sample_instruments, 2)
        assert [r.item_id for r in out] == ["AAPL", "GOOGL"]

    def test_empty_universe(self, tech_fan):
        assert recommend_instruments(tech_fan, [], 5) == []

    def test_negative_weight_rejected(self, tech_fan, sample_instruments):
        with pytest.raises(ValueError, match="sector_weight"):
            recommend_instruments(tech_fan, sample_instruments, 5, sector_weight=-1.0)
