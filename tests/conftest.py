"""
Shared pytest fixtures for the stock board recommender test suite.

Provides:
  - ``now``: a fixed UTC reference time so recency scoring is reproducible.
  - Sample snapshot factories (posts, users, stocks) used across modules.
  - ``engine``: a ``RecommendationEngine`` with default settings.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from stockboard_recommender.models.content import ContentItem, Instrument
from stockboard_recommender.models.profile import UserProfile
from stockboard_recommender.recommendations.engine import RecommendationEngine

NOW = datetime(2026, 2, 24, 15, 0, 0, tzinfo=timezone.utc)


def make_item(
    item_id: str,
    category: str = "stock",
    view_count: int = 100,
    like_count: int = 50,
    age_hours: float = 1.0,
    tags: frozenset[str] | None = None,
) -> ContentItem:
    return ContentItem(
        id=item_id,
        category=category,
        tags=tags or frozenset(),
        view_count=view_count,
        like_count=like_count,
        created_at=NOW - timedelta(hours=age_hours),
    )


def make_user(
    user_id: str,
    liked: tuple[str, ...] = (),
    viewed: tuple[str, ...] = (),
    viewed_instruments: tuple[str, ...] = (),
) -> UserProfile:
    return UserProfile(
        user_id=user_id,
        viewed_items=viewed,
        liked_items=frozenset(liked),
        viewed_instruments=frozenset(viewed_instruments),
        last_active=NOW,
    )


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def engine() -> RecommendationEngine:
    return RecommendationEngine()


@pytest.fixture
def sample_items() -> list[ContentItem]:
    """Five posts across all three categories with varied engagement."""
    return [
        make_item("p1", "stock", view_count=100, like_count=50),
        make_item("p2", "stock", view_count=100, like_count=50),
        make_item("p3", "stock", view_count=900, like_count=300),
        make_item("p4", "free",  view_count=10,  like_count=0),
        make_item("p5", "notice", view_count=0,  like_count=0),
    ]


@pytest.fixture
def sample_users() -> list[UserProfile]:
    """Target ``u1`` plus three peers with overlapping likes."""
    return [
        make_user("u1", liked=("p1", "p2"), viewed=("p4", "p1")),
        make_user("u2", liked=("p2", "p3")),
        make_user("u3", liked=("p1", "p2", "p4")),
        make_user("u4", liked=("p5",)),
    ]


@pytest.fixture
def sample_instruments() -> list[Instrument]:
    return [
        Instrument(id="AAPL",  name="Apple",     sector="Technology", change_percent=2.5),
        Instrument(id="GOOGL", name="Alphabet",  sector="Technology", change_percent=1.8),
        Instrument(id="MSFT",  name="Microsoft", sector="Technology", change_percent=0.5),
        Instrument(id="JPM",   name="JPMorgan",  sector="Financials", change_percent=1.0),
        Instrument(id="XOM",   name="Exxon",     sector="Energy",     change_percent=-1.5),
    ]


@pytest.fixture
def item_factory():
    """Return ``make_item`` for tests that build their own posts."""
    return make_item


@pytest.fixture
def user_factory():
    """Return ``make_user`` for tests that build their own profiles."""
    return make_user
