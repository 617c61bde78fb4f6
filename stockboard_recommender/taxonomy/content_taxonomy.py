"""
Content taxonomy for board posts.

``ContentCategory`` enumerates the board sections a post can belong to.
Declaration order is significant: ``CATEGORY_ORDER`` fixes the one-hot
layout of content feature vectors, so vectors produced anywhere in the
process are comparable. Append new categories at the end.

This module has NO imports from any other ``stockboard_recommender`` package.
"""

from enum import StrEnum


class ContentCategory(StrEnum):
    """Board section a post is published under."""

    FREE = "free"
    """Free discussion board."""

    STOCK = "stock"
    """Stock-specific discussion and analysis."""

    NOTICE = "notice"
    """Operator announcements."""


CATEGORY_ORDER: tuple[str, ...] = tuple(c.value for c in ContentCategory)
