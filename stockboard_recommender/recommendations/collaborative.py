"""
Collaborative scoring: posts liked by users with similar taste.

Peer similarity is the Jaccard index of liked-post sets. Every peer votes
for each post it liked that the target has not liked, with a vote weight
equal to its similarity:

    score[post] = sum(similarity(target, peer) for peers that liked post)

Peers with zero overlap still contribute their posts at score 0.0, so they
rank last in item_id order.
Posts already in ``target.liked_items`` are never emitted.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Optional

from stockboard_recommender.models.profile import UserProfile
from stockboard_recommender.models.recommendation import PeerSimilarity, RecommendationScore
from stockboard_recommender.recommendations.ranker import rank_scores, validate_limit
from stockboard_recommender.recommendations.similarity import jaccard_similarity

log = logging.getLogger(__name__)

COLLABORATIVE_REASON = "liked by similar users"


def nearest_peers(
    target:    UserProfile,
    all_users: Sequence[UserProfile],
    k:         Optional[int] = None,
) -> list[PeerSimilarity]:
    """Return peers ordered by Jaccard similarity (desc), user_id asc on ties.

    ``target`` is excluded by ``user_id``; it need not be in ``all_users``.

    Args:
        target:    The user recommendations are for.
        all_users: User universe.
        k:         Keep the top ``k`` peers; ``None`` keeps all.
    """
    if k is not None:
        validate_limit(k)

    peers = [
        PeerSimilarity(
            user_id=user.user_id,
            similarity=jaccard_similarity(target.liked_items, user.liked_items),
        )
        for user in all_users
        if user.user_id != target.user_id
    ]
    peers.sort(key=lambda p: (-p.similarity, p.user_id))
    return peers if k is None else peers[:k]


def from_peers(
    target:    UserProfile,
    all_users: Sequence[UserProfile],
    limit:     int = 5,
) -> list[RecommendationScore]:
    """Accumulate peer-weighted votes into ranked post recommendations."""
    validate_limit(limit)

    votes: dict[str, float] = {}
    peer_count = 0
    for peer in all_users:
        if peer.user_id == target.user_id:
            continue
        peer_count += 1
        similarity = jaccard_similarity(target.liked_items, peer.liked_items)
        for item_id in peer.liked_items:
            if item_id in target.liked_items:
                continue
            votes[item_id] = votes.get(item_id, 0.0) + similarity

    log.debug(
        "from_peers: user=%s peers=%d candidate_items=%d",
        target.user_id, peer_count, len(votes),
    )
    return rank_scores(
        (
            RecommendationScore(item_id=item_id, score=score, reason=COLLABORATIVE_REASON)
            for item_id, score in votes.items()
        ),
        limit,
    )
