"""
Recommendation engine: ranks board posts and stocks for a user from
behavioural snapshots.

Modules
-------
similarity    : cosine_similarity() + jaccard_similarity(): pure math.
ranker        : rank_scores() (score desc, item_id asc, truncate) +
                merge_weighted() fusion.
content       : similar_posts(): cosine similarity of content features.
collaborative : nearest_peers() + from_peers(): Jaccard peer voting.
trending      : recommend_trending(): exponentially decayed popularity.
instruments   : recommend_instruments(): sector affinity + performance.
engine        : RecommendationEngine: stateless facade used by handlers.
dispatch      : RecommendationType + dispatch(): request-type routing.

No module here performs I/O or keeps state between calls.
"""
