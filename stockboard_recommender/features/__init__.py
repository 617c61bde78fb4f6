"""Feature engineering package for the stock board recommender.

Modules
-------
content_features: one-hot category + capped popularity vector per post
"""
