"""imdb_sentiment package.

A small inference service for movie-review sentiment: a TF-IDF vectorizer and a
logistic regression classifier are loaded from disk once at startup and served
behind a FastAPI `/predict` endpoint.
"""
