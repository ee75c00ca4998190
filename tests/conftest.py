from __future__ import annotations

from pathlib import Path

import joblib
import numpy as np
import pytest
from sklearn.feature_extraction.text import TfidfVectorizer
from sklearn.linear_model import LogisticRegression

from imdb_sentiment.model import SentimentArtifacts

POSITIVE_REVIEWS = [
    "absolutely wonderful movie, I loved it",
    "a wonderful film with great acting",
    "I loved this movie, brilliant and moving",
    "great story, wonderful cast, loved every minute",
    "brilliant, beautiful and absolutely delightful",
    "one of the best films I have seen, loved it",
]
NEGATIVE_REVIEWS = [
    "terrible film, a complete waste of time",
    "awful movie, boring and terrible",
    "a waste of money, the worst film ever",
    "boring plot and terrible acting",
    "complete waste, awful and dull",
    "the worst movie, I hated it",
]


def _fit(labels: tuple[str, str] = ("positive", "negative")) -> tuple[TfidfVectorizer, LogisticRegression]:
    texts = POSITIVE_REVIEWS + NEGATIVE_REVIEWS
    y = [labels[0]] * len(POSITIVE_REVIEWS) + [labels[1]] * len(NEGATIVE_REVIEWS)
    vectorizer = TfidfVectorizer(ngram_range=(1, 2))
    X = vectorizer.fit_transform(texts)
    classifier = LogisticRegression(C=10.0, max_iter=1000, random_state=0)
    classifier.fit(X, y)
    return vectorizer, classifier


@pytest.fixture(scope="session")
def trained_artifacts() -> SentimentArtifacts:
    vectorizer, classifier = _fit()
    return SentimentArtifacts(vectorizer=vectorizer, classifier=classifier)


@pytest.fixture
def fit_artifacts():
    """Factory for freshly trained artifacts with custom label names."""
    return _fit


@pytest.fixture
def artifact_dir(tmp_path: Path, trained_artifacts: SentimentArtifacts) -> Path:
    models_dir = tmp_path / "models"
    models_dir.mkdir()
    joblib.dump(trained_artifacts.classifier, models_dir / "logreg_model.joblib")
    joblib.dump(trained_artifacts.vectorizer, models_dir / "tfidf_vectorizer.joblib")
    return tmp_path


@pytest.fixture
def config_file(artifact_dir: Path) -> Path:
    configs_dir = artifact_dir / "configs"
    configs_dir.mkdir()
    path = configs_dir / "config.yaml"
    path.write_text(
        "inference:\n"
        "  model_path: models/logreg_model.joblib\n"
        "  vectorizer_path: models/tfidf_vectorizer.joblib\n",
        encoding="utf-8",
    )
    return path


class FakeVectorizer:
    """Passes texts through unchanged and records calls."""

    def __init__(self) -> None:
        self.calls: list[list[str]] = []

    def transform(self, texts):
        self.calls.append(list(texts))
        return list(texts)


class RaisingVectorizer:
    def transform(self, texts):
        raise ValueError("empty vocabulary")


class FakeClassifier:
    """Returns a fixed label and probability row for any input."""

    def __init__(self, classes, label, proba) -> None:
        self.classes_ = np.array(classes)
        self._label = label
        self._proba = np.array([proba], dtype=float)

    def predict(self, features):
        return np.array([self._label] * len(features))

    def predict_proba(self, features):
        return np.repeat(self._proba, len(features), axis=0)


class RaisingClassifier:
    """Fitted-looking classifier whose predictions fail."""

    classes_ = np.array(["negative", "positive"])

    def predict(self, features):
        raise RuntimeError("feature dimension mismatch")

    def predict_proba(self, features):
        raise RuntimeError("feature dimension mismatch")
