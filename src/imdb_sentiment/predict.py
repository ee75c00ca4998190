"""Text-to-sentiment prediction.

Probabilities are looked up by label value in the classifier's `classes_`, never
by position, and each is rounded independently with the built-in `round`
(round-half-to-even on the exact float value). They are not renormalized after
rounding, so they may not sum to exactly 1.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Final, Sequence

from imdb_sentiment.model import (
    NEGATIVE_LABEL,
    POSITIVE_LABEL,
    REQUIRED_LABELS,
    LabelSetError,
    SentimentArtifacts,
)

PROBA_DECIMALS: Final[int] = 4


@dataclass(frozen=True)
class PredictionResult:
    sentiment: str
    positive_proba: float
    negative_proba: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def resolve_label_indices(classes: Sequence[Any]) -> tuple[int, int]:
    """Return `(positive_idx, negative_idx)` within the classifier's class order.

    Raises:
        LabelSetError: If either label is absent.
    """
    labels = [str(c) for c in classes]
    try:
        return labels.index(POSITIVE_LABEL), labels.index(NEGATIVE_LABEL)
    except ValueError as exc:
        raise LabelSetError(f"Classifier labels {labels} must include {list(REQUIRED_LABELS)}") from exc


class SentimentPredictor:
    """Run the vectorizer and classifier for one review at a time.

    Holds references to the shared artifacts and never mutates them, so a single
    instance can serve concurrent requests.
    """

    def __init__(self, artifacts: SentimentArtifacts) -> None:
        self.artifacts = artifacts

    def predict_sentiment(self, review: str) -> PredictionResult:
        vectorizer = self.artifacts.vectorizer
        classifier = self.artifacts.classifier

        features = vectorizer.transform([review])

        label = str(classifier.predict(features)[0])
        if label not in REQUIRED_LABELS:
            raise LabelSetError(f"Classifier predicted unexpected label {label!r}")

        proba = classifier.predict_proba(features)[0]
        positive_idx, negative_idx = resolve_label_indices(classifier.classes_)

        return PredictionResult(
            sentiment=label,
            positive_proba=round(float(proba[positive_idx]), PROBA_DECIMALS),
            negative_proba=round(float(proba[negative_idx]), PROBA_DECIMALS),
        )


def predict_sentiment(artifacts: SentimentArtifacts, review: str) -> PredictionResult:
    """One-off prediction without keeping a predictor around."""
    return SentimentPredictor(artifacts).predict_sentiment(review)
