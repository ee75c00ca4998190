from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final, Protocol, Sequence

import joblib

from imdb_sentiment.config import InferenceConfig

logger = logging.getLogger(__name__)

POSITIVE_LABEL: Final[str] = "positive"
NEGATIVE_LABEL: Final[str] = "negative"
REQUIRED_LABELS: Final[tuple[str, ...]] = (POSITIVE_LABEL, NEGATIVE_LABEL)


class ArtifactError(RuntimeError):
    """Base class for problems with the loaded vectorizer or classifier."""


class ArtifactLoadError(ArtifactError):
    """An artifact file is missing or could not be deserialized."""


class LabelSetError(ArtifactError):
    """The classifier's label set is incompatible with positive/negative sentiment."""


class Vectorizer(Protocol):
    def transform(self, texts: Sequence[str]) -> Any: ...


class Classifier(Protocol):
    classes_: Any

    def predict(self, features: Any) -> Any: ...

    def predict_proba(self, features: Any) -> Any: ...


@dataclass(frozen=True)
class SentimentArtifacts:
    """The vectorizer and classifier, loaded once and shared read-only."""

    vectorizer: Vectorizer
    classifier: Classifier

    @property
    def classes(self) -> list[str]:
        """Class labels in the order the classifier reports probabilities."""
        return [str(c) for c in self.classifier.classes_]


def load_artifact(path: Path) -> Any:
    """Deserialize a single joblib artifact."""
    if not path.is_file():
        raise ArtifactLoadError(f"Artifact not found: {path}")
    try:
        return joblib.load(path)
    except Exception as exc:
        raise ArtifactLoadError(f"Failed to load artifact {path}: {exc}") from exc


def validate_artifacts(artifacts: SentimentArtifacts) -> None:
    """Check both artifacts expose the expected interface and label set.

    Raises:
        ArtifactLoadError: If either object lacks a required method or attribute.
        LabelSetError: If `classes_` is not exactly `positive` and `negative`.
    """
    if not callable(getattr(artifacts.vectorizer, "transform", None)):
        raise ArtifactLoadError(f"Vectorizer {type(artifacts.vectorizer).__name__} has no `transform` method")

    for attr in ("predict", "predict_proba"):
        if not callable(getattr(artifacts.classifier, attr, None)):
            raise ArtifactLoadError(f"Classifier {type(artifacts.classifier).__name__} has no `{attr}` method")
    if getattr(artifacts.classifier, "classes_", None) is None:
        raise ArtifactLoadError(f"Classifier {type(artifacts.classifier).__name__} has no `classes_` (is it fitted?)")

    classes = artifacts.classes
    missing = [label for label in REQUIRED_LABELS if label not in classes]
    if missing:
        raise LabelSetError(f"Classifier labels {classes} are missing required labels: {missing}")
    if len(classes) != len(REQUIRED_LABELS):
        raise LabelSetError(f"Classifier labels {classes} must be exactly {list(REQUIRED_LABELS)}")


def load_artifacts(config: InferenceConfig) -> SentimentArtifacts:
    """Load and validate the vectorizer and classifier named by `config`."""
    logger.info("Loading classifier from %s", config.model_path)
    classifier = load_artifact(config.model_path)
    logger.info("Loading vectorizer from %s", config.vectorizer_path)
    vectorizer = load_artifact(config.vectorizer_path)

    artifacts = SentimentArtifacts(vectorizer=vectorizer, classifier=classifier)
    validate_artifacts(artifacts)
    logger.info("Artifacts ready; classifier class order: %s", artifacts.classes)
    return artifacts
