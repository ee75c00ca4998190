"""Configuration loading for the inference service.

The service reads a single YAML file, by default `configs/config.yaml` under the
directory the service is launched from. Only the `inference` section is consumed:

    inference:
      model_path: models/logreg_model.joblib
      vectorizer_path: models/tfidf_vectorizer.joblib

Relative artifact paths are resolved against a base directory, which also
defaults to the working directory. Both the config file and the base directory
can be overridden through environment variables (`IMDB_SENTIMENT_CONFIG`,
`IMDB_SENTIMENT_BASE_DIR`).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Final

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_RELPATH: Final[Path] = Path("configs") / "config.yaml"
CONFIG_PATH_ENV: Final[str] = "IMDB_SENTIMENT_CONFIG"
BASE_DIR_ENV: Final[str] = "IMDB_SENTIMENT_BASE_DIR"
INFERENCE_SECTION: Final[str] = "inference"


class ConfigError(ValueError):
    """Raised when the configuration file is missing or malformed."""


@dataclass(frozen=True)
class InferenceConfig:
    """Resolved locations of the two serialized artifacts."""

    model_path: Path
    vectorizer_path: Path


def _resolve(base_dir: Path, raw: Any, *, key: str) -> Path:
    if not isinstance(raw, str) or not raw.strip():
        raise ConfigError(f"`{INFERENCE_SECTION}.{key}` must be a non-empty string, got {raw!r}")
    path = Path(raw)
    return path if path.is_absolute() else base_dir / path


def load_config(config_path: Path | None = None, *, base_dir: Path | None = None) -> InferenceConfig:
    """Read the YAML config and resolve artifact paths.

    Args:
        config_path: Path to the YAML file. Falls back to `$IMDB_SENTIMENT_CONFIG`,
            then to `configs/config.yaml` under the working directory.
        base_dir: Directory relative artifact paths are joined onto. Falls back to
            `$IMDB_SENTIMENT_BASE_DIR`, then to the working directory.

    Returns:
        An `InferenceConfig` with absolute (or base-relative) artifact paths.

    Raises:
        ConfigError: If the file does not exist or lacks the required keys.
    """
    if config_path is None:
        env_path = os.environ.get(CONFIG_PATH_ENV)
        config_path = Path(env_path) if env_path else Path.cwd() / DEFAULT_CONFIG_RELPATH
    if base_dir is None:
        env_base = os.environ.get(BASE_DIR_ENV)
        base_dir = Path(env_base) if env_base else Path.cwd()

    if not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")

    with config_path.open("r", encoding="utf-8") as f:
        full_config = yaml.safe_load(f)

    if not isinstance(full_config, dict):
        raise ConfigError(f"Expected a mapping at the top level of {config_path}, got {type(full_config).__name__}")

    section = full_config.get(INFERENCE_SECTION)
    if not isinstance(section, dict):
        raise ConfigError(f"Missing `{INFERENCE_SECTION}` section in {config_path}")

    config = InferenceConfig(
        model_path=_resolve(base_dir, section.get("model_path"), key="model_path"),
        vectorizer_path=_resolve(base_dir, section.get("vectorizer_path"), key="vectorizer_path"),
    )
    logger.info("Loaded inference config from %s", config_path)
    return config
