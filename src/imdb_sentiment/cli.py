"""Command line entrypoints (`imdb-sentiment serve`, `imdb-sentiment predict`)."""

from __future__ import annotations

import json
import logging
from enum import Enum
from pathlib import Path

import typer
import uvicorn

from imdb_sentiment.api import create_app
from imdb_sentiment.config import load_config
from imdb_sentiment.model import load_artifacts
from imdb_sentiment.predict import predict_sentiment

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

app = typer.Typer(help="IMDB review sentiment inference service.", no_args_is_help=True)


class LogLevel(str, Enum):
    debug = "debug"
    info = "info"
    warning = "warning"
    error = "error"
    critical = "critical"


def _setup_logging(level: LogLevel) -> None:
    logging.basicConfig(level=level.value.upper(), format=LOG_FORMAT)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Interface to bind."),
    port: int = typer.Option(8000, help="Port to listen on."),
    config: Path | None = typer.Option(None, help="Path to config.yaml (defaults to configs/config.yaml)."),
    log_level: LogLevel = typer.Option(LogLevel.info, case_sensitive=False, help="Logging level."),
) -> None:
    """Load the model and serve the HTTP API."""
    _setup_logging(log_level)
    logger.info("Starting server on %s:%d", host, port)
    uvicorn.run(create_app(config_path=config), host=host, port=port, log_level=log_level.value)


@app.command()
def predict(
    review: str = typer.Argument(..., help="Review text to classify."),
    config: Path | None = typer.Option(None, help="Path to config.yaml (defaults to configs/config.yaml)."),
    log_level: LogLevel = typer.Option(LogLevel.warning, case_sensitive=False, help="Logging level."),
) -> None:
    """Classify a single review and print the result as JSON."""
    _setup_logging(log_level)
    artifacts = load_artifacts(load_config(config))
    result = predict_sentiment(artifacts, review)
    typer.echo(json.dumps(result.to_dict()))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
