"""FastAPI application entrypoint.

The vectorizer and classifier are loaded exactly once, in the lifespan handler,
before the app accepts traffic. A failure to load them aborts startup, so
`/health` is only reachable once the model is ready.

Endpoints:
- `GET /health`: liveness probe, does not touch the model.
- `POST /predict`: sentiment for a single review.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, Request, status

from imdb_sentiment.config import load_config
from imdb_sentiment.model import LabelSetError, SentimentArtifacts, load_artifacts
from imdb_sentiment.predict import SentimentPredictor
from imdb_sentiment.schemas import ErrorResponse, HealthResponse, PredictRequest, PredictResponse

logger = logging.getLogger(__name__)

APP_TITLE = "IMDB Sentiment Analysis Service"
APP_DESCRIPTION = "Predicts the sentiment of movie reviews (positive / negative)."
APP_VERSION = "1.0.0"


def get_predictor(request: Request) -> SentimentPredictor:
    return request.app.state.predictor


def create_app(artifacts: SentimentArtifacts | None = None, *, config_path: Path | None = None) -> FastAPI:
    """Build the FastAPI app.

    Args:
        artifacts: Pre-loaded artifacts. When omitted, they are loaded from the
            config file during startup.
        config_path: Config file used when `artifacts` is omitted. See
            `imdb_sentiment.config.load_config` for the fallback order.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if getattr(app.state, "predictor", None) is None:
            config = load_config(config_path)
            app.state.predictor = SentimentPredictor(load_artifacts(config))
        logger.info("Service ready")
        yield

    app = FastAPI(
        title=APP_TITLE,
        description=APP_DESCRIPTION,
        version=APP_VERSION,
        lifespan=lifespan,
    )
    app.state.predictor = SentimentPredictor(artifacts) if artifacts is not None else None

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post(
        "/predict",
        response_model=PredictResponse,
        responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}},
    )
    def predict(request: PredictRequest, predictor: SentimentPredictor = Depends(get_predictor)) -> PredictResponse:
        try:
            result = predictor.predict_sentiment(request.review)
        except LabelSetError:
            logger.exception("Classifier label set is incompatible with the service")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Model configuration error.")
        except Exception:
            logger.exception("Inference failed for review of length %d", len(request.review))
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Prediction failed.")
        return PredictResponse(**result.to_dict())

    return app
