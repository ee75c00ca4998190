from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class PredictRequest(BaseModel):
    """Body of `POST /predict`."""

    review: str = Field(examples=["This movie was absolutely wonderful, I loved it!"])


class PredictResponse(BaseModel):
    """Body returned by `POST /predict`.

    Probabilities are rounded to 4 decimals independently of each other.
    """

    sentiment: Literal["positive", "negative"]
    positive_proba: float = Field(ge=0.0, le=1.0)
    negative_proba: float = Field(ge=0.0, le=1.0)


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str
