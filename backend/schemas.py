"""Pydantic schemas for API request/response."""

from datetime import datetime

from pydantic import BaseModel, field_validator

from models import Recommendation, Score, SignalSet


class AnalyzeRequest(BaseModel):
    """Request body for POST /analyze."""

    url: str
    check_domain: bool = True

    @field_validator("url", mode="before")
    @classmethod
    def normalize_text_fields(cls, value: object) -> str:
        return str(value or "").strip()


class AnalyzeResponse(BaseModel):
    """Signals, score and advice for one page."""

    signals: SignalSet
    score: Score
    recommendations: list[Recommendation]


class ErrorResponse(BaseModel):
    error: str
    domain: str | None = None


class HistoryItem(BaseModel):
    """Summary row for the history list."""

    index: int
    url: str
    total: int
    timestamp: datetime


class ChatRequest(BaseModel):
    message: str

    @field_validator("message")
    @classmethod
    def validate_message(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("Message is required")
        return normalized


class ChatResponse(BaseModel):
    reply: str


class ScreenshotResponse(BaseModel):
    url: str
    available: bool
    image_url: str | None = None
    error: str | None = None


class DomainCheckResponse(BaseModel):
    valid: bool
    domain: str
    error: str | None = None
