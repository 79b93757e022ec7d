"""SEO Page Analyzer API – FastAPI app exposing the analysis pipeline."""

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from chat_service import send_message
from config import CORS_ORIGINS, DEFAULT_CONFIG, LOG_LEVEL
from domain_validator import validate_domain
from errors import (
    AnalysisError,
    DomainNotFound,
    FetchTimeout,
    HttpError,
    InvalidUrl,
    NetworkError,
)
from history import RecentHistory
from pipeline import analyze_url
from recommender import Recommender
from schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    ChatRequest,
    ChatResponse,
    DomainCheckResponse,
    ErrorResponse,
    HistoryItem,
    ScreenshotResponse,
)
from screenshot_service import capture_screenshot

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

ERROR_STATUS = {
    InvalidUrl: 400,
    DomainNotFound: 422,
    HttpError: 502,
    NetworkError: 502,
    FetchTimeout: 504,
}

app = FastAPI(
    title="SEO Page Analyzer API",
    description="Single-page SEO scoring and remediation advice",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

history = RecentHistory()


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    status_code = ERROR_STATUS.get(type(exc), 500)
    body = ErrorResponse(error=exc.message, domain=getattr(exc, "domain", None))
    logger.warning("Analysis failed (%s): %s", type(exc).__name__, exc.message)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@app.post(
    "/analyze",
    response_model=AnalyzeResponse,
    responses={code: {"model": ErrorResponse} for code in sorted(set(ERROR_STATUS.values()))},
)
def analyze(body: AnalyzeRequest) -> AnalyzeResponse:
    """
    Pipeline: validate domain -> fetch via proxy -> extract signals -> score + recommend.
    """
    result = analyze_url(body.url, config=DEFAULT_CONFIG, check_domain=body.check_domain)
    history.add(result.signals, result.score)
    return AnalyzeResponse(
        signals=result.signals,
        score=result.score,
        recommendations=list(result.recommendations),
    )


@app.get("/history", response_model=list[HistoryItem])
def get_history() -> list[HistoryItem]:
    """Return recent analyses, most recent first."""
    return [
        HistoryItem(
            index=index,
            url=entry.signals.url,
            total=entry.score.total,
            timestamp=entry.signals.timestamp,
        )
        for index, entry in enumerate(history.entries())
    ]


@app.get("/history/{index}", response_model=AnalyzeResponse)
def get_history_item(index: int) -> AnalyzeResponse:
    """Re-display a stored analysis; advice is re-derived from its signals."""
    entry = history.get(index)
    if entry is None:
        raise HTTPException(status_code=404, detail="History item not found")
    return AnalyzeResponse(
        signals=entry.signals,
        score=entry.score,
        recommendations=Recommender(DEFAULT_CONFIG).recommend(entry.signals),
    )


@app.post("/chat", response_model=ChatResponse)
def chat(body: ChatRequest) -> ChatResponse:
    return ChatResponse(reply=send_message(body.message))


@app.get("/screenshot", response_model=ScreenshotResponse)
def screenshot(url: str) -> ScreenshotResponse:
    result = capture_screenshot(url)
    return ScreenshotResponse(**result.model_dump())


@app.get("/validate-domain", response_model=DomainCheckResponse)
def domain_check(url: str) -> DomainCheckResponse:
    result = validate_domain(url)
    return DomainCheckResponse(**result.model_dump())


@app.get("/health")
def health() -> dict:
    """Health check for deployment."""
    return {"status": "ok"}
