"""
Runtime settings and the scoring rubric.

Service settings come from the environment. A .env file in the backend root
is loaded automatically using python-dotenv, for example:

ANTHROPIC_API_KEY=your_real_key_here
FETCH_PROXY_URL=https://api.allorigins.win/raw?url=

The rubric (weights, thresholds, stop words) is an immutable AnalyzerConfig
value handed to Extractor, Scorer and Recommender explicitly.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    return [item.strip() for item in raw.split(",") if item.strip()]


FETCH_PROXY_URL = os.getenv("FETCH_PROXY_URL", "https://api.allorigins.win/raw?url=").strip()
FETCH_TIMEOUT_SECONDS = float(os.getenv("FETCH_TIMEOUT_SECONDS", "30"))
FETCH_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/122.0.0.0 Safari/537.36"
)

DNS_API_URL = os.getenv("DNS_API_URL", "https://dns.google/resolve").strip()
DNS_TIMEOUT_SECONDS = float(os.getenv("DNS_TIMEOUT_SECONDS", "10"))

SCREENSHOT_SERVICES = _env_list(
    "SCREENSHOT_SERVICES",
    [
        "https://image.thum.io/get/width/800/crop/600/noanimate/",
        "https://api.apiflash.com/v1/urltoimage?access_key=DEMO&url=",
        "https://shot.screenshotapi.net/screenshot?token=DEMO&url=",
    ],
)
SCREENSHOT_TIMEOUT_SECONDS = float(os.getenv("SCREENSHOT_TIMEOUT_SECONDS", "10"))

CHAT_MODEL_CANDIDATES = [
    os.getenv("CLAUDE_MODEL", "").strip(),
    "claude-3-5-haiku-latest",
    "claude-3-haiku-20240307",
]
CHAT_MODEL_CANDIDATES = [m for m in CHAT_MODEL_CANDIDATES if m]
CHAT_MAX_TOKENS = int(os.getenv("CHAT_MAX_TOKENS", "500"))
CHAT_TEMPERATURE = float(os.getenv("CHAT_TEMPERATURE", "0.7"))
CHAT_MAX_RETRIES = int(os.getenv("CHAT_MAX_RETRIES", "2"))
CHAT_RETRY_BASE_SECONDS = float(os.getenv("CHAT_RETRY_BASE_SECONDS", "1.0"))

HISTORY_CAPACITY = int(os.getenv("HISTORY_CAPACITY", "10"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"
CORS_ORIGINS = _env_list("CORS_ORIGINS", ["*"])


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class OnPageWeights(_Frozen):
    max_points: int = 40
    title: int = 15
    title_length: int = 5
    meta_description: int = 10
    meta_description_length: int = 5
    h1: int = 5


class TechnicalWeights(_Frozen):
    max_points: int = 30
    https: int = 10
    viewport: int = 10
    single_h1: int = 5
    word_count: int = 5


class ContentWeights(_Frozen):
    max_points: int = 20
    word_count_min: int = 5
    word_count_optimal: int = 5
    h2: int = 5
    base: int = 5


class LinkWeights(_Frozen):
    max_points: int = 10
    link_count: int = 5
    link_count_high: int = 5


class Thresholds(_Frozen):
    """Inclusive ranges and minimums the rubric checks against."""

    title_length_min: int = 30
    title_length_max: int = 60
    meta_description_length_min: int = 120
    meta_description_length_max: int = 160
    word_count_min: int = 300
    word_count_optimal: int = 600
    link_count_min: int = 5
    link_count_optimal: int = 10


STOP_WORDS = frozenset(
    {
        "the", "a", "an", "is", "are", "was", "were", "be", "been",
        "have", "has", "had", "do", "does", "did", "will", "would",
        "should", "could", "can", "may", "might", "of", "in", "on",
        "at", "to", "for", "from", "by", "with", "about", "as", "or", "and",
    }
)


class AnalyzerConfig(_Frozen):
    """Everything the analysis stages need to know about the rubric."""

    on_page: OnPageWeights = OnPageWeights()
    technical: TechnicalWeights = TechnicalWeights()
    content: ContentWeights = ContentWeights()
    links: LinkWeights = LinkWeights()
    thresholds: Thresholds = Thresholds()
    stop_words: frozenset[str] = STOP_WORDS
    min_keyword_length: int = 3
    keyword_limit: int = 20
    top_keyword_limit: int = 10


DEFAULT_CONFIG = AnalyzerConfig()
