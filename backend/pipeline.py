"""Analysis pipeline: domain check -> fetch -> extract -> score + recommend.

Every request is independent; the only shared values are the immutable
rubric and the SignalSet handed to both the scorer and the recommender.
"""

import logging

from config import DEFAULT_CONFIG, AnalyzerConfig
from domain_validator import validate_domain
from errors import DomainNotFound
from extractor import Extractor
from fetcher import fetch_page, normalize_url
from models import AnalysisResult, SignalSet
from recommender import Recommender
from scorer import Scorer

logger = logging.getLogger(__name__)


def analyze_signals(signals: SignalSet, config: AnalyzerConfig = DEFAULT_CONFIG) -> AnalysisResult:
    """Score and advise on an already-extracted SignalSet."""
    score = Scorer(config).score(signals)
    recommendations = Recommender(config).recommend(signals)
    return AnalysisResult(signals=signals, score=score, recommendations=tuple(recommendations))


def analyze_markup(
    markup: str,
    url: str,
    load_time_ms: int = 0,
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> AnalysisResult:
    signals = Extractor(config).extract(markup, normalize_url(url), load_time_ms)
    return analyze_signals(signals, config)


def analyze_url(
    url: str,
    config: AnalyzerConfig = DEFAULT_CONFIG,
    check_domain: bool = True,
    proxy_url: str | None = None,
) -> AnalysisResult:
    """
    Run the full pipeline for one page.

    Raises InvalidUrl, DomainNotFound, FetchTimeout, HttpError or NetworkError;
    no partial result is returned on failure.
    """
    full_url = normalize_url(url)

    if check_domain:
        check = validate_domain(full_url)
        if not check.valid:
            raise DomainNotFound(check.error or "Could not validate domain", check.domain)

    fetched = fetch_page(full_url, proxy_url=proxy_url)
    result = analyze_markup(fetched.markup, fetched.url, fetched.load_time_ms, config)
    logger.info(
        "Analysis complete for %s: total=%d recommendations=%d",
        full_url,
        result.score.total,
        len(result.recommendations),
    )
    return result
