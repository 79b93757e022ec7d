"""Signal extraction: parse fetched markup into a SignalSet.

Extracts titles, meta and Open Graph tags, headings, images, links, body
text statistics, keyword frequencies, structured data and technical
metadata. Parsing never fails the pipeline: anything absent degrades to an
empty string or zero.
"""

import json as _json
import logging
import re
from datetime import datetime, timezone
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from config import DEFAULT_CONFIG, AnalyzerConfig
from models import ImageInfo, KeywordStat, LinkInfo, SignalSet

logger = logging.getLogger(__name__)

_TOKEN_RE = re.compile(r"[a-z]+")
_NON_TEXT_TAGS = ["script", "style", "noscript", "template"]


def count_words(text: str) -> int:
    return len(text.split())


def is_internal_link(href: str, page_url: str) -> bool:
    """
    A link is internal when it resolves to the page's hostname, or when the
    raw href is root-relative ("/...") or a fragment ("#..."). Protocol-relative
    hrefs ("//host/...") name a host, so only the hostname comparison decides them.
    """
    root_relative = href.startswith("/") and not href.startswith("//")
    path_relative = root_relative or href.startswith("#")
    try:
        page_host = urlparse(page_url).hostname
        link_host = urlparse(urljoin(page_url, href)).hostname
    except ValueError:
        return path_relative
    return (link_host is not None and link_host == page_host) or path_relative


def _attr(tag, name: str) -> str:
    if tag is None:
        return ""
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        return " ".join(value)
    return str(value)


class Extractor:
    """Turns markup into a SignalSet using the stop words and limits in `config`."""

    def __init__(self, config: AnalyzerConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def extract_keywords(self, text: str) -> list[KeywordStat]:
        """
        Rank alphabetic tokens by frequency, most frequent first.

        Density is relative to every token long enough to qualify, stop words
        included. Ties keep first-seen order.
        """
        cfg = self.config
        tokens = [t for t in _TOKEN_RE.findall(text.lower()) if len(t) >= cfg.min_keyword_length]
        if not tokens:
            return []

        freq: dict[str, int] = {}
        for token in tokens:
            if token in cfg.stop_words:
                continue
            freq[token] = freq.get(token, 0) + 1

        ranked = sorted(freq.items(), key=lambda item: item[1], reverse=True)
        total = len(tokens)
        return [
            KeywordStat(word=word, count=count, density=round(count * 100 / total, 2))
            for word, count in ranked[: cfg.keyword_limit]
        ]

    def extract_schemas(self, soup: BeautifulSoup) -> list:
        schemas = []
        for script_tag in soup.find_all("script", attrs={"type": "application/ld+json"}):
            raw = script_tag.string if script_tag.string is not None else script_tag.get_text()
            try:
                schemas.append(_json.loads(raw))
            except ValueError as e:
                logger.debug("Skipping malformed structured data block: %s", e)
        return schemas

    def extract(self, markup: str, url: str, load_time_ms: int = 0) -> SignalSet:
        soup = BeautifulSoup(markup or "", "html.parser")

        # --- Structured data (before script tags are stripped) ---
        schemas = self.extract_schemas(soup)

        for tag in soup.find_all(_NON_TEXT_TAGS):
            tag.decompose()

        # --- Title ---
        title_tag = soup.find("title")
        raw_title = title_tag.get_text() if title_tag else ""

        # --- Meta ---
        meta_description = _attr(soup.find("meta", attrs={"name": "description"}), "content")
        meta_keywords = _attr(soup.find("meta", attrs={"name": "keywords"}), "content")

        # --- Open Graph ---
        og_title = _attr(soup.find("meta", attrs={"property": "og:title"}), "content")
        og_description = _attr(soup.find("meta", attrs={"property": "og:description"}), "content")
        og_image = _attr(soup.find("meta", attrs={"property": "og:image"}), "content")

        # --- Headings ---
        h1 = tuple(h.get_text(strip=True) for h in soup.find_all("h1"))
        h2 = tuple(h.get_text(strip=True) for h in soup.find_all("h2"))
        h3 = tuple(h.get_text(strip=True) for h in soup.find_all("h3"))

        # --- Images ---
        images = []
        for img in soup.find_all("img"):
            src = _attr(img, "src")
            alt = _attr(img, "alt")
            images.append(
                ImageInfo(
                    src=urljoin(url, src) if src else "",
                    alt=alt,
                    has_alt=bool(alt),
                )
            )
        images_with_alt = sum(1 for image in images if image.has_alt)

        # --- Links ---
        links = []
        for a in soup.find_all("a", href=True):
            raw_href = _attr(a, "href").strip()
            try:
                resolved = urljoin(url, raw_href)
            except ValueError:
                resolved = raw_href
            links.append(
                LinkInfo(
                    href=resolved,
                    text=a.get_text(strip=True),
                    is_internal=is_internal_link(raw_href, url),
                )
            )
        internal_links = sum(1 for link in links if link.is_internal)

        # --- Content (visible text only) ---
        body = soup.body or soup
        body_text = " ".join(body.get_text(separator=" ").split())
        word_count = count_words(body_text)

        # --- Technical ---
        canonical_href = _attr(soup.find("link", attrs={"rel": "canonical"}), "href").strip()
        charset_tag = soup.find("meta", attrs={"charset": True})
        html_tag = soup.find("html")

        keywords = self.extract_keywords(body_text)

        signals = SignalSet(
            url=url,
            timestamp=datetime.now(timezone.utc),
            load_time_ms=max(0, int(load_time_ms)),
            title=raw_title.strip(),
            title_length=len(raw_title),
            meta_description=meta_description,
            meta_description_length=len(meta_description),
            meta_keywords=meta_keywords,
            og_title=og_title,
            og_description=og_description,
            og_image=og_image,
            h1=h1,
            h2=h2,
            h3=h3,
            h1_count=len(h1),
            h2_count=len(h2),
            h3_count=len(h3),
            images=tuple(images),
            image_count=len(images),
            images_with_alt=images_with_alt,
            images_without_alt=len(images) - images_with_alt,
            links=tuple(links),
            total_links=len(links),
            internal_links=internal_links,
            external_links=len(links) - internal_links,
            body_text=body_text,
            word_count=word_count,
            paragraphs=len(soup.find_all("p")),
            canonical=urljoin(url, canonical_href) if canonical_href else "",
            viewport=_attr(soup.find("meta", attrs={"name": "viewport"}), "content"),
            charset=_attr(charset_tag, "charset"),
            language=_attr(html_tag, "lang"),
            is_https=urlparse(url).scheme.lower() == "https",
            schemas=tuple(schemas),
            has_schema=len(schemas) > 0,
            keywords=tuple(keywords),
            top_keywords=tuple((k.word, k.count) for k in keywords[: self.config.top_keyword_limit]),
        )

        logger.info(
            "Extracted %s: title=%r images=%d links=%d words=%d keywords=%d h1=%d schema=%s",
            url,
            signals.title[:50],
            signals.image_count,
            signals.total_links,
            signals.word_count,
            len(signals.keywords),
            signals.h1_count,
            signals.has_schema,
        )
        return signals


def extract_signals(
    markup: str,
    url: str,
    load_time_ms: int = 0,
    config: AnalyzerConfig = DEFAULT_CONFIG,
) -> SignalSet:
    return Extractor(config).extract(markup, url, load_time_ms)
