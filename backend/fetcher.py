"""Page fetcher: retrieve a target's markup through the fetch proxy.

Single attempt, no retries. The request runs on a worker thread and the caller
waits at most FETCH_TIMEOUT_SECONDS for it, covering connect, headers and
body. On expiry the socket is shut down so a blocked read returns and the
worker releases the connection.
"""

import concurrent.futures
import logging
import re
import threading
import time
from urllib.parse import quote, urlparse

import requests

from config import FETCH_PROXY_URL, FETCH_TIMEOUT_SECONDS, FETCH_USER_AGENT
from errors import FetchTimeout, HttpError, InvalidUrl, NetworkError
from models import FetchResult

logger = logging.getLogger(__name__)

_REQUEST_HEADERS = {
    "User-Agent": FETCH_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml",
    "Accept-Language": "en-US,en;q=0.9",
}

_SCHEME_RE = re.compile(r"^[a-z][a-z0-9+.\-]*://", re.I)
_CHARSET_RE = re.compile(r"charset=([\w\-]+)", re.I)
_CHUNK_SIZE = 64 * 1024


def normalize_url(url: str) -> str:
    """Return `url` with a scheme, prepending https:// when none is given."""
    candidate = (url or "").strip()
    if not candidate:
        raise InvalidUrl(url)
    if not _SCHEME_RE.match(candidate):
        candidate = "https://" + candidate

    try:
        parsed = urlparse(candidate)
        hostname = parsed.hostname
    except ValueError:
        raise InvalidUrl(url) from None

    if parsed.scheme.lower() not in ("http", "https") or not hostname:
        raise InvalidUrl(url)
    if any(ch.isspace() for ch in hostname):
        raise InvalidUrl(url)
    return candidate


def build_fetch_url(url: str, proxy_url: str | None = None) -> str:
    """Wrap a fully-qualified target URL in the proxy endpoint, if one is set."""
    proxy = FETCH_PROXY_URL if proxy_url is None else proxy_url
    if not proxy:
        return url
    return proxy + quote(url, safe="")


def _decode(body: bytes, content_type: str) -> str:
    match = _CHARSET_RE.search(content_type or "")
    encoding = match.group(1) if match else "utf-8"
    try:
        return body.decode(encoding, errors="replace")
    except LookupError:
        return body.decode("utf-8", errors="replace")


class _Download:
    """A streamed GET running on a worker thread that the caller can abort."""

    def __init__(self, fetch_url: str, full_url: str, seconds: float) -> None:
        self.fetch_url = fetch_url
        self.full_url = full_url
        self.seconds = seconds
        self.cancelled = threading.Event()
        self._response: requests.Response | None = None
        self._lock = threading.Lock()

    def run(self) -> str:
        try:
            response = requests.get(
                self.fetch_url,
                headers=_REQUEST_HEADERS,
                timeout=self.seconds,
                stream=True,
            )
        except requests.Timeout:
            logger.warning("Fetch timed out for %s", self.full_url)
            raise FetchTimeout(self.full_url, self.seconds) from None
        except requests.RequestException as e:
            logger.warning("Fetch failed for %s: %s", self.full_url, e)
            raise NetworkError(f"Network error fetching {self.full_url}: {e}") from e

        with self._lock:
            self._response = response
            abandoned = self.cancelled.is_set()

        try:
            if abandoned:
                raise FetchTimeout(self.full_url, self.seconds)
            if not response.ok:
                logger.warning("Fetch for %s returned HTTP %s", self.full_url, response.status_code)
                raise HttpError(response.status_code, response.reason or "")

            chunks: list[bytes] = []
            for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                if self.cancelled.is_set():
                    raise FetchTimeout(self.full_url, self.seconds)
                if chunk:
                    chunks.append(chunk)
            return _decode(b"".join(chunks), response.headers.get("Content-Type", ""))
        except requests.Timeout:
            logger.warning("Fetch timed out reading %s", self.full_url)
            raise FetchTimeout(self.full_url, self.seconds) from None
        except requests.RequestException as e:
            if self.cancelled.is_set():
                raise FetchTimeout(self.full_url, self.seconds) from None
            logger.warning("Fetch failed reading %s: %s", self.full_url, e)
            raise NetworkError(f"Network error fetching {self.full_url}: {e}") from e
        finally:
            response.close()

    def abort(self) -> None:
        """Stop the download; a body read blocked on the socket returns at once."""
        with self._lock:
            self.cancelled.set()
            response = self._response
        if response is None:
            return
        try:
            # interrupts a read in progress on the worker thread
            response.raw.shutdown()
        except (ValueError, RuntimeError):
            # connection already released by the worker
            logger.debug("Fetch of %s finished before it could be aborted", self.full_url)


def fetch_page(
    url: str,
    proxy_url: str | None = None,
    timeout: float | None = None,
) -> FetchResult:
    """
    Fetch markup for `url` (scheme optional) and time the retrieval.

    The whole exchange (connect, headers and body) must finish within
    `timeout` seconds, FETCH_TIMEOUT_SECONDS by default. A slow server
    cannot stretch it by sending data just often enough to beat the
    per-read socket timeout.

    Raises InvalidUrl, FetchTimeout, HttpError or NetworkError.
    """
    full_url = normalize_url(url)
    fetch_url = build_fetch_url(full_url, proxy_url)
    seconds = FETCH_TIMEOUT_SECONDS if timeout is None else timeout

    logger.info("Fetching %s via %s", full_url, fetch_url)
    start = time.monotonic()

    download = _Download(fetch_url, full_url, seconds)
    pool = concurrent.futures.ThreadPoolExecutor(max_workers=1, thread_name_prefix="fetch")
    try:
        future = pool.submit(download.run)
        try:
            markup = future.result(timeout=seconds)
        except concurrent.futures.TimeoutError:
            logger.warning("Fetch deadline of %gs passed for %s", seconds, full_url)
            download.abort()
            raise FetchTimeout(full_url, seconds) from None
    finally:
        pool.shutdown(wait=False)

    load_time_ms = int((time.monotonic() - start) * 1000)
    logger.info("Fetched %s: %d characters in %d ms", full_url, len(markup), load_time_ms)
    return FetchResult(url=full_url, markup=markup, load_time_ms=load_time_ms)
