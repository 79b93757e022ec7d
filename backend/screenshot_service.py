"""Website preview screenshots from third-party rendering services.

Each configured service is probed in order with a bounded wait. The outcome
is either an image URL or an explicit "unavailable" result; nothing here
affects scoring.
"""

import logging
from urllib.parse import quote

import requests

from config import SCREENSHOT_SERVICES, SCREENSHOT_TIMEOUT_SECONDS
from errors import InvalidUrl
from fetcher import normalize_url
from models import ScreenshotResult

logger = logging.getLogger(__name__)


def screenshot_url(service: str, url: str) -> str:
    return service + quote(url, safe="")


def capture_screenshot(
    url: str,
    services: list[str] | None = None,
    timeout: float | None = None,
) -> ScreenshotResult:
    try:
        clean_url = normalize_url(url)
    except InvalidUrl as e:
        return ScreenshotResult(url=url, available=False, error=e.message)

    candidates = SCREENSHOT_SERVICES if services is None else services
    seconds = SCREENSHOT_TIMEOUT_SECONDS if timeout is None else timeout
    error = "No screenshot services configured"

    for service in candidates:
        image_url = screenshot_url(service, clean_url)
        try:
            response = requests.get(image_url, timeout=seconds, stream=True)
        except requests.RequestException as e:
            logger.warning("Screenshot service %s failed: %s", service, e)
            error = str(e)
            continue

        try:
            content_type = response.headers.get("Content-Type", "")
            if response.ok and content_type.startswith("image/"):
                logger.info("Screenshot available for %s", clean_url)
                return ScreenshotResult(url=clean_url, available=True, image_url=image_url)
            error = f"HTTP {response.status_code} ({content_type or 'no content type'})"
            logger.info("Screenshot service %s unusable: %s", service, error)
        finally:
            response.close()

    return ScreenshotResult(url=clean_url, available=False, error=error)
