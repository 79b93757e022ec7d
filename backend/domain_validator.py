"""Domain existence check via a DNS-over-HTTPS JSON resolver.

Consulted before fetching; never raises.
"""

import logging
from urllib.parse import urlparse

import requests

from config import DNS_API_URL, DNS_TIMEOUT_SECONDS
from errors import InvalidUrl
from fetcher import normalize_url
from models import DomainCheck

logger = logging.getLogger(__name__)

NOERROR = 0
NXDOMAIN = 3


def validate_domain(url: str) -> DomainCheck:
    """Return whether `url`'s hostname has at least one A record."""
    try:
        hostname = urlparse(normalize_url(url)).hostname or ""
    except InvalidUrl:
        return DomainCheck(valid=False, error="Invalid URL format", domain=url)

    try:
        response = requests.get(
            DNS_API_URL,
            params={"name": hostname, "type": "A"},
            headers={"Accept": "application/dns-json"},
            timeout=DNS_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        logger.warning("DNS lookup failed for %s: %s", hostname, e)
        return DomainCheck(valid=False, error=f"Validation failed: {e}", domain=hostname)

    status = data.get("Status") if isinstance(data, dict) else None
    answers = data.get("Answer") if isinstance(data, dict) else None

    if status == NOERROR and answers:
        logger.info("Domain %s resolves", hostname)
        return DomainCheck(valid=True, domain=hostname)
    if status == NXDOMAIN:
        logger.info("Domain %s not found (NXDOMAIN)", hostname)
        return DomainCheck(valid=False, error="Domain not registered", domain=hostname)

    logger.info("Domain %s could not be validated, DNS status %s", hostname, status)
    return DomainCheck(valid=False, error="Could not validate domain", domain=hostname)
