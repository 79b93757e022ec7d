"""Failures that end an analysis attempt.

Extraction, scoring and recommendation never raise; only URL validation,
the domain pre-check and the fetch stage do.
"""


class AnalysisError(Exception):
    """Base class for terminal pipeline failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidUrl(AnalysisError):
    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid URL format: {url!r}")
        self.url = url


class DomainNotFound(AnalysisError):
    def __init__(self, message: str, domain: str) -> None:
        super().__init__(message)
        self.domain = domain


class NetworkError(AnalysisError):
    pass


class FetchTimeout(AnalysisError):
    def __init__(self, url: str, seconds: float) -> None:
        super().__init__(f"Timed out after {seconds:g}s fetching {url}")
        self.url = url
        self.seconds = seconds


class HttpError(AnalysisError):
    def __init__(self, status: int, status_text: str) -> None:
        super().__init__(f"HTTP {status}: {status_text}".rstrip(": "))
        self.status = status
        self.status_text = status_text
