"""Data models and types used across the backend.

Value objects produced by the analysis pipeline live here. All of them are
frozen: a SignalSet is built once per analyzed page and Score and
Recommendation records are derived from it without mutation. Parsed
structured data inside a SignalSet is frozen too (read-only mappings and
tuples) and dumps back to plain JSON.
API request/response shapes are in schemas.py.
"""

from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_serializer, field_validator

Priority = Literal["high", "medium", "low"]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


def _freeze(value: Any) -> Any:
    """Read-only view of parsed JSON: objects become mappingproxies, arrays tuples."""
    if isinstance(value, (dict, MappingProxyType)):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, MappingProxyType):
        return {key: _thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value


class ImageInfo(_Frozen):
    src: str = ""
    alt: str = ""
    has_alt: bool = False


class LinkInfo(_Frozen):
    href: str
    text: str = ""
    is_internal: bool = False


class KeywordStat(_Frozen):
    word: str
    count: int = Field(ge=1)
    density: float = Field(ge=0)


class SignalSet(_Frozen):
    """Flat record of everything extracted from one page.

    Absent elements default to empty strings, zero counts and empty tuples.
    """

    url: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    load_time_ms: int = Field(default=0, ge=0)

    title: str = ""
    title_length: int = Field(default=0, ge=0)

    meta_description: str = ""
    meta_description_length: int = Field(default=0, ge=0)
    meta_keywords: str = ""

    og_title: str = ""
    og_description: str = ""
    og_image: str = ""

    h1: tuple[str, ...] = ()
    h2: tuple[str, ...] = ()
    h3: tuple[str, ...] = ()
    h1_count: int = Field(default=0, ge=0)
    h2_count: int = Field(default=0, ge=0)
    h3_count: int = Field(default=0, ge=0)

    images: tuple[ImageInfo, ...] = ()
    image_count: int = Field(default=0, ge=0)
    images_with_alt: int = Field(default=0, ge=0)
    images_without_alt: int = Field(default=0, ge=0)

    links: tuple[LinkInfo, ...] = ()
    total_links: int = Field(default=0, ge=0)
    internal_links: int = Field(default=0, ge=0)
    external_links: int = Field(default=0, ge=0)

    body_text: str = ""
    word_count: int = Field(default=0, ge=0)
    paragraphs: int = Field(default=0, ge=0)

    canonical: str = ""
    viewport: str = ""
    charset: str = ""
    language: str = ""
    is_https: bool = False

    schemas: tuple[Any, ...] = ()
    has_schema: bool = False

    keywords: tuple[KeywordStat, ...] = ()
    top_keywords: tuple[tuple[str, int], ...] = ()

    @field_validator("schemas", mode="after")
    @classmethod
    def freeze_schemas(cls, value: tuple) -> tuple:
        return tuple(_freeze(item) for item in value)

    @field_serializer("schemas")
    def dump_schemas(self, value: tuple) -> list:
        return [_thaw(item) for item in value]


class Score(_Frozen):
    """Four capped sub-scores; total is always their sum."""

    on_page: int = Field(ge=0)
    technical: int = Field(ge=0)
    content: int = Field(ge=0)
    links: int = Field(ge=0)

    @computed_field
    @property
    def total(self) -> int:
        return self.on_page + self.technical + self.content + self.links


class Recommendation(_Frozen):
    priority: Priority
    title: str
    estimated_time_range: str
    description: str
    impact_statements: tuple[str, ...] = ()
    remediation_steps: tuple[str, ...] = ()
    example_markup: str | None = None
    best_practices: tuple[str, ...] = ()
    potential_points: int = Field(default=0, ge=0)


class FetchResult(_Frozen):
    url: str
    markup: str
    load_time_ms: int = Field(ge=0)


class DomainCheck(_Frozen):
    valid: bool
    domain: str = ""
    error: str | None = None


class ScreenshotResult(_Frozen):
    url: str
    available: bool
    image_url: str | None = None
    error: str | None = None


class AnalysisResult(_Frozen):
    signals: SignalSet
    score: Score
    recommendations: tuple[Recommendation, ...] = ()


class HistoryEntry(_Frozen):
    signals: SignalSet
    score: Score
