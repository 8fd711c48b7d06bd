"""
Data models for extraction results.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Optional


@dataclass(slots=True, frozen=True)
class IconCandidate:
    """One discovered favicon or touch-icon declaration."""

    url: str
    size: str  # e.g. "180x180" or "default"
    type: str  # rel keyword, e.g. "icon", "apple-touch-icon"


@dataclass(slots=True, frozen=True)
class PageMetadata:
    """Raw fields pulled from a document. ``None`` marks an absent field."""

    title: Optional[str]
    keywords: Optional[str]
    description: Optional[str]
    icons: list[IconCandidate] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class ExtractionResult:
    """Display-ready lookup result with fallback text already applied."""

    page_title: str
    keywords: str
    description: str
    icons: tuple[IconCandidate, ...] = ()

    @classmethod
    def empty(cls) -> ExtractionResult:
        return cls(page_title="", keywords="", description="", icons=())

    @property
    def is_empty(self) -> bool:
        return not (self.page_title or self.keywords or self.description or self.icons)

    def to_dict(self) -> dict[str, Any]:
        return {
            "pageTitle": self.page_title,
            "keywords": self.keywords,
            "description": self.description,
            "icons": [asdict(icon) for icon in self.icons],
        }


class ErrorKind(str, Enum):
    """Failure categories surfaced to the presentation layer."""

    INPUT_REQUIRED = "inputRequired"
    INVALID_URL = "invalidUrl"
    FETCH_FAILED = "fetchError"


@dataclass(slots=True, frozen=True)
class LookupOutcome:
    """Immutable result of one lookup: either a result or an error marker."""

    request_id: int
    query: str
    url: Optional[str]
    result: ExtractionResult
    error: Optional[ErrorKind] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "requestId": self.request_id,
            "query": self.query,
            "url": self.url,
            "ok": self.ok,
            "error": self.error.value if self.error else None,
            "message": self.message,
            "result": self.result.to_dict(),
        }
