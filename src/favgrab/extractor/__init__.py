"""
Metadata extraction and icon ranking.
"""

from .models import ErrorKind, ExtractionResult, IconCandidate, LookupOutcome, PageMetadata
from .ranker import fallback_icon, rank_icons, size_rank
from .soup_extractor import ICON_SELECTORS, IconSelector, SoupMetadataExtractor, resolve_href

__all__ = [
    "ErrorKind",
    "ExtractionResult",
    "ICON_SELECTORS",
    "IconCandidate",
    "IconSelector",
    "LookupOutcome",
    "PageMetadata",
    "SoupMetadataExtractor",
    "fallback_icon",
    "rank_icons",
    "resolve_href",
    "size_rank",
]
