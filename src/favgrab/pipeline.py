"""
Lookup pipeline: normalize -> relay fetch -> extract -> rank.
"""

from __future__ import annotations

import itertools
from typing import Optional

import structlog

from .exceptions import FetchFailed, InvalidURL
from .extractor.models import ErrorKind, ExtractionResult, LookupOutcome, PageMetadata
from .extractor.ranker import rank_icons
from .extractor.soup_extractor import SoupMetadataExtractor
from .i18n import Localizer
from .normalizer import normalize
from .observability import increment, observe
from .relay.protocols import PageFetcher

logger = structlog.get_logger(__name__)


class LookupPipeline:
    """Runs one lookup per call and returns an immutable :class:`LookupOutcome`.

    Errors never escape :meth:`run`: invalid input and relay failures come
    back as outcomes carrying an :class:`ErrorKind` and an empty result.
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        localizer: Optional[Localizer] = None,
        extractor: Optional[SoupMetadataExtractor] = None,
    ):
        self.fetcher = fetcher
        self.localizer = localizer or Localizer()
        self.extractor = extractor or SoupMetadataExtractor()
        self._request_ids = itertools.count(1)

    def build_result(self, metadata: PageMetadata, base_url: str, localizer: Localizer) -> ExtractionResult:
        """Apply fallback text and icon ranking to raw extracted fields."""
        return ExtractionResult(
            page_title=metadata.title or localizer.t("noTitle"),
            keywords=metadata.keywords or localizer.t("noKeywords"),
            description=metadata.description or localizer.t("noDescription"),
            icons=tuple(rank_icons(metadata.icons, base_url)),
        )

    def _failure(
        self, request_id: int, query: str, url: Optional[str], kind: ErrorKind, localizer: Localizer
    ) -> LookupOutcome:
        increment("lookups_total", labels={"outcome": kind.value})
        return LookupOutcome(
            request_id=request_id,
            query=query,
            url=url,
            result=ExtractionResult.empty(),
            error=kind,
            message=localizer.t(kind.value),
        )

    async def run(self, query: str, *, locale: Optional[str] = None, request_id: Optional[int] = None) -> LookupOutcome:
        """Look up icons and metadata for the user-entered ``query``."""
        if request_id is None:
            request_id = next(self._request_ids)
        localizer = self.localizer.with_locale(locale)

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            return await self._run(request_id, query, localizer)

    async def _run(self, request_id: int, query: str, localizer: Localizer) -> LookupOutcome:
        if not query:
            return self._failure(request_id, query, None, ErrorKind.INPUT_REQUIRED, localizer)

        try:
            url = normalize(query)
        except InvalidURL as e:
            logger.info("Rejected lookup input", query=query, reason=e.reason)
            return self._failure(request_id, query, None, ErrorKind.INVALID_URL, localizer)

        try:
            html = await self.fetcher.fetch(url)
        except FetchFailed as e:
            logger.warning("Relay fetch failed", url=url, cause=e.cause, status=e.status)
            return self._failure(request_id, query, url, ErrorKind.FETCH_FAILED, localizer)

        metadata = await self.extractor.extract_async(html, url)
        result = self.build_result(metadata, url, localizer)

        increment("lookups_total", labels={"outcome": "ok"})
        observe("icons_per_lookup", len(result.icons))
        logger.info("Lookup completed", url=url, icons=len(result.icons))
        return LookupOutcome(request_id=request_id, query=query, url=url, result=result)


class LookupSession:
    """Holds the single visible outcome for one user.

    Every submission gets a higher request id than the last. An outcome
    that completes after a newer submission was made is discarded, so
    ``current`` always reflects the most recent request.
    """

    def __init__(self, pipeline: LookupPipeline):
        self.pipeline = pipeline
        self.current: Optional[LookupOutcome] = None
        self._sequence = itertools.count(1)
        self._latest_issued = 0
        self._pending: set[int] = set()

    @property
    def loading(self) -> bool:
        return bool(self._pending)

    async def submit(self, query: str, *, locale: Optional[str] = None) -> Optional[LookupOutcome]:
        """Run a lookup; returns ``None`` when a newer lookup superseded it."""
        request_id = next(self._sequence)
        self._latest_issued = request_id
        self.current = None
        self._pending.add(request_id)
        try:
            outcome = await self.pipeline.run(query, locale=locale, request_id=request_id)
        finally:
            self._pending.discard(request_id)

        if request_id != self._latest_issued:
            logger.info("Discarding stale lookup outcome", request_id=request_id, latest=self._latest_issued)
            return None
        self.current = outcome
        return outcome
