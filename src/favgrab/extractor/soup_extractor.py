"""
BeautifulSoup-based page metadata and icon declaration extractor.
"""

from __future__ import annotations

import asyncio
from typing import NamedTuple, Optional
from urllib.parse import urljoin

import structlog
from bs4 import BeautifulSoup
from bs4.exceptions import ParserRejectedMarkup

from ..normalizer import canonicalize
from .models import IconCandidate, PageMetadata

logger = structlog.get_logger(__name__)


class IconSelector(NamedTuple):
    selector: str
    default_size: str


# Scanned in this order; emission order follows it.
ICON_SELECTORS: tuple[IconSelector, ...] = (
    IconSelector('link[sizes="512x512"]', "512x512"),
    IconSelector('link[sizes="256x256"]', "256x256"),
    IconSelector('link[sizes="192x192"]', "192x192"),
    IconSelector('link[sizes="180x180"]', "180x180"),
    IconSelector('link[sizes="128x128"]', "128x128"),
    IconSelector('link[sizes="96x96"]', "96x96"),
    IconSelector('link[sizes="64x64"]', "64x64"),
    IconSelector('link[sizes="32x32"]', "32x32"),
    IconSelector('link[sizes="16x16"]', "16x16"),
    IconSelector('link[rel="icon"]', "default"),
    IconSelector('link[rel="shortcut icon"]', "default"),
    IconSelector('link[rel="apple-touch-icon"]', "180x180"),
    IconSelector('link[rel="apple-touch-icon-precomposed"]', "180x180"),
)


def resolve_href(href: str, base_url: str) -> str:
    """Return ``href`` as-is when it already starts with ``http``, else resolve it.

    Resolved URLs get a lowercase scheme and host and no default port, so
    they compare equal to the origin-based fallback icon.
    """
    if href.startswith("http"):
        return href
    return canonicalize(urljoin(base_url, href))


class SoupMetadataExtractor:
    """Extracts title, keywords, description and icon candidates from HTML."""

    name = "soup_metadata"

    def __init__(self, selectors: tuple[IconSelector, ...] = ICON_SELECTORS) -> None:
        self.selectors = selectors
        self.config = {
            "parser": "html.parser",
        }

    def _parse(self, html: str) -> BeautifulSoup:
        # Keep multi-valued attributes such as rel as plain strings so that
        # "shortcut icon" is reported the way the page declared it.
        try:
            return BeautifulSoup(html, self.config["parser"], multi_valued_attributes=None)
        except ParserRejectedMarkup as e:
            logger.warning("Parser rejected markup, treating document as empty", error=str(e))
            return BeautifulSoup("", self.config["parser"], multi_valued_attributes=None)

    @staticmethod
    def _meta_content(soup: BeautifulSoup, name: str) -> Optional[str]:
        tag = soup.select_one(f'meta[name="{name}"]')
        if tag is None:
            return None
        return tag.get("content") or None

    def _icon_candidates(self, soup: BeautifulSoup, base_url: str) -> list[IconCandidate]:
        icons: list[IconCandidate] = []
        for selector, default_size in self.selectors:
            for element in soup.select(selector):
                href = element.get("href")
                if not href:
                    continue
                icons.append(
                    IconCandidate(
                        url=resolve_href(href, base_url),
                        size=element.get("sizes") or default_size,
                        type=element.get("rel") or "icon",
                    )
                )
        return icons

    def extract(self, html: str, base_url: str) -> PageMetadata:
        """Extract page metadata and icon declarations.

        Never raises for bad markup; absent fields come back as ``None``.

        Args:
            html: Raw page HTML as relayed.
            base_url: Normalized page URL used to resolve relative hrefs.

        Returns:
            PageMetadata with icon candidates in selector order.
        """
        soup = self._parse(html)

        title = None
        title_tag = soup.find("title")
        if title_tag:
            title = title_tag.get_text() or None

        metadata = PageMetadata(
            title=title,
            keywords=self._meta_content(soup, "keywords"),
            description=self._meta_content(soup, "description"),
            icons=self._icon_candidates(soup, base_url),
        )
        logger.debug(
            "Extracted page metadata",
            url=base_url,
            has_title=metadata.title is not None,
            icon_candidates=len(metadata.icons),
        )
        return metadata

    async def extract_async(self, html: str, base_url: str) -> PageMetadata:
        """Run :meth:`extract` in the default thread pool."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.extract, html, base_url)
