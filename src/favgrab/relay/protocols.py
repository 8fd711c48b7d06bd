"""
Protocols for pluggable page fetchers.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PageFetcher(Protocol):
    """Returns the raw HTML of a target page."""

    async def fetch(self, url: str) -> str:
        """Fetch ``url`` and return its HTML.

        Raises:
            FetchFailed: on any condition that yields no usable content.
        """
        ...
