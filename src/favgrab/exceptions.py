"""
Exception types raised by the lookup pipeline.
"""

from __future__ import annotations

from typing import Optional


class FavgrabError(Exception):
    """Base class for all lookup failures."""


class InvalidURL(FavgrabError, ValueError):
    """User input could not be turned into an absolute http(s) URL."""

    def __init__(self, value: str, reason: str = "unparseable URL"):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid URL {value!r}: {reason}")


class FetchFailed(FavgrabError):
    """The relay did not return usable page content.

    ``cause`` keeps the underlying reason for diagnostics only; callers
    never show it to the user.
    """

    def __init__(self, url: str, cause: str, *, status: Optional[int] = None):
        self.url = url
        self.cause = cause
        self.status = status
        super().__init__(f"Failed to fetch {url}: {cause}")
