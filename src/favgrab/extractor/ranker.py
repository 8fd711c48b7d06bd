"""
Deduplicates, filters and orders icon candidates.
"""

from __future__ import annotations

import re
from typing import Iterable

from ..normalizer import origin
from .models import IconCandidate

FALLBACK_ICON_PATH = "/favicon.ico"
FALLBACK_ICON_SIZE = "16x16"

_LEADING_DIGITS = re.compile(r"\s*(\d+)")


def size_rank(size: str) -> int:
    """Leading integer of the part of ``size`` before the first ``x``.

    ``"180x180"`` ranks 180; ``"default"``, ``"any"`` and tokens without an
    ``x`` rank 0.
    """
    head, sep, _ = size.lower().partition("x")
    if not sep:
        return 0
    match = _LEADING_DIGITS.match(head)
    return int(match.group(1)) if match else 0


def fallback_icon(base_url: str) -> IconCandidate:
    return IconCandidate(
        url=origin(base_url) + FALLBACK_ICON_PATH,
        size=FALLBACK_ICON_SIZE,
        type="icon",
    )


def rank_icons(candidates: Iterable[IconCandidate], base_url: str) -> list[IconCandidate]:
    """Return the final icon list for ``base_url``.

    Appends the ``/favicon.ico`` fallback, keeps the first record per URL,
    drops non-http URLs and sorts by descending size rank. Ties keep their
    input order.
    """
    icons = list(candidates)
    icons.append(fallback_icon(base_url))

    unique: dict[str, IconCandidate] = {}
    for icon in icons:
        unique.setdefault(icon.url, icon)

    absolute = [icon for icon in unique.values() if icon.url.startswith("http")]
    return sorted(absolute, key=lambda icon: size_rank(icon.size), reverse=True)
