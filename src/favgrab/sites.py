"""
Example sites offered to users for a quick first lookup.
"""

from __future__ import annotations

from typing import NamedTuple, Optional


class ExampleSite(NamedTuple):
    name: str
    url: str


EXAMPLE_SITES: tuple[ExampleSite, ...] = (
    ExampleSite("GitHub", "github.com"),
    ExampleSite("Stack Overflow", "stackoverflow.com"),
    ExampleSite("Microsoft", "microsoft.com"),
    ExampleSite("Apple", "apple.com"),
    ExampleSite("Amazon", "amazon.com"),
    ExampleSite("Google", "google.com"),
)


def find_example(name: str) -> Optional[ExampleSite]:
    """Case-insensitive lookup by display name or address."""
    wanted = name.strip().lower()
    for site in EXAMPLE_SITES:
        if wanted in (site.name.lower(), site.url):
            return site
    return None
