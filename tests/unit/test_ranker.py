"""
Tests for icon deduplication, filtering and ordering.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from favgrab.extractor.models import IconCandidate
from favgrab.extractor.ranker import fallback_icon, rank_icons, size_rank

BASE_URL = "https://example.com/docs/"

candidate_urls = st.sampled_from(
    [
        "https://example.com/a.png",
        "https://example.com/b.png",
        "http://cdn.example.com/c.png",
        "https://example.com/favicon.ico",
        "data:image/png;base64,AAAA",
        "ftp://example.com/d.png",
    ]
)
candidate_sizes = st.sampled_from(["16x16", "32x32", "180x180", "512x512", "default", "any", "64", "48X48"])
candidates = st.lists(
    st.builds(IconCandidate, url=candidate_urls, size=candidate_sizes, type=st.sampled_from(["icon", "apple-touch-icon"])),
    max_size=20,
)


@pytest.mark.unit
class TestSizeRank:
    @pytest.mark.parametrize(
        "size, expected",
        [
            ("180x180", 180),
            ("16x16", 16),
            ("512x512", 512),
            ("32X32", 32),
            ("16x16 32x32", 16),
            (" 48x48", 48),
            ("default", 0),
            ("any", 0),
            ("", 0),
            ("180", 0),
            ("x16", 0),
        ],
    )
    def test_size_rank(self, size, expected):
        assert size_rank(size) == expected


@pytest.mark.unit
class TestRankIcons:
    def test_appends_fallback_icon(self):
        ranked = rank_icons([], BASE_URL)
        assert ranked == [IconCandidate("https://example.com/favicon.ico", "16x16", "icon")]

    def test_fallback_uses_origin(self):
        assert fallback_icon("http://Example.com:8080/a/b?x=1").url == "http://example.com:8080/favicon.ico"

    def test_first_seen_record_wins(self):
        icons = [
            IconCandidate("https://example.com/a.png", "64x64", "apple-touch-icon"),
            IconCandidate("https://example.com/a.png", "512x512", "icon"),
        ]
        ranked = rank_icons(icons, BASE_URL)
        matching = [icon for icon in ranked if icon.url == "https://example.com/a.png"]
        assert matching == [icons[0]]

    def test_declared_favicon_beats_fallback(self):
        declared = IconCandidate("https://example.com/favicon.ico", "default", "shortcut icon")
        ranked = rank_icons([declared], BASE_URL)
        assert ranked == [declared]

    def test_drops_non_http_urls(self):
        icons = [
            IconCandidate("data:image/png;base64,AAAA", "32x32", "icon"),
            IconCandidate("/relative.png", "32x32", "icon"),
        ]
        ranked = rank_icons(icons, BASE_URL)
        assert [icon.url for icon in ranked] == ["https://example.com/favicon.ico"]

    def test_sorted_by_size_with_stable_ties(self):
        icons = [
            IconCandidate("https://example.com/default.png", "default", "icon"),
            IconCandidate("https://example.com/32-a.png", "32x32", "icon"),
            IconCandidate("https://example.com/180.png", "180x180", "apple-touch-icon"),
            IconCandidate("https://example.com/32-b.png", "32x32", "icon"),
            IconCandidate("https://example.com/any.svg", "any", "icon"),
        ]
        ranked = rank_icons(icons, BASE_URL)
        assert [icon.url for icon in ranked] == [
            "https://example.com/180.png",
            "https://example.com/32-a.png",
            "https://example.com/32-b.png",
            "https://example.com/favicon.ico",
            "https://example.com/default.png",
            "https://example.com/any.svg",
        ]

    @given(icons=candidates)
    def test_urls_are_unique(self, icons):
        urls = [icon.url for icon in rank_icons(icons, BASE_URL)]
        assert len(urls) == len(set(urls))

    @given(icons=candidates)
    def test_urls_are_http(self, icons):
        assert all(icon.url.startswith("http") for icon in rank_icons(icons, BASE_URL))

    @given(icons=candidates)
    def test_sizes_never_increase(self, icons):
        ranks = [size_rank(icon.size) for icon in rank_icons(icons, BASE_URL)]
        assert all(a >= b for a, b in zip(ranks, ranks[1:]))

    @given(icons=candidates)
    def test_every_http_url_survives(self, icons):
        expected = {icon.url for icon in icons if icon.url.startswith("http")}
        expected.add("https://example.com/favicon.ico")
        assert {icon.url for icon in rank_icons(icons, BASE_URL)} == expected
