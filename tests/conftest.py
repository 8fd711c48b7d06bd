"""
Shared fixtures for the favgrab test suite.
"""

import os

import pytest

from favgrab.config import Config
from favgrab.i18n import Localizer
from favgrab.pipeline import LookupPipeline
from tests.helpers import EXAMPLE_HTML, FailingFetcher, StaticFetcher


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep FAVGRAB_* variables and stray config files out of tests."""
    for name in list(os.environ):
        if name.upper().startswith("FAVGRAB_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def example_html() -> str:
    return EXAMPLE_HTML


@pytest.fixture
def static_fetcher() -> StaticFetcher:
    return StaticFetcher()


@pytest.fixture
def failing_fetcher() -> FailingFetcher:
    return FailingFetcher()


@pytest.fixture
def localizer() -> Localizer:
    return Localizer("en")


@pytest.fixture
def pipeline(static_fetcher, localizer) -> LookupPipeline:
    return LookupPipeline(static_fetcher, localizer)
