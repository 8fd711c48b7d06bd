"""Test doubles shared across the suite."""

from .fakes import EXAMPLE_HTML, RELAY_URL, FailingFetcher, GatedFetcher, StaticFetcher, relay_payload

__all__ = ["EXAMPLE_HTML", "RELAY_URL", "FailingFetcher", "GatedFetcher", "StaticFetcher", "relay_payload"]
