"""Relay access for fetching target pages."""

from .client import RelayClient
from .protocols import PageFetcher

__all__ = ["PageFetcher", "RelayClient"]
