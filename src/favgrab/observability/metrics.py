"""
Defines Prometheus metrics for lookups.
"""

from __future__ import annotations

from typing import Any, Dict

from prometheus_client import REGISTRY as _PROM_REGISTRY
from prometheus_client import Counter as _OrigCounter
from prometheus_client import Histogram as _OrigHistogram

# ---------------------------------------------------------------------------
# Duplicate-safe Prometheus metric wrappers
# ---------------------------------------------------------------------------
# Re-importing this module must not trip duplicate
# registration errors in the global registry.


def _duplicate_safe_factory(metric_cls):
    """Return a factory that reuses an existing collector if already present."""

    def _factory(name: str, documentation: str, *args, **kwargs):  # type: ignore[override]
        existing = _PROM_REGISTRY._names_to_collectors.get(name)
        if existing is not None:
            return existing  # type: ignore[return-value]

        try:
            return metric_cls(name, documentation, *args, **kwargs)  # type: ignore[call-arg]
        except ValueError:
            return _PROM_REGISTRY._names_to_collectors[name]  # type: ignore[return-value]

    return _factory


Counter = _duplicate_safe_factory(_OrigCounter)  # type: ignore[assignment]
Histogram = _duplicate_safe_factory(_OrigHistogram)  # type: ignore[assignment]


def _create_metrics() -> Dict[str, Any]:
    return {
        "lookups_total": Counter(
            "favgrab_lookups_total",
            "Total number of lookups by outcome",
            ["outcome"],
        ),
        "relay_fetch_seconds": Histogram(
            "favgrab_relay_fetch_seconds",
            "Time taken by the relay request",
            buckets=[0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0, 60.0],
        ),
        "icons_per_lookup": Histogram(
            "favgrab_icons_per_lookup",
            "Number of ranked icons returned by successful lookups",
            buckets=[1, 2, 3, 5, 8, 13, 21],
        ),
    }


METRICS: Dict[str, Any] = _create_metrics()
