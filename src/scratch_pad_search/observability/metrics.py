"""Prometheus metrics for highlighting latency and volume."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING

from prometheus_client import Counter, Histogram


if TYPE_CHECKING:
    from collections.abc import Generator


HIGHLIGHT_LATENCY = Histogram(
    "search_highlight_latency_seconds",
    "Latency of highlighting operations",
    ["operation"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)

HIGHLIGHT_NOTES = Counter(
    "search_highlight_notes_total",
    "Notes processed by batch highlighting",
)

HIGHLIGHT_MATCHES = Counter(
    "search_highlight_matches_total",
    "Body matches found by batch highlighting",
)


@contextmanager
def track_latency(histogram: Histogram, **labels: str) -> Generator[None, None, None]:
    """Context manager to track operation latency."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.labels(**labels).observe(time.perf_counter() - start)
