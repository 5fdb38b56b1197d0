"""Observability module for OpenTelemetry tracing, Prometheus metrics, and JSON logging."""

from scratch_pad_search.observability.context import get_trace_context, trace_context
from scratch_pad_search.observability.logging import JsonFormatter, configure_logging
from scratch_pad_search.observability.metrics import (
    HIGHLIGHT_LATENCY,
    HIGHLIGHT_MATCHES,
    HIGHLIGHT_NOTES,
    track_latency,
)
from scratch_pad_search.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "HIGHLIGHT_LATENCY",
    "HIGHLIGHT_MATCHES",
    "HIGHLIGHT_NOTES",
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "trace_context",
    "track_latency",
]
