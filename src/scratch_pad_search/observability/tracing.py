"""OpenTelemetry tracing for search highlighting calls."""

from __future__ import annotations

from contextlib import contextmanager
import logging
from typing import TYPE_CHECKING, Any

from opentelemetry import trace
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor, SpanExporter
from opentelemetry.trace import SpanKind, Status, StatusCode

from scratch_pad_search.observability.context import bind_span


if TYPE_CHECKING:
    from collections.abc import Generator

    from opentelemetry.trace import Span, Tracer

logger = logging.getLogger(__name__)

SERVICE_NAME = "scratch-pad-search"


def init_tracing(
    service_name: str = SERVICE_NAME,
    resource_attributes: dict[str, str] | None = None,
    exporter: SpanExporter | None = None,
) -> TracerProvider:
    """Create a tracer provider, optionally exporting spans synchronously.

    The provider is returned rather than installed globally; pass it to
    :func:`get_tracer` or install it with ``trace.set_tracer_provider``.
    """
    attributes = {"service.name": service_name}
    if resource_attributes:
        attributes.update(resource_attributes)
    provider = TracerProvider(resource=Resource.create(attributes))
    if exporter is not None:
        provider.add_span_processor(SimpleSpanProcessor(exporter))
    logger.debug("Tracing initialized for service: %s", service_name)
    return provider


def get_tracer(provider: TracerProvider | None = None) -> Tracer:
    """Tracer from ``provider``, or from the globally installed provider."""
    if provider is not None:
        return provider.get_tracer(__name__)
    return trace.get_tracer(__name__)


@contextmanager
def create_span(
    name: str,
    attributes: dict[str, Any] | None = None,
    *,
    tracer: Tracer | None = None,
    kind: SpanKind = SpanKind.INTERNAL,
) -> Generator[Span, None, None]:
    """Open a span and mirror its ids into the logging trace context."""
    active = tracer or get_tracer()
    with active.start_as_current_span(name, kind=kind) as span:
        if attributes:
            for key, value in attributes.items():
                span.set_attribute(key, value)

        if span.get_span_context().is_valid:
            bind_span(span)

        try:
            yield span
        except Exception as exc:
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            span.record_exception(exc)
            raise
