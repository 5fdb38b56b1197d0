"""Shared test fixtures and configuration."""

import logging

from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
import pytest

from scratch_pad_search.domain.note import Note
from scratch_pad_search.observability.context import trace_context
from scratch_pad_search.observability.tracing import get_tracer, init_tracing


# Settings fields that a developer shell might export; tests always start from defaults
SETTINGS_ENV_KEYS = (
    "LOG_LEVEL",
    "LOG_JSON",
    "MAX_SNIPPETS",
    "SNIPPET_LENGTH",
    "CONTEXT_WINDOW",
    "CASE_SENSITIVE",
    "PATTERN_CACHE_SIZE",
    "MIN_CONFIDENCE",
    "MAX_SUGGESTIONS",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch, tmp_path):
    """Clear settings env vars and keep any local .env out of reach."""
    for key in SETTINGS_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def restore_root_logging():
    """configure_logging replaces root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(autouse=True)
def reset_trace_context():
    token = trace_context.set(None)
    yield
    trace_context.reset(token)


@pytest.fixture
def span_exporter():
    """In-memory exporter wired to a private tracer provider."""
    return InMemorySpanExporter()


@pytest.fixture
def tracer(span_exporter):
    return get_tracer(init_tracing(exporter=span_exporter))


@pytest.fixture
def make_note():
    """Factory for notes with sequential ids."""
    counter = iter(range(1, 1_000_000))

    def _make(content: str = "", **kwargs) -> Note:
        kwargs.setdefault("id", next(counter))
        return Note(content=content, **kwargs)

    return _make


@pytest.fixture
def sample_notes(make_note):
    """A handful of notes resembling a real scratch pad."""
    return [
        make_note("Buy milk and eggs. Remember the milk!", nickname="Groceries"),
        make_note("Meeting notes\nDiscussed the search highlighting rollout and snippet length."),
        make_note("Nothing relevant in here at all.", title="Misc"),
    ]
