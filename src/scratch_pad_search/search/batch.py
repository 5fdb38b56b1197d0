"""Batch highlighting across a note collection.

The query is parsed once and its term sets compiled once; every note then
reuses the same compiled patterns, so cost grows linearly with the number of
notes. Every input note receives an entry in the result maps, including
notes without matches and batches run with an empty query.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
from types import MappingProxyType
from typing import TYPE_CHECKING

from scratch_pad_search.observability.metrics import (
    HIGHLIGHT_LATENCY,
    HIGHLIGHT_MATCHES,
    HIGHLIGHT_NOTES,
    track_latency,
)
from scratch_pad_search.observability.tracing import create_span
from scratch_pad_search.search.matcher import MatchFinder
from scratch_pad_search.search.models import (
    BatchResult,
    EnhancedSearchResult,
    HighlightMatch,
    NoteId,
    Snippet,
)
from scratch_pad_search.search.options import DEFAULT_HIGHLIGHT_OPTIONS, HighlightOptions
from scratch_pad_search.search.query_parser import parse_search_query
from scratch_pad_search.search.snippet import build_snippets


if TYPE_CHECKING:
    from opentelemetry.trace import Tracer

    from scratch_pad_search.domain.note import Note, SearchResultPage


logger = logging.getLogger(__name__)

# Field searches on these names are highlighted as "field" matches
BODY_FIELDS = ("content", "body")
TITLE_FIELDS = ("title", "nickname")


class BatchProcessor:
    """Applies matching and snippet building to many notes per query.

    One processor may serve many queries; its MatchFinder keeps the compiled
    term sets of recent queries in a bounded cache.
    """

    def __init__(self, matcher: MatchFinder | None = None, tracer: Tracer | None = None) -> None:
        self.matcher = matcher or MatchFinder()
        self._tracer = tracer

    def process(
        self,
        notes: Iterable[Note],
        query: str,
        options: HighlightOptions | None = None,
    ) -> BatchResult:
        """Highlight titles and build body snippets for every note.

        Args:
            notes: Notes to process; only read, never modified.
            query: Raw query text.
            options: Matching and snippet options shared by all notes.

        Returns:
            BatchResult keyed by note id. ``total_matches`` counts every body
            match, including those beyond the snippet cap.
        """
        options = options or DEFAULT_HIGHLIGHT_OPTIONS
        parsed = parse_search_query(query)
        query_terms = parsed.all_terms

        body_terms = self.matcher.compile(query_terms, options, field_terms=parsed.field_values(*BODY_FIELDS))
        title_terms = self.matcher.compile(query_terms, options, field_terms=parsed.field_values(*TITLE_FIELDS))

        snippets: dict[NoteId, tuple[Snippet, ...]] = {}
        titles: dict[NoteId, tuple[HighlightMatch, ...]] = {}
        total_matches = 0
        note_count = 0

        with (
            create_span("search.highlight.batch", {"search.term_count": len(query_terms)}, tracer=self._tracer) as span,
            track_latency(HIGHLIGHT_LATENCY, operation="batch"),
        ):
            for note in notes:
                body_matches = body_terms.find(note.content)
                snippets[note.id] = tuple(build_snippets(note.content, body_matches, options))
                titles[note.id] = tuple(title_terms.find(note.display_title))
                total_matches += len(body_matches)
                note_count += 1

            span.set_attribute("search.note_count", note_count)
            span.set_attribute("search.total_matches", total_matches)

        HIGHLIGHT_NOTES.inc(note_count)
        HIGHLIGHT_MATCHES.inc(total_matches)
        logger.debug(
            "Batch highlighting complete",
            extra={"note_count": note_count, "term_count": len(query_terms), "total_matches": total_matches},
        )

        return BatchResult(
            snippets_by_note_id=MappingProxyType(snippets),
            title_highlights_by_note_id=MappingProxyType(titles),
            query_terms=query_terms,
            operators=parsed.operators,
            total_matches=total_matches,
        )

    def enhance(
        self,
        page: SearchResultPage,
        query: str,
        options: HighlightOptions | None = None,
    ) -> EnhancedSearchResult:
        """Decorate a backend result page with snippets and title highlights."""
        batch = self.process(page.notes, query, options)
        return EnhancedSearchResult(
            page=page,
            query=query,
            snippets=batch.snippets_by_note_id,
            highlighted_titles=batch.title_highlights_by_note_id,
            total_matches=batch.total_matches,
            query_terms=batch.query_terms,
            boolean_operators=batch.operators,
        )


def batch_process_search_results(
    notes: Iterable[Note],
    query: str,
    options: HighlightOptions | None = None,
) -> BatchResult:
    """Process a batch with a throwaway processor."""
    return BatchProcessor().process(notes, query, options)
