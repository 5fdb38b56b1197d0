"""Unit tests for batch highlighting of search result pages."""

import logging
import time

from prometheus_client import REGISTRY
import pytest

from scratch_pad_search.domain.note import SearchResultPage
from scratch_pad_search.search.batch import BatchProcessor, batch_process_search_results
from scratch_pad_search.search.matcher import MatchFinder, PatternCache
from scratch_pad_search.search.options import HighlightOptions


def _sample(name: str, labels: dict[str, str] | None = None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


@pytest.mark.unit
class TestBatchProcessSearchResults:
    """Tests for batch_process_search_results."""

    def test_every_note_has_entries(self, sample_notes):
        result = batch_process_search_results(sample_notes, "milk")

        assert set(result.snippets_by_note_id) == {note.id for note in sample_notes}
        assert set(result.title_highlights_by_note_id) == {note.id for note in sample_notes}

    def test_snippets_and_totals(self, sample_notes):
        result = batch_process_search_results(sample_notes, "milk")
        grocery = sample_notes[0]

        snippets = result.snippets_by_note_id[grocery.id]
        assert len(snippets) == 1
        assert [h.term for h in snippets[0].highlights] == ["milk", "milk"]
        assert result.total_matches == 2

    def test_note_without_matches_gets_leading_snippet(self, sample_notes):
        result = batch_process_search_results(sample_notes, "milk")
        misc = sample_notes[2]

        (snippet,) = result.snippets_by_note_id[misc.id]
        assert snippet.text == misc.content
        assert snippet.highlights == ()
        assert result.title_highlights_by_note_id[misc.id] == ()

    @pytest.mark.parametrize("query", ["", "   ", "AND OR"])
    def test_query_without_terms(self, sample_notes, query):
        result = batch_process_search_results(sample_notes, query)

        assert len(result.snippets_by_note_id) == len(sample_notes)
        assert all(len(snippets) == 1 for snippets in result.snippets_by_note_id.values())
        assert all(not snippets[0].highlights for snippets in result.snippets_by_note_id.values())
        assert result.total_matches == 0

    def test_empty_batch(self):
        result = batch_process_search_results([], "anything")

        assert dict(result.snippets_by_note_id) == {}
        assert result.total_matches == 0

    def test_query_metadata(self, sample_notes):
        result = batch_process_search_results(sample_notes, 'milk AND "search highlighting"')

        assert result.query_terms == ("milk", "search highlighting")
        assert result.operators == ("AND",)

    def test_title_highlights(self, sample_notes):
        result = batch_process_search_results(sample_notes, "groc")

        highlights = result.title_highlights_by_note_id[sample_notes[0].id]
        assert [(h.start, h.end, h.type) for h in highlights] == [(0, 4, "primary")]

    def test_field_searches_highlight_their_target(self, sample_notes):
        result = batch_process_search_results(sample_notes, 'content:"milk and eggs" nickname:groceries')
        grocery = sample_notes[0]

        body_types = {h.type for h in result.snippets_by_note_id[grocery.id][0].highlights}
        title = result.title_highlights_by_note_id[grocery.id]
        assert body_types == {"field"}
        assert [(h.term, h.type) for h in title] == [("Groceries", "field")]

    def test_result_maps_are_read_only(self, sample_notes):
        result = batch_process_search_results(sample_notes, "milk")

        with pytest.raises(TypeError):
            result.snippets_by_note_id["new"] = ()

    def test_thousand_notes_under_a_second(self, make_note):
        notes = [
            make_note(f"Note {i}: the quick brown fox jumps over the lazy dog. " * 5, nickname=f"fox note {i}")
            for i in range(1000)
        ]

        start = time.perf_counter()
        result = batch_process_search_results(notes, 'fox "lazy dog" NOT cat')
        elapsed = time.perf_counter() - start

        assert elapsed < 1.0
        assert len(result.snippets_by_note_id) == 1000
        assert result.total_matches == 1000 * 10


@pytest.mark.unit
class TestBatchProcessor:
    """Tests for BatchProcessor behavior beyond a single call."""

    def test_term_sets_compiled_once_per_query(self, sample_notes):
        finder = MatchFinder(PatternCache(max_size=8))
        processor = BatchProcessor(matcher=finder)

        processor.process(sample_notes, "milk eggs")
        processor.process(sample_notes, "milk eggs")

        assert finder.cache.misses == 1
        assert finder.cache.hits == 3

    def test_options_are_applied(self, make_note):
        text = " ".join(f"word{i} needle" + " filler" * 40 for i in range(5))
        note = make_note(text)

        result = BatchProcessor().process([note], "needle", HighlightOptions(max_snippets=1))

        assert len(result.snippets_by_note_id[note.id]) == 1
        assert result.total_matches == 5

    def test_enhance_wraps_page(self, sample_notes):
        page = SearchResultPage(notes=tuple(sample_notes), total_count=3)

        enhanced = BatchProcessor().enhance(page, "milk OR eggs")

        assert enhanced.page is page
        assert enhanced.notes == page.notes
        assert enhanced.query == "milk OR eggs"
        assert enhanced.boolean_operators == ("OR",)
        assert enhanced.query_terms == ("milk", "eggs")
        assert enhanced.total_matches == 3
        assert set(enhanced.snippets) == {note.id for note in sample_notes}

    def test_records_span(self, sample_notes, tracer, span_exporter):
        BatchProcessor(tracer=tracer).process(sample_notes, "milk")

        (span,) = span_exporter.get_finished_spans()
        assert span.name == "search.highlight.batch"
        assert span.attributes["search.note_count"] == 3
        assert span.attributes["search.term_count"] == 1
        assert span.attributes["search.total_matches"] == 2

    def test_records_metrics(self, sample_notes):
        notes_before = _sample("search_highlight_notes_total")
        matches_before = _sample("search_highlight_matches_total")
        latency_before = _sample("search_highlight_latency_seconds_count", {"operation": "batch"})

        BatchProcessor().process(sample_notes, "milk")

        assert _sample("search_highlight_notes_total") - notes_before == 3
        assert _sample("search_highlight_matches_total") - matches_before == 2
        assert _sample("search_highlight_latency_seconds_count", {"operation": "batch"}) - latency_before == 1

    def test_logs_summary_without_query_text(self, sample_notes, caplog):
        with caplog.at_level(logging.DEBUG, logger="scratch_pad_search.search.batch"):
            BatchProcessor().process(sample_notes, "remember")

        (record,) = [r for r in caplog.records if r.name == "scratch_pad_search.search.batch"]
        assert record.note_count == 3
        assert record.total_matches == 1
        assert "remember" not in caplog.text.lower()
