"""
Search highlighting and suggestion engine package.

This package turns a raw query and a set of notes into display data:
- query_parser: Terms, quoted phrases, AND/OR/NOT operators and field:value searches
- matcher: Literal term matching with a bounded compiled-pattern cache
- snippet: Grouped, word-aligned context snippets around matches
- highlight: Plain/highlighted segment rendering with overlap union
- batch: Per-query processing of whole result pages
- fuzzy: Edit distance and "did you mean" corrections from query history
- autocomplete: Prefix completion from words in the user's notes
"""

from scratch_pad_search.search.autocomplete import suggest_completions
from scratch_pad_search.search.batch import BatchProcessor, batch_process_search_results
from scratch_pad_search.search.fuzzy import levenshtein_distance, suggest_corrections
from scratch_pad_search.search.highlight import render_highlighted_text, render_snippet
from scratch_pad_search.search.matcher import MatchFinder, PatternCache, find_matches, find_title_matches
from scratch_pad_search.search.models import (
    BatchResult,
    EnhancedSearchResult,
    FieldSearch,
    HighlightMatch,
    ParsedQuery,
    Segment,
    Snippet,
)
from scratch_pad_search.search.options import HighlightOptions, SuggestionOptions
from scratch_pad_search.search.query_parser import parse_search_query
from scratch_pad_search.search.snippet import build_snippets


__all__ = [
    "BatchProcessor",
    "BatchResult",
    "EnhancedSearchResult",
    "FieldSearch",
    "HighlightMatch",
    "HighlightOptions",
    "MatchFinder",
    "ParsedQuery",
    "PatternCache",
    "Segment",
    "Snippet",
    "SuggestionOptions",
    "batch_process_search_results",
    "build_snippets",
    "find_matches",
    "find_title_matches",
    "levenshtein_distance",
    "parse_search_query",
    "render_highlighted_text",
    "render_snippet",
    "suggest_completions",
    "suggest_corrections",
]
