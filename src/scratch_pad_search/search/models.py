"""Search highlighting value objects.

Hot-path records produced once per call by the parser, matcher, snippet
builder and renderer. Plain frozen dataclasses keep per-match overhead low
when a batch touches thousands of notes.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Literal


if TYPE_CHECKING:
    from scratch_pad_search.domain.note import Note, SearchResultPage


MatchType = Literal["primary", "secondary", "field"]

NoteId = int | str


@dataclass(frozen=True, slots=True)
class FieldSearch:
    """A ``field:value`` restriction taken from the query."""

    field: str
    value: str


@dataclass(frozen=True, slots=True)
class ParsedQuery:
    """Structured form of a raw query string."""

    terms: tuple[str, ...] = ()
    phrases: tuple[str, ...] = ()
    operators: tuple[str, ...] = ()
    field_searches: tuple[FieldSearch, ...] = ()

    @property
    def all_terms(self) -> tuple[str, ...]:
        """Terms followed by phrases, the set used for highlighting."""
        return self.terms + self.phrases

    def is_empty(self) -> bool:
        return not (self.terms or self.phrases or self.operators or self.field_searches)

    def field_values(self, *fields: str) -> tuple[str, ...]:
        """Values of field searches whose field name is one of ``fields`` (case-insensitive)."""
        wanted = {name.lower() for name in fields}
        return tuple(search.value for search in self.field_searches if search.field.lower() in wanted)


@dataclass(frozen=True, slots=True)
class HighlightMatch:
    """A literal match of a query term in some text.

    ``start``/``end`` are character offsets, ``end`` exclusive.
    """

    start: int
    end: int
    type: MatchType
    term: str

    @property
    def length(self) -> int:
        return self.end - self.start

    def shifted(self, offset: int) -> HighlightMatch:
        """Return the same match moved by ``-offset`` characters."""
        return replace(self, start=self.start - offset, end=self.end - offset)


@dataclass(frozen=True, slots=True)
class Snippet:
    """A bounded excerpt of a note with snippet-local highlights."""

    text: str
    highlights: tuple[HighlightMatch, ...] = ()
    has_more_before: bool = False
    has_more_after: bool = False
    context_start: int = 0
    context_end: int = 0


@dataclass(frozen=True, slots=True)
class Segment:
    """A run of plain or highlighted text ready for display."""

    text: str
    is_highlight: bool
    type: MatchType | None = None
    types: tuple[MatchType, ...] = ()
    terms: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class BatchResult:
    """Snippets and title highlights for every note of a batch."""

    snippets_by_note_id: Mapping[NoteId, tuple[Snippet, ...]]
    title_highlights_by_note_id: Mapping[NoteId, tuple[HighlightMatch, ...]]
    query_terms: tuple[str, ...] = ()
    operators: tuple[str, ...] = ()
    total_matches: int = 0


@dataclass(frozen=True, slots=True)
class EnhancedSearchResult:
    """A backend result page decorated with highlighting data."""

    page: SearchResultPage
    query: str
    snippets: Mapping[NoteId, tuple[Snippet, ...]] = field(default_factory=dict)
    highlighted_titles: Mapping[NoteId, tuple[HighlightMatch, ...]] = field(default_factory=dict)
    total_matches: int = 0
    query_terms: tuple[str, ...] = ()
    boolean_operators: tuple[str, ...] = ()

    @property
    def notes(self) -> tuple[Note, ...]:
        return self.page.notes
