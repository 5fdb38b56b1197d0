"""Domain layer - records exchanged with the notes store and the search UI.

Value objects are immutable pydantic models validated at construction.
No infrastructure dependencies live here.
"""

from scratch_pad_search.domain.note import Note, NoteFormat, SearchResultPage
from scratch_pad_search.domain.search import CompletionSuggestion, TypoCorrection


__all__ = [
    "CompletionSuggestion",
    "Note",
    "NoteFormat",
    "SearchResultPage",
    "TypoCorrection",
]
