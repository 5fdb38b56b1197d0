"""Prefix completion from words already present in the user's notes."""

from __future__ import annotations

from collections.abc import Iterable
import re

from scratch_pad_search.domain.note import Note
from scratch_pad_search.domain.search import CompletionSuggestion


MIN_PREFIX_LENGTH = 2
DEFAULT_COMPLETION_LIMIT = 5

# Fixed pattern; the typed prefix is only ever compared with str.startswith
WORD_PATTERN = re.compile(r"\b\w{3,}\b")


def suggest_completions(
    prefix: str,
    notes: Iterable[Note],
    limit: int = DEFAULT_COMPLETION_LIMIT,
) -> list[CompletionSuggestion]:
    """Return words from note nicknames and content that extend ``prefix``.

    Words are lower-cased, at least three word characters long, distinct,
    and listed in the order they are first seen.
    """
    typed = prefix.strip().lower()
    if len(typed) < MIN_PREFIX_LENGTH or limit <= 0:
        return []

    found: dict[str, None] = {}
    for note in notes:
        haystack = f"{note.nickname or ''} {note.content}".lower()
        for word in WORD_PATTERN.findall(haystack):
            if word != typed and word.startswith(typed) and word not in found:
                found[word] = None
                if len(found) >= limit:
                    return [CompletionSuggestion(text=word, prefix=typed) for word in found]

    return [CompletionSuggestion(text=word, prefix=typed) for word in found]
