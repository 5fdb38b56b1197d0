"""Literal term matching for search highlighting.

Every term is passed through ``re.escape`` before compilation, so query text
is only ever matched as a literal string. Metacharacters, lookaheads and
quantifiers typed by a user cannot reach the regex engine as syntax, which
keeps matching linear in ``len(text) * len(terms)`` for any input.

Compiled term sets live in a :class:`PatternCache` owned by a
:class:`MatchFinder` instance. There is no module-level cache.
"""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Callable, Sequence
from dataclasses import dataclass
import logging
from operator import attrgetter
import re
import threading
from typing import TYPE_CHECKING

from scratch_pad_search.search.models import HighlightMatch, MatchType
from scratch_pad_search.search.options import DEFAULT_HIGHLIGHT_OPTIONS, HighlightOptions


if TYPE_CHECKING:
    from scratch_pad_search.domain.note import Note


logger = logging.getLogger(__name__)

DEFAULT_PATTERN_CACHE_SIZE = 128

# (terms, field_terms, case_sensitive, regex_safe)
TermSetSignature = tuple[tuple[str, ...], tuple[str, ...], bool, bool]


@dataclass(frozen=True, slots=True)
class CompiledTerm:
    """One term ready for scanning."""

    term: str
    pattern: re.Pattern[str]
    type: MatchType


@dataclass(frozen=True, slots=True)
class CompiledTermSet:
    """All compiled terms of one query, reusable across any number of texts."""

    signature: TermSetSignature
    entries: tuple[CompiledTerm, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.entries)

    def find(self, text: str) -> list[HighlightMatch]:
        """Scan ``text`` with every term and return matches ordered by start.

        Ties keep discovery order: term order first, then position.
        """
        if not text or not self.entries:
            return []

        matches: list[HighlightMatch] = []
        for entry in self.entries:
            for found in entry.pattern.finditer(text):
                start, end = found.span()
                if start == end:
                    continue
                matches.append(HighlightMatch(start=start, end=end, type=entry.type, term=found.group(0)))

        matches.sort(key=attrgetter("start"))
        return matches


def _compile_pattern(term: str, flags: int, regex_safe: bool) -> re.Pattern[str] | None:
    if regex_safe:
        return re.compile(re.escape(term), flags)
    try:
        return re.compile(term, flags)
    except (re.error, OverflowError, RecursionError) as exc:
        logger.warning("Skipping invalid raw pattern: %s", exc)
        return None


def compile_term_set(signature: TermSetSignature) -> CompiledTermSet:
    """Compile a term-set signature without consulting any cache."""
    terms, field_terms, case_sensitive, regex_safe = signature
    flags = 0 if case_sensitive else re.IGNORECASE

    entries: list[CompiledTerm] = []
    for index, term in enumerate(terms):
        if not term:
            continue
        pattern = _compile_pattern(term, flags, regex_safe)
        if pattern is not None:
            entries.append(CompiledTerm(term=term, pattern=pattern, type="primary" if index == 0 else "secondary"))

    for term in field_terms:
        if not term:
            continue
        pattern = _compile_pattern(term, flags, regex_safe)
        if pattern is not None:
            entries.append(CompiledTerm(term=term, pattern=pattern, type="field"))

    return CompiledTermSet(signature=signature, entries=tuple(entries))


class PatternCache:
    """Bounded LRU of compiled term sets keyed by their signature.

    Once ``max_size`` entries are held, inserting a new signature evicts the
    least recently used one. Safe to share between threads.
    """

    def __init__(self, max_size: int = DEFAULT_PATTERN_CACHE_SIZE) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        self.max_size = max_size
        self.hits = 0
        self.misses = 0
        self._entries: OrderedDict[TermSetSignature, CompiledTermSet] = OrderedDict()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, signature: object) -> bool:
        return signature in self._entries

    def get_or_compile(
        self,
        signature: TermSetSignature,
        compiler: Callable[[TermSetSignature], CompiledTermSet] = compile_term_set,
    ) -> CompiledTermSet:
        with self._lock:
            cached = self._entries.get(signature)
            if cached is not None:
                self._entries.move_to_end(signature)
                self.hits += 1
                return cached
            self.misses += 1

        compiled = compiler(signature)

        with self._lock:
            self._entries[signature] = compiled
            self._entries.move_to_end(signature)
            while len(self._entries) > self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted compiled term set", extra={"evicted_term_count": len(evicted[0])})
        return compiled

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def stats(self) -> dict[str, int]:
        return {"size": len(self._entries), "max_size": self.max_size, "hits": self.hits, "misses": self.misses}


class MatchFinder:
    """Finds literal matches of query terms, compiling each term set once."""

    def __init__(self, cache: PatternCache | None = None) -> None:
        self.cache = cache if cache is not None else PatternCache()

    def compile(
        self,
        terms: Sequence[str],
        options: HighlightOptions | None = None,
        *,
        field_terms: Sequence[str] = (),
    ) -> CompiledTermSet:
        """Return the compiled term set for ``terms``, reusing a cached one when possible.

        Args:
            terms: Query terms in query order. The first one is tagged primary,
                the rest secondary. Blank terms are ignored but keep their slot.
            options: Case sensitivity and escaping switches.
            field_terms: Values of field-restricted searches, tagged ``field``.
        """
        options = options or DEFAULT_HIGHLIGHT_OPTIONS
        signature: TermSetSignature = (
            tuple(term.strip() for term in terms),
            tuple(term.strip() for term in field_terms),
            options.case_sensitive,
            options.enable_regex_safe,
        )
        if not any(signature[0]) and not any(signature[1]):
            return CompiledTermSet(signature=signature)
        return self.cache.get_or_compile(signature)

    def find(
        self,
        text: str,
        terms: Sequence[str],
        options: HighlightOptions | None = None,
        *,
        field_terms: Sequence[str] = (),
    ) -> list[HighlightMatch]:
        """Find every match of ``terms`` in ``text``, ordered by start offset.

        Returns an empty list for empty text or when no term is usable.
        """
        if not text:
            return []
        return self.compile(terms, options, field_terms=field_terms).find(text)

    def find_title_matches(
        self,
        note: Note,
        terms: Sequence[str],
        options: HighlightOptions | None = None,
        *,
        field_terms: Sequence[str] = (),
    ) -> list[HighlightMatch]:
        """Match against the note's display title (title, nickname or first line)."""
        return self.find(note.display_title, terms, options, field_terms=field_terms)


def find_matches(
    text: str,
    terms: Sequence[str],
    options: HighlightOptions | None = None,
) -> list[HighlightMatch]:
    """One-off matching with a private finder; prefer a shared MatchFinder for batches."""
    return MatchFinder(PatternCache(max_size=1)).find(text, terms, options)


def find_title_matches(
    note: Note,
    terms: Sequence[str],
    options: HighlightOptions | None = None,
) -> list[HighlightMatch]:
    return MatchFinder(PatternCache(max_size=1)).find_title_matches(note, terms, options)
