"""Fuzzy matching for "did you mean" query corrections.

This module provides edit distance calculation and typo correction against
the user's own query history.

Smart Defaults (see SuggestionOptions):
- Queries shorter than 3 characters get no corrections
- Only history entries within 2 characters of the query length are scored
- At most 2 edits, confidence strictly above 0.6
- Identical queries (distance 0) are never offered as corrections
"""

from __future__ import annotations

from collections.abc import Iterable

from scratch_pad_search.domain.search import TypoCorrection
from scratch_pad_search.search.options import DEFAULT_SUGGESTION_OPTIONS, SuggestionOptions


def levenshtein_distance(s1: str, s2: str, max_distance: int | None = None) -> int:
    """Calculate the Levenshtein (edit) distance between two strings.

    Uses dynamic programming for O(m*n) time complexity, with optional
    early termination when distance exceeds max_distance.

    Args:
        s1: First string.
        s2: Second string.
        max_distance: If provided, return max_distance+1 early when
            distance is guaranteed to exceed this threshold.

    Returns:
        The minimum number of single-character edits (insertions,
        deletions, substitutions) needed to change s1 into s2.
        If max_distance is set and exceeded, returns max_distance+1.

    Examples:
        >>> levenshtein_distance("kitten", "sitting")
        3
        >>> levenshtein_distance("javscript", "javascript")
        1
        >>> levenshtein_distance("", "abc")
        3
    """
    if not s1:
        return len(s2)
    if not s2:
        return len(s1)

    # Use shorter string as columns for space efficiency
    if len(s1) > len(s2):
        s1, s2 = s2, s1

    m, n = len(s1), len(s2)

    if max_distance is not None and n - m > max_distance:
        return max_distance + 1

    # Only need two rows at a time
    prev_row = list(range(m + 1))
    curr_row = [0] * (m + 1)

    for j in range(1, n + 1):
        curr_row[0] = j
        row_min = curr_row[0]
        for i in range(1, m + 1):
            cost = 0 if s1[i - 1] == s2[j - 1] else 1
            curr_row[i] = min(
                prev_row[i] + 1,  # deletion
                curr_row[i - 1] + 1,  # insertion
                prev_row[i - 1] + cost,  # substitution
            )
            row_min = min(row_min, curr_row[i])

        if max_distance is not None and row_min > max_distance:
            return max_distance + 1

        prev_row, curr_row = curr_row, prev_row

    return prev_row[m]


def correction_confidence(query: str, candidate: str, distance: int) -> float:
    """Similarity in [0, 1]: one minus distance over the longer length."""
    longest = max(len(query), len(candidate))
    if longest == 0:
        return 1.0
    return 1.0 - distance / longest


def _unique_history(prior_queries: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for prior in prior_queries:
        stripped = prior.strip()
        key = stripped.casefold()
        if not stripped or key in seen:
            continue
        seen.add(key)
        unique.append(stripped)
    return unique


def suggest_corrections(
    query: str,
    prior_queries: Iterable[str],
    options: SuggestionOptions | None = None,
) -> list[TypoCorrection]:
    """Propose earlier queries the user probably meant to type.

    Args:
        query: The query as currently typed.
        prior_queries: Query history, most relevant first. Duplicates are
            collapsed case-insensitively, keeping the first occurrence.
        options: Confidence, distance and result-count thresholds.

    Returns:
        Corrections sorted by confidence (highest first); ties keep
        history order.
    """
    options = options or DEFAULT_SUGGESTION_OPTIONS
    typed = query.strip()
    if len(typed) < options.min_query_length:
        return []

    folded_query = typed.casefold()
    limit = options.max_edit_distance
    corrections: list[TypoCorrection] = []

    for prior in _unique_history(prior_queries):
        # Cheap length check before the quadratic distance
        if abs(len(prior) - len(typed)) > limit:
            continue

        distance = levenshtein_distance(folded_query, prior.casefold(), max_distance=limit)
        if distance == 0 or distance > limit:
            continue

        confidence = correction_confidence(typed, prior, distance)
        if confidence > options.min_confidence:
            corrections.append(TypoCorrection(candidate_query=prior, confidence=confidence, original_query=query))

    corrections.sort(key=lambda correction: correction.confidence, reverse=True)
    return corrections[: options.max_suggestions]
