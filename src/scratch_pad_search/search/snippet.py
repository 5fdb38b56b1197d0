"""Snippet extraction around grouped search matches.

Smart Defaults (tuned through HighlightOptions, no per-call tweaking needed):
- Nearby matches share one snippet instead of producing near-duplicates
- Snippets grow to ``snippet_length`` characters, after the matches first
- Cuts avoid splitting words and highlighted spans, overshooting by at most
  BOUNDARY_TOLERANCE characters on each side
- Snippets of one text never overlap
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from operator import attrgetter

from scratch_pad_search.search.models import HighlightMatch, Snippet
from scratch_pad_search.search.options import DEFAULT_HIGHLIGHT_OPTIONS, HighlightOptions


# Maximum characters a boundary may move outward to finish a word or match
BOUNDARY_TOLERANCE = 12


@dataclass(slots=True)
class MatchGroup:
    """Consecutive matches displayed together in one snippet."""

    start: int
    end: int
    matches: list[HighlightMatch] = field(default_factory=list)

    def add(self, match: HighlightMatch) -> None:
        self.matches.append(match)
        self.end = max(self.end, match.end)


def valid_matches(text: str, matches: Sequence[HighlightMatch]) -> list[HighlightMatch]:
    """Drop matches that do not fit ``text`` and sort the rest by start."""
    length = len(text)
    ordered = [match for match in matches if 0 <= match.start < match.end <= length]
    ordered.sort(key=attrgetter("start"))
    return ordered


def group_nearby_matches(
    matches: Sequence[HighlightMatch],
    context_window: int,
    max_span: int,
) -> list[MatchGroup]:
    """Fold sorted matches into groups.

    A match joins the open group when it starts within ``context_window``
    characters of the group's end and the grown group still spans at most
    ``max_span`` characters.
    """
    groups: list[MatchGroup] = []
    current: MatchGroup | None = None

    for match in matches:
        if (
            current is not None
            and match.start - current.end <= context_window
            and max(current.end, match.end) - current.start <= max_span
        ):
            current.add(match)
            continue
        current = MatchGroup(start=match.start, end=match.end, matches=[match])
        groups.append(current)

    return groups


def expand_window(
    text_length: int,
    span_start: int,
    span_end: int,
    snippet_length: int,
    floor: int = 0,
) -> tuple[int, int]:
    """Grow a span to ``snippet_length`` characters, after the span first.

    Args:
        text_length: Length of the full text.
        span_start: Start of the covered matches.
        span_end: End of the covered matches.
        snippet_length: Target window size.
        floor: Lowest allowed start (end of the previous snippet).

    Returns:
        Tuple of (window_start, window_end) clipped to the text.
    """
    room = max(0, snippet_length - (span_end - span_start))
    end = min(text_length, span_end + room)
    room -= end - span_end
    start = max(floor, span_start - room)
    return start, end


def _splits_word(text: str, index: int) -> bool:
    return 0 < index < len(text) and not text[index - 1].isspace() and not text[index].isspace()


def settle_start(
    text: str,
    start: int,
    anchor: int,
    matches: Sequence[HighlightMatch],
    floor: int = 0,
    tolerance: int = BOUNDARY_TOLERANCE,
) -> int:
    """Move a window start off mid-word and mid-match positions.

    The result always lies in ``[floor, anchor]`` so the group stays covered.
    """
    if _splits_word(text, start):
        back = start
        limit = max(floor, start - tolerance)
        while back > limit and not text[back - 1].isspace():
            back -= 1
        if back == 0 or text[back - 1].isspace():
            start = back
        else:
            forward = start
            while forward < anchor and not text[forward].isspace():
                forward += 1
            if forward < anchor:
                start = forward

    for match in matches:
        if match.start < start < match.end:
            if start - match.start <= tolerance and match.start >= floor:
                start = match.start
            elif match.end <= anchor:
                start = match.end

    while start < anchor and text[start].isspace():
        start += 1
    return start


def settle_end(
    text: str,
    end: int,
    anchor: int,
    matches: Sequence[HighlightMatch],
    tolerance: int = BOUNDARY_TOLERANCE,
) -> int:
    """Move a window end off mid-word and mid-match positions.

    The result is never below ``anchor``, the end of the covered matches.
    """
    length = len(text)
    if _splits_word(text, end):
        forward = end
        limit = min(length, end + tolerance)
        while forward < limit and not text[forward].isspace():
            forward += 1
        if forward == length or text[forward].isspace():
            end = forward
        else:
            back = end
            while back > anchor and not text[back - 1].isspace():
                back -= 1
            if back > anchor:
                end = back

    for match in matches:
        if match.start < end < match.end:
            if match.end - end <= tolerance:
                end = match.end
            elif match.start >= anchor:
                end = match.start

    while end > anchor and text[end - 1].isspace():
        end -= 1
    return end


def build_snippets(
    text: str,
    matches: Sequence[HighlightMatch],
    options: HighlightOptions | None = None,
) -> list[Snippet]:
    """Build up to ``max_snippets`` context snippets around ``matches``.

    This is the main entry point for snippet generation.

    Args:
        text: The full text the matches refer to.
        matches: Matches in source coordinates, any order.
        options: Snippet length, grouping window and snippet cap.

    Returns:
        Snippets in text order with highlights rebased to each snippet. With
        no usable matches, a single leading snippet without highlights.
    """
    options = options or DEFAULT_HIGHLIGHT_OPTIONS
    ordered = valid_matches(text, matches)

    if not ordered:
        return [
            Snippet(
                text=text[: options.snippet_length],
                has_more_before=False,
                has_more_after=len(text) > options.snippet_length,
                context_start=0,
                context_end=min(len(text), options.snippet_length),
            )
        ]

    snippets: list[Snippet] = []
    floor = 0

    for group in group_nearby_matches(ordered, options.context_window, options.snippet_length):
        if len(snippets) >= options.max_snippets:
            break

        anchor_start = max(group.start, floor)
        if anchor_start >= group.end:
            # Already shown by the previous snippet
            continue

        start, end = expand_window(len(text), anchor_start, group.end, options.snippet_length, floor)
        start = settle_start(text, start, anchor_start, ordered, floor)
        end = settle_end(text, end, group.end, ordered)

        highlights = tuple(match.shifted(start) for match in ordered if start <= match.start and match.end <= end)
        snippets.append(
            Snippet(
                text=text[start:end],
                highlights=highlights,
                has_more_before=start > 0,
                has_more_after=end < len(text),
                context_start=start,
                context_end=end,
            )
        )
        floor = end

    return snippets
