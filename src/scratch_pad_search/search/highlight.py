"""Segment rendering for highlighted text.

Turns text plus matches into an ordered list of plain and highlighted
segments. Segments are plain data; mapping them to styling or markup is the
display layer's job, so user content is never interpreted here.

Overlapping matches are unioned into one highlighted segment that records
every tag and term involved. Joining the segment texts always reproduces the
input exactly.
"""

from __future__ import annotations

from collections.abc import Sequence
from operator import attrgetter

from scratch_pad_search.search.models import HighlightMatch, MatchType, Segment, Snippet


def _clamped(text: str, matches: Sequence[HighlightMatch]) -> list[tuple[int, int, HighlightMatch]]:
    length = len(text)
    spans = []
    for match in sorted(matches, key=attrgetter("start")):
        start = max(0, match.start)
        end = min(length, match.end)
        if start < end:
            spans.append((start, end, match))
    return spans


def _highlight(text: str, start: int, end: int, members: list[HighlightMatch]) -> Segment:
    types: list[MatchType] = []
    terms: list[str] = []
    for member in members:
        if member.type not in types:
            types.append(member.type)
        if member.term not in terms:
            terms.append(member.term)
    return Segment(
        text=text[start:end],
        is_highlight=True,
        type=members[0].type,
        types=tuple(types),
        terms=tuple(terms),
    )


def render_highlighted_text(text: str, matches: Sequence[HighlightMatch]) -> list[Segment]:
    """Split ``text`` into plain and highlighted segments.

    Args:
        text: Source text the matches refer to.
        matches: Matches in any order; out-of-range parts are clipped away.

    Returns:
        Segments in text order. Their texts concatenate to ``text``.
    """
    spans = _clamped(text, matches)
    if not spans:
        return [Segment(text=text, is_highlight=False)]

    segments: list[Segment] = []
    cursor = 0
    current_start, current_end, first = spans[0]
    members = [first]

    for start, end, match in spans[1:]:
        if start < current_end:
            current_end = max(current_end, end)
            members.append(match)
            continue
        if current_start > cursor:
            segments.append(Segment(text=text[cursor:current_start], is_highlight=False))
        segments.append(_highlight(text, current_start, current_end, members))
        cursor = current_end
        current_start, current_end, members = start, end, [match]

    if current_start > cursor:
        segments.append(Segment(text=text[cursor:current_start], is_highlight=False))
    segments.append(_highlight(text, current_start, current_end, members))

    if current_end < len(text):
        segments.append(Segment(text=text[current_end:], is_highlight=False))

    return segments


def render_snippet(snippet: Snippet) -> list[Segment]:
    """Render a snippet using its snippet-local highlights."""
    return render_highlighted_text(snippet.text, snippet.highlights)
