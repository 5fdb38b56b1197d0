"""Boolean query parsing for the search bar.

Supported syntax:
- ``term`` plain words
- ``"exact phrase"`` double-quoted spans
- ``AND`` / ``OR`` / ``NOT`` operators (any case)
- ``field:value`` and ``field:"quoted value"`` restrictions

Parsing is tolerant: an unterminated quote turns the rest of the input into
one phrase and anything that is not a well-formed operator or field search
stays a plain term. Blank phrases and blank quoted field values are
dropped. No input raises.
"""

from __future__ import annotations

from dataclasses import dataclass
import re

from scratch_pad_search.search.models import FieldSearch, ParsedQuery


OPERATORS = frozenset({"AND", "OR", "NOT"})
QUOTE = '"'
FIELD_NAME_PATTERN = re.compile(r"\w+")


@dataclass(frozen=True, slots=True)
class QueryToken:
    """A whitespace/quote delimited piece of the raw query."""

    text: str
    quoted: bool = False


def _is_field_prefix(text: str) -> bool:
    return text.endswith(":") and FIELD_NAME_PATTERN.fullmatch(text[:-1]) is not None


def tokenize_query(raw: str) -> list[QueryToken]:
    """Split a query on whitespace, keeping double-quoted spans together.

    A quote directly after ``field:`` belongs to that token so quoted field
    values survive as one unit.
    """
    tokens: list[QueryToken] = []
    position = 0
    length = len(raw)

    while position < length:
        char = raw[position]
        if char.isspace():
            position += 1
            continue

        if char == QUOTE:
            close = raw.find(QUOTE, position + 1)
            if close == -1:
                tokens.append(QueryToken(raw[position + 1 :], quoted=True))
                break
            tokens.append(QueryToken(raw[position + 1 : close], quoted=True))
            position = close + 1
            continue

        start = position
        while position < length and not raw[position].isspace():
            if raw[position] == QUOTE:
                if _is_field_prefix(raw[start:position]):
                    close = raw.find(QUOTE, position + 1)
                    position = length if close == -1 else close + 1
                break
            position += 1
        tokens.append(QueryToken(raw[start:position]))

    return tokens


def parse_field_search(text: str) -> FieldSearch | None:
    """Interpret ``field:value`` text, or return None when it is not one.

    The field name must be a single word and the value non-empty. Unquoted
    values may not contain another colon. Quoted values are unquoted.
    """
    name, separator, value = text.partition(":")
    if not separator or FIELD_NAME_PATTERN.fullmatch(name) is None:
        return None

    if value.startswith(QUOTE):
        value = value[1:]
        if value.endswith(QUOTE):
            value = value[:-1]
        value = value.strip()
    elif ":" in value:
        return None

    if not value:
        return None
    return FieldSearch(field=name, value=value)


def parse_search_query(raw: str) -> ParsedQuery:
    """Parse a raw query into terms, phrases, operators and field searches.

    Args:
        raw: Query text exactly as typed.

    Returns:
        ParsedQuery with every component in query order. Empty or
        whitespace-only input yields an empty ParsedQuery.

    Examples:
        >>> parse_search_query('hello "big world" AND tag:todo').phrases
        ('big world',)
    """
    if not raw or raw.isspace():
        return ParsedQuery()

    terms: list[str] = []
    phrases: list[str] = []
    operators: list[str] = []
    field_searches: list[FieldSearch] = []

    for token in tokenize_query(raw):
        if token.quoted:
            phrase = token.text.strip()
            if phrase:
                phrases.append(phrase)
            continue

        upper = token.text.upper()
        if upper in OPERATORS:
            operators.append(upper)
            continue

        field_search = parse_field_search(token.text)
        if field_search is not None:
            field_searches.append(field_search)
            continue

        # Quoted field value that is blank, e.g. title:""
        if QUOTE in token.text and _is_field_prefix(token.text.partition(QUOTE)[0]):
            continue

        terms.append(token.text)

    return ParsedQuery(
        terms=tuple(terms),
        phrases=tuple(phrases),
        operators=tuple(operators),
        field_searches=tuple(field_searches),
    )
