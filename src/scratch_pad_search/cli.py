"""Command-line access to search highlighting and query suggestions."""

# ruff: noqa: T201  # CLI prints JSON results to stdout

from __future__ import annotations

import argparse
from collections.abc import Sequence
import logging
from pathlib import Path
import sys
from typing import Any

import orjson
from pydantic import ValidationError

from scratch_pad_search.config import Settings
from scratch_pad_search.domain.note import Note
from scratch_pad_search.observability.logging import configure_logging
from scratch_pad_search.search.autocomplete import DEFAULT_COMPLETION_LIMIT, suggest_completions
from scratch_pad_search.search.batch import BatchProcessor
from scratch_pad_search.search.fuzzy import suggest_corrections
from scratch_pad_search.search.highlight import render_highlighted_text, render_snippet
from scratch_pad_search.search.options import HighlightOptions


logger = logging.getLogger(__name__)

STDIN_NOTE_ID = "-"


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="scratch-pad-search", description=__doc__)
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error", "critical"],
        help="Override the configured log level",
    )
    parser.add_argument(
        "--plain-logs",
        action="store_true",
        help="Write human-readable logs instead of JSON",
    )
    subcommands = parser.add_subparsers(dest="command", required=True)

    highlight = subcommands.add_parser("highlight", help="Print snippets and highlighted segments as JSON")
    highlight.add_argument("query", help="Search query (terms, quoted phrases, AND/OR/NOT, field:value)")
    highlight.add_argument("files", nargs="*", type=Path, help="Note files to search (default: stdin)")
    highlight.add_argument("--max-snippets", type=int, help="Override the configured snippet cap")
    highlight.add_argument("--snippet-length", type=int, help="Override the configured snippet length")
    highlight.add_argument("--case-sensitive", action="store_true", default=None, help="Match exact case")

    suggest = subcommands.add_parser("suggest", help="Print typo corrections drawn from query history")
    suggest.add_argument("query", help="Query as typed")
    suggest.add_argument(
        "--history",
        action="append",
        default=[],
        help="Previously issued query (repeatable, most relevant first)",
    )

    complete = subcommands.add_parser("complete", help="Print word completions found in note files")
    complete.add_argument("prefix", help="Partial word")
    complete.add_argument("files", nargs="*", type=Path, help="Note files to read (default: stdin)")
    complete.add_argument("--limit", type=int, default=DEFAULT_COMPLETION_LIMIT, help="Maximum completions")
    return parser


def load_notes(paths: Sequence[Path]) -> list[Note]:
    """Read each file as one plaintext note; stdin when no paths are given."""
    if not paths:
        return [Note(id=STDIN_NOTE_ID, content=sys.stdin.read())]
    return [Note(id=str(path), nickname=path.name, content=path.read_text(encoding="utf-8")) for path in paths]


def _emit(payload: Any) -> None:
    print(orjson.dumps(payload, option=orjson.OPT_INDENT_2).decode("utf-8"))


def run_highlight(args: argparse.Namespace, settings: Settings) -> int:
    overrides = {
        key: value
        for key, value in (
            ("max_snippets", args.max_snippets),
            ("snippet_length", args.snippet_length),
            ("case_sensitive", args.case_sensitive),
        )
        if value is not None
    }
    options = HighlightOptions(**(settings.highlight_options().model_dump() | overrides))
    notes = load_notes(args.files)

    processor = BatchProcessor(matcher=settings.create_match_finder())
    result = processor.process(notes, args.query, options)

    entries = []
    for note in notes:
        snippets = result.snippets_by_note_id[note.id]
        entries.append(
            {
                "id": note.id,
                "title": render_highlighted_text(note.display_title, result.title_highlights_by_note_id[note.id]),
                "snippets": [{"snippet": snippet, "segments": render_snippet(snippet)} for snippet in snippets],
            }
        )

    _emit(
        {
            "query_terms": result.query_terms,
            "operators": result.operators,
            "total_matches": result.total_matches,
            "notes": entries,
        }
    )
    return 0


def run_suggest(args: argparse.Namespace, settings: Settings) -> int:
    corrections = suggest_corrections(args.query, args.history, settings.suggestion_options())
    _emit([correction.model_dump() | {"description": correction.description} for correction in corrections])
    return 0


def run_complete(args: argparse.Namespace, settings: Settings) -> int:
    completions = suggest_completions(args.prefix, load_notes(args.files), limit=args.limit)
    _emit([completion.model_dump() for completion in completions])
    return 0


COMMANDS = {
    "highlight": run_highlight,
    "suggest": run_suggest,
    "complete": run_complete,
}


def parse_arguments(parser: argparse.ArgumentParser, argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse argv, accepting note files after subcommand options.

    ``files`` is matched together with the query, so files that follow an
    option come back unrecognized; they are appended to ``files`` here.
    """
    args, extras = parser.parse_known_args(argv)
    if not extras:
        return args
    if not hasattr(args, "files") or any(extra.startswith("-") for extra in extras):
        parser.error(f"unrecognized arguments: {' '.join(extras)}")
    args.files.extend(Path(extra) for extra in extras)
    return args


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_argument_parser()
    args = parse_arguments(parser, argv)

    try:
        settings = Settings()
    except ValidationError as exc:
        print(f"Error: invalid configuration\n{exc}", file=sys.stderr)
        return 2

    configure_logging(args.log_level or settings.log_level, json_output=settings.log_json and not args.plain_logs)
    logger.debug("Running command", extra={"command": args.command})

    try:
        return COMMANDS[args.command](args, settings)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except ValidationError as exc:
        print(f"Error: invalid option\n{exc}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
