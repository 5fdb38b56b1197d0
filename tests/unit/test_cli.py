"""Unit tests for the scratch-pad-search command line."""

import io

import orjson
import pytest

from scratch_pad_search.cli import build_argument_parser, main


@pytest.fixture
def note_files(tmp_path):
    first = tmp_path / "groceries.txt"
    first.write_text("Buy milk and eggs. Remember the milk!", encoding="utf-8")
    second = tmp_path / "meeting.txt"
    second.write_text("Discussed the rollout.", encoding="utf-8")
    return [first, second]


def _json_output(capsys):
    return orjson.loads(capsys.readouterr().out)


@pytest.mark.unit
class TestHighlightCommand:
    def test_highlights_files(self, capsys, note_files):
        exit_code = main(["highlight", "milk", *map(str, note_files)])

        output = _json_output(capsys)
        assert exit_code == 0
        assert output["query_terms"] == ["milk"]
        assert output["total_matches"] == 2
        assert [note["id"] for note in output["notes"]] == [str(path) for path in note_files]

        segments = output["notes"][0]["snippets"][0]["segments"]
        assert "".join(segment["text"] for segment in segments) == "Buy milk and eggs. Remember the milk!"
        assert [segment["text"] for segment in segments if segment["is_highlight"]] == ["milk", "milk"]

    def test_snippet_payload(self, capsys, note_files):
        main(["highlight", "rollout", str(note_files[1])])

        snippet = _json_output(capsys)["notes"][0]["snippets"][0]["snippet"]
        assert snippet["highlights"] == [{"start": 14, "end": 21, "type": "primary", "term": "rollout"}]
        assert snippet["has_more_before"] is False

    def test_reads_stdin(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("alpha beta alpha"))

        assert main(["highlight", "alpha"]) == 0

        output = _json_output(capsys)
        assert output["notes"][0]["id"] == "-"
        assert output["total_matches"] == 2

    def test_missing_file(self, capsys, tmp_path):
        assert main(["highlight", "milk", str(tmp_path / "absent.txt")]) == 1
        assert "Error" in capsys.readouterr().err

    def test_invalid_override(self, capsys, note_files):
        assert main(["highlight", "milk", "--snippet-length", "1", str(note_files[0])]) == 2

    def test_options_before_files_take_effect(self, capsys, note_files):
        exit_code = main(["highlight", "milk", "--max-snippets", "1", "--snippet-length", "20", str(note_files[0])])

        (note,) = _json_output(capsys)["notes"]
        assert exit_code == 0
        assert [entry["snippet"]["text"] for entry in note["snippets"]] == ["milk and eggs. Remember"]
        assert note["snippets"][0]["snippet"]["has_more_after"] is True

    def test_flag_between_files(self, capsys, note_files):
        assert main(["highlight", "Milk", str(note_files[0]), "--case-sensitive", str(note_files[1])]) == 0

        output = _json_output(capsys)
        assert output["total_matches"] == 0
        assert len(output["notes"]) == 2

    def test_unknown_option_is_rejected(self, note_files):
        with pytest.raises(SystemExit):
            main(["highlight", "milk", str(note_files[0]), "--bogus"])

    def test_invalid_environment(self, monkeypatch, note_files):
        monkeypatch.setenv("MAX_SNIPPETS", "-4")

        assert main(["highlight", "milk", str(note_files[0])]) == 2


@pytest.mark.unit
class TestSuggestCommand:
    def test_prints_corrections(self, capsys):
        assert main(["suggest", "javscript", "--history", "javascript", "--history", "python"]) == 0

        (correction,) = _json_output(capsys)
        assert correction["candidate_query"] == "javascript"
        assert correction["description"] == 'Did you mean "javascript"?'

    def test_no_history(self, capsys):
        assert main(["suggest", "javscript"]) == 0
        assert _json_output(capsys) == []


@pytest.mark.unit
class TestCompleteCommand:
    def test_prints_completions(self, capsys, note_files):
        assert main(["complete", "ro", str(note_files[1])]) == 0

        assert _json_output(capsys) == [{"text": "rollout", "prefix": "ro"}]

    def test_limit_before_files(self, capsys, note_files):
        assert main(["complete", "ro", "--limit", "1", *map(str, note_files)]) == 0

        assert _json_output(capsys) == [{"text": "rollout", "prefix": "ro"}]


@pytest.mark.unit
class TestArgumentParser:
    def test_requires_subcommand(self):
        with pytest.raises(SystemExit):
            build_argument_parser().parse_args([])

    def test_suggest_rejects_stray_arguments(self):
        with pytest.raises(SystemExit):
            main(["suggest", "abc", "--history", "abd", "extra"])

    def test_history_defaults_to_empty(self):
        args = build_argument_parser().parse_args(["suggest", "abc"])

        assert args.history == []
