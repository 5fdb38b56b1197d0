"""Unit tests for Settings."""

from pydantic import ValidationError
import pytest

from scratch_pad_search.config import Settings
from scratch_pad_search.search.options import DEFAULT_SUGGESTION_OPTIONS, HighlightOptions


@pytest.mark.unit
class TestSettings:
    """Tests for environment-driven configuration."""

    def test_defaults_match_option_defaults(self):
        settings = Settings()

        assert settings.log_level == "info"
        assert settings.log_json is True
        assert settings.highlight_options() == HighlightOptions()
        assert settings.suggestion_options() == DEFAULT_SUGGESTION_OPTIONS

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("MAX_SNIPPETS", "5")
        monkeypatch.setenv("snippet_length", "300")
        monkeypatch.setenv("CASE_SENSITIVE", "true")
        monkeypatch.setenv("MAX_SUGGESTIONS", "4")

        settings = Settings()
        options = settings.highlight_options()

        assert options.max_snippets == 5
        assert options.snippet_length == 300
        assert options.case_sensitive is True
        assert options.enable_regex_safe is True
        assert settings.suggestion_options().max_suggestions == 4

    def test_reads_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("CONTEXT_WINDOW=12\nLOG_LEVEL=debug\n", encoding="utf-8")

        settings = Settings()

        assert settings.context_window == 12
        assert settings.log_level == "debug"

    @pytest.mark.parametrize(
        ("key", "value"),
        [
            ("SNIPPET_LENGTH", "1"),
            ("MAX_SNIPPETS", "0"),
            ("MIN_CONFIDENCE", "1.5"),
            ("PATTERN_CACHE_SIZE", "0"),
            ("LOG_LEVEL", "verbose"),
        ],
    )
    def test_rejects_invalid_values(self, monkeypatch, key, value):
        monkeypatch.setenv(key, value)

        with pytest.raises(ValidationError):
            Settings()

    def test_ignores_unrelated_variables(self, monkeypatch):
        monkeypatch.setenv("SOMETHING_ELSE", "1")

        Settings()

    def test_match_finder_uses_configured_cache_size(self, monkeypatch):
        monkeypatch.setenv("PATTERN_CACHE_SIZE", "7")

        finder = Settings().create_match_finder()

        assert finder.cache.max_size == 7
