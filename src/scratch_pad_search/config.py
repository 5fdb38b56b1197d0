"""Centralized configuration for scratch-pad-search using Pydantic Settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from scratch_pad_search.search.matcher import DEFAULT_PATTERN_CACHE_SIZE, MatchFinder, PatternCache
from scratch_pad_search.search.options import HighlightOptions, SuggestionOptions


class Settings(BaseSettings):
    """Strictly typed host configuration loaded from environment variables.

    The search engine never reads these directly. Hosts call
    :meth:`highlight_options` / :meth:`suggestion_options` and pass the
    resulting immutable records into each call.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Logging
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info", description="Root logging level"
    )
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    # Highlighting
    max_snippets: int = Field(default=3, ge=1, le=50, description="Maximum snippets per note")
    snippet_length: int = Field(default=150, ge=10, le=5000, description="Target characters per snippet")
    context_window: int = Field(default=40, ge=0, le=1000, description="Grouping distance between matches")
    case_sensitive: bool = Field(default=False, description="Match terms with exact case")
    pattern_cache_size: int = Field(
        default=DEFAULT_PATTERN_CACHE_SIZE, ge=1, description="Compiled term sets kept per MatchFinder"
    )

    # Typo correction
    min_confidence: float = Field(default=0.6, ge=0.0, lt=1.0, description="Minimum correction confidence")
    max_suggestions: int = Field(default=2, ge=1, le=20, description="Maximum corrections offered")

    def highlight_options(self) -> HighlightOptions:
        """Build the option record passed to matching and snippet calls."""
        return HighlightOptions(
            max_snippets=self.max_snippets,
            snippet_length=self.snippet_length,
            context_window=self.context_window,
            case_sensitive=self.case_sensitive,
        )

    def suggestion_options(self) -> SuggestionOptions:
        return SuggestionOptions(min_confidence=self.min_confidence, max_suggestions=self.max_suggestions)

    def create_match_finder(self) -> MatchFinder:
        """A MatchFinder owning a pattern cache of the configured size."""
        return MatchFinder(PatternCache(max_size=self.pattern_cache_size))
