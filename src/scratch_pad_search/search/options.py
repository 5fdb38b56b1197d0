"""Option records passed explicitly to every engine call.

The engine never reads ambient configuration; hosts build these from
:class:`scratch_pad_search.config.Settings` or construct them directly.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class HighlightOptions(BaseModel):
    """Matching and snippet preferences."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    max_snippets: Annotated[
        int,
        Field(ge=1, le=50, description="Maximum number of snippets emitted per note"),
    ] = 3

    snippet_length: Annotated[
        int,
        Field(ge=10, le=5000, description="Target characters per snippet"),
    ] = 150

    context_window: Annotated[
        int,
        Field(ge=0, le=1000, description="Max gap in characters between matches grouped into one snippet"),
    ] = 40

    case_sensitive: Annotated[
        bool,
        Field(description="Match terms with exact case"),
    ] = False

    enable_regex_safe: Annotated[
        bool,
        Field(
            description=(
                "Escape every term before matching. Disabling compiles terms verbatim and is only "
                "supported for internal testing"
            ),
        ),
    ] = True


class SuggestionOptions(BaseModel):
    """Thresholds for "did you mean" corrections."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    min_confidence: Annotated[
        float,
        Field(ge=0.0, lt=1.0, description="Corrections must score strictly above this confidence"),
    ] = 0.6

    max_suggestions: Annotated[
        int,
        Field(ge=1, le=20, description="Maximum number of corrections returned"),
    ] = 2

    max_edit_distance: Annotated[
        int,
        Field(ge=1, le=5, description="Largest edit distance still treated as a typo"),
    ] = 2

    min_query_length: Annotated[
        int,
        Field(ge=1, description="Queries shorter than this get no corrections"),
    ] = 3


DEFAULT_HIGHLIGHT_OPTIONS = HighlightOptions()
DEFAULT_SUGGESTION_OPTIONS = SuggestionOptions()
