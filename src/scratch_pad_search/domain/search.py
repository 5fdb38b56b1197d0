"""Domain models for query suggestions.

Value objects handed to the search bar collaborator. Immutable so a
suggestion list computed for one keystroke cannot drift while displayed.
"""

from pydantic import BaseModel, ConfigDict, Field


class TypoCorrection(BaseModel):
    """A "did you mean" proposal drawn from the query history."""

    model_config = ConfigDict(frozen=True)

    candidate_query: str
    confidence: float = Field(gt=0.0, le=1.0)
    original_query: str

    @property
    def description(self) -> str:
        return f'Did you mean "{self.candidate_query}"?'


class CompletionSuggestion(BaseModel):
    """A word from the user's notes that completes the typed prefix."""

    model_config = ConfigDict(frozen=True)

    text: str
    prefix: str

    @property
    def description(self) -> str:
        return f'Complete "{self.prefix}" to "{self.text}"'
