"""Note records supplied by the notes/storage collaborator.

The search engine only reads these; it never mutates or persists them.
"""

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


NoteFormat = Literal["plaintext", "markdown"]

TITLE_FALLBACK_CHARS = 100


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(BaseModel):
    """Value object for a single note.

    ``nickname`` is the user-visible name in the note list; ``title`` is kept
    for hosts that store a separate heading.
    """

    model_config = ConfigDict(frozen=True)

    id: int | str
    content: str = ""
    nickname: str | None = None
    title: str | None = None
    format: NoteFormat = "plaintext"
    path: str | None = None
    is_favorite: bool = False
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    @property
    def display_title(self) -> str:
        """Title used for highlighting: title, nickname, or the first content line."""
        if self.title:
            return self.title
        if self.nickname:
            return self.nickname
        return self.content.split("\n", 1)[0][:TITLE_FALLBACK_CHARS]


class SearchResultPage(BaseModel):
    """One page of notes returned by the backend search service."""

    model_config = ConfigDict(frozen=True)

    notes: tuple[Note, ...] = ()
    total_count: int = Field(default=0, ge=0)
    page: int = Field(default=0, ge=0)
    page_size: int = Field(default=50, ge=1)
    has_more: bool = False
    query_time_ms: float = Field(default=0.0, ge=0.0)
