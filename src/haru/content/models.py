"""Content domain models: pure Pydantic v2 data types.

A diary entry's body is an ordered list of content blocks (paragraphs
and directly embedded images).  Photos uploaded for an entry live in a
separate list and are referenced from paragraph text with inline
``[PHOTO:N]`` markers, resolved only at render time.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, Field, field_validator


class WriteMode(StrEnum):
    """How an entry was written."""

    JOURNAL = "journal"
    CHAT = "chat"


class Speaker(StrEnum):
    """Author of a reflection chat message."""

    USER = "user"
    ASSISTANT = "assistant"


class ImageMeta(BaseModel):
    """Pixel dimensions and byte size of an uploaded image."""

    width: int
    height: int
    size: int


class ParagraphBlock(BaseModel):
    """A run of text, possibly containing photo markers."""

    type: Literal["paragraph"] = "paragraph"
    text: str = ""

    @field_validator("text", mode="before")
    @classmethod
    def _null_text(cls, value: object) -> object:
        return "" if value is None else value


class ImageBlock(BaseModel):
    """An image embedded directly in the content."""

    type: Literal["image"] = "image"
    url: str
    caption: str | None = None
    meta: ImageMeta | None = None


ContentBlock = Annotated[ParagraphBlock | ImageBlock, Field(discriminator="type")]


class EntryPhoto(BaseModel):
    """A stored photo belonging to an entry, addressed by position."""

    id: str
    entry_id: str
    storage_path: str
    caption: str | None = None
    position_index: int = Field(ge=0)
    uploaded_at: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))
    meta: ImageMeta | None = None


class ChatMessage(BaseModel):
    """A single message in an entry's reflection chat."""

    speaker: Speaker
    message: str
    timestamp: str


class DiaryEntry(BaseModel):
    """One journal record.

    ``date`` keeps the stored ``YYYY-MM-DD`` text.  A record with a
    malformed date still loads; ``calendar_date`` is then ``None`` and
    calendar views leave the entry out.
    """

    id: str
    date: str
    mood: str
    title: str | None = None
    content: list[ContentBlock] = Field(default_factory=list)
    photos: list[EntryPhoto] = Field(default_factory=list)
    profile_id: str = ""
    ai_chats: list[ChatMessage] = Field(default_factory=list)
    summary: str | None = None
    write_mode: WriteMode = WriteMode.JOURNAL
    is_deleted: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(tz=UTC))

    @field_validator("date", mode="before")
    @classmethod
    def _date_to_text(cls, value: object) -> object:
        if isinstance(value, datetime):
            return value.date().isoformat()
        if isinstance(value, date):
            return value.isoformat()
        return value

    @field_validator("content", "photos", "ai_chats", mode="before")
    @classmethod
    def _null_list(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        # Timestamps written without an offset are UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @field_validator("mood")
    @classmethod
    def _mood_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("mood must not be empty")
        return value

    @property
    def calendar_date(self) -> date | None:
        """Parsed calendar date, or None when the stored date is malformed."""
        from haru.calendar.dates import parse_calendar_date

        return parse_calendar_date(self.date)
