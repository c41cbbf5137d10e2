"""Entry summaries for list and calendar views, plus text/block helpers."""

from __future__ import annotations

from pydantic import BaseModel

from haru.content.markers import strip_photo_markers
from haru.content.models import ContentBlock, DiaryEntry, ImageBlock, ParagraphBlock

DEFAULT_PREVIEW_LENGTH = 100


class EntrySummary(BaseModel):
    """Flattened, display-ready view of an entry."""

    id: str
    date: str
    day: int | None
    mood: str
    title: str
    text: str
    preview: str
    has_photo: bool
    photo_url: str | None = None
    has_reflection: bool = False
    reflection_summary: str | None = None


def content_to_text(content: list[ContentBlock]) -> str:
    """Join paragraph texts with blank lines; image blocks are dropped."""
    return "\n\n".join(b.text for b in content if isinstance(b, ParagraphBlock))


def text_to_content(
    text: str,
    photo_url: str | None = None,
    photo_caption: str | None = None,
) -> list[ContentBlock]:
    """Build blocks from plain text, one paragraph per blank-line chunk.

    An optional photo URL becomes a trailing image block.
    """
    blocks: list[ContentBlock] = [
        ParagraphBlock(text=chunk.strip()) for chunk in text.split("\n\n") if chunk.strip()
    ]
    if photo_url:
        blocks.append(ImageBlock(url=photo_url, caption=photo_caption))
    return blocks


def content_has_photos(entry: DiaryEntry) -> bool:
    if entry.photos:
        return True
    return any(isinstance(b, ImageBlock) for b in entry.content)


def first_photo_url(entry: DiaryEntry) -> str | None:
    """Lowest-positioned stored photo, else the first image block."""
    if entry.photos:
        return min(entry.photos, key=lambda p: p.position_index).storage_path
    for block in entry.content:
        if isinstance(block, ImageBlock):
            return block.url
    return None


def make_preview(text: str, length: int = DEFAULT_PREVIEW_LENGTH) -> str:
    if len(text) > length:
        return text[:length] + "..."
    return text


def summarize_entry(entry: DiaryEntry, preview_length: int = DEFAULT_PREVIEW_LENGTH) -> EntrySummary:
    text = strip_photo_markers(content_to_text(entry.content))
    day = entry.calendar_date
    return EntrySummary(
        id=entry.id,
        date=entry.date,
        day=day.day if day else None,
        mood=entry.mood,
        title=entry.title or "",
        text=text,
        preview=make_preview(text, preview_length),
        has_photo=content_has_photos(entry),
        photo_url=first_photo_url(entry),
        has_reflection=bool(entry.ai_chats),
        reflection_summary=entry.summary if entry.ai_chats else None,
    )
