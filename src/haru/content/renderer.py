"""Inline content rendering.

Turns an entry's stored content blocks plus its photo list into an
ordered list of display segments.  Markers that point at a photo which
is not (or no longer) in the list become placeholders rather than
errors, so an entry always renders.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from haru.content.markers import PHOTO_MARKER_PATTERN
from haru.content.models import ContentBlock, DiaryEntry, EntryPhoto, ImageBlock, ParagraphBlock


class TextSegment(BaseModel):
    kind: Literal["text"] = "text"
    value: str


class ResolvedPhotoSegment(BaseModel):
    """A photo to display, from a resolved marker or an image block."""

    kind: Literal["photo"] = "photo"
    storage_path: str
    caption: str | None = None
    alt_label: str
    marker: str | None = None


class PhotoPlaceholderSegment(BaseModel):
    """Stand-in for a marker whose photo is missing."""

    kind: Literal["placeholder"] = "placeholder"
    label: str
    marker: str | None = None


RenderSegment = Annotated[
    TextSegment | ResolvedPhotoSegment | PhotoPlaceholderSegment,
    Field(discriminator="kind"),
]


def _photo_label(number: int) -> str:
    return f"Photo {number}"


def _find_photo(photos: Sequence[EntryPhoto], position_index: int) -> EntryPhoto | None:
    for photo in photos:
        if photo.position_index == position_index:
            return photo
    return None


def _render_paragraph(text: str, photos: Sequence[EntryPhoto]) -> list[RenderSegment]:
    segments: list[RenderSegment] = []
    pos = 0
    for match in PHOTO_MARKER_PATTERN.finditer(text):
        if match.start() > pos:
            segments.append(TextSegment(value=text[pos : match.start()]))
        pos = match.end()

        marker = match.group(0)
        number = int(match.group(1))
        photo = _find_photo(photos, number - 1)
        if photo is None:
            segments.append(PhotoPlaceholderSegment(label=_photo_label(number), marker=marker))
        else:
            segments.append(
                ResolvedPhotoSegment(
                    storage_path=photo.storage_path,
                    caption=photo.caption,
                    alt_label=photo.caption or _photo_label(number),
                    marker=marker,
                )
            )
    if pos < len(text):
        segments.append(TextSegment(value=text[pos:]))
    return segments


def _render_image(block: ImageBlock) -> ResolvedPhotoSegment:
    return ResolvedPhotoSegment(
        storage_path=block.url,
        caption=block.caption,
        alt_label=block.caption or "Photo",
    )


def render(
    content: Iterable[ContentBlock] | None,
    photos: Sequence[EntryPhoto] | None = None,
) -> list[RenderSegment]:
    """Render content blocks into display segments.

    Args:
        content: The entry's blocks.  None renders as nothing.
        photos: The same entry's photos.  Markers resolve against this
            list only, by exact ``position_index`` (marker number - 1).

    Returns:
        Fresh segments in block order, and left to right within each
        paragraph.
    """
    if content is None:
        return []
    photos = list(photos or [])

    segments: list[RenderSegment] = []
    for block in content:
        if isinstance(block, ParagraphBlock):
            segments.extend(_render_paragraph(block.text, photos))
        elif isinstance(block, ImageBlock):
            segments.append(_render_image(block))
    return segments


def render_entry(entry: DiaryEntry) -> list[RenderSegment]:
    """Render an entry against its own photos, ignoring any from other entries."""
    own_photos = [p for p in entry.photos if p.entry_id == entry.id]
    return render(entry.content, own_photos)


def segments_to_text(segments: Iterable[RenderSegment]) -> str:
    """Rebuild marker-bearing text from paragraph segments.

    Segments from image blocks carry no marker and contribute nothing.
    """
    parts: list[str] = []
    for segment in segments:
        if isinstance(segment, TextSegment):
            parts.append(segment.value)
        elif segment.marker is not None:
            parts.append(segment.marker)
    return "".join(parts)
