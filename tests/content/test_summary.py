"""Tests for entry summaries and text/block helpers."""

from haru.content.models import ChatMessage, DiaryEntry, EntryPhoto, ImageBlock, ParagraphBlock
from haru.content.summary import (
    content_has_photos,
    content_to_text,
    first_photo_url,
    make_preview,
    summarize_entry,
    text_to_content,
)


def _entry(**kwargs: object) -> DiaryEntry:
    defaults: dict[str, object] = {"id": "e1", "date": "2025-09-17", "mood": "😊"}
    defaults.update(kwargs)
    return DiaryEntry(**defaults)  # type: ignore[arg-type]


class TestTextToContent:
    def test_splits_on_blank_lines(self):
        blocks = text_to_content("First\n\n  Second  \n\n\n\n")
        assert blocks == [ParagraphBlock(text="First"), ParagraphBlock(text="Second")]

    def test_blank_text_gives_no_paragraphs(self):
        assert text_to_content("   ") == []

    def test_appends_photo(self):
        blocks = text_to_content("Hi", photo_url="a.png", photo_caption="A")
        assert blocks[-1] == ImageBlock(url="a.png", caption="A")

    def test_roundtrip_with_content_to_text(self):
        assert content_to_text(text_to_content("One\n\nTwo")) == "One\n\nTwo"


class TestContentToText:
    def test_skips_images(self):
        content = [ParagraphBlock(text="a"), ImageBlock(url="x"), ParagraphBlock(text="b")]
        assert content_to_text(content) == "a\n\nb"


class TestPhotos:
    def test_no_photos(self):
        entry = _entry(content=[ParagraphBlock(text="hi")])
        assert content_has_photos(entry) is False
        assert first_photo_url(entry) is None

    def test_stored_photo_lowest_position_wins(self):
        entry = _entry(
            photos=[
                EntryPhoto(id="b", entry_id="e1", storage_path="second.png", position_index=4),
                EntryPhoto(id="a", entry_id="e1", storage_path="first.png", position_index=1),
            ]
        )
        assert content_has_photos(entry) is True
        assert first_photo_url(entry) == "first.png"

    def test_falls_back_to_image_block(self):
        entry = _entry(content=[ParagraphBlock(text="x"), ImageBlock(url="inline.png")])
        assert content_has_photos(entry) is True
        assert first_photo_url(entry) == "inline.png"


class TestPreview:
    def test_short_text_untouched(self):
        assert make_preview("short", 10) == "short"

    def test_truncates_with_ellipsis(self):
        assert make_preview("x" * 12, 10) == "x" * 10 + "..."


class TestSummarizeEntry:
    def test_basic_fields(self):
        entry = _entry(title=None, content=[ParagraphBlock(text="A [PHOTO:1] walk")])
        summary = summarize_entry(entry)
        assert summary.id == "e1"
        assert summary.day == 17
        assert summary.title == ""
        assert summary.text == "A  walk"
        assert summary.preview == "A  walk"
        assert summary.has_reflection is False
        assert summary.reflection_summary is None

    def test_preview_length(self):
        entry = _entry(content=[ParagraphBlock(text="abcdefghij")])
        assert summarize_entry(entry, preview_length=4).preview == "abcd..."

    def test_reflection(self):
        entry = _entry(
            summary="Felt calmer",
            ai_chats=[ChatMessage(speaker="user", message="hi", timestamp="2025-09-17T10:00:00Z")],
        )
        summary = summarize_entry(entry)
        assert summary.has_reflection is True
        assert summary.reflection_summary == "Felt calmer"

    def test_unparseable_date_has_no_day(self):
        assert summarize_entry(_entry(date="garbage")).day is None
