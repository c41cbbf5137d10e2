"""Tests for content domain models."""

from datetime import UTC, date, datetime

import pytest
from pydantic import TypeAdapter, ValidationError

from haru.content.models import (
    ChatMessage,
    ContentBlock,
    DiaryEntry,
    EntryPhoto,
    ImageBlock,
    ImageMeta,
    ParagraphBlock,
    Speaker,
    WriteMode,
)

_block_adapter = TypeAdapter(list[ContentBlock])


class TestEnums:
    def test_write_mode_values(self):
        assert WriteMode.JOURNAL == "journal"
        assert WriteMode.CHAT == "chat"

    def test_speaker_values(self):
        assert {s.value for s in Speaker} == {"user", "assistant"}


class TestContentBlock:
    def test_paragraph_defaults(self):
        block = ParagraphBlock()
        assert block.type == "paragraph"
        assert block.text == ""

    def test_image_defaults(self):
        block = ImageBlock(url="https://img/1.png")
        assert block.type == "image"
        assert block.caption is None
        assert block.meta is None

    def test_union_dispatches_on_type(self):
        blocks = _block_adapter.validate_python(
            [
                {"type": "paragraph", "text": "Hello"},
                {"type": "image", "url": "a.png", "caption": "A", "meta": {"width": 4, "height": 3, "size": 99}},
            ]
        )
        assert isinstance(blocks[0], ParagraphBlock)
        assert isinstance(blocks[1], ImageBlock)
        assert blocks[1].meta == ImageMeta(width=4, height=3, size=99)

    def test_unknown_type_rejected(self):
        with pytest.raises(ValidationError):
            _block_adapter.validate_python([{"type": "video", "url": "x.mp4"}])


class TestEntryPhoto:
    def test_creation(self):
        photo = EntryPhoto(id="p1", entry_id="e1", storage_path="u/e1/a.jpg", position_index=0)
        assert photo.caption is None
        assert photo.uploaded_at.tzinfo is not None

    def test_negative_position_rejected(self):
        with pytest.raises(ValidationError):
            EntryPhoto(id="p1", entry_id="e1", storage_path="x", position_index=-1)


class TestChatMessage:
    def test_creation(self):
        msg = ChatMessage(speaker="assistant", message="How did that feel?", timestamp="2025-09-17T10:00:00Z")
        assert msg.speaker == Speaker.ASSISTANT


class TestDiaryEntry:
    def test_minimal_creation(self):
        entry = DiaryEntry(id="e1", date="2025-09-17", mood="😊")
        assert entry.title is None
        assert entry.content == []
        assert entry.photos == []
        assert entry.ai_chats == []
        assert entry.write_mode == WriteMode.JOURNAL
        assert entry.is_deleted is False

    def test_date_object_normalised_to_iso(self):
        entry = DiaryEntry(id="e1", date=date(2025, 9, 1), mood="😊")
        assert entry.date == "2025-09-01"
        assert entry.calendar_date == date(2025, 9, 1)

    def test_datetime_normalised_to_its_day(self):
        entry = DiaryEntry(id="e1", date=datetime(2025, 9, 1, 23, 30, tzinfo=UTC), mood="😊")
        assert entry.date == "2025-09-01"

    def test_malformed_date_still_loads(self):
        entry = DiaryEntry(id="e1", date="not-a-date", mood="😢")
        assert entry.calendar_date is None

    def test_impossible_date_has_no_calendar_date(self):
        entry = DiaryEntry(id="e1", date="2025-02-30", mood="😢")
        assert entry.calendar_date is None

    def test_blank_mood_rejected(self):
        with pytest.raises(ValidationError):
            DiaryEntry(id="e1", date="2025-09-17", mood="  ")

    def test_content_from_raw_dicts(self):
        entry = DiaryEntry.model_validate(
            {
                "id": "e1",
                "date": "2025-09-17",
                "mood": "😊",
                "content": [{"type": "paragraph", "text": "A [PHOTO:1] B"}, {"type": "image", "url": "b.png"}],
            }
        )
        assert isinstance(entry.content[0], ParagraphBlock)
        assert isinstance(entry.content[1], ImageBlock)

    def test_json_roundtrip(self):
        entry = DiaryEntry(
            id="e1",
            date="2025-09-17",
            mood="😊",
            title="Walk",
            content=[ParagraphBlock(text="Hi"), ImageBlock(url="x.png", caption="X")],
            ai_chats=[ChatMessage(speaker="user", message="hi", timestamp="2025-09-17T10:00:00Z")],
        )
        restored = DiaryEntry.model_validate_json(entry.model_dump_json())
        assert restored == entry

    def test_null_content_is_empty(self):
        entry = DiaryEntry(id="e1", date="2025-09-17", mood="😊", content=None, photos=None, ai_chats=None)
        assert entry.content == []
        assert entry.photos == []
        assert entry.ai_chats == []

    def test_null_paragraph_text_is_empty(self):
        entry = DiaryEntry.model_validate(
            {"id": "e1", "date": "2025-09-17", "mood": "😊", "content": [{"type": "paragraph", "text": None}]}
        )
        assert entry.content == [ParagraphBlock(text="")]

    def test_naive_timestamps_assumed_utc(self):
        entry = DiaryEntry.model_validate(
            {"id": "e1", "date": "2025-09-17", "mood": "😊", "created_at": "2025-09-17T08:00:00"}
        )
        assert entry.created_at == datetime(2025, 9, 17, 8, tzinfo=UTC)
        assert entry.updated_at.tzinfo is not None
