"""JSON-backed diary store.

Persists entries and their photos in a single JSON file, loaded on init
and saved after every write operation.  Implements the
``DiaryRepository`` protocol that the rest of haru reads entries through.
"""

from __future__ import annotations

import json
import logging
import shutil
import uuid
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Protocol, TypeVar

from pydantic import BaseModel, Field, ValidationError

from haru.content.models import (
    ChatMessage,
    ContentBlock,
    DiaryEntry,
    EntryPhoto,
    ImageMeta,
    WriteMode,
)
from haru.errors import EntryLimitError, EntryNotFoundError, InvalidArgumentError

logger = logging.getLogger(__name__)

STORE_FILENAME = ".haru-store.json"
DEFAULT_DAILY_LIMIT = 3
BACKUP_SUFFIX = ".bak"

_Record = TypeVar("_Record", DiaryEntry, EntryPhoto)


class EntryCreate(BaseModel):
    """Fields supplied when writing a new entry."""

    date: date
    mood: str
    title: str | None = None
    content: list[ContentBlock] = Field(default_factory=list)
    write_mode: WriteMode = WriteMode.JOURNAL
    profile_id: str = ""


class EntryUpdate(BaseModel):
    """Explicit edit of an entry; only fields that are set are applied.

    The date is fixed at creation.
    """

    mood: str | None = None
    title: str | None = None
    content: list[ContentBlock] | None = None
    ai_chats: list[ChatMessage] | None = None
    summary: str | None = None
    write_mode: WriteMode | None = None


class DiaryRepository(Protocol):
    """Source of diary entries and photos."""

    def list_entries(self) -> list[DiaryEntry]: ...

    def get_entry(self, entry_id: str) -> DiaryEntry: ...

    def entries_for_date(self, day: date) -> list[DiaryEntry]: ...

    def count_for_date(self, day: date) -> int: ...

    def create_entry(self, data: EntryCreate) -> DiaryEntry: ...

    def update_entry(self, entry_id: str, data: EntryUpdate) -> DiaryEntry: ...

    def delete_entry(self, entry_id: str) -> None: ...

    def delete_all(self) -> int: ...

    def purge_all(self) -> int: ...

    def add_photo(
        self,
        entry_id: str,
        storage_path: str,
        position_index: int,
        caption: str | None = None,
        meta: ImageMeta | None = None,
    ) -> EntryPhoto: ...

    def photos_for(self, entry_id: str) -> list[EntryPhoto]: ...


class _StoreData(BaseModel):
    """Internal wrapper for JSON serialization."""

    entries: list[DiaryEntry] = Field(default_factory=list)
    photos: list[EntryPhoto] = Field(default_factory=list)


def _validate_each(model: type[_Record], records: object) -> tuple[list[_Record], int]:
    """Validate stored records one at a time, returning the good ones and a skip count."""
    if records is None:
        return [], 0
    if not isinstance(records, list):
        return [], 1
    valid: list[_Record] = []
    skipped = 0
    for record in records:
        try:
            valid.append(model.model_validate(record))
        except ValidationError as exc:
            skipped += 1
            record_id = record.get("id") if isinstance(record, dict) else None
            logger.warning("Skipping invalid %s %s: %d errors", model.__name__, record_id, exc.error_count())
    return valid, skipped


class DiaryStore:
    """JSON-backed diary repository.

    Loads the store file on init and saves after every mutation.  Deleted
    entries are flagged, not removed, and are invisible to every read.
    """

    def __init__(self, directory: Path, daily_limit: int = DEFAULT_DAILY_LIMIT) -> None:
        self._path = directory / STORE_FILENAME
        self._daily_limit = daily_limit
        self._data = self._load()

    @property
    def path(self) -> Path:
        return self._path

    # ── Private helpers ──────────────────────────────────────────

    def _load(self) -> _StoreData:
        if not self._path.exists():
            return _StoreData()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
        except ValueError:
            raw = None
        if not isinstance(raw, dict):
            logger.warning("Corrupt diary store at %s, starting fresh", self._path)
            self._backup()
            return _StoreData()

        entries, bad_entries = _validate_each(DiaryEntry, raw.get("entries"))
        photos, bad_photos = _validate_each(EntryPhoto, raw.get("photos"))
        if bad_entries or bad_photos:
            logger.warning(
                "Skipped %d entries and %d photos that failed validation in %s",
                bad_entries,
                bad_photos,
                self._path,
            )
            self._backup()
        return _StoreData(entries=entries, photos=photos)

    def _backup(self) -> None:
        """Copy the store file aside before a save can overwrite what was skipped."""
        backup = self._path.with_name(self._path.name + BACKUP_SUFFIX)
        shutil.copy2(self._path, backup)
        logger.warning("Kept a copy of the unreadable store at %s", backup)

    def _save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            self._data.model_dump_json(indent=2),
            encoding="utf-8",
        )
        logger.debug("Saved %d entries to %s", len(self._data.entries), self._path)

    def _find(self, entry_id: str) -> DiaryEntry | None:
        for entry in self._data.entries:
            if entry.id == entry_id and not entry.is_deleted:
                return entry
        return None

    def _require(self, entry_id: str) -> DiaryEntry:
        entry = self._find(entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        return entry

    def _replace(self, updated: DiaryEntry) -> None:
        self._data.entries = [updated if e.id == updated.id else e for e in self._data.entries]

    def _with_photos(self, entry: DiaryEntry) -> DiaryEntry:
        return entry.model_copy(update={"photos": self.photos_for(entry.id)}, deep=True)

    def _live(self) -> list[DiaryEntry]:
        return [e for e in self._data.entries if not e.is_deleted]

    # ── Read operations ──────────────────────────────────────────

    def list_entries(self) -> list[DiaryEntry]:
        """Return live entries, newest date first, then newest created."""
        ordered = sorted(self._live(), key=lambda e: (e.date, e.created_at), reverse=True)
        return [self._with_photos(e) for e in ordered]

    def get_entry(self, entry_id: str) -> DiaryEntry:
        """Return an entry with its photos.

        Raises EntryNotFoundError if the id does not exist or was deleted.
        """
        return self._with_photos(self._require(entry_id))

    def entries_for_date(self, day: date) -> list[DiaryEntry]:
        """Return live entries written for *day*, newest created first."""
        key = day.isoformat()
        matching = [e for e in self._live() if e.date == key]
        matching.sort(key=lambda e: e.created_at, reverse=True)
        return [self._with_photos(e) for e in matching]

    def count_for_date(self, day: date) -> int:
        key = day.isoformat()
        return sum(1 for e in self._live() if e.date == key)

    def photos_for(self, entry_id: str) -> list[EntryPhoto]:
        """Return an entry's photos ordered by position index."""
        photos = [p for p in self._data.photos if p.entry_id == entry_id]
        return sorted(photos, key=lambda p: p.position_index)

    # ── Write operations ─────────────────────────────────────────

    def create_entry(self, data: EntryCreate) -> DiaryEntry:
        """Write a new entry.

        Raises EntryLimitError if the day already has the maximum number
        of entries.
        """
        if self.count_for_date(data.date) >= self._daily_limit:
            raise EntryLimitError(
                f"Maximum {self._daily_limit} entries per day allowed ({data.date.isoformat()})"
            )
        now = datetime.now(tz=UTC)
        entry = DiaryEntry(
            id=uuid.uuid4().hex,
            date=data.date,
            mood=data.mood,
            title=data.title,
            content=data.content,
            write_mode=data.write_mode,
            profile_id=data.profile_id,
            created_at=now,
            updated_at=now,
        )
        self._data.entries.append(entry)
        self._save()
        return self._with_photos(entry)

    def update_entry(self, entry_id: str, data: EntryUpdate) -> DiaryEntry:
        """Apply an explicit edit.

        Raises EntryNotFoundError if the id does not exist or was deleted.
        """
        entry = self._require(entry_id)
        changes = data.model_dump(exclude_unset=True)
        changes["updated_at"] = datetime.now(tz=UTC)
        updated = DiaryEntry.model_validate({**entry.model_dump(), **changes})
        self._replace(updated)
        self._save()
        return self._with_photos(updated)

    def delete_entry(self, entry_id: str) -> None:
        """Soft-delete an entry.

        Raises EntryNotFoundError if the id does not exist or was deleted.
        """
        entry = self._require(entry_id)
        self._replace(entry.model_copy(update={"is_deleted": True, "updated_at": datetime.now(tz=UTC)}))
        self._save()

    def delete_all(self) -> int:
        """Soft-delete every live entry and return how many were deleted."""
        live = self._live()
        if not live:
            return 0
        now = datetime.now(tz=UTC)
        self._data.entries = [
            e if e.is_deleted else e.model_copy(update={"is_deleted": True, "updated_at": now})
            for e in self._data.entries
        ]
        self._save()
        return len(live)

    def purge_all(self) -> int:
        """Permanently remove every entry and photo, deleted or not."""
        count = len(self._data.entries)
        if count == 0:
            return 0
        self._data = _StoreData()
        self._save()
        return count

    def add_photo(
        self,
        entry_id: str,
        storage_path: str,
        position_index: int,
        caption: str | None = None,
        meta: ImageMeta | None = None,
    ) -> EntryPhoto:
        """Attach a stored photo to an entry at *position_index*.

        Raises:
            EntryNotFoundError: the entry does not exist or was deleted.
            InvalidArgumentError: the position is negative or already taken.
        """
        self._require(entry_id)
        if position_index < 0:
            raise InvalidArgumentError(f"position_index must be >= 0, got {position_index}")
        if any(p.position_index == position_index for p in self.photos_for(entry_id)):
            raise InvalidArgumentError(f"Entry {entry_id} already has a photo at position {position_index}")
        photo = EntryPhoto(
            id=uuid.uuid4().hex,
            entry_id=entry_id,
            storage_path=storage_path,
            caption=caption,
            position_index=position_index,
            meta=meta,
        )
        self._data.photos.append(photo)
        self._save()
        return photo
