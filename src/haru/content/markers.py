"""Inline photo markers.

Paragraph text can reference an entry's stored photos with markers of
the form ``[PHOTO:N]`` where N is a one-based position (no sign, no
leading zeros).  Anything else that merely looks similar, such as
``[PHOTO]`` or ``[PHOTO:abc]``, is ordinary text.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

from haru.errors import InvalidArgumentError

PHOTO_MARKER_PATTERN = re.compile(r"\[PHOTO:([1-9][0-9]*)\]")

# Capturing the whole token makes re.split keep it between literal parts.
_SPLIT_PATTERN = re.compile(r"(\[PHOTO:[1-9][0-9]*\])")


class MarkerPosition(BaseModel):
    """A marker found in text, with its offset in the original string."""

    marker: str
    number: int
    position: int


class MarkerExtraction(BaseModel):
    """Text with markers removed plus where each marker was."""

    clean_text: str
    positions: list[MarkerPosition] = Field(default_factory=list)


def photo_marker(number: int) -> str:
    """Build the marker token for a one-based photo number."""
    if number < 1:
        raise InvalidArgumentError(f"photo number must be >= 1, got {number}")
    return f"[PHOTO:{number}]"


def split_markers(text: str) -> list[str]:
    """Split *text* into alternating literal spans and marker tokens.

    Even indexes are literal spans (possibly empty), odd indexes are
    markers.  ``"".join(split_markers(text)) == text`` always holds.
    """
    return _SPLIT_PATTERN.split(text)


def parse_marker(token: str) -> int | None:
    """Return the one-based number of a marker token, or None."""
    match = PHOTO_MARKER_PATTERN.fullmatch(token)
    if match is None:
        return None
    return int(match.group(1))


def insert_photo_marker(text: str, cursor: int, number: int) -> str:
    """Insert a marker for photo *number* at *cursor*, clamped to the text."""
    marker = photo_marker(number)
    cursor = max(0, min(cursor, len(text)))
    return text[:cursor] + marker + text[cursor:]


def extract_photo_markers(text: str) -> MarkerExtraction:
    """Find every marker and return the text without them."""
    positions = [
        MarkerPosition(marker=m.group(0), number=int(m.group(1)), position=m.start())
        for m in PHOTO_MARKER_PATTERN.finditer(text)
    ]
    return MarkerExtraction(clean_text=strip_photo_markers(text), positions=positions)


def strip_photo_markers(text: str) -> str:
    return PHOTO_MARKER_PATTERN.sub("", text)
