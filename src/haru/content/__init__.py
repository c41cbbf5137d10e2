"""Content domain: diary entry models, photo markers and rendering.

Entries store their body as paragraph and image blocks.  Paragraph text
may reference the entry's stored photos with ``[PHOTO:N]`` markers,
which the renderer resolves into display segments.
"""

from haru.content.markers import (
    PHOTO_MARKER_PATTERN,
    MarkerExtraction,
    MarkerPosition,
    extract_photo_markers,
    insert_photo_marker,
    split_markers,
    strip_photo_markers,
)
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
from haru.content.renderer import (
    PhotoPlaceholderSegment,
    RenderSegment,
    ResolvedPhotoSegment,
    TextSegment,
    render,
    render_entry,
    segments_to_text,
)
from haru.content.summary import EntrySummary, content_to_text, summarize_entry, text_to_content

__all__ = [
    "PHOTO_MARKER_PATTERN",
    "ChatMessage",
    "ContentBlock",
    "DiaryEntry",
    "EntryPhoto",
    "EntrySummary",
    "ImageBlock",
    "ImageMeta",
    "MarkerExtraction",
    "MarkerPosition",
    "ParagraphBlock",
    "PhotoPlaceholderSegment",
    "RenderSegment",
    "ResolvedPhotoSegment",
    "Speaker",
    "TextSegment",
    "WriteMode",
    "content_to_text",
    "extract_photo_markers",
    "insert_photo_marker",
    "render",
    "render_entry",
    "segments_to_text",
    "split_markers",
    "strip_photo_markers",
    "summarize_entry",
    "text_to_content",
]
