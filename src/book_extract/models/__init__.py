"""Data models."""

from book_extract.models.book import (
    Chapter,
    ChapterRange,
    ChapterStructure,
    TOCEntry,
)
from book_extract.models.content import (
    ContentNode,
    ContentType,
    StructuredContent,
)
from book_extract.models.cover import CoverResult, CoverStatus
from book_extract.models.extraction import ExtractionConfig, TextFormat
from book_extract.models.output import (
    BookOutput,
    ChapterMetadata,
    ChapterOutput,
)

__all__ = [
    # Book models
    "TOCEntry",
    "ChapterRange",
    "Chapter",
    "ChapterStructure",
    # Content models
    "ContentType",
    "ContentNode",
    "StructuredContent",
    # Cover models
    "CoverStatus",
    "CoverResult",
    # Extraction models
    "TextFormat",
    "ExtractionConfig",
    # Output models
    "ChapterMetadata",
    "ChapterOutput",
    "BookOutput",
]
