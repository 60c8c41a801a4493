"""Data models for output format."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from book_extract.models.content import ContentNode, StructuredContent


class ChapterMetadata(BaseModel):
    """Metadata accompanying chapter content."""

    chapter_index: int
    title: str
    level: int
    source_path: str
    extracted_at: datetime = Field(default_factory=datetime.now)
    word_count: int
    character_count: int
    block_count: int
    page_start: int | None = None
    page_end: int | None = None


class ChapterOutput(BaseModel):
    """Complete chapter output for downstream consumers."""

    metadata: ChapterMetadata
    content: list[ContentNode]
    structured: list[StructuredContent]


class BookOutput(BaseModel):
    """Complete book output manifest."""

    book_title: str
    authors: list[str] = Field(default_factory=list)
    total_chapters: int
    output_directory: str
    created_at: datetime = Field(default_factory=datetime.now)
    chapters: list[ChapterMetadata]
    metadata: dict[str, str] = Field(default_factory=dict)
    cover_path: str | None = None
    format: Literal["json", "markdown"] = "json"
