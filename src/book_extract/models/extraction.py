"""Configuration models for document extraction."""

from enum import Enum

from pydantic import BaseModel, Field


class TextFormat(str, Enum):
    """How page text is pulled out of the rendering engine."""

    PLAIN = "plain"
    MARKDOWN = "markdown"  # XHTML page markup converted to markdown


class ExtractionConfig(BaseModel):
    """Options shared by the extraction entry points."""

    text_format: TextFormat = TextFormat.PLAIN
    page_separator: str = "\n"
    cover_page: int = Field(default=0, ge=0)
    jpeg_quality: int = Field(default=95, ge=1, le=100)
    cover_dpi: int | None = Field(default=None, gt=0)
