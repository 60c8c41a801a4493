"""Data models for classified chapter content."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ContentType(str, Enum):
    """Semantic type of a content block."""

    TEXT = "text"
    HEADING = "heading"
    IMAGE = "image"
    TABLE = "table"
    LIST = "list"
    QUOTE = "quote"
    CODE = "code"


class ContentNode(BaseModel):
    """Single raw content line, before classification."""

    model_config = ConfigDict(frozen=True)

    type: str = "paragraph"
    text: str


class StructuredContent(BaseModel):
    """One classified unit of chapter text."""

    model_config = ConfigDict(frozen=True)

    type: ContentType
    level: int | None = None  # Heading depth or list nesting depth
    content: str = ""
    metadata: dict[str, str] = Field(default_factory=dict)  # Image alt/url, code language
    children: list["StructuredContent"] = Field(default_factory=list)

    def to_markdown(self) -> str:
        """Render the block back to a markdown snippet."""
        if self.type == ContentType.HEADING:
            return f"{'#' * (self.level or 1)} {self.content}"
        if self.type == ContentType.LIST:
            indent = "  " * ((self.level or 1) - 1)
            return f"{indent}- {self.content}"
        if self.type == ContentType.QUOTE:
            return f"> {self.content}"
        if self.type == ContentType.CODE:
            language = self.metadata.get("language", "")
            return f"```{language}\n{self.content}\n```"
        if self.type == ContentType.IMAGE:
            alt = self.metadata.get("alt", "")
            url = self.metadata.get("url", "")
            return f"![{alt}]({url})"
        return self.content
