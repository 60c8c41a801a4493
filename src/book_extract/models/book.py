"""Data models for book structure."""

from pydantic import BaseModel, ConfigDict, Field

from book_extract.models.content import ContentNode, StructuredContent


class TOCEntry(BaseModel):
    """Single entry in table of contents."""

    model_config = ConfigDict(frozen=True)

    title: str
    level: int = Field(default=0, ge=0)  # 0-based nesting depth
    page: int = Field(ge=1)  # 1-based start page
    href: str = ""


class ChapterRange(BaseModel):
    """Half-open, 0-based page range [start_page, end_page)."""

    model_config = ConfigDict(frozen=True)

    start_page: int
    end_page: int

    @property
    def page_count(self) -> int:
        return max(0, self.end_page - self.start_page)

    def pages(self) -> range:
        return range(self.start_page, self.end_page)


class Chapter(BaseModel):
    """Chapter content and structure."""

    model_config = ConfigDict(frozen=True)

    title: str
    raw_content: list[ContentNode] = Field(default_factory=list)
    structured_content: list[StructuredContent] = Field(default_factory=list)
    level: int = 1
    page_start: int | None = None
    page_end: int | None = None

    @property
    def word_count(self) -> int:
        return sum(len(node.text.split()) for node in self.raw_content)

    def to_markdown(self) -> str:
        """Render the chapter as a markdown document."""
        parts = [f"== {self.title} =="]
        parts.extend(block.to_markdown() for block in self.structured_content)
        return "\n".join(parts) + "\n"


class ChapterStructure(BaseModel):
    """Chapter list entry without content."""

    model_config = ConfigDict(frozen=True)

    title: str
    level: int = 0
    href: str = ""
