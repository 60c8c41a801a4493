"""Write extracted chapters to output directory."""

from datetime import datetime
from pathlib import Path
from typing import Literal

from book_extract.core.metadata import split_authors
from book_extract.models.book import Chapter
from book_extract.models.output import BookOutput, ChapterMetadata, ChapterOutput


class OutputWriter:
    """Write extracted chapters to output directory."""

    def __init__(
        self,
        output_dir: Path,
        source_path: Path,
        output_format: Literal["json", "markdown"] = "json",
    ):
        """Initialize output writer.

        Args:
            output_dir: Directory to write output files
            source_path: Path to source book file
            output_format: "json" writes chapter JSON only, "markdown" also
                writes a rendered .md file per chapter
        """
        self.output_dir = output_dir
        self.source_path = source_path
        self.output_format = output_format
        self.output_dir.mkdir(parents=True, exist_ok=True)

    def write_chapter(self, chapter: Chapter, index: int) -> tuple[Path, ChapterMetadata]:
        """Write single chapter to JSON file."""
        stats = get_stats(chapter)

        metadata = ChapterMetadata(
            chapter_index=index,
            title=chapter.title,
            level=chapter.level,
            source_path=str(self.source_path),
            extracted_at=datetime.now(),
            word_count=stats["word_count"],
            character_count=stats["character_count"],
            block_count=stats["block_count"],
            page_start=chapter.page_start,
            page_end=chapter.page_end,
        )

        output = ChapterOutput(
            metadata=metadata,
            content=chapter.raw_content,
            structured=chapter.structured_content,
        )

        stem = f"chapter_{index + 1:03d}"
        filepath = self.output_dir / f"{stem}.json"
        filepath.write_text(output.model_dump_json(indent=2), encoding="utf-8")

        if self.output_format == "markdown":
            markdown_path = self.output_dir / f"{stem}.md"
            markdown_path.write_text(chapter.to_markdown(), encoding="utf-8")

        return filepath, metadata

    def write_manifest(
        self,
        book_metadata: dict[str, str],
        chapter_metadata: list[ChapterMetadata],
        cover_path: Path | None = None,
    ) -> Path:
        """Write book manifest file."""
        manifest = BookOutput(
            book_title=book_metadata.get("title") or self.source_path.stem,
            authors=split_authors(book_metadata.get("author")),
            total_chapters=len(chapter_metadata),
            output_directory=str(self.output_dir),
            created_at=datetime.now(),
            chapters=chapter_metadata,
            metadata=book_metadata,
            cover_path=str(cover_path) if cover_path else None,
            format=self.output_format,
        )

        filepath = self.output_dir / "manifest.json"
        filepath.write_text(manifest.model_dump_json(indent=2), encoding="utf-8")
        return filepath


def get_stats(chapter: Chapter) -> dict[str, int]:
    """Calculate chapter content statistics."""
    return {
        "word_count": chapter.word_count,
        "character_count": sum(len(node.text) for node in chapter.raw_content),
        "block_count": len(chapter.structured_content),
    }
