"""Lightweight chapter list extraction (titles and locations only)."""

from pathlib import Path

from book_extract.core.document import open_document
from book_extract.models.book import ChapterStructure


def extract_chapter_list(path: Path | str) -> list[ChapterStructure]:
    """List the document's chapters without reading any page text."""
    with open_document(path) as document:
        toc = document.table_of_contents()

    return [
        ChapterStructure(title=entry.title, level=entry.level, href=entry.href)
        for entry in toc
    ]
