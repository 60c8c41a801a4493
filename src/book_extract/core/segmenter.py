"""Segment documents into chapters using the table of contents."""

import logging
from collections.abc import Sequence
from pathlib import Path

from book_extract.core.content_processor import ContentProcessor, parse_raw_content
from book_extract.core.document import (
    BookDocument,
    PageExtractionError,
    PageRangeError,
    open_document,
)
from book_extract.models.book import Chapter, ChapterRange, TOCEntry
from book_extract.models.extraction import ExtractionConfig, TextFormat

log = logging.getLogger(__name__)


def compute_chapter_ranges(
    toc: Sequence[TOCEntry], page_count: int
) -> list[ChapterRange]:
    """Map each ToC entry to the pages it covers.

    Entry i starts at its own (0-based) page and ends where entry i+1
    starts; the last entry runs to the end of the document. Ranges are
    clamped to the document, so an entry sharing its page with the next
    one yields an empty range.
    """
    ranges = []
    for i, entry in enumerate(toc):
        start = _clamp(entry.page - 1, page_count)
        if i + 1 < len(toc):
            end = _clamp(toc[i + 1].page - 1, page_count)
        else:
            end = page_count
        ranges.append(ChapterRange(start_page=start, end_page=max(start, end)))
    return ranges


def collect_range_text(
    document: BookDocument,
    chapter_range: ChapterRange,
    separator: str = "\n",
    text_format: TextFormat = TextFormat.PLAIN,
) -> str:
    """Concatenate page texts over a range, skipping unreadable pages."""
    text_parts = []
    for page_index in chapter_range.pages():
        try:
            text_parts.append(document.text(page_index, text_format))
        except PageExtractionError as e:
            log.debug(f"Skipping unreadable page: {e}")
            continue
    return separator.join(text_parts)


def extract_chapters(
    path: Path | str, config: ExtractionConfig | None = None
) -> list[Chapter]:
    """Extract every ToC chapter of a document with structured content.

    Returns an empty list when the document has no table of contents.
    Any failure other than a single unreadable page aborts the whole call.
    """
    config = config or ExtractionConfig()

    with open_document(path) as document:
        toc = document.table_of_contents()
        if not toc:
            log.info(f"No table of contents in {path}")
            return []

        ranges = compute_chapter_ranges(toc, document.page_count)
        log.info(f"Segmenting {path} into {len(ranges)} chapters")

        processor = ContentProcessor()
        chapters = []
        for entry, chapter_range in zip(toc, ranges):
            text = collect_range_text(
                document,
                chapter_range,
                separator=config.page_separator,
                text_format=config.text_format,
            )
            chapters.append(
                Chapter(
                    title=entry.title,
                    raw_content=parse_raw_content(text),
                    structured_content=processor.process(text),
                    level=entry.level + 1,
                    page_start=chapter_range.start_page,
                    page_end=chapter_range.end_page,
                )
            )

    return chapters


def extract_page_range(
    path: Path | str,
    start: int,
    end: int,
    config: ExtractionConfig | None = None,
) -> str:
    """Extract text from an inclusive, 0-based page range."""
    config = config or ExtractionConfig()

    with open_document(path) as document:
        if start < 0 or end >= document.page_count or start > end:
            raise PageRangeError(
                f"Invalid page range {start}-{end} "
                f"for document with {document.page_count} pages"
            )
        return collect_range_text(
            document,
            ChapterRange(start_page=start, end_page=end + 1),
            separator=config.page_separator,
            text_format=config.text_format,
        )


def _clamp(page_index: int, page_count: int) -> int:
    return min(max(page_index, 0), page_count)
