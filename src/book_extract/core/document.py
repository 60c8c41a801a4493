"""Renderable document access via PyMuPDF."""

import logging
from pathlib import Path

import pymupdf

from book_extract.core.markup import html_to_markdown
from book_extract.models.book import TOCEntry
from book_extract.models.extraction import TextFormat

log = logging.getLogger(__name__)


class DocumentError(Exception):
    """Base error for document access."""


class DocumentOpenError(DocumentError):
    """Document could not be opened."""


class PageExtractionError(DocumentError):
    """A single page could not be read or rendered."""

    def __init__(self, page_index: int, message: str):
        self.page_index = page_index
        super().__init__(f"page {page_index}: {message}")


class PageRangeError(DocumentError):
    """Requested page range lies outside the document."""


class BookDocument:
    """Open handle on a page-oriented document (EPUB, MOBI, PDF, ...).

    The handle owns the underlying PyMuPDF document and must be closed
    exactly once; use it as a context manager.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        try:
            self._doc = pymupdf.open(str(self.path))
        except Exception as e:
            raise DocumentOpenError(f"Unable to open book file {self.path}: {e}") from e
        self._closed = False

    def __enter__(self) -> "BookDocument":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    def text(self, page_index: int, text_format: TextFormat = TextFormat.PLAIN) -> str:
        """Extract the text of one page."""
        try:
            page = self._doc.load_page(page_index)
            if text_format == TextFormat.MARKDOWN:
                return html_to_markdown(page.get_text("xhtml"))
            return page.get_text("text")
        except Exception as e:
            raise PageExtractionError(page_index, str(e)) from e

    def table_of_contents(self) -> list[TOCEntry]:
        """Return ToC entries in document order.

        Levels are converted to 0-based depth; entries whose destination
        does not resolve to a page are dropped.
        """
        try:
            raw_toc = self._doc.get_toc(simple=False)
        except Exception as e:
            raise DocumentError(f"Failed to read table of contents: {e}") from e

        entries = []
        for item in raw_toc:
            level, title, page, *rest = item
            if page < 1:
                log.warning(f"Skipping ToC entry without a page: {title!r}")
                continue
            dest = rest[0] if rest and isinstance(rest[0], dict) else {}
            entries.append(
                TOCEntry(
                    title=(title or "").strip(),
                    level=max(level - 1, 0),
                    page=page,
                    href=_location_of(dest, page),
                )
            )
        return entries

    def image(self, page_index: int, dpi: int | None = None) -> pymupdf.Pixmap:
        """Render one page to a raster image."""
        try:
            page = self._doc.load_page(page_index)
            if dpi:
                return page.get_pixmap(dpi=dpi)
            return page.get_pixmap()
        except Exception as e:
            raise PageExtractionError(page_index, f"render failed: {e}") from e

    def metadata(self) -> dict[str, str | None]:
        return dict(self._doc.metadata or {})

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._doc.close()


def open_document(path: Path | str) -> BookDocument:
    """Open a document; use the result as a context manager."""
    log.debug(f"Opening document: {path}")
    return BookDocument(Path(path))


def _location_of(dest: dict, page: int) -> str:
    """Derive a location reference from a ToC destination."""
    for key in ("uri", "nameddest", "name"):
        value = dest.get(key)
        if value:
            return str(value)
    return f"#page={page}"
