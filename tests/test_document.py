"""Tests for the PyMuPDF adapter, with pymupdf mocked out."""

from unittest.mock import MagicMock, patch

import pytest

from book_extract.core.document import (
    DocumentError,
    DocumentOpenError,
    PageExtractionError,
    open_document,
)
from book_extract.models.extraction import TextFormat


def _mock_doc():
    mock_doc = MagicMock()
    mock_doc.page_count = 3
    return mock_doc


class TestOpenDocument:
    def test_open_failure_wrapped(self):
        with patch("book_extract.core.document.pymupdf") as mock_pymupdf:
            mock_pymupdf.open.side_effect = RuntimeError("cannot open broken document")
            with pytest.raises(DocumentOpenError):
                open_document("/fake/book.epub")

    def test_closed_exactly_once_on_error(self):
        mock_doc = _mock_doc()
        with patch("book_extract.core.document.pymupdf") as mock_pymupdf:
            mock_pymupdf.open.return_value = mock_doc
            with pytest.raises(ValueError):
                with open_document("/fake/book.epub") as document:
                    document.close()
                    raise ValueError("boom")

        mock_doc.close.assert_called_once()


class TestTableOfContents:
    def test_levels_zero_based_and_locations(self):
        mock_doc = _mock_doc()
        mock_doc.get_toc.return_value = [
            [1, " Chapter 1 ", 1, {"kind": 1, "page": 0}],
            [2, "Section 1.1", 2, {"kind": 2, "uri": "ch1.xhtml#s1"}],
            [1, "Chapter 2", 3],
        ]

        with patch("book_extract.core.document.pymupdf") as mock_pymupdf:
            mock_pymupdf.open.return_value = mock_doc
            with open_document("/fake/book.epub") as document:
                entries = document.table_of_contents()

        mock_doc.get_toc.assert_called_once_with(simple=False)
        assert [(e.title, e.level, e.page) for e in entries] == [
            ("Chapter 1", 0, 1),
            ("Section 1.1", 1, 2),
            ("Chapter 2", 0, 3),
        ]
        assert [e.href for e in entries] == ["#page=1", "ch1.xhtml#s1", "#page=3"]

    def test_entries_without_page_are_skipped(self):
        mock_doc = _mock_doc()
        mock_doc.get_toc.return_value = [[1, "Dangling", -1, {}], [1, "Good", 2, {}]]

        with patch("book_extract.core.document.pymupdf") as mock_pymupdf:
            mock_pymupdf.open.return_value = mock_doc
            with open_document("/fake/book.pdf") as document:
                entries = document.table_of_contents()

        assert [e.title for e in entries] == ["Good"]

    def test_toc_failure(self):
        mock_doc = _mock_doc()
        mock_doc.get_toc.side_effect = RuntimeError("corrupt outline")

        with patch("book_extract.core.document.pymupdf") as mock_pymupdf:
            mock_pymupdf.open.return_value = mock_doc
            with open_document("/fake/book.pdf") as document:
                with pytest.raises(DocumentError):
                    document.table_of_contents()


class TestPages:
    def test_plain_text(self):
        mock_doc = _mock_doc()
        mock_doc.load_page.return_value.get_text.return_value = "page text"

        with patch("book_extract.core.document.pymupdf") as mock_pymupdf:
            mock_pymupdf.open.return_value = mock_doc
            with open_document("/fake/book.pdf") as document:
                assert document.page_count == 3
                assert document.text(1) == "page text"

        mock_doc.load_page.assert_called_with(1)
        mock_doc.load_page.return_value.get_text.assert_called_with("text")

    def test_markdown_text_from_xhtml(self):
        mock_doc = _mock_doc()
        mock_doc.load_page.return_value.get_text.return_value = (
            "<div><h1>Title</h1><ul><li>one</li></ul><p>Body</p></div>"
        )

        with patch("book_extract.core.document.pymupdf") as mock_pymupdf:
            mock_pymupdf.open.return_value = mock_doc
            with open_document("/fake/book.epub") as document:
                text = document.text(0, TextFormat.MARKDOWN)

        mock_doc.load_page.return_value.get_text.assert_called_with("xhtml")
        assert "# Title" in text
        assert "- one" in text
        assert "Body" in text

    def test_page_failure_wrapped(self):
        mock_doc = _mock_doc()
        mock_doc.load_page.side_effect = IndexError("page not in document")

        with patch("book_extract.core.document.pymupdf") as mock_pymupdf:
            mock_pymupdf.open.return_value = mock_doc
            with open_document("/fake/book.pdf") as document:
                with pytest.raises(PageExtractionError) as exc_info:
                    document.text(7)

        assert exc_info.value.page_index == 7

    def test_image_passes_dpi(self):
        mock_doc = _mock_doc()
        page = mock_doc.load_page.return_value

        with patch("book_extract.core.document.pymupdf") as mock_pymupdf:
            mock_pymupdf.open.return_value = mock_doc
            with open_document("/fake/book.epub") as document:
                document.image(0)
                document.image(0, dpi=150)

        assert page.get_pixmap.call_args_list[0].kwargs == {}
        assert page.get_pixmap.call_args_list[1].kwargs == {"dpi": 150}

    def test_metadata_copy(self):
        mock_doc = _mock_doc()
        mock_doc.metadata = {"title": "Book\x00", "author": None}

        with patch("book_extract.core.document.pymupdf") as mock_pymupdf:
            mock_pymupdf.open.return_value = mock_doc
            with open_document("/fake/book.epub") as document:
                assert document.metadata() == {"title": "Book\x00", "author": None}
