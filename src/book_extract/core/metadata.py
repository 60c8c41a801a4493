"""Book metadata normalization."""

from collections.abc import Mapping
from pathlib import Path

from book_extract.core.document import open_document


def normalize_metadata(raw: Mapping[str, str | None]) -> dict[str, str]:
    """Strip trailing NUL padding from every value.

    Entries left empty after stripping (including missing values) are
    dropped.
    """
    metadata = {}
    for key, value in raw.items():
        clean_value = (value or "").rstrip("\x00")
        if clean_value:
            metadata[key] = clean_value
    return metadata


def get_book_metadata(path: Path | str) -> dict[str, str]:
    """Read and normalize a document's metadata map."""
    with open_document(path) as document:
        return normalize_metadata(document.metadata())


def split_authors(author: str | None) -> list[str]:
    """Split an author field on common separators."""
    if not author:
        return []
    for separator in (";", ","):
        if separator in author:
            return [a.strip() for a in author.split(separator) if a.strip()]
    return [author.strip()]
