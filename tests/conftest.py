"""Shared fixtures: an in-memory document and an EPUB container builder."""

import zipfile
from pathlib import Path

import pytest

from book_extract.core.document import PageExtractionError

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{opf_path}" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

OPF_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="uid">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:title>Test Book</dc:title>
    {meta}
  </metadata>
  <manifest>
    {items}
  </manifest>
  <spine>
    <itemref idref="ch1"/>
  </spine>
</package>
"""


class FakeDocument:
    """Stand-in for BookDocument backed by plain Python values.

    Pages given as exceptions raise PageExtractionError when read.
    """

    def __init__(self, pages=None, toc=None, metadata=None, image=None):
        self.pages = list(pages or [])
        self.toc = toc if isinstance(toc, Exception) else list(toc or [])
        self._metadata = dict(metadata or {})
        self._image = image
        self.text_calls: list[int] = []
        self.close_count = 0

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def text(self, page_index, text_format=None):
        self.text_calls.append(page_index)
        page = self.pages[page_index]
        if isinstance(page, Exception):
            raise PageExtractionError(page_index, str(page))
        return page

    def table_of_contents(self):
        if isinstance(self.toc, Exception):
            raise self.toc
        return list(self.toc)

    def image(self, page_index, dpi=None):
        if self._image is None:
            raise PageExtractionError(page_index, "render failed")
        return self._image

    def metadata(self):
        return dict(self._metadata)

    def close(self):
        self.close_count += 1


@pytest.fixture
def fake_document():
    return FakeDocument


@pytest.fixture
def make_epub(tmp_path: Path):
    """Build a minimal EPUB zip on disk.

    Args passed to the returned factory:
        meta: raw <meta> element markup for the OPF metadata block
        items: raw <item> element markup for the manifest
        files: extra archive entries {path: bytes}
        opf_path: location of the package document
    """

    def _make(
        meta: str = "",
        items: str = "",
        files: dict[str, bytes] | None = None,
        opf_path: str = "OEBPS/content.opf",
        name: str = "book.epub",
        container: str | None = None,
    ) -> Path:
        path = tmp_path / name
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr("mimetype", "application/epub+zip")
            zf.writestr(
                "META-INF/container.xml",
                container if container is not None else CONTAINER_XML.format(opf_path=opf_path),
            )
            zf.writestr(opf_path, OPF_TEMPLATE.format(meta=meta, items=items))
            for entry, data in (files or {}).items():
                zf.writestr(entry, data)
        return path

    return _make
