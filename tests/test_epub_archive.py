"""Tests for container and package manifest parsing."""

import zipfile

import pytest

from book_extract.core.epub_archive import (
    ArchiveError,
    EpubArchive,
    ManifestItem,
    NoCoverError,
    PackageDocument,
    find_cover_href,
    parse_package,
)


def _package(meta=None, items=()):
    return PackageDocument(path="OEBPS/content.opf", meta=meta or {}, manifest=list(items))


class TestFindCoverHref:
    def test_meta_cover_names_manifest_item(self):
        package = _package(
            meta={"cover": "img1"},
            items=[
                ManifestItem(id="cover-page", href="images/other-cover.png", media_type="image/png"),
                ManifestItem(id="img1", href="images/front.jpg", media_type="image/jpeg"),
            ],
        )
        assert find_cover_href(package) == "images/front.jpg"

    def test_meta_cover_with_unknown_id_falls_through(self):
        package = _package(
            meta={"cover": "missing"},
            items=[ManifestItem(id="pic", href="art.png", media_type="image/png", properties="cover-image")],
        )
        assert find_cover_href(package) == "art.png"

    def test_cover_image_property(self):
        package = _package(
            items=[
                ManifestItem(id="a", href="a.png", media_type="image/png"),
                ManifestItem(id="b", href="b.png", media_type="image/png", properties="svg cover-image"),
            ],
        )
        assert find_cover_href(package) == "b.png"

    def test_image_named_cover(self):
        package = _package(
            items=[
                ManifestItem(id="cover-html", href="Cover.xhtml", media_type="application/xhtml+xml"),
                ManifestItem(id="pic", href="images/COVER.JPG", media_type="image/jpeg"),
            ],
        )
        assert find_cover_href(package) == "images/COVER.JPG"

    def test_image_with_cover_id(self):
        package = _package(
            items=[ManifestItem(id="BookCover", href="img/001.png", media_type="image/png")],
        )
        assert find_cover_href(package) == "img/001.png"

    def test_no_cover(self):
        package = _package(
            items=[
                ManifestItem(id="ch1", href="ch1.xhtml", media_type="application/xhtml+xml"),
                ManifestItem(id="fig", href="fig1.png", media_type="image/png"),
            ],
        )
        with pytest.raises(NoCoverError):
            find_cover_href(package)


class TestParsePackage:
    def test_reads_meta_manifest_and_spine(self):
        opf = """<?xml version="1.0"?>
<package xmlns="http://www.idpf.org/2007/opf" version="2.0">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:title>Book</dc:title>
    <meta name="cover" content="img1"/>
  </metadata>
  <manifest>
    <item id="img1" href="images/cover.jpg" media-type="image/jpeg"/>
    <item id="ch1" href="text/ch1.xhtml" media-type="application/xhtml+xml" properties="scripted"/>
  </manifest>
  <spine><itemref idref="ch1"/></spine>
</package>"""
        package = parse_package(opf.encode(), "OEBPS/content.opf")

        assert package.meta == {"cover": "img1"}
        assert package.manifest[0] == ManifestItem(
            id="img1", href="images/cover.jpg", media_type="image/jpeg"
        )
        assert package.manifest[1].properties == "scripted"
        assert package.spine == ["ch1"]

    def test_prefixed_namespace_elements(self):
        opf = """<?xml version="1.0"?>
<opf:package xmlns:opf="http://www.idpf.org/2007/opf" version="2.0">
  <opf:metadata><opf:meta name="cover" content="c"/></opf:metadata>
  <opf:manifest><opf:item id="c" href="c.png" media-type="image/png"/></opf:manifest>
</opf:package>"""
        package = parse_package(opf.encode(), "content.opf")
        assert package.meta["cover"] == "c"
        assert package.manifest[0].href == "c.png"

    def test_not_a_package(self):
        with pytest.raises(ArchiveError):
            parse_package(b"<html><body/></html>", "content.opf")

    def test_resolve_relative_to_package_directory(self):
        package = PackageDocument(path="OEBPS/content.opf")
        assert package.resolve("images/cover.jpg") == "OEBPS/images/cover.jpg"
        assert package.resolve("../shared/cover%20art.png") == "shared/cover art.png"
        assert PackageDocument(path="content.opf").resolve("cover.png") == "cover.png"


class TestEpubArchive:
    def test_reads_package_via_container(self, make_epub):
        path = make_epub(
            meta='<meta name="cover" content="img1"/>',
            items='<item id="img1" href="images/cover.jpg" media-type="image/jpeg"/>',
        )
        with EpubArchive(path) as archive:
            assert archive.rootfile_path() == "OEBPS/content.opf"
            package = archive.package()
            assert "META-INF/container.xml" in archive.list_entries()

        assert package.meta["cover"] == "img1"
        assert package.spine == ["ch1"]

    def test_not_a_zip(self, tmp_path):
        path = tmp_path / "book.pdf"
        path.write_bytes(b"%PDF-1.7\n")
        with pytest.raises(ArchiveError):
            EpubArchive(path)

    def test_missing_container(self, tmp_path):
        path = tmp_path / "comic.cbz"
        with zipfile.ZipFile(path, "w") as zf:
            zf.writestr("001.png", b"png")
        with EpubArchive(path) as archive:
            with pytest.raises(ArchiveError):
                archive.package()

    def test_container_without_rootfile(self, make_epub):
        path = make_epub(container="<container><rootfiles/></container>")
        with EpubArchive(path) as archive:
            with pytest.raises(ArchiveError):
                archive.rootfile_path()

    def test_missing_entry(self, make_epub):
        with EpubArchive(make_epub()) as archive:
            with pytest.raises(ArchiveError):
                archive.read_entry("OEBPS/images/missing.jpg")
