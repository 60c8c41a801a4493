"""Read the package manifest of zip-based e-book containers."""

import posixpath
import zipfile
from dataclasses import dataclass, field
from pathlib import Path
from urllib.parse import unquote

from bs4 import BeautifulSoup

CONTAINER_PATH = "META-INF/container.xml"


class ArchiveError(Exception):
    """Container could not be read or is missing a required part."""


class NoCoverError(Exception):
    """Package declares no recognizable cover image."""


@dataclass
class ManifestItem:
    """One <item> of the package manifest."""

    id: str
    href: str
    media_type: str = ""
    properties: str = ""


@dataclass
class PackageDocument:
    """Parsed package (OPF) document."""

    path: str
    meta: dict[str, str] = field(default_factory=dict)  # <meta name=... content=...>
    manifest: list[ManifestItem] = field(default_factory=list)
    spine: list[str] = field(default_factory=list)

    @property
    def directory(self) -> str:
        return posixpath.dirname(self.path)

    def resolve(self, href: str) -> str:
        """Resolve an href relative to the package document's directory."""
        joined = posixpath.join(self.directory, unquote(href))
        return posixpath.normpath(joined)


class EpubArchive:
    """Random-access view of an EPUB-style zip container."""

    def __init__(self, path: Path):
        self.path = Path(path)
        if not zipfile.is_zipfile(self.path):
            raise ArchiveError(f"Not a zip container: {self.path}")
        try:
            self._zip = zipfile.ZipFile(self.path)
        except (OSError, zipfile.BadZipFile) as e:
            raise ArchiveError(f"Failed to open archive {self.path}: {e}") from e

    def __enter__(self) -> "EpubArchive":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._zip.close()

    def list_entries(self) -> list[str]:
        return self._zip.namelist()

    def read_entry(self, name: str) -> bytes:
        """Read an entry by exact path."""
        try:
            return self._zip.read(name)
        except KeyError:
            raise ArchiveError(f"File not found in archive: {name}") from None

    def rootfile_path(self) -> str:
        """First root file declared in META-INF/container.xml."""
        container = BeautifulSoup(self.read_entry(CONTAINER_PATH), "xml")
        for rootfile in container.find_all("rootfile"):
            full_path = rootfile.get("full-path")
            if full_path:
                return full_path
        raise ArchiveError(f"No root file found in {CONTAINER_PATH}")

    def package(self) -> PackageDocument:
        """Parse the package document named by the container."""
        opf_path = self.rootfile_path()
        return parse_package(self.read_entry(opf_path), opf_path)


def parse_package(content: bytes | str, path: str) -> PackageDocument:
    """Parse OPF metadata, manifest, and spine."""
    soup = BeautifulSoup(content, "xml")
    if soup.find("package") is None:
        raise ArchiveError(f"Malformed package document: {path}")

    package = PackageDocument(path=path)

    metadata = soup.find("metadata")
    if metadata is not None:
        for meta in metadata.find_all("meta"):
            name = meta.get("name")
            if name and name not in package.meta:
                package.meta[name] = meta.get("content", "")

    manifest = soup.find("manifest")
    if manifest is not None:
        for item in manifest.find_all("item"):
            package.manifest.append(
                ManifestItem(
                    id=item.get("id", ""),
                    href=item.get("href", ""),
                    media_type=item.get("media-type", ""),
                    properties=item.get("properties", ""),
                )
            )

    spine = soup.find("spine")
    if spine is not None:
        package.spine = [ref.get("idref", "") for ref in spine.find_all("itemref")]

    return package


def find_cover_href(package: PackageDocument) -> str:
    """Locate the cover image href, trying each heuristic in order.

    1. <meta name="cover"> naming a manifest item id
    2. a manifest item with the "cover-image" property
    3. an image item whose href or id mentions "cover"

    Raises NoCoverError when none applies.
    """
    cover_id = package.meta.get("cover")
    if cover_id:
        for item in package.manifest:
            if item.id == cover_id:
                return item.href

    for item in package.manifest:
        if "cover-image" in item.properties.split():
            return item.href

    for item in package.manifest:
        if item.media_type.startswith("image/") and (
            "cover" in item.href.lower() or "cover" in item.id.lower()
        ):
            return item.href

    raise NoCoverError(f"No cover image declared in {package.path}")
