"""Cover image resolution with an ordered strategy chain."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from book_extract.core.document import open_document
from book_extract.core.epub_archive import EpubArchive, NoCoverError, find_cover_href
from book_extract.models.cover import CoverResult, CoverStatus
from book_extract.models.extraction import ExtractionConfig

log = logging.getLogger(__name__)


class CoverExtractionError(Exception):
    """Every cover strategy failed for reasons other than a missing cover."""

    def __init__(self, book_path: Path, failures: list[str]):
        self.book_path = book_path
        self.failures = failures
        details = "; ".join(failures) or "no strategies attempted"
        super().__init__(f"Cover extraction failed for {book_path}: {details}")


# =============================================================================
# Strategy Configuration
# =============================================================================


@dataclass
class CoverStrategy:
    """Configuration for a cover strategy."""

    name: str
    fn: Callable[[Path, Path, ExtractionConfig], CoverResult]
    description: str


def cover_output_path(book_path: Path, output_dir: Path, suffix: str = ".jpg") -> Path:
    """Canonical cover filename: <book stem>_cover<suffix>."""
    return output_dir / f"{book_path.stem}_cover{suffix.lower()}"


# =============================================================================
# Strategy 1: Render First Page
# =============================================================================


def extract_cover_by_raster(
    book_path: Path, output_dir: Path, config: ExtractionConfig
) -> CoverResult:
    """Render the cover page and save it as JPEG."""
    with open_document(book_path) as document:
        pixmap = document.image(config.cover_page, dpi=config.cover_dpi)
        image_bytes = pixmap.tobytes("jpeg", jpg_quality=config.jpeg_quality)

    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = cover_output_path(book_path, output_dir)
    output_path.write_bytes(image_bytes)

    return CoverResult(status=CoverStatus.FOUND, path=output_path, strategy="raster")


# =============================================================================
# Strategy 2: Package Manifest
# =============================================================================


def extract_cover_from_archive(
    book_path: Path, output_dir: Path, config: ExtractionConfig
) -> CoverResult:
    """Copy the cover image declared by the container's package manifest."""
    with EpubArchive(book_path) as archive:
        package = archive.package()
        try:
            cover_href = find_cover_href(package)
        except NoCoverError as e:
            log.info(f"  {e}")
            return CoverResult(status=CoverStatus.NO_COVER, strategy="archive")

        entry_path = package.resolve(cover_href)
        image_bytes = archive.read_entry(entry_path)

    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = cover_output_path(book_path, output_dir, Path(entry_path).suffix)
    output_path.write_bytes(image_bytes)

    return CoverResult(status=CoverStatus.FOUND, path=output_path, strategy="archive")


# =============================================================================
# Strategy Chain
# =============================================================================

# Strategies in priority order
COVER_STRATEGIES: list[CoverStrategy] = [
    CoverStrategy(
        name="raster",
        fn=extract_cover_by_raster,
        description="Render the first page",
    ),
    CoverStrategy(
        name="archive",
        fn=extract_cover_from_archive,
        description="Package manifest lookup",
    ),
]


def run_strategy(
    strategy: CoverStrategy,
    book_path: Path,
    output_dir: Path,
    config: ExtractionConfig,
) -> CoverResult:
    """Run one strategy, turning any raised error into a failed result."""
    try:
        return strategy.fn(book_path, output_dir, config)
    except Exception as e:
        return CoverResult(
            status=CoverStatus.FAILED,
            strategy=strategy.name,
            error=f"{type(e).__name__}: {e}",
        )


def extract_cover(
    book_path: Path | str,
    output_dir: Path | str,
    config: ExtractionConfig | None = None,
    strategies: list[CoverStrategy] | None = None,
) -> CoverResult:
    """Resolve a document's cover image.

    Returns a FOUND result with the written path, or NO_COVER when the book
    declares no cover. Raises CoverExtractionError when every strategy failed.
    """
    book_path = Path(book_path)
    output_dir = Path(output_dir)
    config = config or ExtractionConfig()

    failures: list[str] = []
    no_cover: CoverResult | None = None

    for strategy in strategies or COVER_STRATEGIES:
        log.info(f"Trying cover strategy: {strategy.name} ({strategy.description})")
        result = run_strategy(strategy, book_path, output_dir, config)

        if result.status == CoverStatus.FOUND:
            log.info(f"  Strategy {strategy.name}: cover saved to {result.path}")
            return result

        if result.status == CoverStatus.NO_COVER:
            log.info(f"  Strategy {strategy.name}: book declares no cover")
            no_cover = no_cover or result
            continue

        log.warning(f"  Strategy {strategy.name} failed: {result.error}")
        failures.append(f"{strategy.name}: {result.error}")

    if no_cover is not None:
        return no_cover

    raise CoverExtractionError(book_path, failures)
