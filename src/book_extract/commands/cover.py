"""Cover command implementation."""

from pathlib import Path

from rich.console import Console

from book_extract.core.cover import extract_cover
from book_extract.core.formats import DocumentFormats
from book_extract.models.cover import CoverResult
from book_extract.models.extraction import ExtractionConfig


def execute_cover(
    book_path: Path,
    output_dir: Path | None,
    config: ExtractionConfig,
    console: Console,
) -> CoverResult:
    """Execute the cover command.

    A book without a cover is reported but is not an error.
    """
    DocumentFormats.validate(book_path)
    result = extract_cover(book_path, output_dir or book_path.parent, config)

    if result.found:
        console.print(f"[green]Cover saved:[/] {result.path} [dim]({result.strategy})[/]")
    else:
        console.print("[yellow]This book declares no cover image.[/]")
    return result
