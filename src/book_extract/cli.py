"""Main CLI application."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from book_extract.commands.cover import execute_cover
from book_extract.commands.extract import execute_extract
from book_extract.commands.info import execute_chapters, execute_info
from book_extract.models.extraction import ExtractionConfig, TextFormat

app = typer.Typer(
    name="book-extract",
    help="Extract structured chapters, covers, and metadata from e-books.",
    add_completion=False,
)

console = Console()

BookPath = Annotated[
    Path,
    typer.Argument(
        help="Path to the book file (EPUB, MOBI, PDF, ...)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
]


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show extraction progress logs"),
    ] = False,
) -> None:
    """Extract structured chapters, covers, and metadata from e-books."""
    if verbose:
        logging.basicConfig(
            level=logging.INFO,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


@app.command()
def info(book_path: BookPath) -> None:
    """Display book metadata and table of contents."""
    try:
        execute_info(book_path, console)
    except Exception as e:
        console.print(f"[red]Error reading file: {e}[/]")
        raise typer.Exit(1)


@app.command()
def chapters(book_path: BookPath) -> None:
    """List chapters without extracting their content."""
    try:
        execute_chapters(book_path, console)
    except Exception as e:
        console.print(f"[red]Error reading file: {e}[/]")
        raise typer.Exit(1)


@app.command()
def extract(
    book_path: BookPath,
    chapters: Annotated[
        Optional[str],
        typer.Option(
            "--chapters",
            "-c",
            help="Chapters to extract by index: '1,3,5-7' or 'all' (see 'book-extract chapters')",
        ),
    ] = None,
    output_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--output-dir",
            "-o",
            help="Output directory (default: {book_name}_chapters/)",
        ),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help="Output format: json, or markdown (json plus rendered .md files)",
        ),
    ] = "json",
    text_format: Annotated[
        TextFormat,
        typer.Option(
            "--text-format",
            help="Page text mode: plain text or markdown converted from page markup",
        ),
    ] = TextFormat.PLAIN,
    cover: Annotated[
        bool,
        typer.Option("--cover/--no-cover", help="Also extract the cover image"),
    ] = True,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress progress output"),
    ] = False,
) -> None:
    """Extract structured chapters into JSON files."""
    if output_format not in ("json", "markdown"):
        console.print(f"[red]Invalid format: {output_format}. Use json or markdown.[/]")
        raise typer.Exit(1)

    try:
        execute_extract(
            book_path=book_path,
            chapters=chapters,
            output_dir=output_dir,
            output_format=output_format,  # type: ignore
            config=ExtractionConfig(text_format=text_format),
            with_cover=cover,
            quiet=quiet,
            console=console,
        )
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


@app.command(name="cover")
def cover_command(
    book_path: BookPath,
    output_dir: Annotated[
        Optional[Path],
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory for the cover image (default: next to the book)",
        ),
    ] = None,
    quality: Annotated[
        int,
        typer.Option("--quality", help="JPEG quality for rendered covers", min=1, max=100),
    ] = 95,
    dpi: Annotated[
        Optional[int],
        typer.Option("--dpi", help="Render resolution for the cover page", min=1),
    ] = None,
) -> None:
    """Extract the cover image."""
    try:
        execute_cover(
            book_path,
            output_dir,
            ExtractionConfig(jpeg_quality=quality, cover_dpi=dpi),
            console,
        )
    except Exception as e:
        console.print(f"[red]Error: {e}[/]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
