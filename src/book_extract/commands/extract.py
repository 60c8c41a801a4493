"""Extract command implementation."""

import re
from pathlib import Path
from typing import Literal

from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from book_extract.core.cover import CoverExtractionError, extract_cover
from book_extract.core.formats import DocumentFormats
from book_extract.core.metadata import get_book_metadata
from book_extract.core.output_writer import OutputWriter
from book_extract.core.segmenter import extract_chapters
from book_extract.models.book import Chapter
from book_extract.models.extraction import ExtractionConfig


CHAPTER_TOKEN = re.compile(r"^(\d+)(?:\s*-\s*(\d+))?$")


def parse_chapter_selection(selection: str, total_chapters: int) -> list[int]:
    """Turn a 1-based selection like "1,3,5-7" or "all" into sorted 0-based indices.

    Raises:
        ValueError: If a token is malformed, reversed, or names a chapter the
            book does not have
    """
    selection = selection.strip().lower()
    if selection == "all":
        return list(range(total_chapters))

    indices: set[int] = set()
    for token in filter(None, (part.strip() for part in selection.split(","))):
        match = CHAPTER_TOKEN.match(token)
        if not match:
            raise ValueError(f"Invalid chapter selection {token!r}: use N or N-M")

        first = int(match.group(1))
        last = int(match.group(2) or first)
        if first > last:
            raise ValueError(f"Invalid chapter range {token!r}: start is after end")
        if first < 1 or last > total_chapters:
            raise ValueError(
                f"Chapter selection {token!r} is outside 1-{total_chapters}"
            )
        indices.update(range(first - 1, last))

    return sorted(indices)


def get_default_output_dir(book_path: Path) -> Path:
    """<book stem>_chapters next to the book, with the stem reduced to word characters."""
    stem = re.sub(r"\W+", "_", book_path.stem).strip("_") or "book"
    return book_path.parent / f"{stem}_chapters"


def execute_extract(
    book_path: Path,
    chapters: str | None,
    output_dir: Path | None,
    output_format: Literal["json", "markdown"],
    config: ExtractionConfig,
    with_cover: bool,
    quiet: bool,
    console: Console,
) -> Path | None:
    """Execute the extract command. Returns the manifest path."""
    DocumentFormats.validate(book_path)
    format_name = DocumentFormats.detect_format(book_path).upper()

    if not quiet:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            progress.add_task(f"Extracting {format_name}...", total=None)
            parsed = extract_chapters(book_path, config)
    else:
        parsed = extract_chapters(book_path, config)

    if not parsed:
        console.print("[yellow]No table of contents found; nothing to extract.[/]")
        return None

    selected_indices = parse_chapter_selection(chapters or "all", len(parsed))
    if not selected_indices:
        console.print("[yellow]No chapters selected. Exiting.[/]")
        return None

    book_metadata = get_book_metadata(book_path)
    final_output_dir = output_dir or get_default_output_dir(book_path)
    writer = OutputWriter(final_output_dir, book_path, output_format)

    chapter_metadata = []
    for idx in selected_indices:
        chapter: Chapter = parsed[idx]
        _, metadata = writer.write_chapter(chapter, idx)
        chapter_metadata.append(metadata)

    cover_path = None
    cover_note = "[dim]Cover:[/] skipped"
    if with_cover:
        try:
            cover = extract_cover(book_path, final_output_dir, config)
        except CoverExtractionError as e:
            console.print(f"[yellow]Warning: {e}[/]")
            cover_note = "[dim]Cover:[/] failed"
        else:
            if cover.found:
                cover_path = cover.path
                cover_note = f"[dim]Cover:[/] {cover.path.name} ({cover.strategy})"
            else:
                cover_note = "[dim]Cover:[/] none declared"

    manifest_path = writer.write_manifest(book_metadata, chapter_metadata, cover_path)

    if not quiet:
        console.print()
        summary_lines = [
            f"[green]Successfully extracted {len(selected_indices)} chapter(s)[/]",
            "",
            f"[dim]Output directory:[/] {final_output_dir}",
            f"[dim]Manifest:[/] {manifest_path.name}",
            cover_note,
        ]
        console.print(
            Panel(
                "\n".join(summary_lines),
                title="Complete",
                border_style="green",
            )
        )

    return manifest_path
