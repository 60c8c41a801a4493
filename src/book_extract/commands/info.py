"""Info and chapter list command implementations."""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from book_extract.core.chapter_list import extract_chapter_list
from book_extract.core.formats import DocumentFormats
from book_extract.core.metadata import get_book_metadata, split_authors
from book_extract.models.book import ChapterStructure


def display_chapter_list(chapters: list[ChapterStructure], console: Console) -> None:
    """Display the chapter list as a table."""
    table = Table(title="Table of Contents", show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", style="white")
    table.add_column("Location", style="dim")

    for i, chapter in enumerate(chapters):
        indent = "  " * chapter.level
        table.add_row(str(i + 1), f"{indent}{chapter.title}", chapter.href)

    console.print(table)


def execute_chapters(book_path: Path, console: Console) -> list[ChapterStructure]:
    """Execute the chapters command."""
    DocumentFormats.validate(book_path)
    chapters = extract_chapter_list(book_path)

    if not chapters:
        console.print("[yellow]No table of contents found.[/]")
    else:
        display_chapter_list(chapters, console)
    return chapters


def execute_info(book_path: Path, console: Console) -> dict[str, str]:
    """Execute the info command: metadata panel plus chapter list."""
    DocumentFormats.validate(book_path)
    metadata = get_book_metadata(book_path)
    chapters = extract_chapter_list(book_path)

    info_lines = [
        f"[bold]{metadata.get('title') or book_path.stem}[/]",
        "",
        f"[dim]Author(s):[/] {', '.join(split_authors(metadata.get('author'))) or 'Unknown'}",
        f"[dim]Format:[/] {DocumentFormats.detect_format(book_path).upper()}",
        f"[dim]Chapters:[/] {len(chapters)}",
    ]
    for key, value in sorted(metadata.items()):
        if key in ("title", "author"):
            continue
        info_lines.append(f"[dim]{key}:[/] {value}")

    console.print()
    console.print(
        Panel(
            "\n".join(info_lines),
            title="Book Information",
            border_style="green",
        )
    )
    console.print()

    if chapters:
        display_chapter_list(chapters, console)
        console.print()

    return metadata
