"""Classify raw chapter text into structured content blocks."""

import re
from collections.abc import Iterable

from book_extract.models.content import ContentNode, ContentType, StructuredContent

CODE_FENCE = "```"

IMAGE_PATTERN = re.compile(r"!\[.*?\]\(.*?\)")
IMAGE_ALT_PATTERN = re.compile(r"!\[(.*?)\]")
IMAGE_URL_PATTERN = re.compile(r"\((.*?)\)")
ORDERED_LIST_PATTERN = re.compile(r"^\d+\.\s")


class ContentProcessor:
    """Turn raw chapter text into an ordered list of typed blocks.

    The processor keeps no state between calls: every call to ``process``
    builds its blocks locally, so one instance may be reused or shared.
    """

    def process(self, text: str) -> list[StructuredContent]:
        """Classify each non-blank line, then merge adjacent text blocks."""
        raw_lines = text.split("\n")
        baseline = _baseline_indent(raw_lines)

        blocks: list[StructuredContent] = []
        fence: str | None = None
        fenced_lines: list[str] = []

        for raw_line in raw_lines:
            line = raw_line.strip()
            if not line:
                continue

            # Inside a fenced code block every line is code until the fence closes
            if fence is not None:
                if line.startswith(CODE_FENCE):
                    blocks.append(
                        _code_block(
                            _detect_code_language(fence),
                            [fenced.strip() for fenced in fenced_lines],
                        )
                    )
                    fence, fenced_lines = None, []
                else:
                    fenced_lines.append(raw_line)
                continue

            if line.startswith(CODE_FENCE):
                fence = line
                continue

            blocks.append(self.classify_line(line, _indent_width(raw_line) - baseline))

        # A fence that never closes is a lone code line; the lines after it
        # are classified like any other
        if fence is not None:
            blocks.append(
                StructuredContent(
                    type=ContentType.CODE,
                    content=fence,
                    metadata={"language": _detect_code_language(fence)},
                )
            )
            for raw_line in fenced_lines:
                indent = _indent_width(raw_line) - baseline
                blocks.append(self.classify_line(raw_line.strip(), indent))

        return self.merge(blocks)

    def classify_line(self, line: str, indent: int = 0) -> StructuredContent:
        """Classify a single trimmed, non-fence line."""
        if IMAGE_PATTERN.search(line):
            metadata = _extract_image_metadata(line)
            return StructuredContent(
                type=ContentType.IMAGE,
                content=metadata.get("alt", ""),
                metadata=metadata,
            )

        if _is_heading(line):
            return StructuredContent(
                type=ContentType.HEADING,
                level=_heading_level(line),
                content=_strip_heading_markers(line).strip(),
            )

        if _is_list_item(line):
            return StructuredContent(
                type=ContentType.LIST,
                level=max(indent, 0) // 2 + 1,
                content=_strip_list_marker(line),
            )

        if line.startswith(">"):
            return StructuredContent(
                type=ContentType.QUOTE,
                content=line[1:].strip(),
            )

        if "|" in line and (line.startswith("|") or line.endswith("|")):
            return StructuredContent(type=ContentType.TABLE, content=line)

        return StructuredContent(type=ContentType.TEXT, content=line)

    def merge(self, blocks: list[StructuredContent]) -> list[StructuredContent]:
        """Merge runs of consecutive text blocks into one."""
        merged: list[StructuredContent] = []
        pending: list[str] = []

        for block in blocks:
            if block.type == ContentType.TEXT:
                pending.append(block.content)
                continue
            if pending:
                merged.append(_text_block(pending))
                pending = []
            merged.append(block)

        if pending:
            merged.append(_text_block(pending))
        return merged


def classify_text(text: str) -> list[StructuredContent]:
    """Classify text with a fresh processor."""
    return ContentProcessor().process(text)


def classify_nodes(nodes: Iterable[ContentNode]) -> list[StructuredContent]:
    """Classify each raw node's text and concatenate the results."""
    processor = ContentProcessor()
    result: list[StructuredContent] = []
    for node in nodes:
        result.extend(processor.process(node.text))
    return result


def parse_raw_content(text: str) -> list[ContentNode]:
    """Split text into one paragraph node per non-blank line."""
    return [
        ContentNode(type="paragraph", text=line.strip())
        for line in text.split("\n")
        if line.strip()
    ]


def _indent_width(line: str) -> int:
    return len(line) - len(line.lstrip())


def _baseline_indent(lines: list[str]) -> int:
    """Smallest indentation among non-blank lines outside closed code fences."""
    widths: list[int] = []
    fenced: list[int] | None = None

    for line in lines:
        stripped = line.strip()
        if not stripped:
            continue
        if fenced is not None:
            if stripped.startswith(CODE_FENCE):
                fenced = None
            else:
                fenced.append(_indent_width(line))
            continue
        if stripped.startswith(CODE_FENCE):
            fenced = []
            continue
        widths.append(_indent_width(line))

    # Lines after an unclosed fence are classified as prose
    if fenced:
        widths.extend(fenced)
    return min(widths) if widths else 0


def _detect_code_language(line: str) -> str:
    tokens = line[len(CODE_FENCE):].split()
    return tokens[0] if tokens else ""


def _code_block(language: str, lines: list[str]) -> StructuredContent:
    return StructuredContent(
        type=ContentType.CODE,
        content="\n".join(lines),
        metadata={"language": language},
    )


def _text_block(lines: list[str]) -> StructuredContent:
    return StructuredContent(type=ContentType.TEXT, content="\n".join(lines))


def _extract_image_metadata(line: str) -> dict[str, str]:
    metadata: dict[str, str] = {}
    alt = IMAGE_ALT_PATTERN.search(line)
    if alt:
        metadata["alt"] = alt.group(1)
    url = IMAGE_URL_PATTERN.search(line)
    if url:
        metadata["url"] = url.group(1)
    return metadata


def _is_heading(line: str) -> bool:
    return line.startswith("#") or line.endswith("===") or line.endswith("---")


def _heading_level(line: str) -> int:
    if line.startswith("#"):
        return len(line) - len(line.lstrip("#"))
    if line.endswith("==="):
        return 1
    return 2


def _strip_heading_markers(line: str) -> str:
    if line.startswith("#"):
        return line.lstrip("# ")
    return line.removesuffix("===").removesuffix("---")


def _is_list_item(line: str) -> bool:
    return (
        line.startswith("- ")
        or line.startswith("* ")
        or ORDERED_LIST_PATTERN.match(line) is not None
    )


def _strip_list_marker(line: str) -> str:
    if line.startswith("- ") or line.startswith("* "):
        return line[2:].strip()
    return ORDERED_LIST_PATTERN.sub("", line, count=1).strip()
