"""Convert rendered page markup into markdown text."""

import re
import warnings

from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning
from markdownify import markdownify as md

# Suppress XML parsing warnings - page markup is XHTML
warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)

BLANK_LINE_RUN = re.compile(r"\n{3,}")


def html_to_markdown(html_content: str | bytes) -> str:
    """Convert one page of XHTML (as rendered by PyMuPDF) to markdown.

    Embedded page images arrive as base64 data URIs; only their alt text is
    kept. Runs of blank lines collapse to one.
    """
    soup = BeautifulSoup(html_content, "lxml")
    for tag in soup(["head", "script", "style"]):
        tag.decompose()
    for img in soup.find_all("img", src=re.compile(r"^data:")):
        img.replace_with(img.get("alt", ""))

    markdown = md(
        str(soup.body or soup),
        heading_style="ATX",
        bullets="-",
        strip=["a"],
    )
    lines = (line.rstrip() for line in markdown.splitlines())
    return BLANK_LINE_RUN.sub("\n\n", "\n".join(lines)).strip()
