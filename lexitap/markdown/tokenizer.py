"""
Markdown tokenizer for lesson files.

A single left-to-right scan over one compiled alternation. At each scan
position the alternatives are tried in order and the first match wins:

    heading, bold, italic, underline, link, image, table row,
    separator, plain word, newline

Spaces and tabs between matches are skipped. Anything the structured
alternatives reject (an unmatched ``**``, a lone ``[``) is picked up by the
plain-word alternative, so tokenizing never fails.

Headings, table rows and rules are recognised only at the start of a line.
The mobile app also accepted a mid-line ``# `` as a heading start; here
``a # b`` stays three words.
"""

import re
from typing import Callable, Dict, List, Optional

from .elements import (
    Bold,
    Heading,
    Image,
    Italic,
    Link,
    MarkdownElement,
    Newline,
    Separator,
    Table,
    Text,
    Underline,
)

TOKEN_PATTERN = re.compile(
    r"""
      (?P<heading>^\#{1,6}\ [^\n]+)
    | (?P<bold>\*\*[^*]+\*\*)
    | (?P<italic>\*[^*]+\*)
    | (?P<underline>_[^_]+_)
    | (?P<link>\[[^\]]+\]\([^)]+\))
    | (?P<image>!\[[^\]]*\]\([^)]+\))
    | (?P<table>^\|[^\n]*\|[ \t]*$)
    | (?P<separator>^---$)
    | (?P<text>\S+)
    | (?P<newline>\n)
    """,
    re.MULTILINE | re.VERBOSE,
)

LINK_PARTS = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
IMAGE_PARTS = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")


def _heading(raw: str) -> Heading:
    hashes, _, content = raw.partition(" ")
    return Heading(level=len(hashes), content=content)


def _link(raw: str) -> Link:
    m = LINK_PARTS.match(raw)
    return Link(content=m.group(1), url=m.group(2))


def _image(raw: str) -> Image:
    m = IMAGE_PARTS.match(raw)
    return Image(alt=m.group(1), url=m.group(2))


def split_cells(row: str) -> List[str]:
    """Split a ``|a|b|`` row into trimmed cells, dropping the outer segments."""
    return [cell.strip() for cell in row.rstrip().split("|")[1:-1]]


_BUILDERS: Dict[str, Callable[[str], MarkdownElement]] = {
    "heading": _heading,
    "bold": lambda raw: Bold(raw[2:-2]),
    "italic": lambda raw: Italic(raw[1:-1]),
    "underline": lambda raw: Underline(raw[1:-1]),
    "link": _link,
    "image": _image,
    "table": lambda raw: Table(tuple(split_cells(raw))),
    "separator": lambda raw: Separator(),
    "text": Text,
    "newline": lambda raw: Newline(),
}


def tokenize(text: Optional[str]) -> List[MarkdownElement]:
    """
    Convert lesson markdown into an ordered list of elements.

    Table cell strings are stored raw; the renderer tokenizes them again
    when it draws the row.

    Args:
        text: Markdown source (``None`` is treated as empty)

    Returns:
        Elements in source order
    """
    if not text:
        return []

    source = text.replace("\r\n", "\n").replace("\r", "\n")
    return [
        _BUILDERS[match.lastgroup](match.group())
        for match in TOKEN_PATTERN.finditer(source)
    ]
