"""
Markdown element types produced by the tokenizer.

Every variant is a small frozen dataclass; ``MarkdownElement`` is the union
of all of them and ``InlineElement`` the reduced set that may appear inside
a table cell.
"""

from dataclasses import dataclass
from typing import ClassVar, Tuple, Union


@dataclass(frozen=True)
class Heading:
    level: int
    content: str
    kind: ClassVar[str] = "heading"


@dataclass(frozen=True)
class Bold:
    content: str
    kind: ClassVar[str] = "bold"


@dataclass(frozen=True)
class Italic:
    content: str
    kind: ClassVar[str] = "italic"


@dataclass(frozen=True)
class Underline:
    content: str
    kind: ClassVar[str] = "underline"


@dataclass(frozen=True)
class Link:
    content: str
    url: str
    kind: ClassVar[str] = "link"


@dataclass(frozen=True)
class Image:
    alt: str
    url: str
    kind: ClassVar[str] = "image"


@dataclass(frozen=True)
class Table:
    """One table row; cells are raw strings, tokenized later by the renderer."""

    cells: Tuple[str, ...]
    kind: ClassVar[str] = "table"


@dataclass(frozen=True)
class Text:
    content: str
    kind: ClassVar[str] = "text"


@dataclass(frozen=True)
class Newline:
    kind: ClassVar[str] = "newline"


@dataclass(frozen=True)
class Separator:
    kind: ClassVar[str] = "separator"


InlineElement = Union[Bold, Italic, Underline, Link, Text]

MarkdownElement = Union[
    Heading, Bold, Italic, Underline, Link, Image, Table, Text, Newline, Separator
]

INLINE_TYPES = (Bold, Italic, Underline, Link, Text)
