"""
Markdown Renderer - turns tokenized lesson elements into render nodes.

The output is toolkit-neutral: a list of RenderNode values carrying text,
style and an optional tap callback. The flet layer (ui.markdown_view) maps
nodes onto controls.

Two modes exist. INTERACTIVE renders a whole lesson and wires word taps.
CELL_INLINE renders the content of a single table cell: block elements are
flattened to plain text, so a cell can never contain a nested table, and it
never attaches tap callbacks.
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import partial
from typing import AbstractSet, Callable, Iterable, List, Optional, Sequence

from .elements import (
    INLINE_TYPES,
    Bold,
    Heading,
    Image,
    InlineElement,
    Italic,
    Link,
    MarkdownElement,
    Newline,
    Separator,
    Table,
    Text,
    Underline,
)
from .tokenizer import tokenize


class Palette:
    """Colors used by rendered lesson text."""
    TEXT = "#333333"
    LINK = "#1E90FF"
    TAPPED = "#FF0000"
    IMAGE_ALT = "#666666"
    RULE = "#CCCCCC"
    CELL_BORDER = "#DDDDDD"


BASE_TEXT_SIZE = 16
HEADING_SIZES = {1: 28, 2: 24, 3: 20}
IMAGE_WIDTH = 200
IMAGE_HEIGHT = 150


def heading_size(level: int) -> int:
    """Unscaled font size for a heading level (levels 4-6 use body size)."""
    return HEADING_SIZES.get(level, BASE_TEXT_SIZE)


class RenderMode(Enum):
    INTERACTIVE = "interactive"
    CELL_INLINE = "cell_inline"


class NodeKind(Enum):
    SPAN = "span"
    HEADING = "heading"
    IMAGE = "image"
    TABLE_ROW = "table_row"
    SEPARATOR = "separator"
    NEWLINE = "newline"


@dataclass(frozen=True)
class TextStyle:
    size: float
    bold: bool = False
    italic: bool = False
    underline: bool = False
    color: str = Palette.TEXT


@dataclass
class RenderNode:
    """One rendered piece of a lesson."""

    kind: NodeKind
    text: str = ""
    style: Optional[TextStyle] = None
    on_tap: Optional[Callable[[], None]] = None
    url: str = ""
    highlighted: bool = False
    cells: List[List["RenderNode"]] = field(default_factory=list)
    cell_width: float = 0.0

    @property
    def tappable(self) -> bool:
        return self.on_tap is not None


@dataclass
class RenderOptions:
    """
    Inputs that vary rendering.

    Attributes:
        font_scale: Multiplier applied to every font size
        tapped_words: Surface forms to highlight (exact, case-sensitive)
        on_word_tap: Called with an element's literal content on tap
        available_width: Width split evenly across a table row's cells
    """

    font_scale: float = 1.0
    tapped_words: AbstractSet[str] = frozenset()
    on_word_tap: Optional[Callable[[str], None]] = None
    available_width: float = 360.0


def inline_only(elements: Iterable[MarkdownElement]) -> List[InlineElement]:
    """
    Reduce elements to the inline variants a table cell may show.

    Headings and image alt text are kept as plain text and a rule becomes
    its literal ``---``. Line breaks and table rows cannot come from a single
    cell and are dropped.
    """
    inline: List[InlineElement] = []
    for el in elements:
        if isinstance(el, INLINE_TYPES):
            inline.append(el)
        elif isinstance(el, Heading):
            inline.append(Text(el.content))
        elif isinstance(el, Image) and el.alt:
            inline.append(Text(el.alt))
        elif isinstance(el, Separator):
            inline.append(Text("---"))
    return inline


class MarkdownRenderer:
    """
    Renders markdown elements in one of two modes.

    Usage:
        renderer = MarkdownRenderer(RenderOptions(on_word_tap=handle_tap))
        nodes = renderer.render(tokenize(text))
    """

    def __init__(self, options: Optional[RenderOptions] = None,
                 mode: RenderMode = RenderMode.INTERACTIVE):
        self.options = options or RenderOptions()
        self.mode = mode

    @property
    def interactive(self) -> bool:
        return self.mode is RenderMode.INTERACTIVE

    def _size(self, base: float) -> float:
        return base * self.options.font_scale

    def _is_tapped(self, content: str) -> bool:
        return self.interactive and content in self.options.tapped_words

    def _tap(self, content: str) -> Optional[Callable[[], None]]:
        if not self.interactive or self.options.on_word_tap is None:
            return None
        return partial(self.options.on_word_tap, content)

    def render(self, elements: Sequence[MarkdownElement]) -> List[RenderNode]:
        """
        Render a sequence of elements.

        In CELL_INLINE mode elements are first reduced with ``inline_only``.
        """
        if not self.interactive:
            return self.render_inline(inline_only(elements))
        return [self._render_element(el) for el in elements]

    def render_inline(self, elements: Sequence[InlineElement]) -> List[RenderNode]:
        """Render inline elements only (bold, italic, underline, link, text)."""
        return [self._render_inline(el) for el in elements]

    def _render_element(self, el: MarkdownElement) -> RenderNode:
        if isinstance(el, INLINE_TYPES):
            return self._render_inline(el)
        if isinstance(el, Heading):
            highlighted = self._is_tapped(el.content)
            return RenderNode(
                kind=NodeKind.HEADING,
                text=el.content,
                style=TextStyle(
                    size=self._size(heading_size(el.level)),
                    bold=el.level <= 3,
                    color=Palette.TAPPED if highlighted else Palette.TEXT,
                ),
                highlighted=highlighted,
            )
        if isinstance(el, Image):
            return RenderNode(
                kind=NodeKind.IMAGE,
                text=el.alt,
                url=el.url,
                style=TextStyle(size=self._size(BASE_TEXT_SIZE), italic=True, color=Palette.IMAGE_ALT),
            )
        if isinstance(el, Table):
            return self._render_table(el)
        if isinstance(el, Separator):
            return RenderNode(kind=NodeKind.SEPARATOR)
        if isinstance(el, Newline):
            return RenderNode(kind=NodeKind.NEWLINE, text="\n")
        raise TypeError(f"Unknown markdown element: {el!r}")

    def _render_inline(self, el: InlineElement) -> RenderNode:
        size = self._size(BASE_TEXT_SIZE)
        if isinstance(el, Link):
            return RenderNode(
                kind=NodeKind.SPAN,
                text=el.content + " ",
                url=el.url,
                style=TextStyle(size=size, underline=True, color=Palette.LINK),
            )

        highlighted = self._is_tapped(el.content)
        style = TextStyle(
            size=size,
            bold=isinstance(el, Bold),
            italic=isinstance(el, Italic),
            underline=isinstance(el, Underline),
            color=Palette.TAPPED if highlighted else Palette.TEXT,
        )
        return RenderNode(
            kind=NodeKind.SPAN,
            text=el.content + " ",
            style=style,
            on_tap=self._tap(el.content),
            highlighted=highlighted,
        )

    def _render_table(self, el: Table) -> RenderNode:
        cell_renderer = MarkdownRenderer(self.options, RenderMode.CELL_INLINE)
        count = len(el.cells)
        return RenderNode(
            kind=NodeKind.TABLE_ROW,
            cells=[cell_renderer.render(tokenize(cell)) for cell in el.cells],
            cell_width=self.options.available_width / count if count else 0.0,
        )


def render(elements: Sequence[MarkdownElement],
           options: Optional[RenderOptions] = None) -> List[RenderNode]:
    """Render a lesson interactively."""
    return MarkdownRenderer(options).render(elements)


def render_cell(text: str, options: Optional[RenderOptions] = None) -> List[RenderNode]:
    """Tokenize and render one raw table cell without tap targets."""
    return MarkdownRenderer(options, RenderMode.CELL_INLINE).render(tokenize(text))
