"""Lesson markdown: tokenizer and renderer."""

from .elements import (
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
from .renderer import (
    MarkdownRenderer,
    NodeKind,
    RenderMode,
    RenderNode,
    RenderOptions,
    TextStyle,
    render,
    render_cell,
)

__all__ = [
    'Bold',
    'Heading',
    'Image',
    'InlineElement',
    'Italic',
    'Link',
    'MarkdownElement',
    'Newline',
    'Separator',
    'Table',
    'Text',
    'Underline',
    'tokenize',
    'MarkdownRenderer',
    'NodeKind',
    'RenderMode',
    'RenderNode',
    'RenderOptions',
    'TextStyle',
    'render',
    'render_cell',
]
