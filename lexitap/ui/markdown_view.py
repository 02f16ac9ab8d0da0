"""
Markdown View - maps toolkit-neutral render nodes onto flet controls.

Consecutive spans are gathered into one wrapping ft.Text paragraph; block
nodes (headings, images, table rows, rules) close the current paragraph.
"""

from typing import List, Optional

import flet as ft

from ..markdown.renderer import (
    IMAGE_HEIGHT,
    IMAGE_WIDTH,
    NodeKind,
    Palette,
    RenderNode,
    TextStyle,
)


def to_flet_style(style: Optional[TextStyle]) -> Optional[ft.TextStyle]:
    if style is None:
        return None
    return ft.TextStyle(
        size=style.size,
        weight=ft.FontWeight.BOLD if style.bold else None,
        italic=style.italic,
        decoration=ft.TextDecoration.UNDERLINE if style.underline else None,
        color=style.color,
    )


def _span(node: RenderNode) -> ft.TextSpan:
    on_click = None
    if node.on_tap is not None:
        on_click = lambda e, tap=node.on_tap: tap()
    return ft.TextSpan(node.text, style=to_flet_style(node.style), on_click=on_click)


def _paragraph(spans: List[ft.TextSpan]) -> ft.Text:
    return ft.Text(spans=spans, selectable=False)


def _heading(node: RenderNode) -> ft.Container:
    return ft.Container(
        content=ft.Text(node.text, style=to_flet_style(node.style)),
        padding=ft.Padding.symmetric(vertical=8),
    )


def _image(node: RenderNode) -> ft.Container:
    return ft.Container(
        content=ft.Column(
            controls=[
                ft.Image(src=node.url, width=IMAGE_WIDTH, height=IMAGE_HEIGHT),
                ft.Text(node.text, style=to_flet_style(node.style)),
            ],
            horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            spacing=5,
        ),
        padding=ft.Padding.symmetric(vertical=10),
        alignment=ft.Alignment(0, 0),
    )


def _table_row(node: RenderNode) -> ft.Container:
    cells = [
        ft.Container(
            content=ft.Text(
                spans=[_span(child) for child in cell],
                text_align=ft.TextAlign.CENTER,
            ),
            width=node.cell_width,
            padding=8,
            border=ft.Border.only(right=ft.BorderSide(1, Palette.CELL_BORDER)),
        )
        for cell in node.cells
    ]
    return ft.Container(
        content=ft.Row(controls=cells, spacing=0, alignment=ft.MainAxisAlignment.SPACE_BETWEEN),
        border=ft.Border.only(bottom=ft.BorderSide(1, Palette.CELL_BORDER)),
    )


def build_controls(nodes: List[RenderNode]) -> List[ft.Control]:
    """
    Convert render nodes into a flat list of flet controls.

    Args:
        nodes: Output of MarkdownRenderer.render

    Returns:
        Controls suitable for a scrolling ft.Column
    """
    controls: List[ft.Control] = []
    spans: List[ft.TextSpan] = []
    # A block node owns the line break that ends its source line
    after_block = False

    def flush() -> None:
        if spans:
            controls.append(_paragraph(list(spans)))
            spans.clear()

    for node in nodes:
        if node.kind is NodeKind.SPAN:
            spans.append(_span(node))
            after_block = False
        elif node.kind is NodeKind.NEWLINE:
            if spans:
                flush()
            elif after_block:
                after_block = False
            else:
                controls.append(ft.Container(height=8))
        else:
            flush()
            after_block = True
            if node.kind is NodeKind.HEADING:
                controls.append(_heading(node))
            elif node.kind is NodeKind.IMAGE:
                controls.append(_image(node))
            elif node.kind is NodeKind.TABLE_ROW:
                controls.append(_table_row(node))
            elif node.kind is NodeKind.SEPARATOR:
                controls.append(ft.Divider(height=20, color=Palette.RULE))

    flush()
    return controls
