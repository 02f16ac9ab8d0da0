"""Flip card control: the word on the front, its translation on the back."""

from typing import Optional

import flet as ft

from ..models import ReviewRecord
from .theme import DesignTokens


class FlipCard:
    """
    Tap-to-flip card for one review record.

    A new FlipCard is built for every card shown, so the flip state never
    leaks from one word to the next.
    """

    def __init__(self, record: ReviewRecord, font_scale: float = 1.0) -> None:
        self.record = record
        self.font_scale = font_scale
        self.flipped = False
        self._face: Optional[ft.Text] = None
        self._hint: Optional[ft.Text] = None
        self._switcher: Optional[ft.AnimatedSwitcher] = None
        self._control = self._build()

    @property
    def control(self) -> ft.Container:
        return self._control

    def _face_content(self) -> ft.Container:
        text = self.record.translation if self.flipped else self.record.cleaned_word
        color = DesignTokens.ACCENT_PRIMARY if self.flipped else DesignTokens.TEXT_PRIMARY
        return ft.Container(
            key="back" if self.flipped else "front",
            content=ft.Text(
                text,
                size=28 * self.font_scale,
                weight=ft.FontWeight.BOLD,
                color=color,
                text_align=ft.TextAlign.CENTER,
            ),
            alignment=ft.Alignment(0, 0),
            expand=True,
        )

    def _build(self) -> ft.Container:
        self._switcher = ft.AnimatedSwitcher(
            content=self._face_content(),
            transition=ft.AnimatedSwitcherTransition.SCALE,
            duration=250,
        )
        self._hint = ft.Text("Tap to flip", size=12, color=DesignTokens.TEXT_MUTED)
        return ft.Container(
            content=ft.Column(
                controls=[ft.Container(content=self._switcher, expand=True), self._hint],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
            ),
            width=320,
            height=220,
            padding=DesignTokens.SPACING_LG,
            border_radius=DesignTokens.RADIUS_LG,
            bgcolor=DesignTokens.BG_CARD,
            border=ft.Border.all(1, DesignTokens.BG_SURFACE),
            shadow=ft.BoxShadow(
                spread_radius=-2,
                blur_radius=15,
                color=ft.Colors.with_opacity(0.15, ft.Colors.BLACK),
                offset=ft.Offset(0, 4),
            ),
            on_click=lambda _: self.flip(),
        )

    def flip(self) -> None:
        self.flipped = not self.flipped
        self._switcher.content = self._face_content()
        self._hint.visible = not self.flipped
        self._control.update()
