"""
Lesson View - tap-to-translate reader.

Tapping a word adds it to the review list (or removes it when already
added); the translation is shown in a snackbar. The "Words" dialog lists
every word added so far.
"""

import asyncio
from pathlib import Path
from typing import Callable, Optional

import flet as ft
from loguru import logger

from ..config import SettingsManager
from ..markdown import MarkdownRenderer, RenderOptions
from ..services import LessonLibrary, LessonSession, ReviewStore
from .markdown_view import build_controls
from .theme import DesignTokens, show_snackbar


class LessonView:
    """Renders one lesson and routes word taps to a LessonSession."""

    def __init__(self, page: ft.Page, library: LessonLibrary, store: ReviewStore,
                 on_back: Optional[Callable[[], None]] = None) -> None:
        self.page = page
        self.library = library
        self.store = store
        self.on_back = on_back
        self.settings = SettingsManager()
        self.session: Optional[LessonSession] = None

        self._title: Optional[ft.Text] = None
        self._body: Optional[ft.Column] = None
        self._container = self._build_view()

    @property
    def container(self) -> ft.Container:
        return self._container

    def _build_view(self) -> ft.Container:
        self._title = ft.Text("", size=20, weight=ft.FontWeight.BOLD,
                              color=DesignTokens.TEXT_PRIMARY, expand=True)
        self._body = ft.Column(scroll=ft.ScrollMode.AUTO, expand=True, spacing=4)

        header = ft.Row(
            controls=[
                ft.IconButton(
                    icon=ft.Icons.CHEVRON_LEFT,
                    icon_color=DesignTokens.ACCENT_PRIMARY,
                    tooltip="Back",
                    on_click=lambda _: self.on_back() if self.on_back else None,
                ),
                self._title,
                ft.TextButton("Words", on_click=lambda _: self._show_words_dialog()),
            ],
        )
        return ft.Container(
            content=ft.Column(controls=[header, self._body], expand=True),
            padding=DesignTokens.SPACING_MD,
            expand=True,
        )

    def open(self, path: Path) -> None:
        """Start loading a lesson without blocking the UI."""
        self._title.value = path.stem
        self._body.controls = [ft.ProgressRing(width=24, height=24)]
        self.page.update()
        self.page.run_task(self._load_async, path)

    async def _load_async(self, path: Path) -> None:
        loop = asyncio.get_running_loop()
        lesson = await loop.run_in_executor(None, self.library.load_lesson, path)
        self.session = LessonSession(lesson, self.store)
        await self.session.refresh()
        self._render()

    def _render(self) -> None:
        if self.session is None:
            return
        width = self.page.width or 360
        options = RenderOptions(
            font_scale=self.settings.font_scale,
            tapped_words=self.session.tapped_words,
            on_word_tap=self._on_word_tap,
            available_width=max(120, width - 2 * DesignTokens.SPACING_MD),
        )
        nodes = MarkdownRenderer(options).render(self.session.lesson.elements)
        self._body.controls = build_controls(nodes)
        self.page.update()

    def _on_word_tap(self, word: str) -> None:
        self.page.run_task(self._toggle_async, word)

    async def _toggle_async(self, word: str) -> None:
        if self.session is None:
            return
        try:
            result = await self.session.toggle(word)
        except OSError as e:
            logger.error(f"Failed to update review list for '{word}': {e}")
            show_snackbar(self.page, "Could not save the word", error=True)
            return

        if result.added:
            show_snackbar(self.page, f"{result.cleaned_word} - {result.translation}")
        else:
            show_snackbar(self.page, f"Removed {result.cleaned_word}")
        self._render()

    def _show_words_dialog(self) -> None:
        pairs = self.session.translated_words() if self.session else []

        def close_dialog(e):
            dialog.open = False
            self.page.update()
            if dialog in self.page.overlay:
                self.page.overlay.remove(dialog)

        if pairs:
            rows = [
                ft.Text(f"{word} - {translation}", size=15, color=DesignTokens.TEXT_PRIMARY)
                for word, translation in pairs
            ]
        else:
            rows = [ft.Text("No words yet", color=DesignTokens.TEXT_MUTED)]

        dialog = ft.AlertDialog(
            modal=True,
            title=ft.Text("Words", weight=ft.FontWeight.W_700, size=18),
            content=ft.Column(controls=rows, scroll=ft.ScrollMode.AUTO, tight=True, height=300),
            actions=[ft.TextButton("Close", on_click=close_dialog)],
        )
        self.page.overlay.append(dialog)
        dialog.open = True
        self.page.update()
