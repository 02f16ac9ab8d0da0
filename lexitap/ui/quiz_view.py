"""
Quiz View - drag the shown word onto its part-of-speech tile.
"""

from typing import Optional

import flet as ft
from loguru import logger

from ..services import CategorizationQuiz, QuizResult, QuizTile
from ..services.quiz_service import DEFAULT_TITLE
from .theme import DesignTokens, show_snackbar

DRAG_GROUP = "quiz-word"


class QuizView:
    """flet surface for CategorizationQuiz."""

    def __init__(self, page: ft.Page) -> None:
        self.page = page
        self.quiz: Optional[CategorizationQuiz] = None
        self._word_slot: Optional[ft.Container] = None
        self._score: Optional[ft.Text] = None
        self._tiles: Optional[ft.Column] = None
        self._container = self._build_view()
        self.restart()

    @property
    def container(self) -> ft.Container:
        return self._container

    def _build_view(self) -> ft.Container:
        self._word_slot = ft.Container(alignment=ft.Alignment(0, 0), height=90)
        self._score = ft.Text("", size=14, color=DesignTokens.TEXT_SECONDARY)
        self._tiles = ft.Column(spacing=DesignTokens.SPACING_SM)
        return ft.Container(
            content=ft.Column(
                controls=[
                    ft.Row(
                        controls=[
                            ft.Text(DEFAULT_TITLE, size=20, weight=ft.FontWeight.BOLD,
                                    color=DesignTokens.TEXT_PRIMARY, expand=True),
                            ft.IconButton(icon=ft.Icons.REPLAY_ROUNDED, tooltip="Restart",
                                          on_click=lambda _: self.restart()),
                        ],
                    ),
                    self._score,
                    self._word_slot,
                    self._tiles,
                ],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                scroll=ft.ScrollMode.AUTO,
                expand=True,
            ),
            padding=DesignTokens.SPACING_MD,
            expand=True,
        )

    def _tile(self, tile: QuizTile) -> ft.DragTarget:
        return ft.DragTarget(
            group=DRAG_GROUP,
            content=ft.Container(
                content=ft.Text(tile.label, size=13, text_align=ft.TextAlign.CENTER,
                                color=DesignTokens.TEXT_PRIMARY),
                bgcolor=tile.color or DesignTokens.BG_SURFACE,
                border_radius=DesignTokens.RADIUS_MD,
                padding=DesignTokens.SPACING_MD,
                alignment=ft.Alignment(0, 0),
                expand=True,
                height=80,
            ),
            on_accept=lambda e, tile_id=tile.id: self._on_drop(tile_id),
            expand=True,
        )

    def _word_chip(self, text: str) -> ft.Container:
        return ft.Container(
            content=ft.Text(text, size=22, weight=ft.FontWeight.BOLD, color=ft.Colors.WHITE),
            bgcolor=DesignTokens.ACCENT_IOS,
            border_radius=DesignTokens.RADIUS_LG,
            padding=ft.Padding.symmetric(horizontal=24, vertical=12),
        )

    def restart(self) -> None:
        self.quiz = CategorizationQuiz(on_complete=self._on_complete)
        self._tiles.controls = [
            ft.Row(controls=[self._tile(tile) for tile in row.tiles], spacing=DesignTokens.SPACING_SM)
            for row in self.quiz.rows
        ]
        self._render()

    def _render(self) -> None:
        word = self.quiz.current
        result = self.quiz.result
        self._score.value = f"{result.correct} / {len(result.details)}"
        if word is None:
            self._word_slot.content = ft.Text(
                f"Done: {result.correct} of {result.total} correct",
                size=18,
                color=DesignTokens.TEXT_PRIMARY,
            )
        else:
            chip = self._word_chip(word.text)
            self._word_slot.content = ft.Draggable(
                group=DRAG_GROUP,
                content=chip,
                content_feedback=self._word_chip(word.text),
            )
        self.page.update()

    def _on_drop(self, tile_id: str) -> None:
        if self.quiz.finished:
            return
        entry = self.quiz.answer(tile_id)
        if not self.quiz.finished:
            show_snackbar(self.page, "Correct" if entry.correct else "Wrong", error=not entry.correct)
        self._render()

    def _on_complete(self, result: QuizResult) -> None:
        logger.info(f"Quiz complete: {result.correct}/{result.total}")
        show_snackbar(self.page, f"Quiz complete: {result.correct} / {result.total}")
