"""
Review View - flip card repetition of the words due now.
"""

from typing import Optional

import flet as ft
from loguru import logger

from ..config import SettingsManager
from ..services import ReviewSession, ReviewStore
from .flip_card import FlipCard
from .theme import DesignTokens, show_snackbar


class ReviewView:
    """
    Shows the current card of a ReviewSession with Yes / No buttons.

    The due set is reloaded every time the view is shown; "Repeat All"
    loads every stored word instead.
    """

    def __init__(self, page: ft.Page, store: ReviewStore) -> None:
        self.page = page
        self.session = ReviewSession(store)
        self.settings = SettingsManager()
        self._busy = False

        self._title: Optional[ft.Text] = None
        self._card_slot: Optional[ft.Container] = None
        self._buttons: Optional[ft.Row] = None
        self._container = self._build_view()

    @property
    def container(self) -> ft.Container:
        return self._container

    def _build_view(self) -> ft.Container:
        self._title = ft.Text(ReviewSession.EMPTY_TITLE, size=20, weight=ft.FontWeight.BOLD,
                              color=DesignTokens.TEXT_PRIMARY)
        self._card_slot = ft.Container(alignment=ft.Alignment(0, 0), expand=True)
        self._buttons = ft.Row(
            controls=[
                ft.ElevatedButton(
                    "No",
                    icon=ft.Icons.CLOSE_ROUNDED,
                    style=ft.ButtonStyle(bgcolor=DesignTokens.ACCENT_DANGER, color=ft.Colors.WHITE),
                    on_click=lambda _: self.page.run_task(self._answer_async, False),
                ),
                ft.ElevatedButton(
                    "Yes",
                    icon=ft.Icons.CHECK_ROUNDED,
                    style=ft.ButtonStyle(bgcolor=DesignTokens.ACCENT_SUCCESS, color=ft.Colors.WHITE),
                    on_click=lambda _: self.page.run_task(self._answer_async, True),
                ),
            ],
            alignment=ft.MainAxisAlignment.CENTER,
            spacing=DesignTokens.SPACING_LG,
        )

        header = ft.Row(
            controls=[
                self._title,
                ft.Container(expand=True),
                ft.TextButton(
                    "Repeat All",
                    icon=ft.Icons.REPLAY_ROUNDED,
                    on_click=lambda _: self.page.run_task(self._load_async, True),
                ),
            ],
        )
        return ft.Container(
            content=ft.Column(
                controls=[header, self._card_slot, self._buttons],
                horizontal_alignment=ft.CrossAxisAlignment.CENTER,
                expand=True,
            ),
            padding=DesignTokens.SPACING_MD,
            expand=True,
        )

    def reload(self) -> None:
        """Reload the due words; call when the view becomes visible."""
        self.page.run_task(self._load_async, False)

    async def _load_async(self, repeat_all: bool = False) -> None:
        try:
            if repeat_all:
                await self.session.load_all()
            else:
                await self.session.load()
        except OSError as e:
            logger.error(f"Failed to load review words: {e}")
            show_snackbar(self.page, "Could not load review words", error=True)
            return
        self._render()

    async def _answer_async(self, remembered: bool) -> None:
        if self._busy or self.session.finished:
            return
        self._busy = True
        try:
            await self.session.answer(remembered)
        except OSError as e:
            logger.error(f"Failed to save review outcome: {e}")
            show_snackbar(self.page, "Could not save the answer", error=True)
        finally:
            self._busy = False
        self._render()

    def _render(self) -> None:
        self._title.value = self.session.title
        card = self.session.current
        if card is None:
            self._card_slot.content = ft.Text(
                ReviewSession.EMPTY_MESSAGE,
                size=16,
                color=DesignTokens.TEXT_SECONDARY,
                text_align=ft.TextAlign.CENTER,
            )
            self._buttons.visible = False
        else:
            self._card_slot.content = FlipCard(card, self.settings.font_scale).control
            self._buttons.visible = True
        self.page.update()
