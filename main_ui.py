"""
Lexitap: Lesson Reader
----------------------

Flet shell: Courses (file browser and lesson reader), Repeat (flip cards),
Quiz and Settings.
"""

import traceback
from pathlib import Path
from typing import Callable, Dict

import flet as ft
from loguru import logger

from lexitap.config import Config, SettingsManager
from lexitap.services import LessonLibrary, ReviewStore, create_key_value_store
from lexitap.ui import DesignTokens, FileBrowserView, LessonView, QuizView, ReviewView, SettingsView
from lexitap.utils import setup_logger

COURSES, REPEAT, QUIZ, SETTINGS = range(4)


# =============================================================================
# NAVIGATION RAIL (SIDEBAR)
# =============================================================================

def create_navigation_rail(
    on_change: Callable[[int], None],
    selected_index: int = 0
) -> ft.NavigationRail:
    """
    Create the main navigation sidebar.

    Args:
        on_change: Callback when navigation selection changes
        selected_index: Currently selected index

    Returns:
        Configured NavigationRail control
    """
    def destination(icon, selected_icon, label: str) -> ft.NavigationRailDestination:
        return ft.NavigationRailDestination(
            icon=icon,
            selected_icon=selected_icon,
            label=label,
            padding=ft.Padding.symmetric(vertical=8),
        )

    return ft.NavigationRail(
        selected_index=selected_index,
        label_type=ft.NavigationRailLabelType.ALL,
        min_width=90,
        group_alignment=-0.9,
        bgcolor=DesignTokens.BG_SURFACE,
        destinations=[
            destination(ft.Icons.MENU_BOOK_OUTLINED, ft.Icons.MENU_BOOK_ROUNDED, "Courses"),
            destination(ft.Icons.STYLE_OUTLINED, ft.Icons.STYLE_ROUNDED, "Repeat"),
            destination(ft.Icons.QUIZ_OUTLINED, ft.Icons.QUIZ_ROUNDED, "Quiz"),
            destination(ft.Icons.SETTINGS_OUTLINED, ft.Icons.SETTINGS_ROUNDED, "Settings"),
        ],
        on_change=lambda e: on_change(e.control.selected_index),
    )


class LexitapApp:
    """Main application controller."""

    def __init__(self, page: ft.Page) -> None:
        self.page = page
        self.settings = SettingsManager()
        self.store = ReviewStore(create_key_value_store(Config.STORAGE_BACKEND, Config.DATA_DIR))
        self.library = LessonLibrary(
            Config.LESSONS_DIR,
            start_subfolder=self.settings.get("START_SUBFOLDER", Config.START_SUBFOLDER),
        )
        self._setup_page()
        self._init_views()
        self._build_ui()

    def _setup_page(self) -> None:
        """Configure page settings and theme."""
        self.page.title = "Lexitap"
        self.page.theme_mode = ft.ThemeMode.LIGHT
        self.page.bgcolor = DesignTokens.BG_PRIMARY
        self.page.theme = ft.Theme(color_scheme_seed=DesignTokens.ACCENT_PRIMARY)
        self.page.padding = 0
        self.page.spacing = 0
        self.page.window.min_width = 360
        self.page.window.min_height = 600
        self.page.window.width = 900
        self.page.window.height = 800

    def _init_views(self) -> None:
        """Initialize all view containers."""
        self.browser = FileBrowserView(self.page, self.library, on_open_file=self._open_lesson)
        self.lesson = LessonView(self.page, self.library, self.store, on_back=self._close_lesson)
        self.review = ReviewView(self.page, self.store)
        self.quiz = QuizView(self.page)
        self.settings_view = SettingsView(self.page, on_course_installed=self._on_course_installed)

        self.views: Dict[int, ft.Container] = {
            COURSES: self.browser.container,
            REPEAT: self.review.container,
            QUIZ: self.quiz.container,
            SETTINGS: self.settings_view.container,
        }
        self.current_view_index: int = COURSES

    def _build_ui(self) -> None:
        """Build the main UI layout."""
        self.content_area = ft.Container(content=self.views[COURSES], expand=True)
        self.nav_rail = create_navigation_rail(on_change=self._on_nav_change, selected_index=COURSES)

        self.page.add(
            ft.Row(
                controls=[
                    self.nav_rail,
                    ft.VerticalDivider(width=1, color=DesignTokens.BG_SURFACE),
                    self.content_area,
                ],
                spacing=0,
                expand=True,
            )
        )

    def _show(self, control: ft.Control) -> None:
        self.content_area.content = control
        self.page.update()

    def _open_lesson(self, path: Path) -> None:
        self.views[COURSES] = self.lesson.container
        self._show(self.lesson.container)
        self.lesson.open(path)

    def _close_lesson(self) -> None:
        self.views[COURSES] = self.browser.container
        self._show(self.browser.container)

    def _on_course_installed(self) -> None:
        self.browser.current_path = self.library.start_directory()
        self.browser.refresh()

    def _on_nav_change(self, index: int) -> None:
        """
        Handle navigation selection change.

        Args:
            index: Selected navigation index
        """
        if index == self.current_view_index:
            return

        self.current_view_index = index
        self._show(self.views[index])
        if index == REPEAT:
            self.review.reload()


def main(page: ft.Page) -> None:
    """
    Main entry point for Flet application.

    Args:
        page: Flet page instance
    """
    setup_logger(Config.LOG_LEVEL, Config.LOG_FILE)
    Path(Config.LESSONS_DIR).mkdir(parents=True, exist_ok=True)

    try:
        LexitapApp(page)
    except Exception:
        error_text = traceback.format_exc()
        logger.exception("UI failed to start")
        page.add(
            ft.Container(
                content=ft.Column(
                    controls=[
                        ft.Text("UI failed to start", size=20, weight=ft.FontWeight.BOLD, color=ft.Colors.RED_400),
                        ft.Container(
                            content=ft.Text(error_text, size=11, selectable=True),
                            padding=10,
                            bgcolor=DesignTokens.BG_SURFACE,
                            border_radius=8,
                        ),
                    ],
                    spacing=10,
                ),
                padding=20,
            )
        )
        page.update()


def run() -> None:
    ft.run(main)


if __name__ == "__main__":
    run()
