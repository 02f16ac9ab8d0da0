"""
File Browser View - navigate the installed lesson tree.
"""

from pathlib import Path
from typing import Callable, List, Optional

import flet as ft

from ..models import FileItem
from ..services import LessonLibrary
from .theme import DesignTokens


class FileBrowserView:
    """
    Directory listing with a back button and refresh.

    Opening a file hands its path to ``on_open_file``; directories are
    entered in place.
    """

    def __init__(self, page: ft.Page, library: LessonLibrary,
                 on_open_file: Callable[[Path], None]) -> None:
        self.page = page
        self.library = library
        self.on_open_file = on_open_file
        self.current_path: Path = library.start_directory()

        self._title: Optional[ft.Text] = None
        self._back_button: Optional[ft.IconButton] = None
        self._list: Optional[ft.ListView] = None
        self._container = self._build_view()
        self.refresh()

    @property
    def container(self) -> ft.Container:
        return self._container

    def _build_view(self) -> ft.Container:
        self._title = ft.Text("Courses", size=20, weight=ft.FontWeight.BOLD,
                              color=DesignTokens.TEXT_PRIMARY)
        self._back_button = ft.IconButton(
            icon=ft.Icons.CHEVRON_LEFT,
            icon_color=DesignTokens.ACCENT_PRIMARY,
            tooltip="Back",
            on_click=lambda _: self._navigate_to_parent(),
        )
        self._list = ft.ListView(expand=True, spacing=DesignTokens.SPACING_SM, padding=12)

        return ft.Container(
            content=ft.Column(
                controls=[
                    ft.Row(
                        controls=[
                            self._back_button,
                            self._title,
                            ft.Container(expand=True),
                            ft.IconButton(
                                icon=ft.Icons.REFRESH,
                                tooltip="Refresh",
                                on_click=lambda _: self.refresh(),
                            ),
                        ],
                    ),
                    self._list,
                ],
                expand=True,
            ),
            expand=True,
        )

    def _item_tile(self, item: FileItem) -> ft.Container:
        icon = ft.Icons.FOLDER_OUTLINED if item.is_directory else ft.Icons.DESCRIPTION_OUTLINED
        return ft.Container(
            content=ft.Row(
                controls=[
                    ft.Icon(icon, color=DesignTokens.ACCENT_PRIMARY, size=20),
                    ft.Text(item.name, size=16, color=DesignTokens.TEXT_PRIMARY),
                ],
                spacing=10,
            ),
            padding=12,
            border_radius=DesignTokens.RADIUS_SM,
            bgcolor=DesignTokens.BG_SURFACE,
            on_click=lambda e, it=item: self._on_item_click(it),
        )

    def _empty_tile(self) -> ft.Container:
        return ft.Container(
            content=ft.Text("Empty", color=DesignTokens.TEXT_MUTED),
            padding=24,
            alignment=ft.Alignment(0, 0),
        )

    def refresh(self) -> None:
        """Re-list the current directory."""
        items: List[FileItem] = self.library.list_directory(self.current_path)
        self._list.controls = [self._item_tile(it) for it in items] or [self._empty_tile()]
        at_root = self.current_path.resolve() == self.library.root
        self._back_button.visible = not at_root
        self._title.value = self.library.label_for(self.current_path) or "Courses"
        self.page.update()

    def _on_item_click(self, item: FileItem) -> None:
        if item.is_directory:
            self.current_path = item.path
            self.refresh()
        else:
            self.on_open_file(item.path)

    def _navigate_to_parent(self) -> None:
        self.current_path = self.library.parent_directory(self.current_path)
        self.refresh()
