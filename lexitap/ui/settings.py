"""
Settings View - reader preferences and course download
-------------------------------------------------------

Binds the font scale slider to SettingsManager and runs BundleFetcher for
"Download Course".
"""

from typing import Callable, Optional

import flet as ft
from loguru import logger

from ..config import Config, SettingsManager
from ..exceptions import BundleError
from ..fetchers import BundleFetcher
from .theme import DesignTokens, show_snackbar


class SettingsView:
    """
    Settings view for reader and course options.

    Binds to SettingsManager for persistent storage.
    """

    def __init__(self, page: ft.Page, on_course_installed: Optional[Callable[[], None]] = None) -> None:
        """
        Initialize the Settings view.

        Args:
            page: Flet page instance for updates
            on_course_installed: Called after a successful download
        """
        self.page = page
        self.settings = SettingsManager()
        self.on_course_installed = on_course_installed
        self.is_downloading = False

        # UI References
        self._scale_label: Optional[ft.Text] = None
        self._scale_slider: Optional[ft.Slider] = None
        self._download_button: Optional[ft.ElevatedButton] = None
        self._progress_bar: Optional[ft.ProgressBar] = None
        self._progress_label: Optional[ft.Text] = None

        self._container = self._build_view()

    @property
    def container(self) -> ft.Container:
        """Get the main container for this view."""
        return self._container

    def _build_view(self) -> ft.Container:
        content = ft.Column(
            controls=[
                ft.Text("Settings", size=28, weight=ft.FontWeight.BOLD, color=DesignTokens.TEXT_PRIMARY),
                ft.Container(height=10),
                self._build_reader_section(),
                ft.Container(height=20),
                self._build_course_section(),
            ],
            scroll=ft.ScrollMode.AUTO,
            expand=True,
        )
        return ft.Container(content=content, expand=True, padding=DesignTokens.SPACING_MD)

    def _build_section_card(self, title: str, icon: str, controls: list) -> ft.Container:
        """Build a styled section card."""
        return ft.Container(
            content=ft.Column(
                controls=[
                    ft.Row(
                        controls=[
                            ft.Icon(icon, size=20, color=DesignTokens.ACCENT_PRIMARY),
                            ft.Text(title, size=16, weight=ft.FontWeight.BOLD,
                                    color=DesignTokens.TEXT_PRIMARY),
                        ],
                        spacing=10,
                    ),
                    ft.Divider(height=1, color=DesignTokens.BG_SURFACE),
                    *controls,
                ],
                spacing=10,
            ),
            padding=20,
            border_radius=DesignTokens.RADIUS_MD,
            bgcolor=DesignTokens.BG_CARD,
            shadow=ft.BoxShadow(
                spread_radius=-2,
                blur_radius=15,
                color=ft.Colors.with_opacity(0.1, ft.Colors.BLACK),
                offset=ft.Offset(0, 4),
            ),
        )

    def _build_reader_section(self) -> ft.Container:
        low, high = SettingsManager.FONT_SCALE_RANGE
        scale = self.settings.font_scale

        self._scale_label = ft.Text(f"Font scale: {scale:.2f}", size=13,
                                    color=DesignTokens.TEXT_SECONDARY)
        self._scale_slider = ft.Slider(
            min=low,
            max=high,
            divisions=int((high - low) / 0.25),
            value=scale,
            label="{value}",
            on_change=self._on_scale_change,
            on_change_end=self._on_scale_commit,
        )
        return self._build_section_card(
            "Reader",
            ft.Icons.TEXT_FIELDS_ROUNDED,
            [self._scale_label, self._scale_slider],
        )

    def _build_course_section(self) -> ft.Container:
        self._download_button = ft.ElevatedButton(
            "Download Course",
            icon=ft.Icons.DOWNLOAD_ROUNDED,
            on_click=self._on_download_click,
        )
        self._progress_bar = ft.ProgressBar(value=0, visible=False)
        self._progress_label = ft.Text("", size=12, color=DesignTokens.TEXT_SECONDARY)
        return self._build_section_card(
            "Course",
            ft.Icons.SCHOOL_ROUNDED,
            [
                ft.Text(
                    "Replaces the installed lessons with the latest course bundle.",
                    size=12,
                    color=DesignTokens.TEXT_MUTED,
                ),
                self._download_button,
                self._progress_bar,
                self._progress_label,
            ],
        )

    def _on_scale_change(self, e: ft.ControlEvent) -> None:
        self._scale_label.value = f"Font scale: {float(e.control.value):.2f}"
        self.page.update()

    def _on_scale_commit(self, e: ft.ControlEvent) -> None:
        self.settings.set("FONT_SCALE", float(e.control.value))
        logger.info(f"Font scale set to {self.settings.font_scale}")

    def _on_download_click(self, e: ft.ControlEvent) -> None:
        if self.is_downloading:
            return
        self.page.run_task(self._download_async)

    def _on_progress(self, done: int, total: int) -> None:
        self._progress_bar.value = done / total if total else None
        self._progress_label.value = f"{done}/{total}"
        self.page.update()

    async def _download_async(self) -> None:
        self.is_downloading = True
        self._download_button.disabled = True
        self._progress_bar.visible = True
        self._progress_bar.value = None
        self._progress_label.value = "Downloading..."
        self.page.update()

        url = self.settings.get("BUNDLE_URL", Config.BUNDLE_URL)
        try:
            async with BundleFetcher() as fetcher:
                count = await fetcher.fetch(url, Config.LESSONS_DIR, on_progress=self._on_progress)
        except (BundleError, OSError) as err:
            logger.error(f"Course download failed: {err}")
            self._progress_label.value = str(err)
            show_snackbar(self.page, "Course download failed", error=True)
        else:
            logger.info(f"Course installed: {count} files")
            self._progress_label.value = f"Installed {count} files"
            show_snackbar(self.page, "Course downloaded")
            if self.on_course_installed:
                self.on_course_installed()
        finally:
            self.is_downloading = False
            self._download_button.disabled = False
            self._progress_bar.visible = False
            self.page.update()
