"""Shared design tokens and feedback helpers for the flet views."""

import flet as ft


class DesignTokens:
    """Centralized design tokens for consistent styling."""
    # Colors - light reading theme
    BG_PRIMARY = "#FFFFFF"
    BG_SURFACE = "#F2F2F6"
    BG_CARD = "#FFFFFF"

    # Text colors
    TEXT_PRIMARY = "#333333"
    TEXT_SECONDARY = "#666666"
    TEXT_MUTED = "#999999"

    # Accent colors
    ACCENT_PRIMARY = "#1E90FF"
    ACCENT_IOS = "#007AFF"
    ACCENT_SUCCESS = "#4CAF50"
    ACCENT_DANGER = "#F44336"

    # Spacing
    SPACING_XS = 4
    SPACING_SM = 8
    SPACING_MD = 16
    SPACING_LG = 24

    # Border radius
    RADIUS_SM = 8
    RADIUS_MD = 12
    RADIUS_LG = 16


def show_snackbar(page: ft.Page, message: str, error: bool = False) -> None:
    """Show a snackbar notification, replacing any previous one."""
    snackbar = ft.SnackBar(
        content=ft.Row(
            controls=[
                ft.Icon(
                    ft.Icons.ERROR_OUTLINE if error else ft.Icons.CHECK_CIRCLE_OUTLINE,
                    color=ft.Colors.WHITE,
                    size=20,
                ),
                ft.Text(message, color=ft.Colors.WHITE, size=14),
            ],
            spacing=12,
        ),
        bgcolor=DesignTokens.ACCENT_DANGER if error else DesignTokens.ACCENT_SUCCESS,
        duration=3500,
    )
    for ctrl in list(page.overlay):
        if isinstance(ctrl, ft.SnackBar):
            page.overlay.remove(ctrl)
    page.overlay.append(snackbar)
    snackbar.open = True
    page.update()
