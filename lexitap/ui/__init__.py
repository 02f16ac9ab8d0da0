"""UI components for Lexitap."""

from .file_browser import FileBrowserView
from .flip_card import FlipCard
from .lesson_view import LessonView
from .markdown_view import build_controls
from .quiz_view import QuizView
from .review_view import ReviewView
from .settings import SettingsView
from .theme import DesignTokens, show_snackbar

__all__ = [
    'FileBrowserView',
    'FlipCard',
    'LessonView',
    'build_controls',
    'QuizView',
    'ReviewView',
    'SettingsView',
    'DesignTokens',
    'show_snackbar',
]
