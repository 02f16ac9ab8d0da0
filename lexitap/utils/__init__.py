"""Utils module."""

from .parsing import TextParser
from .paths import LessonPaths
from .logger import setup_logger

__all__ = [
    'TextParser',
    'LessonPaths',
    'setup_logger'
]
