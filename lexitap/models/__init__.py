"""Data models for Lexitap."""

from .lesson import FileItem, VocabularyPair
from .review import ReviewRecord, now_seconds

__all__ = [
    'FileItem',
    'VocabularyPair',
    'ReviewRecord',
    'now_seconds',
]
