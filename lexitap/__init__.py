"""Lexitap - read annotated lessons, tap words, review them with flip cards."""

__version__ = "1.0.0"
__author__ = "Lexitap Team"

from .config import Config, SettingsManager
from .markdown import render, tokenize
from .models import ReviewRecord, VocabularyPair
from .services import (
    LessonLibrary,
    ReviewSession,
    ReviewStore,
    VocabularyIndex,
    apply_outcome,
    select_due,
)

__all__ = [
    'Config',
    'SettingsManager',
    'render',
    'tokenize',
    'ReviewRecord',
    'VocabularyPair',
    'LessonLibrary',
    'ReviewSession',
    'ReviewStore',
    'VocabularyIndex',
    'apply_outcome',
    'select_due',
]
