"""Services layer for business logic separation."""

from .repository import (
    BaseKeyValueStore,
    JSONFileKeyValueStore,
    MemoryKeyValueStore,
    SQLiteKeyValueStore,
    StorageBackend,
    create_key_value_store,
)
from .vocabulary_service import VocabularyIndex, build_index, read_word_pairs
from .review_service import ReviewStore
from .scheduler import apply_outcome, is_due, is_graduated, select_all, select_due
from .review_session import ReviewSession
from .lesson_service import Lesson, LessonLibrary, LessonSession, TapResult
from .quiz_service import CategorizationQuiz, QuizAnswer, QuizResult, QuizRow, QuizTile, QuizWord

__all__ = [
    "BaseKeyValueStore",
    "JSONFileKeyValueStore",
    "MemoryKeyValueStore",
    "SQLiteKeyValueStore",
    "StorageBackend",
    "create_key_value_store",
    "VocabularyIndex",
    "build_index",
    "read_word_pairs",
    "ReviewStore",
    "apply_outcome",
    "is_due",
    "is_graduated",
    "select_all",
    "select_due",
    "ReviewSession",
    "Lesson",
    "LessonLibrary",
    "LessonSession",
    "TapResult",
    "CategorizationQuiz",
    "QuizAnswer",
    "QuizResult",
    "QuizRow",
    "QuizTile",
    "QuizWord",
]
