"""
Quiz Service - part-of-speech categorization quiz.

Words are shown one at a time and dropped onto category tiles. The engine
only tracks answers and results; dragging is the UI's business.
"""

import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence


@dataclass(frozen=True)
class QuizTile:
    id: str
    label: str
    color: Optional[str] = None


@dataclass(frozen=True)
class QuizRow:
    id: str
    tiles: Sequence[QuizTile]


@dataclass(frozen=True)
class QuizWord:
    id: str
    text: str
    answer_tile_id: str


@dataclass(frozen=True)
class QuizAnswer:
    word_id: str
    dropped_tile_id: Optional[str]
    correct: bool


@dataclass
class QuizResult:
    correct: int = 0
    total: int = 0
    details: List[QuizAnswer] = field(default_factory=list)

    @property
    def incorrect(self) -> int:
        return len(self.details) - self.correct


DEFAULT_ROWS: List[QuizRow] = [
    QuizRow("row-1", (
        QuizTile("noun", "Существительное \\ noun", "#fde68a"),
        QuizTile("verb", "Глагол \\ verb", "#a7f3d0"),
        QuizTile("adjective", "Прилагательное \\ adjective", "#93c5fd"),
    )),
    QuizRow("row-2", (
        QuizTile("pronoun", "Местоимение \\ pronoun", "#fca5a5"),
        QuizTile("adverb", "Наречие \\ adverb", "#c4b5fd"),
    )),
]

DEFAULT_WORDS: List[QuizWord] = [
    QuizWord("w1", "дом", "noun"),
    QuizWord("w2", "книга", "noun"),
    QuizWord("w3", "город", "noun"),
    QuizWord("w4", "бежать", "verb"),
    QuizWord("w5", "писать", "verb"),
    QuizWord("w6", "думать", "verb"),
    QuizWord("w7", "быстрый", "adjective"),
    QuizWord("w8", "большой", "adjective"),
    QuizWord("w9", "счастливый", "adjective"),
    QuizWord("w10", "она", "pronoun"),
    QuizWord("w11", "они", "pronoun"),
    QuizWord("w12", "он", "pronoun"),
    QuizWord("w13", "быстро", "adverb"),
    QuizWord("w14", "часто", "adverb"),
    QuizWord("w15", "тихо", "adverb"),
]

DEFAULT_TITLE = "Категоризатор частей речи"


class CategorizationQuiz:
    """
    Drag-the-word-onto-its-category quiz.

    Usage:
        quiz = CategorizationQuiz(DEFAULT_ROWS, DEFAULT_WORDS)
        while not quiz.finished:
            quiz.answer(tile_id_under_the_drop)
        print(quiz.result.correct, "/", quiz.result.total)
    """

    def __init__(
        self,
        rows: Sequence[QuizRow] = DEFAULT_ROWS,
        words: Sequence[QuizWord] = DEFAULT_WORDS,
        shuffle: bool = True,
        rng: Optional[random.Random] = None,
        on_complete: Optional[Callable[[QuizResult], None]] = None,
    ):
        self.rows = list(rows)
        self.tile_ids = {tile.id for row in self.rows for tile in row.tiles}
        self.sequence: List[QuizWord] = list(words)
        if shuffle:
            (rng or random.Random()).shuffle(self.sequence)
        self.index = 0
        self.result = QuizResult(total=len(self.sequence))
        self.on_complete = on_complete

    @property
    def current(self) -> Optional[QuizWord]:
        if self.index < len(self.sequence):
            return self.sequence[self.index]
        return None

    @property
    def finished(self) -> bool:
        return self.current is None

    def answer(self, tile_id: Optional[str]) -> QuizAnswer:
        """
        Record a drop of the current word.

        Args:
            tile_id: Tile the word landed on, or None for a miss

        Returns:
            The recorded answer

        Raises:
            ValueError: If every word has already been answered
        """
        word = self.current
        if word is None:
            raise ValueError("quiz is already complete")

        dropped = tile_id if tile_id in self.tile_ids else None
        entry = QuizAnswer(word_id=word.id, dropped_tile_id=dropped,
                           correct=dropped is not None and dropped == word.answer_tile_id)
        self.result.details.append(entry)
        if entry.correct:
            self.result.correct += 1
        self.index += 1

        if self.finished and self.on_complete:
            self.on_complete(self.result)
        return entry
