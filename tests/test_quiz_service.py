"""Tests for the part-of-speech categorization quiz."""

import random

import pytest

from lexitap.services import CategorizationQuiz, QuizRow, QuizTile, QuizWord
from lexitap.services.quiz_service import DEFAULT_ROWS, DEFAULT_WORDS

ROWS = [QuizRow("r1", (QuizTile("noun", "noun"), QuizTile("verb", "verb")))]
WORDS = [QuizWord("w1", "дом", "noun"), QuizWord("w2", "бежать", "verb")]


class TestCategorizationQuiz:
    def test_default_content(self):
        assert len(DEFAULT_WORDS) == 15
        tile_ids = {t.id for row in DEFAULT_ROWS for t in row.tiles}
        assert tile_ids == {"noun", "verb", "adjective", "pronoun", "adverb"}
        assert all(w.answer_tile_id in tile_ids for w in DEFAULT_WORDS)

    def test_unshuffled_order(self):
        quiz = CategorizationQuiz(ROWS, WORDS, shuffle=False)
        assert quiz.current.text == "дом"

    def test_shuffle_is_deterministic_with_rng(self):
        a = CategorizationQuiz(DEFAULT_ROWS, DEFAULT_WORDS, rng=random.Random(3))
        b = CategorizationQuiz(DEFAULT_ROWS, DEFAULT_WORDS, rng=random.Random(3))
        assert [w.id for w in a.sequence] == [w.id for w in b.sequence]
        assert sorted(w.id for w in a.sequence) == sorted(w.id for w in DEFAULT_WORDS)

    def test_scoring(self):
        quiz = CategorizationQuiz(ROWS, WORDS, shuffle=False)
        first = quiz.answer("noun")
        second = quiz.answer("noun")
        assert first.correct and not second.correct
        assert quiz.finished
        assert (quiz.result.correct, quiz.result.total, quiz.result.incorrect) == (1, 2, 1)

    def test_miss_and_unknown_tile(self):
        quiz = CategorizationQuiz(ROWS, WORDS, shuffle=False)
        miss = quiz.answer(None)
        unknown = quiz.answer("adverb")
        assert miss.dropped_tile_id is None and not miss.correct
        assert unknown.dropped_tile_id is None and not unknown.correct

    def test_on_complete_fires_once(self):
        results = []
        quiz = CategorizationQuiz(ROWS, WORDS, shuffle=False, on_complete=results.append)
        quiz.answer("noun")
        assert results == []
        quiz.answer("verb")
        assert len(results) == 1
        assert results[0].correct == 2

    def test_answer_after_completion(self):
        quiz = CategorizationQuiz(ROWS, WORDS[:1], shuffle=False)
        quiz.answer("noun")
        with pytest.raises(ValueError):
            quiz.answer("noun")

    def test_empty_quiz_is_finished(self):
        quiz = CategorizationQuiz(ROWS, [], shuffle=False)
        assert quiz.finished
        assert quiz.result.total == 0
