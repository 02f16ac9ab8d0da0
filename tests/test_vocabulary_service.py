"""Tests for translation sheet reading and the vocabulary index."""

import unicodedata

import pandas as pd

from lexitap.models import VocabularyPair
from lexitap.services import VocabularyIndex, build_index, read_word_pairs


class TestReadWordPairs:
    def test_reads_two_columns_without_header(self, tmp_path, sheet_writer):
        path = sheet_writer(tmp_path / "01.xlsx", [["дом", "house"], ["кот", "cat"]])
        assert read_word_pairs(path) == [
            VocabularyPair("дом", "house"),
            VocabularyPair("кот", "cat"),
        ]

    def test_empty_cells_become_empty_strings(self, tmp_path, sheet_writer):
        path = sheet_writer(tmp_path / "01.xlsx", [["дом", None], [None, None], ["кот", "cat"]])
        pairs = read_word_pairs(path)
        assert VocabularyPair("дом", "") in pairs
        assert VocabularyPair("кот", "cat") in pairs
        assert all(not p.is_empty for p in pairs)

    def test_extra_columns_ignored(self, tmp_path, sheet_writer):
        path = sheet_writer(tmp_path / "01.xlsx", [["дом", "house", "note"]])
        assert read_word_pairs(path) == [VocabularyPair("дом", "house")]

    def test_single_column_sheet(self, tmp_path, sheet_writer):
        path = sheet_writer(tmp_path / "01.xlsx", [["дом"], ["кот"]])
        assert read_word_pairs(path) == [VocabularyPair("дом", ""), VocabularyPair("кот", "")]

    def test_other_sheet_name_is_not_read(self, tmp_path, sheet_writer):
        path = sheet_writer(tmp_path / "01.xlsx", [["дом", "house"]], sheet_name="Sheet1")
        assert read_word_pairs(path) == []

    def test_missing_file(self, tmp_path):
        assert read_word_pairs(tmp_path / "missing.xlsx") == []
        assert read_word_pairs(None) == []

    def test_junk_path(self, tmp_path, sheet_writer):
        path = sheet_writer(tmp_path / "._01.xlsx", [["дом", "house"]])
        assert read_word_pairs(path) == []

    def test_not_a_workbook(self, tmp_path):
        path = tmp_path / "broken.xlsx"
        path.write_bytes(b"not a zip")
        assert read_word_pairs(path) == []

    def test_numbers_read_as_text(self, tmp_path):
        path = tmp_path / "n.xlsx"
        pd.DataFrame([[1, "one"], [2, "two"]]).to_excel(
            path, sheet_name="Words", header=False, index=False,
        )
        assert [p.first_column for p in read_word_pairs(path)] == ["1", "2"]


class TestVocabularyIndex:
    def test_bidirectional_lookup(self):
        index = VocabularyIndex([VocabularyPair("дом", "house")])
        assert index.lookup("дом") == "house"
        assert index.lookup("house") == "дом"

    def test_lookup_cleans_tapped_word(self):
        index = VocabularyIndex([VocabularyPair("дом", "house")])
        assert index.lookup("Дом.") == "house"

    def test_sheet_cells_matched_case_insensitively(self):
        index = VocabularyIndex([VocabularyPair("  Привет ", "Hello")])
        assert index.lookup("привет!") == "Hello"
        assert index.lookup("hello") == "  Привет "

    def test_unknown_word_returns_input(self):
        index = VocabularyIndex([VocabularyPair("дом", "house")])
        assert index.lookup("Кот,") == "Кот,"

    def test_first_row_wins(self):
        index = VocabularyIndex([
            VocabularyPair("ключ", "key"),
            VocabularyPair("ключ", "spring"),
            VocabularyPair("key", "клавиша"),
        ])
        assert index.lookup("ключ") == "key"
        assert index.lookup("key") == "ключ"

    def test_nfc_and_nfd_match(self):
        index = VocabularyIndex([VocabularyPair(unicodedata.normalize("NFD", "йод"), "iodine")])
        assert index.lookup("йод") == "iodine"

    def test_empty_index(self):
        index = VocabularyIndex()
        assert len(index) == 0
        assert index.lookup("дом") == "дом"

    def test_contains_and_len(self):
        index = VocabularyIndex([VocabularyPair("дом", "house")])
        assert "Дом." in index
        assert "кот" not in index
        assert len(index) == 2

    def test_from_sheet(self, tmp_path, sheet_writer):
        path = sheet_writer(tmp_path / "01.xlsx", [["кот", "cat"]])
        assert VocabularyIndex.from_sheet(path).lookup("Кот!") == "cat"

    def test_build_index_returns_lookup(self):
        lookup = build_index([VocabularyPair("дом", "house")])
        assert lookup("дом") == "house"
