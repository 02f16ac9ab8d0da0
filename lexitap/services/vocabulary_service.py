"""
Vocabulary Service - translation lookup for tapped lesson words.

Reads the bilingual "Words" sheet that sits next to each lesson and builds
a bidirectional index over it.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import pandas as pd
from loguru import logger

from ..config import Config
from ..models import VocabularyPair
from ..utils.parsing import TextParser


def read_word_pairs(
    sheet_path: Optional[Union[str, Path]],
    sheet_name: str = Config.SHEET_NAME,
) -> List[VocabularyPair]:
    """
    Read a header-less two-column translation sheet.

    Missing files, junk paths, unreadable workbooks and missing sheets all
    yield an empty list.

    Args:
        sheet_path: Path to the .xlsx workbook
        sheet_name: Sheet holding the word pairs

    Returns:
        Pairs in row order, rows with both cells empty dropped
    """
    if not sheet_path or TextParser.is_junk_path(sheet_path):
        return []

    path = Path(sheet_path)
    if not path.exists():
        return []

    try:
        df = pd.read_excel(
            path,
            sheet_name=sheet_name,
            header=None,
            dtype=str,
            usecols=[0, 1],
        ).fillna('')
    except ValueError as e:
        # Raised for a missing sheet or a sheet with fewer than two columns
        logger.warning(f"No usable '{sheet_name}' sheet in {path}: {e}")
        return _read_single_column(path, sheet_name)
    except Exception as e:
        logger.warning(f"Could not read translation sheet {path}: {e}")
        return []

    pairs = [
        VocabularyPair(
            first_column=TextParser.normalize_unicode(first),
            second_column=TextParser.normalize_unicode(second),
        )
        for first, second in df.itertuples(index=False, name=None)
    ]
    return [pair for pair in pairs if not pair.is_empty]


def _read_single_column(path: Path, sheet_name: str) -> List[VocabularyPair]:
    """Fallback for sheets that only fill the first column."""
    try:
        df = pd.read_excel(path, sheet_name=sheet_name, header=None, dtype=str).fillna('')
    except Exception:
        return []
    if df.empty:
        return []
    return [
        VocabularyPair(first_column=TextParser.normalize_unicode(value), second_column="")
        for value in df.iloc[:, 0]
        if value
    ]


class VocabularyIndex:
    """
    Bidirectional lookup table built from vocabulary pairs.

    A cleaned word matching column A translates to column B and vice versa.
    When the same word appears in several rows (or in both columns), the
    first row in source order wins. Unknown words come back unchanged.

    Usage:
        index = VocabularyIndex.from_sheet(lesson_path.with_suffix(".xlsx"))
        index.lookup("Дом.")  # -> "house"
    """

    def __init__(self, pairs: Iterable[VocabularyPair] = ()):
        self.pairs: List[VocabularyPair] = [p for p in pairs if not p.is_empty]
        self._map: Dict[str, str] = {}

        for pair in self.pairs:
            first = TextParser.normalize_cell(pair.first_column)
            second = TextParser.normalize_cell(pair.second_column)
            if first:
                self._map.setdefault(first, pair.second_column)
            if second:
                self._map.setdefault(second, pair.first_column)

    @classmethod
    def from_sheet(cls, sheet_path: Optional[Union[str, Path]],
                   sheet_name: str = Config.SHEET_NAME) -> "VocabularyIndex":
        """Build an index from a translation workbook (empty on failure)."""
        return cls(read_word_pairs(sheet_path, sheet_name))

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, word: str) -> bool:
        return TextParser.clean_word(word) in self._map

    def lookup(self, word: str) -> str:
        """
        Translate a tapped word.

        Args:
            word: Surface form as tapped (punctuation and case allowed)

        Returns:
            The opposite column's value, or ``word`` itself when unknown
        """
        return self._map.get(TextParser.clean_word(word), word)


def build_index(pairs: Iterable[VocabularyPair]):
    """Build a lookup function over ``pairs``."""
    return VocabularyIndex(pairs).lookup
