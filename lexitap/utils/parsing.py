"""Text parsing utilities for consistent word handling across the application."""

import re
import unicodedata
from typing import Any


class TextParser:
    """
    Centralized text normalization.

    Single source of truth for how a tapped surface form becomes the
    cleaned lookup/storage key.
    """

    # Exactly one trailing punctuation character is stripped
    TRAILING_PUNCTUATION_PATTERN = re.compile(r'[.,:;!?]$')

    # Archive/OS metadata that never counts as lesson content
    JUNK_PATH_PATTERN = re.compile(r'(^|[\\/])(__MACOSX([\\/]|$)|\._)')

    @classmethod
    def normalize_unicode(cls, text: Any) -> str:
        """
        Normalize text to NFC form.

        Sheets exported on different platforms may store ``й`` either as one
        codepoint or as ``и`` plus a combining breve; lookups must not care.

        Args:
            text: Input value (``None`` becomes ``""``)

        Returns:
            NFC-normalized text
        """
        if text is None:
            return ""
        return unicodedata.normalize('NFC', str(text))

    @classmethod
    def clean_word(cls, word: str) -> str:
        """
        Produce the cleaned form of a tapped word.

        Strips one trailing character from ``. , : ; ! ?`` and lowercases.
        ``"дом.."`` becomes ``"дом."``.
        """
        text = cls.normalize_unicode(word)
        return cls.TRAILING_PUNCTUATION_PATTERN.sub('', text).lower()

    @classmethod
    def normalize_cell(cls, value: Any) -> str:
        """Trim and lowercase a sheet cell for case-insensitive matching."""
        return cls.normalize_unicode(value).strip().lower()

    @classmethod
    def is_junk_path(cls, path: Any) -> bool:
        """True for macOS archive residue (``__MACOSX`` folders, ``._`` forks)."""
        if not path:
            return False
        return bool(cls.JUNK_PATH_PATTERN.search(str(path)))
