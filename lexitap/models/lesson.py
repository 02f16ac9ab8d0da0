"""Lesson content models."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class VocabularyPair:
    """One row of a lesson's "Words" sheet: a bidirectional translation."""

    first_column: str
    second_column: str

    @property
    def is_empty(self) -> bool:
        return not (self.first_column or self.second_column)


@dataclass(frozen=True)
class FileItem:
    """A browsable entry in the lesson tree."""

    name: str
    path: Path
    is_directory: bool
