"""
Pytest Configuration and Fixtures.

Shared fixtures: a fixed clock, in-memory and on-disk review stores,
sample records and an isolated SettingsManager.
"""

from pathlib import Path

import pandas as pd
import pytest

from lexitap.config import SettingsManager
from lexitap.config.config_manager import ENV_PREFIX
from lexitap.models import ReviewRecord
from lexitap.services import JSONFileKeyValueStore, MemoryKeyValueStore, ReviewStore

NOW = 1_700_000_000
DAY = 86400


@pytest.fixture
def now() -> int:
    """Fixed clock value in unix seconds."""
    return NOW


@pytest.fixture
def memory_store() -> ReviewStore:
    return ReviewStore(MemoryKeyValueStore())


@pytest.fixture
def file_store(tmp_path: Path) -> ReviewStore:
    return ReviewStore(JSONFileKeyValueStore(tmp_path / "storage.json"))


@pytest.fixture
def fresh_record() -> ReviewRecord:
    """Never reviewed, due immediately."""
    return ReviewRecord.new("Дом.", "дом", "house", now=NOW)


@pytest.fixture
def sample_records():
    """A mix of due, scheduled and never-answered records."""
    return [
        ReviewRecord("дом", "дом", "house", correct_count=0, interval=1, next_review=NOW + 5 * DAY),
        ReviewRecord("Кот", "кот", "cat", correct_count=2, interval=4, next_review=NOW - 10),
        ReviewRecord("пёс", "пёс", "dog", correct_count=3, interval=8, next_review=NOW + DAY),
        ReviewRecord("мир", "мир", "world", correct_count=1, interval=2, next_review=NOW),
    ]


@pytest.fixture
def settings(tmp_path: Path, monkeypatch):
    """SettingsManager bound to a temporary file."""
    for key in SettingsManager.DEFAULTS:
        monkeypatch.delenv(ENV_PREFIX + key, raising=False)
    SettingsManager.reset_instance()
    manager = SettingsManager(str(tmp_path / "settings.json"))
    yield manager
    SettingsManager.reset_instance()


def write_sheet(path: Path, rows, sheet_name: str = "Words") -> Path:
    """Write a header-less translation workbook."""
    pd.DataFrame(rows).to_excel(path, sheet_name=sheet_name, header=False, index=False)
    return path


@pytest.fixture
def lesson_tree(tmp_path: Path) -> Path:
    """
    Small installed bundle:

        lessons/
          Russian/
            Basics/
              01 Greetings.md + 01 Greetings.xlsx
            02 Family.md
          __MACOSX/
          notes.md
    """
    root = tmp_path / "lessons"
    basics = root / "Russian" / "Basics"
    basics.mkdir(parents=True)
    (root / "__MACOSX").mkdir()
    (root / "notes.md").write_text("notes", encoding="utf-8")

    (basics / "01 Greetings.md").write_text(
        "# Привет\nДом. **стоит** тут\n| дом | *кот* |\n",
        encoding="utf-8",
    )
    write_sheet(basics / "01 Greetings.xlsx", [["дом", "house"], ["кот", "cat"], ["Привет", "Hello"]])
    (root / "Russian" / "02 Family.md").write_text("мама папа", encoding="utf-8")
    (basics / "._01 Greetings.md").write_text("junk", encoding="utf-8")
    return root


@pytest.fixture
def sheet_writer():
    return write_sheet
