"""Global settings and configuration."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

from dotenv import load_dotenv

# Load from project root
_env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(_env_path)


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ.get(name, default))
    except ValueError:
        return default


@dataclass
class Config:
    """Application-wide configuration."""

    # Cross-platform paths using pathlib
    # BASE_DIR is the project root (parent of lexitap/)
    BASE_DIR: Path = Path(__file__).parent.parent.parent.resolve()

    DATA_DIR: str = os.environ.get("LEXITAP_DATA_DIR", str(BASE_DIR / "data"))
    LESSONS_DIR: str = os.environ.get("LEXITAP_LESSONS_DIR", str(BASE_DIR / "data" / "lessons"))
    SETTINGS_FILE: str = str(Path(DATA_DIR) / "settings.json")
    LOG_FILE: str = str(Path(DATA_DIR) / "logs" / "lexitap.log")
    LOG_LEVEL: str = os.environ.get("LEXITAP_LOG_LEVEL", "INFO")

    # Persistence
    STORAGE_BACKEND: str = os.environ.get("LEXITAP_STORAGE_BACKEND", "json")
    REVIEW_KEY: str = "lexitap:wordsForReview"

    # Lesson content
    SHEET_NAME: str = "Words"
    START_SUBFOLDER: str = os.environ.get("LEXITAP_START_SUBFOLDER", "Russian")

    # Bundle acquisition
    BUNDLE_URL: str = os.environ.get("LEXITAP_BUNDLE_URL", "https://api.ciao.to/languages.zip")
    BUNDLE_CLEANUP: Tuple[str, ...] = ("Russian", "languages", "languages.zip")
    TIMEOUT: int = _env_int("LEXITAP_TIMEOUT", 120)
    PROGRESS_LOG_EVERY: int = 25

    # Scheduling
    GRADUATION_THRESHOLD: int = 7
    SECONDS_PER_DAY: int = 86400
