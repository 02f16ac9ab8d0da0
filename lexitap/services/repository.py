"""
Repository Pattern - key-value persistence backends.

The review store keeps its whole collection as one serialized value under a
single key. Backends only need get/set; switching between a JSON file and
SQLite does not change any business logic.
"""

import json
import os
import sqlite3
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from threading import Lock
from typing import Dict, Generator, Optional, Union

from loguru import logger

from ..config import Config


class StorageBackend(Enum):
    """Available storage backends."""
    JSON = "json"
    SQLITE = "sqlite"
    MEMORY = "memory"


class BaseKeyValueStore(ABC):
    """
    Abstract base class for key-value persistence.

    Implementations store text values under string keys.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the stored text, or None when the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store text under key, replacing any previous value."""
        pass


class MemoryKeyValueStore(BaseKeyValueStore):
    """Process-local store, used for tests and ephemeral sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JSONFileKeyValueStore(BaseKeyValueStore):
    """
    Single JSON object file holding every key.

    Writes go through a temp file and os.replace so a crash never leaves a
    truncated file behind.
    """

    def __init__(self, file_path: Optional[Union[str, Path]] = None):
        """
        Initialize JSON file store.

        Args:
            file_path: Path to the JSON file (defaults to <data dir>/storage.json)
        """
        self.file_path = Path(file_path or Path(Config.DATA_DIR) / "storage.json")
        self._lock = Lock()

    def _read(self) -> Dict[str, str]:
        if not self.file_path.exists():
            return {}
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Unreadable storage file {self.file_path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Storage file {self.file_path} does not hold an object")
            return {}
        return data

    def _write(self, data: Dict[str, str]) -> None:
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        temp_file = self.file_path.with_name(f"{self.file_path.name}.{uuid.uuid4().hex[:8]}.tmp")
        try:
            with open(temp_file, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(temp_file, self.file_path)
        finally:
            if temp_file.exists():
                temp_file.unlink()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            value = self._read().get(key)
        return None if value is None else str(value)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            self._write(data)


class SQLiteKeyValueStore(BaseKeyValueStore):
    """
    SQLite-based store.

    One table, ``kv(key TEXT PRIMARY KEY, value TEXT)``; each set is its own
    transaction.
    """

    SCHEMA_VERSION = 1

    def __init__(self, db_path: Optional[Union[str, Path]] = None):
        """
        Initialize SQLite store.

        Args:
            db_path: Path to SQLite database file
        """
        if db_path is None:
            db_path = Path(Config.DATA_DIR) / "lexitap.db"

        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get database connection with context manager."""
        conn = sqlite3.connect(str(self.db_path))
        try:
            yield conn
        finally:
            conn.close()

    def _init_schema(self) -> None:
        with self._get_connection() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)
            conn.execute(f"PRAGMA user_version = {self.SCHEMA_VERSION}")
            conn.commit()

    def get(self, key: str) -> Optional[str]:
        with self._get_connection() as conn:
            row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        with self._get_connection() as conn:
            conn.execute(
                "INSERT INTO kv (key, value) VALUES (?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )
            conn.commit()


def create_key_value_store(
    backend: Union[StorageBackend, str, None] = None,
    data_dir: Optional[Union[str, Path]] = None,
) -> BaseKeyValueStore:
    """
    Build the configured persistence backend.

    Args:
        backend: Backend (or its name); defaults to Config.STORAGE_BACKEND
        data_dir: Directory for file-based backends; defaults to Config.DATA_DIR

    Returns:
        A ready-to-use key-value store
    """
    backend = StorageBackend(backend or Config.STORAGE_BACKEND)
    data_dir = Path(data_dir or Config.DATA_DIR)

    if backend == StorageBackend.SQLITE:
        return SQLiteKeyValueStore(data_dir / "lexitap.db")
    if backend == StorageBackend.MEMORY:
        return MemoryKeyValueStore()
    return JSONFileKeyValueStore(data_dir / "storage.json")
