"""
Review Service - persistence of per-word review records.

The whole collection lives as one JSON array under a single namespaced key.
Every mutation is read-all / modify / write-all, so mutations are serialized:
a threading lock guards the synchronous API and an asyncio lock (FIFO)
queues async callers, which run the blocking work in a thread pool.
"""

import asyncio
import json
from concurrent.futures import ThreadPoolExecutor
from threading import Lock
from typing import Any, Callable, List, Optional

from loguru import logger

from ..config import Config
from ..models import ReviewRecord, now_seconds
from .repository import BaseKeyValueStore, create_key_value_store


class ReviewStore:
    """
    CRUD over ReviewRecord keyed by ``cleaned_word``.

    Callers always receive copies (records are immutable values) and must
    resubmit a full record to change it.

    Usage:
        store = ReviewStore()
        await store.upsert_async("Дом.", "дом", "house")
        due = select_due(await store.load_all_async())
    """

    # Single worker: one in-flight write at a time
    _executor = ThreadPoolExecutor(max_workers=1)

    def __init__(self, backend: Optional[BaseKeyValueStore] = None, key: str = Config.REVIEW_KEY):
        """
        Initialize review store.

        Args:
            backend: Key-value persistence (defaults to the configured backend)
            key: Storage key holding the serialized collection
        """
        self.backend = backend or create_key_value_store()
        self.key = key
        self._lock = Lock()
        self._async_lock: Optional[asyncio.Lock] = None

    def _get_async_lock(self) -> asyncio.Lock:
        """Get or create async lock (lazy initialization)."""
        if self._async_lock is None:
            self._async_lock = asyncio.Lock()
        return self._async_lock

    # ------------------------------------------------------------------
    # Raw collection access
    # ------------------------------------------------------------------

    def _read(self, now: Optional[int] = None) -> List[ReviewRecord]:
        try:
            raw = self.backend.get(self.key)
            if not raw:
                return []
            items = json.loads(raw)
        except Exception as e:
            logger.warning(f"Could not load review records from '{self.key}': {e}")
            return []

        if not isinstance(items, list):
            logger.warning(f"Review records under '{self.key}' are not a list")
            return []

        now = now_seconds() if now is None else now
        return [ReviewRecord.from_dict(item, now=now) for item in items if isinstance(item, dict)]

    def _write(self, records: List[ReviewRecord]) -> None:
        payload = json.dumps([r.to_dict() for r in records], ensure_ascii=False)
        self.backend.set(self.key, payload)

    # ------------------------------------------------------------------
    # Synchronous API
    # ------------------------------------------------------------------

    def load_all(self, now: Optional[int] = None) -> List[ReviewRecord]:
        """
        Load every record.

        Storage or parse errors yield an empty list; they are logged, never
        raised.
        """
        with self._lock:
            return self._read(now)

    def upsert(self, raw_word: str, cleaned_word: str, translation: str,
               now: Optional[int] = None) -> ReviewRecord:
        """
        Add a tapped word, or refresh an existing one.

        An existing record keeps its scheduling fields; only ``raw_word`` and
        ``translation`` change. A new record is due immediately.

        Returns:
            The stored record
        """
        clean = cleaned_word.lower()
        with self._lock:
            current = self._read(now)
            existing = next((r for r in current if r.cleaned_word == clean), None)
            if existing is not None:
                record = ReviewRecord(
                    raw_word=raw_word,
                    cleaned_word=clean,
                    translation=translation,
                    correct_count=existing.correct_count,
                    interval=existing.interval,
                    next_review=existing.next_review,
                )
            else:
                record = ReviewRecord.new(raw_word, clean, translation, now=now)
            self._write([r for r in current if r.cleaned_word != clean] + [record])

        logger.debug(f"Upserted review word '{clean}'")
        return record

    def remove(self, cleaned_word: str) -> bool:
        """
        Delete a record.

        Returns:
            True if a record was removed, False if none matched
        """
        clean = cleaned_word.lower()
        with self._lock:
            current = self._read()
            remaining = [r for r in current if r.cleaned_word != clean]
            if len(remaining) == len(current):
                return False
            self._write(remaining)

        logger.debug(f"Removed review word '{clean}'")
        return True

    def replace(self, record: ReviewRecord) -> ReviewRecord:
        """Overwrite the record with the same cleaned word (inserting if absent)."""
        with self._lock:
            current = self._read()
            self._write([r for r in current if r.cleaned_word != record.cleaned_word] + [record])

        return record

    # ------------------------------------------------------------------
    # Async API (serialized, blocking I/O off the event loop)
    # ------------------------------------------------------------------

    async def _run(self, func: Callable[..., Any], *args: Any) -> Any:
        async with self._get_async_lock():
            loop = asyncio.get_running_loop()
            return await loop.run_in_executor(self._executor, func, *args)

    async def load_all_async(self, now: Optional[int] = None) -> List[ReviewRecord]:
        return await self._run(self.load_all, now)

    async def upsert_async(self, raw_word: str, cleaned_word: str, translation: str,
                           now: Optional[int] = None) -> ReviewRecord:
        return await self._run(self.upsert, raw_word, cleaned_word, translation, now)

    async def remove_async(self, cleaned_word: str) -> bool:
        return await self._run(self.remove, cleaned_word)

    async def replace_async(self, record: ReviewRecord) -> ReviewRecord:
        return await self._run(self.replace, record)
