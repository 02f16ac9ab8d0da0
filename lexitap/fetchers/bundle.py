"""Bundle fetcher - download and install the zipped lesson tree."""

import asyncio
import io
import shutil
import time
import zipfile
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

import aiofiles
import aiohttp
from loguru import logger

from ..config import Config
from ..exceptions import BundleArchiveError, BundleDownloadError, BundleExtractionError
from ..utils.paths import LessonPaths
from .base import BaseFetcher

ProgressCallback = Callable[[int, int], None]


class BundleFetcher(BaseFetcher):
    """
    Acquire a lesson bundle: download a zip and extract it onto disk.

    A bundle with any failed entry is reported as a failure with aggregate
    counts; there are no retries beyond the one plain-http fallback.

    Usage:
        async with BundleFetcher() as fetcher:
            count = await fetcher.fetch(Config.BUNDLE_URL, Config.LESSONS_DIR)
    """

    def __init__(
        self,
        timeout: int = Config.TIMEOUT,
        cleanup: Sequence[str] = Config.BUNDLE_CLEANUP,
        progress_log_every: int = Config.PROGRESS_LOG_EVERY,
    ):
        """
        Initialize bundle fetcher.

        Args:
            timeout: Total download timeout in seconds
            cleanup: Names removed from the destination before installing
            progress_log_every: Log extraction progress every N entries
        """
        self.timeout = timeout
        self.cleanup = tuple(cleanup)
        self.progress_log_every = max(1, progress_log_every)
        self._session: Optional[aiohttp.ClientSession] = None
        self._session_lock = asyncio.Lock()

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create a shared aiohttp session."""
        async with self._session_lock:
            if self._session is None or self._session.closed:
                self._session = aiohttp.ClientSession(
                    timeout=aiohttp.ClientTimeout(total=self.timeout),
                )
            return self._session

    async def close(self) -> None:
        """Close the aiohttp session."""
        async with self._session_lock:
            if self._session and not self._session.closed:
                await self._session.close()
            self._session = None

    # ------------------------------------------------------------------
    # Download
    # ------------------------------------------------------------------

    async def _get_bytes(self, url: str, stamp: int) -> bytes:
        session = await self._get_session()
        async with session.get(url, params={"t": str(stamp)}) as response:
            logger.info(
                f"zip:fetch {url} status={response.status} "
                f"type={response.headers.get('content-type')} "
                f"length={response.headers.get('content-length')}"
            )
            if response.status < 200 or response.status >= 300:
                raise BundleDownloadError(url, f"status {response.status}")
            return await response.read()

    async def download(self, url: str) -> bytes:
        """
        Download the archive, bypassing caches with a timestamp query.

        An https failure is retried once over plain http.

        Raises:
            BundleDownloadError: If every attempt failed
        """
        stamp = int(time.time() * 1000)
        try:
            payload = await self._get_bytes(url, stamp)
        except (aiohttp.ClientError, asyncio.TimeoutError, BundleDownloadError) as e:
            if not url.startswith("https:"):
                if isinstance(e, BundleDownloadError):
                    raise
                raise BundleDownloadError(url, str(e) or type(e).__name__) from e
            fallback = "http:" + url[len("https:"):]
            logger.warning(f"zip:fetch https failed ({e}); falling back to {fallback}")
            try:
                payload = await self._get_bytes(fallback, stamp)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e2:
                raise BundleDownloadError(fallback, str(e2) or type(e2).__name__) from e2

        logger.info(f"zip:fetch received {len(payload)} bytes")
        return payload

    # ------------------------------------------------------------------
    # Extraction
    # ------------------------------------------------------------------

    @staticmethod
    def _entries(archive: zipfile.ZipFile) -> List[zipfile.ZipInfo]:
        return [
            info for info in archive.infolist()
            if not info.is_dir() and ".DS_Store" not in info.filename
        ]

    async def extract(
        self,
        payload: bytes,
        destination: Union[str, Path],
        on_progress: Optional[ProgressCallback] = None,
    ) -> int:
        """
        Write every archive file under destination.

        Args:
            payload: Zip archive bytes
            destination: Root directory for the lesson tree
            on_progress: Called with (done, total) after each written file

        Returns:
            Number of files written

        Raises:
            BundleArchiveError: If payload is not a zip archive
            BundleExtractionError: If any entry failed to write
        """
        try:
            archive = zipfile.ZipFile(io.BytesIO(payload))
        except zipfile.BadZipFile as e:
            logger.error(f"zip:parse failed: {e}")
            raise BundleArchiveError(str(e)) from e

        root = Path(destination)
        root.mkdir(parents=True, exist_ok=True)
        done = 0
        failures: List[Tuple[str, str]] = []

        with archive:
            entries = self._entries(archive)
            total = len(entries)
            logger.info(f"zip:entries total={len(archive.infolist())} files={total}")

            for info in entries:
                name = info.filename
                if done % self.progress_log_every == 0:
                    logger.info(f"zip:progress {done}/{total} current={name}")

                target = LessonPaths.archive_member_target(root, name)
                if target is None:
                    logger.error(f"zip:file rejected unsafe path {name}")
                    failures.append((name, "unsafe path"))
                    continue

                try:
                    target.parent.mkdir(parents=True, exist_ok=True)
                    data = archive.read(info)
                    async with aiofiles.open(target, "wb") as f:
                        await f.write(data)
                except (OSError, zipfile.BadZipFile, RuntimeError) as e:
                    logger.error(f"zip:file {name} -> {target} failed: {e}")
                    failures.append((name, f"{type(e).__name__}: {e}"))
                    continue

                done += 1
                if on_progress:
                    on_progress(done, total)

        logger.info(f"zip:extract done={done} total={total} failures={len(failures)}")
        if failures:
            raise BundleExtractionError(done, total, failures)
        return done

    # ------------------------------------------------------------------
    # Install
    # ------------------------------------------------------------------

    def remove_previous(self, destination: Union[str, Path]) -> None:
        """Delete the previously installed bundle names from destination."""
        root = Path(destination)
        for name in self.cleanup:
            path = root / name
            if path.is_dir():
                shutil.rmtree(path)
            elif path.exists():
                path.unlink()

    async def fetch(
        self,
        source: str,
        destination: Union[str, Path],
        on_progress: Optional[ProgressCallback] = None,
    ) -> int:
        """
        Replace the installed bundle with a fresh download.

        Args:
            source: Zip archive URL
            destination: Lesson tree root
            on_progress: Extraction progress callback

        Returns:
            Number of files installed
        """
        logger.info(f"zip:install {source} -> {destination}")
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self.remove_previous, destination)
        payload = await self.download(source)
        return await self.extract(payload, destination, on_progress)
