"""Tests for lesson bundle download and extraction (no network)."""

import io
import zipfile

import aiohttp
import pytest

from lexitap.exceptions import BundleArchiveError, BundleDownloadError, BundleExtractionError
from lexitap.fetchers import BundleFetcher


def make_zip(entries) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, data in entries:
            archive.writestr(name, data)
    return buffer.getvalue()


BUNDLE = make_zip([
    ("Russian/", ""),
    ("Russian/Basics/", ""),
    ("Russian/Basics/01.md", "# Привет"),
    ("Russian/Basics/01.xlsx", b"PK-sheet"),
    ("Russian/.DS_Store", b"junk"),
    ("Russian/02.md", "дом"),
])


@pytest.mark.asyncio
class TestExtract:
    async def test_writes_files_and_reports_progress(self, tmp_path):
        progress = []
        count = await BundleFetcher().extract(BUNDLE, tmp_path, lambda d, t: progress.append((d, t)))

        assert count == 3
        assert progress == [(1, 3), (2, 3), (3, 3)]
        assert (tmp_path / "Russian" / "Basics" / "01.md").read_text(encoding="utf-8") == "# Привет"
        assert (tmp_path / "Russian" / "02.md").exists()
        assert not (tmp_path / "Russian" / ".DS_Store").exists()

    async def test_not_a_zip(self, tmp_path):
        with pytest.raises(BundleArchiveError):
            await BundleFetcher().extract(b"<html>oops</html>", tmp_path)

    async def test_unsafe_entry_fails_whole_bundle(self, tmp_path):
        payload = make_zip([("ok.md", "a"), ("../evil.md", "b")])
        with pytest.raises(BundleExtractionError) as info:
            await BundleFetcher().extract(payload, tmp_path / "root")

        err = info.value
        assert (err.extracted, err.total) == (1, 2)
        assert err.failures[0][0] == "../evil.md"
        assert str(err) == "extracted 1/2, failures=1"
        assert not (tmp_path / "evil.md").exists()

    async def test_empty_archive(self, tmp_path):
        assert await BundleFetcher().extract(make_zip([]), tmp_path) == 0


@pytest.mark.asyncio
class TestDownload:
    async def test_success(self, monkeypatch):
        fetcher = BundleFetcher()
        seen = []

        async def fake_get(url, stamp):
            seen.append(url)
            return b"payload"

        monkeypatch.setattr(fetcher, "_get_bytes", fake_get)
        assert await fetcher.download("https://example.com/languages.zip") == b"payload"
        assert seen == ["https://example.com/languages.zip"]

    async def test_https_falls_back_to_http(self, monkeypatch):
        fetcher = BundleFetcher()
        seen = []

        async def fake_get(url, stamp):
            seen.append(url)
            if url.startswith("https:"):
                raise aiohttp.ClientConnectionError("tls handshake failed")
            return b"payload"

        monkeypatch.setattr(fetcher, "_get_bytes", fake_get)
        assert await fetcher.download("https://example.com/languages.zip") == b"payload"
        assert seen == ["https://example.com/languages.zip", "http://example.com/languages.zip"]

    async def test_http_status_error_also_falls_back(self, monkeypatch):
        fetcher = BundleFetcher()
        seen = []

        async def fake_get(url, stamp):
            seen.append(url)
            raise BundleDownloadError(url, "status 503")

        monkeypatch.setattr(fetcher, "_get_bytes", fake_get)
        with pytest.raises(BundleDownloadError) as info:
            await fetcher.download("https://example.com/languages.zip")
        assert len(seen) == 2
        assert info.value.url == "http://example.com/languages.zip"

    async def test_both_attempts_fail(self, monkeypatch):
        fetcher = BundleFetcher()

        async def fake_get(url, stamp):
            raise aiohttp.ClientConnectionError("offline")

        monkeypatch.setattr(fetcher, "_get_bytes", fake_get)
        with pytest.raises(BundleDownloadError):
            await fetcher.download("https://example.com/languages.zip")

    async def test_plain_http_is_not_retried(self, monkeypatch):
        fetcher = BundleFetcher()
        calls = []

        async def fake_get(url, stamp):
            calls.append(url)
            raise aiohttp.ClientConnectionError("offline")

        monkeypatch.setattr(fetcher, "_get_bytes", fake_get)
        with pytest.raises(BundleDownloadError):
            await fetcher.download("http://example.com/languages.zip")
        assert calls == ["http://example.com/languages.zip"]


@pytest.mark.asyncio
class TestFetch:
    async def test_replaces_previous_install(self, tmp_path, monkeypatch):
        old = tmp_path / "Russian" / "old.md"
        old.parent.mkdir()
        old.write_text("stale", encoding="utf-8")
        (tmp_path / "languages.zip").write_bytes(b"old zip")
        (tmp_path / "keep.md").write_text("mine", encoding="utf-8")

        async with BundleFetcher() as fetcher:
            async def fake_download(url):
                return BUNDLE

            monkeypatch.setattr(fetcher, "download", fake_download)
            count = await fetcher.fetch("https://example.com/languages.zip", tmp_path)

        assert count == 3
        assert not old.exists()
        assert not (tmp_path / "languages.zip").exists()
        assert (tmp_path / "keep.md").exists()
        assert (tmp_path / "Russian" / "02.md").exists()
