"""Exception hierarchy for Lexitap."""

from typing import List, Tuple


class LexitapError(Exception):
    """Base class for all application errors."""


class BundleError(LexitapError):
    """Lesson bundle could not be acquired."""


class BundleDownloadError(BundleError):
    """Network or HTTP failure while downloading a bundle."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"download failed for {url}: {reason}")


class BundleArchiveError(BundleError):
    """Downloaded payload is not a readable zip archive."""


class BundleExtractionError(BundleError):
    """
    One or more archive entries could not be written.

    A partially installed bundle is never reported as success, so the
    aggregate counts travel with the exception.
    """

    def __init__(self, extracted: int, total: int, failures: List[Tuple[str, str]]):
        self.extracted = extracted
        self.total = total
        self.failures = list(failures)
        super().__init__(f"extracted {extracted}/{total}, failures={len(self.failures)}")
