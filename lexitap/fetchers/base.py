"""Base fetcher class."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union


class BaseFetcher(ABC):
    """
    Base class for anything that installs remote lesson content locally.

    Usable as an async context manager so network sessions are always closed.
    Subclasses implement fetch() and optionally override close().
    """

    @abstractmethod
    async def fetch(self, source: str, destination: Union[str, Path]) -> int:
        """
        Fetch a remote resource and install it at destination.

        Args:
            source: Source URL
            destination: Directory or file to install into

        Returns:
            Number of files written

        Raises:
            BundleError: If the resource could not be installed completely
        """
        pass

    async def close(self) -> None:
        """Close any open resources (sessions, connections, etc.)."""
        pass

    async def __aenter__(self) -> "BaseFetcher":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close sessions on exit."""
        await self.close()
