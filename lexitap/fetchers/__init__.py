"""Fetchers for remote lesson content."""

from .base import BaseFetcher
from .bundle import BundleFetcher

__all__ = [
    'BaseFetcher',
    'BundleFetcher',
]
