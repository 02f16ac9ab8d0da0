"""Configuration module for Lexitap."""

from .settings import Config
from .config_manager import SettingsManager

__all__ = [
    'Config',
    'SettingsManager',
]
