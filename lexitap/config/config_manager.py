"""User preferences persisted as JSON, overridable from the environment."""

import copy
import json
import os
from pathlib import Path
from threading import Lock
from typing import Any, Callable, Dict, Optional

from loguru import logger

from .settings import Config

ENV_PREFIX = "LEXITAP_"


def _to_float(raw: str) -> Optional[float]:
    try:
        return float(raw)
    except ValueError:
        return None


class SettingsManager:
    """
    Process-wide reader preferences.

    Precedence, lowest first: DEFAULTS, the settings file, then
    ``LEXITAP_<KEY>`` environment variables. Every ``set`` is written
    through to the file.

    Usage:
        settings = SettingsManager()
        settings.set("FONT_SCALE", 1.25)
        size = 16 * settings.font_scale
    """

    _instance: Optional["SettingsManager"] = None
    _instance_lock = Lock()

    FONT_SCALE_RANGE = (0.5, 3.0)

    DEFAULTS: Dict[str, Any] = {
        "FONT_SCALE": 1.0,
        "START_SUBFOLDER": Config.START_SUBFOLDER,
        "BUNDLE_URL": Config.BUNDLE_URL,
    }

    # Environment values arrive as text; keys missing here stay strings
    _ENV_PARSERS: Dict[str, Callable[[str], Any]] = {
        "FONT_SCALE": _to_float,
    }

    def __new__(cls, settings_file: Optional[str] = None) -> "SettingsManager":
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._ready = False
        return cls._instance

    def __init__(self, settings_file: Optional[str] = None) -> None:
        """
        Args:
            settings_file: JSON file to persist to (defaults to Config.SETTINGS_FILE).
                Ignored once the singleton exists.
        """
        if self._ready:
            return
        self.path = Path(settings_file or Config.SETTINGS_FILE)
        self._values: Dict[str, Any] = {}
        self._write_lock = Lock()
        self.reload()
        self._ready = True

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _read_file(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Settings file {self.path} unreadable, using defaults: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Settings file {self.path} is not a JSON object, using defaults")
            return {}
        return data

    def _env_overrides(self) -> Dict[str, Any]:
        overrides: Dict[str, Any] = {}
        for key in self.DEFAULTS:
            raw = os.environ.get(ENV_PREFIX + key)
            if raw is None:
                continue
            value = self._ENV_PARSERS.get(key, str)(raw)
            if value is None:
                logger.warning(f"Ignoring {ENV_PREFIX}{key}={raw!r}")
                continue
            overrides[key] = value
        return overrides

    def reload(self) -> None:
        """Rebuild values from defaults, the file and the environment."""
        values = copy.deepcopy(self.DEFAULTS)
        values.update(self._read_file())
        values.update(self._env_overrides())
        values["FONT_SCALE"] = self._clamp_font_scale(values.get("FONT_SCALE"))
        self._values = values

    def _clamp_font_scale(self, value: Any) -> float:
        low, high = self.FONT_SCALE_RANGE
        try:
            scale = float(value)
        except (TypeError, ValueError):
            return self.DEFAULTS["FONT_SCALE"]
        return min(max(scale, low), high)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def save(self) -> None:
        """Write current values to the settings file (failures are logged)."""
        payload = json.dumps(self._values, indent=2, ensure_ascii=False)
        with self._write_lock:
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                self.path.write_text(payload, encoding="utf-8")
            except OSError as e:
                logger.warning(f"Could not save settings to {self.path}: {e}")

    @property
    def font_scale(self) -> float:
        return self._values["FONT_SCALE"]

    def get(self, key: str, default: Any = None) -> Any:
        """Value for key; mutable values are returned as copies."""
        return copy.deepcopy(self._values.get(key, default))

    def set(self, key: str, value: Any, persist: bool = True) -> None:
        if key == "FONT_SCALE":
            value = self._clamp_font_scale(value)
        self._values[key] = value
        if persist:
            self.save()

    def get_all(self) -> Dict[str, Any]:
        return copy.deepcopy(self._values)

    def reset(self, key: Optional[str] = None) -> None:
        """Restore one key (or everything) to DEFAULTS and save."""
        if key is None:
            self._values = copy.deepcopy(self.DEFAULTS)
        elif key in self.DEFAULTS:
            self._values[key] = copy.deepcopy(self.DEFAULTS[key])
        self.save()

    @classmethod
    def reset_instance(cls) -> None:
        """Forget the singleton so the next call builds a fresh one (tests)."""
        with cls._instance_lock:
            cls._instance = None
