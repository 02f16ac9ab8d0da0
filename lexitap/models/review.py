"""Review record model."""

import math
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


def now_seconds() -> int:
    """Current unix time in whole seconds."""
    return int(time.time())


def _finite_int(value: Any, minimum: Optional[int] = None) -> Optional[int]:
    """Coerce a stored number, rejecting bools, NaN, infinities and values below minimum."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    number = int(value)
    if minimum is not None and number < minimum:
        return None
    return number


@dataclass(frozen=True)
class ReviewRecord:
    """
    Spaced-repetition state for one tapped word.

    Identity is ``cleaned_word``. Records are immutable values: scheduling
    produces a new record and the caller hands it back to the store.
    """

    raw_word: str
    cleaned_word: str
    translation: str
    correct_count: int = 0
    interval: int = 1
    next_review: int = 0

    # Persisted field names (shared with the mobile app's storage format)
    _FIELD_MAP = {
        "raw_word": "rawWord",
        "cleaned_word": "cleanedWord",
        "translation": "translation",
        "correct_count": "correctCount",
        "interval": "interval",
        "next_review": "nextReview",
    }

    @classmethod
    def new(cls, raw_word: str, cleaned_word: str, translation: str,
            now: Optional[int] = None) -> "ReviewRecord":
        """Create a never-reviewed record due immediately."""
        return cls(
            raw_word=raw_word,
            cleaned_word=cleaned_word.lower(),
            translation=translation,
            correct_count=0,
            interval=1,
            next_review=now_seconds() if now is None else now,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the persisted (camelCase) field names."""
        return {self._FIELD_MAP[k]: v for k, v in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any], now: Optional[int] = None) -> "ReviewRecord":
        """
        Schema-on-read deserialization.

        Missing, invalid or out-of-range fields fall back to ``correctCount=0``,
        ``interval=1`` and ``nextReview=now``.

        Args:
            data: Raw mapping as read from storage
            now: Clock value for a missing ``nextReview``

        Returns:
            A well-formed ReviewRecord
        """
        def text(key: str) -> str:
            value = data.get(key)
            return "" if value is None else str(value)

        correct = _finite_int(data.get("correctCount"), minimum=0)
        interval = _finite_int(data.get("interval"), minimum=1)
        next_review = _finite_int(data.get("nextReview"))

        return cls(
            raw_word=text("rawWord"),
            cleaned_word=text("cleanedWord").lower(),
            translation=text("translation"),
            correct_count=correct if correct is not None else 0,
            interval=interval if interval is not None else 1,
            next_review=next_review if next_review is not None else (
                now_seconds() if now is None else now
            ),
        )
