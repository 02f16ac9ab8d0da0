"""
Spaced-repetition scheduling.

Pure functions over immutable ReviewRecord values. Intervals double on every
remembered review (1, 2, 4, 8, ... days) and reset to one day on a miss.
There is deliberately no upper bound on the interval.
"""

from dataclasses import replace
from typing import Iterable, List, Optional

from ..config import Config
from ..models import ReviewRecord, now_seconds

GRADUATION_THRESHOLD = Config.GRADUATION_THRESHOLD
SECONDS_PER_DAY = Config.SECONDS_PER_DAY


def apply_outcome(record: ReviewRecord, remembered: bool,
                  now: Optional[int] = None) -> ReviewRecord:
    """
    Schedule the next review after one flip-card answer.

    Args:
        record: Current state (left untouched)
        remembered: True for "Yes", False for "No"
        now: Clock in unix seconds (defaults to the current time)

    Returns:
        A new record; the caller persists it
    """
    now = now_seconds() if now is None else now

    if remembered:
        correct_count = record.correct_count + 1
        interval = record.interval * 2 if record.interval >= 1 else 1
    else:
        correct_count = 0
        interval = 1

    return replace(
        record,
        correct_count=correct_count,
        interval=interval,
        next_review=now + interval * SECONDS_PER_DAY,
    )


def is_graduated(record: ReviewRecord) -> bool:
    """A record remembered enough times in a row is considered mastered."""
    return record.correct_count >= GRADUATION_THRESHOLD


def is_due(record: ReviewRecord, now: int) -> bool:
    """Due when its review time has come, or when it was never answered correctly."""
    return record.next_review <= now or record.correct_count == 0


def select_due(records: Iterable[ReviewRecord], now: Optional[int] = None) -> List[ReviewRecord]:
    """
    Records eligible for a review session at ``now``.

    ``now`` is a snapshot: callers take it once per session load.
    """
    now = now_seconds() if now is None else now
    return [r for r in records if is_due(r, now)]


def select_all(records: Iterable[ReviewRecord]) -> List[ReviewRecord]:
    """Every record, for a manual full-deck pass."""
    return list(records)
