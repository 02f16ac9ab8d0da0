"""Review session - steps through the working set of due cards."""

from typing import List, Optional

from loguru import logger

from ..models import ReviewRecord, now_seconds
from .review_service import ReviewStore
from .scheduler import apply_outcome, is_graduated, select_all, select_due


class ReviewSession:
    """
    In-memory working set for one review screen.

    The due set is computed once per load from a single ``now`` snapshot;
    cards that become due mid-session are not inserted. A card reaching
    the graduation threshold leaves the working set immediately but stays
    in storage.
    """

    EMPTY_TITLE = "Repeat"
    EMPTY_MESSAGE = "No words to review at the moment"

    def __init__(self, store: ReviewStore):
        self.store = store
        self.cards: List[ReviewRecord] = []
        self.index: int = 0
        # Bumped whenever the visible card must be rebuilt (flip state reset)
        self.generation: int = 0

    def _start(self, cards: List[ReviewRecord]) -> None:
        self.cards = cards
        self.index = 0
        self.generation += 1

    async def load(self, now: Optional[int] = None) -> int:
        """Load the cards due at ``now``; returns how many."""
        now = now_seconds() if now is None else now
        records = await self.store.load_all_async(now)
        self._start(select_due(records, now))
        logger.info(f"Review session loaded {len(self.cards)} due of {len(records)} words")
        return len(self.cards)

    async def load_all(self) -> int:
        """Load every stored card regardless of schedule ("Repeat All")."""
        self._start(select_all(await self.store.load_all_async()))
        return len(self.cards)

    @property
    def total(self) -> int:
        return len(self.cards)

    @property
    def current(self) -> Optional[ReviewRecord]:
        if 0 <= self.index < len(self.cards):
            return self.cards[self.index]
        return None

    @property
    def finished(self) -> bool:
        return self.current is None

    @property
    def position(self) -> int:
        """1-based number of the visible card, capped at total."""
        return min(self.index + 1, self.total)

    @property
    def title(self) -> str:
        if not self.cards:
            return self.EMPTY_TITLE
        return f"{self.position} / {self.total}"

    def _advance(self) -> None:
        self.generation += 1
        if self.index < self.total - 1:
            self.index += 1
        else:
            self.index = self.total

    async def answer(self, remembered: bool, now: Optional[int] = None) -> Optional[ReviewRecord]:
        """
        Record the outcome for the current card and move on.

        Args:
            remembered: True for "Yes", False for "No"
            now: Clock in unix seconds

        Returns:
            The updated record, or None when there is no current card
        """
        card = self.current
        if card is None:
            return None

        updated = apply_outcome(card, remembered, now=now)
        await self.store.replace_async(updated)

        if remembered and is_graduated(updated):
            logger.info(f"Word '{updated.cleaned_word}' graduated after {updated.correct_count} reviews")
            self.cards = [c for c in self.cards if c.cleaned_word != card.cleaned_word]
            self.index = min(self.index, max(0, len(self.cards) - 1))
            self.generation += 1
        else:
            self.cards[self.index] = updated
            self._advance()
        return updated

    async def remember(self, now: Optional[int] = None) -> Optional[ReviewRecord]:
        return await self.answer(True, now=now)

    async def forget(self, now: Optional[int] = None) -> Optional[ReviewRecord]:
        return await self.answer(False, now=now)
